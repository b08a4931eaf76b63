"""Configuration package for the vocabulary parser."""

from .parser_config import ConfigurationError, ParserConfig, get_parser_config, reload_config

__all__ = ["ConfigurationError", "ParserConfig", "get_parser_config", "reload_config"]
