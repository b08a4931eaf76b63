"""
Vocabulary Parser Configuration

Loads configuration from config/vocab_parser.yaml, with environment variable
overrides. The configuration names the ontologies registered before any
document is parsed and the log level of the command-line tools.

Example YAML:

    log_level: INFO
    ontologies:
      - my_vocab.ontologies:ActivityStreamsOntology
      - my_vocab.ontologies:owl_ontology
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/vocab_parser.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(Exception):
    """Raised when configuration cannot be loaded or is invalid."""
    pass


@dataclass
class ParserConfig:
    """Complete vocabulary parser configuration."""
    # "module:attribute" import paths of Ontology instances, classes or factories
    ontologies: List[str] = field(default_factory=list)
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create config from dictionary (parsed YAML)."""
        if not isinstance(data, dict):
            raise ConfigurationError("configuration root must be a mapping")

        ontologies = data.get("ontologies", [])
        if not isinstance(ontologies, list) or not all(isinstance(o, str) for o in ontologies):
            raise ConfigurationError("'ontologies' must be a list of 'module:attribute' strings")

        return cls(
            ontologies=list(ontologies),
            log_level=_validate_log_level(data.get("log_level", "INFO")),
        )

    @classmethod
    def from_yaml(cls, path: Optional[str] = None) -> "ParserConfig":
        """Load config from YAML file."""
        if path is None:
            path = os.getenv("VOCAB_PARSER_CONFIG_PATH", DEFAULT_CONFIG_PATH)

        config_path = Path(path)
        if not config_path.is_absolute():
            config_path = Path.cwd() / path

        if not config_path.exists():
            # Return default config if file doesn't exist
            logger.debug(f"No configuration at {config_path}, using defaults")
            return cls()

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration: {e}") from e

        logger.info(f"Loaded configuration from: {config_path}")
        return cls.from_dict(data)

    @classmethod
    def from_env(cls, path: Optional[str] = None) -> "ParserConfig":
        """
        Create config from YAML, then apply environment overrides.

        VOCAB_PARSER_ONTOLOGIES is a comma-separated list replacing the
        configured ontologies; VOCAB_PARSER_LOG_LEVEL replaces the log level.
        """
        config = cls.from_yaml(path)

        if os.getenv("VOCAB_PARSER_ONTOLOGIES"):
            config.ontologies = [
                o.strip() for o in os.getenv("VOCAB_PARSER_ONTOLOGIES").split(",") if o.strip()
            ]

        if os.getenv("VOCAB_PARSER_LOG_LEVEL"):
            config.log_level = _validate_log_level(os.getenv("VOCAB_PARSER_LOG_LEVEL"))

        return config


def _validate_log_level(level: Any) -> str:
    if not isinstance(level, str) or level.upper() not in LOG_LEVELS:
        raise ConfigurationError(f"invalid log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level.upper()


# Global config instance (lazy loaded)
_config: Optional[ParserConfig] = None


def get_parser_config() -> ParserConfig:
    """Get the global parser configuration (lazy loaded)."""
    global _config
    if _config is None:
        _config = ParserConfig.from_env()
    return _config


def reload_config(path: Optional[str] = None) -> ParserConfig:
    """Reload configuration from file."""
    global _config
    _config = ParserConfig.from_env(path)
    return _config
