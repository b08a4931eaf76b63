# src/composition_root.py

import importlib
import logging
from typing import Optional

from application.services.vocabulary_parser import VocabularyParser
from config.parser_config import ConfigurationError, ParserConfig, get_parser_config
from domain.ontologies.ontology import Ontology
from domain.ontologies.registry import RDFRegistry

logger = logging.getLogger(__name__)


# --- Ontology Loading ---

def load_ontology(import_path: str) -> Ontology:
    """
    Import an ontology from a ``module:attribute`` path.

    The attribute may be an Ontology instance, an Ontology subclass or a
    zero-argument factory returning one.
    """
    module_name, _, attribute = import_path.partition(":")
    if not module_name or not attribute:
        raise ConfigurationError(f"ontology path {import_path!r} is not of the form 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigurationError(f"cannot import ontology module {module_name!r}: {e}") from e

    target = getattr(module, attribute, None)
    if target is None:
        raise ConfigurationError(f"module {module_name!r} has no attribute {attribute!r}")

    ontology = target if isinstance(target, Ontology) else target() if callable(target) else None
    if not isinstance(ontology, Ontology):
        raise ConfigurationError(f"{import_path!r} does not provide an Ontology")
    return ontology


# --- Bootstrap ---

def bootstrap_registry(config: Optional[ParserConfig] = None) -> RDFRegistry:
    """Creates the ontology registry with every configured ontology."""
    config = config or get_parser_config()
    registry = RDFRegistry()
    for import_path in config.ontologies:
        ontology = load_ontology(import_path)
        registry.add_ontology(ontology)
        logger.info(f"Loaded ontology {ontology.spec_uri()} from {import_path}")
    return registry


def bootstrap_parser(config: Optional[ParserConfig] = None) -> VocabularyParser:
    """Creates a VocabularyParser over the configured registry."""
    return VocabularyParser(bootstrap_registry(config))
