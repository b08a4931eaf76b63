"""Vocabulary Parsing Service.

Parses an ActivityStreams-style vocabulary definition (Core, Extended or an
Extension) into a ParsedVocabulary:

1. The ``@context`` is resolved into ontology handlers
2. Built-in JSON-LD handlers are placed ahead of them
3. The document is traversed, handlers populating the result as they go

Any failure aborts the parse; there is no partial result.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict

from application.services.context_resolver import ContextResolver, describe_context
from application.services.vocabulary_traversal import TraversalEngine
from domain.ontologies.json_ld import JSON_LD_CONTEXT, jsonld_nodes
from domain.ontologies.registry import RDFRegistry
from domain.parsing_context import ParsingContext
from domain.parsing_errors import MissingContextError
from domain.vocabulary_models import ParsedVocabulary

logger = logging.getLogger(__name__)

JSONLD = Dict[str, Any]


class VocabularyParser:
    """
    Parses vocabulary documents against an ontology registry.

    A parser holds no per-document state and can be reused; every call to
    ``parse`` gets its own ParsingContext.
    """

    def __init__(self, registry: RDFRegistry):
        self.registry = registry
        self.context_resolver = ContextResolver(registry)

    def parse(self, document: JSONLD) -> ParsedVocabulary:
        """
        Parse a decoded vocabulary document.

        Args:
            document: Decoded JSON object containing a ``@context``

        Returns:
            The populated ParsedVocabulary

        Raises:
            VocabularyParseError: On any resolution, dispatch or handler failure
        """
        if not isinstance(document, Mapping):
            raise MissingContextError("input is not a JSON object")
        logger.info(f"Parsing vocabulary with context {describe_context(document.get(JSON_LD_CONTEXT))}")

        ctx = ParsingContext()
        ontology_nodes = self.context_resolver.resolve(document, ctx)
        # Structural nodes first.
        nodes = jsonld_nodes(self.registry) + ontology_nodes

        TraversalEngine(nodes).run(document, ctx)

        logger.info(f"Parsed vocabulary: {ctx.result.summary()}")
        return ctx.result


def parse_vocabulary(registry: RDFRegistry, document: JSONLD) -> ParsedVocabulary:
    """Parse ``document`` as a Core, Extended or Extension vocabulary."""
    return VocabularyParser(registry).parse(document)
