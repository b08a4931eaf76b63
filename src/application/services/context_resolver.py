"""@context Resolution Service.

Implements the small subset of JSON-LD ``@context`` processing needed to
decide which ontology handlers interpret the rest of a vocabulary document.
It handles:
- A single ontology name
- An ordered array of names and/or alias objects
- Alias objects mapping an alias to an ontology name or to an expanded
  term definition (an object with ``@id``)

Handler order follows declaration order; earlier handlers win when two
ontologies recognize the same key.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, List

from domain.ontologies.json_ld import JSON_LD_CONTEXT
from domain.ontologies.registry import JSON_LD_ID, RDFRegistry
from domain.parsing_context import ParsingContext
from domain.parsing_errors import MalformedContextError, MissingContextError
from domain.rdf_node import RDFNode

logger = logging.getLogger(__name__)


class ContextResolver:
    """
    Builds the ordered handler list for a document from its ``@context``.

    Alias bindings and unaliased ontology names are recorded on the
    ParsingContext so built-in handlers can resolve ``@type`` terms later.
    """

    def __init__(self, registry: RDFRegistry):
        """
        Initialize the ContextResolver.

        Args:
            registry: Ontology registry queried for handlers
        """
        self.registry = registry

    def resolve(self, document: Mapping, ctx: ParsingContext) -> List[RDFNode]:
        """
        Resolve the document's ``@context`` into handlers.

        Args:
            document: Decoded JSON vocabulary document
            ctx: Parsing state receiving the alias bindings

        Returns:
            Ontology handlers in dispatch-priority order

        Raises:
            MissingContextError: If the document has no ``@context``
            MalformedContextError: If ``@context`` has an unusable shape
            UnresolvableReferenceError: If the registry cannot resolve a name
        """
        if not isinstance(document, Mapping) or JSON_LD_CONTEXT not in document:
            raise MissingContextError()
        context = document[JSON_LD_CONTEXT]

        if isinstance(context, str):
            nodes = self._resolve_name(context, ctx)
        elif isinstance(context, list):
            nodes = []
            for element in context:
                if isinstance(element, Mapping):
                    nodes.extend(self._resolve_aliases(element, ctx))
                elif isinstance(element, str):
                    nodes.extend(self._resolve_name(element, ctx))
                else:
                    raise MalformedContextError(
                        "@context value in array is neither a dict nor a string", element
                    )
        elif isinstance(context, Mapping):
            nodes = self._resolve_aliases(context, ctx)
        else:
            raise MalformedContextError("single @context value is not a string", context)

        logger.debug(f"Resolved @context into {len(nodes)} handlers")
        return nodes

    def _resolve_name(self, name: str, ctx: ParsingContext) -> List[RDFNode]:
        nodes = self.registry.for_name(name)
        ctx.context_names.append(name)
        logger.debug(f"@context ontology {name} -> {len(nodes)} handlers")
        return nodes

    def _resolve_aliases(self, aliases: Mapping, ctx: ParsingContext) -> List[RDFNode]:
        nodes: List[RDFNode] = []
        for alias, value in aliases.items():
            if isinstance(value, str):
                nodes.extend(self.registry.for_alias(alias, value))
                ctx.aliases[alias] = value
            elif isinstance(value, Mapping):
                nodes.extend(self.registry.for_aliased_object(alias, value))
                # An alias for a single member is a key, not a namespace prefix.
                if self.registry.has_ontology(value[JSON_LD_ID]):
                    ctx.aliases[alias] = value[JSON_LD_ID]
            else:
                raise MalformedContextError(
                    f"@context value for {alias!r} is neither a dict nor a string", value
                )
            logger.debug(f"@context alias {alias} bound")
        return nodes


def describe_context(context: Any) -> Dict[str, Any]:
    """Summarize a raw ``@context`` value for logging."""
    if isinstance(context, str):
        return {"names": [context], "aliases": []}
    if isinstance(context, Mapping):
        return {"names": [], "aliases": list(context.keys())}
    if isinstance(context, list):
        names = [c for c in context if isinstance(c, str)]
        aliases = [k for c in context if isinstance(c, Mapping) for k in c.keys()]
        return {"names": names, "aliases": aliases}
    return {"names": [], "aliases": []}
