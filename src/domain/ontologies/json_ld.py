"""Built-in JSON-LD structural handlers.

These nodes are always placed ahead of the ontology handlers resolved from
``@context`` so an ontology can never hijack structural keys.
"""

from typing import Any, List, TYPE_CHECKING

from domain.parsing_errors import UnrecognizedKeyError
from domain.rdf_node import RDFNode

if TYPE_CHECKING:
    from domain.ontologies.registry import RDFRegistry
    from domain.parsing_context import ParsingContext

JSON_LD_CONTEXT = "@context"
JSON_LD_TYPE = "@type"
JSON_LD_TYPE_AS = "type"

TYPE_KEYS = (JSON_LD_TYPE, JSON_LD_TYPE_AS)


class TypeNode(RDFNode):
    """
    Handles ``@type`` (and its ActivityStreams alias ``type``).

    The type term is resolved through the registry and the member it names
    is applied with the term as key, letting that member start the entity
    the surrounding object describes.
    """

    def __init__(self, registry: "RDFRegistry"):
        self.registry = registry

    def enter(self, key: str, ctx: "ParsingContext") -> bool:
        return key in TYPE_KEYS

    def exit(self, key: str, ctx: "ParsingContext") -> bool:
        return key in TYPE_KEYS

    def apply(self, key: str, value: Any, ctx: "ParsingContext") -> bool:
        if key not in TYPE_KEYS:
            return False
        if not isinstance(value, str):
            raise UnrecognizedKeyError(key, "apply", value)
        node = self.registry.get_node(value, ctx.aliases, ctx.context_names)
        if not node.apply(value, None, ctx):
            raise UnrecognizedKeyError(value, "apply")
        return True


def jsonld_nodes(registry: "RDFRegistry") -> List[RDFNode]:
    """Structural handlers prepended to every parse."""
    return [TypeNode(registry)]
