"""Vocabulary Traversal Engine.

Walks a decoded vocabulary document depth first and offers every key to the
active handlers. Structural rules:

1. A whole-document override receives the rest of the object, once, with an
   empty key; nothing beneath it is traversed.
2. ``@type`` (or else ``type``) is dispatched before any sibling key so
   handlers for the other keys already know the entity's type.
3. Every other key except ``@context``, ``@type`` and ``type`` is then
   dispatched in document order.
4. An armed next-level override is the only handler for every key of the
   object level that consumes it; levels nested beneath those keys go back
   to the full handler list.

Dispatching brackets nested objects with enter/exit, brackets every array
element individually, and applies scalars directly. The first handler that
claims a key wins; an unclaimed key fails the parse.
"""

import logging
from collections.abc import Mapping
from typing import Any, List

from domain.ontologies.json_ld import JSON_LD_CONTEXT, JSON_LD_TYPE, JSON_LD_TYPE_AS
from domain.parsing_context import ParsingContext
from domain.parsing_errors import UnrecognizedKeyError
from domain.rdf_node import RDFNode

logger = logging.getLogger(__name__)

_SKIPPED_KEYS = (JSON_LD_CONTEXT, JSON_LD_TYPE, JSON_LD_TYPE_AS)


class TraversalEngine:
    """Recursive descent over a document using a priority-ordered handler list."""

    def __init__(self, nodes: List[RDFNode]):
        self.nodes = list(nodes)

    def run(self, document: Mapping, ctx: ParsingContext) -> None:
        self._apply(document, ctx)

    def _apply(self, obj: Mapping, ctx: ParsingContext) -> None:
        """Process one object level."""
        override = ctx.only_apply_this_node
        if override is not None:
            if not override.apply("", obj, ctx):
                raise UnrecognizedKeyError("", "apply", obj)
            return

        with ctx.next_level_nodes(self.nodes) as nodes:
            if JSON_LD_TYPE in obj:
                self._dispatch(nodes, JSON_LD_TYPE, obj[JSON_LD_TYPE], ctx)
            elif JSON_LD_TYPE_AS in obj:
                self._dispatch(nodes, JSON_LD_TYPE_AS, obj[JSON_LD_TYPE_AS], ctx)

            for key, value in obj.items():
                if key in _SKIPPED_KEYS:
                    continue
                self._dispatch(nodes, key, value, ctx)

    def _dispatch(self, nodes: List[RDFNode], key: str, value: Any, ctx: ParsingContext) -> None:
        """Route one key/value pair according to the shape of the value."""
        if isinstance(value, Mapping):
            logger.debug(f"Entering object under {key!r}")
            self._enter_first_node(nodes, key, ctx)
            self._apply(value, ctx)
            self._exit_first_node(nodes, key, ctx)
        elif isinstance(value, (list, tuple)):
            for element in value:
                self._enter_first_node(nodes, key, ctx)
                if isinstance(element, Mapping):
                    self._apply(element, ctx)
                else:
                    self._apply_first_node(nodes, key, element, ctx)
                self._exit_first_node(nodes, key, ctx)
        else:
            self._apply_first_node(nodes, key, value, ctx)

    @staticmethod
    def _enter_first_node(nodes: List[RDFNode], key: str, ctx: ParsingContext) -> None:
        for node in nodes:
            if node.enter(key, ctx):
                return
        raise UnrecognizedKeyError(key, "enter")

    @staticmethod
    def _exit_first_node(nodes: List[RDFNode], key: str, ctx: ParsingContext) -> None:
        for node in nodes:
            if node.exit(key, ctx):
                return
        raise UnrecognizedKeyError(key, "exit")

    @staticmethod
    def _apply_first_node(nodes: List[RDFNode], key: str, value: Any, ctx: ParsingContext) -> None:
        for node in nodes:
            if node.apply(key, value, ctx):
                logger.debug(f"Applied {key!r} with {type(node).__name__}")
                return
        raise UnrecognizedKeyError(key, "apply", value)
