"""Parsing state threaded through vocabulary traversal.

One ParsingContext belongs to exactly one parse. Handlers mutate it to build
up the ParsedVocabulary: ``current`` is the entity being populated, ``stack``
remembers enclosing entities while a nested scope builds a new one.

Dispatch runs in one of three modes:

- NORMAL: every key is offered to the full handler list
- WHOLE_DOCUMENT: a single node receives the rest of the document, once,
  with an empty key; no structural traversal happens beneath it
- NEXT_LEVEL: the next object level traversed uses only the override node
  for the enter/apply/exit of each of its keys; the mode reverts to NORMAL
  once that level is done
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional

from domain.parsing_errors import EmptyScopeStackError
from domain.rdf_node import RDFNode
from domain.vocabulary_capabilities import NameGetter
from domain.vocabulary_models import ParsedVocabulary


class DispatchMode(str, Enum):
    """How the traversal engine picks handlers for the next dispatch."""
    NORMAL = "normal"
    WHOLE_DOCUMENT = "whole_document"
    NEXT_LEVEL = "next_level"


@dataclass
class ParsingContext:
    """Results of the parse plus scratch space for stateful handlers."""
    result: ParsedVocabulary = field(default_factory=ParsedVocabulary)
    current: Any = None
    name: str = ""
    stack: List[Any] = field(default_factory=list)
    # @context bindings recorded while resolving handlers
    aliases: Dict[str, str] = field(default_factory=dict)
    context_names: List[str] = field(default_factory=list)

    # Override slots. Do not touch, use the accessor methods.
    _whole_document_node: Optional[RDFNode] = field(default=None, init=False, repr=False)
    _next_level_node: Optional[RDFNode] = field(default=None, init=False, repr=False)
    _next_level_consumed: bool = field(default=False, init=False, repr=False)

    # ========================================
    # Scope management
    # ========================================

    def push(self) -> None:
        """Save ``current`` on the front of the stack and start a fresh scope."""
        self.stack.insert(0, self.current)
        self.current = None

    def pop(self) -> None:
        """Restore the most recently pushed entity as ``current``."""
        if not self.stack:
            raise EmptyScopeStackError()
        self.current = self.stack.pop(0)
        if isinstance(self.current, NameGetter):
            self.name = self.current.get_name()

    def is_reset(self) -> bool:
        return self.current is None and self.name == ""

    def reset(self) -> None:
        self.current = None
        self.name = ""

    # ========================================
    # Dispatch overrides
    # ========================================

    @property
    def mode(self) -> DispatchMode:
        if self._whole_document_node is not None:
            return DispatchMode.WHOLE_DOCUMENT
        if self._next_level_node is not None:
            return DispatchMode.NEXT_LEVEL
        return DispatchMode.NORMAL

    @property
    def only_apply_this_node(self) -> Optional[RDFNode]:
        return self._whole_document_node

    def set_only_apply_this_node(self, node: RDFNode) -> None:
        """Hand the rest of the document to ``node``. Stays set until reset."""
        self._whole_document_node = node

    def reset_only_apply_this_node(self) -> None:
        self._whole_document_node = None

    @property
    def only_apply_this_node_next_level(self) -> Optional[RDFNode]:
        return self._next_level_node

    def set_only_apply_this_node_next_level(self, node: RDFNode) -> None:
        """Arm ``node`` as the only handler for the keys of the next object level."""
        self._next_level_node = node
        self._next_level_consumed = False

    def reset_only_apply_this_node_next_level(self) -> None:
        self._next_level_node = None
        self._next_level_consumed = False

    @contextmanager
    def next_level_nodes(self, nodes: List[RDFNode]) -> Iterator[List[RDFNode]]:
        """
        Yield the handlers for the keys of one object level.

        An armed, unconsumed next-level override is consumed here: it is the
        only handler for every key of this level while deeper levels see
        ``nodes``. Once the level is done the override is dropped, unless a
        handler re-armed it in the meantime.
        """
        node = self._next_level_node
        if node is None or self._next_level_consumed:
            yield nodes
            return
        self._next_level_consumed = True
        try:
            yield [node]
        finally:
            if self._next_level_node is node and self._next_level_consumed:
                self.reset_only_apply_this_node_next_level()
