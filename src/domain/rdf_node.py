"""Handler contract for the vocabulary parser."""

from abc import ABC, abstractmethod
from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from domain.parsing_context import ParsingContext


class RDFNode(ABC):
    """
    Interprets the keys of one ontology.

    Each operation returns True when the node claims ``key`` and False when
    the key is not one it recognizes. Failures are raised. A node must test
    ``key`` itself: the parser offers every key to every active node in
    priority order until one claims it. In whole-document override mode the
    node's ``apply`` receives an empty key and the raw remaining document.
    """

    @abstractmethod
    def enter(self, key: str, ctx: "ParsingContext") -> bool:
        """Called before a nested object (or each array element) under ``key``."""
        pass

    @abstractmethod
    def exit(self, key: str, ctx: "ParsingContext") -> bool:
        """Called after a nested object (or each array element) under ``key``."""
        pass

    @abstractmethod
    def apply(self, key: str, value: Any, ctx: "ParsingContext") -> bool:
        """Called with a scalar value, or a non-object array element."""
        pass
