"""Ontology contract.

An ontology knows the keys of one vocabulary specification (ActivityStreams
Core, an extension, OWL, RDF Schema...) and hands out the RDFNodes that
interpret them. The registry loads ontologies according to the document's
``@context``.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from domain.rdf_node import RDFNode


class Ontology(ABC):
    """A named vocabulary that can produce handlers for its keys."""

    @abstractmethod
    def spec_uri(self) -> str:
        """The URI naming this ontology in a ``@context``."""
        pass

    @abstractmethod
    def load(self) -> List[RDFNode]:
        """Handlers recognizing this ontology's keys without a prefix."""
        pass

    @abstractmethod
    def load_as_alias(self, alias: str) -> List[RDFNode]:
        """Handlers recognizing this ontology's keys written as ``alias:key``."""
        pass

    @abstractmethod
    def load_specific_as_alias(self, alias: str, name: str) -> List[RDFNode]:
        """Handlers recognizing the single member ``name`` under the key ``alias``."""
        pass

    @abstractmethod
    def load_element(self, name: str) -> Optional[RDFNode]:
        """
        The handler for the member ``name`` when used as a ``@type`` value.

        Returns None when the ontology has no such member.
        """
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.spec_uri()!r})"
