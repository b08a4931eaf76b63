"""Ontology Registry.

Provides a single access point for every ontology a vocabulary document may
declare in its ``@context``. The registry turns ontology names and aliases
into ordered handler lists, and resolves ``@type`` terms to the handler of a
single ontology member.

Usage:
    from domain.ontologies.registry import RDFRegistry

    registry = RDFRegistry()
    registry.add_ontology(ActivityStreamsOntology())

    nodes = registry.for_name("https://www.w3.org/ns/activitystreams")
    nodes = registry.for_alias("as", "https://www.w3.org/ns/activitystreams")
    node = registry.get_node("as:Object", aliases={"as": "https://www.w3.org/ns/activitystreams"})

The registry is built once and only read while documents are parsed; the
aliases bound by a particular document live in its ParsingContext.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from domain.ontologies.ontology import Ontology
from domain.parsing_errors import (
    DuplicateOntologyError,
    MalformedContextError,
    UnresolvableReferenceError,
)
from domain.rdf_node import RDFNode

logger = logging.getLogger(__name__)

JSON_LD_ID = "@id"


def normalize_ontology_name(name: str) -> str:
    """Drop the trailing ``#`` or ``/`` namespace separator from an ontology URI."""
    return name.rstrip("#/")


class RDFRegistry:
    """In-memory registry of ontologies keyed by spec URI."""

    def __init__(self, ontologies: Optional[Sequence[Ontology]] = None):
        self._ontologies: Dict[str, Ontology] = {}
        for ontology in ontologies or []:
            self.add_ontology(ontology)

    def add_ontology(self, ontology: Ontology) -> None:
        name = normalize_ontology_name(ontology.spec_uri())
        if name in self._ontologies:
            raise DuplicateOntologyError(ontology.spec_uri())
        self._ontologies[name] = ontology
        logger.debug(f"Registered ontology {ontology.spec_uri()}")

    def ontology_names(self) -> List[str]:
        return [o.spec_uri() for o in self._ontologies.values()]

    def has_ontology(self, name: str) -> bool:
        return normalize_ontology_name(name) in self._ontologies

    def get_ontology(self, name: str) -> Ontology:
        """
        Look up an ontology by its spec URI.

        Raises:
            UnresolvableReferenceError: If no ontology is registered under ``name``
        """
        ontology = self._ontologies.get(normalize_ontology_name(name))
        if ontology is None:
            raise UnresolvableReferenceError(name, f"no ontology registered for {name!r}")
        return ontology

    # ========================================
    # @context resolution
    # ========================================

    def for_name(self, name: str) -> List[RDFNode]:
        """Handlers for an ontology activated without an alias."""
        return list(self.get_ontology(name).load())

    def for_alias(self, alias: str, name: str) -> List[RDFNode]:
        """Handlers for an ontology activated under ``alias``."""
        return list(self.get_ontology(name).load_as_alias(alias))

    def for_aliased_object(self, alias: str, object_spec: Mapping[str, Any]) -> List[RDFNode]:
        """
        Handlers for an alias bound to an expanded term definition.

        The ``@id`` either names a whole ontology, loaded under the alias, or
        a single member of one, loaded as the only key the alias stands for.
        """
        iri = object_spec.get(JSON_LD_ID)
        if not isinstance(iri, str):
            raise MalformedContextError(
                f"@context term {alias!r} has no string {JSON_LD_ID}", object_spec
            )
        if self.has_ontology(iri):
            return list(self.get_ontology(iri).load_as_alias(alias))
        split = self._split_member(iri)
        if split is None:
            raise UnresolvableReferenceError(iri)
        ontology, member = split
        return list(ontology.load_specific_as_alias(alias, member))

    # ========================================
    # @type resolution
    # ========================================

    def get_node(
        self,
        term: str,
        aliases: Optional[Mapping[str, str]] = None,
        context_names: Optional[Sequence[str]] = None,
    ) -> RDFNode:
        """
        Resolve a ``@type`` term to the handler of one ontology member.

        ``alias:Name`` is looked up through the aliases bound by the
        document, an absolute IRI through its ontology's spec URI, and a bare
        name in the ontologies activated without alias, in declaration order.
        """
        aliases = aliases or {}
        prefix, sep, local = term.partition(":")
        if sep and prefix in aliases:
            node = self.get_ontology(aliases[prefix]).load_element(local)
            if node is not None:
                return node
            raise UnresolvableReferenceError(term)
        split = self._split_member(term)
        if split is not None:
            ontology, member = split
            node = ontology.load_element(member)
            if node is not None:
                return node
            raise UnresolvableReferenceError(term)
        for name in context_names or []:
            node = self.get_ontology(name).load_element(term)
            if node is not None:
                return node
        raise UnresolvableReferenceError(term)

    def _split_member(self, iri: str) -> Optional[Tuple[Ontology, str]]:
        """Split an absolute IRI into its ontology and member name."""
        for name in sorted(self._ontologies, key=len, reverse=True):
            if iri.startswith(name) and iri[len(name):len(name) + 1] in ("#", "/"):
                member = iri[len(name):].lstrip("#/")
                if member:
                    return self._ontologies[name], member
        return None
