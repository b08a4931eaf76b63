"""Vocabulary domain models.

This module defines the intermediate vocabulary model produced by parsing an
ActivityStreams-style vocabulary definition:

- ParsedVocabulary: the parse result, one primary vocabulary plus every
  referenced external vocabulary keyed by reference name
- Vocabulary: the types, properties and values of a single namespace
- VocabularyType / VocabularyProperty / VocabularyValue: the entities
- VocabularyExample / VocabularyReference: supporting records

Entities are created empty and filled in field by field while the parser
walks the document. At the end of parsing the model is not guaranteed to be
semantically valid (references may dangle), only that every key of the
input was understood by some handler.
"""

import re
from typing import Any, Dict, List, Optional
from urllib.parse import SplitResult, urlsplit

from pydantic import BaseModel, Field

from domain.parsing_errors import DuplicateEntityNameError, MalformedURIError


_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def parse_uri(uri: str) -> SplitResult:
    """
    Parse a string as a URI reference.

    Relative references are accepted. Raises MalformedURIError for control
    characters, broken percent-escapes, a missing scheme before ``:`` or
    anything ``urlsplit`` itself refuses.
    """
    if not isinstance(uri, str):
        raise MalformedURIError(repr(uri), "URI must be a string")
    if any(ord(c) < 0x20 or ord(c) == 0x7F for c in uri):
        raise MalformedURIError(uri, "invalid control character in URL")
    match = _BAD_ESCAPE.search(uri)
    if match:
        raise MalformedURIError(uri, f"invalid URL escape {uri[match.start():match.start() + 3]!r}")
    if uri.startswith(":"):
        raise MalformedURIError(uri, "missing protocol scheme")
    try:
        return urlsplit(uri)
    except ValueError as e:
        raise MalformedURIError(uri, str(e)) from e


class _URIMixin:
    """Shared name and URI accessors."""

    def set_name(self, name: str) -> None:
        self.name = name

    def get_name(self) -> str:
        return self.name

    def set_uri(self, uri: str) -> None:
        # Validation happens before assignment so a bad URI leaves the field unset.
        self.uri = parse_uri(uri).geturl()

    @property
    def parsed_uri(self) -> Optional[SplitResult]:
        return urlsplit(self.uri) if self.uri is not None else None


class VocabularyExample(_URIMixin, BaseModel):
    """An example attached to a type or property. The payload is opaque."""
    name: str = Field("", description="Example name")
    uri: Optional[str] = Field(None, description="Example URI")
    example: Any = Field(None, description="Arbitrary example payload")

    def __str__(self) -> str:
        return f"Example={self.name},{self.uri}"


class VocabularyReference(_URIMixin, BaseModel):
    """
    A weak, name-based link to a type, property or value.

    When ``vocab`` is set it must match a key in ParsedVocabulary.references;
    the link is resolved lazily by consumers, never during parsing.
    """
    name: str = Field("", description="Referenced entity name")
    uri: Optional[str] = Field(None, description="Referenced entity URI")
    vocab: Optional[str] = Field(None, description="Origin vocabulary reference name")

    def __str__(self) -> str:
        return f"Reference={self.name},{self.uri},{self.vocab or ''}"


class VocabularyValue(_URIMixin, BaseModel):
    """A value kind that properties can take on."""
    name: str = Field("", description="Value name")
    uri: Optional[str] = Field(None, description="Value URI")
    definition_type: str = Field("", description="How to represent and validate this value kind")
    zero: str = Field("", description="Zero value literal")

    def __str__(self) -> str:
        return f"Value={self.name},{self.uri},{self.definition_type},{self.zero}"


class VocabularyType(_URIMixin, BaseModel):
    """A single ActivityStreams type in a vocabulary."""
    name: str = Field("", description="Type name")
    uri: Optional[str] = Field(None, description="Type URI")
    notes: str = Field("", description="Free-text notes")
    disjoint_with: List[VocabularyReference] = Field(default_factory=list)
    # Kept as plain lists: "Object improperly extends Link" is not special-cased.
    extends: List[VocabularyReference] = Field(default_factory=list)
    properties: List[VocabularyReference] = Field(default_factory=list)
    without_properties: List[VocabularyReference] = Field(default_factory=list)
    examples: List[VocabularyExample] = Field(default_factory=list)

    def set_notes(self, notes: str) -> None:
        self.notes = notes

    def add_example(self, example: VocabularyExample) -> None:
        self.examples.append(example)

    def __str__(self) -> str:
        return f"Type={self.name},{self.uri},{self.notes}"


class VocabularyProperty(_URIMixin, BaseModel):
    """A single ActivityStreams property in a vocabulary."""
    name: str = Field("", description="Property name")
    uri: Optional[str] = Field(None, description="Property URI")
    notes: str = Field("", description="Free-text notes")
    domain: List[VocabularyReference] = Field(default_factory=list)
    range: List[VocabularyReference] = Field(default_factory=list)
    examples: List[VocabularyExample] = Field(default_factory=list)
    subproperty_of: Optional[VocabularyReference] = Field(None, description="Must refer to a property")
    functional: bool = Field(False, description="At most one value")
    natural_language_map: bool = Field(False, description="Value may be a language-tagged map")

    def set_notes(self, notes: str) -> None:
        self.notes = notes

    def add_example(self, example: VocabularyExample) -> None:
        self.examples.append(example)

    def __str__(self) -> str:
        return (
            f"Property={self.name},{self.uri},{self.notes},"
            f"{self.functional},{self.natural_language_map}"
        )


class Vocabulary(BaseModel):
    """Type, property and value definitions of a single vocabulary."""
    types: Dict[str, VocabularyType] = Field(default_factory=dict)
    properties: Dict[str, VocabularyProperty] = Field(default_factory=dict)
    values: Dict[str, VocabularyValue] = Field(default_factory=dict)

    def set_type(self, name: str, vocabulary_type: VocabularyType) -> None:
        if name in self.types:
            raise DuplicateEntityNameError("types", name)
        self.types[name] = vocabulary_type

    def set_property(self, name: str, vocabulary_property: VocabularyProperty) -> None:
        if name in self.properties:
            raise DuplicateEntityNameError("properties", name)
        self.properties[name] = vocabulary_property

    def set_value(self, name: str, vocabulary_value: VocabularyValue) -> None:
        if name in self.values:
            raise DuplicateEntityNameError("values", name)
        self.values[name] = vocabulary_value

    def entity_count(self) -> Dict[str, int]:
        return {
            "types": len(self.types),
            "properties": len(self.properties),
            "values": len(self.values),
        }

    def __str__(self) -> str:
        lines = []
        for k, v in self.types.items():
            lines.append(f"Type {k}:\n\t{v}")
        for k, v in self.properties.items():
            lines.append(f"Property {k}:\n\t{v}")
        for k, v in self.values.items():
            lines.append(f"Value {k}:\n\t{v}")
        return "\n".join(lines)


class ParsedVocabulary(BaseModel):
    """
    Result of parsing a vocabulary definition.

    ``vocab`` is the document's own namespace; ``references`` holds every
    external vocabulary the document refers to, keyed by reference name.
    """
    vocab: Vocabulary = Field(default_factory=Vocabulary)
    references: Dict[str, Vocabulary] = Field(default_factory=dict)

    def set_reference(self, name: str, vocabulary: Vocabulary) -> None:
        if name in self.references:
            raise DuplicateEntityNameError("references", name)
        self.references[name] = vocabulary

    def resolve_reference(self, reference: VocabularyReference) -> Optional[Vocabulary]:
        """
        Find the vocabulary a reference points into.

        Returns the primary vocabulary when the reference has no origin
        vocabulary, and None when the origin name is unknown.
        """
        if not reference.vocab:
            return self.vocab
        return self.references.get(reference.vocab)

    def summary(self) -> Dict[str, Any]:
        return {
            "vocab": self.vocab.entity_count(),
            "references": {k: v.entity_count() for k, v in self.references.items()},
        }

    def __str__(self) -> str:
        parts = [f"Vocab:\n{self.vocab}"]
        for k, v in self.references.items():
            parts.append(f"Reference {k}:\n{v}")
        return "\n".join(parts)
