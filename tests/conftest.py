"""
Shared pytest fixtures for the vocabulary parser tests.

Provides small in-memory ontologies standing in for real vocabulary
handlers:
- RecordingNode: claims a fixed set of keys and records every call
- StubOntology: hands out pre-built nodes and named elements
- A miniature ActivityStreams ontology able to build types, properties
  and examples, used by the end-to-end parser tests
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

import pytest

from domain.ontologies.ontology import Ontology
from domain.ontologies.registry import RDFRegistry
from domain.rdf_node import RDFNode
from domain.vocabulary_capabilities import ExampleAdder, NameSetter, NotesSetter, URISetter
from domain.vocabulary_models import (
    VocabularyExample,
    VocabularyProperty,
    VocabularyType,
    VocabularyValue,
)

AS_URI = "https://www.w3.org/ns/activitystreams"
EXT_URI = "https://example.com/ns#"


# ========================================
# Generic test doubles
# ========================================

class RecordingNode(RDFNode):
    """Claims ``keys`` (all keys when None) and appends every call to ``log``."""

    def __init__(self, label: str, keys: Optional[Iterable[str]] = None, log: Optional[list] = None):
        self.label = label
        self.keys = set(keys) if keys is not None else None
        self.log: List[Tuple[str, str, str, Any]] = log if log is not None else []

    def _claims(self, key: str) -> bool:
        return self.keys is None or key in self.keys

    def enter(self, key, ctx):
        if not self._claims(key):
            return False
        self.log.append((self.label, "enter", key, None))
        return True

    def exit(self, key, ctx):
        if not self._claims(key):
            return False
        self.log.append((self.label, "exit", key, None))
        return True

    def apply(self, key, value, ctx):
        if not self._claims(key):
            return False
        self.log.append((self.label, "apply", key, value))
        return True


class StubOntology(Ontology):
    """Ontology returning fixed node lists and recording how it was loaded."""

    def __init__(self, uri: str, nodes: Optional[List[RDFNode]] = None,
                 elements: Optional[Dict[str, RDFNode]] = None):
        self.uri = uri
        self.nodes = nodes or []
        self.elements = elements or {}
        self.loads: List[Tuple[str, ...]] = []

    def spec_uri(self):
        return self.uri

    def load(self):
        self.loads.append(("load",))
        return self.nodes

    def load_as_alias(self, alias):
        self.loads.append(("alias", alias))
        return self.nodes

    def load_specific_as_alias(self, alias, name):
        self.loads.append(("specific", alias, name))
        return self.nodes

    def load_element(self, name):
        return self.elements.get(name)


# ========================================
# Miniature ActivityStreams ontology
# ========================================

class EntityNode(RDFNode):
    """``@type`` member starting a new entity of ``factory`` in the current scope."""

    def __init__(self, factory):
        self.factory = factory

    def enter(self, key, ctx):
        return False

    def exit(self, key, ctx):
        return False

    def apply(self, key, value, ctx):
        ctx.current = self.factory()
        return True


class KeyNode(RDFNode):
    """Base for nodes claiming a single key, optionally written as ``alias:key``."""

    key_name = ""

    def __init__(self, alias: Optional[str] = None):
        self.alias = alias

    def claims(self, key: str) -> bool:
        if self.alias:
            return key == f"{self.alias}:{self.key_name}"
        return key == self.key_name

    def enter(self, key, ctx):
        return False

    def exit(self, key, ctx):
        return False

    def apply(self, key, value, ctx):
        return False


class NameNode(KeyNode):
    """Names the current entity and files it in the vocabulary."""

    key_name = "name"

    def apply(self, key, value, ctx):
        if not self.claims(key):
            return False
        if isinstance(ctx.current, NameSetter):
            ctx.current.set_name(value)
            ctx.name = value
        if isinstance(ctx.current, VocabularyType):
            ctx.result.vocab.set_type(value, ctx.current)
        elif isinstance(ctx.current, VocabularyProperty):
            ctx.result.vocab.set_property(value, ctx.current)
        elif isinstance(ctx.current, VocabularyValue):
            ctx.result.vocab.set_value(value, ctx.current)
        return True


class IdNode(KeyNode):
    key_name = "id"

    def apply(self, key, value, ctx):
        if not self.claims(key):
            return False
        if isinstance(ctx.current, URISetter):
            ctx.current.set_uri(value)
        return True


class NotesNode(KeyNode):
    key_name = "notes"

    def apply(self, key, value, ctx):
        if not self.claims(key):
            return False
        if isinstance(ctx.current, NotesSetter):
            ctx.current.set_notes(value)
        return True


class MembersNode(KeyNode):
    """Each member object is built in its own scope."""

    key_name = "members"

    def enter(self, key, ctx):
        if not self.claims(key):
            return False
        ctx.push()
        return True

    def exit(self, key, ctx):
        if not self.claims(key):
            return False
        ctx.pop()
        return True


class PayloadNode(RDFNode):
    """Whole-document override storing the raw object as the example payload."""

    def enter(self, key, ctx):
        return False

    def exit(self, key, ctx):
        return False

    def apply(self, key, value, ctx):
        ctx.current.example = value
        ctx.reset_only_apply_this_node()
        return True


class ExampleNode(KeyNode):
    """Builds a VocabularyExample and attaches it to the enclosing entity."""

    key_name = "example"

    def enter(self, key, ctx):
        if not self.claims(key):
            return False
        ctx.push()
        ctx.current = VocabularyExample()
        return True

    def exit(self, key, ctx):
        if not self.claims(key):
            return False
        example = ctx.current
        ctx.pop()
        if isinstance(ctx.current, ExampleAdder):
            ctx.current.add_example(example)
        return True

    def apply(self, key, value, ctx):
        if not self.claims(key):
            return False
        ctx.current.example = value
        return True


class ObjectPayloadNode(KeyNode):
    """``object`` inside an example: hand the nested object over untouched."""

    key_name = "object"

    def __init__(self, alias: Optional[str] = None):
        super().__init__(alias)
        self.payload = PayloadNode()

    def enter(self, key, ctx):
        if not self.claims(key):
            return False
        ctx.set_only_apply_this_node(self.payload)
        return True

    def exit(self, key, ctx):
        return self.claims(key)

    def apply(self, key, value, ctx):
        if not self.claims(key):
            return False
        ctx.current.example = value
        return True


KEY_NODES = (NameNode, IdNode, NotesNode, MembersNode, ExampleNode, ObjectPayloadNode)


class MiniActivityStreams(Ontology):
    """Just enough of ActivityStreams to build types, properties and examples."""

    def __init__(self, uri: str = AS_URI):
        self.uri = uri

    def spec_uri(self):
        return self.uri

    def load(self):
        return [cls() for cls in KEY_NODES]

    def load_as_alias(self, alias):
        return [cls(alias) for cls in KEY_NODES]

    def load_specific_as_alias(self, alias, name):
        for cls in KEY_NODES:
            if cls.key_name == name:
                node = cls()
                node.key_name = alias
                return [node]
        return []

    def load_element(self, name):
        return {
            "Object": EntityNode(VocabularyType),
            "Property": EntityNode(VocabularyProperty),
            "Value": EntityNode(VocabularyValue),
        }.get(name)


# ========================================
# Fixtures
# ========================================

@pytest.fixture
def call_log():
    """Shared call log for RecordingNodes."""
    return []


@pytest.fixture
def recording_node(call_log):
    """Factory building RecordingNodes that share ``call_log``."""
    def _make(label: str, keys: Optional[Iterable[str]] = None) -> RecordingNode:
        return RecordingNode(label, keys, call_log)
    return _make


@pytest.fixture
def stub_ontology():
    """Factory building StubOntology instances."""
    return StubOntology


@pytest.fixture
def activity_streams():
    return MiniActivityStreams()


@pytest.fixture
def as_registry(activity_streams):
    """Registry holding the miniature ActivityStreams ontology."""
    return RDFRegistry([activity_streams])
