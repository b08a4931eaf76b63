"""Vocabulary parsing errors.

Every failure raised while resolving a ``@context`` or walking a vocabulary
document derives from ``VocabularyParseError``. Parsing never recovers from
one of these: the first error aborts the parse and no partial
``ParsedVocabulary`` is returned.
"""

from typing import Any, Optional


class VocabularyParseError(Exception):
    """Base class for all vocabulary parsing failures."""
    pass


class MissingContextError(VocabularyParseError):
    """Raised when the document has no ``@context`` key."""

    def __init__(self, message: str = "no @context in input"):
        super().__init__(message)


class MalformedContextError(VocabularyParseError):
    """Raised when a ``@context`` value has a shape the resolver cannot use."""

    def __init__(self, message: str, value: Any = None):
        super().__init__(message)
        self.value = value


class UnresolvableReferenceError(VocabularyParseError):
    """Raised when the registry does not know an ontology name, alias or term."""

    def __init__(self, name: str, message: Optional[str] = None):
        super().__init__(message or f"cannot resolve {name!r} in the ontology registry")
        self.name = name


class UnrecognizedKeyError(VocabularyParseError):
    """
    Raised when no active handler claims a key during traversal.

    ``phase`` is one of ``enter``, ``exit`` or ``apply``; ``value`` is only
    meaningful for the ``apply`` phase.
    """

    def __init__(self, key: str, phase: str, value: Any = None):
        if phase == "apply":
            message = f"no RDFNode applicable for applying {key!r} with value {value!r}"
        else:
            message = f"no RDFNode applicable for {phase}ing {key!r}"
        super().__init__(message)
        self.key = key
        self.phase = phase
        self.value = value


class MalformedURIError(VocabularyParseError):
    """Raised when a string cannot be parsed as a URI."""

    def __init__(self, uri: str, reason: str):
        super().__init__(f"malformed URI {uri!r}: {reason}")
        self.uri = uri
        self.reason = reason


class DuplicateEntityNameError(VocabularyParseError):
    """Raised when a name is inserted twice into the same vocabulary mapping."""

    def __init__(self, kind: str, name: str):
        super().__init__(f"name {name!r} already exists for vocabulary {kind}")
        self.kind = kind
        self.name = name


class DuplicateOntologyError(VocabularyParseError):
    """Raised when two ontologies are registered under the same spec URI."""

    def __init__(self, name: str):
        super().__init__(f"ontology {name!r} is already registered")
        self.name = name


class HandlerError(VocabularyParseError):
    """
    Base class for failures raised by handlers themselves.

    Handlers may raise any exception; subclassing this one lets callers
    catch every vocabulary failure through ``VocabularyParseError``.
    """
    pass


class EmptyScopeStackError(HandlerError):
    """Raised when a handler pops more scopes than it pushed."""

    def __init__(self):
        super().__init__("cannot pop: parsing scope stack is empty")
