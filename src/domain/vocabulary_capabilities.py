"""Entity capability contracts.

Handlers mutate whatever entity currently occupies the parsing scope without
knowing its concrete kind. Each capability is a narrow protocol that can be
checked at runtime with ``isinstance``; an entity exposes only the ones that
make sense for it.

Usage:
    if isinstance(ctx.current, NameSetter):
        ctx.current.set_name(value)
"""

from typing import Protocol, runtime_checkable, TYPE_CHECKING

if TYPE_CHECKING:
    from domain.vocabulary_models import VocabularyExample


@runtime_checkable
class NameSetter(Protocol):
    """Entity whose name can be assigned."""

    def set_name(self, name: str) -> None:
        ...


@runtime_checkable
class NameGetter(Protocol):
    """Entity whose name can be read back (used to resync cached state)."""

    def get_name(self) -> str:
        ...


@runtime_checkable
class URISetter(Protocol):
    """Entity whose URI can be assigned; raises ``MalformedURIError``."""

    def set_uri(self, uri: str) -> None:
        ...


@runtime_checkable
class NotesSetter(Protocol):
    """Entity carrying free-text notes."""

    def set_notes(self, notes: str) -> None:
        ...


@runtime_checkable
class ExampleAdder(Protocol):
    """Entity accumulating usage examples."""

    def add_example(self, example: "VocabularyExample") -> None:
        ...
