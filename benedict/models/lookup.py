from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class EntryResult:
    """One matching record from one dictionary.

    Some dictionaries hold several records under the same key; each one
    becomes its own entry.
    """
    dict_id: int
    dict_name: str
    headword: str
    html: str


@dataclass(frozen=True)
class DefinitionView:
    """Rendered definition for a single term.

    A view never changes its term: showing another term means building a
    new view, so ``term`` doubles as its identity.
    """
    term: str
    entries: tuple[EntryResult, ...] = ()
    css_urls: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return bool(self.entries)


@dataclass(frozen=True)
class LookupState:
    """Read-only copy of the lookup state, handed to templates."""
    search_term: str
    presented_term: str | None
    show_settings: bool
    no_definition_term: str | None
    history: tuple[str, ...] = ()
    favorites: frozenset[str] = field(default_factory=frozenset)
