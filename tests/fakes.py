"""In-memory stand-ins for the dictionary and the key-value store."""

from __future__ import annotations

from benedict.models.lookup import DefinitionView, EntryResult


class FakeDictionary:
    """Knows a fixed set of terms; records every existence check."""

    def __init__(self, terms=()):
        self.terms = set(terms)
        self.checked: list[str] = []

    def has_definition(self, term: str) -> bool:
        self.checked.append(term)
        return term in self.terms

    def render(self, term: str) -> DefinitionView:
        if term not in self.terms:
            return DefinitionView(term=term)
        entry = EntryResult(dict_id=1, dict_name="Fake Dictionary", headword=term, html=f"<p>definition of {term}</p>")
        return DefinitionView(term=term, entries=(entry,))


class MemoryStore:
    def __init__(self, data=None):
        self.data = dict(data or {})
        self.saves: list[tuple[str, list[str]]] = []

    def load_list(self, key):
        value = self.data.get(key)
        return list(value) if value is not None else None

    def save_list(self, key, values):
        self.saves.append((key, list(values)))
        self.data[key] = list(values)

