"""Interfaces for the collaborators the lookup state depends on."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from benedict.models.lookup import DefinitionView


class StoreError(Exception):
    """A ListStore could not read or write; the only error it may raise."""


class DictionaryChecker(Protocol):
    """Reference dictionary existence check."""

    def has_definition(self, term: str) -> bool:
        """Return True when at least one dictionary defines *term* exactly."""


class DefinitionRenderer(Protocol):
    """Reference dictionary display surface."""

    def render(self, term: str) -> DefinitionView:
        """Build a fresh view for *term*."""


class ListStore(Protocol):
    """Persistent key-value store for lists of strings."""

    def load_list(self, key: str) -> Optional[List[str]]:
        """Return the stored list, or None when the key is absent.

        Raises StoreError when the backend fails or the value is corrupt.
        """

    def save_list(self, key: str, values: List[str]) -> None:
        """Replace the stored list. Raises StoreError on failure."""


class SpeechRecognizer(Protocol):
    """Speech-to-text engine producing an incrementally updated transcript."""

    def is_available(self) -> bool:
        """Return False when recognition is denied or unsupported."""

    def start(
        self,
        on_result: Callable[[str, bool], None],
        on_error: Callable[[str], None],
    ) -> None:
        """Begin capture; ``on_result(transcript, is_final)`` fires per update."""

    def stop(self) -> None:
        """Stop capture and drop any pending audio."""
