from __future__ import annotations

import logging
from typing import List, Optional, Set
from urllib.parse import quote_plus

from benedict.config import Settings, settings as default_settings
from benedict.models.lookup import LookupState
from benedict.service.capabilities import DictionaryChecker, ListStore, StoreError

LOG = logging.getLogger("benedict")


class LookupStateManager:
    """Holds the search/history/favorites state and the intents that change it.

    One instance lives for the whole process and is handed to whatever calls
    its intent methods. Every method runs to completion on the caller's
    thread; history and favorites are written back to the store right after
    each change.
    """

    def __init__(self, dictionary: DictionaryChecker, store: ListStore, config: Settings = default_settings):
        self.dictionary = dictionary
        self.store = store
        self.config = config

        self.search_term: str = ""
        self.presented_term: Optional[str] = None
        self.show_settings: bool = False
        self.no_definition_term: Optional[str] = None

        # A stored list may carry repeats; keep the most recent occurrence.
        self.history: List[str] = list(dict.fromkeys(self._load(config.HISTORY_KEY)))
        self.favorites: Set[str] = set(self._load(config.FAVORITES_KEY))

    # -------------
    # Lookup
    # -------------
    def perform_search(self) -> None:
        term = self.search_term.strip()
        if not term:
            return

        if self.dictionary.has_definition(term):
            LOG.info("Search: %s (valid)", term)
            self.show_settings = False
            self.presented_term = term
            self._add_history(term)
            self.search_term = ""
        else:
            LOG.info("Search: %s (no definition)", term)
            self.no_definition_term = term

    def show_definition(self, word: str) -> None:
        """Present *word* if the dictionary knows it.

        The search field is kept when it already holds the same term, so a
        history row can be picked and then edited.
        """
        term = word.strip()
        if not term:
            return

        if not self.dictionary.has_definition(term):
            LOG.info("Show definition: %s (no definition)", term)
            self.no_definition_term = term
            return

        LOG.info("Show definition: %s", term)
        self.presented_term = term
        self.show_settings = False
        self._add_history(term)
        if self.search_term != term:
            self.search_term = ""

    def show_settings_view(self) -> None:
        LOG.debug("Show settings")
        self.presented_term = None
        self.show_settings = True

    def set_search_term(self, text: str) -> None:
        self.search_term = text

    def dismiss_not_found(self) -> None:
        self.no_definition_term = None

    def web_search_url(self, term: str) -> str:
        return self.config.WEB_SEARCH_URL.format(term=quote_plus(term.strip()))

    # -------------------------
    # Favorites + history
    # -------------------------
    def toggle_favorite(self, term: str) -> None:
        if term in self.favorites:
            self.favorites.discard(term)
            LOG.debug("Unfavorite: %s", term)
        else:
            self.favorites.add(term)
            LOG.debug("Favorite: %s", term)
        self._save(self.config.FAVORITES_KEY, list(self.favorites))

    def is_favorite(self, term: str) -> bool:
        return term in self.favorites

    def favorites_sorted(self) -> List[str]:
        return sorted(self.favorites, key=lambda t: (t.casefold(), t))

    def clear_history(self) -> None:
        LOG.debug("Clear history (%d items)", len(self.history))
        self.history = []
        self._save(self.config.HISTORY_KEY, self.history)

    def snapshot(self) -> LookupState:
        return LookupState(
            search_term=self.search_term,
            presented_term=self.presented_term,
            show_settings=self.show_settings,
            no_definition_term=self.no_definition_term,
            history=tuple(self.history),
            favorites=frozenset(self.favorites),
        )

    def _add_history(self, term: str) -> None:
        self.history = [t for t in self.history if t != term]
        self.history.insert(0, term)
        self._save(self.config.HISTORY_KEY, self.history)

    # -------------
    # Persistence
    # -------------
    def _load(self, key: str) -> List[str]:
        try:
            return self.store.load_list(key) or []
        except StoreError as exc:
            LOG.warning("Failed to load %s: %s", key, exc)
            return []

    def _save(self, key: str, values: List[str]) -> None:
        try:
            self.store.save_list(key, values)
        except StoreError as exc:
            LOG.warning("Failed to save %s: %s", key, exc)
