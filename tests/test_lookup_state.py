"""Lookup state transitions: search, show, settings, favorites, persistence."""

from __future__ import annotations

import pytest

from benedict.service.capabilities import StoreError
from benedict.service.lookup_state import LookupStateManager
from tests.fakes import FakeDictionary, MemoryStore


def _fields(m: LookupStateManager):
    return (m.search_term, m.presented_term, m.show_settings, m.no_definition_term, list(m.history), set(m.favorites))


class TestPerformSearch:
    def test_found_term_is_presented_and_recorded(self, manager, store):
        manager.search_term = "  狗  "
        manager.perform_search()

        assert manager.presented_term == "狗"
        assert manager.history == ["狗"]
        assert manager.search_term == ""
        assert store.data["history"] == ["狗"]

    def test_found_term_goes_in_front_of_previous_history(self, dictionary):
        store = MemoryStore({"history": ["cat", "dog"]})
        m = LookupStateManager(dictionary, store)
        m.search_term = "  狗  "
        m.perform_search()
        assert m.history == ["狗", "cat", "dog"]
        assert m.search_term == ""

    def test_found_term_closes_settings(self, manager):
        manager.show_settings_view()
        manager.search_term = "cat"
        manager.perform_search()
        assert manager.show_settings is False
        assert manager.presented_term == "cat"

    def test_missing_term_sets_not_found_only(self, manager, store):
        manager.show_definition("cat")
        manager.search_term = " xyzzy "
        manager.perform_search()

        assert manager.no_definition_term == "xyzzy"
        assert manager.search_term == " xyzzy "
        assert manager.presented_term == "cat"
        assert manager.history == ["cat"]
        assert len(store.saves) == 1

    def test_checks_trimmed_term(self, manager, dictionary):
        manager.search_term = "\tdog\n"
        manager.perform_search()
        assert dictionary.checked == ["dog"]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_blank_input_is_a_no_op(self, manager, dictionary, store, text):
        manager.search_term = text
        before = _fields(manager)
        manager.perform_search()
        assert _fields(manager) == before
        assert dictionary.checked == []
        assert store.saves == []


class TestShowDefinition:
    def test_repeat_lookup_does_not_duplicate(self, dictionary):
        m = LookupStateManager(dictionary, MemoryStore({"history": ["猫"]}))
        m.show_definition("猫")
        assert m.history == ["猫"]
        assert m.presented_term == "猫"

    def test_repeat_lookup_moves_term_to_front(self, manager):
        for term in ("cat", "dog", "serendipity"):
            manager.show_definition(term)
        manager.show_definition("cat")
        assert manager.history == ["cat", "serendipity", "dog"]

    def test_history_is_case_sensitive(self, dictionary):
        dictionary.terms.add("Cat")
        m = LookupStateManager(dictionary, MemoryStore())
        m.show_definition("cat")
        m.show_definition("Cat")
        assert m.history == ["Cat", "cat"]

    def test_clears_unrelated_search_field(self, manager):
        manager.search_term = "half typed"
        manager.show_definition("dog")
        assert manager.search_term == ""

    def test_keeps_search_field_holding_same_term(self, manager):
        manager.search_term = "dog"
        manager.show_definition("  dog ")
        assert manager.search_term == "dog"
        assert manager.presented_term == "dog"

    def test_missing_term_changes_nothing_else(self, manager, store):
        manager.show_definition("cat")
        manager.toggle_favorite("cat")
        manager.search_term = "typing"
        before = _fields(manager)
        saves = len(store.saves)

        manager.show_definition(" nope ")

        assert manager.no_definition_term == "nope"
        after = _fields(manager)
        assert after[:3] == before[:3]
        assert after[4:] == before[4:]
        assert len(store.saves) == saves

    @pytest.mark.parametrize("text", ["", "  ", "\n"])
    def test_blank_input_is_a_no_op(self, manager, dictionary, text):
        before = _fields(manager)
        manager.show_definition(text)
        assert _fields(manager) == before
        assert dictionary.checked == []

    def test_presented_and_settings_are_exclusive(self, manager):
        manager.show_definition("cat")
        manager.show_settings_view()
        assert manager.presented_term is None
        assert manager.show_settings is True

        manager.show_definition("dog")
        assert manager.presented_term == "dog"
        assert manager.show_settings is False


class TestFavorites:
    def test_toggle_twice_restores_favorites(self, manager):
        manager.toggle_favorite("cat")
        before = set(manager.favorites)
        manager.toggle_favorite("狗")
        manager.toggle_favorite("狗")
        assert manager.favorites == before

    def test_toggle_persists(self, manager, store):
        manager.toggle_favorite("dog")
        assert manager.is_favorite("dog")
        assert store.data["favorites"] == ["dog"]
        manager.toggle_favorite("dog")
        assert not manager.is_favorite("dog")
        assert store.data["favorites"] == []

    def test_favorites_independent_of_history(self, manager):
        manager.toggle_favorite("serendipity")
        assert manager.history == []
        manager.show_definition("cat")
        assert not manager.is_favorite("cat")

    def test_is_favorite_has_no_side_effects(self, manager, store):
        assert manager.is_favorite("cat") is False
        assert store.saves == []

    def test_sorted_for_display(self, manager):
        for term in ("dog", "Cat", "apple"):
            manager.toggle_favorite(term)
        assert manager.favorites_sorted() == ["apple", "Cat", "dog"]


class TestNotFoundAndExtras:
    def test_dismiss_clears_not_found(self, manager):
        manager.show_definition("nope")
        manager.dismiss_not_found()
        assert manager.no_definition_term is None

    def test_web_search_url_quotes_term(self, manager):
        url = manager.web_search_url(" hello world ")
        assert url.endswith("q=hello+world")

    def test_clear_history_keeps_favorites(self, manager, store):
        manager.show_definition("cat")
        manager.toggle_favorite("cat")
        manager.clear_history()
        assert manager.history == []
        assert store.data["history"] == []
        assert manager.is_favorite("cat")

    def test_snapshot_is_a_copy(self, manager):
        manager.show_definition("cat")
        snap = manager.snapshot()
        manager.show_definition("dog")
        assert snap.history == ("cat",)
        assert snap.presented_term == "cat"


class TestPersistence:
    def test_loads_existing_collections(self, dictionary):
        m = LookupStateManager(dictionary, MemoryStore({"history": ["b", "a"], "favorites": ["a"]}))
        assert m.history == ["b", "a"]
        assert m.favorites == {"a"}

    def test_repeated_history_entries_collapse_on_load(self, dictionary):
        m = LookupStateManager(dictionary, MemoryStore({"history": ["cat", "dog", "cat", "dog", "狗"]}))
        assert m.history == ["cat", "dog", "狗"]

        m.show_definition("dog")
        assert m.history == ["dog", "cat", "狗"]

    def test_absent_keys_start_empty(self, manager):
        assert manager.history == []
        assert manager.favorites == set()

    def test_round_trip_through_sqlite(self, sqlite_store, dictionary):
        m = LookupStateManager(dictionary, sqlite_store)
        for term in ("cat", "狗", "dog", "cat"):
            m.show_definition(term)
        m.toggle_favorite("狗")
        m.toggle_favorite("serendipity")

        reloaded = LookupStateManager(FakeDictionary(), sqlite_store)
        assert reloaded.history == ["cat", "dog", "狗"]
        assert reloaded.favorites == {"狗", "serendipity"}

    def test_load_failure_degrades_to_empty(self, dictionary):
        class BrokenStore(MemoryStore):
            def load_list(self, key):
                raise StoreError("disk I/O error")

        m = LookupStateManager(dictionary, BrokenStore())
        assert m.history == []
        assert m.favorites == set()

    def test_save_failure_keeps_state_in_memory(self, dictionary, caplog):
        class ReadOnlyStore(MemoryStore):
            def save_list(self, key, values):
                raise StoreError("attempt to write a readonly database")

        m = LookupStateManager(dictionary, ReadOnlyStore())
        with caplog.at_level("WARNING", logger="benedict"):
            m.show_definition("cat")
        assert m.history == ["cat"]
        assert m.presented_term == "cat"
        assert "Failed to save history" in caplog.text
