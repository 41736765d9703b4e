"""Tests for the hierarchical configuration store."""

import copy

import pytest

from strata.config import ABSENT, ConfigStore, get, merge, normalize


class TestNormalize:
    def test_expands_dotted_keys(self):
        assert normalize({"logger.level": "DEBUG", "name": "site"}) == {
            "logger": {"level": "DEBUG"},
            "name": "site",
        }

    def test_expands_dotted_keys_inside_nested_mappings(self):
        result = normalize({"security": {"headers.X-Frame-Options": "DENY"}})
        assert result == {"security": {"headers": {"X-Frame-Options": "DENY"}}}

    def test_dotted_and_nested_forms_are_merged(self):
        result = normalize({"i18n": {"locale": "fr_FR"}, "i18n.domain": "site"})
        assert result == {"i18n": {"locale": "fr_FR", "domain": "site"}}

    def test_sequences_are_kept_as_is(self):
        routes = [["GET", "/", "app.pages:home"]]
        assert normalize({"routes": routes}) == {"routes": routes}

    def test_does_not_mutate_input(self):
        values = {"a.b": {"c": 1}}
        snapshot = copy.deepcopy(values)
        normalize(values)
        assert values == snapshot


class TestGet:
    data = {"logger": {"level": "INFO"}, "routes": [], "timezone": None}

    def test_reads_nested_value(self):
        assert get(self.data, "logger.level") == "INFO"

    def test_top_level_value(self):
        assert get(self.data, "routes") == []

    def test_none_is_a_value_not_absence(self):
        assert get(self.data, "timezone") is None

    def test_missing_key_is_absent(self):
        assert get(self.data, "custom-post-types") is ABSENT

    def test_partial_path_through_scalar_is_absent(self):
        assert get(self.data, "logger.level.name") is ABSENT

    def test_partial_path_through_list_is_absent(self):
        assert get(self.data, "routes.0") is ABSENT

    @pytest.mark.parametrize("key", ["", None, 42, "logger..level", ".logger"])
    def test_malformed_keys_never_raise(self, key):
        assert get(self.data, key) is ABSENT

    def test_caller_default(self):
        assert get(self.data, "missing", "fallback") == "fallback"

    def test_absent_is_falsy_and_singleton(self):
        assert not ABSENT
        assert copy.deepcopy(ABSENT) is ABSENT
        assert repr(ABSENT) == "ABSENT"


class TestMerge:
    def test_disjoint_keys_are_unioned(self):
        a = {"logger": {"level": "INFO"}}
        b = {"i18n": {"locale": "fr_FR"}}
        assert merge(a, b) == {"logger": {"level": "INFO"}, "i18n": {"locale": "fr_FR"}}

    def test_disjoint_nested_keys_keep_their_paths(self):
        a = {"a": {"b": 1}}
        b = {"a": {"c": 2}}
        assert merge(a, b) == {"a": {"b": 1, "c": 2}}

    def test_scalar_update_wins(self):
        assert merge({"timezone": "UTC"}, {"timezone": "Europe/Paris"}) == {
            "timezone": "Europe/Paris"
        }

    def test_nested_mappings_merge_recursively(self):
        a = {"security": {"headers": {"X-Frame-Options": "DENY"}, "hide_server": True}}
        b = {"security": {"headers": {"Referrer-Policy": "no-referrer"}}}
        assert merge(a, b) == {
            "security": {
                "headers": {"X-Frame-Options": "DENY", "Referrer-Policy": "no-referrer"},
                "hide_server": True,
            }
        }

    def test_mapping_replaces_scalar_and_vice_versa(self):
        assert merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}
        assert merge({"a": {"b": 2}}, {"a": 1}) == {"a": 1}

    def test_dotted_update_is_expanded(self):
        assert merge({"a": {"b": 1}}, {"a.c": 2}) == {"a": {"b": 1, "c": 2}}

    def test_lists_are_replaced_not_concatenated(self):
        assert merge({"routes": [1, 2]}, {"routes": [3]}) == {"routes": [3]}

    def test_inputs_are_not_mutated(self):
        current = {"a": {"b": 1}}
        updates = {"a": {"c": 2}}
        merge(current, updates)
        assert current == {"a": {"b": 1}}
        assert updates == {"a": {"c": 2}}


class TestConfigStore:
    def test_starts_empty(self):
        store = ConfigStore()
        assert len(store) == 0
        assert store.get("anything") is ABSENT

    def test_normalize_replaces_tree(self):
        store = ConfigStore({"old": 1})
        store.normalize({"new.key": 2})
        assert store.as_dict() == {"new": {"key": 2}}

    def test_normalize_empty_input_is_noop(self):
        store = ConfigStore({"namespace": "site"})
        store.normalize({})
        assert store.as_dict() == {"namespace": "site"}

    def test_sequential_sets_keep_siblings(self):
        store = ConfigStore()
        store.set("a.b", 1)
        store.set("a.c", 2)
        assert store.get("a.b") == 1
        assert store.get("a.c") == 2

    def test_readers_cannot_mutate_the_tree(self):
        store = ConfigStore({"a": {"b": [1]}})
        store.get("a")["b"].append(2)
        store.as_dict()["a"]["c"] = 3
        assert store.as_dict() == {"a": {"b": [1]}}

    def test_has_and_contains(self):
        store = ConfigStore({"timezone": None})
        assert store.has("timezone")
        assert "timezone" in store
        assert "locale" not in store
