"""Tests for CounterStore and merging."""

import pickle

import pytest

from less_census.exceptions import FrozenStoreError
from less_census.scanning.counters import SECTIONS, CounterStore, merge, merge_all


def make_store(**sections):
    store = CounterStore()
    for section, keys in sections.items():
        for key in keys:
            store.incr(section, key)
    return store


class TestCounterStore:
    """Basic counting and queries."""

    def test_new_store_is_empty(self):
        store = CounterStore()
        assert store.is_empty()
        assert list(store) == list(SECTIONS)
        assert all(not counter for _, counter in store.items())

    def test_incr_creates_at_zero(self):
        store = CounterStore()
        store.incr("keywords", "auto")
        store.incr("keywords", "auto")
        assert store["keywords"]["auto"] == 2
        assert not store.is_empty()

    def test_unknown_section(self):
        with pytest.raises(KeyError):
            CounterStore().incr("selectors", "a")

    def test_total(self):
        store = make_store(properties=["color", "color", "width"])
        assert store.total("properties") == 3
        assert store.total("colors") == 0

    def test_ranked_by_count_descending(self):
        store = make_store(properties=["width", "color", "color", "margin", "color", "width"])
        assert store.ranked("properties") == [("color", 3), ("width", 2), ("margin", 1)]

    def test_ranked_ties_keep_first_insertion_order(self):
        store = make_store(keywords=["zeta", "alpha", "mid", "alpha", "zeta", "mid"])
        assert [k for k, _ in store.ranked("keywords")] == ["zeta", "alpha", "mid"]

    def test_equality(self):
        assert make_store(keywords=["a", "b"]) == make_store(keywords=["b", "a"])
        assert make_store(keywords=["a"]) != make_store(keywords=["a", "a"])


class TestFreezing:
    """Reported snapshots reject mutation."""

    def test_frozen_store_rejects_incr(self):
        store = make_store(keywords=["a"]).freeze()
        assert store.frozen
        with pytest.raises(FrozenStoreError) as exc_info:
            store.incr("keywords", "b")
        assert exc_info.value.section == "keywords"

    def test_frozen_store_rejects_merge_into(self):
        store = CounterStore().freeze()
        with pytest.raises(FrozenStoreError):
            merge(store, make_store(keywords=["a"]))

    def test_frozen_store_can_be_merged_from(self):
        snapshot = make_store(keywords=["a"]).freeze()
        aggregate = merge(CounterStore(), snapshot)
        assert aggregate["keywords"]["a"] == 1

    def test_copy_is_unfrozen_and_independent(self):
        original = make_store(keywords=["a"]).freeze()
        clone = original.copy()
        clone.incr("keywords", "a")
        assert not clone.frozen
        assert original["keywords"]["a"] == 1
        assert clone["keywords"]["a"] == 2


class TestMerge:
    """Merging is commutative and associative."""

    def test_merge_adds_counts(self):
        into = make_store(keywords=["a"], colors=["#f00"])
        merge(into, make_store(keywords=["a", "b"]))
        assert into["keywords"] == {"a": 2, "b": 1}
        assert into["colors"] == {"#f00": 1}

    def test_merge_returns_target(self):
        into = CounterStore()
        assert merge(into, CounterStore()) is into

    def test_commutative(self):
        a = make_store(keywords=["x", "y"], dimensions=["10px"])
        b = make_store(keywords=["y", "z"], variables=["gutter"])
        assert merge_all([a, b]) == merge_all([b, a])

    def test_associative(self):
        a = make_store(keywords=["x"])
        b = make_store(keywords=["x", "y"])
        c = make_store(functions=["darken"])
        left = merge(merge(CounterStore(), merge_all([a, b])), c)
        right = merge(merge(CounterStore(), a), merge_all([b, c]))
        assert left == right

    def test_merge_all_of_nothing_is_empty(self):
        assert merge_all([]).is_empty()


class TestSerialisation:
    def test_dict_round_trip(self):
        store = make_store(keywords=["a", "b", "a"], ratios=["16/9"])
        assert CounterStore.from_dict(store.to_dict()) == store

    def test_from_dict_rejects_unknown_section(self):
        with pytest.raises(KeyError):
            CounterStore.from_dict({"selectors": {"a": 1}})

    def test_pickle_keeps_frozen_flag(self):
        store = make_store(keywords=["a"]).freeze()
        restored = pickle.loads(pickle.dumps(store))
        assert restored == store
        assert restored.frozen
