"""Tests for per-section summary statistics."""

import numpy as np
import pytest

from less_census.scanning.counters import SECTIONS, CounterStore
from less_census.stats import (
    gini,
    normalized_entropy,
    shannon_entropy,
    summarize,
    summarize_counter,
)


class TestShannonEntropy:
    def test_uniform_two_keys_is_one_bit(self):
        assert shannon_entropy(np.array([5, 5])) == pytest.approx(1.0)

    def test_single_key_is_zero(self):
        assert shannon_entropy(np.array([7])) == 0.0

    def test_empty_is_zero(self):
        assert shannon_entropy(np.array([], dtype=np.int64)) == 0.0

    def test_skewed(self):
        assert shannon_entropy(np.array([2, 1, 1])) == pytest.approx(1.5)


class TestNormalizedEntropy:
    def test_uniform_is_one(self):
        assert normalized_entropy(np.array([3, 3, 3, 3])) == pytest.approx(1.0)

    def test_single_key_is_zero(self):
        assert normalized_entropy(np.array([3])) == 0.0


class TestGini:
    def test_equal_counts(self):
        assert gini(np.array([4, 4, 4])) == pytest.approx(0.0)

    def test_one_key_dominates(self):
        assert gini(np.array([0, 0, 0, 100])) == pytest.approx(0.75)

    def test_single_key(self):
        assert gini(np.array([9])) == 0.0

    def test_all_zero(self):
        assert gini(np.array([0, 0])) == 0.0


class TestSummarizeCounter:
    """Summary of one counter section."""

    def test_fields(self):
        summary = summarize_counter("keywords", {"auto": 2, "none": 1, "block": 1})
        assert summary.section == "keywords"
        assert summary.distinct == 3
        assert summary.total == 4
        assert summary.singletons == 2
        assert summary.entropy == pytest.approx(1.5)
        assert summary.normalized_entropy == pytest.approx(0.9464)
        assert summary.gini == pytest.approx(0.1667)

    def test_top_is_ranked_with_insertion_ties(self):
        summary = summarize_counter("elements", {"b": 1, "a": 3, "c": 1, "d": 3}, top=3)
        assert summary.top == [("a", 3), ("d", 3), ("b", 1)]

    def test_rare_keys(self):
        counter = {"a": 5, "b": 1, "c": 2, "d": 1}
        assert summarize_counter("x", counter).rare == ["b", "d"]
        assert summarize_counter("x", counter, rare_threshold=2).rare == ["b", "c", "d"]
        assert summarize_counter("x", counter, rare_threshold=0).rare == []

    def test_empty_section(self):
        summary = summarize_counter("ratios", {})
        assert summary.distinct == 0
        assert summary.total == 0
        assert summary.entropy == 0.0
        assert summary.gini == 0.0
        assert summary.top == []

    def test_to_dict(self):
        data = summarize_counter("functions", {"darken": 2, "fade": 1}).to_dict()
        assert data["section"] == "functions"
        assert data["top"] == [["darken", 2], ["fade", 1]]
        assert data["rare"] == ["fade"]


class TestSummarize:
    def test_every_section_in_order(self):
        store = CounterStore()
        store.incr("keywords", "auto")
        summaries = summarize(store, top=5)
        assert list(summaries) == list(SECTIONS)
        assert summaries["keywords"].total == 1
        assert summaries["colors"].distinct == 0
