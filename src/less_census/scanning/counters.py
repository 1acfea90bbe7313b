"""Counter store: the named occurrence counters one classifier accumulates.

A store is owned by exactly one classifier while it scans. Once reported it
is frozen; the coordinator folds frozen snapshots into its aggregate with
``merge``, which is commutative and associative, so neither scan order nor
merge order affects the totals.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterator, Mapping

from ..exceptions import FrozenStoreError

SECTIONS = (
    "colors",
    "color_keywords",
    "dimensions",
    "directives",
    "elements",
    "functions",
    "keywords",
    "properties",
    "ratios",
    "variables",
    "syntax",
)


class CounterStore:
    """A fixed set of ``collections.Counter`` sections, one per ``SECTIONS`` entry.

    Counters only grow: ``incr`` adds one, ``merge_from`` adds another store's
    counts. Key insertion order is kept and breaks ties in ``ranked``.
    """

    def __init__(self) -> None:
        self._sections: dict[str, Counter] = {name: Counter() for name in SECTIONS}
        self._frozen = False

    # ------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __getitem__(self, section: str) -> Counter:
        return self._sections[section]

    def __iter__(self) -> Iterator[str]:
        return iter(SECTIONS)

    def items(self) -> Iterator[tuple[str, Counter]]:
        for name in SECTIONS:
            yield name, self._sections[name]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CounterStore):
            return NotImplemented
        return all(self._sections[name] == other._sections[name] for name in SECTIONS)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{name}={len(c)}" for name, c in self.items() if c)
        state = " frozen" if self._frozen else ""
        return f"<CounterStore{state} {sizes or 'empty'}>"

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def incr(self, section: str, key: str) -> None:
        """Add one to ``key`` in ``section``, creating it at zero."""
        if self._frozen:
            raise FrozenStoreError(section)
        self._sections[section][key] += 1

    def merge_from(self, other: "CounterStore") -> None:
        """Add every count of ``other`` into this store."""
        if self._frozen:
            raise FrozenStoreError("*")
        for name in SECTIONS:
            self._sections[name].update(other._sections[name])

    def freeze(self) -> "CounterStore":
        self._frozen = True
        return self

    def copy(self) -> "CounterStore":
        """Unfrozen deep copy."""
        clone = CounterStore()
        for name in SECTIONS:
            clone._sections[name] = Counter(self._sections[name])
        return clone

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not any(self._sections.values())

    def total(self, section: str) -> int:
        """Sum of all counts in ``section``."""
        return sum(self._sections[section].values())

    def ranked(self, section: str) -> list[tuple[str, int]]:
        """``(key, count)`` pairs by count descending, ties in first-insertion order."""
        # sorted() is stable, so equal counts keep Counter insertion order
        return sorted(self._sections[section].items(), key=lambda kv: -kv[1])

    def to_dict(self) -> dict[str, dict[str, int]]:
        return {name: dict(self._sections[name]) for name in SECTIONS}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, int]]) -> "CounterStore":
        """Build a store from ``to_dict`` output. Unknown sections are rejected."""
        store = cls()
        for name, counts in data.items():
            if name not in store._sections:
                raise KeyError(f"unknown counter section: {name}")
            store._sections[name] = Counter(dict(counts))
        return store

    def __getstate__(self) -> dict:
        return {"sections": self.to_dict(), "frozen": self._frozen}

    def __setstate__(self, state: dict) -> None:
        self._sections = {name: Counter(state["sections"].get(name, {})) for name in SECTIONS}
        self._frozen = state["frozen"]


def merge(into: CounterStore, source: CounterStore) -> CounterStore:
    """Add every key of every section of ``source`` to ``into``; returns ``into``."""
    into.merge_from(source)
    return into


def merge_all(stores) -> CounterStore:
    """Fold any number of stores into a new aggregate."""
    aggregate = CounterStore()
    for store in stores:
        merge(aggregate, store)
    return aggregate
