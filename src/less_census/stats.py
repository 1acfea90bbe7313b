"""Summary statistics over counter sections.

For every section of a counter store:

    distinct            number of keys
    total               sum of counts
    singletons          keys seen exactly once
    entropy             Shannon entropy of the key distribution, in bits
    normalized_entropy  entropy / log2(distinct), in [0, 1]
    gini                concentration of counts over keys, in [0, 1]
    top                 most frequent keys
    rare                keys used at most ``rare_threshold`` times

A low normalized entropy or a high Gini means a few keys dominate the
section; the rare list is where dead or barely used features show up.
"""

from dataclasses import asdict, dataclass, field
from typing import Mapping

import numpy as np

from .scanning.counters import CounterStore


@dataclass
class SectionSummary:
    section: str
    distinct: int
    total: int
    singletons: int
    entropy: float
    normalized_entropy: float
    gini: float
    top: list[tuple[str, int]] = field(default_factory=list)
    rare: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        data = asdict(self)
        data["top"] = [[key, count] for key, count in self.top]
        return data


def shannon_entropy(counts: np.ndarray) -> float:
    """H(X) = -sum p(x) log2 p(x) over non-zero counts."""
    total = counts.sum()
    if total <= 0:
        return 0.0
    p = counts[counts > 0] / total
    return float(-(p * np.log2(p)).sum())


def normalized_entropy(counts: np.ndarray) -> float:
    n = int(np.count_nonzero(counts))
    if n <= 1:
        return 0.0
    return shannon_entropy(counts) / float(np.log2(n))


def gini(counts: np.ndarray) -> float:
    """Gini coefficient of ``counts``; 0 when every key is equally common.

    G = (2 * sum(i * x_i)) / (n * sum(x_i)) - (n + 1) / n, x sorted ascending
    """
    n = counts.size
    if n <= 1:
        return 0.0
    total = counts.sum()
    if total == 0:
        return 0.0
    x = np.sort(counts).astype(float)
    index = np.arange(1, n + 1)
    g = (2.0 * float((index * x).sum())) / (n * float(total)) - (n + 1) / n
    return float(max(0.0, min(1.0, g)))


def summarize_counter(
    section: str,
    counter: Mapping[str, int],
    top: int = 10,
    rare_threshold: int = 1,
) -> SectionSummary:
    """Summarize one section. ``top`` keeps ranked order, ties by first insertion."""
    keys = list(counter.keys())
    counts = np.fromiter((counter[k] for k in keys), dtype=np.int64, count=len(keys))

    ranked = sorted(counter.items(), key=lambda kv: -kv[1])
    rare = [k for k in keys if counter[k] <= rare_threshold]

    return SectionSummary(
        section=section,
        distinct=len(keys),
        total=int(counts.sum()),
        singletons=int(np.count_nonzero(counts == 1)),
        entropy=round(shannon_entropy(counts), 4),
        normalized_entropy=round(normalized_entropy(counts), 4),
        gini=round(gini(counts), 4),
        top=ranked[:top],
        rare=rare,
    )


def summarize(
    store: CounterStore, top: int = 10, rare_threshold: int = 1
) -> dict[str, SectionSummary]:
    """Summaries for every section of ``store``, in section order."""
    return {
        name: summarize_counter(name, counter, top=top, rare_threshold=rare_threshold)
        for name, counter in store.items()
    }
