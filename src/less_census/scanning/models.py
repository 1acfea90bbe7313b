"""Data models for the scanning layer."""

from dataclasses import dataclass, field

from .counters import CounterStore


@dataclass(frozen=True)
class ScanFailure:
    """A file that was skipped because it could not be read or parsed"""

    path: str
    reason: str


@dataclass
class CensusResult:
    """Aggregate outcome of one census run.

    ``counters`` is terminal: it is built only by merging worker snapshots
    and is never scanned into again.
    """

    counters: CounterStore
    files_dispatched: int
    files_parsed: int
    failures: list[ScanFailure] = field(default_factory=list)
    per_worker: dict[int, int] = field(default_factory=dict)
    missing: list[str] = field(default_factory=list)
    elapsed_seconds: float = 0.0

    @property
    def files_failed(self) -> int:
        return len(self.failures)

    @property
    def pool_size(self) -> int:
        return len(self.per_worker)
