"""Messages exchanged between the coordinator and its workers.

Coordinator -> worker, through the worker's own inbox:

    ScanTask       classify one file; the worker answers with a ScanNotice
    ReportRequest  answer with a WorkerReport holding a frozen snapshot
    ExitRequest    leave the loop; no reply

Worker -> coordinator, through the shared outbox:

    ScanNotice     one per ScanTask, carrying the failure reason if any
    WorkerReport   one per ReportRequest
    WorkerFailure  the worker loop itself broke; fatal to the run

All messages are plain picklable dataclasses so the same protocol runs over
``queue.Queue`` (threads) and ``multiprocessing`` queues (processes).
"""

from dataclasses import dataclass
from typing import Optional

from .counters import CounterStore


@dataclass(frozen=True)
class ScanTask:
    index: int
    path: str


@dataclass(frozen=True)
class ReportRequest:
    pass


@dataclass(frozen=True)
class ExitRequest:
    pass


@dataclass(frozen=True)
class ScanNotice:
    """Progress notice for one task. ``error`` is None when the file was classified."""

    worker_id: int
    path: str
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class WorkerReport:
    worker_id: int
    counters: CounterStore
    files_scanned: int


@dataclass(frozen=True)
class WorkerFailure:
    worker_id: int
    reason: str
