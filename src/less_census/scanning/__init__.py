"""Classification of parsed stylesheets and the parallel scan-and-merge pool."""

from .classifier import Classifier
from .coordinator import Coordinator, run_census
from .counters import SECTIONS, CounterStore, merge, merge_all
from .discovery import Discovery, discover
from .models import CensusResult, ScanFailure
from .protocol import (
    ExitRequest,
    ReportRequest,
    ScanNotice,
    ScanTask,
    WorkerFailure,
    WorkerReport,
)
from .worker import Worker, read_source, run_worker

__all__ = [
    "Classifier",
    "Coordinator",
    "run_census",
    "SECTIONS",
    "CounterStore",
    "merge",
    "merge_all",
    "Discovery",
    "discover",
    "CensusResult",
    "ScanFailure",
    "ScanTask",
    "ReportRequest",
    "ExitRequest",
    "ScanNotice",
    "WorkerReport",
    "WorkerFailure",
    "Worker",
    "read_source",
    "run_worker",
]
