"""Worker pool and counter store exceptions."""

from typing import Optional

from .base import CensusError


class WorkerError(CensusError):
    """Base class for worker pool errors."""

    pass


class WorkerTransportError(WorkerError):
    """Raised when a worker's execution channel fails. Fatal to the whole run."""

    def __init__(self, worker_id: int, reason: str, exitcode: Optional[int] = None):
        details = {"worker": str(worker_id), "reason": reason}
        if exitcode is not None:
            details["exitcode"] = str(exitcode)

        super().__init__(f"Worker {worker_id} failed", details=details)
        self.worker_id = worker_id
        self.reason = reason
        self.exitcode = exitcode


class FrozenStoreError(CensusError):
    """Raised when a reported counter snapshot is mutated."""

    def __init__(self, section: str):
        super().__init__(
            "Counter store is frozen", details={"section": section}
        )
        self.section = section
