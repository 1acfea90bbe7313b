"""Coordinator: runs a fixed pool of workers over a list of files.

Lifecycle of one run:

1. Start ``pool_size`` workers, each with its own inbox and a shared outbox.
2. Send task ``i`` to worker ``i % pool_size`` without waiting for replies.
3. Send every worker a report request.
4. Read the outbox until every worker has reported, forwarding scan notices
   to the progress callback. While waiting, workers that died without
   reporting abort the run.
5. Merge the snapshots, then tell every worker to exit and join it.

Per-file failures come back inside scan notices and never stop the run.
A worker that crashes or answers with a WorkerFailure raises
``WorkerTransportError``; no partial aggregate is returned.
"""

import multiprocessing
import os
import queue
import threading
import time
from pathlib import Path
from typing import Callable, Optional, Sequence, Union

from ..config import CensusConfig
from ..exceptions import WorkerTransportError
from ..logging_config import WORKER_NAME_PREFIX, get_logger
from .counters import CounterStore, merge
from .models import CensusResult, ScanFailure
from .protocol import (
    ExitRequest,
    ReportRequest,
    ScanNotice,
    ScanTask,
    WorkerFailure,
    WorkerReport,
)
from .worker import run_worker

logger = get_logger(__name__)

ProgressCallback = Callable[[ScanNotice], None]


class _Unit:
    """A worker's execution unit (thread or process) and its inbox."""

    def __init__(self, worker_id: int, handle, inbox) -> None:
        self.worker_id = worker_id
        self.handle = handle
        self.inbox = inbox

    def is_alive(self) -> bool:
        return self.handle.is_alive()

    @property
    def exitcode(self) -> Optional[int]:
        return getattr(self.handle, "exitcode", None)

    def join(self, timeout: Optional[float]) -> None:
        self.handle.join(timeout)

    def terminate(self) -> None:
        if hasattr(self.handle, "terminate"):
            self.handle.terminate()
            self.handle.join(1.0)


class Coordinator:
    """Distributes scan tasks round-robin over a worker pool and merges results.

    Args:
        config: Census configuration (pool size, backend, parser limits)
        on_progress: Called in the coordinator's thread with every scan notice

    Example:
        >>> result = Coordinator(CensusConfig(workers=4)).run(paths)
        >>> result.counters.ranked("properties")[:3]
    """

    def __init__(
        self,
        config: Optional[CensusConfig] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        self.config = config or CensusConfig()
        self.on_progress = on_progress

    def pool_size_for(self, task_count: int) -> int:
        """Pool size for a run; never more workers than tasks, never fewer than one."""
        return max(1, min(self.config.pool_size, task_count))

    def run(self, paths: Sequence[Union[str, Path]]) -> CensusResult:
        """Scan every path and return the merged counts.

        Raises:
            WorkerTransportError: If any worker fails outside per-file scanning
        """
        tasks = [ScanTask(index, str(path)) for index, path in enumerate(paths)]
        pool_size = self.pool_size_for(len(tasks))
        started = time.monotonic()

        logger.info(
            f"Scanning {len(tasks)} files with {pool_size} {self.config.backend} worker(s)"
        )

        outbox, units = self._start(pool_size)
        try:
            self._dispatch(tasks, units)
            reports, failures, per_worker = self._collect(outbox, units)
        finally:
            self._shutdown(units)

        aggregate = CounterStore()
        for report in sorted(reports, key=lambda r: r.worker_id):
            merge(aggregate, report.counters)

        result = CensusResult(
            counters=aggregate,
            files_dispatched=len(tasks),
            files_parsed=sum(r.files_scanned for r in reports),
            failures=failures,
            per_worker=per_worker,
            elapsed_seconds=time.monotonic() - started,
        )
        logger.info(
            f"Census complete: {result.files_parsed} parsed, "
            f"{result.files_failed} skipped in {result.elapsed_seconds:.2f}s"
        )
        return result

    # ------------------------------------------------------------------
    # Pool lifecycle
    # ------------------------------------------------------------------

    def _start(self, pool_size: int):
        if self.config.backend == "thread":
            outbox = queue.Queue()
            units = []
            for worker_id in range(pool_size):
                inbox = queue.Queue()
                handle = threading.Thread(
                    target=run_worker,
                    args=(worker_id, inbox, outbox, self.config),
                    name=f"{WORKER_NAME_PREFIX}{worker_id}",
                    daemon=True,
                )
                units.append(_Unit(worker_id, handle, inbox))
        else:
            ctx = multiprocessing.get_context(self.config.start_method)
            outbox = ctx.Queue()
            units = []
            for worker_id in range(pool_size):
                inbox = ctx.Queue()
                handle = ctx.Process(
                    target=run_worker,
                    args=(worker_id, inbox, outbox, self.config),
                    name=f"{WORKER_NAME_PREFIX}{worker_id}",
                    daemon=True,
                )
                units.append(_Unit(worker_id, handle, inbox))

        for unit in units:
            unit.handle.start()
        logger.debug(f"Started {pool_size} workers (pid {os.getpid()})")
        return outbox, units

    def _dispatch(self, tasks: list[ScanTask], units: list[_Unit]) -> None:
        pool_size = len(units)
        for task in tasks:
            units[task.index % pool_size].inbox.put(task)
        for unit in units:
            unit.inbox.put(ReportRequest())

    def _collect(self, outbox, units: list[_Unit]):
        reports: dict[int, WorkerReport] = {}
        failures: list[ScanFailure] = []
        per_worker = {unit.worker_id: 0 for unit in units}

        while len(reports) < len(units):
            try:
                message = outbox.get(timeout=self.config.poll_interval_seconds)
            except queue.Empty:
                self._check_alive(units, reports)
                continue

            if isinstance(message, ScanNotice):
                per_worker[message.worker_id] += 1
                if not message.ok:
                    logger.warning(f"Skipping {message.path}: {message.error}")
                    failures.append(ScanFailure(message.path, message.error))
                if self.on_progress is not None:
                    self.on_progress(message)
            elif isinstance(message, WorkerReport):
                logger.debug(
                    f"Worker {message.worker_id} reported {message.files_scanned} files"
                )
                reports[message.worker_id] = message
            elif isinstance(message, WorkerFailure):
                raise WorkerTransportError(message.worker_id, message.reason)
            else:
                raise WorkerTransportError(-1, f"unexpected reply: {message!r}")

        return list(reports.values()), failures, per_worker

    def _check_alive(self, units: list[_Unit], reports: dict) -> None:
        for unit in units:
            if unit.worker_id in reports or unit.is_alive():
                continue
            raise WorkerTransportError(
                unit.worker_id, "worker exited before reporting", exitcode=unit.exitcode
            )

    def _shutdown(self, units: list[_Unit]) -> None:
        for unit in units:
            if unit.is_alive():
                unit.inbox.put(ExitRequest())

        deadline = time.monotonic() + self.config.join_timeout_seconds
        for unit in units:
            unit.join(max(0.0, deadline - time.monotonic()))

        for unit in units:
            if unit.is_alive():
                logger.warning(f"Worker {unit.worker_id} did not exit, terminating")
                unit.terminate()


def run_census(
    paths: Sequence[Union[str, Path]],
    config: Optional[CensusConfig] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> CensusResult:
    """Convenience wrapper: ``Coordinator(config, on_progress).run(paths)``."""
    return Coordinator(config, on_progress).run(paths)
