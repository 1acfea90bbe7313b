"""Worker: one execution unit owning one classifier.

``run_worker`` is the loop run inside a thread or a child process. It handles
requests strictly in arrival order; per-file read and parse problems are
answered in the scan notice and never stop the loop.
"""

import traceback
from pathlib import Path
from typing import Optional, Union

from ..config import CensusConfig
from ..exceptions import AnalysisError, FileAccessError
from ..logging_config import get_logger
from ..syntax.parser import LessParser
from .classifier import Classifier
from .protocol import (
    ExitRequest,
    ReportRequest,
    ScanNotice,
    ScanTask,
    WorkerFailure,
    WorkerReport,
)

logger = get_logger(__name__)


def read_source(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Read a stylesheet.

    Raises:
        FileAccessError: If the file is missing, unreadable or not decodable
    """
    try:
        with open(path, encoding=encoding) as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise FileAccessError(path, f"Cannot decode as {encoding}: {e.reason}")
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e))


class Worker:
    """Scans files into a private counter store and reports it on request."""

    def __init__(self, worker_id: int, config: Optional[CensusConfig] = None):
        config = config or CensusConfig()
        self.worker_id = worker_id
        self.encoding = config.encoding
        self.parser = LessParser(max_depth=config.max_depth)
        self.classifier = Classifier(scan_statements=config.scan_statements)

    def scan(self, path: str) -> ScanNotice:
        """Parse and classify one file. Read and parse failures skip the file."""
        try:
            source = read_source(path, self.encoding)
            tree = self.parser.parse(source, path=path)
        except AnalysisError as e:
            logger.debug(f"Worker {self.worker_id} skipped {path}: {e}")
            return ScanNotice(self.worker_id, path, error=str(e))

        self.classifier.scan(tree)
        logger.debug(f"Worker {self.worker_id} scanned {path}")
        return ScanNotice(self.worker_id, path)

    def report(self) -> WorkerReport:
        return WorkerReport(
            self.worker_id, self.classifier.snapshot(), self.classifier.files_scanned
        )


def run_worker(worker_id: int, inbox, outbox, config: Optional[CensusConfig] = None) -> None:
    """Serve requests from ``inbox`` until an ExitRequest arrives.

    Any unexpected exception is sent to ``outbox`` as a WorkerFailure and ends
    the loop; the coordinator treats it as fatal.
    """
    try:
        worker = Worker(worker_id, config)
        while True:
            message = inbox.get()
            if isinstance(message, ScanTask):
                outbox.put(worker.scan(message.path))
            elif isinstance(message, ReportRequest):
                outbox.put(worker.report())
            elif isinstance(message, ExitRequest):
                return
            else:
                raise TypeError(f"unexpected message: {message!r}")
    except Exception:
        outbox.put(WorkerFailure(worker_id, traceback.format_exc()))
