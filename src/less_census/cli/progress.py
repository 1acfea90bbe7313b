"""Progress display for the scan command, driven by worker scan notices."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from ..scanning.protocol import ScanNotice


class ScanProgress:
    """A single progress bar advanced once per scanned file.

    Used as a context manager; when ``enabled`` is False every call is a no-op
    so callers need not branch.
    """

    def __init__(self, total: int, console: Console | None = None, enabled: bool = True):
        self.total = total
        self.console = console or Console(stderr=True)
        self.enabled = enabled and total > 0
        self.failed = 0
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None

    def __enter__(self) -> "ScanProgress":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()

    def start(self) -> None:
        if not self.enabled:
            return
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold]{task.description}"),
            BarColumn(bar_width=40, complete_style="cyan", finished_style="green"),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=self.console,
            transient=True,
        )
        self._progress.start()
        self._task_id = self._progress.add_task("Scanning", total=self.total)

    def advance(self, notice: ScanNotice) -> None:
        """Progress callback for ``Coordinator``."""
        if not notice.ok:
            self.failed += 1
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(self._task_id, advance=1, description=self.describe(notice))

    def describe(self, notice: ScanNotice) -> str:
        """Bar label: the current file name, plus the skip count once nonzero."""
        name = notice.path.rsplit("/", 1)[-1]
        if len(name) > 40:
            name = name[:37] + "..."
        label = f"Scanning [dim]{escape(name)}[/dim]"
        if self.failed:
            label += f" [yellow]({self.failed} skipped)[/yellow]"
        return label

    def stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
            self._progress = None
