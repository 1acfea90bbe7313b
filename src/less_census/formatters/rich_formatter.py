"""Rich terminal summary of a census run."""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..scanning.models import CensusResult
from ..stats import SectionSummary


def _gini_label(g: float) -> str:
    if g >= 0.7:
        return f"[red]{g:.2f}[/red]"
    elif g >= 0.4:
        return f"[yellow]{g:.2f}[/yellow]"
    else:
        return f"[green]{g:.2f}[/green]"


class RichFormatter:
    """Run overview, a per-section statistics table and the top keys of each section."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(
        self,
        result: CensusResult,
        summaries: dict[str, SectionSummary],
        top: int = 10,
    ) -> None:
        self._print_overview(result)
        self._print_sections(summaries)
        if top > 0:
            self._print_top(summaries, top)
        self._print_failures(result)

    def _print_overview(self, result: CensusResult) -> None:
        table = Table(show_header=False, box=None, padding=(0, 2))
        table.add_column(style="dim")
        table.add_column(style="bold")

        table.add_row("Files", str(result.files_dispatched))
        table.add_row("Parsed", f"[green]{result.files_parsed}[/]")
        failed = result.files_failed
        table.add_row("Skipped", f"[{'yellow' if failed else 'green'}]{failed}[/]")
        if result.missing:
            table.add_row("Missing paths", f"[yellow]{len(result.missing)}[/]")
        table.add_row("Workers", str(result.pool_size))
        table.add_row("Elapsed", f"{result.elapsed_seconds:.2f}s")

        self.console.print(Panel(table, title="[bold cyan]LESS CENSUS[/bold cyan]", expand=False))

    def _print_sections(self, summaries: dict[str, SectionSummary]) -> None:
        table = Table(title="Sections", title_justify="left")
        table.add_column("Section", style="bold")
        table.add_column("Distinct", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Singletons", justify="right")
        table.add_column("Entropy", justify="right")
        table.add_column("Norm.", justify="right")
        table.add_column("Gini", justify="right")

        for name, s in summaries.items():
            if s.distinct == 0:
                table.add_row(name, "0", "0", "0", "-", "-", "-", style="dim")
                continue
            table.add_row(
                name,
                str(s.distinct),
                str(s.total),
                str(s.singletons),
                f"{s.entropy:.2f}",
                f"{s.normalized_entropy:.2f}",
                _gini_label(s.gini),
            )
        self.console.print(table)

    def _print_top(self, summaries: dict[str, SectionSummary], top: int) -> None:
        for name, s in summaries.items():
            if not s.top:
                continue
            table = Table(title=f"{name} (top {min(top, len(s.top))})", title_justify="left")
            table.add_column("Key", overflow="fold")
            table.add_column("Count", justify="right")
            table.add_column("Share", justify="right", style="dim")
            for key, count in s.top[:top]:
                share = count / s.total if s.total else 0.0
                table.add_row(escape(key), str(count), f"{share:.1%}")
            self.console.print(table)

    def _print_failures(self, result: CensusResult) -> None:
        if not result.failures:
            return
        self.console.print()
        self.console.print(f"[yellow]Skipped {result.files_failed} file(s):[/yellow]")
        for failure in result.failures:
            self.console.print(f"  [dim]{escape(failure.path)}[/dim]: {escape(failure.reason)}", highlight=False)
