"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="less-census",
    help="less-census - usage statistics for LESS stylesheet corpora",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold cyan]less-census[/bold cyan] version [green]{__version__}[/green]")
        raise typer.Exit(0)


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Count how often every LESS language feature is used across a set of stylesheets."""


# Import subcommands to register them
from .scan import scan as _scan  # noqa: F401, E402
from .tree import tree as _tree  # noqa: F401, E402


def main() -> None:
    app()
