"""Debug command: print the syntax tree of one stylesheet."""

import dataclasses
from enum import Enum
from pathlib import Path

import typer
from rich.markup import escape
from rich.tree import Tree

from ..exceptions import CensusError
from ..logging_config import setup_logging
from ..syntax.nodes import Node
from ..syntax.parser import LessParser
from ..scanning.worker import read_source
from . import app
from ._common import console


def _label(node: Node) -> str:
    parts = []
    for f in dataclasses.fields(node):
        value = getattr(node, f.name)
        if isinstance(value, (Node, list)) or value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        if value == "" or value is False:
            continue
        parts.append(f"{f.name}={value!r}")
    attrs = f" [dim]{escape(' '.join(parts))}[/dim]" if parts else ""
    return f"[cyan]{node.kind.value}[/cyan]{attrs}"


def build_tree(node: Node, branch: Tree) -> Tree:
    """Add ``node`` and its children under ``branch``; returns the new branch."""
    child = branch.add(_label(node))
    for f in dataclasses.fields(node):
        value = getattr(node, f.name)
        if isinstance(value, Node):
            build_tree(value, child)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, Node):
                    build_tree(item, child)
                elif item is None:
                    child.add("[dim]<hole>[/dim]")
    return child


@app.command()
def tree(
    file: Path = typer.Argument(
        ...,
        help="Stylesheet to parse",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    max_depth: int = typer.Option(64, "--max-depth", help="Maximum nesting depth", min=1),
    encoding: str = typer.Option("utf-8", "--encoding", help="Source encoding"),
):
    """
    Parse one file and print its syntax tree.

    [bold cyan]Example:[/bold cyan]

      less-census tree styles/theme.less
    """
    logger = setup_logging()

    try:
        stylesheet = LessParser(max_depth=max_depth).parse(read_source(file, encoding), path=file)
    except CensusError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    root = Tree(f"[bold]{escape(str(file))}[/bold]")
    build_tree(stylesheet, root)
    console.print(root)
