"""Main census command."""

from pathlib import Path
from typing import List, Optional

import click
import typer
from rich.markup import escape

from ..exceptions import CensusError
from ..formatters import JsonFormatter, RichFormatter, get_formatter
from ..logging_config import setup_logging
from ..scanning.coordinator import Coordinator
from ..scanning.discovery import discover
from ..stats import summarize
from . import app
from ._common import console, err_console, flag_verbosity, resolve_config
from .progress import ScanProgress


@app.command()
def scan(
    paths: List[Path] = typer.Argument(
        ...,
        help="Stylesheets and/or directories to scan",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "-w",
        "--workers",
        help="Parallel workers (default: one per CPU)",
        min=1,
    ),
    backend: Optional[str] = typer.Option(
        None,
        "--backend",
        help="Worker execution units: process | thread",
        click_type=click.Choice(["process", "thread"], case_sensitive=False),
    ),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Write one report file per counter section into this directory",
        file_okay=False,
        dir_okay=True,
    ),
    report_format: Optional[str] = typer.Option(
        None,
        "--format",
        help="Report file format: json | csv | txt",
        click_type=click.Choice(["json", "csv", "txt"], case_sensitive=False),
    ),
    top: Optional[int] = typer.Option(
        None,
        "--top",
        help="Keys per section shown in the summary",
        min=0,
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the whole census as JSON on stdout",
    ),
    statements: bool = typer.Option(
        False,
        "--statements",
        help="Also count top-level variable definitions, imports and directives",
    ),
    recursive: bool = typer.Option(
        False,
        "-r",
        "--recursive",
        help="Descend into subdirectories",
    ),
    ext: Optional[List[str]] = typer.Option(
        None,
        "--ext",
        help="Only scan directory entries with this extension (repeatable, e.g. --ext less)",
    ),
    no_progress: bool = typer.Option(
        False,
        "--no-progress",
        help="Disable the progress bar",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "-c",
        "--config",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors and skip the console summary",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Append log records, tagged with the worker that wrote them, to this file",
        dir_okay=False,
    ),
):
    """
    Scan stylesheets and report how often each language feature is used.

    Files are scanned directly; directories are listed one level deep unless
    --recursive is given. Missing paths and files that fail to parse are
    skipped with a warning.

    [bold cyan]Examples:[/bold cyan]

      less-census scan styles/

      less-census scan -r --ext less src/ -o report/

      less-census scan theme.less --json
    """
    logger = setup_logging(flag_verbosity(verbose, quiet))

    try:
        cfg = resolve_config(
            config=config,
            workers=workers,
            backend=backend.lower() if backend else None,
            output=output,
            report_format=report_format.lower() if report_format else None,
            top=top,
            statements=statements,
            recursive=recursive,
            extensions=ext,
            verbose=verbose,
            quiet=quiet,
            log_file=log_file,
        )
        logger = setup_logging(cfg.verbosity, cfg.log_file)
        silent = cfg.verbosity == "quiet"

        found = discover(
            paths,
            extensions=cfg.extensions,
            recursive=cfg.recursive,
            max_file_size_bytes=cfg.max_file_size_bytes,
        )
        if not found.files:
            logger.warning("No stylesheets found")

        show_progress = not (no_progress or json_output or silent)
        with ScanProgress(len(found.files), console=err_console, enabled=show_progress) as progress:
            coordinator = Coordinator(cfg, on_progress=progress.advance)
            result = coordinator.run(found.files)
        result.missing = found.missing_paths

        summaries = summarize(result.counters, top=cfg.top, rare_threshold=cfg.rare_threshold)

        if cfg.output_dir:
            written = get_formatter(cfg.report_format).write(
                result.counters, cfg.output_dir, summaries
            )
            logger.info(f"Wrote {len(written)} report files to {cfg.output_dir}")

        if json_output:
            print(JsonFormatter().format_result(result, summaries))
        elif not silent:
            RichFormatter(console).render(result, summaries, top=cfg.top)
            if cfg.output_dir:
                console.print(f"[dim]Reports written to {escape(cfg.output_dir)}[/dim]")

    except typer.Exit:
        raise

    except CensusError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Census interrupted by user")
        err_console.print("\n[yellow]Census interrupted[/yellow]")
        raise typer.Exit(130)

    except Exception as e:
        logger.exception("Unexpected error during census")
        err_console.print(f"[red]Unexpected error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
