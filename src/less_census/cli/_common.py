"""Shared CLI helpers."""

from pathlib import Path
from typing import List, Optional

from rich.console import Console

from ..config import CensusConfig, load_config

console = Console()
err_console = Console(stderr=True)


def normalize_extensions(extensions: Optional[List[str]]) -> Optional[List[str]]:
    """Accept ``less``, ``.less`` or ``*.less``; return ``['.less']``-style suffixes."""
    if not extensions:
        return None
    result = []
    for ext in extensions:
        for part in ext.split(","):
            part = part.strip().lstrip("*")
            if not part:
                continue
            result.append(part if part.startswith(".") else f".{part}")
    return result or None


def resolve_config(
    config: Optional[Path] = None,
    workers: Optional[int] = None,
    backend: Optional[str] = None,
    output: Optional[Path] = None,
    report_format: Optional[str] = None,
    top: Optional[int] = None,
    statements: bool = False,
    recursive: bool = False,
    extensions: Optional[List[str]] = None,
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> CensusConfig:
    """Build configuration from CLI options.

    Flags that were not given stay out of the overrides so config files and
    environment variables still apply.
    """
    overrides = {
        "workers": workers,
        "backend": backend,
        "output_dir": str(output) if output is not None else None,
        "report_format": report_format,
        "top": top,
        "extensions": normalize_extensions(extensions),
        "verbose": verbose,
        "quiet": quiet,
        "log_file": str(log_file) if log_file is not None else None,
    }
    if statements:
        overrides["scan_statements"] = True
    if recursive:
        overrides["recursive"] = True
    return load_config(config_file=config, **overrides)


def flag_verbosity(verbose: bool, quiet: bool) -> str:
    """Verbosity named by ``--verbose``/``--quiet``; ``--quiet`` wins."""
    if quiet:
        return "quiet"
    if verbose:
        return "verbose"
    return "normal"
