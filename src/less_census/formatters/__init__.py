"""Output formatters for less-census."""

from .base import SUMMARY_FILENAME, BaseFormatter
from .csv_formatter import CsvFormatter
from .json_formatter import JsonFormatter
from .rich_formatter import RichFormatter
from .txt_formatter import TxtFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a report file formatter by name.

    Args:
        name: One of "json", "csv", "txt"

    Returns:
        Formatter instance

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "json": JsonFormatter,
        "csv": CsvFormatter,
        "txt": TxtFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "JsonFormatter",
    "CsvFormatter",
    "TxtFormatter",
    "RichFormatter",
    "SUMMARY_FILENAME",
    "get_formatter",
]
