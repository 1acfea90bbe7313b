"""Per-file errors: unreadable files and sources that do not parse."""

from pathlib import Path
from typing import Dict, Optional, Union

from .base import CensusError


class AnalysisError(CensusError):
    """Base class for errors confined to a single file."""

    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Union[str, Path], reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = str(filepath)
        self.reason = reason


class ParseError(AnalysisError):
    """Raised when stylesheet source does not conform to the LESS grammar."""

    def __init__(
        self,
        reason: str,
        filepath: Optional[Union[str, Path]] = None,
        line: Optional[int] = None,
    ):
        details: Dict[str, str] = {"reason": reason}
        if filepath is not None:
            details["filepath"] = str(filepath)
        if line is not None:
            details["line"] = str(line)

        where = f" {filepath}" if filepath is not None else ""
        super().__init__(f"Failed to parse{where}", details=details)
        self.reason = reason
        self.filepath = str(filepath) if filepath is not None else None
        self.line = line

    def with_path(self, filepath: Union[str, Path]) -> "ParseError":
        """Return a copy of this error attributed to ``filepath``."""
        return ParseError(self.reason, filepath=filepath, line=self.line)


class NestingDepthError(ParseError):
    """Raised when blocks or parentheses nest deeper than the configured limit."""

    def __init__(
        self,
        limit: int,
        line: Optional[int] = None,
        filepath: Optional[Union[str, Path]] = None,
    ):
        super().__init__(f"nesting deeper than {limit} levels", filepath=filepath, line=line)
        self.limit = limit

    def with_path(self, filepath: Union[str, Path]) -> "NestingDepthError":
        return NestingDepthError(self.limit, line=self.line, filepath=filepath)
