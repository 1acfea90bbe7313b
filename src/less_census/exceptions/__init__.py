"""Exception hierarchy for less-census."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    NestingDepthError,
    ParseError,
)
from .base import CensusError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    MissingPathError,
)
from .workers import FrozenStoreError, WorkerError, WorkerTransportError

__all__ = [
    "CensusError",
    "AnalysisError",
    "FileAccessError",
    "ParseError",
    "NestingDepthError",
    "ConfigurationError",
    "InvalidConfigError",
    "MissingPathError",
    "WorkerError",
    "WorkerTransportError",
    "FrozenStoreError",
]
