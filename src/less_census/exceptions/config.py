"""Configuration and path exceptions."""

from pathlib import Path
from typing import Any, Union

from .base import CensusError


class ConfigurationError(CensusError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason


class MissingPathError(ConfigurationError):
    """Raised for an input path that does not exist."""

    def __init__(self, path: Union[str, Path]):
        super().__init__(f"No such file or directory: {path}", details={"path": str(path)})
        self.path = str(path)
