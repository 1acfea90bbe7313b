"""Configuration loading and management for less-census.

Configuration sources are merged in priority order:
    1. Defaults (defined in CensusConfig)
    2. Global config (~/.less-census.toml)
    3. Project config (./less-census.toml)
    4. Explicit config file
    5. Environment variables (LESS_CENSUS_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(workers=4, backend="thread")
    >>> config.pool_size
    4
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError

Backend = Literal["process", "thread"]
ReportFormat = Literal["json", "csv", "txt"]
Verbosity = Literal["quiet", "normal", "verbose"]

ENV_PREFIX = "LESS_CENSUS_"
CONFIG_FILENAME = "less-census.toml"

_BACKENDS = ("process", "thread")
_REPORT_FORMATS = ("json", "csv", "txt")
_START_METHODS = ("fork", "spawn", "forkserver")
_VERBOSITIES = ("quiet", "normal", "verbose")


@dataclass(frozen=True)
class CensusConfig:
    """Configuration for a census run.

    Attributes:
        Worker pool:
            workers: Pool size (None = one per CPU)
            backend: Execution units, "process" or "thread"
            start_method: multiprocessing start method (None = platform default)
            poll_interval_seconds: How often the coordinator checks worker liveness
            join_timeout_seconds: Grace period for workers to exit before termination

        Input discovery:
            extensions: Suffixes to keep when enumerating directories (empty = all)
            recursive: Descend into subdirectories
            max_file_size_mb: Larger files are skipped with a warning
            encoding: Source file encoding

        Scanning:
            max_depth: Maximum block/parenthesis nesting accepted by the parser
            scan_statements: Also classify top-level definitions, imports and directives

        Output:
            output_dir: Directory for per-section report files (None = no files)
            report_format: Report file format
            top: Keys per section shown in the console summary
            rare_threshold: Keys used at most this often are reported as rare
            verbosity: Logging level and console output: quiet | normal | verbose
            log_file: Also append log records to this file
    """

    # Worker pool
    workers: Optional[int] = None
    backend: Backend = "process"
    start_method: Optional[str] = None
    poll_interval_seconds: float = 0.2
    join_timeout_seconds: float = 5.0

    # Input discovery
    extensions: list[str] = field(default_factory=list)
    recursive: bool = False
    max_file_size_mb: float = 10.0
    encoding: str = "utf-8"

    # Scanning
    max_depth: int = 64
    scan_statements: bool = False

    # Output
    output_dir: Optional[str] = None
    report_format: ReportFormat = "json"
    top: int = 10
    rare_threshold: int = 1
    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if self.workers is not None and self.workers < 1:
            raise ValueError("workers must be at least 1")
        if self.backend not in _BACKENDS:
            raise ValueError(f"backend must be one of {', '.join(_BACKENDS)}")
        if self.start_method is not None and self.start_method not in _START_METHODS:
            raise ValueError(f"start_method must be one of {', '.join(_START_METHODS)}")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be positive")
        if self.join_timeout_seconds < 0:
            raise ValueError("join_timeout_seconds must be non-negative")

        if self.max_file_size_mb <= 0:
            raise ValueError("max_file_size_mb must be positive")
        for ext in self.extensions:
            if not ext.startswith("."):
                raise ValueError(f"extension '{ext}' must start with '.'")

        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")

        if self.report_format not in _REPORT_FORMATS:
            raise ValueError(f"report_format must be one of {', '.join(_REPORT_FORMATS)}")
        if self.top < 0:
            raise ValueError("top must be non-negative")
        if self.rare_threshold < 0:
            raise ValueError("rare_threshold must be non-negative")
        if self.verbosity not in _VERBOSITIES:
            raise ValueError(f"verbosity must be one of {', '.join(_VERBOSITIES)}")

    @property
    def pool_size(self) -> int:
        """Number of workers to start."""
        return self.workers or os.cpu_count() or 1

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


def load_config(config_file: Optional[Path] = None, **overrides) -> CensusConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask file values.

    Returns:
        Validated CensusConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing, or a
            value fails validation
    """
    merged: dict = {}

    global_config = Path.home() / f".{CONFIG_FILENAME}"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / CONFIG_FILENAME
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    # Convert verbosity boolean flags to string
    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CensusConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")
    except ValueError as e:
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from LESS_CENSUS_* environment variables.

    Every scalar field of CensusConfig can be set, e.g. LESS_CENSUS_WORKERS=4
    or LESS_CENSUS_BACKEND=thread. ``extensions`` takes a comma-separated list.
    """
    type_hints = get_type_hints(CensusConfig)

    result: dict[str, Any] = {}

    for field_name in CensusConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise InvalidConfigError(env_key, env_value, str(e))

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the correct type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if origin is list:
        return [part.strip() for part in value.split(",") if part.strip()]

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    # String (including Literal types like Backend)
    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    A ``[census]`` table is accepted as well as top-level keys.
    """
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        try:
            # Fallback to tomli for Python 3.9-3.10
            import tomli as tomllib  # type: ignore
        except ImportError:
            raise ConfigurationError(
                "TOML support requires Python 3.11+ or 'tomli' package. "
                "Install with: pip install tomli"
            )

    with open(path, "rb") as f:
        data = tomllib.load(f)

    section = data.pop("census", None)
    if isinstance(section, dict):
        data.update(section)
    return data
