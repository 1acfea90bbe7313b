"""Turn command-line path arguments into the list of files to scan.

Files named explicitly are always scanned. Directories contribute their
regular files, filtered by extension, either one level deep or recursively.
Paths that do not exist are recorded and skipped, never fatal.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

from ..exceptions import MissingPathError
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Discovery:
    """Files to scan plus everything that was left out and why"""

    files: list[Path] = field(default_factory=list)
    missing: list[MissingPathError] = field(default_factory=list)
    oversized: list[Path] = field(default_factory=list)

    @property
    def missing_paths(self) -> list[str]:
        return [e.path for e in self.missing]


def discover(
    paths: Sequence[Union[str, Path]],
    extensions: Iterable[str] = (),
    recursive: bool = False,
    max_file_size_bytes: Optional[int] = None,
) -> Discovery:
    """Enumerate input paths.

    Args:
        paths: Files and directories, in command-line order
        extensions: Suffixes kept when listing directories (empty keeps all)
        recursive: Descend into subdirectories
        max_file_size_bytes: Directory entries larger than this are skipped

    Returns:
        Discovery with files in argument order, directory entries sorted by
        name, duplicates removed
    """
    ext_set = {ext.lower() for ext in extensions}
    result = Discovery()
    seen: set[Path] = set()

    for raw in paths:
        path = Path(raw)

        if path.is_file():
            candidates: Iterable[Path] = [path]
        elif path.is_dir():
            candidates = _directory_files(path, ext_set, recursive)
        else:
            error = MissingPathError(path)
            logger.warning(f"Skipping {path}: no such file or directory")
            result.missing.append(error)
            continue

        for filepath in candidates:
            key = filepath.resolve()
            if key in seen:
                continue
            seen.add(key)

            if max_file_size_bytes is not None and filepath != path:
                try:
                    size = filepath.stat().st_size
                except OSError as e:
                    logger.warning(f"Cannot stat {filepath}: {e}")
                    continue
                if size > max_file_size_bytes:
                    logger.warning(f"Skipping {filepath}: {size} bytes exceeds size limit")
                    result.oversized.append(filepath)
                    continue

            result.files.append(filepath)

    logger.debug(
        f"Discovered {len(result.files)} files, {len(result.missing)} missing paths, "
        f"{len(result.oversized)} oversized"
    )
    return result


def _directory_files(root: Path, ext_set: set[str], recursive: bool) -> Iterator[Path]:
    entries = root.rglob("*") if recursive else root.iterdir()
    for entry in sorted(entries):
        if not entry.is_file():
            continue
        if ext_set and entry.suffix.lower() not in ext_set:
            continue
        yield entry
