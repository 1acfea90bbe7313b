"""Base formatter interface for less-census report files."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Union

from ..scanning.counters import SECTIONS, CounterStore
from ..stats import SectionSummary

Ranked = list[tuple[str, int]]

SUMMARY_FILENAME = "summary.json"


class BaseFormatter(ABC):
    """Writes one file per counter section, ``<section>.<extension>``."""

    extension: str = ""

    @abstractmethod
    def format(self, ranked: Ranked) -> str:
        """Return the text of one section's ``(key, count)`` list."""

    def write(
        self,
        store: CounterStore,
        output_dir: Union[str, Path],
        summaries: Optional[dict[str, SectionSummary]] = None,
    ) -> list[Path]:
        """Write every section (and ``summary.json`` if given) into ``output_dir``.

        Returns:
            Paths written, in section order
        """
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        written = []
        for section in SECTIONS:
            path = out / f"{section}.{self.extension}"
            path.write_text(self.format(store.ranked(section)), encoding="utf-8")
            written.append(path)

        if summaries is not None:
            path = out / SUMMARY_FILENAME
            data = {name: summary.to_dict() for name, summary in summaries.items()}
            path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
            written.append(path)

        return written
