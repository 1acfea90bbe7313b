"""JSON formatter for less-census."""

import json
from typing import Optional

from ..scanning.models import CensusResult
from ..stats import SectionSummary
from .base import BaseFormatter, Ranked


class JsonFormatter(BaseFormatter):
    """Render a section as a JSON list of ``[key, count]`` pairs."""

    extension = "json"

    def format(self, ranked: Ranked) -> str:
        return json.dumps([[key, count] for key, count in ranked], indent=2) + "\n"

    def format_result(
        self,
        result: CensusResult,
        summaries: Optional[dict[str, SectionSummary]] = None,
    ) -> str:
        """Whole run as one JSON document, for ``--json`` on stdout."""
        data = {
            "files_dispatched": result.files_dispatched,
            "files_parsed": result.files_parsed,
            "failures": [{"path": f.path, "reason": f.reason} for f in result.failures],
            "missing": list(result.missing),
            "per_worker": {str(k): v for k, v in sorted(result.per_worker.items())},
            "counters": {
                section: [[key, count] for key, count in result.counters.ranked(section)]
                for section in result.counters
            },
        }
        if summaries is not None:
            data["summary"] = {name: s.to_dict() for name, s in summaries.items()}
        return json.dumps(data, indent=2)
