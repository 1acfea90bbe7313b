"""CSV formatter for less-census."""

import csv
import io

from .base import BaseFormatter, Ranked


class CsvFormatter(BaseFormatter):
    """Render a section as ``key,count`` rows under a header."""

    extension = "csv"

    def format(self, ranked: Ranked) -> str:
        output = io.StringIO()
        writer = csv.writer(output, lineterminator="\n")
        writer.writerow(["key", "count"])
        for key, count in ranked:
            writer.writerow([key, count])
        return output.getvalue()
