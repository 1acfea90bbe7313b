"""Plain text formatter: one ``count<TAB>key`` line per key."""

from .base import BaseFormatter, Ranked


class TxtFormatter(BaseFormatter):
    extension = "txt"

    def format(self, ranked: Ranked) -> str:
        return "".join(f"{count}\t{key}\n" for key, count in ranked)
