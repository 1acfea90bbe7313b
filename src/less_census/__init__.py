"""
less-census - frequency statistics for LESS stylesheet corpora

Parses every stylesheet in a corpus, buckets each syntax node into named
counters (properties, functions, colors, dimensions, variables, selector
elements, node kinds...) across a pool of parallel workers, and merges the
per-worker counts into one report.
"""

__version__ = "0.3.0"

from .config import CensusConfig, load_config
from .scanning import CensusResult, Classifier, Coordinator, CounterStore, run_census
from .syntax import LessParser

__all__ = [
    "run_census",  # Main entry point
    "Coordinator",
    "CensusConfig",
    "load_config",
    "CensusResult",
    "Classifier",
    "CounterStore",
    "LessParser",
]
