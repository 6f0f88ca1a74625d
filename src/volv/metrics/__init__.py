"""File size models and aggregation."""

from volv.metrics.aggregator import aggregate
from volv.metrics.models import (
    Aggregate,
    AggregateEntry,
    CommitReport,
    FileEntry,
    RunResult,
)

__all__ = [
    "Aggregate",
    "AggregateEntry",
    "CommitReport",
    "FileEntry",
    "RunResult",
    "aggregate",
]
