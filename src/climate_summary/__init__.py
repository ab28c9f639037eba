"""Per-state climate summaries from NOAA tab-delimited exports."""

from .aggregator import Aggregator
from .errors import (
    ClimateSummaryError,
    FileOpenError,
    MalformedLine,
    MalformedNumericField,
    TooManyDistinctKeys,
)
from .models import Observation, StateAggregate
from .parser import parse_line

__all__ = [
    "Aggregator",
    "ClimateSummaryError",
    "FileOpenError",
    "MalformedLine",
    "MalformedNumericField",
    "Observation",
    "StateAggregate",
    "TooManyDistinctKeys",
    "parse_line",
]
