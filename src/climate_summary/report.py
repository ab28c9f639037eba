"""Console and JSON rendering of the finished per-state aggregates."""

import json
import logging
import time
import typing
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from .models import StateAggregate

logger = logging.getLogger(__name__)


def format_timestamp(timestamp: int) -> str:
    """Render epoch seconds as local time, e.g. 'Mon Aug  3 11:00:00 2015'."""
    return time.ctime(timestamp)


def format_state_block(aggregate: StateAggregate) -> str:
    lines = [
        f"-- State: {aggregate.code} --",
        f"Number of Records: {aggregate.record_count}",
        f"Average Humidity: {aggregate.average_humidity:.1f}%",
        f"Average Temperature: {aggregate.average_temperature:.1f}F",
        f"Max Temperature: {aggregate.max_temperature:.1f}F",
        f"Max Temperature on: {format_timestamp(aggregate.max_temperature_at)}",
        f"Min Temperature: {aggregate.min_temperature:.1f}F",
        f"Min Temperature on: {format_timestamp(aggregate.min_temperature_at)}",
        f"Lightning Strikes: {aggregate.lightning_count}",
        f"Records with Snow Cover: {aggregate.snow_count}",
        f"Average Cloud Cover: {aggregate.average_cloud_cover:.1f}%",
    ]
    return "\n".join(lines)


def format_report(aggregates: Iterable[StateAggregate]) -> str:
    """Full console report: the states line followed by one block per state."""
    aggregates = list(aggregates)
    parts = ["States found: " + " ".join(a.code for a in aggregates)]
    parts.extend(format_state_block(a) for a in aggregates)
    return "\n".join(parts)


def _iso(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=UTC).isoformat()


def build_summary(aggregates: Iterable[StateAggregate]) -> dict[str, dict[str, typing.Any]]:
    """JSON-serialisable summary keyed by state code, averages included."""
    summary: dict[str, dict[str, typing.Any]] = {}
    for aggregate in aggregates:
        data = aggregate.model_dump(mode="json")
        data["max_temperature_iso"] = _iso(aggregate.max_temperature_at)
        data["min_temperature_iso"] = _iso(aggregate.min_temperature_at)
        summary[aggregate.code] = data
    return summary


def write_summary(path: str | Path, aggregates: Iterable[StateAggregate]) -> Path:
    """Write the summary as indented JSON and return the path written."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    summary = build_summary(aggregates)
    target.write_text(json.dumps(summary, indent=2) + "\n", encoding="utf-8")
    logger.info(f"Summary written to {target}")
    return target
