"""Line Parser.

Turns one tab-delimited NOAA record into an Observation.

Record layout (9 fields, no header):
    STATE  TIMESTAMP_MS  GEOHASH  HUMIDITY  SNOW  CLOUD  LIGHTNING  PRESSURE  TEMP_KELVIN
"""

import math
import re
import time
from datetime import UTC, datetime

from .errors import MalformedLine, MalformedNumericField
from .models import Observation

FIELD_COUNT = 9
FIELD_NAMES = (
    "state",
    "timestamp_ms",
    "geohash",
    "humidity",
    "snow",
    "cloud_cover",
    "lightning",
    "pressure",
    "temperature_k",
)

_DELIMITERS = re.compile(r"[\t\n]")
# Longest leading decimal literal, the way C's atof reads it.
_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return kelvin * 9 / 5 - 459.67


def split_fields(line: str) -> list[str]:
    """Split a record into its first 9 non-empty tokens.

    Consecutive delimiters collapse into one and extra tokens are ignored.
    Raises MalformedLine if fewer than 9 tokens are present.
    """
    tokens = [token for token in _DELIMITERS.split(line.rstrip("\r\n")) if token]
    if len(tokens) < FIELD_COUNT:
        raise MalformedLine(line, f"expected {FIELD_COUNT} fields, got {len(tokens)}")
    return tokens[:FIELD_COUNT]


def parse_number(text: str, field: str, strict: bool = False) -> float:
    """Best-effort numeric parse.

    Lenient mode reads the longest numeric prefix and falls back to 0.0.
    Strict mode requires the whole token to be a number.
    """
    if strict:
        try:
            return float(text)
        except ValueError:
            raise MalformedNumericField(field, text) from None

    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(1))


def parse_timestamp(timestamp_ms: float, text: str, line: str = "") -> int:
    """Convert epoch milliseconds to whole seconds.

    Truncating division, no rounding. Raises MalformedNumericField for values
    that cannot be rendered as a calendar date.
    """
    if not math.isfinite(timestamp_ms):
        raise MalformedNumericField("timestamp_ms", text, line)
    seconds = int(timestamp_ms / 1000)
    try:
        datetime.fromtimestamp(seconds, tz=UTC)
        time.ctime(seconds)
    except (OverflowError, OSError, ValueError):
        raise MalformedNumericField("timestamp_ms", text, line) from None
    return seconds


def parse_line(line: str, strict: bool = False) -> Observation:
    """Parse one raw record into an Observation."""
    fields = split_fields(line)

    code = fields[0][:2]
    if len(code) < 2:
        raise MalformedLine(line, f"state code too short: {fields[0]!r}")

    try:
        values = {
            name: parse_number(text, name, strict)
            for name, text in zip(FIELD_NAMES[1:], fields[1:])
            if name != "geohash"
        }
    except MalformedNumericField as e:
        # Re-raise with the offending line attached
        raise MalformedNumericField(e.field, e.value, line) from None

    timestamp = parse_timestamp(values["timestamp_ms"], fields[1], line)

    # Flags are whole numbers per record, fractions are dropped before summing
    for name in ("snow", "lightning"):
        if not math.isfinite(values[name]):
            raise MalformedNumericField(name, fields[FIELD_NAMES.index(name)], line)

    return Observation(
        state_code=code,
        timestamp=timestamp,
        humidity_pct=values["humidity"],
        snow_present=int(values["snow"]),
        cloud_cover_pct=values["cloud_cover"],
        lightning_strike=int(values["lightning"]),
        pressure_pa=values["pressure"],
        temperature=kelvin_to_fahrenheit(values["temperature_k"]),
    )
