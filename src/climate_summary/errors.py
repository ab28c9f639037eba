class ClimateSummaryError(Exception):
    """Base class for all errors raised while building a climate summary."""


class FileOpenError(ClimateSummaryError):
    """An input path could not be opened for reading. Fatal for the whole run."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Error in opening file: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedLine(ClimateSummaryError):
    """A record does not decompose into the expected fields. The line is skipped."""

    def __init__(self, line: str, reason: str) -> None:
        self.line = line
        self.reason = reason
        super().__init__(f"Malformed line: {reason}")


class MalformedNumericField(MalformedLine):
    """A numeric field holds no parsable number (strict mode only)."""

    def __init__(self, field: str, value: str, line: str = "") -> None:
        self.field = field
        self.value = value
        super().__init__(line, f"field '{field}' is not numeric: {value!r}")


class TooManyDistinctKeys(ClimateSummaryError):
    """More distinct state codes were seen than the configured capacity allows."""

    def __init__(self, capacity: int, code: str) -> None:
        self.capacity = capacity
        self.code = code
        super().__init__(
            f"Cannot track state '{code}': capacity of {capacity} distinct states reached"
        )
