"""Climate Summary - per-state statistics from NOAA climate exports.

Usage: climate-summary tdv_file1 tdv_file2 ... tdv_fileN

Every file is read line by line and folded into per-state aggregates.
The report is printed once, after all files were consumed successfully.
"""

import logging
import sys
import typing
from collections.abc import Iterable, Sequence
from pathlib import Path

import structlog

from climate_summary.aggregator import Aggregator
from climate_summary.config import Settings, settings
from climate_summary.errors import (
    ClimateSummaryError,
    FileOpenError,
    MalformedLine,
)
from climate_summary.parser import parse_line
from climate_summary.report import format_report, write_summary

USAGE = "Usage: {prog} tdv_file1 tdv_file2 ... tdv_fileN"


# --- Structlog Configuration ---
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    wrapper_class=structlog.stdlib.BoundLogger,
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger("climate_summary")


def setup_logging(config: Settings = settings) -> None:
    """Attach JSON log handlers. stdout is reserved for the report."""
    # Handlers & Formatters
    pre_chain: list[typing.Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=pre_chain,
    )

    handlers: list[logging.Handler] = []

    # Stderr
    s = logging.StreamHandler(sys.stderr)
    s.setFormatter(formatter)
    handlers.append(s)

    # File
    if config.log_file:
        try:
            f = logging.FileHandler(config.log_file)
            f.setFormatter(formatter)
            handlers.append(f)
        except OSError as e:
            print(f"Cannot open log file {config.log_file}: {e}", file=sys.stderr)

    logging.basicConfig(level=config.log_level.upper(), handlers=handlers, force=True)


def open_source(path: str, encoding: str = "utf-8") -> typing.TextIO:
    """Open an input file for reading or raise FileOpenError."""
    try:
        return open(path, encoding=encoding, errors="replace")
    except OSError as e:
        raise FileOpenError(path, e.strerror or str(e)) from e


def analyze_file(
    lines: Iterable[str], aggregator: Aggregator, strict: bool = False
) -> tuple[int, int]:
    """Fold every parsable line into the aggregator.

    Malformed lines are skipped. Returns (folded, skipped).
    """
    folded = 0
    skipped = 0
    for line_no, line in enumerate(lines, start=1):
        try:
            observation = parse_line(line, strict=strict)
        except MalformedLine as e:
            skipped += 1
            logger.warning("Skipping malformed line", line_no=line_no, reason=e.reason)
            continue
        aggregator.fold(observation)
        folded += 1
    return folded, skipped


def analyze_files(paths: Sequence[str], config: Settings = settings) -> Aggregator:
    """Read all files in order. Any unopenable file aborts the whole run."""
    aggregator = Aggregator(max_states=config.max_states)
    for path in paths:
        with open_source(path, config.encoding) as fh:
            print(f"Opening file: {path}")
            log = logger.bind(path=path)
            try:
                folded, skipped = analyze_file(fh, aggregator, strict=config.strict_numeric)
            except OSError as e:
                raise FileOpenError(path, e.strerror or str(e)) from e
            log.info("File analyzed", records=folded, skipped=skipped, states=len(aggregator))
    return aggregator


def main(argv: Sequence[str] | None = None, config: Settings | None = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    config = config or settings
    prog = Path(argv[0]).name if argv else "climate-summary"

    if len(argv) < 2:
        print(USAGE.format(prog=prog))
        return 1

    setup_logging(config)

    try:
        aggregator = analyze_files(argv[1:], config)
    except FileOpenError as e:
        logger.error("Aborting run", path=e.path, reason=e.reason)
        print(str(e), file=sys.stderr)
        return 1
    except ClimateSummaryError as e:
        logger.error("Aborting run", error=str(e))
        print(str(e), file=sys.stderr)
        return 1

    print(format_report(aggregator.all()))

    if config.summary_json:
        try:
            write_summary(config.summary_json, aggregator.all())
        except (OSError, ValueError) as e:
            logger.error("Summary export failed", path=config.summary_json, error=str(e))
            return 1

    return 0


def main_cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
