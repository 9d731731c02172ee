"""Logging helpers for the parental gate."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level:^7} | {file.name}:{line} | {message}"


def console_level(quiet: bool = False, verbose: int = 0) -> str:
    """Map -q / -v flags onto a loguru level name."""
    if quiet:
        return "ERROR"
    if verbose == 1:
        return "INFO"
    if verbose >= 2:
        return "DEBUG"
    return "WARNING"


def configure_logger(
    source: str,
    quiet: bool = False,
    verbose: int = 0,
    log_dir: Optional[Path] = None,
) -> None:
    """Configure Loguru logging.

    The library itself only emits records; hosts (the CLI, the widget) call
    this once at startup.
    """
    # Clear any previously added handlers
    logger.remove()

    level = console_level(quiet=quiet, verbose=verbose)
    logger.add(sink=sys.stderr, level=level, format=LOG_FORMAT)

    if log_dir is None:
        logger.debug(f"Logger configured for source '{source}' (stderr, level={level}).")
        return

    # File handler: DEBUG+, rotated daily, keep 7 days, zipped
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / f"{source}_{'{time:YYYYMMDD}'}.log"

    logger.add(
        sink=str(log_path),
        level="DEBUG",
        format=LOG_FORMAT,
        rotation="00:00",
        retention="7 days",
        compression="zip",
    )

    logger.info(
        f"Logger configured for source '{source}'. "
        f"Sinks: stderr (level={level}+), file (level=DEBUG+) at '{log_path}'. "
        f"Rotation daily at midnight, retention 7 days, zipped."
    )
