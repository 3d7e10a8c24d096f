"""Shared utility functions for coinboard."""

import logging
from datetime import datetime, timedelta
from pathlib import Path

import pytz

BLOCK_SIZE = timedelta(minutes=10)


def setup_logger(
    name: str, log_file: Path | None = None, level: int | str = logging.INFO
) -> logging.Logger:
    """Set up logger with console and file handlers.

    Calling this twice for the same name does not stack handlers.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level (int constant or string name like 'DEBUG', 'INFO')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Convert string level to int if needed
    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)
    else:
        logger.setLevel(level)

    if logger.handlers:
        return logger

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def to_utc(dt: datetime, from_tz: str = "UTC") -> datetime:
    """Convert datetime to naive UTC, the form every stored timestamp uses."""
    if dt.tzinfo is None:
        dt = pytz.timezone(from_tz).localize(dt)
    return dt.astimezone(pytz.UTC).replace(tzinfo=None)


def utcnow() -> datetime:
    """Current time as naive UTC."""
    return datetime.now(pytz.UTC).replace(tzinfo=None)


def truncate(dt: datetime, step: timedelta) -> datetime:
    """Round dt down to a multiple of step since the epoch."""
    epoch = datetime(1970, 1, 1, tzinfo=dt.tzinfo)
    return dt - (dt - epoch) % step


def unix_seconds(dt: datetime) -> float:
    """Seconds since the epoch for a naive UTC datetime."""
    return (dt - datetime(1970, 1, 1)).total_seconds()


def format_float(value: float) -> str:
    """Render a float with thousands separators and two decimals (1,234.57)."""
    return f"{value:,.2f}"


def format_integer(value: int) -> str:
    """Render an integer with thousands separators (1,500,500)."""
    return f"{int(value):,}"


def format_float_from_string(value: str) -> str:
    return format_float(float(value))


def format_integer_from_string(value: str) -> str:
    return format_integer(int(float(value)))
