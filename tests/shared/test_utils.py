"""Tests for utility functions."""

import logging
from datetime import datetime, timedelta

import pytz

from coinboard.shared.utils import (
    BLOCK_SIZE,
    format_float,
    format_float_from_string,
    format_integer,
    format_integer_from_string,
    setup_logger,
    to_utc,
    truncate,
    unix_seconds,
)


def test_setup_logger_basic():
    """Test basic logger setup."""
    logger = setup_logger("test_logger")
    assert isinstance(logger, logging.Logger)
    assert logger.name == "test_logger"
    assert logger.level == logging.INFO


def test_setup_logger_with_file(tmp_path):
    """Test logger setup with file handler."""
    log_file = tmp_path / "test.log"
    logger = setup_logger("test_file_logger", log_file=log_file)

    assert log_file.exists()
    logger.info("Test message")

    assert log_file.read_text()


def test_setup_logger_string_level():
    logger = setup_logger("test_debug_logger", level="debug")
    assert logger.level == logging.DEBUG


def test_setup_logger_does_not_stack_handlers():
    first = setup_logger("test_repeat_logger")
    count = len(first.handlers)
    second = setup_logger("test_repeat_logger")
    assert second is first
    assert len(second.handlers) == count


def test_to_utc_with_naive_datetime():
    """Naive input is read in from_tz and returned as naive UTC."""
    dt = datetime(2026, 2, 8, 12, 30, 45)
    utc_dt = to_utc(dt, from_tz="US/Eastern")
    assert utc_dt.tzinfo is None
    assert utc_dt == datetime(2026, 2, 8, 17, 30, 45)


def test_to_utc_with_aware_datetime():
    eastern = pytz.timezone("US/Eastern")
    dt = eastern.localize(datetime(2026, 2, 8, 12, 30, 45))
    assert to_utc(dt) == datetime(2026, 2, 8, 17, 30, 45)


def test_truncate_to_ten_minutes():
    dt = datetime(2026, 2, 8, 12, 37, 45, 123)
    assert truncate(dt, BLOCK_SIZE) == datetime(2026, 2, 8, 12, 30)


def test_truncate_on_boundary_is_unchanged():
    dt = datetime(2026, 2, 8, 12, 30)
    assert truncate(dt, BLOCK_SIZE) == dt


def test_truncate_to_minute():
    dt = datetime(2026, 2, 8, 12, 37, 45)
    assert truncate(dt, timedelta(minutes=1)) == datetime(2026, 2, 8, 12, 37)


def test_unix_seconds():
    assert unix_seconds(datetime(1970, 1, 1, 0, 0, 10)) == 10.0


def test_format_float():
    assert format_float(1234.567) == "1,234.57"
    assert format_float(0.5) == "0.50"


def test_format_integer():
    assert format_integer(1500500) == "1,500,500"
    assert format_integer(12) == "12"


def test_format_from_string():
    assert format_integer_from_string("1500500") == "1,500,500"
    assert format_float_from_string("6792.54") == "6,792.54"
