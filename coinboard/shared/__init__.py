"""Shared utilities and configuration."""

from coinboard.shared.config import Config
from coinboard.shared.utils import setup_logger, to_utc, truncate, utcnow

__all__ = ["Config", "setup_logger", "to_utc", "truncate", "utcnow"]
