"""Collectors package: one collector per upstream data source."""

from coinboard.ingestion.collectors.base_collector import BaseCollector
from coinboard.ingestion.collectors.exchange_collector import (
    BtcUsdRateCollector,
    MarketTradeCollector,
)
from coinboard.ingestion.collectors.forum_collector import ForumCollector
from coinboard.ingestion.collectors.network_collector import NetworkCollector, NetworkStats
from coinboard.ingestion.collectors.reddit_collector import RedditCollector

__all__ = [
    "BaseCollector",
    "BtcUsdRateCollector",
    "MarketTradeCollector",
    "NetworkCollector",
    "NetworkStats",
    "RedditCollector",
    "ForumCollector",
]
