"""Data ingestion module - collectors for exchange, network and community sources."""

from coinboard.ingestion.collectors import (
    BaseCollector,
    BtcUsdRateCollector,
    ForumCollector,
    MarketTradeCollector,
    NetworkCollector,
    RedditCollector,
)

__all__ = [
    "BaseCollector",
    "BtcUsdRateCollector",
    "MarketTradeCollector",
    "NetworkCollector",
    "RedditCollector",
    "ForumCollector",
]
