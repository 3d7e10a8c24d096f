"""
Fetch-cycle entry points.

Each function performs exactly one cycle and is meant to be invoked by cron
through the CLI:

    update_coin_prices   exchange quotes -> one Price
    update_network       explorer stats  -> one NetworkSnapshot
    update_reddit        subreddit feeds -> new Posts
    update_forum         forum sections  -> new Posts
    pricing_rollup       last closed 10 minute block -> one Average
    ensure_indexes       tables and indexes

Failures propagate to the caller. Price and network cycles fetch everything
before touching the database, so a failed request stores nothing. Post
cycles commit source by source, so earlier sources stay saved when a later
one fails.
"""

from datetime import datetime, timedelta

from coinboard.ingestion.collectors import (
    BtcUsdRateCollector,
    ForumCollector,
    MarketTradeCollector,
    NetworkCollector,
    RedditCollector,
)
from coinboard.pipelines.price.percent_change import set_percent_change
from coinboard.pipelines.price.rollup import generate_average, previous_block
from coinboard.shared.config import Config
from coinboard.shared.db import storage
from coinboard.shared.db.models import Average, ExchangePrice, NetworkSnapshot, Price
from coinboard.shared.db.session import get_db
from coinboard.shared.utils import setup_logger, truncate, utcnow

logger = setup_logger(__name__, level=Config.LOG_LEVEL)


def update_coin_prices(
    now: datetime | None = None,
    rate_collector: BtcUsdRateCollector | None = None,
    market_collector: MarketTradeCollector | None = None,
) -> Price:
    """Fetch both quotes and store one Price with its 24h percent change."""
    rate_collector = rate_collector or BtcUsdRateCollector()
    market_collector = market_collector or MarketTradeCollector()

    usd_per_btc = rate_collector.fetch()
    btc = market_collector.fetch()

    price = Price(
        usd_per_btc=usd_per_btc,
        generated_at=truncate(now or utcnow(), timedelta(minutes=1)),
    )
    price.exchanges.append(
        ExchangePrice(exchange=market_collector.exchange, btc=btc, usd=usd_per_btc * btc)
    )

    with get_db() as db:
        set_percent_change(db, price)
        storage.insert_price(db, price)

    logger.info(
        "Stored price %s: %s usd=%.6f change=%s",
        price.id,
        market_collector.exchange,
        usd_per_btc * btc,
        price.exchanges[0].percent_change,
    )
    return price


def update_network(
    now: datetime | None = None, collector: NetworkCollector | None = None
) -> NetworkSnapshot:
    """Fetch the network figures and store one snapshot."""
    collector = collector or NetworkCollector()
    stats = collector.fetch()

    snapshot = NetworkSnapshot(
        hash_rate=stats.hash_rate,
        difficulty=stats.difficulty,
        mined=stats.mined,
        block_count=stats.block_count,
        generated_at=now or utcnow(),
    )
    with get_db() as db:
        storage.insert_network_snapshot(db, snapshot)

    logger.info("Stored network snapshot %s", snapshot.id)
    return snapshot


def update_reddit(collectors: list[RedditCollector] | None = None) -> int:
    """Store new posts from every configured subreddit, in order."""
    collectors = collectors or [RedditCollector.for_subreddit(s) for s in Config.SUBREDDITS]

    total = 0
    for collector in collectors:
        with get_db() as db:
            posts = collector.fetch(db)
            total += storage.insert_posts(db, posts)

    logger.info("Stored %d new reddit posts", total)
    return total


def update_forum(collectors: list[ForumCollector] | None = None) -> int:
    """Store new topics from each forum section, in order."""
    collectors = collectors or [ForumCollector(section) for section in Config.FORUM_SECTIONS]

    total = 0
    for collector in collectors:
        with get_db() as db:
            posts = collector.fetch(db)
            total += storage.insert_posts(db, posts)

    logger.info("Stored %d new forum topics", total)
    return total


def pricing_rollup(now: datetime | None = None) -> Average:
    """Average the prices of the last closed 10 minute block."""
    start, end = previous_block(now)
    with get_db() as db:
        return generate_average(db, start, end)


def ensure_indexes() -> None:
    storage.ensure_indexes()
