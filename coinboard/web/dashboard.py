"""Template context for the dashboard page."""

from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session

from coinboard.pipelines.price.chart import serialize_points, with_latest_prices
from coinboard.shared.config import Config
from coinboard.shared.db.models import NetworkSnapshot, Price
from coinboard.shared.db.storage import (
    get_averages,
    get_latest_network_snapshot,
    get_latest_posts,
    get_latest_price,
)
from coinboard.shared.utils import (
    format_float,
    format_float_from_string,
    format_integer,
    format_integer_from_string,
)

CHART_HOURS = 24
POSTS_PER_SOURCE = 8
FORUM_SOURCE = "forum"


def stat_vars(price: Price, network: NetworkSnapshot, exchange: str) -> dict[str, str]:
    """Headline figures: price, 24h change, market cap and network stats."""
    entry = price.exchange(exchange)
    if entry is None:
        raise LookupError(f"Latest price has no {exchange} quote")

    change = entry.percent_change or "100"
    change_style = "percent-change-stat-down" if change.startswith("-") else "percent-change-stat-up"

    mined = int(float(network.mined or 0))
    return {
        "usd": format_float(entry.usd),
        "btc": f"{entry.btc:.8f}",
        "market_cap": format_integer(int(mined * entry.usd)),
        "change": change,
        "change_style": change_style,
        "hash_rate": format_float_from_string(network.hash_rate),
        "difficulty": format_float_from_string(network.difficulty),
        "mined": format_integer_from_string(network.mined),
        "remaining": format_integer(Config.MAX_SUPPLY - mined),
    }


def build_context(db: Session, use_btc: bool, now: datetime | None = None) -> dict[str, Any]:
    exchange = Config.MARKET_EXCHANGE

    price = get_latest_price(db)
    if price is None:
        raise LookupError("No price stored yet")
    network = get_latest_network_snapshot(db)
    if network is None:
        raise LookupError("No network snapshot stored yet")

    averages = get_averages(db, CHART_HOURS, now=now)
    points = with_latest_prices(db, averages, exchange, now=now)

    subreddits = {
        f"/r/{name}": get_latest_posts(db, f"/r/{name}", POSTS_PER_SOURCE)
        for name in Config.SUBREDDITS
    }

    return {
        "coin": Config.COIN_SYMBOL,
        "stats": stat_vars(price, network, exchange),
        "averages": serialize_points(points, use_btc=use_btc),
        "graph_value_type": "BTC" if use_btc else "USD",
        "show_btc_link": not use_btc,
        "show_usd_link": use_btc,
        "forum": get_latest_posts(db, FORUM_SOURCE, POSTS_PER_SOURCE),
        "subreddits": subreddits,
    }
