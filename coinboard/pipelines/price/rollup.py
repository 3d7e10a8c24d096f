"""
Pricing rollup: reduce the raw prices of a 10 minute block to one Average.

The block for a run at 12:34 is [12:20:00, 12:29:59]. Every run inserts a
new Average; running twice for the same block stores two rows.
"""

from datetime import datetime, timedelta

import pandas as pd
from sqlalchemy.orm import Session

from coinboard.shared.config import Config
from coinboard.shared.db.models import Average, ExchangeAverage
from coinboard.shared.db.storage import get_prices_between, insert_average
from coinboard.shared.utils import BLOCK_SIZE, setup_logger, truncate, utcnow

logger = setup_logger(__name__, level=Config.LOG_LEVEL)


def previous_block(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Start and inclusive end of the last closed 10 minute block."""
    base = truncate(now or utcnow(), BLOCK_SIZE)
    start = base - BLOCK_SIZE
    end = base - timedelta(minutes=1) + timedelta(seconds=59)
    return start, end


def _price_frame(prices) -> pd.DataFrame:
    rows = [
        {"exchange": entry.exchange, "btc": entry.btc, "usd": entry.usd}
        for price in prices
        for entry in price.exchanges
    ]
    frame = pd.DataFrame(rows, columns=["exchange", "btc", "usd"])
    return frame.astype({"btc": float, "usd": float})


def generate_average(
    db: Session,
    start: datetime,
    end: datetime,
    exchanges: list[str] | None = None,
) -> Average:
    """Average every exchange's prices in [start, end] and store the result.

    An exchange without prices in the window gets NaN means; the Average is
    stored anyway.

    Args:
        db: Open session.
        start: Block start, also used as the Average's time_block.
        end: Inclusive block end.
        exchanges: Exchanges to average (default: the configured market exchange
            plus any exchange present in the window).

    Returns:
        The inserted Average.
    """
    prices = get_prices_between(db, start, end)
    frame = _price_frame(prices)

    names = list(exchanges or [Config.MARKET_EXCHANGE])
    for name in frame["exchange"].unique():
        if name not in names:
            names.append(name)

    average = Average(time_block=start)
    for name in names:
        subset = frame[frame["exchange"] == name]
        average.exchanges.append(
            ExchangeAverage(
                exchange=name,
                btc=float(subset["btc"].mean()),
                usd=float(subset["usd"].mean()),
            )
        )

    insert_average(db, average)
    logger.info(
        "Rolled up %d prices for block %s (%s)",
        len(prices),
        start.isoformat(),
        ", ".join(f"{e.exchange}: usd={e.usd} btc={e.btc}" for e in average.exchanges),
    )
    return average
