"""
Chart serialization for the dashboard's flot graph.

The graph takes a flat list of ``[millis, value]`` pairs. Averages make up
the bulk of the series; raw prices newer than the last averaged block are
appended so the line reaches the present.
"""

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy.orm import Session

from coinboard.shared.db.models import Average, Price
from coinboard.shared.db.storage import get_prices_between
from coinboard.shared.utils import BLOCK_SIZE, unix_seconds, utcnow

from .rollup import previous_block

USD_FORMAT = "[{millis}, {value:.2f}]"
BTC_FORMAT = "[{millis}, {value:.8f}]"


@dataclass(frozen=True)
class ChartPoint:
    time_block: datetime
    btc: float | None
    usd: float | None

    @property
    def is_missing(self) -> bool:
        return _is_nan(self.btc) or _is_nan(self.usd)


def _is_nan(value: float | None) -> bool:
    return value is None or math.isnan(value)


def averages_to_points(averages: Iterable[Average], exchange: str) -> list[ChartPoint]:
    points = []
    for average in averages:
        entry = average.exchange(exchange)
        if entry is None:
            points.append(ChartPoint(average.time_block, math.nan, math.nan))
        else:
            points.append(ChartPoint(average.time_block, entry.btc, entry.usd))
    return points


def prices_to_points(prices: Iterable[Price], exchange: str) -> list[ChartPoint]:
    points = []
    for price in prices:
        entry = price.exchange(exchange)
        if entry is not None:
            points.append(ChartPoint(price.generated_at, entry.btc, entry.usd))
    return points


def with_latest_prices(
    db: Session,
    averages: Sequence[Average],
    exchange: str,
    now: datetime | None = None,
) -> list[ChartPoint]:
    """Averages followed by the raw prices that no average covers yet.

    The input sequence is left untouched; a new list is returned.
    """
    now = now or utcnow()
    if averages:
        start = averages[-1].time_block + BLOCK_SIZE
    else:
        start, _ = previous_block(now)

    points = averages_to_points(averages, exchange)
    points.extend(prices_to_points(get_prices_between(db, start, now), exchange))
    return points


def serialize_points(points: Iterable[ChartPoint], use_btc: bool = False) -> str:
    """Render points as comma separated ``[millis, value]`` pairs.

    Points with a NaN (or missing) value are dropped. USD values get two
    decimals, BTC values eight.
    """
    template = BTC_FORMAT if use_btc else USD_FORMAT
    rendered = []
    for point in points:
        if point.is_missing:
            continue
        millis = unix_seconds(point.time_block) * 1000.0
        value = point.btc if use_btc else point.usd
        rendered.append(template.format(millis=f"{millis:.17g}", value=value))
    return ",".join(rendered)
