"""Price processing: percent change, 10 minute rollups and chart series."""

from coinboard.pipelines.price.chart import (
    ChartPoint,
    averages_to_points,
    prices_to_points,
    serialize_points,
    with_latest_prices,
)
from coinboard.pipelines.price.percent_change import percent_change, set_percent_change
from coinboard.pipelines.price.rollup import generate_average, previous_block

__all__ = [
    "ChartPoint",
    "averages_to_points",
    "prices_to_points",
    "serialize_points",
    "with_latest_prices",
    "percent_change",
    "set_percent_change",
    "generate_average",
    "previous_block",
]
