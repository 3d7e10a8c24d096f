"""Unit tests for the 10 minute pricing rollup."""

import math
from datetime import datetime

from coinboard.pipelines.price.rollup import generate_average, previous_block
from coinboard.shared.db import Average, get_averages, insert_price


class TestPreviousBlock:
    def test_block_bounds(self):
        start, end = previous_block(datetime(2026, 3, 1, 12, 34, 56))
        assert start == datetime(2026, 3, 1, 12, 20)
        assert end == datetime(2026, 3, 1, 12, 29, 59)

    def test_on_boundary(self):
        start, end = previous_block(datetime(2026, 3, 1, 12, 30))
        assert start == datetime(2026, 3, 1, 12, 20)
        assert end == datetime(2026, 3, 1, 12, 29, 59)


class TestGenerateAverage:
    NOW = datetime(2026, 3, 1, 12, 34)

    def test_means_over_window(self, db, price_factory):
        start, end = previous_block(self.NOW)
        insert_price(db, price_factory(start, btc=1.0, usd=98.0))
        insert_price(db, price_factory(end, btc=3.0, usd=100.0))

        average = generate_average(db, start, end)

        assert average.time_block == start
        assert average.exchange("cryptsy").usd == 99
        assert average.exchange("cryptsy").btc == 2

    def test_prices_outside_window_ignored(self, db, price_factory):
        start, end = previous_block(self.NOW)
        insert_price(db, price_factory(start, usd=10.0))
        insert_price(db, price_factory(datetime(2026, 3, 1, 12, 30), usd=1000.0))
        insert_price(db, price_factory(datetime(2026, 3, 1, 12, 19, 59), usd=1000.0))

        average = generate_average(db, start, end)

        assert average.exchange("cryptsy").usd == 10.0

    def test_empty_window_yields_nan(self, db):
        start, end = previous_block(self.NOW)

        average = generate_average(db, start, end)

        assert math.isnan(average.exchange("cryptsy").usd)
        assert math.isnan(average.exchange("cryptsy").btc)
        assert db.query(Average).count() == 1

    def test_every_exchange_in_window_is_averaged(self, db, price_factory):
        start, end = previous_block(self.NOW)
        insert_price(db, price_factory(start, usd=2.0, exchange="cryptsy"))
        insert_price(db, price_factory(start, usd=4.0, exchange="other"))

        average = generate_average(db, start, end)

        assert average.exchange("cryptsy").usd == 2.0
        assert average.exchange("other").usd == 4.0

    def test_rerun_inserts_duplicate(self, db, price_factory):
        start, end = previous_block(self.NOW)
        insert_price(db, price_factory(start, usd=1.0))

        generate_average(db, start, end)
        generate_average(db, start, end)

        assert db.query(Average).filter(Average.time_block == start).count() == 2

    def test_average_visible_in_last_hours(self, db, price_factory):
        start, end = previous_block(self.NOW)
        insert_price(db, price_factory(start, btc=1.0, usd=98.0))
        insert_price(db, price_factory(end, btc=3.0, usd=100.0))

        generate_average(db, start, end)
        averages = get_averages(db, 10, now=self.NOW)

        assert len(averages) == 1
        assert averages[0].exchange("cryptsy").usd == 99
