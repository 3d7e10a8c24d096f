"""Unit tests for the 24h percent change."""

from datetime import datetime, timedelta

import pytest

from coinboard.pipelines.price.percent_change import percent_change, set_percent_change
from coinboard.shared.db import insert_price

NOW = datetime(2026, 3, 1, 12, 0)


class TestPercentChange:
    @pytest.mark.parametrize(
        "old, new, expected",
        [
            (1, 2, "100.00"),
            (1, 5, "400.00"),
            (3, 1.63, "-45.67"),
            (0.456, 0.457, "0.22"),
            (2, 2, "0.00"),
        ],
    )
    def test_formatted_change(self, old, new, expected):
        assert percent_change(old, new) == expected

    @pytest.mark.parametrize("new", [0.0, 5.0, -3.0])
    def test_zero_old_value_is_hundred(self, new):
        assert percent_change(0, new) == "100.00"


class TestSetPercentChange:
    def test_compares_against_price_a_day_old(self, db, price_factory):
        old = insert_price(db, price_factory(NOW - timedelta(hours=25), usd=1.0, btc=0.3456))
        new = price_factory(NOW, usd=1.45, btc=0.55)

        set_percent_change(db, new)

        assert new.exchange("cryptsy").percent_change == "45.00"
        assert new.change_comparison_id == old.id

    def test_picks_latest_candidate(self, db, price_factory):
        insert_price(db, price_factory(NOW - timedelta(hours=30), usd=10.0))
        closest = insert_price(db, price_factory(NOW - timedelta(hours=24), usd=2.0))
        insert_price(db, price_factory(NOW - timedelta(hours=1), usd=100.0))
        new = price_factory(NOW, usd=3.0)

        set_percent_change(db, new)

        assert new.change_comparison_id == closest.id
        assert new.exchange("cryptsy").percent_change == "50.00"

    def test_cold_start_leaves_fields_unset(self, db, price_factory):
        insert_price(db, price_factory(NOW - timedelta(hours=3), usd=1.0))
        new = price_factory(NOW, usd=2.0)

        set_percent_change(db, new)

        assert new.exchange("cryptsy").percent_change is None
        assert new.change_comparison_id is None

    def test_exchange_missing_on_old_price(self, db, price_factory):
        old = insert_price(
            db, price_factory(NOW - timedelta(hours=25), usd=1.0, exchange="elsewhere")
        )
        new = price_factory(NOW, usd=2.0)

        set_percent_change(db, new)

        assert new.exchange("cryptsy").percent_change is None
        assert new.change_comparison_id == old.id
