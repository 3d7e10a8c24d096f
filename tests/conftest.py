"""
Root pytest configuration.

Pins the test profile and an in-memory SQLite database before any coinboard
module reads its configuration, and gives every test a fresh schema.
"""

import os

os.environ["COINBOARD_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402

from coinboard.shared.db import (  # noqa: E402
    ExchangePrice,
    NetworkSnapshot,
    Price,
    drop_all,
    ensure_indexes,
    get_db,
)


@pytest.fixture(autouse=True)
def schema():
    """Create all tables before each test and drop them afterwards."""
    ensure_indexes()
    yield
    drop_all()


@pytest.fixture
def db(schema):
    """Open session; committed when the test finishes."""
    with get_db() as session:
        yield session


def make_price(
    generated_at: datetime,
    usd: float = 1.0,
    btc: float = 0.001,
    usd_per_btc: float = 1000.0,
    exchange: str = "cryptsy",
) -> Price:
    """Unsaved Price with a single exchange entry."""
    price = Price(usd_per_btc=usd_per_btc, generated_at=generated_at)
    price.exchanges.append(ExchangePrice(exchange=exchange, btc=btc, usd=usd))
    return price


def make_snapshot(generated_at: datetime) -> NetworkSnapshot:
    return NetworkSnapshot(
        hash_rate="6792.54",
        difficulty="42.177",
        mined="37755394",
        block_count="915281",
        generated_at=generated_at,
    )


@pytest.fixture
def price_factory():
    return make_price


@pytest.fixture
def snapshot_factory():
    return make_snapshot
