"""Database engine, session factory, ORM models, and storage utilities."""

from .base import Base
from .engine import engine
from .models import Average, ExchangeAverage, ExchangePrice, NetworkSnapshot, Post, Price
from .session import SessionLocal, get_db
from .storage import (
    drop_all,
    ensure_indexes,
    get_averages,
    get_latest_network_snapshot,
    get_latest_posts,
    get_latest_price,
    get_price_at_or_before,
    get_prices_between,
    insert_average,
    insert_network_snapshot,
    insert_post,
    insert_posts,
    insert_price,
    post_exists,
)

__all__ = [
    # ORM infrastructure
    "Base",
    "engine",
    "SessionLocal",
    "get_db",
    # ORM models
    "Price",
    "ExchangePrice",
    "Average",
    "ExchangeAverage",
    "NetworkSnapshot",
    "Post",
    # Storage functions
    "insert_price",
    "get_latest_price",
    "get_prices_between",
    "get_price_at_or_before",
    "insert_average",
    "get_averages",
    "insert_network_snapshot",
    "get_latest_network_snapshot",
    "insert_post",
    "insert_posts",
    "post_exists",
    "get_latest_posts",
    "ensure_indexes",
    "drop_all",
]
