"""
Storage layer for coinboard.

Every query helper takes an open SQLAlchemy session. Callers acquire one per
unit of work with ``get_db()`` so the connection goes back to the pool on
every exit path.

Example:

    from coinboard.shared.db import get_db
    from coinboard.shared.db.storage import get_latest_posts

    with get_db() as db:
        for post in get_latest_posts(db, "/r/vertcoin", 8):
            print(post.title)
"""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from coinboard.shared.config import Config
from coinboard.shared.utils import BLOCK_SIZE, setup_logger, truncate, utcnow

from .base import Base
from .engine import engine
from .models import Average, NetworkSnapshot, Post, Price

logger = setup_logger(__name__, level=Config.LOG_LEVEL)


# ---------------------------------------------------------------------------
# Prices
# ---------------------------------------------------------------------------


def insert_price(db: Session, price: Price) -> Price:
    db.add(price)
    db.flush()
    return price


def get_latest_price(db: Session) -> Price | None:
    """Most recently inserted price, or None when nothing is stored yet."""
    return db.query(Price).order_by(Price.id.desc()).first()


def get_prices_between(db: Session, start: datetime, end: datetime) -> list[Price]:
    """All prices generated in [start, end], both ends inclusive, oldest first."""
    return (
        db.query(Price)
        .filter(Price.generated_at >= start, Price.generated_at <= end)
        .order_by(Price.id.asc())
        .all()
    )


def get_price_at_or_before(db: Session, moment: datetime) -> Price | None:
    """Latest price whose generated_at is not after moment."""
    return (
        db.query(Price)
        .filter(Price.generated_at <= moment)
        .order_by(Price.id.desc())
        .first()
    )


# ---------------------------------------------------------------------------
# Averages
# ---------------------------------------------------------------------------


def insert_average(db: Session, average: Average) -> Average:
    db.add(average)
    db.flush()
    return average


def get_averages(db: Session, hours: int, now: datetime | None = None) -> list[Average]:
    """Averages for the last ``hours`` hours, ordered by time block.

    The threshold is ``now - hours`` rounded down to a 10 minute boundary.
    """
    now = now or utcnow()
    threshold = truncate(now - timedelta(hours=hours), BLOCK_SIZE)
    return (
        db.query(Average)
        .filter(Average.time_block >= threshold)
        .order_by(Average.time_block.asc(), Average.id.asc())
        .all()
    )


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------


def insert_network_snapshot(db: Session, snapshot: NetworkSnapshot) -> NetworkSnapshot:
    db.add(snapshot)
    db.flush()
    return snapshot


def get_latest_network_snapshot(db: Session) -> NetworkSnapshot | None:
    return db.query(NetworkSnapshot).order_by(NetworkSnapshot.id.desc()).first()


# ---------------------------------------------------------------------------
# Posts
# ---------------------------------------------------------------------------


def insert_post(db: Session, post: Post) -> Post:
    db.add(post)
    db.flush()
    return post


def insert_posts(db: Session, posts: list[Post]) -> int:
    """Insert posts one at a time; returns how many were written."""
    for post in posts:
        insert_post(db, post)
    return len(posts)


def post_exists(db: Session, unique_id: str) -> bool:
    return db.query(Post.id).filter(Post.unique_id == unique_id).first() is not None


def get_latest_posts(db: Session, source: str, limit: int) -> list[Post]:
    """Newest posts of one source, newest first."""
    return (
        db.query(Post)
        .filter(Post.source == source)
        .order_by(Post.published_at.desc())
        .limit(limit)
        .all()
    )


# ---------------------------------------------------------------------------
# Schema management
# ---------------------------------------------------------------------------


def ensure_indexes(bind=None) -> None:
    """Create missing tables and indexes. Safe to run repeatedly."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind, checkfirst=True)
    for table in Base.metadata.sorted_tables:
        for index in table.indexes:
            index.create(bind=bind, checkfirst=True)
    logger.info("Ensured %d tables and their indexes", len(Base.metadata.tables))


def drop_all(bind=None) -> None:
    """Drop every table. Only allowed under the test profile."""
    if not Config.is_test():
        raise RuntimeError("drop_all only works in the test environment")
    Base.metadata.drop_all(bind=bind or engine)
