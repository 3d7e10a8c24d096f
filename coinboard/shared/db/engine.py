from sqlalchemy import create_engine
from sqlalchemy.pool import QueuePool, StaticPool

from coinboard.shared.config import config

DATABASE_URL = config.database_url


def build_engine(url: str):
    # In-memory SQLite must share a single connection across sessions
    if url.startswith("sqlite"):
        return create_engine(
            url,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return create_engine(
        url,
        poolclass=QueuePool,
        pool_size=5,
        max_overflow=10,
        pool_timeout=30,
        pool_recycle=1800,
        pool_pre_ping=True,
        echo=False,
    )


engine = build_engine(DATABASE_URL)
