from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from .base import Base


class Price(Base):
    """One fetch cycle worth of quotes. Never updated after insert."""

    __tablename__ = "prices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    usd_per_btc = Column(Float, nullable=False)
    generated_at = Column(DateTime, nullable=False)
    change_comparison_id = Column(Integer, ForeignKey("prices.id"), nullable=True)

    exchanges = relationship(
        "ExchangePrice",
        back_populates="price",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ExchangePrice.id",
    )

    __table_args__ = (Index("idx_prices_generated_at", "generated_at"),)

    def exchange(self, name: str) -> "ExchangePrice | None":
        for entry in self.exchanges:
            if entry.exchange == name:
                return entry
        return None

    def __repr__(self) -> str:
        return f"<Price id={self.id} generated_at={self.generated_at}>"


class ExchangePrice(Base):
    __tablename__ = "exchange_prices"

    id = Column(Integer, primary_key=True, autoincrement=True)
    price_id = Column(Integer, ForeignKey("prices.id", ondelete="CASCADE"), nullable=False)
    exchange = Column(String(50), nullable=False)
    btc = Column(Float, nullable=False)
    usd = Column(Float, nullable=False)
    percent_change = Column(String(20), nullable=True)

    price = relationship("Price", back_populates="exchanges")


class Average(Base):
    """Mean of the prices in one 10 minute block."""

    __tablename__ = "averages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    time_block = Column(DateTime, nullable=False)

    exchanges = relationship(
        "ExchangeAverage",
        back_populates="average",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ExchangeAverage.id",
    )

    __table_args__ = (Index("idx_averages_time_block", "time_block"),)

    def exchange(self, name: str) -> "ExchangeAverage | None":
        for entry in self.exchanges:
            if entry.exchange == name:
                return entry
        return None

    def __repr__(self) -> str:
        return f"<Average id={self.id} time_block={self.time_block}>"


class ExchangeAverage(Base):
    __tablename__ = "exchange_averages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    average_id = Column(Integer, ForeignKey("averages.id", ondelete="CASCADE"), nullable=False)
    exchange = Column(String(50), nullable=False)
    # NaN when the block had no prices; some backends store that as NULL
    btc = Column(Float, nullable=True)
    usd = Column(Float, nullable=True)

    average = relationship("Average", back_populates="exchanges")


class NetworkSnapshot(Base):
    __tablename__ = "network"

    id = Column(Integer, primary_key=True, autoincrement=True)
    hash_rate = Column(String(50))
    difficulty = Column(String(50))
    mined = Column(String(50))
    block_count = Column(String(50))
    generated_at = Column(DateTime, nullable=False)

    def __repr__(self) -> str:
        return f"<NetworkSnapshot id={self.id} generated_at={self.generated_at}>"


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(500))
    source = Column(String(100), nullable=False)
    url = Column(String(1000))
    unique_id = Column(String(1000), nullable=False)
    published_at = Column(DateTime)

    __table_args__ = (
        Index("idx_posts_unique_id", "unique_id"),
        Index("idx_posts_source", "source"),
        Index("idx_posts_published_at", "published_at"),
    )

    def __repr__(self) -> str:
        return f"<Post source={self.source!r} title={self.title!r}>"
