"""
Liveness check for the fetch cycles.

Monitoring polls ``/health``; a 500 there means the cron driven updaters
have stopped producing data. Only the newest price and network snapshot are
inspected.
"""

from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from coinboard.shared.db.storage import get_latest_network_snapshot, get_latest_price
from coinboard.shared.utils import utcnow

STALE_AFTER = timedelta(hours=2)

MSG_NO_PRICE = "Error getting latest price"
MSG_OLD_PRICE = "The latest price is old"
MSG_NO_NETWORK = "Error getting latest network snapshot"
MSG_OLD_NETWORK = "The latest network snapshot is old"


def check_health(db: Session, now: datetime | None = None) -> str | None:
    """Return None when both feeds are fresh, otherwise the first problem found."""
    cutoff = (now or utcnow()) - STALE_AFTER

    price = get_latest_price(db)
    if price is None:
        return MSG_NO_PRICE
    if price.generated_at < cutoff:
        return MSG_OLD_PRICE

    network = get_latest_network_snapshot(db)
    if network is None:
        return MSG_NO_NETWORK
    if network.generated_at < cutoff:
        return MSG_OLD_NETWORK

    return None
