"""
24 hour percent change for freshly fetched prices.

A new price is compared against the latest stored price generated at least
24 hours earlier. Without such a price (cold start) nothing is set.
"""

from datetime import timedelta

from sqlalchemy.orm import Session

from coinboard.shared.db.models import Price
from coinboard.shared.db.storage import get_price_at_or_before

COMPARISON_WINDOW = timedelta(hours=24)


def percent_change(old_usd: float, new_usd: float) -> str:
    """Relative change from old_usd to new_usd, as a two decimal string.

    An old value of zero yields "100.00" whatever the new value is.
    """
    if old_usd == 0.0:
        change = 100.0
    else:
        change = ((new_usd - old_usd) / old_usd) * 100
    return f"{change:.2f}"


def set_percent_change(db: Session, price: Price) -> Price:
    """Fill in percent_change and change_comparison_id on an unsaved price."""
    old_price = get_price_at_or_before(db, price.generated_at - COMPARISON_WINDOW)
    if old_price is None:
        return price

    for entry in price.exchanges:
        old_entry = old_price.exchange(entry.exchange)
        if old_entry is not None:
            entry.percent_change = percent_change(old_entry.usd, entry.usd)
    price.change_comparison_id = old_price.id
    return price
