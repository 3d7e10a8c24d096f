"""Exchange quote collectors.

Two upstream APIs make up one price reading:

- a BTC/USD rate source (Coinbase exchange rates), used to convert
- a market exchange trading the coin against BTC (Cryptsy market data),
  whose most recent trade gives the coin's BTC price.

Response shapes:

    BTC/USD rate:  {"btc_to_usd": "676.58046", ...}
    Market data:   {"success": 1,
                    "return": {"markets": {"VTC": {"recenttrades": [
                        {"id": "9496223", "price": "0.00053275", ...}, ...]}}}}
"""

from pathlib import Path

import requests

from coinboard.ingestion.collectors.base_collector import BaseCollector
from coinboard.shared.config import Config


class BtcUsdRateCollector(BaseCollector):
    """Collector for the USD value of one BTC."""

    SOURCE_NAME = "coinbase"

    def __init__(
        self,
        url: str | None = None,
        log_file: Path | None = None,
        timeout: int | None = None,
    ) -> None:
        super().__init__(log_file=log_file, timeout=timeout)
        self.url = url or Config.BTC_USD_RATE_URL

    def fetch(self) -> float:
        """Return the current USD price of 1 BTC."""
        response = self._get(self.url)
        try:
            payload = response.json()
            rate = float(payload["btc_to_usd"])
        except (requests.exceptions.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed BTC/USD rate response from {self.url}: {exc}") from exc

        self.logger.info("BTC/USD rate: %s", rate)
        return rate


class MarketTradeCollector(BaseCollector):
    """Collector for the coin's BTC price on a market exchange.

    Only the first entry of the recent trade list is used.
    """

    SOURCE_NAME = "market"

    def __init__(
        self,
        url: str | None = None,
        coin_symbol: str | None = None,
        exchange: str | None = None,
        log_file: Path | None = None,
        timeout: int | None = None,
    ) -> None:
        super().__init__(log_file=log_file, timeout=timeout)
        self.url = url or Config.MARKET_DATA_URL
        self.coin_symbol = coin_symbol or Config.COIN_SYMBOL
        self.exchange = exchange or Config.MARKET_EXCHANGE

    def fetch(self) -> float:
        """Return the coin's BTC price from the latest trade."""
        response = self._get(self.url)
        try:
            payload = response.json()
            trades = payload["return"]["markets"][self.coin_symbol]["recenttrades"]
            price = float(trades[0]["price"])
        except (
            requests.exceptions.JSONDecodeError,
            KeyError,
            IndexError,
            TypeError,
            ValueError,
        ) as exc:
            raise ValueError(
                f"Malformed {self.exchange} market response for {self.coin_symbol}: {exc}"
            ) from exc

        self.logger.info("%s %s/BTC: %.8f", self.exchange, self.coin_symbol, price)
        return price
