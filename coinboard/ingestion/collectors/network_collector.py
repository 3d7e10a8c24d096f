"""Block explorer collector.

The explorer answers each query with a bare number as plain text. The
network hash rate query may return several lines of comma-separated
samples; only the last field of the last line is the current value.

Endpoints (relative to Config.NETWORK_BASE_URL):
    /nethash/120/-121/-1   hash rate samples, H/s
    /getdifficulty         current difficulty
    /totalbc               total coins mined
    /getblockcount         current block height
"""

from dataclasses import dataclass
from pathlib import Path

from coinboard.ingestion.collectors.base_collector import BaseCollector
from coinboard.shared.config import Config


@dataclass(frozen=True)
class NetworkStats:
    """Formatted network figures, ready to store."""

    hash_rate: str
    difficulty: str
    mined: str
    block_count: str


class NetworkCollector(BaseCollector):
    """Collector for blockchain network statistics."""

    SOURCE_NAME = "explorer"

    HASH_RATE_PATH = "/nethash/120/-121/-1"
    DIFFICULTY_PATH = "/getdifficulty"
    MINED_PATH = "/totalbc"
    BLOCK_COUNT_PATH = "/getblockcount"

    def __init__(
        self,
        base_url: str | None = None,
        log_file: Path | None = None,
        timeout: int | None = None,
    ) -> None:
        super().__init__(log_file=log_file, timeout=timeout)
        self.base_url = base_url or Config.NETWORK_BASE_URL

    def fetch(self) -> NetworkStats:
        """Query every figure. Any failed query aborts the whole fetch."""
        stats = NetworkStats(
            hash_rate=self.get_hash_rate(),
            difficulty=self.get_difficulty(),
            mined=self.get_mined(),
            block_count=self.get_block_count(),
        )
        self.logger.info(
            "Network: hash_rate=%s MH/s difficulty=%s mined=%s blocks=%s",
            stats.hash_rate,
            stats.difficulty,
            stats.mined,
            stats.block_count,
        )
        return stats

    def get_hash_rate(self) -> str:
        """Current hash rate in MH/s, two decimals."""
        body = self._query(self.HASH_RATE_PATH)
        last_line = body.split("\n")[-1].strip()
        nethash = last_line.split(",")[-1]
        return f"{self._to_float(nethash, self.HASH_RATE_PATH) / 1_000_000:.2f}"

    def get_difficulty(self) -> str:
        return self._query(self.DIFFICULTY_PATH)

    def get_mined(self) -> str:
        """Total mined coins as a whole number."""
        mined = self._query(self.MINED_PATH)
        return f"{self._to_float(mined, self.MINED_PATH):.0f}"

    def get_block_count(self) -> str:
        return self._query(self.BLOCK_COUNT_PATH)

    def _query(self, path: str) -> str:
        response = self._get(self.base_url + path)
        return response.text.strip()

    @staticmethod
    def _to_float(value: str, path: str) -> float:
        try:
            return float(value)
        except ValueError as exc:
            raise ValueError(f"Non-numeric explorer response for {path}: {value!r}") from exc
