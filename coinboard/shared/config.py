"""Configuration management for coinboard."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

VALID_ENVS = ("dev", "test", "prod")

# Per-profile defaults, overridable through the environment
PROFILE_DB_NAMES = {
    "dev": "coinboard_dev",
    "test": "coinboard_test",
    "prod": "coinboard",
}


def _resolve_env(value: Optional[str]) -> str:
    """Map the COINBOARD_ENV value onto a known profile, defaulting to dev."""
    if value in VALID_ENVS:
        return value
    return "dev"


class Config:
    """Application configuration."""

    # Profile
    ENV: str = _resolve_env(os.getenv("COINBOARD_ENV"))

    # Project paths
    ROOT_DIR = Path(__file__).parent.parent.parent
    LOGS_DIR = Path(os.getenv("LOGS_DIR", str(ROOT_DIR / "logs")))
    TEMPLATES_DIR = Path(__file__).parent.parent / "web" / "templates"
    STATIC_DIR = Path(__file__).parent.parent / "web" / "static"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Database
    DB_HOST: str = os.getenv("DB_HOST", "localhost")
    DB_PORT: int = int(os.getenv("DB_PORT", "5432"))
    DB_NAME: str = os.getenv("DB_NAME", PROFILE_DB_NAMES[ENV])
    DB_USER: str = os.getenv("DB_USER", "postgres")
    DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    # Coin
    COIN_SYMBOL: str = os.getenv("COIN_SYMBOL", "VTC")
    MAX_SUPPLY: int = int(os.getenv("MAX_SUPPLY", "84000000"))

    # Exchange APIs
    BTC_USD_RATE_URL: str = os.getenv(
        "BTC_USD_RATE_URL", "https://coinbase.com/api/v1/currencies/exchange_rates"
    )
    MARKET_EXCHANGE: str = os.getenv("MARKET_EXCHANGE", "cryptsy")
    MARKET_DATA_URL: str = os.getenv(
        "MARKET_DATA_URL",
        "http://pubapi.cryptsy.com/api.php?method=singlemarketdata&marketid=14",
    )

    # Block explorer
    NETWORK_BASE_URL: str = os.getenv(
        "NETWORK_BASE_URL", "http://explorer.vertcoin.org/chain/Vertcoin/q"
    )

    # Community sources
    SUBREDDITS: list[str] = [
        s.strip() for s in os.getenv("SUBREDDITS", "vertcoin,vertmarket").split(",") if s.strip()
    ]
    SUBREDDIT_FEED_URL: str = os.getenv(
        "SUBREDDIT_FEED_URL", "http://www.reddit.com/r/{subreddit}/.rss"
    )
    FORUM_BASE_URL: str = os.getenv(
        "FORUM_BASE_URL",
        "http://www.worldcoinforum.org/forum/{section}/?sort_key=start_date&sort_by=Z-A",
    )
    FORUM_SECTIONS: list[str] = [
        s.strip()
        for s in os.getenv(
            "FORUM_SECTIONS", "3-worldcoin-discussion,4-promotion-of-worldcoin"
        ).split(",")
        if s.strip()
    ]

    # Data collection settings
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "30"))

    # Web server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "4000"))

    @classmethod
    def validate(cls) -> None:
        """Validate required configuration."""
        if cls.ENV not in VALID_ENVS:
            raise ValueError(f"Unknown COINBOARD_ENV profile: {cls.ENV}")
        if not cls.DATABASE_URL and not cls.DB_NAME:
            raise ValueError("DB_NAME not set in environment")

    @classmethod
    def is_test(cls) -> bool:
        return cls.ENV == "test"

    @property
    def database_url(self) -> str:
        """Construct database URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


config = Config()
