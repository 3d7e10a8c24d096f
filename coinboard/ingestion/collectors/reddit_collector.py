"""Subreddit RSS collector.

Fetches a subreddit's RSS feed and returns the entries that are not stored
yet as unsaved ``Post`` rows tagged with the subreddit (e.g. "/r/vertcoin").
The entry guid is the dedup key.

Example:
    >>> from coinboard.shared.db import get_db
    >>> collector = RedditCollector.for_subreddit("vertcoin")
    >>> with get_db() as db:
    ...     posts = collector.fetch(db)
"""

from datetime import datetime
from pathlib import Path

import feedparser
from sqlalchemy.orm import Session

from coinboard.ingestion.collectors.base_collector import BaseCollector
from coinboard.shared.config import Config
from coinboard.shared.db.models import Post
from coinboard.shared.db.storage import post_exists
from coinboard.shared.utils import utcnow


class RedditCollector(BaseCollector):
    """Collector for new posts in one subreddit feed."""

    SOURCE_NAME = "reddit"

    def __init__(
        self,
        feed_url: str,
        source: str,
        log_file: Path | None = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            feed_url: RSS feed URL of the subreddit.
            source: Tag stored on every post (e.g. "/r/vertcoin").
            log_file: Optional path for file-based logging.
            timeout: Per-request timeout in seconds.
        """
        super().__init__(log_file=log_file, timeout=timeout)
        self.feed_url = feed_url
        self.source = source

    @classmethod
    def for_subreddit(cls, subreddit: str, **kwargs) -> "RedditCollector":
        return cls(
            feed_url=Config.SUBREDDIT_FEED_URL.format(subreddit=subreddit),
            source=f"/r/{subreddit}",
            **kwargs,
        )

    def fetch(self, db: Session) -> list[Post]:
        """Return feed entries whose guid is not stored yet, in feed order."""
        response = self._get(self.feed_url)
        feed = feedparser.parse(response.content)

        if feed.bozo and not feed.entries:
            raise ValueError(
                f"Could not parse feed {self.feed_url}: {feed.get('bozo_exception')}"
            )

        posts: list[Post] = []
        seen: set[str] = set()
        for entry in feed.entries:
            unique_id = entry.get("id") or entry.get("link")
            if not unique_id:
                raise ValueError(f"Feed entry without id or link in {self.feed_url}")
            if unique_id in seen or post_exists(db, unique_id):
                continue
            seen.add(unique_id)

            posts.append(
                Post(
                    title=entry.get("title", ""),
                    source=self.source,
                    url=entry.get("link", ""),
                    unique_id=unique_id,
                    published_at=self._published_at(entry),
                )
            )

        self.logger.info(
            "%s: %d entries, %d new", self.source, len(feed.entries), len(posts)
        )
        return posts

    @staticmethod
    def _published_at(entry) -> datetime:
        """Entry publish time as naive UTC; falls back to now when missing."""
        parsed = entry.get("published_parsed") or entry.get("updated_parsed")
        if parsed:
            return datetime(*parsed[:6])
        return utcnow()
