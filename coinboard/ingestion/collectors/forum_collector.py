"""Forum topic collector.

Scrapes an IP.Board forum section listing, sorted newest first, and returns
the topics that are not stored yet. Pinned topics are skipped, and only the
first TOPIC_LIMIT unpinned rows are considered. The topic URL is the dedup
key; the publish time is read from the first post on the topic page.

Listing markup:
    <tr itemtype="http://schema.org/Article">
        <span itemprop="name">Title</span>
        <a itemprop="url" href="...">...</a>
    </tr>

Topic markup:
    <div id="ips_Posts">
        <abbr itemprop="commentTime" title="2014-01-13T17:33:05+00:00">
"""

from datetime import datetime
from pathlib import Path

from bs4 import BeautifulSoup
from sqlalchemy.orm import Session

from coinboard.ingestion.collectors.base_collector import BaseCollector
from coinboard.shared.config import Config
from coinboard.shared.db.models import Post
from coinboard.shared.db.storage import post_exists
from coinboard.shared.utils import to_utc


class ForumCollector(BaseCollector):
    """Collector for new topics in one forum section."""

    SOURCE_NAME = "forum"

    TOPIC_ROW_SELECTOR = "tr[itemtype='http://schema.org/Article']"
    TOPIC_LIMIT = 4
    PINNED_MARKER = "Pinned"

    def __init__(
        self,
        section: str,
        base_url: str | None = None,
        log_file: Path | None = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            section: Forum section slug (e.g. "3-worldcoin-discussion").
            base_url: Listing URL template with a ``{section}`` placeholder.
            log_file: Optional path for file-based logging.
            timeout: Per-request timeout in seconds.
        """
        super().__init__(log_file=log_file, timeout=timeout)
        self.section = section
        self.base_url = base_url or Config.FORUM_BASE_URL

    @property
    def listing_url(self) -> str:
        if "{section}" in self.base_url:
            return self.base_url.format(section=self.section)
        return self.base_url

    def fetch(self, db: Session) -> list[Post]:
        """Return up to TOPIC_LIMIT new unpinned topics, newest first."""
        soup = BeautifulSoup(self._get(self.listing_url).text, "html.parser")

        posts: list[Post] = []
        considered = 0
        for row in soup.select(self.TOPIC_ROW_SELECTOR):
            if self._is_pinned(row):
                continue
            considered += 1
            if considered > self.TOPIC_LIMIT:
                break

            title_tag = row.select_one("span[itemprop='name']")
            link_tag = row.select_one("a[itemprop='url']")
            if title_tag is None or link_tag is None or not link_tag.get("href"):
                raise ValueError(f"Topic row without title or url in {self.listing_url}")

            url = link_tag["href"]
            if post_exists(db, url):
                continue

            posts.append(
                Post(
                    title=title_tag.get_text(strip=True),
                    source=self.SOURCE_NAME,
                    url=url,
                    unique_id=url,
                    published_at=self.get_topic_date(url),
                )
            )

        self.logger.info("Forum section %s: %d new topics", self.section, len(posts))
        return posts

    def get_topic_date(self, url: str) -> datetime:
        """Publish time of a topic's first post, as naive UTC."""
        soup = BeautifulSoup(self._get(url).text, "html.parser")
        container = soup.select_one("#ips_Posts")
        abbr = container.select_one("abbr[itemprop='commentTime']") if container else None
        if abbr is None or not abbr.get("title"):
            raise ValueError(f"No post time found on topic page {url}")

        try:
            return to_utc(datetime.fromisoformat(abbr["title"]))
        except ValueError as exc:
            raise ValueError(f"Bad post time {abbr['title']!r} on {url}") from exc

    def _is_pinned(self, row) -> bool:
        return any(self.PINNED_MARKER in span.get_text() for span in row.find_all("span"))
