"""Unit tests for the forum topic collector."""

from datetime import datetime
from unittest.mock import Mock

import pytest

from coinboard.ingestion.collectors.forum_collector import ForumCollector
from coinboard.shared.db import Post, insert_post

BASE_URL = "https://forum.test/forum/{section}/?sort_key=start_date"
TOPIC_URL = "https://forum.test/topic/{n}-title{n}/"


def topic_row(n: int, pinned: bool = False) -> str:
    badge = '<span class="ipsBadge">Pinned</span>' if pinned else ""
    return f"""
    <tr itemscope itemtype="http://schema.org/Article">
        <td>{badge}
            <a itemprop="url" href="{TOPIC_URL.format(n=n)}">
                <span itemprop="name">Title{n}</span>
            </a>
        </td>
    </tr>"""


def listing(*rows: str) -> str:
    return f"<html><body><table>{''.join(rows)}</table></body></html>"


def topic_page(stamp: str = "2014-01-13T17:33:05+00:00") -> str:
    return f"""
    <html><body>
    <div id="ips_Posts">
        <div class="post_block">
            <abbr class="published" itemprop="commentTime" title="{stamp}">13 January 2014</abbr>
        </div>
    </div>
    </body></html>"""


def make_response(text: str) -> Mock:
    response = Mock()
    response.text = text
    return response


def serve(listing_html: str, pages: dict[str, str] | None = None):
    pages = pages or {}

    def get(url, **kwargs):
        if url.startswith("https://forum.test/forum/"):
            return make_response(listing_html)
        return make_response(pages.get(url, topic_page()))

    return get


@pytest.fixture
def collector():
    return ForumCollector("3-discussion", base_url=BASE_URL)


class TestForumCollector:
    def test_listing_url(self, collector):
        assert collector.listing_url == "https://forum.test/forum/3-discussion/?sort_key=start_date"

    def test_pinned_topics_skipped(self, db, collector):
        html = listing(topic_row(0, pinned=True), topic_row(1), topic_row(2))
        collector._session.get = Mock(side_effect=serve(html))

        posts = collector.fetch(db)

        assert [p.title for p in posts] == ["Title1", "Title2"]
        assert posts[0].url == TOPIC_URL.format(n=1)
        assert posts[0].unique_id == posts[0].url
        assert posts[0].source == "forum"
        assert posts[0].published_at == datetime(2014, 1, 13, 17, 33, 5)

    def test_only_first_unpinned_rows_considered(self, db, collector):
        html = listing(topic_row(0, pinned=True), *(topic_row(n) for n in range(1, 8)))
        collector._session.get = Mock(side_effect=serve(html))

        posts = collector.fetch(db)

        assert [p.title for p in posts] == ["Title1", "Title2", "Title3", "Title4"]

    def test_stored_topics_skipped(self, db, collector):
        stored = TOPIC_URL.format(n=1)
        insert_post(db, Post(title="Title1", source="forum", url=stored, unique_id=stored))
        html = listing(topic_row(1), topic_row(2))
        collector._session.get = Mock(side_effect=serve(html))

        posts = collector.fetch(db)

        assert [p.title for p in posts] == ["Title2"]
        # no topic page request for the stored topic
        assert collector._session.get.call_count == 2

    def test_topic_date_converted_to_utc(self, collector):
        url = TOPIC_URL.format(n=1)
        pages = {url: topic_page("2014-01-13T12:33:05-05:00")}
        collector._session.get = Mock(side_effect=serve(listing(), pages))

        assert collector.get_topic_date(url) == datetime(2014, 1, 13, 17, 33, 5)

    def test_topic_without_date(self, collector):
        url = TOPIC_URL.format(n=1)
        pages = {url: "<html><body><div id='ips_Posts'></div></body></html>"}
        collector._session.get = Mock(side_effect=serve(listing(), pages))

        with pytest.raises(ValueError, match="No post time"):
            collector.get_topic_date(url)

    def test_row_without_link(self, db, collector):
        row = '<tr itemtype="http://schema.org/Article"><td><span itemprop="name">x</span></td></tr>'
        collector._session.get = Mock(side_effect=serve(listing(row)))

        with pytest.raises(ValueError, match="without title or url"):
            collector.fetch(db)

    def test_empty_listing(self, db, collector):
        collector._session.get = Mock(side_effect=serve(listing()))
        assert collector.fetch(db) == []
