"""Abstract base class for all data source collectors.

A collector knows how to reach one upstream source (an exchange API, the
block explorer, a subreddit feed, the forum) and turn its response into a
typed result. Collectors never store anything; the updaters in
``coinboard.pipelines.updaters`` decide what gets persisted.

Failure contract:
- Transport errors (unreachable host, timeout, HTTP error status) propagate
  as ``requests.RequestException``.
- Malformed payloads raise ``ValueError``.
- Nothing is retried. One failed request fails the whole fetch.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import requests

from coinboard.shared.config import Config
from coinboard.shared.utils import setup_logger


class BaseCollector(ABC):
    """Base class for all data collectors.

    Subclasses must define:
        SOURCE_NAME (str): identifier used in log lines (e.g. "reddit", "forum").

    Subclasses must implement:
        fetch(): pull the current data from the source.
    """

    SOURCE_NAME: str

    def __init__(self, log_file: Path | None = None, timeout: int | None = None) -> None:
        """Initialize the collector.

        Args:
            log_file: Optional path for file-based logging.
            timeout: Per-request timeout in seconds (default: Config.REQUEST_TIMEOUT).
        """
        self.timeout = timeout or Config.REQUEST_TIMEOUT
        self.logger = setup_logger(self.__class__.__name__, log_file, level=Config.LOG_LEVEL)
        self._session = self._build_session()

    @abstractmethod
    def fetch(self, *args: Any, **kwargs: Any) -> Any:
        """Fetch the current data from the source.

        Returns:
            The typed result for this source.

        Raises:
            requests.RequestException: On transport failures.
            ValueError: If the response cannot be parsed.
        """
        ...

    def _get(self, url: str, **kwargs: Any) -> requests.Response:
        """GET a URL and fail on any non-2xx status."""
        self.logger.debug("GET %s", url)
        response = self._session.get(url, timeout=self.timeout, **kwargs)
        response.raise_for_status()
        return response

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update(
            {"User-Agent": "Mozilla/5.0 (compatible; coinboard/0.1)"}
        )
        return session
