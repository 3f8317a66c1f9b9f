"""HTTP document fetcher."""

import logging
import threading
from collections.abc import Callable

import requests
from bs4 import BeautifulSoup
from bs4.dammit import EncodingDetector

from .config import DEFAULT_USER_AGENT
from .exceptions import NetworkError

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class DocumentFetcher:
    """Fetch timetable pages and parse them into BeautifulSoup trees.

    Each thread gets its own ``requests.Session``, so detail pages can be
    fetched from worker threads.
    """

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds, None to wait indefinitely
            user_agent: User-Agent header sent with every request
            session_factory: Builds the session of each thread
        """
        self.timeout = timeout
        self.headers = {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "de-DE,de;q=0.9,en;q=0.8",
            "Connection": "keep-alive",
        }
        self._session_factory = session_factory
        self._local = threading.local()
        self._sessions: list[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Session of the calling thread, created on first use."""
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers.update(self.headers)
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    def fetch(self, url: str) -> BeautifulSoup:
        """Fetch a page and parse its HTML.

        Args:
            url: Absolute page URL

        Returns:
            Parsed document

        Raises:
            NetworkError: If the request fails or the body cannot be read
        """
        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            content = response.content
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Failed to fetch {url}: {str(e)}") from e

        return BeautifulSoup(
            content, "html.parser", from_encoding=self._encoding(response, content)
        )

    def _encoding(self, response: requests.Response, content: bytes) -> str:
        """Charset of the response body.

        The Content-Type charset wins, then a <meta> declaration. Without
        either the body is read as UTF-8 instead of the ISO-8859-1 that
        requests assumes for text/* responses.
        """
        content_type = response.headers.get("Content-Type", "")
        if "charset" in content_type.lower() and response.encoding:
            return response.encoding
        declared = EncodingDetector.find_declared_encoding(content, is_html=True)
        return declared or DEFAULT_ENCODING

    def close(self) -> None:
        """Close the sessions of every thread."""
        with self._lock:
            for session in self._sessions:
                session.close()
            self._sessions.clear()
        self._local = threading.local()
