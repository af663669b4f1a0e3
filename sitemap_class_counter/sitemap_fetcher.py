"""
1.0 Fetcher Module
Downloads sitemap XML and page HTML over HTTP(S).

Key features:
- Session reuse for connection pooling
- Configurable timeout and user agent
- Optional download delay for politeness
- No retries: a failed request raises immediately
"""

import requests
import logging
import time
from typing import Optional, Dict, Any

from sitemap_class_counter.config import DEFAULT_USER_AGENT
from sitemap_class_counter.errors import FetchError, TransportError

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    2.0 PageFetcher Class
    Fetches text documents (sitemaps and pages) through a shared session.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None):
        """
        2.1 Initialize the PageFetcher.

        Args:
            config: Configuration dictionary with optional keys:
                - user_agent: Custom user agent string
                - timeout: Request timeout in seconds (default: 30)
                - download_delay: Delay between requests in seconds (default: 0)
            session: Pre-built session to use instead of creating one
        """
        config = config or {}

        self.user_agent = config.get("user_agent", DEFAULT_USER_AGENT)
        if not isinstance(self.user_agent, str) or not self.user_agent.strip():
            self.user_agent = DEFAULT_USER_AGENT
            logger.warning(f"Invalid user_agent in config. Using default: {self.user_agent}")

        self.timeout = config.get("timeout", 30)
        self.download_delay = float(config.get("download_delay", 0.0))

        # 2.1.1 Track requests for delay logic
        self.request_count = 0
        self.last_request_time = 0.0

        self.session = session if session is not None else self._create_session()

        logger.debug(
            f"PageFetcher initialized: "
            f"User-Agent={self.user_agent[:50]}, "
            f"timeout={self.timeout}s, "
            f"delay={self.download_delay}s"
        )

    def _create_session(self) -> requests.Session:
        """
        2.2 Create a requests Session with the default headers set.
        """
        session = requests.Session()
        session.headers.update({"User-Agent": self.user_agent})
        return session

    def _apply_politeness_delay(self) -> None:
        """
        2.3 Ensure at least download_delay seconds between two requests.
        """
        if self.request_count > 0 and self.download_delay > 0:
            elapsed = time.time() - self.last_request_time
            wait_time = max(0.0, self.download_delay - elapsed)
            if wait_time > 0:
                time.sleep(wait_time)

        self.request_count += 1
        self.last_request_time = time.time()

    def _get(self, url: str) -> requests.Response:
        """
        2.4 GET a URL and return the successful response.

        Raises:
            FetchError: the URL is not http(s) or the status is not 2xx
            TransportError: the request itself failed
        """
        if not url or not url.startswith(("http://", "https://")):
            raise FetchError(url, None, f"Invalid URL: {url!r}")

        self._apply_politeness_delay()

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise TransportError(url, f"timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e)) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(url, response.status_code)

        logger.debug(
            f"Fetched {url} (status={response.status_code}, size={len(response.content):,} bytes)"
        )
        return response

    def fetch_text(self, url: str) -> str:
        """
        2.5 Fetch a page and return the body decoded by requests.
        """
        return self._get(url).text

    def fetch_content(self, url: str) -> bytes:
        """
        2.6 Fetch a document and return the raw body.

        Used for XML, where the encoding declaration in the document decides
        the decoding rather than the Content-Type header.
        """
        return self._get(url).content
