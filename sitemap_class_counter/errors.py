"""
Error types for the crawl.

Anything deriving from SitemapError is fatal and aborts the run. Page-level
errors (FetchError, TransportError and whatever the HTML parser raises) are
caught by the aggregator and turned into a failed PageResult.
"""

from typing import Optional


class CrawlError(Exception):
    """Base class for all crawl errors."""


class ConfigError(CrawlError):
    """Raised when the configuration file or overrides are invalid."""


class FetchError(CrawlError):
    """Non-success HTTP status (or a URL that cannot be requested at all)."""

    def __init__(self, url: str, status_code: Optional[int], message: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        if message is None:
            message = f"Failed to fetch {url}. Status: {status_code}"
        super().__init__(message)


class TransportError(CrawlError):
    """Lower-level failure while performing the request (timeout, DNS, reset...)."""

    def __init__(self, url: str, message: str):
        self.url = url
        self.detail = message
        super().__init__(f"Request to {url} failed: {message}")


class SitemapError(CrawlError):
    """Marker for errors that must abort the whole run."""


class ParseError(SitemapError):
    """Sitemap is not well-formed XML or lacks the urlset/url/loc structure."""

    def __init__(self, url: str, message: str, dump: Optional[str] = None):
        self.url = url
        self.dump = dump
        super().__init__(message)


class SitemapFetchError(SitemapError, FetchError):
    pass


class SitemapTransportError(SitemapError, TransportError):
    pass
