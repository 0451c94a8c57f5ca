"""
Exception hierarchy for crawl failures.
"""


class CrawlError(Exception):
    """Base class for errors raised while building a sitemap."""


class ParseError(CrawlError):
    """Raised when a byte stream cannot be parsed as an HTML document."""


class FetchError(CrawlError):
    """Raised when a page body cannot be retrieved."""


class URLParseError(CrawlError, ValueError):
    """Raised when a string cannot be parsed as a URL."""
