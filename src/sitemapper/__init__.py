"""
Site crawler that performs BFS traversal of same-host links from a root URL.
Outputs the visited URLs as a sitemaps.org XML document.
"""
from sitemapper.core import bfs, crawl, make_expander, resolve_link
from sitemapper.errors import CrawlError, FetchError, ParseError, URLParseError
from sitemapper.link import Link, extract_links, parse_links
from sitemapper.sitemap import render_sitemap

__version__ = "1.0.0"
__all__ = [
    "bfs",
    "crawl",
    "make_expander",
    "resolve_link",
    "CrawlError",
    "FetchError",
    "ParseError",
    "URLParseError",
    "Link",
    "extract_links",
    "parse_links",
    "render_sitemap",
]
