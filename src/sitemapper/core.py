"""
Core crawling logic: same-host link resolution, page expansion and BFS.
"""
from __future__ import annotations

import sys
from collections import deque
from typing import Callable, Deque, List, Optional, Set
from urllib.parse import SplitResult, quote, urlsplit, urlunsplit

import requests

from sitemapper.errors import FetchError, URLParseError
from sitemapper.link import parse_links

DEFAULT_USER_AGENT = "SitemapCrawler/1.0"

# Characters that can never appear in a host[:port] component
INVALID_HOST_CHARS: frozenset[str] = frozenset(' <>"{}|\\^`')

# Characters left unescaped when serializing a path or fragment
PATH_SAFE = "/:@!$&'()*+,;=-._~%"
FRAGMENT_SAFE = PATH_SAFE + "?"

# Given a URL, return its in-scope child URLs in discovery order
Expander = Callable[[str], List[str]]


def parse_url(raw: str) -> SplitResult:
    """
    Split a URL string into its components.

    Raises URLParseError for control characters, leading whitespace,
    malformed IPv6 hosts, non-numeric ports and hosts containing characters
    that are not allowed there. No normalization is applied.
    """
    if raw[:1].isspace() or any(ord(c) < 0x20 or ord(c) == 0x7F for c in raw):
        raise URLParseError(f"Invalid URL {raw!r}: control character or leading whitespace")
    try:
        parts = urlsplit(raw)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError as e:
        raise URLParseError(f"Invalid URL {raw!r}: {e}") from e
    if any(c in INVALID_HOST_CHARS or c.isspace() for c in parts.netloc):
        raise URLParseError(f"Invalid URL {raw!r}: invalid character in host")
    return parts


def host_of(parts: SplitResult) -> str:
    """Return host[:port] exactly as written, without any userinfo."""
    return parts.netloc.rpartition("@")[2]


def url_string(parts: SplitResult) -> str:
    """
    Serialize a parsed URL; equal URLs have byte-identical strings.

    The scheme is lowercase, an empty query or fragment is dropped and
    characters not allowed in the path or fragment are percent-encoded.
    The host keeps its original case.
    """
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=PATH_SAFE),
        parts.query,
        quote(parts.fragment, safe=FRAGMENT_SAFE),
    ))


def resolve_link(href: str, domain: str) -> Optional[str]:
    """
    Resolve an href against the crawl domain, keeping it only if in scope.

    Host-less hrefs are appended verbatim to the domain string, so only
    root-relative paths ("/a") resolve to meaningful URLs. The result is
    accepted when its scheme starts with "http" and its host (port included)
    is identical to the domain's host, and returned in its url_string form.
    Returns None otherwise.
    """
    try:
        domain_host = host_of(parse_url(domain))
        parts = parse_url(href)
        if not parts.netloc:
            parts = parse_url(domain + href)
    except URLParseError:
        return None

    if parts.scheme.startswith("http") and host_of(parts) == domain_host:
        return url_string(parts)
    return None


def fetch_page(session: requests.Session, url: str, timeout_s: float) -> bytes:
    """Fetch the raw body of url. The status code is not inspected."""
    try:
        resp = session.get(url, timeout=timeout_s, allow_redirects=True)
    except requests.RequestException as e:
        raise FetchError(f"Unable to fetch {url}: {e}") from e
    return resp.content


def print_progress(scanned: int, queue_size: int, current_url: str) -> None:
    """Print real-time progress to stderr."""
    progress = f"\r\033[KVisited: {scanned} | Queue: {queue_size} | {current_url}"
    sys.stderr.write(progress)
    sys.stderr.flush()


def print_scan_line(url: str, new_links: int) -> None:
    """Print single scan result line."""
    sys.stderr.write(f"\n  → {url} (+{new_links} links)")
    sys.stderr.flush()


def make_expander(
    domain: str,
    session: requests.Session,
    timeout_s: float = 15.0,
) -> Expander:
    """
    Build the fetch → extract → filter pipeline for one crawl domain.

    Fetch and parse failures propagate to the caller; links rejected by
    resolve_link are dropped silently. The caller owns the session and is
    responsible for its headers and for closing it.
    """

    def expand(url: str) -> List[str]:
        body = fetch_page(session, url, timeout_s)
        return [
            target
            for link in parse_links(body)
            if (target := resolve_link(link.href, domain)) is not None
        ]

    return expand


def bfs(start: str, expand: Expander, verbose: bool = False) -> List[str]:
    """
    Breadth-first traversal from start, returning URLs in dequeue order.

    A child is enqueued only if it is neither visited, currently queued nor
    the page being expanded, so every URL is expanded at most once. Any
    error raised by expand aborts the traversal and no partial result is
    returned.
    """
    frontier: Deque[str] = deque([start])
    queued: Set[str] = {start}
    visited: List[str] = []
    seen: Set[str] = set()

    while frontier:
        url = frontier.popleft()
        queued.discard(url)

        if verbose:
            print_progress(len(visited), len(frontier), url)

        seen.add(url)
        new_links = 0
        for child in expand(url):
            if child not in seen and child not in queued:
                frontier.append(child)
                queued.add(child)
                new_links += 1

        if verbose:
            print_scan_line(url, new_links)

        visited.append(url)

    if verbose:
        sys.stderr.write("\n\n")

    return visited


def crawl(
    start_url: str,
    timeout_s: float = 15.0,
    user_agent: str = DEFAULT_USER_AGENT,
    verbose: bool = False,
    session: Optional[requests.Session] = None,
) -> List[str]:
    """
    Crawl every same-host page reachable from start_url.

    Args:
        start_url: Absolute http(s) URL the crawl starts from; also the
                   domain every discovered link is resolved against.
        timeout_s: HTTP request timeout in seconds.
        user_agent: User-Agent header for requests made on a new session.
        verbose: Whether to print progress information to stderr.
        session: Optional pre-configured requests session.

    Returns:
        Visited URLs in BFS discovery order, start_url (in its url_string
        form) first.

    Raises:
        ValueError: If start_url is not an absolute http(s) URL.
        FetchError: If any page cannot be retrieved.
        ParseError: If any page cannot be parsed as HTML.
    """
    parts = parse_url(start_url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"Invalid start URL: {start_url}")
    root = url_string(parts)

    own_session = session is None
    if own_session:
        session = requests.Session()
        session.headers["User-Agent"] = user_agent

    if verbose:
        sys.stderr.write(f"Building sitemap for domain: {root}\n\n")

    try:
        return bfs(root, make_expander(root, session, timeout_s), verbose)
    finally:
        if own_session:
            session.close()
