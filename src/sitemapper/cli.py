"""
Command-line interface for the sitemap builder.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from sitemapper.core import DEFAULT_USER_AGENT, crawl
from sitemapper.errors import CrawlError
from sitemapper.sitemap import render_sitemap

DEFAULT_DOMAIN = "https://gophercises.com"


def print_summary(urls: List[str]) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")
    sys.stderr.write(f"Total pages crawled:    {len(urls)}\n")
    sys.stderr.write(f"Distinct URLs:          {len(set(urls))}\n\n")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the sitemap CLI."""
    parser = argparse.ArgumentParser(
        description="Crawl all same-host links starting from a URL and output a sitemap XML document."
    )
    parser.add_argument(
        "domain",
        nargs="?",
        default=DEFAULT_DOMAIN,
        help=f"Domain to build the sitemap for (default: {DEFAULT_DOMAIN})",
    )
    parser.add_argument("--timeout", type=float, default=15.0, help="Request timeout in seconds (default: 15)")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument("--out", default="-", help="Output file path, or '-' for stdout (default: -)")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    args = parser.parse_args(argv)

    try:
        urls = crawl(
            start_url=args.domain,
            timeout_s=args.timeout,
            user_agent=args.user_agent,
            verbose=args.verbose,
        )
    except (CrawlError, ValueError) as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    if args.verbose:
        print_summary(urls)

    xml_text = render_sitemap(urls)

    if args.out == "-":
        sys.stdout.write(xml_text)
    else:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(xml_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Sitemap written to: {output_path}\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
