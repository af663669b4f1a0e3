"""
1.0 Main Orchestrator Module
Crawls sitemaps, analyzes every listed page and tallies CSS class usage.

Flow:
1. Fetch every sitemap in order and concatenate their page URLs
2. Analyze each page and fold its counts into the running totals
3. Report totals per class in input order

Sitemap failures abort the run; page failures are reported and skipped.
"""

import argparse
import logging
import sys
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional

from sitemap_class_counter.config import load_config, apply_overrides, CONFIG_FILE_PATH
from sitemap_class_counter.data_processor import ResultWriter
from sitemap_class_counter.errors import (
    ConfigError,
    FetchError,
    SitemapError,
    SitemapFetchError,
    SitemapTransportError,
    TransportError,
)
from sitemap_class_counter.page_analyzer import analyze_page
from sitemap_class_counter.reporting import LoggingReporter, Reporter, setup_logging
from sitemap_class_counter.sitemap_fetcher import PageFetcher
from sitemap_class_counter.sitemap_parser import parse_urlset

logger = logging.getLogger(__name__)


@dataclass
class PageResult:
    """Outcome of analyzing one page: counts on success, the error otherwise."""

    url: str
    counts: Optional[Dict[str, int]] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class CrawlSummary:
    class_names: List[str]
    page_urls: List[str] = field(default_factory=list)
    totals: Dict[str, int] = field(default_factory=dict)
    page_results: List[PageResult] = field(default_factory=list)

    @property
    def analyzed_count(self) -> int:
        return sum(1 for result in self.page_results if result.ok)

    @property
    def failures(self) -> List[PageResult]:
        return [result for result in self.page_results if not result.ok]


def fetch_sitemap_urls(sitemap_url: str, fetcher: PageFetcher) -> List[str]:
    """
    2.0 Fetch one sitemap and return its page URLs in document order.

    Every failure is re-raised as a SitemapError subclass so the caller cannot
    mistake it for a recoverable page error.
    """
    try:
        xml_content = fetcher.fetch_content(sitemap_url)
    except FetchError as e:
        raise SitemapFetchError(e.url, e.status_code, str(e)) from e
    except TransportError as e:
        raise SitemapTransportError(e.url, e.detail) from e

    return parse_urlset(xml_content, sitemap_url=sitemap_url)


def collect_page_urls(sitemap_urls: List[str], fetcher: PageFetcher, reporter: Reporter) -> List[str]:
    """
    2.1 Concatenate page URLs from all sitemaps. Duplicates are kept.
    """
    page_urls: List[str] = []
    for sitemap_url in sitemap_urls:
        reporter.sitemap_started(sitemap_url)
        urls_from_sitemap = fetch_sitemap_urls(sitemap_url, fetcher)
        reporter.sitemap_parsed(sitemap_url, len(urls_from_sitemap))
        page_urls.extend(urls_from_sitemap)
    return page_urls


def try_analyze_page(url: str, class_names: List[str], fetcher: PageFetcher) -> PageResult:
    """
    3.0 Analyze one page, capturing any failure in the result.
    """
    try:
        return PageResult(url=url, counts=analyze_page(url, class_names, fetcher))
    except Exception as e:
        return PageResult(url=url, error=e)


def run(
    sitemap_urls: List[str],
    class_names: List[str],
    fetcher: Optional[PageFetcher] = None,
    reporter: Optional[Reporter] = None,
) -> CrawlSummary:
    """
    4.0 Run a full crawl and return its summary.

    Args:
        sitemap_urls: Sitemaps to read, in order
        class_names: CSS class names to count (without the leading dot)
        fetcher: PageFetcher to use (default: one built from defaults)
        reporter: Event sink (default: LoggingReporter)

    Raises:
        SitemapError: any sitemap could not be fetched or parsed
    """
    fetcher = fetcher or PageFetcher()
    reporter = reporter or LoggingReporter()

    summary = CrawlSummary(class_names=list(class_names))
    summary.totals = {class_name: 0 for class_name in summary.class_names}

    # 4.1 Sitemap phase: errors propagate
    summary.page_urls = collect_page_urls(sitemap_urls, fetcher, reporter)
    logger.info(f"Gathered {len(summary.page_urls)} page URLs from {len(sitemap_urls)} sitemaps")

    # 4.2 Page phase: fold each page's counts into the totals
    for url in summary.page_urls:
        result = try_analyze_page(url, summary.class_names, fetcher)
        summary.page_results.append(result)

        if not result.ok:
            reporter.page_failed(url, result.error)
            continue

        for index, class_name in enumerate(summary.class_names):
            count = result.counts[class_name]
            if count > 0:
                reporter.class_found(url, class_name, count, index)
            summary.totals[class_name] += count
        reporter.page_analyzed(url)

    # 4.3 Totals in class input order
    for class_name in summary.class_names:
        reporter.total(class_name, summary.totals[class_name])

    logger.info(
        f"Analyzed {summary.analyzed_count} of {len(summary.page_urls)} pages "
        f"({len(summary.failures)} failed)"
    )
    return summary


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Count CSS class usage across every page listed in a set of sitemaps"
    )
    parser.add_argument(
        "--config", "-c",
        default=CONFIG_FILE_PATH,
        help=f"Path to JSON config (default: {CONFIG_FILE_PATH}; built-in defaults if missing)"
    )
    parser.add_argument(
        "--sitemap", "-s",
        action="append",
        dest="sitemaps",
        help="Sitemap URL to crawl (repeatable; replaces configured sitemaps)"
    )
    parser.add_argument(
        "--class-name", "-k",
        action="append",
        dest="class_names",
        help="CSS class name to count, without the dot (repeatable; replaces configured classes)"
    )
    parser.add_argument(
        "--output-dir", "-o",
        default=None,
        help="Write per-page and total counts as CSV into this directory"
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write log output to this file"
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable ANSI colors in console output"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    5.0 CLI entry point.
    """
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    setup_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
        use_color=not args.no_color,
    )

    try:
        config: Dict[str, Any] = load_config(args.config)
        config = apply_overrides(
            config,
            sitemap_urls=args.sitemaps,
            class_names=args.class_names,
            output_dir=args.output_dir,
        )
    except ConfigError as e:
        parser.error(str(e))

    logger.info("=" * 60)
    logger.info("Starting sitemap class count")
    logger.info(f"Sitemaps: {len(config['sitemap_urls'])}, classes: {', '.join(config['class_names'])}")
    logger.info("=" * 60)

    fetcher = PageFetcher(config=config)
    try:
        summary = run(config["sitemap_urls"], config["class_names"], fetcher=fetcher)
    except SitemapError as e:
        logger.critical(f"Aborting run: {e}")
        raise

    if config.get("output_dir"):
        ResultWriter(output_dir=config["output_dir"]).save(summary)

    return 0


if __name__ == "__main__":
    sys.exit(main())
