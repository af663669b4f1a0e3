"""
Page Analyzer Module
Counts elements carrying each tracked CSS class on a single page.
"""

import logging
from typing import Dict, List

from bs4 import BeautifulSoup

from sitemap_class_counter.sitemap_fetcher import PageFetcher

logger = logging.getLogger(__name__)


def count_class_names(html: str, class_names: List[str]) -> Dict[str, int]:
    """
    Count the elements matching `.class_name` for every tracked class.

    BeautifulSoup splits the class attribute on whitespace, so `class_=` is an
    exact token match: "p-button" does not match "p-button--brand".
    """
    soup = BeautifulSoup(html, 'html.parser')
    return {
        class_name: len(soup.find_all(class_=class_name))
        for class_name in class_names
    }


def analyze_page(url: str, class_names: List[str], fetcher: PageFetcher) -> Dict[str, int]:
    """
    Fetch a page and return its per-class counts.

    Raises whatever the fetcher raises (FetchError, TransportError); the caller
    decides whether that is fatal.
    """
    html = fetcher.fetch_text(url)
    counts = count_class_names(html, class_names)
    logger.debug(f"Counted {sum(counts.values())} tracked elements on {url}")
    return counts
