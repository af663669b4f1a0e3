"""
Sitemap Class Counter - Source Package

Modules:
- config: Configuration loading and validation
- errors: Fatal (sitemap) and recoverable (page) error types
- sitemap_fetcher: HTTP fetching for sitemaps and pages
- sitemap_parser: XML parsing of urlset sitemaps
- page_analyzer: CSS class counting for HTML pages
- reporting: Console reporter and colored log formatting
- data_processor: CSV export of per-page counts and totals
- main: Crawl orchestration and CLI entry point
"""

__version__ = "1.0.0"
