"""
1.0 Reporting Module
Console output for a crawl run.

The aggregator never prints directly; it calls a Reporter. LoggingReporter
turns each event into a log record, and ColorFormatter highlights the
per-class lines.
"""

import logging
import sys
from typing import Optional

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# ANSI 31..37: red, green, yellow, blue, magenta, cyan, white
ANSI_FIRST_COLOR = 31
ANSI_COLOR_COUNT = 7
ANSI_RESET = "\x1b[0m"


class ColorFormatter(logging.Formatter):
    """
    2.0 Wraps records carrying a `color_index` attribute in an ANSI color.
    """

    def __init__(self, fmt: Optional[str] = LOG_FORMAT, use_color: bool = True):
        super().__init__(fmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color_index = getattr(record, "color_index", None)
        if not self.use_color or color_index is None:
            return text
        color_code = ANSI_FIRST_COLOR + (color_index % ANSI_COLOR_COUNT)
        return f"\x1b[{color_code}m{text}{ANSI_RESET}"


class _BelowLevel(logging.Filter):
    def __init__(self, level: int):
        super().__init__()
        self.level = level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.level


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None, use_color: bool = True) -> None:
    """
    3.0 Configure the root logger for a CLI run.

    INFO-level progress goes to stdout, warnings and errors go to stderr. The
    optional log file never gets ANSI codes.
    """
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.addFilter(_BelowLevel(logging.WARNING))
    stdout_handler.setFormatter(ColorFormatter(use_color=use_color))

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(ColorFormatter(use_color=use_color))

    handlers = [stdout_handler, stderr_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)


class Reporter:
    """
    4.0 Sink interface called by the aggregator. The base class ignores every event.
    """

    def sitemap_started(self, sitemap_url: str) -> None:
        pass

    def sitemap_parsed(self, sitemap_url: str, url_count: int) -> None:
        pass

    def class_found(self, url: str, class_name: str, count: int, index: int) -> None:
        pass

    def page_analyzed(self, url: str) -> None:
        pass

    def page_failed(self, url: str, error: Exception) -> None:
        pass

    def total(self, class_name: str, count: int) -> None:
        pass


class LoggingReporter(Reporter):
    """
    4.1 Reporter that writes every event through the logging module.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def sitemap_started(self, sitemap_url: str) -> None:
        self.log.info(f"Downloading sitemap {sitemap_url}")

    def sitemap_parsed(self, sitemap_url: str, url_count: int) -> None:
        self.log.info(f"URL set {sitemap_url} contains {url_count} page URLs.")

    def class_found(self, url: str, class_name: str, count: int, index: int) -> None:
        self.log.info(
            f"Found {count} instances of .{class_name} in {url}",
            extra={"color_index": index},
        )

    def page_analyzed(self, url: str) -> None:
        self.log.info(f"Analyzed HTML for {url}")

    def page_failed(self, url: str, error: Exception) -> None:
        self.log.error(f"Error processing {url}: {error}")

    def total(self, class_name: str, count: int) -> None:
        self.log.info(f"Total instances of .{class_name}: {count}")
