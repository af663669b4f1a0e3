"""
1.0 Data Processor Module
Writes crawl results to CSV.

Layout:
    <output_dir>/
        class_counts_by_page.csv   (one row per page URL, one "class:<name>" column per class)
        class_counts_totals.csv    (class_name, total_count)
"""

import pandas as pd
import os
import logging
from typing import Dict, List, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from sitemap_class_counter.main import CrawlSummary

logger = logging.getLogger(__name__)

# 1.1 Column name constants for consistency
COL_URL = "url"
COL_STATUS = "status"
COL_ERROR = "error"
COL_CLASS_NAME = "class_name"
COL_TOTAL_COUNT = "total_count"
CLASS_COLUMN_PREFIX = "class:"

STATUS_ANALYZED = "analyzed"
STATUS_FAILED = "failed"

BY_PAGE_FILENAME = "class_counts_by_page.csv"
TOTALS_FILENAME = "class_counts_totals.csv"


def class_column(class_name: str) -> str:
    """Per-class column name, e.g. "class:p-button"."""
    return f"{CLASS_COLUMN_PREFIX}{class_name}"


class ResultWriter:
    """
    2.0 ResultWriter Class
    Turns a CrawlSummary into DataFrames and saves them as CSV.
    """

    def __init__(self, output_dir: str = "output"):
        self.output_dir = output_dir
        os.makedirs(self.output_dir, exist_ok=True)
        logger.info(f"ResultWriter initialized with output directory: {output_dir}")

    def build_page_frame(self, summary: "CrawlSummary") -> pd.DataFrame:
        """
        2.1 One row per processed page. Failed pages have empty counts.
        """
        columns = [COL_URL, COL_STATUS, COL_ERROR] + [class_column(c) for c in summary.class_names]
        rows: List[Dict[str, Any]] = []
        for result in summary.page_results:
            row: Dict[str, Any] = {
                COL_URL: result.url,
                COL_STATUS: STATUS_ANALYZED if result.ok else STATUS_FAILED,
                COL_ERROR: None if result.ok else str(result.error),
            }
            for class_name in summary.class_names:
                row[class_column(class_name)] = result.counts.get(class_name, 0) if result.ok else None
            rows.append(row)
        df = pd.DataFrame(rows, columns=columns)
        # Keep counts integral even when failed rows leave gaps
        for class_name in summary.class_names:
            df[class_column(class_name)] = df[class_column(class_name)].astype("Int64")
        return df

    def build_totals_frame(self, summary: "CrawlSummary") -> pd.DataFrame:
        """
        2.2 Totals in class input order.
        """
        return pd.DataFrame(
            [
                {COL_CLASS_NAME: class_name, COL_TOTAL_COUNT: summary.totals[class_name]}
                for class_name in summary.class_names
            ],
            columns=[COL_CLASS_NAME, COL_TOTAL_COUNT],
        )

    def save(self, summary: "CrawlSummary") -> Dict[str, str]:
        """
        2.3 Write both CSV files and return their paths.
        """
        paths = {
            "by_page_csv": os.path.join(self.output_dir, BY_PAGE_FILENAME),
            "totals_csv": os.path.join(self.output_dir, TOTALS_FILENAME),
        }
        self.build_page_frame(summary).to_csv(paths["by_page_csv"], index=False)
        self.build_totals_frame(summary).to_csv(paths["totals_csv"], index=False)
        logger.info(f"Saved {len(summary.page_results)} page rows to {paths['by_page_csv']}")
        logger.info(f"Saved totals to {paths['totals_csv']}")
        return paths
