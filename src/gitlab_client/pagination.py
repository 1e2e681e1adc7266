"""Pagination metadata policies for GitLab list endpoints.

GitLab reports pagination through the X-Total-Pages and X-Total response
headers. Both headers are optional: GitLab omits them for very large
collections, and proxies sometimes strip them. Missing or malformed
metadata is never an error here.
"""

from typing import Optional

TOTAL_PAGES_HEADER = "X-Total-Pages"
TOTAL_COUNT_HEADER = "X-Total"


def parse_total_pages(value: Optional[str]) -> int:
    """Parse the page count header.

    Absent or unparsable page count is treated as a single page: the
    returned 0 tells the aggregator that there is nothing beyond page 1.

    Args:
        value: Raw X-Total-Pages header value (may be None)

    Returns:
        Number of pages, or 0 when unknown
    """
    try:
        pages = int(str(value).strip())
    except (TypeError, ValueError):
        return 0
    return pages if pages > 0 else 0


def parse_total_count(value: Optional[str], fallback: int) -> int:
    """Parse the total record count header, using fallback when unknown."""
    try:
        total = int(str(value).strip())
    except (TypeError, ValueError):
        return fallback
    return total if total >= 0 else fallback
