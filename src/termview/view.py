"""Row filtering and paging for whatever shell displays a loaded file."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple


def column_headers(column_count: int) -> List[str]:
    # the files have no header row, so columns get placeholders
    return [f"Column {i + 1}" for i in range(column_count)]


def filter_rows(rows: Sequence[List[str]], term: str) -> List[List[str]]:
    """Rows where any field contains `term`, case-insensitively."""
    if not term:
        return list(rows)
    needle = term.lower()
    return [row for row in rows if any(needle in field.lower() for field in row)]


def paginate(rows: Sequence[List[str]], page: int, page_size: int) -> Tuple[List[List[str]], int]:
    """Return (rows on `page`, total page count). Pages are 1-based; out of range pages clamp."""
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    total_pages = max(1, math.ceil(len(rows) / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size
    return list(rows[start:start + page_size]), total_pages
