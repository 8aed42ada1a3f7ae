from __future__ import annotations

import csv
import io
import logging
from typing import Iterator, List

from .model import ParseOutcome, ParseError

logger = logging.getLogger(__name__)


def _is_blank(row: List[str]) -> bool:
    return not row or (len(row) == 1 and not row[0].strip())


def _records(text: str) -> Iterator[List[str]]:
    # no header row: the first record is data
    for row in csv.reader(io.StringIO(text, newline="")):
        if not _is_blank(row):
            yield row


def materialize(text: str, cap: int | None = None) -> ParseOutcome:
    """Parse CSV text into rows of string fields.

    Parsing stops after ``cap`` rows when a cap is given. A tokenizer error
    part way through keeps the rows read so far; both cases mark the
    outcome truncated.
    """
    rows: List[List[str]] = []
    truncated = False
    records = _records(text)
    try:
        for row in records:
            rows.append(row)
            if cap is not None and len(rows) >= cap:
                truncated = True
                break
    except csv.Error as e:
        logger.warning("CSV tokenizer stopped after %d rows: %s", len(rows), e)
        truncated = True

    if not rows:
        raise ParseError("No rows found in the CSV file")
    if not rows[0]:
        raise ParseError("Unable to determine column structure")

    return ParseOutcome(rows=rows, is_truncated=truncated, column_count=len(rows[0]))
