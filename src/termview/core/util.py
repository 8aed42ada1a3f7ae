from __future__ import annotations
from typing import Dict, Any, Iterable, List
from .model import LoadResult
from ..view import column_headers


def result_asdict(res: LoadResult, *, fields: Iterable[str] | None = None,
                  rows: List[List[str]] | None = None) -> Dict[str, Any]:
    """Return a JSON-serialisable dict, optionally filtered.

    `rows` replaces the outcome's rows in the payload (a filtered or paged
    view); the summary counts always describe the full outcome.
    """
    meta = {
        "classification": res.classification.value,
        "stage": res.stage.value,
        "bytes_fetched": res.bytes_fetched,
        "requests_made": res.requests_made,
    }
    if not res.success or res.outcome is None:
        return {"success": False, "locator": res.locator, "error": res.error, **meta}

    outcome = res.outcome
    payload = {
        "locator": res.locator,
        "partial": res.is_partial,
        "truncated": outcome.is_truncated,
        "row_count": len(outcome.rows),
        "column_count": outcome.column_count,
        "columns": column_headers(outcome.column_count),
        "rows": outcome.rows if rows is None else rows,
    }
    if fields:
        wanted = set(fields)
        payload = {k: v for k, v in payload.items() if k in wanted}
    payload.update({"success": True, **meta})
    return payload
