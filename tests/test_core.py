import pytest

from termview.core.model import (
    Classification, LoadResult, LoadStage, LoadState, NetworkError, ParseOutcome, TermviewError,
)
from termview.core.util import result_asdict


def _ok(rows, classification=Classification.COMPLETE, truncated=False) -> LoadResult:
    return LoadResult(
        locator="https://example.com/gender.csv_0_0_0.csv.gz",
        classification=classification,
        outcome=ParseOutcome(rows=rows, is_truncated=truncated, column_count=len(rows[0])),
        error=None,
        stage=LoadStage.FULL_FETCH,
        bytes_fetched=120,
        requests_made=1,
    )


class TestLoadState:
    """Test the per-load state holder."""

    def test_single_classification(self):
        state = LoadState()
        assert state.stage is LoadStage.FULL_FETCH
        state.finish(Classification.COMPLETE)
        with pytest.raises(RuntimeError, match="already classified"):
            state.finish(Classification.FAILED, "late")

    def test_failed_reason(self):
        state = LoadState()
        state.finish(Classification.FAILED, "HTTP 404")
        assert state.reason == "HTTP 404"


class TestErrors:
    """Test the error taxonomy."""

    def test_network_error_status(self):
        err = NetworkError("HTTP 503 Service Unavailable", 503)
        assert isinstance(err, TermviewError)
        assert err.status == 503
        assert str(err) == "HTTP 503 Service Unavailable"

    def test_network_error_without_status(self):
        assert NetworkError("connection refused").status is None


class TestResultAsDict:
    """Test the result_asdict utility function."""

    def test_successful_result(self):
        res = _ok([["F", "female"], ["M", "male"]])
        output = result_asdict(res)
        assert output == {
            "success": True,
            "locator": res.locator,
            "partial": False,
            "truncated": False,
            "row_count": 2,
            "column_count": 2,
            "columns": ["Column 1", "Column 2"],
            "rows": [["F", "female"], ["M", "male"]],
            "classification": "complete",
            "stage": "full-fetch",
            "bytes_fetched": 120,
            "requests_made": 1,
        }

    def test_partial_result(self):
        res = _ok([["a"]], Classification.PARTIAL, truncated=True)
        output = result_asdict(res)
        assert output["partial"] is True
        assert output["truncated"] is True
        assert output["classification"] == "partial"

    def test_failed_result(self):
        res = LoadResult(
            locator="https://example.com/x.csv.gz",
            classification=Classification.FAILED,
            outcome=None,
            error="Failed to fetch data: HTTP 404",
            stage=LoadStage.FULL_FETCH,
            bytes_fetched=0,
            requests_made=1,
        )
        assert res.success is False
        assert result_asdict(res) == {
            "success": False,
            "locator": "https://example.com/x.csv.gz",
            "error": "Failed to fetch data: HTTP 404",
            "classification": "failed",
            "stage": "full-fetch",
            "bytes_fetched": 0,
            "requests_made": 1,
        }

    def test_rows_override(self):
        """A page of rows is emitted but counts describe the whole outcome."""
        res = _ok([["1"], ["2"], ["3"]])
        output = result_asdict(res, rows=[["2"]])
        assert output["rows"] == [["2"]]
        assert output["row_count"] == 3

    def test_field_filtering(self):
        res = _ok([["F", "female"]])
        output = result_asdict(res, fields=["row_count", "column_count"])
        assert output == {
            "success": True,
            "row_count": 1,
            "column_count": 2,
            "classification": "complete",
            "stage": "full-fetch",
            "bytes_fetched": 120,
            "requests_made": 1,
        }
