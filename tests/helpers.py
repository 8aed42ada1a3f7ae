"""Shared payload builders for the tests."""

import gzip


def csv_lines(n_rows: int, n_cols: int = 3) -> list[str]:
    return [",".join([f"{i}", f"code_{i:05d}"] + [f"description {i}-{c}" for c in range(n_cols - 2)])
            for i in range(n_rows)]


def csv_text(n_rows: int, n_cols: int = 3) -> str:
    return "\n".join(csv_lines(n_rows, n_cols)) + "\n"


def gz(text: str) -> bytes:
    return gzip.compress(text.encode("utf-8"))


def truncated_gz(text: str, keep: float = 0.5) -> bytes:
    data = gz(text)
    return data[: int(len(data) * keep)]
