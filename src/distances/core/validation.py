"""Input validation with clear error messages."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidDataError, InvalidTypeError


def _preview(items: Sequence, limit: int = 5) -> str:
    """Format the first few items of a list, noting how many were left out."""
    items = list(items)
    text = f"{items[:limit]}"
    if len(items) > limit:
        text += f" (and {len(items) - limit} more)"
    return text


def validate_numeric_matrix(data: Any, argument: str = "data") -> np.ndarray:
    """Validate that data is a finite numeric n x d array.

    A 1-D input is taken as a single column. Returns a C-contiguous
    float64 copy.
    """
    if isinstance(data, pd.DataFrame):
        data = validate_numeric_frame(data, argument).to_numpy(
            dtype=np.float64, na_value=np.nan
        )
    try:
        arr = np.asarray(data)
    except (TypeError, ValueError):
        raise InvalidTypeError(
            f"'{argument}' must be a numeric matrix, got {type(data).__name__}.",
            argument,
        ) from None
    if arr.dtype == np.bool_ or not np.issubdtype(arr.dtype, np.number):
        raise InvalidTypeError(
            f"'{argument}' must be numeric, got values of dtype '{arr.dtype}'.",
            argument,
        )
    if np.iscomplexobj(arr):
        raise InvalidTypeError(f"'{argument}' must be real-valued.", argument)
    if arr.ndim == 1:
        arr = arr.reshape(-1, 1)
    if arr.ndim != 2:
        raise InvalidTypeError(
            f"'{argument}' must be a matrix (2 dimensions), got {arr.ndim} dimensions.",
            argument,
        )
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidDataError(
            f"'{argument}' is empty (shape {arr.shape}). "
            "Provide at least one data point and one dimension.",
            argument,
        )
    arr = np.array(arr, dtype=np.float64, order="C")
    bad_rows = np.flatnonzero(~np.isfinite(arr).all(axis=1))
    if len(bad_rows) > 0:
        raise InvalidDataError(
            f"'{argument}' contains missing or non-finite values in rows "
            f"{_preview(bad_rows.tolist())}.",
            argument,
        )
    return arr


def validate_numeric_frame(df: pd.DataFrame, argument: str = "data") -> pd.DataFrame:
    """Validate that every column of a DataFrame is numeric.

    Returns the validated DataFrame (unchanged).
    """
    if df.columns.has_duplicates:
        dupes = df.columns[df.columns.duplicated()].unique().tolist()
        raise InvalidDataError(
            f"Column names in '{argument}' must be unique. "
            f"Found duplicates: {_preview(dupes)}",
            argument,
        )
    numeric_df = df.select_dtypes(include=[np.number])
    if numeric_df.shape[1] != df.shape[1]:
        non_numeric = [c for c in df.columns if c not in numeric_df.columns]
        raise InvalidTypeError(
            f"All distance columns must be numeric. "
            f"Non-numeric columns: {_preview(non_numeric)}",
            argument,
        )
    return df


def validate_columns(
    df: pd.DataFrame,
    columns: str | Sequence[str],
    argument: str,
) -> list:
    """Validate that the named columns exist in df. Returns them as a list."""
    if isinstance(columns, str):
        columns = [columns]
    try:
        columns = list(columns)
    except TypeError:
        raise InvalidTypeError(
            f"'{argument}' must be a column name or a list of column names, "
            f"got {type(columns).__name__}.",
            argument,
        ) from None
    if len(columns) == 0:
        raise InvalidDataError(f"'{argument}' must name at least one column.", argument)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise KeyError(
            f"Columns named in '{argument}' not found in data: {_preview(missing)}. "
            f"Available: {_preview(list(df.columns), limit=10)}"
        )
    return columns


def validate_ids(ids: Any, n_points: int, argument: str = "id_variable") -> tuple[str, ...]:
    """Validate point identifiers and coerce each one to a string.

    Duplicates are allowed; ids are matched to rows by position.
    """
    if isinstance(ids, (str, bytes)) or not isinstance(
        ids, (Sequence, np.ndarray, pd.Series, pd.Index)
    ):
        raise InvalidTypeError(
            f"'{argument}' must be a sequence of identifiers, "
            f"got {type(ids).__name__}.",
            argument,
        )
    if isinstance(ids, np.ndarray) and ids.ndim != 1:
        raise InvalidTypeError(
            f"'{argument}' must be one-dimensional, got {ids.ndim} dimensions.",
            argument,
        )
    values = ids.tolist() if hasattr(ids, "tolist") else list(ids)
    if len(values) != n_points:
        raise InvalidDataError(
            f"'{argument}' has {len(values)} identifiers but the data has "
            f"{n_points} points.",
            argument,
        )
    return tuple(str(v) for v in values)
