"""DataMatrix: validated, immutable matrix of data points."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd

from .exceptions import InvalidDataError
from .validation import validate_columns, validate_numeric_matrix


class DataMatrix:
    """Immutable container for the points a metric is built from.

    Stores the points as a contiguous float64 numpy array (row-major,
    one row per point, one column per dimension) alongside the column
    names when the points came from a DataFrame.
    """

    __slots__ = ("_values", "_columns")

    def __init__(self, data: Any, columns: Sequence | None = None) -> None:
        if columns is None and isinstance(data, pd.DataFrame):
            columns = data.columns
        self._values: np.ndarray = validate_numeric_matrix(data)
        self._values.flags.writeable = False
        if columns is not None:
            columns = tuple(columns)
            if len(columns) != self._values.shape[1]:
                raise InvalidDataError(
                    f"Got {len(columns)} column names for a matrix with "
                    f"{self._values.shape[1]} columns.",
                    "data",
                )
        self._columns: tuple | None = columns

    @classmethod
    def from_dataframe(
        cls,
        df: pd.DataFrame,
        dist_variables: str | Sequence[str] | None = None,
        exclude: Sequence[str] = (),
    ) -> DataMatrix:
        """Select the distance columns of df and wrap them.

        Parameters
        ----------
        df : DataFrame of data points, one row per point.
        dist_variables : column(s) to use. Defaults to all columns not
            listed in ``exclude``.
        exclude : columns dropped when ``dist_variables`` is None
            (e.g. the id column).
        """
        if dist_variables is None:
            columns = [c for c in df.columns if c not in set(exclude)]
            if not columns:
                raise InvalidDataError(
                    "No columns left to construct distances from.", "dist_variables"
                )
        else:
            columns = validate_columns(df, dist_variables, "dist_variables")
        return cls(df.loc[:, columns])

    @property
    def values(self) -> np.ndarray:
        """Float64 matrix (n_points, n_dims), read-only view."""
        v = self._values.view()
        v.flags.writeable = False
        return v

    @property
    def columns(self) -> tuple | None:
        """Column names of the distance dimensions, if known."""
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return self._values.shape

    @property
    def n_points(self) -> int:
        return self._values.shape[0]

    @property
    def n_dims(self) -> int:
        return self._values.shape[1]

    def covariance(self) -> np.ndarray:
        """Sample covariance matrix (n_dims, n_dims) of the columns."""
        if self.n_points < 2:
            raise InvalidDataError(
                "At least two data points are needed to estimate the covariance "
                f"matrix, got {self.n_points}.",
                "data",
            )
        return np.atleast_2d(np.cov(self._values, rowvar=False, ddof=1))
