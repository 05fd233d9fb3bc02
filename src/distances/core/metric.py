"""DistanceMetric: immutable record of a constructed distance metric."""

from __future__ import annotations

import numpy as np

from .point_ids import PointIDs


def _readonly(arr: np.ndarray) -> np.ndarray:
    v = arr.view()
    v.flags.writeable = False
    return v


def _frozen_copy(arr: np.ndarray) -> np.ndarray:
    owned = np.array(arr, dtype=np.float64, order="C")
    owned.flags.writeable = False
    return owned


class DistanceMetric:
    """Transformed data points plus the matrices used to transform them.

    Euclidean distance between two rows of ``data`` equals the normalized
    and weighted distance between the corresponding original points::

        sqrt((x - y) N^-1/2 W (N^-1/2)' (x - y)')

    ``normalization`` and ``weights`` are kept in the original coordinate
    system for introspection; distances only need ``data``.

    Immutable: every array is returned as a read-only view and attributes
    cannot be reassigned.
    """

    __slots__ = ("_data", "_normalization", "_weights", "_ids", "_columns")

    def __init__(
        self,
        data: np.ndarray,
        normalization: np.ndarray,
        weights: np.ndarray,
        ids: PointIDs | None = None,
        columns: tuple | None = None,
    ) -> None:
        n_dims = data.shape[1]
        for name, mat in (("normalization", normalization), ("weights", weights)):
            if mat.shape != (n_dims, n_dims):
                raise ValueError(
                    f"{name} matrix has shape {mat.shape}, expected ({n_dims}, {n_dims})."
                )
        if ids is not None and len(ids) != data.shape[0]:
            raise ValueError(
                f"Got {len(ids)} ids for {data.shape[0]} data points."
            )
        object.__setattr__(self, "_data", _frozen_copy(data))
        object.__setattr__(self, "_normalization", _frozen_copy(normalization))
        object.__setattr__(self, "_weights", _frozen_copy(weights))
        object.__setattr__(self, "_ids", ids)
        object.__setattr__(self, "_columns", columns)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable.")

    def __delattr__(self, name):
        raise AttributeError(f"{type(self).__name__} is immutable.")

    @property
    def data(self) -> np.ndarray:
        """Transformed points (n_points, n_dims), read-only view."""
        return _readonly(self._data)

    @property
    def normalization(self) -> np.ndarray:
        """Resolved normalization matrix (n_dims, n_dims), read-only view."""
        return _readonly(self._normalization)

    @property
    def weights(self) -> np.ndarray:
        """Resolved weighting matrix (n_dims, n_dims), read-only view."""
        return _readonly(self._weights)

    @property
    def ids(self) -> PointIDs | None:
        return self._ids

    @property
    def columns(self) -> tuple | None:
        """Names of the original columns the distances were built from."""
        return self._columns

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def n_points(self) -> int:
        return self._data.shape[0]

    @property
    def n_dims(self) -> int:
        return self._data.shape[1]

    def __len__(self) -> int:
        return self.n_points

    def __repr__(self) -> str:
        ids = "no ids" if self._ids is None else f"{len(self._ids)} ids"
        return f"DistanceMetric(n_points={self.n_points}, n_dims={self.n_dims}, {ids})"
