"""Matrix coercion: turn normalize/weights arguments into square matrices.

A caller may pass nothing, a preset name, a vector or a matrix. Each is
parsed into one of the ``MatrixSpec`` variants, which then resolves to a
concrete (dimension x dimension) float64 matrix:

- ``IdentitySpec``   -> identity
- ``PresetSpec``     -> matrix computed from the data (e.g. its covariance)
- ``DiagonalSpec``   -> vector placed on the diagonal
- ``ExplicitSpec``   -> matrix used as given, after shape/symmetry checks

Positive-semidefiniteness is not checked here; factoring the matrix does
that (see ``factor.cholesky_lower``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Union

import numpy as np

from ..config import DEFAULT_TOLERANCES, NumericalTolerances
from ..core.exceptions import (
    DimensionMismatchError,
    InvalidDataError,
    InvalidOptionError,
    InvalidTypeError,
    NotSymmetricError,
)
from ..core.matrix import DataMatrix

logger = logging.getLogger(__name__)

NORMALIZE_PRESETS = ("none", "mahalanobize", "studentize")
WEIGHT_PRESETS: tuple[str, ...] = ()
PRESET_ALIASES = {"mahalanobis": "mahalanobize"}


def as_real_array(
    value: Any,
    argument: str,
    ndims: tuple[int, ...] = (1, 2),
) -> np.ndarray:
    """Convert value to a finite float64 array with one of the allowed ndims.

    Returns a copy.
    """
    if isinstance(value, (bool, dict, set, frozenset, str, bytes)):
        raise InvalidTypeError(
            f"'{argument}' must be a numeric vector or matrix, "
            f"got {type(value).__name__}.",
            argument,
        )
    try:
        arr = np.asarray(value)
    except (TypeError, ValueError):
        raise InvalidTypeError(
            f"'{argument}' must be a numeric vector or matrix; could not convert "
            f"{type(value).__name__}.",
            argument,
        ) from None
    if (
        arr.dtype == np.bool_
        or not np.issubdtype(arr.dtype, np.number)
        or np.iscomplexobj(arr)
    ):
        raise InvalidTypeError(
            f"'{argument}' must contain real numbers, got dtype '{arr.dtype}'.",
            argument,
        )
    if arr.ndim not in ndims:
        kinds = {1: "a vector", 2: "a matrix"}
        expected = " or ".join(kinds[n] for n in ndims)
        raise InvalidTypeError(
            f"'{argument}' must be {expected}, got {arr.ndim} dimensions.",
            argument,
        )
    arr = np.array(arr, dtype=np.float64)
    if not np.all(np.isfinite(arr)):
        raise InvalidDataError(
            f"'{argument}' contains missing or non-finite values.", argument
        )
    return arr


@dataclass(frozen=True)
class IdentitySpec:
    """No transform: the identity matrix."""

    def resolve(
        self,
        dimension: int,
        data: DataMatrix | None = None,
        argument: str = "normalize",
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        return np.eye(dimension)


@dataclass(frozen=True)
class PresetSpec:
    """A named matrix derived from the data points."""

    name: str

    def resolve(
        self,
        dimension: int,
        data: DataMatrix | None = None,
        argument: str = "normalize",
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        if self.name == "none":
            return np.eye(dimension)
        if data is None:
            raise InvalidDataError(
                f"Preset '{self.name}' for '{argument}' needs the data points.",
                argument,
            )
        if data.n_dims != dimension:
            raise DimensionMismatchError(
                f"Data has {data.n_dims} dimensions, expected {dimension}.",
                argument,
            )
        cov = data.covariance()
        if self.name == "mahalanobize":
            return cov
        if self.name == "studentize":
            return np.diag(np.diag(cov))
        raise InvalidOptionError(
            f"Unknown preset '{self.name}' for '{argument}'.",
            argument,
            NORMALIZE_PRESETS,
        )


@dataclass(frozen=True, eq=False)
class DiagonalSpec:
    """A vector expanded to a diagonal matrix."""

    vector: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "vector", as_real_array(self.vector, "vector", (1,)))

    def resolve(
        self,
        dimension: int,
        data: DataMatrix | None = None,
        argument: str = "normalize",
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        if len(self.vector) != dimension:
            raise DimensionMismatchError(
                f"'{argument}' vector has length {len(self.vector)}, "
                f"but the data has {dimension} dimensions.",
                argument,
            )
        return np.diag(self.vector)


@dataclass(frozen=True, eq=False)
class ExplicitSpec:
    """A caller-supplied square matrix."""

    matrix: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "matrix", as_real_array(self.matrix, "matrix", (2,)))

    def resolve(
        self,
        dimension: int,
        data: DataMatrix | None = None,
        argument: str = "normalize",
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        rows, cols = self.matrix.shape
        if rows != cols:
            raise DimensionMismatchError(
                f"'{argument}' matrix must be square, got shape {self.matrix.shape}.",
                argument,
            )
        if rows != dimension:
            raise DimensionMismatchError(
                f"'{argument}' matrix has shape {self.matrix.shape}, "
                f"but the data has {dimension} dimensions.",
                argument,
            )
        check_symmetric(self.matrix, argument, tolerances)
        return self.matrix.copy()


MatrixSpec = Union[IdentitySpec, PresetSpec, DiagonalSpec, ExplicitSpec]


def match_option(value: str, allowed: tuple[str, ...], argument: str) -> str:
    """Match a string against the allowed keywords.

    Exact matches win; otherwise value must be a prefix of exactly one
    keyword. Matching is case-sensitive.
    """
    target = PRESET_ALIASES.get(value)
    if target is not None and target in allowed:
        return target
    if value in allowed:
        return value
    candidates = [opt for opt in allowed if value and opt.startswith(value)]
    if len(candidates) == 1:
        return candidates[0]
    if not allowed:
        raise InvalidOptionError(
            f"'{argument}' does not accept named options, got '{value}'. "
            "Pass a vector or a matrix instead.",
            argument,
            allowed,
        )
    reason = "is ambiguous" if candidates else "is not a valid option"
    raise InvalidOptionError(
        f"'{value}' {reason} for '{argument}'. Valid: {list(allowed)}",
        argument,
        allowed,
    )


def check_symmetric(
    matrix: np.ndarray,
    argument: str,
    tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
) -> None:
    """Raise NotSymmetricError unless matrix equals its transpose within tolerance."""
    scale = max(float(np.abs(matrix).max(initial=0.0)), np.finfo(np.float64).tiny)
    tol = tolerances.symmetry
    if not np.allclose(matrix, matrix.T, rtol=tol, atol=tol * scale):
        worst = float(np.abs(matrix - matrix.T).max())
        raise NotSymmetricError(
            f"'{argument}' matrix must be symmetric "
            f"(largest |m[i, j] - m[j, i]| is {worst:.3g}).",
            argument,
        )


def parse_matrix_spec(
    value: Any,
    argument: str = "normalize",
    presets: tuple[str, ...] = NORMALIZE_PRESETS,
) -> MatrixSpec:
    """Classify a normalize/weights argument into a MatrixSpec variant."""
    if isinstance(value, (IdentitySpec, DiagonalSpec, ExplicitSpec)):
        return value
    if isinstance(value, PresetSpec):
        return PresetSpec(match_option(value.name, presets, argument))
    if value is None:
        return IdentitySpec()
    if isinstance(value, str):
        return PresetSpec(match_option(value, presets, argument))
    arr = as_real_array(value, argument)
    if arr.ndim == 1:
        return DiagonalSpec(arr)
    return ExplicitSpec(arr)


def resolve_square_matrix(
    value: Any,
    dimension: int,
    data: DataMatrix | None = None,
    *,
    argument: str = "normalize",
    presets: tuple[str, ...] = NORMALIZE_PRESETS,
    tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Resolve a normalize/weights argument to a (dimension, dimension) matrix.

    Parameters
    ----------
    value : None, preset name, vector, matrix, or a MatrixSpec.
    dimension : number of dimensions of the data.
    data : the data points, needed by the covariance presets.
    argument : argument name used in error messages.
    presets : preset names this argument accepts.
    tolerances : numeric tolerances for the symmetry check.

    Returns
    -------
    float64 ndarray of shape (dimension, dimension). Not yet checked for
    positive-semidefiniteness.
    """
    if data is not None and not isinstance(data, DataMatrix):
        data = DataMatrix(data)
    spec = parse_matrix_spec(value, argument, presets)
    matrix = spec.resolve(dimension, data, argument, tolerances)
    logger.debug(
        "Resolved '%s' from %s to a %dx%d matrix",
        argument, type(spec).__name__, dimension, dimension,
    )
    return matrix
