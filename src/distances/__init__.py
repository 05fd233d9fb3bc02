"""distances: normalized, weighted and Mahalanobis distance metrics as Euclidean space."""

import logging

from ._version import __version__
from .api import distances
from .config import DEFAULT_TOLERANCES, NumericalTolerances
from .core.exceptions import (
    DistancesError,
    InvalidTypeError,
    InvalidOptionError,
    DimensionMismatchError,
    NotSymmetricError,
    SingularMatrixError,
    NotPositiveSemidefiniteError,
    InvalidDataError,
)
from .core.matrix import DataMatrix
from .core.metric import DistanceMetric
from .core.point_ids import PointIDs
from .transform.coercion import (
    IdentitySpec,
    PresetSpec,
    DiagonalSpec,
    ExplicitSpec,
    resolve_square_matrix,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "distances",
    "DistanceMetric",
    "DataMatrix",
    "PointIDs",
    "NumericalTolerances",
    "DEFAULT_TOLERANCES",
    "IdentitySpec",
    "PresetSpec",
    "DiagonalSpec",
    "ExplicitSpec",
    "resolve_square_matrix",
    "DistancesError",
    "InvalidTypeError",
    "InvalidOptionError",
    "DimensionMismatchError",
    "NotSymmetricError",
    "SingularMatrixError",
    "NotPositiveSemidefiniteError",
    "InvalidDataError",
]
