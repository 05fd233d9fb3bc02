"""distances(): the main user-facing constructor."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import pandas as pd

from .config import DEFAULT_TOLERANCES, NumericalTolerances
from .core.exceptions import InvalidTypeError
from .core.matrix import DataMatrix
from .core.metric import DistanceMetric
from .core.point_ids import PointIDs
from .core.validation import validate_columns
from .transform.coercion import (
    NORMALIZE_PRESETS,
    WEIGHT_PRESETS,
    resolve_square_matrix,
)
from .transform.pipeline import MetricPipeline

logger = logging.getLogger(__name__)


def coerce_distance_data(
    data: Any,
    id_variable: Any = None,
    dist_variables: str | Sequence[str] | None = None,
) -> tuple[DataMatrix, PointIDs | None]:
    """Split the caller's data into the distance matrix and point ids.

    If ``data`` is a DataFrame, ``id_variable`` may name one of its
    columns; that column then supplies the ids and is left out of the
    distance columns unless ``dist_variables`` lists it. Otherwise
    ``id_variable`` must hold one id per data point.
    """
    id_column = None
    if isinstance(data, pd.DataFrame):
        if isinstance(id_variable, str):
            id_column = validate_columns(data, id_variable, "id_variable")[0]
            id_variable = data[id_column]
        matrix = DataMatrix.from_dataframe(
            data,
            dist_variables,
            exclude=() if id_column is None else (id_column,),
        )
    else:
        if dist_variables is not None:
            raise InvalidTypeError(
                "'dist_variables' can only be used when data is a pandas DataFrame, "
                f"got {type(data).__name__}.",
                "dist_variables",
            )
        if isinstance(id_variable, str):
            raise InvalidTypeError(
                "'id_variable' can only name a column when data is a pandas DataFrame. "
                "Pass one id per data point instead.",
                "id_variable",
            )
        matrix = data if isinstance(data, DataMatrix) else DataMatrix(data)

    ids = None
    if id_variable is not None:
        ids = PointIDs.from_values(id_variable, matrix.n_points)
    return matrix, ids


def distances(
    data: Any,
    id_variable: Any = None,
    dist_variables: str | Sequence[str] | None = None,
    normalize: Any = None,
    weights: Any = None,
    *,
    tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
) -> DistanceMetric:
    """Construct a distance metric for a set of data points.

    The metric between points x and y is::

        sqrt((x - y) N^-1/2 W (N^-1/2)' (x - y)')

    where N^-1/2 is the lower Cholesky factor of the inverse of the
    normalization matrix and W is the weighting matrix. The returned
    object stores the data already transformed, so plain Euclidean
    distance between its rows gives the metric.

    Usage::

        import distances as ds

        metric = ds.distances(df, normalize="mahalanobize", weights=[2, 1])
        metric.data        # transformed points
        metric.ids         # PointIDs or None

    Parameters
    ----------
    data : DataFrame, 2-D array-like or DataMatrix
        Data points, one row per point.
    id_variable : str or sequence, optional
        Column of ``data`` holding the ids (DataFrame only), or one id per
        point. Ids are stored as strings and need not be unique.
    dist_variables : str or list[str], optional
        Columns of ``data`` to use (DataFrame only). Defaults to every
        column except the id column.
    normalize : None, str, vector or matrix
        None or "none" for no normalization; "mahalanobize" (alias
        "mahalanobis") for the sample covariance matrix, giving
        Mahalanobis distances; "studentize" for its diagonal, giving
        normalized Euclidean distances. A vector is used as a diagonal
        matrix. Unambiguous prefixes of the option names are accepted.
    weights : None, vector or matrix
        Weighting applied after normalization. A vector is used as a
        diagonal matrix. Must be positive-semidefinite.
    tolerances : NumericalTolerances
        Tolerances for the symmetry, singularity and PSD checks.

    Returns
    -------
    DistanceMetric

    Raises
    ------
    InvalidTypeError, InvalidOptionError, DimensionMismatchError,
    NotSymmetricError, SingularMatrixError, NotPositiveSemidefiniteError,
    InvalidDataError
    """
    matrix, ids = coerce_distance_data(data, id_variable, dist_variables)

    normalization = resolve_square_matrix(
        normalize,
        matrix.n_dims,
        matrix,
        argument="normalize",
        presets=NORMALIZE_PRESETS,
        tolerances=tolerances,
    )
    weight_matrix = resolve_square_matrix(
        weights,
        matrix.n_dims,
        matrix,
        argument="weights",
        presets=WEIGHT_PRESETS,
        tolerances=tolerances,
    )

    metric = MetricPipeline.build(
        matrix, normalization, weight_matrix, ids=ids, tolerances=tolerances
    )
    logger.debug("Constructed %r", metric)
    return metric
