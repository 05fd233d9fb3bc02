"""MetricPipeline: normalize -> weight transform of the data points."""

from __future__ import annotations

import logging

import numpy as np

from ..config import DEFAULT_TOLERANCES, NumericalTolerances
from ..core.matrix import DataMatrix
from ..core.metric import DistanceMetric
from ..core.point_ids import PointIDs
from .factor import cholesky_lower, invert, is_identity

logger = logging.getLogger(__name__)


class MetricPipeline:
    """Builds a DistanceMetric from resolved normalization and weight matrices.

    Applies transforms in the required order:
    1. Normalize (whitening by the Cholesky factor of N^-1)
    2. Weight (scaling by the Cholesky factor of W)

    Both matrices are defined in the original coordinate system, so the
    order is fixed. Swapping it gives a different metric.
    """

    @staticmethod
    def normalize(
        values: np.ndarray,
        normalization: np.ndarray,
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        """Return values @ L where L L' = normalization^-1."""
        inverse = invert(normalization, "normalize", tolerances)
        factor = cholesky_lower(inverse, "normalize", tolerances)
        return values @ factor

    @staticmethod
    def weight(
        values: np.ndarray,
        weights: np.ndarray,
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> np.ndarray:
        """Return values @ Lw where Lw Lw' = weights."""
        factor = cholesky_lower(weights, "weights", tolerances)
        return values @ factor

    @classmethod
    def build(
        cls,
        data: DataMatrix,
        normalization: np.ndarray,
        weights: np.ndarray,
        *,
        ids: PointIDs | None = None,
        tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
    ) -> DistanceMetric:
        """Transform the data points and wrap them in a DistanceMetric.

        Parameters
        ----------
        data : DataMatrix
            Validated points (n_points, n_dims).
        normalization, weights : (n_dims, n_dims) ndarray
            Resolved matrices (see ``coercion.resolve_square_matrix``).
        ids : PointIDs, optional
            Identifiers, one per point, kept as given.
        tolerances : NumericalTolerances
            Singularity and semidefiniteness tolerances.

        Returns
        -------
        DistanceMetric. Raises instead of returning a partial result.
        """
        values = data.values

        # --- Step 1: Normalize ---
        if is_identity(normalization):
            logger.debug("Normalization is the identity; skipping")
        else:
            values = cls.normalize(values, normalization, tolerances)

        # --- Step 2: Weight (always after normalization) ---
        if is_identity(weights):
            logger.debug("Weights are the identity; skipping")
        else:
            values = cls.weight(values, weights, tolerances)

        return DistanceMetric(
            data=values,
            normalization=normalization,
            weights=weights,
            ids=ids,
            columns=data.columns,
        )
