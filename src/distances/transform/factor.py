"""Matrix inversion and Cholesky factoring for the metric transform."""

from __future__ import annotations

import logging

import numpy as np

from ..config import DEFAULT_TOLERANCES, NumericalTolerances
from ..core.exceptions import NotPositiveSemidefiniteError, SingularMatrixError

logger = logging.getLogger(__name__)


def is_identity(matrix: np.ndarray) -> bool:
    """True if matrix is exactly the identity."""
    return (
        matrix.ndim == 2
        and matrix.shape[0] == matrix.shape[1]
        and np.array_equal(matrix, np.eye(matrix.shape[0]))
    )


def invert(
    matrix: np.ndarray,
    argument: str = "normalize",
    tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Invert a symmetric matrix, raising SingularMatrixError if it is singular.

    The result is symmetrized to remove round-off from the inversion.
    """
    from scipy import linalg

    cond = np.linalg.cond(matrix)
    if not np.isfinite(cond) or 1.0 / cond < tolerances.singular:
        raise SingularMatrixError(
            f"'{argument}' matrix is singular and cannot be inverted "
            f"(condition number {cond:.3g}).",
            argument,
        )
    try:
        inverse = linalg.inv(matrix)
    except linalg.LinAlgError as exc:
        raise SingularMatrixError(
            f"'{argument}' matrix cannot be inverted: {exc}", argument
        ) from exc
    return (inverse + inverse.T) / 2.0


def cholesky_lower(
    matrix: np.ndarray,
    argument: str = "weights",
    tolerances: NumericalTolerances = DEFAULT_TOLERANCES,
) -> np.ndarray:
    """Return a factor F of a positive-semidefinite matrix M with F @ F.T == M.

    F is the lower-triangular Cholesky factor whenever M is positive
    definite. A matrix that is only semidefinite (singular up to round-off)
    gets the square-root factor ``V sqrt(lambda)`` from its eigendecomposition.
    Anything with an eigenvalue below ``-tolerances.psd * max(1, |lambda|max)``
    raises NotPositiveSemidefiniteError.
    """
    from scipy import linalg

    try:
        return linalg.cholesky(matrix, lower=True)
    except linalg.LinAlgError:
        eigvals, eigvecs = np.linalg.eigh(matrix)

    bound = -tolerances.psd * max(1.0, float(np.abs(eigvals).max()))
    smallest = float(eigvals.min())
    if smallest < bound:
        raise NotPositiveSemidefiniteError(
            f"'{argument}' matrix must be positive-semidefinite "
            f"(smallest eigenvalue is {smallest:.3g}).",
            argument,
        )
    logger.debug(
        "'%s' matrix is semidefinite (smallest eigenvalue %.3g); "
        "using eigendecomposition factor",
        argument, smallest,
    )
    return eigvecs * np.sqrt(np.clip(eigvals, 0.0, None))
