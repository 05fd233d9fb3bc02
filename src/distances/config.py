"""Numerical tolerances used when validating and factoring matrices."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class NumericalTolerances:
    """Tolerances for symmetry, semidefiniteness and singularity checks.

    symmetry : relative tolerance when comparing a matrix to its transpose.
    psd : smallest eigenvalue may be as low as ``-psd * max(1, |largest|)``
        and the matrix still counts as positive-semidefinite.
    singular : a matrix whose reciprocal condition number falls below this
        is treated as not invertible.
    """

    symmetry: float = 1e-8
    psd: float = 1e-10
    singular: float = float(np.finfo(np.float64).eps)

    def __post_init__(self) -> None:
        for name in ("symmetry", "psd", "singular"):
            value = getattr(self, name)
            if not value >= 0.0:
                raise ValueError(
                    f"Tolerance '{name}' must be a non-negative number, got {value!r}."
                )


DEFAULT_TOLERANCES = NumericalTolerances()
