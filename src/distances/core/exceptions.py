"""Exceptions raised while constructing a distance metric.

Every error derives from ``DistancesError`` and from the builtin exception a
caller would naturally expect (``TypeError`` for wrong input kinds,
``ValueError`` for wrong values), so either can be caught.
"""

from __future__ import annotations


class DistancesError(Exception):
    """Base class for all errors raised by this package.

    Attributes
    ----------
    argument : name of the offending argument (e.g. ``"normalize"``), or None.
    """

    def __init__(self, message: str, argument: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.argument = argument


class InvalidTypeError(DistancesError, TypeError):
    """Argument is not absent, a string, a vector or a matrix."""


class InvalidOptionError(DistancesError, ValueError):
    """String argument does not match a recognized keyword."""

    def __init__(
        self,
        message: str,
        argument: str | None = None,
        allowed: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, argument)
        self.allowed = allowed


class DimensionMismatchError(DistancesError, ValueError):
    """Vector or matrix size does not match the data's dimensionality."""


class NotSymmetricError(DistancesError, ValueError):
    """Matrix fails the symmetry check."""


class SingularMatrixError(DistancesError, ValueError):
    """Normalization matrix cannot be inverted."""


class NotPositiveSemidefiniteError(DistancesError, ValueError):
    """Cholesky factorization failed on a matrix that is not PSD."""


class InvalidDataError(DistancesError, ValueError):
    """Data points are empty or contain missing/non-finite values."""
