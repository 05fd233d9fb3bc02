"""PointIDs: positional identifiers for the rows of a distance metric.

Immutable. Identifiers are stored as strings in row order and are not
required to be unique.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .validation import validate_ids


@dataclass(frozen=True)
class PointIDs:
    """Identifier side table, indexed by row position."""

    ids: tuple[str, ...]

    @classmethod
    def from_values(cls, values: Any, n_points: int) -> PointIDs:
        """Create PointIDs from any sequence of n_points values (coerced to str)."""
        return cls(ids=validate_ids(values, n_points))

    @property
    def size(self) -> int:
        """Number of identifiers (equal to the number of points)."""
        return len(self.ids)

    @property
    def has_duplicates(self) -> bool:
        return len(set(self.ids)) != len(self.ids)

    def __len__(self) -> int:
        return len(self.ids)

    def __getitem__(self, position: int) -> str:
        return self.ids[position]

    def __iter__(self):
        return iter(self.ids)

    def index_of(self, point_id: object) -> int | None:
        """Return the first row position of an identifier, or None if not found."""
        try:
            return self.ids.index(str(point_id))
        except ValueError:
            return None

    def positions_of(self, point_id: object) -> list[int]:
        """Return every row position carrying this identifier."""
        key = str(point_id)
        return [i for i, pid in enumerate(self.ids) if pid == key]

    def to_list(self) -> list[str]:
        return list(self.ids)
