"""Immutable 2D vector used for positions, sizes and speeds.

Grid units throughout: one unit is one plan cell, y grows downward.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """A 2D point or displacement. Every operation returns a new Vector."""
    x: float
    y: float

    def plus(self, other: "Vector") -> "Vector":
        """Component-wise sum."""
        return Vector(self.x + other.x, self.y + other.y)

    def times(self, factor: float) -> "Vector":
        """Component-wise scale."""
        return Vector(self.x * factor, self.y * factor)
