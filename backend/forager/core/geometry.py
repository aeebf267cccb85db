"""
Points on the continuous plane and the grid nodes derived from them.

Coordinate system:
- (0, 0) is top-left
- x increases going right
- y increases going down
"""

from dataclasses import dataclass
import math
from typing import Tuple

EPSILON = 1e-6


def euclidean(a, b) -> float:
    """Straight-line distance between two points with x/y attributes."""
    return math.hypot(b.x - a.x, b.y - a.y)


def manhattan(a, b) -> float:
    return abs(b.x - a.x) + abs(b.y - a.y)


@dataclass
class Location:
    """A mutable position on the plane."""
    x: float
    y: float

    def copy(self) -> "Location":
        return Location(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other) -> float:
        return euclidean(self, other)

    def is_at(self, other, tolerance: float = EPSILON) -> bool:
        """Near-equality test."""
        return euclidean(self, other) <= tolerance

    def moved_toward(self, target: "Location", max_distance: float) -> "Location":
        """
        Return the point reached by travelling at most max_distance toward target.

        Lands exactly on target when it is within reach.
        """
        distance = euclidean(self, target)
        if distance <= max_distance:
            return target.copy()
        ratio = max_distance / distance
        return Location(
            x=self.x + (target.x - self.x) * ratio,
            y=self.y + (target.y - self.y) * ratio,
        )

    def to_node(self, stride: float) -> "Node":
        return Node.from_location(self, stride)


@dataclass(frozen=True, order=True)
class Node:
    """A cell of the search grid. Only used inside path search."""
    col: int
    row: int

    @classmethod
    def from_location(cls, location: Location, stride: float) -> "Node":
        return cls(col=round(location.x / stride), row=round(location.y / stride))

    def to_location(self, stride: float) -> Location:
        return Location(self.col * stride, self.row * stride)

    def offset(self, dcol: int, drow: int) -> "Node":
        return Node(self.col + dcol, self.row + drow)
