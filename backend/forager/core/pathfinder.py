"""
A* search over a regular grid laid on the continuous plane.

The grid places a node every `stride` units across the world bounds. Nodes
are 8-connected; a diagonal move may not cut past a blocked node. The frontier
is ordered by (f, g, insertion order), which makes every search reproducible.
"""

from dataclasses import dataclass
import heapq
import itertools
import math
from typing import Callable, Dict, List, Optional, Tuple

from ..errors import (
    ERROR_EXPANSION_LIMIT,
    ERROR_FRONTIER_EXHAUSTED,
    ERROR_GOAL_BLOCKED,
    ERROR_GOAL_OUT_OF_BOUNDS,
    ERROR_NON_POSITIVE_BOUNDS,
    ERROR_NON_POSITIVE_STRIDE,
    InvalidConfigurationError,
    PathNotFoundError,
)
from .geometry import Location, Node, euclidean

SQRT2 = math.sqrt(2.0)

# (dcol, drow, cost multiplier)
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int, float], ...] = (
    (0, -1, 1.0),
    (1, 0, 1.0),
    (0, 1, 1.0),
    (-1, 0, 1.0),
    (1, -1, SQRT2),
    (1, 1, SQRT2),
    (-1, 1, SQRT2),
    (-1, -1, SQRT2),
)


@dataclass(frozen=True)
class Path:
    """
    An ordered, non-empty sequence of waypoints ending at a destination.

    Paths are never modified after creation; a creature that needs to go
    somewhere else gets a new Path.
    """
    waypoints: Tuple[Location, ...]
    destination: Location

    def __post_init__(self):
        if not self.waypoints:
            raise ValueError("a path needs at least one waypoint")

    @classmethod
    def to(cls, destination: Location) -> "Path":
        """Single-waypoint path straight to destination."""
        return cls(waypoints=(destination.copy(),), destination=destination.copy())

    def __len__(self) -> int:
        return len(self.waypoints)

    def to_list(self) -> List[Tuple[float, float]]:
        return [w.as_tuple() for w in self.waypoints]


class Pathfinder:
    """
    Finds routes between two points of a bounded world.

    Args:
        width, height: World bounds. Nodes outside [0, width] x [0, height]
            are never generated.
        stride: Distance between neighboring grid nodes.
        is_blocked: Optional predicate telling whether a location is
            impassable.
        max_expansions: Upper bound on expanded nodes per search.
    """

    def __init__(
        self,
        width: float,
        height: float,
        stride: float = 10.0,
        is_blocked: Optional[Callable[[Location], bool]] = None,
        max_expansions: int = 50_000,
    ):
        if stride <= 0:
            raise InvalidConfigurationError(ERROR_NON_POSITIVE_STRIDE.format(value=stride))
        if width <= 0 or height <= 0:
            raise InvalidConfigurationError(
                ERROR_NON_POSITIVE_BOUNDS.format(width=width, height=height)
            )
        self.width = width
        self.height = height
        self.stride = stride
        self.is_blocked = is_blocked or (lambda location: False)
        self.max_expansions = max_expansions

        self._max_col = int(math.floor(width / stride + 1e-9))
        self._max_row = int(math.floor(height / stride + 1e-9))

    def estimate_cost(self, start, goal) -> float:
        """Admissible estimate of the route cost from start to goal."""
        return euclidean(start, goal)

    def find_path(self, start: Location, goal: Location, tolerance: Optional[float] = None) -> Path:
        """
        Find a route from start to goal.

        The first waypoint is the grid node nearest start (or goal itself when
        both share a node); the last one is always goal. Search stops at the
        first expanded node within `tolerance` of goal (defaults to one
        stride).

        Raises:
            PathNotFoundError: goal is out of bounds or blocked, or no route
                was found within max_expansions.
        """
        if tolerance is None:
            tolerance = self.stride

        if not self._in_world(goal):
            raise PathNotFoundError(start, goal, ERROR_GOAL_OUT_OF_BOUNDS)
        if self.is_blocked(goal):
            raise PathNotFoundError(start, goal, ERROR_GOAL_BLOCKED)

        start_node = self._snap(start)
        goal_node = self._snap(goal)

        counter = itertools.count()
        g_score: Dict[Node, float] = {start_node: 0.0}
        came_from: Dict[Node, Node] = {}
        closed = set()
        frontier: List[Tuple[float, float, int, Node]] = []
        heapq.heappush(
            frontier,
            (self._heuristic(start_node, goal), 0.0, next(counter), start_node),
        )

        expansions = 0
        while frontier:
            _, g, _, current = heapq.heappop(frontier)
            if current in closed:
                continue  # Stale entry
            closed.add(current)

            if current == goal_node or self._node_location(current).is_at(goal, tolerance):
                return self._reconstruct(came_from, current, goal)

            expansions += 1
            if expansions > self.max_expansions:
                raise PathNotFoundError(
                    start, goal, ERROR_EXPANSION_LIMIT.format(limit=self.max_expansions)
                )

            for neighbor, step_cost in self._neighbors(current):
                if neighbor in closed:
                    continue
                tentative_g = g + step_cost
                if tentative_g < g_score.get(neighbor, math.inf):
                    g_score[neighbor] = tentative_g
                    came_from[neighbor] = current
                    f = tentative_g + self._heuristic(neighbor, goal)
                    heapq.heappush(frontier, (f, tentative_g, next(counter), neighbor))

        raise PathNotFoundError(start, goal, ERROR_FRONTIER_EXHAUSTED)

    def _reconstruct(self, came_from: Dict[Node, Node], end: Node, goal: Location) -> Path:
        nodes = [end]
        while nodes[-1] in came_from:
            nodes.append(came_from[nodes[-1]])
        nodes.reverse()

        waypoints = [self._node_location(n) for n in nodes]
        if len(waypoints) == 1 or waypoints[-1].is_at(goal):
            waypoints[-1] = goal.copy()
        else:
            waypoints.append(goal.copy())
        return Path(waypoints=tuple(waypoints), destination=goal.copy())

    def _neighbors(self, node: Node):
        for dcol, drow, multiplier in NEIGHBOR_OFFSETS:
            neighbor = node.offset(dcol, drow)
            if not self._in_grid(neighbor) or self._blocked(neighbor):
                continue
            if dcol and drow:
                # No corner cutting
                if self._blocked(node.offset(dcol, 0)) or self._blocked(node.offset(0, drow)):
                    continue
            yield neighbor, self.stride * multiplier

    def _heuristic(self, node: Node, goal: Location) -> float:
        return self.estimate_cost(self._node_location(node), goal)

    def _snap(self, location: Location) -> Node:
        node = location.to_node(self.stride)
        return Node(
            col=min(max(node.col, 0), self._max_col),
            row=min(max(node.row, 0), self._max_row),
        )

    def _node_location(self, node: Node) -> Location:
        return node.to_location(self.stride)

    def _blocked(self, node: Node) -> bool:
        return not self._in_grid(node) or self.is_blocked(self._node_location(node))

    def _in_grid(self, node: Node) -> bool:
        return 0 <= node.col <= self._max_col and 0 <= node.row <= self._max_row

    def _in_world(self, location: Location) -> bool:
        return 0 <= location.x <= self.width and 0 <= location.y <= self.height
