"""
Creature - the movement primitive shared by every agent.

A creature knows where it is and which path it is following. It does not
decide where to go; whoever owns it hands it a Path and calls step() once per
tick.
"""

from typing import Optional

from ..errors import ERROR_NON_POSITIVE_STEP, InvalidConfigurationError
from .geometry import EPSILON, Location
from .pathfinder import Path


class Creature:
    """
    Moves a Location along a Path, one bounded step at a time.

    Example:
        body = Creature(Location(0, 0), step_size=2.0)
        body.current_path = Path.to(Location(10, 0))
        body.step()   # now at (2, 0)
    """

    def __init__(self, location: Location, step_size: float = 5.0, tolerance: float = EPSILON):
        if step_size <= 0:
            raise InvalidConfigurationError(ERROR_NON_POSITIVE_STEP.format(value=step_size))
        self.location = location
        self.step_size = step_size
        self.tolerance = tolerance
        self._path: Optional[Path] = None
        self._next_index = 0

    @property
    def current_path(self) -> Optional[Path]:
        return self._path

    @current_path.setter
    def current_path(self, path: Optional[Path]) -> None:
        """
        Replace the path being followed.

        The first waypoint is skipped when the creature is already closer to
        the second one, so a freshly planned path never sends it backwards.
        """
        self._path = path
        self._next_index = 0
        if path is not None and len(path.waypoints) > 1:
            first, second = path.waypoints[0], path.waypoints[1]
            if self.location.distance_to(second) <= first.distance_to(second):
                self._next_index = 1

    def clear_path(self) -> None:
        self.current_path = None

    @property
    def next_waypoint(self) -> Optional[Location]:
        """The first waypoint not yet reached, or None."""
        if self._path is None:
            return None
        self._skip_reached()
        if self._next_index >= len(self._path.waypoints):
            return None
        return self._path.waypoints[self._next_index]

    @property
    def has_arrived(self) -> bool:
        """True when there is no path or the destination has been reached."""
        return self.next_waypoint is None

    def step(self) -> None:
        """Advance toward the next unreached waypoint by at most step_size."""
        target = self.next_waypoint
        if target is None:
            return

        new_location = self.location.moved_toward(target, self.step_size)
        self.location.x = new_location.x
        self.location.y = new_location.y

    def _skip_reached(self) -> None:
        waypoints = self._path.waypoints
        while (
            self._next_index < len(waypoints)
            and self.location.is_at(waypoints[self._next_index], self.tolerance)
        ):
            self._next_index += 1
