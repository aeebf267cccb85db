"""Navigator - the single place ants ask for paths."""

from typing import Optional

from .geometry import Location
from .pathfinder import Path, Pathfinder
from .wander import Wanderer


class Navigator:
    """Bundles the pathfinder and the wander generator of one world."""

    def __init__(self, pathfinder: Pathfinder, wanderer: Wanderer):
        self.pathfinder = pathfinder
        self.wanderer = wanderer

    def path_to(self, start: Location, goal: Location, tolerance: Optional[float] = None) -> Path:
        return self.pathfinder.find_path(start, goal, tolerance)

    def wander(self, start: Location) -> Path:
        return self.wanderer.wander(start)

    def estimate_cost(self, start: Location, goal: Location) -> float:
        return self.pathfinder.estimate_cost(start, goal)
