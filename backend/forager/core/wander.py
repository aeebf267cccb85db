"""Random short trips for ants with nothing better to do."""

import math
import random

from ..errors import ERROR_NON_POSITIVE_RADIUS, InvalidConfigurationError
from .geometry import Location
from .pathfinder import Path


class Wanderer:
    """
    Picks random nearby destinations inside the world bounds.

    The random source is injected so that every ant in a simulation draws
    from the same sequence.
    """

    def __init__(self, rng: random.Random, width: float, height: float, radius: float = 60.0):
        if radius <= 0:
            raise InvalidConfigurationError(ERROR_NON_POSITIVE_RADIUS.format(value=radius))
        self.rng = rng
        self.width = width
        self.height = height
        self.radius = radius

    def wander(self, current: Location) -> Path:
        """Return a single-waypoint path to a random point within radius of current."""
        heading = self.rng.uniform(0.0, 2.0 * math.pi)
        distance = self.rng.uniform(0.0, self.radius)

        # Clamping toward a box that holds current never moves the point further away
        x = min(max(current.x + math.cos(heading) * distance, 0.0), self.width)
        y = min(max(current.y + math.sin(heading) * distance, 0.0), self.height)
        return Path.to(Location(x, y))
