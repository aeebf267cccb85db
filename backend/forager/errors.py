"""
Error types and messages for the forager package.

Path and target errors are recoverable: the behavior layer catches them and
keeps the ant moving. Configuration errors are fatal at startup.
"""

ERROR_GOAL_OUT_OF_BOUNDS = "goal lies outside the world bounds"
ERROR_GOAL_BLOCKED = "goal lies inside an obstacle"
ERROR_FRONTIER_EXHAUSTED = "no route exists between start and goal"
ERROR_EXPANSION_LIMIT = "search gave up after {limit} expansions"
ERROR_NO_FOOD = "no food is available to seek"
ERROR_NEGATIVE_MAX_FOOD = "max_food must be >= 0, got {value}"
ERROR_NON_POSITIVE_STEP = "step_size must be > 0, got {value}"
ERROR_NON_POSITIVE_STRIDE = "stride must be > 0, got {value}"
ERROR_NON_POSITIVE_BOUNDS = "world bounds must be positive, got {width}x{height}"
ERROR_NON_POSITIVE_RADIUS = "wander radius must be > 0, got {value}"
ERROR_OUTSIDE_WORLD = "{kind} at ({x}, {y}) lies outside the {width}x{height} world"


class ForagerError(Exception):
    """Base class for all forager errors."""


class PathNotFoundError(ForagerError):
    """The pathfinder could not reach the goal within its search bounds."""

    def __init__(self, start, goal, reason: str = ERROR_FRONTIER_EXHAUSTED):
        self.start = start
        self.goal = goal
        self.reason = reason
        super().__init__(f"no path from {start} to {goal}: {reason}")


class NoTargetAvailableError(ForagerError):
    """There is no food for an ant to seek."""

    def __init__(self, message: str = ERROR_NO_FOOD):
        super().__init__(message)


class InvalidConfigurationError(ForagerError, ValueError):
    """Construction input is malformed. Indicates a programming error."""
