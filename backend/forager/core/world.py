"""
World - the environment ants forage in.

The world is a bounded rectangle holding food piles, nests and obstacles.
Placement of these entities is up to the caller; ants only see the world
through query_food, take_food and deposit_food.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import uuid

from .geometry import Location, euclidean


def _short_id() -> str:
    return str(uuid.uuid4())[:8]


@dataclass
class Food:
    """A pile of food that shrinks as ants carry it away."""
    location: Location
    size: int
    radius: float = 10.0
    id: str = field(default_factory=_short_id)

    @property
    def is_exhausted(self) -> bool:
        return self.size <= 0

    def check_collision(self, location: Location) -> bool:
        return euclidean(self.location, location) <= self.radius

    def take(self, amount: int) -> int:
        """Remove up to amount units. Returns how many were actually taken."""
        taken = max(0, min(amount, self.size))
        self.size -= taken
        return taken

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.location.x,
            "y": self.location.y,
            "size": self.size,
            "radius": self.radius,
        }


@dataclass
class Nest:
    """Home base. Accumulates whatever food its ants bring back."""
    location: Location
    radius: float = 10.0
    food_total: int = 0
    id: str = field(default_factory=_short_id)

    def check_collision(self, location: Location) -> bool:
        return euclidean(self.location, location) <= self.radius

    def deposit(self, amount: int) -> None:
        self.food_total += amount

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "x": self.location.x,
            "y": self.location.y,
            "radius": self.radius,
            "food_total": self.food_total,
        }


@dataclass
class Obstacle:
    """Axis-aligned impassable rectangle. (x, y) is its top-left corner."""
    x: float
    y: float
    width: float
    height: float

    def contains(self, location: Location) -> bool:
        return (
            self.x <= location.x <= self.x + self.width
            and self.y <= location.y <= self.y + self.height
        )

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class World:
    """
    The simulation environment.

    Coordinate system:
    - (0, 0) is top-left
    - x increases going right
    - y increases going down
    - Edges are hard bounds (no wrapping)
    """

    DEFAULT_WIDTH = 720.0
    DEFAULT_HEIGHT = 480.0

    def __init__(self, width: float = DEFAULT_WIDTH, height: float = DEFAULT_HEIGHT):
        self.width = width
        self.height = height
        self.tick_number = 0

        self.foods: List[Food] = []
        self.nests: Dict[str, Nest] = {}  # id -> nest
        self.obstacles: List[Obstacle] = []

    def add_food(self, food: Food) -> Food:
        self.foods.append(food)
        return food

    def add_nest(self, nest: Nest) -> Nest:
        self.nests[nest.id] = nest
        return nest

    def add_obstacle(self, obstacle: Obstacle) -> Obstacle:
        self.obstacles.append(obstacle)
        return obstacle

    def query_food(self, near: Optional[Location] = None, radius: Optional[float] = None) -> List[Food]:
        """
        Food piles that still have something left, in insertion order.

        If near and radius are both given, only piles within radius of near
        are returned.
        """
        available = [f for f in self.foods if not f.is_exhausted]
        if near is None or radius is None:
            return available
        return [f for f in available if euclidean(f.location, near) <= radius]

    def take_food(self, food: Food, amount: int) -> int:
        """Take up to amount units from a pile. Returns the amount taken."""
        return food.take(amount)

    def deposit_food(self, nest: Nest, amount: int) -> None:
        nest.deposit(amount)

    def is_blocked(self, location: Location) -> bool:
        return any(o.contains(location) for o in self.obstacles)

    def contains(self, location: Location) -> bool:
        return 0 <= location.x <= self.width and 0 <= location.y <= self.height

    def get_total_food_remaining(self) -> int:
        return sum(f.size for f in self.foods)

    def to_dict(self) -> dict:
        """Convert world state to dictionary for JSON serialization."""
        return {
            "width": self.width,
            "height": self.height,
            "tick": self.tick_number,
            "food": [f.to_dict() for f in self.foods],
            "nests": [n.to_dict() for n in self.nests.values()],
            "obstacles": [o.to_dict() for o in self.obstacles],
        }
