from .geometry import Location, Node, euclidean, manhattan
from .pathfinder import Path, Pathfinder
from .wander import Wanderer
from .creature import Creature
from .world import World, Food, Nest, Obstacle
from .navigation import Navigator
from .behavior import AntBehavior, AntState, FoodScoring, select_target_food
from .ant import Ant, AntEvent
from .engine import SimulationEngine, TickResult

__all__ = [
    "Location", "Node", "euclidean", "manhattan",
    "Path", "Pathfinder", "Wanderer", "Creature",
    "World", "Food", "Nest", "Obstacle", "Navigator",
    "AntBehavior", "AntState", "FoodScoring", "select_target_food",
    "Ant", "AntEvent",
    "SimulationEngine", "TickResult",
]
