"""
Simulation Engine - the tick loop.

Advances every ant once per tick, in a fixed order, and records what
happened.
"""

from dataclasses import dataclass, field
import random
from typing import Dict, List, Optional

from ..config import SimulationConfig
from ..errors import ERROR_OUTSIDE_WORLD, InvalidConfigurationError
from ..logging_config import logger
from .ant import Ant, AntEvent
from .behavior import FoodScoring
from .geometry import Location
from .navigation import Navigator
from .pathfinder import Pathfinder
from .wander import Wanderer
from .world import Food, Nest, Obstacle, World


@dataclass
class TickResult:
    """Results of a single tick of simulation."""
    tick_number: int
    movements: List[dict] = field(default_factory=list)
    pickups: List[dict] = field(default_factory=list)
    deposits: List[dict] = field(default_factory=list)
    state_changes: List[dict] = field(default_factory=list)
    nest_totals: Dict[str, int] = field(default_factory=dict)

    def record(self, event: AntEvent) -> None:
        if event.moved:
            self.movements.append({"id": event.ant_id, "from": event.start, "to": event.end})
        if event.picked_up:
            self.pickups.append({"id": event.ant_id, "amount": event.picked_up, "position": event.end})
        if event.deposited:
            self.deposits.append({"id": event.ant_id, "amount": event.deposited, "position": event.end})
        if event.changed_state:
            self.state_changes.append({
                "id": event.ant_id,
                "from": event.state_before.value,
                "to": event.state_after.value,
            })

    def to_dict(self) -> dict:
        return {
            "tick": self.tick_number,
            "movements": self.movements,
            "pickups": self.pickups,
            "deposits": self.deposits,
            "state_changes": self.state_changes,
            "nest_totals": self.nest_totals,
        }


class SimulationEngine:
    """
    Main simulation engine that processes ticks.

    The engine owns the single random source of the simulation. The
    wanderer and every ant draw from it, so a seeded engine replays
    identically.
    """

    def __init__(
        self,
        world: World,
        config: Optional[SimulationConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.world = world
        self.config = config or SimulationConfig()
        self.rng = rng or random.Random(self.config.seed)

        pathfinder = Pathfinder(
            width=world.width,
            height=world.height,
            stride=self.config.pathfinder.stride,
            is_blocked=world.is_blocked,
            max_expansions=self.config.pathfinder.max_expansions,
        )
        wanderer = Wanderer(self.rng, world.width, world.height, radius=self.config.wander.radius)
        self.navigator = Navigator(pathfinder, wanderer)
        self.scoring = FoodScoring(**self.config.scoring.model_dump())

        self.ants: List[Ant] = []

    @classmethod
    def from_config(cls, config: SimulationConfig, rng: Optional[random.Random] = None) -> "SimulationEngine":
        """Build a world from config, place its entities and hatch each nest's ants."""
        world = World(width=config.world.width, height=config.world.height)
        for kind, specs in (("nest", config.nests), ("food", config.foods)):
            for spec in specs:
                if not world.contains(Location(spec.x, spec.y)):
                    raise InvalidConfigurationError(ERROR_OUTSIDE_WORLD.format(
                        kind=kind, x=spec.x, y=spec.y, width=world.width, height=world.height,
                    ))
        for spec in config.obstacles:
            world.add_obstacle(Obstacle(spec.x, spec.y, spec.width, spec.height))
        for spec in config.foods:
            world.add_food(Food(Location(spec.x, spec.y), size=spec.size, radius=spec.radius))

        engine = cls(world, config, rng)
        for spec in config.nests:
            nest = world.add_nest(Nest(Location(spec.x, spec.y), radius=spec.radius))
            engine.add_colony(nest, spec.ants)

        logger.info(
            "Simulation created: %sx%s world, %d nests, %d food piles, %d ants",
            world.width, world.height, len(world.nests), len(world.foods), len(engine.ants),
        )
        return engine

    def add_colony(self, nest: Nest, count: int) -> List[Ant]:
        """Create count ants at nest. Returns the new ants."""
        if nest.id not in self.world.nests:
            self.world.add_nest(nest)

        colony = [
            Ant(nest, self.rng, config=self.config.ant, scoring=self.scoring)
            for _ in range(count)
        ]
        self.ants.extend(colony)
        return colony

    def advance(self, ant: Ant) -> AntEvent:
        """Run one ant's decision and movement against the current world."""
        return ant.advance(self.world, self.navigator)

    def run_tick(self) -> TickResult:
        """Execute one complete tick of the simulation."""
        self.world.tick_number += 1
        result = TickResult(tick_number=self.world.tick_number)

        for ant in self.ants:
            result.record(self.advance(ant))

        result.nest_totals = self.get_nest_totals()
        return result

    def get_nest_totals(self) -> Dict[str, int]:
        return {nest_id: nest.food_total for nest_id, nest in self.world.nests.items()}

    def get_state(self) -> dict:
        """Get current simulation state for sending to clients."""
        return {
            "tick": self.world.tick_number,
            "world": self.world.to_dict(),
            "ants": [ant.to_dict() for ant in self.ants],
            "nest_totals": self.get_nest_totals(),
        }
