"""
Ant - a creature body driven by a foraging behavior.

The ant delegates movement to its Creature and decisions to its AntBehavior.
Neither part knows about the other; the ant wires them together once per
tick.
"""

from dataclasses import dataclass
import random
from typing import Optional, Tuple
import uuid

from ..config import AntConfig
from .behavior import AntBehavior, AntState, FoodScoring
from .creature import Creature
from .geometry import Location
from .navigation import Navigator
from .pathfinder import Path
from .world import Nest, World


@dataclass
class AntEvent:
    """What happened to one ant during one tick."""
    ant_id: str
    state_before: AntState
    state_after: AntState
    start: Tuple[float, float]
    end: Tuple[float, float]
    picked_up: int = 0
    deposited: int = 0

    @property
    def moved(self) -> bool:
        return self.start != self.end

    @property
    def changed_state(self) -> bool:
        return self.state_before is not self.state_after


class Ant:
    """
    A foraging agent that belongs to a nest.

    Ants start at their nest unless given an explicit location.
    """

    def __init__(
        self,
        nest: Nest,
        rng: random.Random,
        config: Optional[AntConfig] = None,
        location: Optional[Location] = None,
        scoring: Optional[FoodScoring] = None,
        ant_id: Optional[str] = None,
    ):
        config = config or AntConfig()
        self.id = ant_id or str(uuid.uuid4())[:8]
        self.nest = nest
        self.body = Creature(
            location=(location or nest.location).copy(),
            step_size=config.step_size,
            tolerance=config.arrival_tolerance,
        )
        self.behavior = AntBehavior(
            rng=rng,
            max_food=config.max_food,
            initial_state=AntState(config.initial_state),
            sense_radius=config.sense_radius,
            scoring=scoring,
        )

    @property
    def location(self) -> Location:
        return self.body.location

    @property
    def current_path(self) -> Optional[Path]:
        return self.body.current_path

    @property
    def state(self) -> AntState:
        return self.behavior.state

    @property
    def carried_food(self) -> int:
        return self.behavior.carried_food

    @property
    def max_food(self) -> int:
        return self.behavior.max_food

    def advance(self, world: World, navigator: Navigator) -> AntEvent:
        """Decide what to do, then take exactly one step."""
        state_before = self.state
        start = self.location.as_tuple()

        picked_up, deposited = self.behavior.update(self.body, self.nest, world, navigator)
        self.body.step()

        return AntEvent(
            ant_id=self.id,
            state_before=state_before,
            state_after=self.state,
            start=start,
            end=self.location.as_tuple(),
            picked_up=picked_up,
            deposited=deposited,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        path = self.current_path
        return {
            "id": self.id,
            "nest_id": self.nest.id,
            "x": self.location.x,
            "y": self.location.y,
            "state": self.state.value,
            "carried_food": self.carried_food,
            "max_food": self.max_food,
            "path": path.to_list() if path is not None else [],
        }
