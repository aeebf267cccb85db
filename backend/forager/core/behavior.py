"""
Foraging behavior - the per-ant state machine.

Each tick the behavior looks at the world around its ant, switches between
wandering, seeking food and returning home, and hands the ant's body a path
to follow. It never moves the body itself.
"""

from dataclasses import dataclass
from enum import Enum
import random
from typing import Callable, Iterable, Optional, Tuple

from ..errors import (
    ERROR_NEGATIVE_MAX_FOOD,
    InvalidConfigurationError,
    NoTargetAvailableError,
    PathNotFoundError,
)
from ..logging_config import logger
from .creature import Creature
from .geometry import Location
from .navigation import Navigator
from .world import Food, Nest, World


class AntState(Enum):
    """What an ant is currently trying to do. Exactly one at a time."""
    WANDERING = "wandering"
    SEEKING_FOOD = "seeking_food"
    RETURNING = "returning"


@dataclass
class FoodScoring:
    """
    Scores food piles so that ants prefer large, nearby ones.

    score = base_bonus + size + jitter - distance_weight * estimated cost

    The jitter keeps a crowd of ants from all picking the same pile.
    """
    base_bonus: float = 100.0
    jitter: float = 50.0
    distance_weight: float = 1.0

    def score(
        self,
        food: Food,
        origin: Location,
        estimate_cost: Callable[[Location, Location], float],
        rng: random.Random,
    ) -> float:
        noise = rng.uniform(0.0, self.jitter) if self.jitter > 0 else 0.0
        return (
            self.base_bonus
            + food.size
            + noise
            - self.distance_weight * estimate_cost(origin, food.location)
        )


def select_target_food(
    foods: Iterable[Food],
    origin: Location,
    scoring: FoodScoring,
    estimate_cost: Callable[[Location, Location], float],
    rng: random.Random,
) -> Food:
    """
    Pick the highest scoring food pile. Equal scores keep the earlier pile.

    Raises:
        NoTargetAvailableError: if there are no piles to choose from.
    """
    best_food: Optional[Food] = None
    best_score = 0.0
    for food in foods:
        score = scoring.score(food, origin, estimate_cost, rng)
        if best_food is None or score > best_score:
            best_food = food
            best_score = score

    if best_food is None:
        raise NoTargetAvailableError()
    return best_food


class AntBehavior:
    """
    Foraging state plus the transition rules between states.

    Args:
        rng: Shared random source for target selection.
        max_food: Carrying capacity. Must not be negative.
        initial_state: State the ant starts in.
        sense_radius: Wandering ants switch to seeking food when a pile is
            this close.
        scoring: Food scoring weights.
    """

    def __init__(
        self,
        rng: random.Random,
        max_food: int = 1,
        initial_state: AntState = AntState.SEEKING_FOOD,
        sense_radius: float = 300.0,
        scoring: Optional[FoodScoring] = None,
    ):
        if max_food < 0:
            raise InvalidConfigurationError(ERROR_NEGATIVE_MAX_FOOD.format(value=max_food))
        self.rng = rng
        self.max_food = max_food
        self.state = AntState(initial_state)
        self.sense_radius = sense_radius
        self.scoring = scoring or FoodScoring()
        self.carried_food = 0

    def update(self, body: Creature, nest: Nest, world: World, navigator: Navigator) -> Tuple[int, int]:
        """
        Run one tick of transitions and path selection.

        Returns:
            (food picked up, food deposited) during this tick.
        """
        picked_up = 0
        deposited = 0

        if self.state is AntState.SEEKING_FOOD:
            picked_up = self._collect_food(body, world)

        if self.carried_food > 0 and self.carried_food >= self.max_food:
            self._enter(AntState.RETURNING, body)

        at_nest = nest.check_collision(body.location)
        if at_nest and (self.carried_food > 0 or self.state is AntState.RETURNING):
            deposited = self.carried_food
            world.deposit_food(nest, deposited)
            self.carried_food = 0
            body.clear_path()
            self._enter(AntState.SEEKING_FOOD, body)

        if self.state is AntState.WANDERING and world.query_food(body.location, self.sense_radius):
            self._enter(AntState.SEEKING_FOOD, body)

        if self.state is AntState.WANDERING:
            if body.has_arrived:
                body.current_path = navigator.wander(body.location)
        elif self.state is AntState.SEEKING_FOOD:
            if body.has_arrived:
                self._head_for_food(body, world, navigator)
        else:
            self._head_home(body, nest, navigator)

        return picked_up, deposited

    def _collect_food(self, body: Creature, world: World) -> int:
        for food in world.query_food():
            if not food.check_collision(body.location):
                continue
            if self.carried_food >= self.max_food:
                return 0

            taken = world.take_food(food, self.max_food - self.carried_food)
            self.carried_food = min(self.carried_food + taken, self.max_food)
            if food.is_exhausted:
                self._enter(AntState.RETURNING, body)
            return taken
        return 0

    def _head_for_food(self, body: Creature, world: World, navigator: Navigator) -> None:
        try:
            food = select_target_food(
                world.query_food(), body.location, self.scoring, navigator.estimate_cost, self.rng
            )
        except NoTargetAvailableError:
            logger.debug("No food to seek from %s, wandering", body.location)
            self._enter(AntState.WANDERING, body)
            body.current_path = navigator.wander(body.location)
            return

        try:
            body.current_path = navigator.path_to(body.location, food.location)
        except PathNotFoundError as e:
            # Wander off and try again once the detour is done
            logger.debug("Food %s unreachable: %s", food.id, e)
            body.current_path = navigator.wander(body.location)

    def _head_home(self, body: Creature, nest: Nest, navigator: Navigator) -> None:
        try:
            body.current_path = navigator.path_to(body.location, nest.location)
        except PathNotFoundError as e:
            logger.debug("Nest %s unreachable: %s", nest.id, e)
            body.current_path = navigator.wander(body.location)

    def _enter(self, state: AntState, body: Creature) -> None:
        if state is self.state:
            return
        logger.debug("Ant state %s -> %s at %s", self.state.value, state.value, body.location)
        self.state = state
        body.clear_path()
