import random

import pytest
from forager.config import AntConfig, PathfinderConfig, SimulationConfig, WanderConfig
from forager.core import Food, Location, Navigator, Nest, Pathfinder, SimulationEngine, Wanderer, World


@pytest.fixture
def rng():
    """Seeded random source shared by everything in a test."""
    return random.Random(1234)


@pytest.fixture
def open_world():
    """A 20x20 world with nothing in it."""
    return World(width=20, height=20)


@pytest.fixture
def fine_config():
    """Config with a unit grid and unit steps, small enough to trace by hand."""
    return SimulationConfig(
        seed=42,
        ant=AntConfig(max_food=1, step_size=1.0),
        pathfinder=PathfinderConfig(stride=1.0),
        wander=WanderConfig(radius=5.0),
    )


@pytest.fixture
def navigator(open_world, rng):
    pathfinder = Pathfinder(open_world.width, open_world.height, stride=1.0, is_blocked=open_world.is_blocked)
    wanderer = Wanderer(rng, open_world.width, open_world.height, radius=5.0)
    return Navigator(pathfinder, wanderer)


@pytest.fixture
def foraging_engine(open_world, fine_config):
    """Nest at the origin and one food pile of size 5 at (10, 10)."""
    nest = open_world.add_nest(Nest(Location(0, 0), radius=0.5))
    open_world.add_food(Food(Location(10, 10), size=5, radius=0.5))
    engine = SimulationEngine(open_world, fine_config)
    engine.add_colony(nest, 1)
    return engine
