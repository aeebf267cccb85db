"""Tests for the simulation engine tick loop."""

import random

import pytest
from forager.config import AntConfig, FoodSpec, NestSpec, ObstacleSpec, PathfinderConfig, SimulationConfig
from forager.core import AntState, Food, Location, Nest, SimulationEngine, World
from forager.errors import InvalidConfigurationError


@pytest.fixture
def colony_config():
    return SimulationConfig(
        seed=5,
        world={"width": 60, "height": 60},
        ant=AntConfig(max_food=2, step_size=2.0),
        pathfinder=PathfinderConfig(stride=3.0),
        nests=[NestSpec(x=30, y=30, radius=2, ants=6)],
        foods=[
            FoodSpec(x=5, y=5, size=7, radius=2),
            FoodSpec(x=55, y=10, size=4, radius=2),
            FoodSpec(x=40, y=55, size=9, radius=2),
        ],
        obstacles=[ObstacleSpec(x=20, y=40, width=20, height=4)],
    )


class TestEngineSetup:
    """Test building simulations."""

    def test_from_config(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)

        assert len(engine.world.nests) == 1
        assert len(engine.world.foods) == 3
        assert len(engine.world.obstacles) == 1
        assert len(engine.ants) == 6

        nest = next(iter(engine.world.nests.values()))
        assert all(ant.location == nest.location for ant in engine.ants)
        assert all(ant.state is AntState.SEEKING_FOOD for ant in engine.ants)

    @pytest.mark.parametrize(
        "placement",
        [
            {"nests": [NestSpec(x=61, y=30)]},
            {"foods": [FoodSpec(x=10, y=-1)]},
        ],
    )
    def test_entities_outside_world_rejected(self, placement):
        config = SimulationConfig(world={"width": 60, "height": 60}, **placement)
        with pytest.raises(InvalidConfigurationError, match="lies outside the"):
            SimulationEngine.from_config(config)

    def test_add_colony_registers_nest(self):
        world = World(width=10, height=10)
        engine = SimulationEngine(world)
        nest = Nest(Location(5, 5))

        ants = engine.add_colony(nest, 3)

        assert len(ants) == 3
        assert world.nests[nest.id] is nest
        assert engine.ants == ants

    def test_ants_share_one_random_source(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)
        assert all(ant.behavior.rng is engine.rng for ant in engine.ants)
        assert engine.navigator.wanderer.rng is engine.rng

    def test_injected_random_source_is_used(self, colony_config):
        rng = random.Random(0)
        engine = SimulationEngine.from_config(colony_config, rng=rng)
        assert engine.rng is rng


class TestRunTick:
    """Test tick execution."""

    def test_tick_counter(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)

        first = engine.run_tick()
        second = engine.run_tick()

        assert first.tick_number == 1
        assert second.tick_number == 2
        assert engine.world.tick_number == 2

    def test_every_ant_moves_on_first_tick(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)
        result = engine.run_tick()
        assert len(result.movements) == len(engine.ants)

    def test_carried_food_stays_in_bounds(self, colony_config):
        """Test 0 <= carried <= max for every ant after every tick."""
        engine = SimulationEngine.from_config(colony_config)

        for _ in range(300):
            engine.run_tick()
            for ant in engine.ants:
                assert 0 <= ant.carried_food <= ant.max_food

    def test_food_is_conserved(self, colony_config):
        """Test that food is only ever moved between piles, ants and nests."""
        engine = SimulationEngine.from_config(colony_config)
        initial = engine.world.get_total_food_remaining()

        for _ in range(300):
            engine.run_tick()
            carried = sum(ant.carried_food for ant in engine.ants)
            stored = sum(engine.get_nest_totals().values())
            assert engine.world.get_total_food_remaining() + carried + stored == initial

    def test_food_reaches_the_nest(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)

        deposits = []
        for _ in range(400):
            deposits.extend(engine.run_tick().deposits)

        assert deposits
        assert sum(engine.get_nest_totals().values()) == sum(d["amount"] for d in deposits)

    def test_tick_result_records_state_changes(self):
        world = World(width=20, height=20)
        nest = world.add_nest(Nest(Location(0, 0), radius=0.5))
        world.add_food(Food(Location(0, 0), size=1, radius=0.5))
        engine = SimulationEngine(world, SimulationConfig(ant=AntConfig(max_food=1, step_size=1)))
        ant = engine.add_colony(nest, 1)[0]

        result = engine.run_tick()

        assert result.pickups == [{"id": ant.id, "amount": 1, "position": ant.location.as_tuple()}]
        assert result.state_changes[0]["from"] == "seeking_food"

    def test_identical_engines_replay_identically(self, colony_config):
        """Test determinism of a whole seeded simulation."""
        def trace():
            engine = SimulationEngine.from_config(colony_config)
            for _ in range(100):
                engine.run_tick()
            return [
                (ant.location.as_tuple(), ant.state, ant.carried_food, ant.to_dict()["path"])
                for ant in engine.ants
            ]

        assert trace() == trace()


class TestGetState:
    """Test the snapshot published to hosts."""

    def test_state_shape(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)
        engine.run_tick()

        state = engine.get_state()

        assert state["tick"] == 1
        assert len(state["ants"]) == 6
        assert len(state["world"]["food"]) == 3
        ant_state = state["ants"][0]
        assert set(ant_state) >= {"id", "x", "y", "state", "carried_food", "path"}
        assert ant_state["path"]
        assert all(len(point) == 2 for point in ant_state["path"])

    def test_tick_result_to_dict(self, colony_config):
        engine = SimulationEngine.from_config(colony_config)
        result = engine.run_tick().to_dict()
        assert result["tick"] == 1
        assert set(result) == {"tick", "movements", "pickups", "deposits", "state_changes", "nest_totals"}
