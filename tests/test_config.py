"""Tests for configuration loading and validation."""

import pytest
from forager.config import AntConfig, SimulationConfig, load_config
from forager.errors import InvalidConfigurationError


class TestLoadConfig:
    """Test building configs from plain dicts."""

    def test_defaults(self):
        config = load_config()

        assert isinstance(config, SimulationConfig)
        assert config.ant.max_food == 1
        assert config.ant.initial_state == "seeking_food"
        assert config.scoring.base_bonus == 100.0
        assert config.scoring.jitter == 50.0
        assert config.nests == []

    def test_nested_values(self):
        config = load_config({
            "seed": 3,
            "ant": {"max_food": 4, "initial_state": "wandering"},
            "nests": [{"x": 1, "y": 2, "ants": 7}],
            "foods": [{"x": 5, "y": 6, "size": 9}],
        })

        assert config.seed == 3
        assert config.ant.max_food == 4
        assert config.ant.initial_state == "wandering"
        assert config.nests[0].ants == 7
        assert config.foods[0].size == 9

    @pytest.mark.parametrize(
        "data",
        [
            {"ant": {"max_food": -1}},
            {"ant": {"step_size": 0}},
            {"ant": {"initial_state": "sleeping"}},
            {"pathfinder": {"stride": -2}},
            {"world": {"width": 0}},
            {"wander": {"radius": 0}},
            {"foods": [{"x": 1, "y": 1, "size": -3}]},
            {"obstacles": [{"x": 0, "y": 0, "width": 0, "height": 5}]},
        ],
    )
    def test_invalid_values_raise(self, data):
        with pytest.raises(InvalidConfigurationError):
            load_config(data)

    def test_invalid_configuration_is_value_error(self):
        """Test that callers catching ValueError still see config errors."""
        with pytest.raises(ValueError):
            load_config({"ant": {"max_food": -5}})

    def test_models_round_trip_through_dump(self):
        config = SimulationConfig(ant=AntConfig(max_food=2))
        assert load_config(config.model_dump()) == config
