"""
Simulation configuration models.

All tunables live here as pydantic models so that the runtime host can accept
them as request bodies and scripts can load them from plain dicts.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import InvalidConfigurationError


class WorldConfig(BaseModel):
    width: float = Field(720.0, gt=0)
    height: float = Field(480.0, gt=0)


class AntConfig(BaseModel):
    """Per-ant movement and foraging parameters."""
    max_food: int = Field(1, ge=0)
    step_size: float = Field(5.0, gt=0)
    arrival_tolerance: float = Field(1e-6, ge=0)
    sense_radius: float = Field(300.0, ge=0)  # Wandering ants notice food this close
    initial_state: Literal["wandering", "seeking_food", "returning"] = "seeking_food"


class PathfinderConfig(BaseModel):
    stride: float = Field(10.0, gt=0)
    max_expansions: int = Field(50_000, gt=0)


class WanderConfig(BaseModel):
    radius: float = Field(60.0, gt=0)


class ScoringConfig(BaseModel):
    """Weights for choosing which food an ant heads for."""
    base_bonus: float = 100.0
    jitter: float = Field(50.0, ge=0)
    distance_weight: float = Field(1.0, ge=0)


class NestSpec(BaseModel):
    x: float
    y: float
    radius: float = Field(10.0, ge=0)
    ants: int = Field(5, ge=0)


class FoodSpec(BaseModel):
    x: float
    y: float
    size: int = Field(20, ge=0)
    radius: float = Field(10.0, ge=0)


class ObstacleSpec(BaseModel):
    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class SimulationConfig(BaseModel):
    seed: Optional[int] = None
    tick_delay: float = Field(0.1, ge=0)  # seconds between ticks in the server loop
    world: WorldConfig = Field(default_factory=WorldConfig)
    ant: AntConfig = Field(default_factory=AntConfig)
    pathfinder: PathfinderConfig = Field(default_factory=PathfinderConfig)
    wander: WanderConfig = Field(default_factory=WanderConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    nests: List[NestSpec] = Field(default_factory=list)
    foods: List[FoodSpec] = Field(default_factory=list)
    obstacles: List[ObstacleSpec] = Field(default_factory=list)


def load_config(data: Optional[dict] = None) -> SimulationConfig:
    """
    Build a SimulationConfig from a plain dict.

    Raises:
        InvalidConfigurationError: if any value fails validation.
    """
    try:
        return SimulationConfig.model_validate(data or {})
    except ValidationError as e:
        raise InvalidConfigurationError(str(e)) from e
