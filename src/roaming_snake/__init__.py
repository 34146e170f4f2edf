"""Roaming Snake: tick-based snake engine with wandering food."""

from roaming_snake.board import Board
from roaming_snake.config import EngineConfig
from roaming_snake.engine import (
    GameSnapshot,
    RunState,
    SimulationEngine,
    TickResult,
)
from roaming_snake.food import WanderingFood
from roaming_snake.particles import Particle, ParticleSystem
from roaming_snake.snake import Direction, Position, Snake

__all__ = [
    "Board",
    "Direction",
    "EngineConfig",
    "GameSnapshot",
    "Particle",
    "ParticleSystem",
    "Position",
    "RunState",
    "SimulationEngine",
    "Snake",
    "TickResult",
    "WanderingFood",
]
