"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum
from typing import Literal

from pydantic import BaseModel, Field

from roaming_snake.snake import Direction

DIRECTION_NAMES: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a play session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    grid_size: int = Field(default=20, ge=1)
    canvas_width: int = Field(default=400, ge=2)
    food_move_interval: int = Field(default=3, ge=1)
    tick_rate_ms: int = Field(default=100, ge=50, le=2000)
    score_multiplier: int = Field(default=10, ge=1)
    seed: int | None = None


class DirectionRequest(BaseModel):
    """Request body for POST /sessions/{session_id}/direction."""

    direction: Literal["up", "down", "left", "right"]


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    tick_rate_ms: int
    score: int
    high_score: int
