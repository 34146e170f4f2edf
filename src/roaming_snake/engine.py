"""Tick-based simulation engine composing board, snake, and food logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from roaming_snake.board import Board, tile_count_for
from roaming_snake.food import WanderingFood
from roaming_snake.snake import Direction, Position, Snake

if TYPE_CHECKING:
    from roaming_snake.config import EngineConfig

logger = logging.getLogger(__name__)


class RunState(str, enum.Enum):
    """Lifecycle states derived from the running and paused flags."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    OVER = "over"


@dataclass(frozen=True)
class TickResult:
    """Outcome of a single :meth:`SimulationEngine.update` call."""

    game_over: bool
    continues: bool

    def to_dict(self) -> dict:
        return {"game_over": self.game_over, "continue": self.continues}


@dataclass
class GameSnapshot:
    """Independent copy of the engine state, safe to mutate or serialize."""

    snake: list[Position]
    food: Position | None
    food_direction: Direction
    score: int
    running: bool
    paused: bool
    direction: Direction
    tick: int = 0
    run_state: RunState = field(default=RunState.NOT_STARTED)

    def to_dict(self) -> dict:
        """Return a JSON-serializable dict."""
        return {
            "snake": [list(seg) for seg in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "food_direction": list(self.food_direction.value),
            "score": self.score,
            "running": self.running,
            "paused": self.paused,
            "direction": list(self.direction.value),
            "tick": self.tick,
            "run_state": self.run_state.value,
        }


class SimulationEngine:
    """Single-snake engine advanced one tick per :meth:`update` call.

    The engine owns the board, the snake and the wandering food. It never
    looks at the clock; a driver decides when to step it.
    """

    def __init__(
        self,
        grid_size: int = 20,
        canvas_width: int = 400,
        food_move_interval: int = 3,
        max_spawn_attempts: int = 100,
        seed: int | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid_size = grid_size
        self.board = Board(tile_count_for(grid_size, canvas_width))
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.food = WanderingFood(
            move_interval=food_move_interval,
            max_spawn_attempts=max_spawn_attempts,
            rng=self.rng,
        )
        self.reset()

    @classmethod
    def from_config(cls, config: EngineConfig) -> SimulationEngine:
        return cls(
            grid_size=config.grid_size,
            canvas_width=config.canvas_width,
            food_move_interval=config.food_move_interval,
            max_spawn_attempts=config.max_spawn_attempts,
            seed=config.seed,
        )

    @property
    def tile_count(self) -> int:
        return self.board.tile_count

    def reset(self) -> None:
        """Put a one-segment snake in the centre and start from scratch."""
        self.snake = Snake([self.board.center])
        self.food.clear()
        self.direction = Direction.NONE
        self.score = 0
        self.tick = 0
        self.running = False
        self.paused = False
        self._ended = False
        self.generate_random_food()

    # --- input ---

    def set_direction(self, dx: int, dy: int) -> bool:
        """Apply a direction change now, refusing an immediate reversal.

        Only the current direction is checked, so two quick perpendicular
        turns before the next tick can still fold the snake back onto
        itself.
        """
        requested = Direction.from_delta(dx, dy)
        if requested.reverses(self.direction):
            return False
        self.direction = requested
        return True

    # --- food ---

    def generate_random_food(self) -> bool:
        """Respawn the food on a free cell. False if the board is full."""
        return self.food.respawn(self.board, self.snake)

    def move_food(self) -> None:
        """Advance the food's cadence and let it wander when due."""
        self.food.wander(self.board, self.snake)

    # --- snake ---

    def move_snake(self) -> None:
        """Step the head forward, growing when it lands on the food."""
        new_head = self.snake.head.shifted(self.direction)
        self.snake.push_head(new_head)

        if new_head == self.food.position:
            self.score += 1
            self.generate_random_food()
        else:
            self.snake.drop_tail()

    def check_collision(self) -> bool:
        """Whether the head is off the board or on another segment."""
        if not self.board.in_bounds(self.snake.head):
            return True
        return self.snake.self_collision()

    # --- lifecycle ---

    def update(self) -> TickResult:
        """Advance the game by one tick."""
        if not self.running or self.paused:
            return TickResult(game_over=False, continues=False)

        self.move_snake()
        self.move_food()
        self.tick += 1

        if self.check_collision():
            self.game_over()
            return TickResult(game_over=True, continues=False)
        return TickResult(game_over=False, continues=True)

    def start_game(self) -> None:
        self.running = True
        self.paused = False
        self._ended = False

    def pause_game(self) -> None:
        """Toggle pause while a game is running."""
        if self.running:
            self.paused = not self.paused

    def game_over(self) -> None:
        self.running = False
        self._ended = True
        logger.info(
            "Game over at tick %d with score %d.", self.tick, self.score,
        )

    @property
    def run_state(self) -> RunState:
        if self.running:
            return RunState.PAUSED if self.paused else RunState.RUNNING
        return RunState.OVER if self._ended else RunState.NOT_STARTED

    def get_game_state(self) -> GameSnapshot:
        """Return a snapshot that shares no mutable state with the engine."""
        return GameSnapshot(
            snake=self.snake.segments(),
            food=self.food.position,
            food_direction=self.food.direction,
            score=self.score,
            running=self.running,
            paused=self.paused,
            direction=self.direction,
            tick=self.tick,
            run_state=self.run_state,
        )
