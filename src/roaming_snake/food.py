"""Wandering food placement and movement."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from roaming_snake.snake import CARDINALS, Direction, Position

if TYPE_CHECKING:
    from roaming_snake.board import Board
    from roaming_snake.snake import Snake

logger = logging.getLogger(__name__)


class WanderingFood:
    """A single food item that drifts across the board on its own cadence.

    Every ``move_interval`` calls to :meth:`wander` the food tries one step
    along its wander direction. A step that would leave the board or land
    on the snake is refused and a new direction is drawn instead.

    ``position`` is ``None`` only when the board has no free cell left.
    """

    def __init__(
        self,
        move_interval: int = 3,
        max_spawn_attempts: int = 100,
        rng: np.random.Generator | None = None,
    ) -> None:
        if move_interval < 1:
            raise ValueError("move_interval must be at least 1.")
        if max_spawn_attempts < 0:
            raise ValueError("max_spawn_attempts must be >= 0.")
        self.move_interval = move_interval
        self.max_spawn_attempts = max_spawn_attempts
        self.rng = rng if rng is not None else np.random.default_rng()
        self.position: Position | None = None
        self.direction = Direction.NONE
        self.move_counter = 0

    def clear(self) -> None:
        """Drop the food and return its cadence to neutral."""
        self.position = None
        self.direction = Direction.NONE
        self.move_counter = 0

    def respawn(self, board: Board, snake: Snake) -> bool:
        """Place the food on a random cell the snake does not cover.

        Uniform draws are retried up to ``max_spawn_attempts`` times, after
        which a free cell is picked from a scan of the board. Returns False
        (and leaves no food) when the snake fills the whole board.
        """
        for _ in range(self.max_spawn_attempts):
            x, y = self.rng.integers(0, board.tile_count, size=2).tolist()
            cell = Position(x, y)
            if not snake.occupies(cell):
                self._place(cell)
                return True

        free = board.free_cells(snake.body)
        if not free:
            logger.warning("No free cell available for food spawning.")
            self.position = None
            self.direction = Direction.NONE
            return False

        self._place(free[int(self.rng.integers(len(free)))])
        return True

    def wander(self, board: Board, snake: Snake) -> bool:
        """Advance the cadence counter and maybe take one step.

        Returns True only when the food actually moved.
        """
        self.move_counter += 1
        if self.move_counter < self.move_interval:
            return False
        self.move_counter = 0

        if self.position is None:
            return False

        target = self.position.shifted(self.direction)
        if not board.in_bounds(target) or snake.occupies(target):
            self.direction = self.random_direction()
            return False

        self.position = target
        return True

    def random_direction(self) -> Direction:
        return CARDINALS[int(self.rng.integers(len(CARDINALS)))]

    def _place(self, cell: Position) -> None:
        self.position = cell
        self.direction = self.random_direction()
        logger.debug("Food placed at %s heading %s.", cell, self.direction.name)

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return {
            "position": (
                list(self.position) if self.position is not None else None
            ),
            "direction": list(self.direction.value),
            "move_counter": self.move_counter,
            "move_interval": self.move_interval,
        }
