"""Positions, directions, and the snake body."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import NamedTuple


class Position(NamedTuple):
    """A board cell addressed as (x, y)."""

    x: int
    y: int

    def shifted(self, direction: Direction) -> Position:
        """Return the neighbouring cell one step along *direction*."""
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)


class Direction(enum.Enum):
    """Unit movement vectors with (dx, dy) values.

    ``NONE`` is the resting state of a snake that has not moved yet.
    """

    NONE = (0, 0)
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> Direction:
        """Look up the direction for a pair of axis deltas.

        Raises ``ValueError`` for anything that is not a unit axis vector
        or the zero vector.
        """
        try:
            return cls((dx, dy))
        except ValueError:
            raise ValueError(
                f"Invalid direction delta ({dx}, {dy}).",
            ) from None

    def reverses(self, other: Direction) -> bool:
        """Whether *self* points exactly against *other* on a moving axis."""
        return (
            (self.dx != 0 and self.dx == -other.dx)
            or (self.dy != 0 and self.dy == -other.dy)
        )


# Wander set for food; order matters for seeded reproducibility.
CARDINALS: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


class Snake:
    """A snake stored as an ordered list of cells.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(self, segments: Iterable[tuple[int, int]]) -> None:
        self.body: list[Position] = [Position(*seg) for seg in segments]
        if not self.body:
            raise ValueError("Snake must have at least 1 segment.")

    def __len__(self) -> int:
        return len(self.body)

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    def push_head(self, cell: Position) -> None:
        self.body.insert(0, cell)

    def drop_tail(self) -> Position:
        """Remove and return the tail cell."""
        return self.body.pop()

    def occupies(self, cell: tuple[int, int]) -> bool:
        """Check whether any segment sits on *cell*."""
        return cell in self.body

    def self_collision(self) -> bool:
        """Check whether the head overlaps any other body segment."""
        head = self.head
        return any(seg == head for seg in self.body[1:])

    def segments(self) -> list[Position]:
        """Return a fresh list of the body cells."""
        return list(self.body)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}
