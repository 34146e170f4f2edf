"""Square playfield geometry."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from roaming_snake.snake import Position


def tile_count_for(grid_size: int, canvas_width: int) -> int:
    """Number of cells along one side of a *canvas_width* pixel board.

    The width must be an exact multiple of the cell size; a fractional
    tile count would leave the bounds checks comparing against a
    non-integer edge.
    """
    if grid_size < 1 or canvas_width < 1:
        raise ValueError("grid_size and canvas_width must be positive.")
    tiles, remainder = divmod(canvas_width, grid_size)
    if remainder:
        raise ValueError(
            f"canvas_width {canvas_width} is not a multiple of "
            f"grid_size {grid_size}.",
        )
    return tiles


class Board:
    """A ``tile_count`` × ``tile_count`` board of integer cells.

    Coordinates use (x, y) ordering: x is the column, y is the row.
    """

    def __init__(self, tile_count: int) -> None:
        if tile_count < 2:
            raise ValueError("Board must be at least 2×2 tiles.")
        self.tile_count = tile_count

    @property
    def center(self) -> Position:
        mid = self.tile_count // 2
        return Position(mid, mid)

    def in_bounds(self, cell: tuple[int, int]) -> bool:
        """Check whether a coordinate lies on the board."""
        x, y = cell
        return 0 <= x < self.tile_count and 0 <= y < self.tile_count

    def occupancy(self, occupied: Iterable[tuple[int, int]]) -> np.ndarray:
        """Boolean ``(rows, cols)`` mask with True on occupied cells.

        Off-board cells in *occupied* are ignored.
        """
        mask = np.zeros((self.tile_count, self.tile_count), dtype=bool)
        for cell in occupied:
            if self.in_bounds(cell):
                mask[cell[1], cell[0]] = True
        return mask

    def free_cells(self, occupied: Iterable[tuple[int, int]]) -> list[Position]:
        """Return every cell not listed in *occupied*, row by row."""
        rows, cols = np.nonzero(~self.occupancy(occupied))
        return [
            Position(x, y)
            for y, x in zip(rows.tolist(), cols.tolist(), strict=True)
        ]

    def to_dict(self) -> dict:
        return {"tile_count": self.tile_count}
