"""Tests for the wandering food module."""

import numpy as np
import pytest

from roaming_snake.board import Board
from roaming_snake.food import WanderingFood
from roaming_snake.snake import CARDINALS, Direction, Position, Snake


class _FixedRng:
    """Generator stand-in whose integer draws always return *value*."""

    def __init__(self, value):
        self.value = value

    def integers(self, *args, size=None, **kwargs):
        if size is None:
            return self.value
        return np.full(size, self.value)


def _food(seed=0, **kwargs):
    return WanderingFood(rng=np.random.default_rng(seed), **kwargs)


class TestFoodInit:
    def test_defaults(self):
        food = _food()
        assert food.position is None
        assert food.direction == Direction.NONE
        assert food.move_counter == 0
        assert food.move_interval == 3

    def test_invalid_interval(self):
        with pytest.raises(ValueError, match="at least 1"):
            WanderingFood(move_interval=0)

    def test_invalid_spawn_attempts(self):
        with pytest.raises(ValueError, match=">= 0"):
            WanderingFood(max_spawn_attempts=-1)


class TestFoodSpawning:
    def test_spawn_off_snake_with_direction(self):
        board = Board(20)
        snake = Snake([(10, 10)])
        for seed in range(25):
            food = _food(seed)
            assert food.respawn(board, snake)
            assert food.position is not None
            assert board.in_bounds(food.position)
            assert not snake.occupies(food.position)
            assert food.direction in CARDINALS

    def test_spawn_deterministic(self):
        board = Board(20)
        snake = Snake([(10, 10)])
        a, b = _food(7), _food(7)
        a.respawn(board, snake)
        b.respawn(board, snake)
        assert a.position == b.position
        assert a.direction == b.direction

    def test_spawn_finds_last_free_cell(self):
        board = Board(6)
        free_cell = Position(4, 1)
        snake = Snake(
            (x, y) for y in range(6) for x in range(6) if (x, y) != free_cell
        )
        food = _food(3)
        assert food.respawn(board, snake)
        assert food.position == free_cell

    def test_scan_fallback_without_random_draws(self):
        board = Board(4)
        snake = Snake([(0, 0), (1, 0), (2, 0)])
        food = _food(1, max_spawn_attempts=0)
        assert food.respawn(board, snake)
        assert not snake.occupies(food.position)

    def test_full_board_leaves_no_food(self):
        board = Board(2)
        snake = Snake([(0, 0), (1, 0), (1, 1), (0, 1)])
        food = _food()
        assert not food.respawn(board, snake)
        assert food.position is None
        assert food.direction == Direction.NONE

    def test_spawn_keeps_move_counter(self):
        board = Board(10)
        food = _food()
        food.move_counter = 2
        food.respawn(board, Snake([(5, 5)]))
        assert food.move_counter == 2


class TestFoodWandering:
    def test_moves_only_on_interval(self):
        board = Board(20)
        snake = Snake([(10, 10)])
        food = _food()
        food.position = Position(2, 2)
        food.direction = Direction.RIGHT

        assert not food.wander(board, snake)
        assert food.position == (2, 2)
        assert food.move_counter == 1
        assert not food.wander(board, snake)
        assert food.position == (2, 2)
        assert food.wander(board, snake)
        assert food.position == (3, 2)
        assert food.move_counter == 0
        assert food.direction == Direction.RIGHT

    def test_blocked_by_snake_changes_direction(self):
        board = Board(20)
        snake = Snake([(5, 5)])
        food = WanderingFood(rng=_FixedRng(1))
        food.position = Position(4, 5)
        food.direction = Direction.RIGHT
        food.move_counter = food.move_interval - 1

        assert not food.wander(board, snake)
        assert food.position == (4, 5)
        assert food.direction == Direction.DOWN
        assert food.move_counter == 0

    def test_blocked_by_wall_changes_direction(self):
        board = Board(20)
        snake = Snake([(10, 10)])
        food = WanderingFood(rng=_FixedRng(3))
        food.position = Position(0, 7)
        food.direction = Direction.LEFT
        food.move_counter = food.move_interval - 1

        assert not food.wander(board, snake)
        assert food.position == (0, 7)
        assert food.direction == Direction.RIGHT

    def test_blocked_move_not_retried_same_tick(self):
        board = Board(20)
        snake = Snake([(10, 10)])
        food = WanderingFood(rng=_FixedRng(3))
        food.position = Position(19, 0)
        food.direction = Direction.UP
        food.move_counter = 2
        food.wander(board, snake)
        # New heading is RIGHT, also blocked, but only tried three ticks on.
        assert food.position == (19, 0)
        food.wander(board, snake)
        food.wander(board, snake)
        assert food.position == (19, 0)

    def test_never_leaves_board_or_hits_snake(self):
        board = Board(5)
        snake = Snake([(2, 2), (2, 3), (2, 4)])
        food = _food(11)
        food.respawn(board, snake)
        for _ in range(300):
            food.wander(board, snake)
            assert board.in_bounds(food.position)
            assert not snake.occupies(food.position)

    def test_no_food_is_a_no_op(self):
        food = _food()
        for _ in range(3):
            assert not food.wander(Board(4), Snake([(0, 0)]))
        assert food.position is None
        assert food.move_counter == 0


class TestFoodSerialization:
    def test_to_dict(self):
        food = _food()
        food.position = Position(1, 2)
        food.direction = Direction.UP
        assert food.to_dict() == {
            "position": [1, 2],
            "direction": [0, -1],
            "move_counter": 0,
            "move_interval": 3,
        }

    def test_to_dict_without_food(self):
        assert _food().to_dict()["position"] is None
