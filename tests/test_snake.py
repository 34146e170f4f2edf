"""Tests for the snake module."""

import pytest

from roaming_snake.snake import CARDINALS, Direction, Position, Snake


class TestPosition:
    def test_shifted(self):
        assert Position(5, 5).shifted(Direction.RIGHT) == Position(6, 5)
        assert Position(5, 5).shifted(Direction.UP) == Position(5, 4)

    def test_shifted_none_stays(self):
        assert Position(3, 7).shifted(Direction.NONE) == Position(3, 7)

    def test_equals_plain_tuple(self):
        assert Position(1, 2) == (1, 2)


class TestDirection:
    def test_axis_components(self):
        assert Direction.LEFT.dx == -1
        assert Direction.LEFT.dy == 0
        assert Direction.DOWN.dy == 1

    def test_from_delta(self):
        assert Direction.from_delta(0, -1) is Direction.UP
        assert Direction.from_delta(0, 0) is Direction.NONE

    @pytest.mark.parametrize("delta", [(1, 1), (2, 0), (0, -2), (-1, 1)])
    def test_from_delta_invalid(self, delta):
        with pytest.raises(ValueError, match="Invalid direction"):
            Direction.from_delta(*delta)

    def test_cardinals_exclude_none(self):
        assert len(CARDINALS) == 4
        assert Direction.NONE not in CARDINALS

    def test_reverses(self):
        assert Direction.LEFT.reverses(Direction.RIGHT)
        assert Direction.UP.reverses(Direction.DOWN)
        assert not Direction.UP.reverses(Direction.LEFT)
        assert not Direction.RIGHT.reverses(Direction.RIGHT)

    def test_nothing_reverses_none(self):
        for direction in Direction:
            assert not direction.reverses(Direction.NONE)


class TestSnakeInit:
    def test_from_tuples(self):
        snake = Snake([(5, 5), (4, 5)])
        assert snake.head == Position(5, 5)
        assert len(snake) == 2
        assert all(isinstance(seg, Position) for seg in snake.body)

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake([])


class TestSnakeMovement:
    def test_push_head_and_drop_tail(self):
        snake = Snake([(5, 5), (4, 5)])
        snake.push_head(Position(6, 5))
        assert snake.head == (6, 5)
        assert snake.drop_tail() == (4, 5)
        assert snake.body == [(6, 5), (5, 5)]


class TestSnakeCollision:
    def test_occupies(self):
        snake = Snake([(5, 5), (4, 5), (3, 5)])
        assert snake.occupies((4, 5))
        assert not snake.occupies((0, 0))

    def test_self_collision(self):
        snake = Snake([(5, 5)])
        assert not snake.self_collision()
        snake.push_head(Position(5, 5))
        assert snake.self_collision()


class TestSnakeSerialization:
    def test_segments_is_a_copy(self):
        snake = Snake([(5, 5)])
        segments = snake.segments()
        segments.append(Position(9, 9))
        assert len(snake) == 1

    def test_to_dict(self):
        snake = Snake([(5, 5), (4, 5)])
        assert snake.to_dict() == {"body": [[5, 5], [4, 5]]}
