"""Tests for the Snake module."""

import pytest

from snake_arcade.snake import Direction, Snake


class TestDirection:
    def test_opposites(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.DOWN.opposite is Direction.UP
        assert Direction.LEFT.opposite is Direction.RIGHT
        assert Direction.RIGHT.opposite is Direction.LEFT

    def test_step_uses_screen_coordinates(self):
        assert Direction.UP.step((5, 5)) == (5, 4)
        assert Direction.DOWN.step((5, 5)) == (5, 6)
        assert Direction.LEFT.step((5, 5)) == (4, 5)
        assert Direction.RIGHT.step((5, 5)) == (6, 5)


class TestSnakeInit:
    def test_default_creation(self):
        snake = Snake((10, 10))
        assert snake.head == (10, 10)
        assert len(snake) == 3
        assert snake.direction == Direction.RIGHT

    def test_body_trails_behind_heading(self):
        snake = Snake((10, 10), Direction.RIGHT, length=3)
        assert list(snake.body) == [(10, 10), (9, 10), (8, 10)]

    def test_body_trails_up(self):
        snake = Snake((5, 5), Direction.UP, length=3)
        assert list(snake.body) == [(5, 5), (5, 6), (5, 7)]

    def test_minimum_length(self):
        with pytest.raises(ValueError, match="at least 1"):
            Snake((0, 0), length=0)

    def test_from_cells(self):
        snake = Snake.from_cells([(5, 5), (4, 5), (3, 5)], Direction.RIGHT)
        assert snake.head == (5, 5)
        assert snake.tail == (3, 5)

    def test_from_cells_rejects_duplicates(self):
        with pytest.raises(ValueError, match="duplicate"):
            Snake.from_cells([(1, 1), (1, 1)])

    def test_from_cells_rejects_empty(self):
        with pytest.raises(ValueError, match="empty"):
            Snake.from_cells([])


class TestSnakeMovement:
    def test_next_head(self):
        snake = Snake((5, 5), Direction.RIGHT)
        assert snake.next_head() == (6, 5)

    def test_next_head_with_override(self):
        snake = Snake((5, 5), Direction.RIGHT)
        assert snake.next_head(Direction.UP) == (5, 4)
        assert snake.direction == Direction.RIGHT

    def test_occupies(self):
        snake = Snake((5, 5), Direction.RIGHT, length=3)
        assert snake.occupies((5, 5))
        assert snake.occupies((3, 5))
        assert not snake.occupies((0, 0))


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake((5, 5), Direction.RIGHT, length=2)
        d = snake.to_dict()
        assert d["body"] == [[5, 5], [4, 5]]
        assert d["direction"] == "right"
