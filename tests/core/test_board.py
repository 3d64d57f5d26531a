"""Tests for SquareGrid."""

import pytest

from arbychess.core.board import SquareGrid
from arbychess.core.move_rule import MoveRule
from arbychess.core.piece import PieceInstance, PieceType
from arbychess.core.types import Coordinate, Vector


def _dummy(coords: Coordinate, player: str = "white") -> PieceInstance:
    return PieceInstance(PieceType("dummy", []), player, coords, "D")


class TestBounds:
    def test_is_valid_coords_matches_bounds(self) -> None:
        grid = SquareGrid(8)
        for x in range(-2, 11):
            for y in range(-2, 11):
                expected = 0 <= x < 8 and 0 <= y < 8
                assert grid.is_valid_coords(Coordinate(x, y)) == expected

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            SquareGrid(0)

    def test_cell_count(self) -> None:
        grid = SquareGrid(5)
        assert len(list(grid.coordinates())) == 25

    def test_off_board_cell_raises(self) -> None:
        with pytest.raises(KeyError, match="off board"):
            SquareGrid(3).cell(Coordinate(3, 0))


class TestTransform:
    def test_on_board(self) -> None:
        grid = SquareGrid(8)
        rule = MoveRule(Vector(1, 2))
        assert grid.transform(Coordinate(0, 0), rule) == Coordinate(1, 2)

    def test_off_board_is_none(self) -> None:
        grid = SquareGrid(8)
        assert grid.transform(Coordinate(7, 7), MoveRule(Vector(1, 0))) is None
        assert grid.transform(Coordinate(0, 0), MoveRule(Vector(0, -1))) is None


class TestRotate4:
    def test_axis_closure(self) -> None:
        rule = MoveRule(Vector(1, 0), momentum=3, can_capture=False)
        rules = SquareGrid.rotate4([rule])
        assert len(rules) == 4
        assert {r.vector for r in rules} == {
            Vector(1, 0),
            Vector(-1, 0),
            Vector(0, 1),
            Vector(0, -1),
        }
        for r in rules:
            assert r.momentum == 3
            assert r.can_place
            assert not r.can_capture
            assert not r.can_turn

    def test_diagonal_closure(self) -> None:
        rules = SquareGrid.rotate4([MoveRule(Vector(1, 1))])
        assert {r.vector for r in rules} == {
            Vector(1, 1),
            Vector(-1, -1),
            Vector(1, -1),
            Vector(-1, 1),
        }

    def test_knight_closure(self) -> None:
        rules = SquareGrid.rotate4(
            [MoveRule(Vector(1, 2), momentum=1), MoveRule(Vector(2, 1), momentum=1)]
        )
        assert {(r.vector.dx, r.vector.dy) for r in rules} == {
            (1, 2),
            (2, 1),
            (-1, 2),
            (-2, 1),
            (1, -2),
            (2, -1),
            (-1, -2),
            (-2, -1),
        }

    def test_idempotent_directions(self) -> None:
        once = SquareGrid.rotate4([MoveRule(Vector(1, 0)), MoveRule(Vector(1, 1))])
        twice = SquareGrid.rotate4(once)
        assert {r.vector for r in twice} == {r.vector for r in once}

    def test_emitted_rules_are_distinct_instances(self) -> None:
        rules = SquareGrid.rotate4([MoveRule(Vector(1, 0))])
        assert len({r.uid for r in rules}) == 4


class TestOccupancy:
    def test_place_and_clear(self) -> None:
        grid = SquareGrid(4)
        piece = _dummy(Coordinate(1, 1))
        grid.place(Coordinate(1, 1), piece)
        assert grid.occupier(Coordinate(1, 1)) is piece
        assert not grid.is_empty(Coordinate(1, 1))
        grid.clear(Coordinate(1, 1))
        assert grid.is_empty(Coordinate(1, 1))

    def test_double_occupancy_rejected(self) -> None:
        grid = SquareGrid(4)
        grid.place(Coordinate(0, 0), _dummy(Coordinate(0, 0)))
        with pytest.raises(ValueError, match="already occupied"):
            grid.place(Coordinate(0, 0), _dummy(Coordinate(0, 0)))

    def test_occupied_iterates_pieces(self) -> None:
        grid = SquareGrid(4)
        a = _dummy(Coordinate(0, 0))
        b = _dummy(Coordinate(3, 2), "black")
        grid.place(a.coords, a)
        grid.place(b.coords, b)
        assert dict(grid.occupied()) == {a.coords: a, b.coords: b}

    def test_repr_draws_symbols(self) -> None:
        grid = SquareGrid(3)
        grid.place(Coordinate(0, 0), _dummy(Coordinate(0, 0)))
        lines = repr(grid).splitlines()
        assert len(lines) == 3
        assert lines[-1].endswith("D . .")
