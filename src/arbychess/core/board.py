"""Board capability interface and the square-grid implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arbychess.core.types import Coordinate

if TYPE_CHECKING:
    from arbychess.core.move_rule import MoveRule
    from arbychess.core.piece import PieceInstance


@dataclass(slots=True)
class Cell:
    """Per-coordinate slot; holds a non-owning reference to its occupier."""

    occupier: PieceInstance | None = None


class Board(ABC):
    """Coordinate validity, coordinate transformation and cell occupancy.

    The board is the single source of truth for occupancy.
    """

    @abstractmethod
    def is_valid_coords(self, coords: Coordinate) -> bool: ...

    @abstractmethod
    def cell(self, coords: Coordinate) -> Cell:
        """Cell at *coords*; raises ``KeyError`` when off-board."""

    @abstractmethod
    def coordinates(self) -> Iterator[Coordinate]:
        """Every valid coordinate."""

    def transform(self, coords: Coordinate, rule: MoveRule) -> Coordinate | None:
        """Apply *rule*'s vector once; ``None`` when the result is off-board."""
        new_coords = coords.shifted(rule.vector)
        if not self.is_valid_coords(new_coords):
            return None
        return new_coords

    # -- Occupancy ----------------------------------------------------------

    def occupier(self, coords: Coordinate) -> PieceInstance | None:
        return self.cell(coords).occupier

    def is_empty(self, coords: Coordinate) -> bool:
        return self.cell(coords).occupier is None

    def place(self, coords: Coordinate, piece: PieceInstance) -> None:
        cell = self.cell(coords)
        if cell.occupier is not None and cell.occupier is not piece:
            raise ValueError(f"Cell {coords} is already occupied")
        cell.occupier = piece

    def clear(self, coords: Coordinate) -> None:
        self.cell(coords).occupier = None

    def occupied(self) -> Iterator[tuple[Coordinate, PieceInstance]]:
        for coords in self.coordinates():
            piece = self.cell(coords).occupier
            if piece is not None:
                yield coords, piece


class SquareGrid(Board):
    """``size × size`` board with 4-way rotational rule expansion."""

    __slots__ = ("size", "_cells")

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError(f"Board size must be positive: {size!r}")
        self.size = size
        self._cells: dict[Coordinate, Cell] = {
            Coordinate(x, y): Cell() for x in range(size) for y in range(size)
        }

    def is_valid_coords(self, coords: Coordinate) -> bool:
        return 0 <= coords.x < self.size and 0 <= coords.y < self.size

    def cell(self, coords: Coordinate) -> Cell:
        try:
            return self._cells[coords]
        except KeyError:
            raise KeyError(f"Coordinate off board: {coords!r}") from None

    def coordinates(self) -> Iterator[Coordinate]:
        for y in range(self.size):
            for x in range(self.size):
                yield Coordinate(x, y)

    @staticmethod
    def rotate4(rules: Iterable[MoveRule]) -> list[MoveRule]:
        """Identity, 180°, clockwise and counter-clockwise copies of each rule."""
        expanded: list[MoveRule] = []
        for rule in rules:
            vector = rule.vector
            expanded.append(rule)
            expanded.append(rule.with_vector(vector.flipped()))
            expanded.append(rule.with_vector(vector.rotated_cw()))
            expanded.append(rule.with_vector(vector.rotated_ccw()))
        return expanded

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(self.size - 1, -1, -1):
            row = []
            for x in range(self.size):
                piece = self._cells[Coordinate(x, y)].occupier
                row.append(piece.symbol if piece is not None else ".")
            rows.append(f"{y + 1:>2} {' '.join(row)}")
        return "\n".join(rows)
