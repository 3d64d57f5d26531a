"""Coordinate and vector value types plus naming helpers.

Board layout (x grows to the right, y grows upwards):
    (0, 0) is the bottom-left cell, named 'a1' on boards of up to 26 files.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefghijklmnopqrstuvwxyz"


@dataclass(frozen=True, slots=True)
class Vector:
    """Displacement applied to a :class:`Coordinate`."""

    dx: int
    dy: int

    def flipped(self) -> Vector:
        """Rotation by 180°."""
        return Vector(-self.dx, -self.dy)

    def rotated_cw(self) -> Vector:
        return Vector(self.dy, -self.dx)

    def rotated_ccw(self) -> Vector:
        return Vector(-self.dy, self.dx)


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Board-relative cell position."""

    x: int
    y: int

    def shifted(self, vector: Vector) -> Coordinate:
        return Coordinate(self.x + vector.dx, self.y + vector.dy)

    def __str__(self) -> str:
        return coordinate_name(self)


def coordinate_name(coords: Coordinate) -> str:
    """Human-readable name, e.g. (4, 1) → 'e2'."""
    if 0 <= coords.x < len(_FILES) and coords.y >= 0:
        return f"{_FILES[coords.x]}{coords.y + 1}"
    return f"({coords.x}, {coords.y})"


def parse_coordinate(name: str) -> Coordinate:
    """Parse a cell name, e.g. 'e4' → Coordinate(4, 3)."""
    if len(name) < 2 or name[0] not in _FILES or not name[1:].isdigit():
        raise ValueError(f"Invalid coordinate name: {name!r}")
    rank = int(name[1:])
    if rank < 1:
        raise ValueError(f"Invalid coordinate name: {name!r}")
    return Coordinate(_FILES.index(name[0]), rank - 1)
