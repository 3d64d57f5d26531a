"""Action value object: the outcome of moving a piece to one destination."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from arbychess.core.piece import PieceInstance
    from arbychess.core.types import Coordinate


@dataclass(frozen=True, slots=True)
class Action:
    """Immutable descriptor of a legal destination.

    ``victim`` usually sits on ``destination``; en passant is the exception.
    ``companion`` is a second piece relocated by the same action (castling).
    """

    piece: PieceInstance
    origin: Coordinate
    destination: Coordinate
    place: bool = False
    capture: bool = False
    victim: PieceInstance | None = None
    turn: bool = False
    companion: tuple[PieceInstance, Coordinate] | None = None

    @property
    def is_double_step(self) -> bool:
        dx = abs(self.destination.x - self.origin.x)
        dy = abs(self.destination.y - self.origin.y)
        return (dx, dy) in ((0, 2), (2, 0))

    def __str__(self) -> str:
        sep = "x" if self.capture else "-"
        return f"{self.piece.symbol}{self.origin}{sep}{self.destination}"
