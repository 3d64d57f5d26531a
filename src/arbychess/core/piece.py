"""Piece types, live piece instances and players."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from arbychess.core.enums import PieceRole
from arbychess.core.move_rule import MoveRule
from arbychess.core.types import Coordinate

if TYPE_CHECKING:
    from arbychess.core.action import Action
    from arbychess.core.engine import RuleEngine

PlayerId = str

# (piece) -> [(origin, rule)] seeds injected into the move search.
SpecialMoves = Callable[["PieceInstance"], Sequence[tuple[Coordinate, MoveRule]]]
# (piece, engine) -> fully formed actions merged after the search.
SpecialActions = Callable[["PieceInstance", "RuleEngine"], Sequence["Action"]]


@dataclass(frozen=True, slots=True)
class Player:
    """Immutable player identity; ``name`` doubles as the player id."""

    name: PlayerId

    def __str__(self) -> str:
        return self.name


@dataclass(slots=True)
class PieceType:
    """A named bundle of movement rules plus optional special-move hooks.

    Templates are copied for every piece on the board; ``history`` then holds
    the actions that one piece has performed.  Hooks receive the owning
    :class:`PieceInstance` at call time, so a copy needs no rebinding.
    """

    name: str
    movements: tuple[MoveRule, ...]
    special_moves: SpecialMoves | None = None
    special_actions: SpecialActions | None = None
    role: PieceRole = PieceRole.STANDARD
    history: list[Action] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.movements = tuple(self.movements)

    def copy(self) -> PieceType:
        """Fresh type with its own rule copies and an empty history."""
        return PieceType(
            name=self.name,
            movements=tuple(rule.copy() for rule in self.movements),
            special_moves=self.special_moves,
            special_actions=self.special_actions,
            role=self.role,
        )

    def has_role(self, role: PieceRole) -> bool:
        return bool(self.role & role)


@dataclass(eq=False, slots=True)
class PieceInstance:
    """A live piece.  Compared by identity; ``player`` never changes."""

    base: PieceType
    player: PlayerId
    coords: Coordinate
    symbol: str = "?"

    @property
    def name(self) -> str:
        return self.base.name

    @property
    def history(self) -> list[Action]:
        return self.base.history

    @property
    def has_moved(self) -> bool:
        return bool(self.base.history)

    def __repr__(self) -> str:
        return f"PieceInstance({self.player} {self.base.name} @ {self.coords})"
