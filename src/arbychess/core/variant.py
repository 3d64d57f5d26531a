"""Variants: board geometry, piece-template registry and starting layout.

The template registry is the extension point for new pieces: a variant
maps each kind name to a :class:`PieceType` and each layout symbol to
``(player, kind)``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, ClassVar

from arbychess.core.action import Action
from arbychess.core.board import Board, SquareGrid
from arbychess.core.enums import PieceRole
from arbychess.core.move_rule import MoveRule
from arbychess.core.piece import (
    PieceInstance,
    PieceType,
    PlayerId,
    SpecialActions,
    SpecialMoves,
)
from arbychess.core.types import Coordinate, Vector

if TYPE_CHECKING:
    from arbychess.core.engine import RuleEngine


class Variant(ABC):
    """Static description of a game: geometry, players, pieces, layout."""

    size: ClassVar[int]
    player_order: ClassVar[tuple[PlayerId, ...]]
    layout: ClassVar[str]
    symbols: ClassVar[Mapping[str, tuple[PlayerId, str]]]

    def create_board(self) -> Board:
        return SquareGrid(self.size)

    @abstractmethod
    def templates(self) -> dict[str, PieceType]:
        """Kind name → template piece type (copied for every piece)."""


# ── Standard chess special moves ─────────────────────────────────────────────


def pawn_double_step(forward: int) -> SpecialMoves:
    """Two-cell advance, available while the pawn has no history."""

    def special_moves(piece: PieceInstance) -> list[tuple[Coordinate, MoveRule]]:
        if piece.has_moved:
            return []
        return [(piece.coords, MoveRule(Vector(0, forward), momentum=2, can_capture=False))]

    return special_moves


def en_passant(forward: int) -> SpecialActions:
    """Capture of an enemy pawn that just double-stepped past this one."""

    def special_actions(piece: PieceInstance, engine: RuleEngine) -> list[Action]:
        if not engine.history:
            return []
        last = engine.history[-1]
        enemy = last.piece
        if enemy.player == piece.player or not enemy.base.has_role(PieceRole.EN_PASSANT):
            return []
        if not last.is_double_step or last.origin.x != last.destination.x:
            return []
        if enemy.coords != last.destination:
            return []
        if enemy.coords.y != piece.coords.y or abs(enemy.coords.x - piece.coords.x) != 1:
            return []

        target = Coordinate(enemy.coords.x, piece.coords.y + forward)
        board = engine.board
        if not board.is_valid_coords(target) or not board.is_empty(target):
            return []
        return [Action(piece, piece.coords, target, capture=True, victim=enemy)]

    return special_actions


def castling(piece: PieceInstance, engine: RuleEngine) -> list[Action]:
    """Two-cell royal move toward an unmoved partner, which hops over it.

    Attacked-cell restrictions are enforced by :class:`Rules`.
    """
    if piece.has_moved:
        return []

    board = engine.board
    origin = piece.coords
    actions: list[Action] = []
    for partner in engine.pieces_of(piece.player):
        if not partner.base.has_role(PieceRole.CASTLING_PARTNER) or partner.has_moved:
            continue
        if partner.coords.y != origin.y:
            continue
        dx = partner.coords.x - origin.x
        if abs(dx) < 3:
            continue

        step = Vector(1 if dx > 0 else -1, 0)
        between = origin.shifted(step)
        path_clear = True
        while between != partner.coords:
            if not board.is_empty(between):
                path_clear = False
                break
            between = between.shifted(step)
        if not path_clear:
            continue

        hop = origin.shifted(step)
        destination = hop.shifted(step)
        actions.append(
            Action(piece, origin, destination, place=True, companion=(partner, hop))
        )
    return actions


# ── Variants ─────────────────────────────────────────────────────────────────


class StandardChess(Variant):
    """Orthodox chess movement on an 8×8 grid (no promotion)."""

    size = 8
    player_order = ("white", "black")
    layout = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
    symbols = {
        "K": ("white", "king"),
        "Q": ("white", "queen"),
        "R": ("white", "rook"),
        "B": ("white", "bishop"),
        "N": ("white", "knight"),
        "P": ("white", "wpawn"),
        "k": ("black", "king"),
        "q": ("black", "queen"),
        "r": ("black", "rook"),
        "b": ("black", "bishop"),
        "n": ("black", "knight"),
        "p": ("black", "bpawn"),
    }

    def templates(self) -> dict[str, PieceType]:
        rotate4 = SquareGrid.rotate4
        return {
            "king": PieceType(
                "king",
                rotate4(
                    [
                        MoveRule(Vector(1, 0), momentum=1),
                        MoveRule(Vector(1, 1), momentum=1),
                    ]
                ),
                special_actions=castling,
                role=PieceRole.ROYAL,
            ),
            "queen": PieceType(
                "queen",
                rotate4([MoveRule(Vector(1, 0)), MoveRule(Vector(1, 1))]),
            ),
            "rook": PieceType(
                "rook",
                rotate4([MoveRule(Vector(1, 0))]),
                role=PieceRole.CASTLING_PARTNER,
            ),
            "bishop": PieceType("bishop", rotate4([MoveRule(Vector(1, 1))])),
            "knight": PieceType(
                "knight",
                rotate4(
                    [
                        MoveRule(Vector(1, 2), momentum=1),
                        MoveRule(Vector(2, 1), momentum=1),
                    ]
                ),
            ),
            "wpawn": self._pawn(1),
            "bpawn": self._pawn(-1),
        }

    @staticmethod
    def _pawn(forward: int) -> PieceType:
        return PieceType(
            "pawn",
            [
                MoveRule(Vector(0, forward), momentum=1, can_capture=False),
                MoveRule(Vector(1, forward), momentum=1, can_place=False),
                MoveRule(Vector(-1, forward), momentum=1, can_place=False),
            ],
            special_moves=pawn_double_step(forward),
            special_actions=en_passant(forward),
            role=PieceRole.EN_PASSANT,
        )
