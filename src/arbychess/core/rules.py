"""Game-legality rules layered on top of the movement rules."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from arbychess.core.enums import GameResult, PieceRole
from arbychess.core.move_generator import MoveGenerator, ValidMoves
from arbychess.core.types import Coordinate, Vector

if TYPE_CHECKING:
    from arbychess.core.action import Action
    from arbychess.core.engine import RuleEngine
    from arbychess.core.piece import PieceInstance, PlayerId

_LOGGER = logging.getLogger(__name__)


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class Rules:
    """Static rule-checker that operates on a :class:`RuleEngine`."""

    @staticmethod
    def filter_legal(
        engine: RuleEngine,
        piece: PieceInstance,
        moves: ValidMoves,
    ) -> ValidMoves:
        """Drop every action that would leave *piece*'s owner in check.

        Each candidate is tried with ``make_action`` / ``unmake_action``;
        the engine is restored before returning.  Castling is also dropped
        when the royal piece starts on or passes over an attacked cell.
        """
        gen = MoveGenerator(engine)
        player = piece.player
        legal: ValidMoves = {}

        for destination, action in moves.items():
            if action.companion is not None and piece.base.has_role(PieceRole.ROYAL):
                if not Rules._castling_path_safe(engine, gen, action):
                    _LOGGER.debug("Pruned %s: castles out of or through check", action)
                    continue

            undo = engine.make_action(action)
            exposed = gen.is_in_check(player)
            engine.unmake_action(undo)

            if exposed:
                _LOGGER.debug("Pruned %s: leaves %s in check", action, player)
                continue
            legal[destination] = action
        return legal

    @staticmethod
    def is_in_check(engine: RuleEngine, player: PlayerId) -> bool:
        return MoveGenerator(engine).is_in_check(player)

    @staticmethod
    def has_valid_moves(engine: RuleEngine, player: PlayerId) -> bool:
        return any(
            engine.calculate_valid_moves(piece) for piece in list(engine.pieces_of(player))
        )

    @staticmethod
    def is_checkmate(engine: RuleEngine, player: PlayerId) -> bool:
        if not Rules.is_in_check(engine, player):
            return False
        return not Rules.has_valid_moves(engine, player)

    @staticmethod
    def is_stalemate(engine: RuleEngine, player: PlayerId) -> bool:
        if Rules.is_in_check(engine, player):
            return False
        return not Rules.has_valid_moves(engine, player)

    @staticmethod
    def game_result(engine: RuleEngine) -> GameResult:
        """Result from the point of view of the player to move."""
        player = engine.current_player
        if Rules.has_valid_moves(engine, player):
            return GameResult.IN_PROGRESS
        if Rules.is_in_check(engine, player):
            return GameResult.CHECKMATE
        return GameResult.STALEMATE

    # -- Internal -----------------------------------------------------------

    @staticmethod
    def _castling_path_safe(
        engine: RuleEngine,
        gen: MoveGenerator,
        action: Action,
    ) -> bool:
        attacked: set[Coordinate] = set()
        for opponent in engine.opponents_of(action.piece.player):
            attacked |= gen.attacked_cells(opponent)

        if action.origin in attacked:
            return False

        step = Vector(
            _sign(action.destination.x - action.origin.x),
            _sign(action.destination.y - action.origin.y),
        )
        coords = action.origin.shifted(step)
        while coords != action.destination:
            if coords in attacked:
                return False
            coords = coords.shifted(step)
        return True
