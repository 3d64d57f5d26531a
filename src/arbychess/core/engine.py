"""RuleEngine: board, roster, turn cycle and history of one game."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from arbychess.core.action import Action
from arbychess.core.errors import IllegalAction, LayoutError, LeavesKingInCheck, OutOfTurn
from arbychess.core.layout import parse_layout
from arbychess.core.move_generator import MoveGenerator, ValidMoves
from arbychess.core.options import RuleOptions
from arbychess.core.piece import PieceInstance, Player, PlayerId
from arbychess.core.rules import Rules
from arbychess.core.turns import TurnCycle
from arbychess.core.types import Coordinate
from arbychess.core.variant import StandardChess, Variant

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class Undo:
    """Snapshot taken by :meth:`RuleEngine.make_action` so it can be reverted."""

    action: Action
    victim_index: int | None = None
    victim_coords: Coordinate | None = None
    companion_origin: Coordinate | None = None


class RuleEngine:
    """Owns the state of one game and answers/commits moves against it.

    ``calculate_valid_moves`` is read-only; ``perform`` is the only command
    that changes game state.  Instances are not thread-safe: calls must be
    serialised per game.
    """

    __slots__ = (
        "variant",
        "options",
        "board",
        "players",
        "pieces",
        "player_cycle",
        "history",
        "_templates",
    )

    def __init__(
        self,
        variant: Variant | None = None,
        layout: str | None = None,
        options: RuleOptions | None = None,
    ) -> None:
        self.variant = variant if variant is not None else StandardChess()
        self.options = options if options is not None else RuleOptions()
        self.board = self.variant.create_board()
        self.players: dict[PlayerId, Player] = {
            pid: Player(pid) for pid in self.variant.player_order
        }
        self.pieces: dict[PlayerId, list[PieceInstance]] = {
            pid: [] for pid in self.variant.player_order
        }
        self.player_cycle = TurnCycle(self.variant.player_order)
        self.history: list[Action] = []
        self._templates = self.variant.templates()
        self._setup(layout if layout is not None else self.variant.layout)

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self.variant.size

    @property
    def current_player(self) -> PlayerId:
        return self.player_cycle.current

    def piece_at(self, coords: Coordinate) -> PieceInstance | None:
        if not self.board.is_valid_coords(coords):
            return None
        return self.board.occupier(coords)

    def pieces_of(self, player: PlayerId) -> list[PieceInstance]:
        return self.pieces.get(player, [])

    def opponents_of(self, player: PlayerId) -> list[PlayerId]:
        return [pid for pid in self.player_cycle.order if pid != player]

    def calculate_valid_moves(self, piece: PieceInstance) -> ValidMoves:
        """Legal destinations of *piece* mapped to the action each implies."""
        moves = self.pseudo_legal_moves(piece)
        if self.options.check_legality:
            moves = Rules.filter_legal(self, piece, moves)
        return moves

    def pseudo_legal_moves(self, piece: PieceInstance) -> ValidMoves:
        """Destinations allowed by the movement rules alone."""
        return MoveGenerator(self).valid_moves(piece)

    # ── Commands ─────────────────────────────────────────────────────────

    def perform(
        self,
        player: PlayerId | Player,
        piece: PieceInstance,
        action: Action,
    ) -> None:
        """Commit *action* for *piece* on behalf of *player*.

        Raises a :class:`~arbychess.core.errors.MoveRejected` subclass,
        without touching any state, when the action is refused.
        """
        player_id = player.name if isinstance(player, Player) else player

        if piece.player != player_id or not self._in_roster(piece):
            raise IllegalAction(f"{player_id} does not control {piece!r}")
        if self.options.enforce_turns and player_id != self.player_cycle.current:
            raise OutOfTurn(
                f"{player_id} moved out of turn; {self.player_cycle.current} is to move"
            )
        if action.piece is not piece or action.origin != piece.coords:
            raise IllegalAction(f"{action} does not belong to {piece!r}")

        if self.calculate_valid_moves(piece).get(action.destination) != action:
            if (
                self.options.check_legality
                and self.pseudo_legal_moves(piece).get(action.destination) == action
            ):
                raise LeavesKingInCheck(f"{action} leaves {player_id} in check")
            raise IllegalAction(f"{action} is not a valid move for {piece!r}")

        self.make_action(action)
        piece.base.history.append(action)
        self.history.append(action)
        next_player = self.player_cycle.advance()
        _LOGGER.debug("%s played %s; %s to move", player_id, action, next_player)

    # ── Reversible occupancy updates ─────────────────────────────────────

    def make_action(self, action: Action) -> Undo:
        """Apply *action* to the board and roster only (no history, no turn)."""
        board = self.board
        piece = action.piece
        undo = Undo(action)

        victim = action.victim
        if victim is not None:
            roster = self.pieces[victim.player]
            undo.victim_index = roster.index(victim)
            undo.victim_coords = victim.coords
            roster.pop(undo.victim_index)
            board.clear(victim.coords)

        board.clear(action.origin)
        board.place(action.destination, piece)
        piece.coords = action.destination

        if action.companion is not None:
            companion, target = action.companion
            undo.companion_origin = companion.coords
            board.clear(companion.coords)
            board.place(target, companion)
            companion.coords = target

        return undo

    def unmake_action(self, undo: Undo) -> None:
        """Revert a :meth:`make_action`; undos must be applied newest first."""
        board = self.board
        action = undo.action

        if action.companion is not None and undo.companion_origin is not None:
            companion, target = action.companion
            board.clear(target)
            board.place(undo.companion_origin, companion)
            companion.coords = undo.companion_origin

        board.clear(action.destination)
        board.place(action.origin, action.piece)
        action.piece.coords = action.origin

        victim = action.victim
        if victim is not None and undo.victim_coords is not None:
            board.place(undo.victim_coords, victim)
            victim.coords = undo.victim_coords
            self.pieces[victim.player].insert(undo.victim_index or 0, victim)

    # ── Internal ─────────────────────────────────────────────────────────

    def _in_roster(self, piece: PieceInstance) -> bool:
        return any(p is piece for p in self.pieces_of(piece.player))

    def _setup(self, layout: str) -> None:
        for placement in parse_layout(layout, self.size, self.variant.symbols):
            template = self._templates.get(placement.kind)
            if template is None:
                raise LayoutError(f"No piece template for kind {placement.kind!r}")
            if placement.player not in self.pieces:
                raise LayoutError(f"Unknown player {placement.player!r}")

            piece = PieceInstance(
                template.copy(),
                placement.player,
                placement.coords,
                placement.symbol,
            )
            self.pieces[placement.player].append(piece)
            self.board.place(placement.coords, piece)

        _LOGGER.debug(
            "Set up %s: %s",
            type(self.variant).__name__,
            {pid: len(roster) for pid, roster in self.pieces.items()},
        )

    def __repr__(self) -> str:
        return f"RuleEngine({type(self.variant).__name__}, to move: {self.current_player})\n{self.board!r}"
