"""GameController: select/release orchestration over a RuleEngine.

A presentation layer picks a piece up with :meth:`GameController.select`,
shows the returned destinations, then drops it with
:meth:`GameController.release`.  At most one piece is selected at a time.
Events are emitted via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from arbychess.core.action import Action
from arbychess.core.engine import RuleEngine
from arbychess.core.enums import GameResult
from arbychess.core.errors import MoveRejected
from arbychess.core.move_generator import ValidMoves
from arbychess.core.options import RuleOptions
from arbychess.core.piece import PieceInstance, PlayerId
from arbychess.core.rules import Rules
from arbychess.core.types import Coordinate
from arbychess.core.variant import Variant
from arbychess.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

SelectionCallback = Callable[[PieceInstance | None, ValidMoves], None]
ActionCallback = Callable[[Action], None]
RejectedCallback = Callable[[PieceInstance, Coordinate, str], None]  # piece, origin, reason
GameOverCallback = Callable[[GameResult, PlayerId], None]  # result, player to move
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_selection: list[SelectionCallback] = field(default_factory=list)
    on_action: list[ActionCallback] = field(default_factory=list)
    on_rejected: list[RejectedCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Drives one game: selection state, commits, turn flow, game over.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread).
    """

    __slots__ = (
        "_engine",
        "_phase",
        "_selection",
        "_valid_moves",
        "_result",
        "events",
    )

    def __init__(self) -> None:
        self._engine: RuleEngine | None = None
        self._phase = GamePhase.NOT_STARTED
        self._selection: PieceInstance | None = None
        self._valid_moves: ValidMoves = {}
        self._result = GameResult.IN_PROGRESS
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def engine(self) -> RuleEngine | None:
        return self._engine

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def selection(self) -> PieceInstance | None:
        return self._selection

    @property
    def valid_moves(self) -> ValidMoves:
        return dict(self._valid_moves)

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def current_player(self) -> PlayerId | None:
        if self._engine is None:
            return None
        return self._engine.current_player

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(
        self,
        variant: Variant | None = None,
        layout: str | None = None,
        options: RuleOptions | None = None,
    ) -> None:
        """Set up a new game, discarding any previous one."""
        self._engine = RuleEngine(variant, layout, options)
        self._selection = None
        self._valid_moves = {}
        self._result = GameResult.IN_PROGRESS
        self._set_phase(GamePhase.AWAITING_SELECTION)
        self._check_game_over()

    def select(self, coords: Coordinate) -> ValidMoves | None:
        """Pick up the current player's piece at *coords*.

        Returns its valid moves, or ``None`` (nothing changes) when there is
        no such piece or the game is not accepting moves.
        """
        engine = self._engine
        if engine is None or self._phase not in (
            GamePhase.AWAITING_SELECTION,
            GamePhase.AWAITING_DESTINATION,
        ):
            return None

        piece = engine.piece_at(coords)
        if piece is None or piece.player != engine.current_player:
            return None

        self._selection = piece
        self._valid_moves = engine.calculate_valid_moves(piece)
        self._set_phase(GamePhase.AWAITING_DESTINATION)
        self._emit_selection()
        return dict(self._valid_moves)

    def release(self, coords: Coordinate) -> bool:
        """Drop the selected piece on *coords*.  Returns True if committed."""
        piece = self._selection
        engine = self._engine
        if piece is None or engine is None:
            return False

        origin = piece.coords
        action = self._valid_moves.get(coords)
        self._clear_selection()

        if action is None:
            self._reject(piece, origin, f"{coords} is not a valid destination")
            return False

        try:
            engine.perform(piece.player, piece, action)
        except MoveRejected as exc:
            self._reject(piece, origin, str(exc))
            return False

        for cb in self.events.on_action:
            cb(action)
        self._check_game_over()
        return True

    def submit(self, origin: Coordinate, destination: Coordinate) -> bool:
        """Select the piece on *origin* and release it on *destination*."""
        if self.select(origin) is None:
            return False
        return self.release(destination)

    def cancel_selection(self) -> None:
        if self._selection is not None:
            self._clear_selection()

    # ── Internal helpers ─────────────────────────────────────────────────

    def _clear_selection(self) -> None:
        self._selection = None
        self._valid_moves = {}
        if self._phase == GamePhase.AWAITING_DESTINATION:
            self._set_phase(GamePhase.AWAITING_SELECTION)
        self._emit_selection()

    def _reject(self, piece: PieceInstance, origin: Coordinate, reason: str) -> None:
        _LOGGER.warning("Rejected move of %r: %s", piece, reason)
        for cb in self.events.on_rejected:
            cb(piece, origin, reason)

    def _check_game_over(self) -> None:
        engine = self._engine
        if engine is None:
            return
        result = Rules.game_result(engine)
        if result == GameResult.IN_PROGRESS:
            return
        self._result = result
        self._set_phase(GamePhase.GAME_OVER)
        _LOGGER.info("Game over: %s for %s", result.name.lower(), engine.current_player)
        for cb in self.events.on_game_over:
            cb(result, engine.current_player)

    def _emit_selection(self) -> None:
        for cb in self.events.on_selection:
            cb(self._selection, dict(self._valid_moves))

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
