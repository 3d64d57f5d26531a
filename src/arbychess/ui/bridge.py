"""Qt bridge exposing a GameController to a Qt presentation layer."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from arbychess.core.action import Action
from arbychess.core.enums import GameResult
from arbychess.core.move_generator import ValidMoves
from arbychess.core.options import RuleOptions
from arbychess.core.piece import PieceInstance, PlayerId
from arbychess.core.types import Coordinate
from arbychess.core.variant import Variant
from arbychess.game.controller import GameController
from arbychess.game.interfaces import GamePhase


class BoardBridge(QObject):
    """Thread-affine adapter: slots drive the controller, signals report back.

    All engine calls happen on the thread this object lives on, which
    serialises them for the game it owns.  The bridge never draws; views
    connect to its signals and highlight, move or redraw pieces themselves.
    """

    selection_changed = pyqtSignal(object)  # {Coordinate: Action}; {} when cleared
    action_performed = pyqtSignal(object)  # Action
    action_rejected = pyqtSignal(object, str)  # piece, reason
    phase_changed = pyqtSignal(int)  # GamePhase
    game_over = pyqtSignal(int, str)  # GameResult, player to move

    __slots__ = ("_controller", "_variant", "_layout", "_options")

    def __init__(
        self,
        variant: Variant | None = None,
        layout: str | None = None,
        options: RuleOptions | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._variant = variant
        self._layout = layout
        self._options = options
        self._controller = GameController()

        events = self._controller.events
        events.on_selection.append(self._on_selection)
        events.on_action.append(self._on_action)
        events.on_rejected.append(self._on_rejected)
        events.on_phase_changed.append(self._on_phase)
        events.on_game_over.append(self._on_game_over)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot()
    def new_game(self) -> None:
        self._controller.new_game(self._variant, self._layout, self._options)

    @pyqtSlot(int, int)
    def select(self, x: int, y: int) -> None:
        """Pick up the piece on ``(x, y)`` if it belongs to the player to move."""
        self._controller.select(Coordinate(x, y))

    @pyqtSlot(int, int)
    def release(self, x: int, y: int) -> None:
        """Drop the selected piece on ``(x, y)``."""
        self._controller.release(Coordinate(x, y))

    @pyqtSlot()
    def cancel(self) -> None:
        self._controller.cancel_selection()

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_selection(self, _piece: PieceInstance | None, moves: ValidMoves) -> None:
        self.selection_changed.emit(moves)

    def _on_action(self, action: Action) -> None:
        self.action_performed.emit(action)

    def _on_rejected(self, piece: PieceInstance, _origin: Coordinate, reason: str) -> None:
        self.action_rejected.emit(piece, reason)

    def _on_phase(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))

    def _on_game_over(self, result: GameResult, player: PlayerId) -> None:
        self.game_over.emit(int(result), player)
