"""Shared game-layer types."""

from __future__ import annotations

from enum import IntEnum, auto

# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of the select/release flow."""

    NOT_STARTED = auto()
    AWAITING_SELECTION = auto()
    AWAITING_DESTINATION = auto()  # a piece is picked up
    GAME_OVER = auto()
