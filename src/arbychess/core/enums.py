"""Core enumerations and flags for the rule engine."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class PieceRole(IntFlag):
    """Capabilities a piece type opts into, resolved once at construction."""

    STANDARD = 0
    ROYAL = auto()  # must never be left attacked; may castle
    CASTLING_PARTNER = auto()
    EN_PASSANT = auto()  # capturable in passing after a double step


class GameResult(IntEnum):
    """Outcome for the player to move."""

    IN_PROGRESS = 0
    CHECKMATE = 1
    STALEMATE = 2
