"""Exception taxonomy.

Every :class:`MoveRejected` is recoverable: it is raised before any state
changes, so the caller can simply redraw and ask again.
"""

from __future__ import annotations


class MoveRejected(Exception):
    """A requested action was refused; game state is untouched."""


class IllegalAction(MoveRejected):
    """The action is not among the piece's current valid moves."""


class OutOfTurn(MoveRejected):
    """The acting player is not at the front of the turn cycle."""


class LeavesKingInCheck(MoveRejected):
    """The action obeys the movement rules but exposes a royal piece."""


class LayoutError(ValueError):
    """Malformed board-layout string."""
