"""Engine configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class RuleOptions:
    """Switches for the checks layered on top of the movement rules.

    Args:
        check_legality: Drop moves that leave a royal piece attacked and
            castling through attacked cells.  ``False`` yields a
            movement-rule-only engine.
        enforce_turns: Reject ``perform`` calls from a player who is not
            at the front of the turn cycle.
    """

    check_legality: bool = True
    enforce_turns: bool = True
