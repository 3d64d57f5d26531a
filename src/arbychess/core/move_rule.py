"""MoveRule value object: a parametrised movement template."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from typing import Final

from arbychess.core.types import Vector

# "As far as possible" (e.g. queen); a positive int bounds the walk (1 for king).
UNLIMITED: Final = None

_RULE_IDS = itertools.count(1)


def _next_uid() -> int:
    return next(_RULE_IDS)


@dataclass(frozen=True, slots=True)
class MoveRule:
    """Immutable description of a candidate displacement.

    Structural equality ignores ``uid``.  The uid tags each rule instance so
    the move search can tell two structurally equal rules apart: a
    momentum-decremented successor is a distinct rule.
    """

    vector: Vector
    momentum: int | None = UNLIMITED
    can_place: bool = True  # may land on an empty cell
    can_capture: bool = True  # may land on an opposing piece, ending the walk
    can_turn: bool = False  # re-applies the whole movement set from the landing cell
    uid: int = field(default_factory=_next_uid, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.momentum is not None and self.momentum < 1:
            raise ValueError(f"Momentum must be positive or UNLIMITED: {self.momentum!r}")

    # ── Derivation ───────────────────────────────────────────────────────

    @property
    def continues(self) -> bool:
        """Whether a walk along this rule may go past the current cell."""
        return self.momentum is None or self.momentum > 1

    def copy(self, **changes: object) -> MoveRule:
        """Equal (or *changes*-modified) rule under a fresh uid."""
        return replace(self, uid=_next_uid(), **changes)

    def advanced(self) -> MoveRule:
        """Successor rule for the next step of a walk along ``vector``."""
        if self.momentum is None:
            return self.copy()
        return self.copy(momentum=self.momentum - 1)

    def with_vector(self, vector: Vector) -> MoveRule:
        return self.copy(vector=vector)
