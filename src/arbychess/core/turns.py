"""Turn-order rotation."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from arbychess.core.piece import PlayerId


class TurnCycle:
    """Rotating queue of player ids; the front player is the one to move."""

    __slots__ = ("_queue",)

    def __init__(self, players: Iterable[PlayerId]) -> None:
        self._queue: deque[PlayerId] = deque(players)
        if not self._queue:
            raise ValueError("A turn cycle needs at least one player")
        if len(set(self._queue)) != len(self._queue):
            raise ValueError(f"Duplicate players in turn cycle: {list(self._queue)!r}")

    @property
    def current(self) -> PlayerId:
        return self._queue[0]

    @property
    def order(self) -> tuple[PlayerId, ...]:
        return tuple(self._queue)

    def advance(self) -> PlayerId:
        """Move the front player to the back; return the new front."""
        self._queue.rotate(-1)
        return self._queue[0]

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[PlayerId]:
        return iter(self._queue)

    def __repr__(self) -> str:
        return f"TurnCycle({list(self._queue)!r})"
