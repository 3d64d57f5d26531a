"""Board-layout strings: parsing and serialisation.

A layout is row-major, top rank first: ranks are separated by ``/``, runs
of digits count empty cells and each letter is one piece.  The letter's
case usually encodes the owner (``P`` white pawn, ``p`` black pawn) but the
mapping is whatever the variant's symbol table says.

A character that is neither a digit nor a registered symbol raises
:class:`LayoutError`; it is never skipped over as an empty run.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from arbychess.core.errors import LayoutError
from arbychess.core.piece import PlayerId
from arbychess.core.types import Coordinate

if TYPE_CHECKING:
    from arbychess.core.engine import RuleEngine


@dataclass(frozen=True, slots=True)
class Placement:
    """One piece requested by a layout string."""

    symbol: str
    player: PlayerId
    kind: str
    coords: Coordinate


def parse_layout(
    text: str,
    size: int,
    symbols: Mapping[str, tuple[PlayerId, str]],
) -> list[Placement]:
    """Decode *text* into placements on a ``size × size`` board."""
    ranks = text.split("/")
    if len(ranks) != size:
        raise LayoutError(f"Invalid layout (must contain {size} ranks): {text!r}")

    placements: list[Placement] = []
    for rank_idx, rank_text in enumerate(ranks):
        y = size - 1 - rank_idx
        x = 0
        run = ""
        for ch in rank_text + "\0":
            if ch.isdigit():
                run += ch
                continue
            if run:
                step = int(run)
                if step < 1:
                    raise LayoutError(f"Invalid layout run {run!r}: {text!r}")
                x += step
                run = ""
            if ch == "\0":
                break
            entry = symbols.get(ch)
            if entry is None:
                raise LayoutError(f"Unknown piece symbol {ch!r}: {text!r}")
            if x >= size:
                raise LayoutError(f"Invalid layout rank width: {text!r}")
            player, kind = entry
            placements.append(Placement(ch, player, kind, Coordinate(x, y)))
            x += 1
        if x != size:
            raise LayoutError(f"Invalid layout rank width: {text!r}")

    return placements


def layout_of(engine: RuleEngine) -> str:
    """Serialise the engine's current occupancy to a layout string."""
    size = engine.size
    board = engine.board
    rows: list[str] = []
    for y in range(size - 1, -1, -1):
        empty = 0
        row = ""
        for x in range(size):
            piece = board.occupier(Coordinate(x, y))
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += piece.symbol
        if empty:
            row += str(empty)
        rows.append(row)
    return "/".join(rows)
