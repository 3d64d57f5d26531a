"""Valid-move search over movement rules + attack detection."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable
from typing import TYPE_CHECKING

from arbychess.core.action import Action
from arbychess.core.enums import PieceRole

if TYPE_CHECKING:
    from arbychess.core.engine import RuleEngine
    from arbychess.core.move_rule import MoveRule
    from arbychess.core.piece import PieceInstance, PlayerId
    from arbychess.core.types import Coordinate

ValidMoves = dict["Coordinate", Action]


class MoveGenerator:
    """Enumerates the destinations a piece's rules can reach.

    The search is a worklist over ``(coords, rule)`` entries.  Each rule
    instance contributes at most once per destination (tracked by uid),
    which bounds unlimited walks and compound ``can_turn`` expansion.
    The generator never mutates the engine.
    """

    __slots__ = ("_engine", "_board")

    def __init__(self, engine: RuleEngine) -> None:
        self._engine = engine
        self._board = engine.board

    # -- Public API ---------------------------------------------------------

    def valid_moves(self, piece: PieceInstance) -> ValidMoves:
        """Pseudo-legal moves of *piece*, keyed by destination."""
        valid, _ = self._search(piece)

        base = piece.base
        if base.special_actions is not None:
            for action in base.special_actions(piece, self._engine):
                valid[action.destination] = action

        return valid

    # -- Attack detection ---------------------------------------------------

    def attacked_cells(self, by_player: PlayerId) -> set[Coordinate]:
        """Cells *by_player* could capture on if an enemy stood there.

        Special actions are skipped: they are never plain attacks and
        castling would otherwise recurse into this method.
        """
        attacked: set[Coordinate] = set()
        for piece in self._engine.pieces_of(by_player):
            attacked |= self._search(piece)[1]
        return attacked

    def is_cell_attacked(self, coords: Coordinate, by_players: Iterable[PlayerId]) -> bool:
        """Could any of *by_players* capture on *coords*?"""
        return any(coords in self.attacked_cells(player) for player in by_players)

    def is_in_check(self, player: PlayerId) -> bool:
        """Can any opponent capture one of *player*'s royal pieces?"""
        royals = [
            piece.coords
            for piece in self._engine.pieces_of(player)
            if piece.base.has_role(PieceRole.ROYAL)
        ]
        opponents = self._engine.opponents_of(player)
        return any(self.is_cell_attacked(coords, opponents) for coords in royals)

    # -- Internal -----------------------------------------------------------

    def _search(self, piece: PieceInstance) -> tuple[ValidMoves, set[Coordinate]]:
        """Walk every rule of *piece* once.

        Returns the reachable actions and the set of cells reached by a
        capture-capable rule (the cells this piece attacks).
        """
        board = self._board
        base = piece.base
        origin = piece.coords

        seen: dict[Coordinate, set[int]] = {origin: set()}
        valid: ValidMoves = {}
        attacked: set[Coordinate] = set()
        queue: deque[tuple[Coordinate, MoveRule]] = deque(
            (origin, rule) for rule in base.movements
        )
        if base.special_moves is not None:
            queue.extend(base.special_moves(piece))

        while queue:
            coords, rule = queue.popleft()

            new_coords = board.transform(coords, rule)
            if new_coords is None:
                continue

            prior = seen.setdefault(new_coords, set())
            if rule.uid in prior:
                continue
            prior.add(rule.uid)

            if rule.can_capture:
                attacked.add(new_coords)

            occupier = board.occupier(new_coords)
            action: Action | None = None

            if occupier is not None:
                if rule.can_capture and occupier.player != piece.player:
                    # Capturing always ends this walk.
                    action = Action(
                        piece,
                        origin,
                        new_coords,
                        capture=True,
                        victim=occupier,
                        turn=rule.can_turn,
                    )
            elif rule.can_place:
                action = Action(piece, origin, new_coords, place=True, turn=rule.can_turn)
                if rule.continues:
                    queue.append((new_coords, rule.advanced()))

            if action is None:
                continue

            if rule.can_turn:
                queue.extend((new_coords, move) for move in base.movements)

            valid[new_coords] = action

        return valid, attacked
