"""Core rule machinery: pure move generation with zero external dependencies.

Quick start::

    from arbychess.core import RuleEngine, parse_coordinate

    engine = RuleEngine()
    knight = engine.piece_at(parse_coordinate("g1"))
    for coords, action in engine.calculate_valid_moves(knight).items():
        print(coords, action)
"""

from arbychess.core.action import Action
from arbychess.core.board import Board, Cell, SquareGrid
from arbychess.core.engine import RuleEngine, Undo
from arbychess.core.enums import GameResult, PieceRole
from arbychess.core.errors import (
    IllegalAction,
    LayoutError,
    LeavesKingInCheck,
    MoveRejected,
    OutOfTurn,
)
from arbychess.core.layout import Placement, layout_of, parse_layout
from arbychess.core.move_generator import MoveGenerator
from arbychess.core.move_rule import UNLIMITED, MoveRule
from arbychess.core.options import RuleOptions
from arbychess.core.piece import PieceInstance, PieceType, Player, PlayerId
from arbychess.core.rules import Rules
from arbychess.core.turns import TurnCycle
from arbychess.core.types import Coordinate, Vector, coordinate_name, parse_coordinate
from arbychess.core.variant import StandardChess, Variant

__all__ = [
    # Enums / flags
    "GameResult",
    "PieceRole",
    # Types / helpers
    "Coordinate",
    "Vector",
    "coordinate_name",
    "parse_coordinate",
    # Domain objects
    "Action",
    "Board",
    "Cell",
    "MoveGenerator",
    "MoveRule",
    "PieceInstance",
    "PieceType",
    "Player",
    "PlayerId",
    "RuleEngine",
    "RuleOptions",
    "Rules",
    "SquareGrid",
    "TurnCycle",
    "UNLIMITED",
    "Undo",
    # Variants / layout
    "Placement",
    "StandardChess",
    "Variant",
    "layout_of",
    "parse_layout",
    # Errors
    "IllegalAction",
    "LayoutError",
    "LeavesKingInCheck",
    "MoveRejected",
    "OutOfTurn",
]
