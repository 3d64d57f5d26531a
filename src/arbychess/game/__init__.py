"""Game management layer: the select/release controller, its events and phases.

Quick start::

    from arbychess.core import parse_coordinate
    from arbychess.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.select(parse_coordinate("e2"))
    ctrl.release(parse_coordinate("e4"))
"""

from arbychess.core.options import RuleOptions
from arbychess.game.controller import GameController, GameEvents
from arbychess.game.interfaces import GamePhase

__all__ = [
    "GameController",
    "GameEvents",
    "GamePhase",
    "RuleOptions",
]
