"""Game management layer: turn controller, state, settings, persistence.

Quick start::

    from chesscore.core import pid
    from chesscore.game import PickEvent, TurnController

    ctrl = TurnController()
    ctrl.pick(PickEvent(piece_id=5))             # select the e2 pawn
    ctrl.pick(PickEvent(square_id=pid(5, 4)))    # e2-e4
"""

from chesscore.game.controller import GameEvents, TurnController
from chesscore.game.interfaces import ITurnController, PickEvent, TurnPhase
from chesscore.game.persistence import load_game, save_game
from chesscore.game.settings import GameSettings
from chesscore.game.state import GameState

__all__ = [
    # Interfaces
    "ITurnController",
    "PickEvent",
    "TurnPhase",
    # Concrete
    "GameEvents",
    "GameSettings",
    "GameState",
    "TurnController",
    # Persistence
    "load_game",
    "save_game",
]
