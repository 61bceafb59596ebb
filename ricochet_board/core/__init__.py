"""
Core abstractions shared by board games and their drivers.
"""
from .game import Game, GameState
from .encoder import Encoder

__all__ = [
    "Game",
    "GameState",
    "Encoder",
]
