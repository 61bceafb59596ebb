"""Ricochet Robots board model and round lifecycle."""
from .board import Board, Tile, UP, DOWN, LEFT, RIGHT
from .layout import BoardConfig
from .game import RicochetRobotsGame, BoardState
from .encoders import FlatArrayEncoder, PlanarEncoder
from .registry import GameRegistry
from .errors import (
    BoardError,
    ConfigurationError,
    InvalidConnection,
    InvalidCorner,
    InvalidDirection,
    OutOfBounds,
)

__all__ = [
    "Board",
    "Tile",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "BoardConfig",
    "RicochetRobotsGame",
    "BoardState",
    "FlatArrayEncoder",
    "PlanarEncoder",
    "GameRegistry",
    "BoardError",
    "ConfigurationError",
    "InvalidConnection",
    "InvalidCorner",
    "InvalidDirection",
    "OutOfBounds",
]
