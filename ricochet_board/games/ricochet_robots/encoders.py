from __future__ import annotations

from typing import Any

import numpy as np

from ...core.encoder import Encoder
from .game import BoardState
from .layout import DIRECTIONS, DOWN, LEFT, RIGHT, UP


def _wall_planes(state: BoardState) -> np.ndarray:
    """(4, N, N) binary planes, one per direction, board edges included."""
    n = state.size
    planes = np.zeros((4, n, n), dtype=np.float32)
    planes[UP, 0, :] = 1.0
    planes[DOWN, -1, :] = 1.0
    planes[LEFT, :, 0] = 1.0
    planes[RIGHT, :, -1] = 1.0
    for a, b in state.walls:
        if a.x == b.x:
            planes[DOWN, a.y, a.x] = 1.0
            planes[UP, b.y, b.x] = 1.0
        else:
            planes[RIGHT, a.y, a.x] = 1.0
            planes[LEFT, b.y, b.x] = 1.0
    return planes


class PlanarEncoder(Encoder):
    """
    Encode board as multi-channel (C, H, W) NumPy array.

    Channels:
    0..R-1   : one-hot plane per robot
    R        : target plane
    R+1..R+4 : walls up, down, left, right planes (binary)
    """

    def encode(self, state: BoardState) -> np.ndarray:
        n = state.size
        num_robots = len(state.robots)
        channels = num_robots + 1 + len(DIRECTIONS)
        planes = np.zeros((channels, n, n), dtype=np.float32)
        # robots
        for idx, (x, y) in enumerate(state.robots):
            planes[idx, y, x] = 1.0
        # target
        tx, ty = state.target
        planes[num_robots, ty, tx] = 1.0
        # walls
        planes[num_robots + 1 :] = _wall_planes(state)
        return planes


class FlatArrayEncoder(Encoder):
    """
    Encode as 1D flat numeric array (robots xy pairs + target xy + target robot).
    """

    def encode(self, state: BoardState) -> Any:
        robots_flat = np.array(state.robots, dtype=np.int8).flatten()
        target_flat = np.array(state.target, dtype=np.int8)
        return np.concatenate([robots_flat, target_flat, np.array([state.target_robot], dtype=np.int8)])
