from __future__ import annotations

import hashlib
import logging
import random
from typing import Dict, List, Tuple

import numpy as np

from .errors import ConfigurationError, InvalidConnection, OutOfBounds
from .layout import (
    BoardConfig,
    CORNERS,
    DIR_MASKS,
    DIRECTION_NAMES,
    DIRECTIONS,
    DOWN,
    DX,
    DY,
    LEFT,
    OPPOSITE,
    RIGHT,
    Tile,
    UP,
    parse_corner,
    parse_direction,
)

logger = logging.getLogger(__name__)

WallKey = Tuple[Tile, Tile]

__all__ = [
    "Board",
    "Tile",
    "WallKey",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "DIRECTIONS",
    "DIRECTION_NAMES",
    "DIR_MASKS",
    "OPPOSITE",
    "CORNERS",
]


class Board:
    """
    Square grid with a sparse, append-only wall set, robots and a target.

    Walls live between two adjacent tiles and are stored under a canonical
    key (tiles ordered by x, then y), so a wall added from either side is
    found from both. The outer edge of the grid is not stored as walls but
    blocks movement all the same.
    """

    def __init__(self, config: BoardConfig | None = None):
        self.config = config or BoardConfig()
        self.size = self.config.size
        self.num_robots = self.config.num_robots
        self.robots: List[Tile] = []
        self.robots_backup: List[Tile] = []
        self.walls: Dict[WallKey, bool] = {}
        self.target = Tile(0, 0)
        self.target_robot = 0

    # ---------------------------------------------------------------------
    # Geometry
    # ---------------------------------------------------------------------
    def in_bounds(self, tile: Tile) -> bool:
        return 0 <= tile[0] < self.size and 0 <= tile[1] < self.size

    def neighbor(self, tile: Tile, direction: int | str) -> Tile | None:
        """Return the adjacent tile in ``direction`` or None past the edge of the grid."""
        d = parse_direction(direction)
        nx, ny = tile[0] + DX[d], tile[1] + DY[d]
        if not (0 <= nx < self.size and 0 <= ny < self.size):
            return None
        return Tile(nx, ny)

    def other_tile_from(self, tile: Tile, direction: int | str) -> Tile:
        """Strict form of :meth:`neighbor`: raises OutOfBounds at the edge."""
        other = self.neighbor(tile, direction)
        if other is None:
            name = DIRECTION_NAMES[parse_direction(direction)]
            raise OutOfBounds(f"can't go further {name} from {tuple(tile)}")
        return other

    @staticmethod
    def wall_key(a: Tile, b: Tile) -> WallKey:
        """Canonical, direction independent key of the connection between ``a`` and ``b``."""
        a, b = Tile(*a), Tile(*b)
        if abs(a.x - b.x) + abs(a.y - b.y) != 1:
            raise InvalidConnection(f"{tuple(a)} and {tuple(b)} are not adjacent")
        return (a, b) if a < b else (b, a)

    # ---------------------------------------------------------------------
    # Wall helpers
    # ---------------------------------------------------------------------
    def add_wall(self, tile: Tile, direction: int | str) -> None:
        other = self.other_tile_from(tile, direction)
        self.walls[self.wall_key(tile, other)] = True

    def add_corner_wall(self, tile: Tile, corner: str) -> None:
        """Add the two walls meeting at ``corner`` of ``tile``."""
        first, second = parse_corner(corner)
        # resolve both sides before writing so a failure leaves no half corner
        keys = [self.wall_key(tile, self.other_tile_from(tile, d)) for d in (first, second)]
        for key in keys:
            self.walls[key] = True

    def has_wall(self, tile: Tile, direction: int | str) -> bool:
        """True if a wall or the edge of the grid is on that side of ``tile``."""
        other = self.neighbor(tile, direction)
        if other is None:
            return True
        return self.walls.get(self.wall_key(tile, other), False)

    def has_placed_wall(self, tile: Tile, direction: int | str) -> bool:
        """Like :meth:`has_wall` but False at the edge of the grid."""
        other = self.neighbor(tile, direction)
        if other is None:
            return False
        return self.walls.get(self.wall_key(tile, other), False)

    def init_default(self) -> None:
        cfg = self.config
        # box in the middle
        for tile, direction in cfg.box_walls:
            self.add_wall(tile, direction)
        # spurs on the outer edge
        for tile, direction in cfg.edge_walls:
            self.add_wall(tile, direction)
        for tile, corner in cfg.corner_walls:
            self.add_corner_wall(tile, corner)
        logger.debug("placed %d walls on a %dx%d board", len(self.walls), self.size, self.size)

    @property
    def corner_tiles(self) -> Tuple[Tile, ...]:
        return self.config.corner_tiles

    def wall_mask(self, include_edges: bool = True) -> np.ndarray:
        """Return an (N, N) uint8 array, bit ``1 << direction`` set per blocked side."""
        mask = np.zeros((self.size, self.size), dtype=np.uint8)
        for a, b in self.walls:
            if a.x == b.x:
                # vertical neighbours: a is above b
                mask[a.y, a.x] |= DIR_MASKS[DOWN]
                mask[b.y, b.x] |= DIR_MASKS[UP]
            else:
                mask[a.y, a.x] |= DIR_MASKS[RIGHT]
                mask[b.y, b.x] |= DIR_MASKS[LEFT]
        if include_edges:
            mask[0, :] |= DIR_MASKS[UP]
            mask[-1, :] |= DIR_MASKS[DOWN]
            mask[:, 0] |= DIR_MASKS[LEFT]
            mask[:, -1] |= DIR_MASKS[RIGHT]
        return mask

    def signature(self) -> int:
        """Return a stable, compact integer signature for walls and size."""
        hasher = hashlib.blake2b(digest_size=8)
        hasher.update(self.size.to_bytes(2, byteorder="little", signed=False))
        for a, b in sorted(self.walls):
            for coord in (a.x, a.y, b.x, b.y):
                hasher.update(coord.to_bytes(2, byteorder="little", signed=False))
        return int.from_bytes(hasher.digest(), byteorder="little", signed=False)

    # ---------------------------------------------------------------------
    # Robots
    # ---------------------------------------------------------------------
    def _robot_index(self, robot: int) -> int:
        if not 0 <= robot < len(self.robots):
            raise IndexError(f"no robot {robot} on a board with {len(self.robots)} robots")
        return robot

    def has_robot(self, tile: Tile) -> int | None:
        """Index of the robot standing on ``tile``, if any."""
        for idx, pos in enumerate(self.robots):
            if pos == tile:
                return idx
        return None

    def slide(self, tile: Tile, direction: int | str) -> Tile:
        """Return the tile where a robot starting on ``tile`` stops."""
        d = parse_direction(direction)
        final = Tile(*tile)
        while True:
            nxt = self.neighbor(final, d)
            if nxt is None:
                break
            if self.has_wall(final, d) or self.has_robot(nxt) is not None:
                break
            final = nxt
        return final

    def legal_moves(self, robot: int) -> Dict[int, Tile]:
        """Map each direction the robot can move in to where it stops."""
        start = self.robots[self._robot_index(robot)]
        moves: Dict[int, Tile] = {}
        for direction in DIRECTIONS:
            final = self.slide(start, direction)
            if final != start:
                moves[direction] = final
            logger.debug(
                "robot %d at %s going %s stops at %s", robot, start, DIRECTION_NAMES[direction], final
            )
        return moves

    def can_move_robot(self, robot: int) -> List[Tile]:
        """Destinations reachable in one slide, in up/down/left/right order."""
        return list(self.legal_moves(robot).values())

    def move_robot(self, robot: int, tile: Tile) -> bool:
        """Place ``robot`` on ``tile`` without checking legality; True if that wins the round."""
        tile = Tile(*tile)
        self.robots[self._robot_index(robot)] = tile
        return tile == self.target and robot == self.target_robot

    # ---------------------------------------------------------------------
    # Round setup
    # ---------------------------------------------------------------------
    def init_robots(self, rng: random.Random | None = None) -> None:
        """Place robots on distinct corner tiles chosen uniformly at random."""
        rng = rng or random.Random()
        pool = self.corner_tiles
        robots: List[Tile] = []
        occupied: List[int] = []
        attempts = 0
        while len(occupied) < self.num_robots:
            attempts += 1
            if attempts > self.config.max_sampling_attempts:
                raise ConfigurationError(
                    f"could not place {self.num_robots} robots after {attempts - 1} draws"
                )
            pos = rng.randrange(len(pool))
            if pos in occupied:
                continue
            occupied.append(pos)
            robots.append(pool[pos])
        self.robots = robots
        self.backup()
        logger.debug("robots placed at %s", self.robots)

    def clear(self) -> None:
        self.robots = []
        self.robots_backup = []

    def backup(self) -> None:
        self.robots_backup = list(self.robots)

    def reset(self) -> None:
        """Put every robot back where it was at the last backup."""
        self.robots = list(self.robots_backup)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, robots={[tuple(t) for t in self.robots]}, walls={len(self.walls)})"
