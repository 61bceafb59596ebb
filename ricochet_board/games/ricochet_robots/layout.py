"""Grid geometry constants and the static board configuration.

The reference layout is a 16x16 board. ``(0, 0)`` is the top left corner,
``x`` grows to the right and ``y`` grows downwards::

      0 1 2 3 4 5 6 7 8 9 A B C D E F
    0 . . . . .|. . . . . . .|. _ . .
    1 . _ . . . . _|. . . . . .|. . .
    2 .|. . . . . . . . _|. . . . . .
    3 . . . . . . . . . . . . . . . _
    4 . . . . . . _ . . . . . . . . .
    5 _ . . . . . .|. . . . _ . .|_ .
    6 . . .|_ . . . . . . . .|. . . .
    7 . . . . . . . x x . . . _ . . .
    8 . . _ . .|_ . x x . . .|. . . .
    9 . .|. . . . . . . .|_ . . . . .
    A . . . . . . . . . . . . . . . _
    B _ . . . . . . . . _|. . . . _ .
    C . . . . _ . . . . . . . . . .|.
    D . . . . .|. . . . . . . . _ . .
    E . _|. . . . . . . . . . .|. . .
    F . . . . . .|. . . . .|. . . . .
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, NamedTuple, Tuple

import yaml

from .errors import ConfigurationError, InvalidCorner, InvalidDirection


class Tile(NamedTuple):
    """A single grid cell. Tuple ordering (x, then y) is the wall-key order."""

    x: int
    y: int


# Direction indices, in canonical iteration order
UP, DOWN, LEFT, RIGHT = range(4)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)
DIRECTION_NAMES = ("up", "down", "left", "right")
DX = [0, 0, -1, 1]
DY = [-1, 1, 0, 0]
# Bitmask encoding for wall masks: 1<<direction
DIR_MASKS = [1 << d for d in DIRECTIONS]
OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

CORNERS: Dict[str, Tuple[int, int]] = {
    "top-left": (UP, LEFT),
    "top-right": (UP, RIGHT),
    "bottom-left": (DOWN, LEFT),
    "bottom-right": (DOWN, RIGHT),
}


def parse_direction(direction: int | str) -> int:
    """Return the direction index for an index or a name like ``"up"``."""
    if isinstance(direction, str):
        try:
            return DIRECTION_NAMES.index(direction)
        except ValueError:
            raise InvalidDirection(f"invalid direction {direction!r}") from None
    if isinstance(direction, int) and not isinstance(direction, bool) and direction in DIRECTIONS:
        return direction
    raise InvalidDirection(f"invalid direction {direction!r}")


def parse_corner(corner: str) -> Tuple[int, int]:
    """Return the two directions forming ``corner``."""
    try:
        return CORNERS[corner]
    except (KeyError, TypeError):
        raise InvalidCorner(f"invalid corner {corner!r}") from None


# ---------------------------------------------------------------------------
# Reference layout
# ---------------------------------------------------------------------------
DEFAULT_SIZE = 16
DEFAULT_ROBOT_NAMES = ("red", "blue", "green", "yellow")

WallSpec = Tuple[Tile, int]
CornerSpec = Tuple[Tile, str]

# Walls around the 2x2 box in the middle
DEFAULT_BOX_WALLS: Tuple[WallSpec, ...] = (
    (Tile(8, 7), RIGHT),
    (Tile(6, 8), RIGHT),
    (Tile(8, 8), RIGHT),
    (Tile(7, 6), DOWN),
    (Tile(7, 8), DOWN),
    (Tile(8, 6), DOWN),
    (Tile(8, 8), DOWN),
)

# One spur per side-quadrant on the outer edge
DEFAULT_EDGE_WALLS: Tuple[WallSpec, ...] = (
    # top
    (Tile(4, 0), RIGHT),
    (Tile(DEFAULT_SIZE - 4, 0), LEFT),
    # bottom
    (Tile(6, 15), RIGHT),
    (Tile(DEFAULT_SIZE - 5, 15), LEFT),
    # left
    (Tile(0, 6), DOWN),
    (Tile(0, DEFAULT_SIZE - 4), UP),
    # right
    (Tile(15, 4), DOWN),
    (Tile(15, DEFAULT_SIZE - 5), UP),
)

# L-shaped walls; every corner tile is also a start/target candidate
DEFAULT_CORNER_WALLS: Tuple[CornerSpec, ...] = (
    (Tile(1, 2), "top-left"),
    (Tile(12, 8), "top-left"),
    (Tile(2, 9), "top-left"),
    (Tile(13, 14), "top-left"),
    (Tile(13, 1), "top-left"),
    (Tile(6, 5), "top-right"),
    (Tile(4, 13), "top-right"),
    (Tile(14, 12), "top-right"),
    (Tile(11, 6), "top-right"),
    (Tile(6, 1), "bottom-right"),
    (Tile(9, 2), "bottom-right"),
    (Tile(9, 11), "bottom-right"),
    (Tile(1, 14), "bottom-right"),
    (Tile(3, 6), "bottom-left"),
    (Tile(14, 5), "bottom-left"),
    (Tile(10, 9), "bottom-left"),
    (Tile(5, 8), "bottom-left"),
)


def _wall_specs(raw: Iterable[Any]) -> Tuple[WallSpec, ...]:
    # entries are (tile, direction) or (x, y, direction) as read from YAML
    specs = []
    for entry in raw:
        if len(entry) == 2:
            (x, y), direction = entry
        else:
            x, y, direction = entry
        specs.append((Tile(int(x), int(y)), parse_direction(direction)))
    return tuple(specs)


def _corner_specs(raw: Iterable[Any]) -> Tuple[CornerSpec, ...]:
    specs = []
    for entry in raw:
        if len(entry) == 2:
            (x, y), corner = entry
        else:
            x, y, corner = entry
        parse_corner(corner)
        specs.append((Tile(int(x), int(y)), corner))
    return tuple(specs)


@dataclass(frozen=True)
class BoardConfig:
    """
    Static board configuration: grid size, robot identities and wall layout.

    ``num_robots`` defaults to the number of ``robot_names``; when given it
    must match. The corner tiles double as the pool robots start from and
    targets are drawn from, so the pool must hold at least
    ``num_robots + 1`` distinct tiles for both draws to terminate.
    ``max_sampling_attempts`` caps every rejection-sampling loop.
    """

    size: int = DEFAULT_SIZE
    robot_names: Tuple[str, ...] = DEFAULT_ROBOT_NAMES
    num_robots: int | None = None
    box_walls: Tuple[WallSpec, ...] = DEFAULT_BOX_WALLS
    edge_walls: Tuple[WallSpec, ...] = DEFAULT_EDGE_WALLS
    corner_walls: Tuple[CornerSpec, ...] = DEFAULT_CORNER_WALLS
    max_sampling_attempts: int = 10_000
    corner_tiles: Tuple[Tile, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        try:
            box = _wall_specs(self.box_walls)
            edge = _wall_specs(self.edge_walls)
            corners = _corner_specs(self.corner_walls)
        except (InvalidDirection, InvalidCorner) as err:
            raise ConfigurationError(str(err)) from err
        except (TypeError, ValueError) as err:
            raise ConfigurationError(f"malformed wall entry: {err}") from err
        object.__setattr__(self, "box_walls", box)
        object.__setattr__(self, "edge_walls", edge)
        object.__setattr__(self, "corner_walls", corners)
        object.__setattr__(self, "robot_names", tuple(self.robot_names))

        if self.num_robots is None:
            object.__setattr__(self, "num_robots", len(self.robot_names))
        self._validate()

        tiles: list[Tile] = []
        for tile, _ in self.corner_walls:
            if tile not in tiles:
                tiles.append(tile)
        object.__setattr__(self, "corner_tiles", tuple(tiles))
        if len(self.corner_tiles) < self.num_robots + 1:
            raise ConfigurationError(
                f"{len(self.corner_tiles)} corner tiles cannot hold {self.num_robots} robots and a free target"
            )

    def _validate(self) -> None:
        if self.size < 2:
            raise ConfigurationError(f"board size must be at least 2, got {self.size}")
        if self.size > 0xFFFF:
            raise ConfigurationError(f"board size must fit in two bytes, got {self.size}")
        if self.num_robots < 1:
            raise ConfigurationError("at least one robot is required")
        if self.num_robots != len(self.robot_names):
            raise ConfigurationError(
                f"num_robots={self.num_robots} does not match {len(self.robot_names)} robot names"
            )
        if len(set(self.robot_names)) != len(self.robot_names):
            raise ConfigurationError(f"robot names must be unique: {self.robot_names}")
        if self.max_sampling_attempts < 1:
            raise ConfigurationError("max_sampling_attempts must be positive")

        for tile, direction in self.box_walls + self.edge_walls:
            self._check_wall(tile, direction)
        for tile, corner in self.corner_walls:
            for direction in parse_corner(corner):
                self._check_wall(tile, direction)

    def _check_wall(self, tile: Tile, direction: int) -> None:
        nx, ny = tile.x + DX[direction], tile.y + DY[direction]
        for cx, cy in ((tile.x, tile.y), (nx, ny)):
            if not (0 <= cx < self.size and 0 <= cy < self.size):
                raise ConfigurationError(
                    f"wall at {tuple(tile)} facing {DIRECTION_NAMES[direction]} leaves a {self.size}x{self.size} grid"
                )

    # ------------------------------------------------------------------
    # (De)serialisation
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardConfig":
        """Build a config from the ``board``/``walls`` mapping used in YAML files."""
        board = data.get("board", {}) or {}
        walls = data.get("walls", {}) or {}
        kwargs: Dict[str, Any] = {}
        if "size" in board:
            kwargs["size"] = board["size"]
        if "robot_names" in board:
            kwargs["robot_names"] = tuple(board["robot_names"])
        if "num_robots" in board:
            kwargs["num_robots"] = board["num_robots"]
        if "max_sampling_attempts" in board:
            kwargs["max_sampling_attempts"] = board["max_sampling_attempts"]
        if "box" in walls:
            kwargs["box_walls"] = walls["box"] or ()
        if "edge" in walls:
            kwargs["edge_walls"] = walls["edge"] or ()
        if "corners" in walls:
            kwargs["corner_walls"] = walls["corners"] or ()
        return cls(**kwargs)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "BoardConfig":
        path = Path(path)
        with path.open() as fh:
            data = yaml.safe_load(fh) or {}
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board": {
                "size": self.size,
                "robot_names": list(self.robot_names),
                "max_sampling_attempts": self.max_sampling_attempts,
            },
            "walls": {
                "box": [[t.x, t.y, DIRECTION_NAMES[d]] for t, d in self.box_walls],
                "edge": [[t.x, t.y, DIRECTION_NAMES[d]] for t, d in self.edge_walls],
                "corners": [[t.x, t.y, c] for t, c in self.corner_walls],
            },
        }
