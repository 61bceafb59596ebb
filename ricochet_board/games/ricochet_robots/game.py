from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Tuple

from ...core.game import Game, GameState
from .board import Board, Tile, WallKey
from .errors import ConfigurationError
from .layout import BoardConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoardState(GameState):
    """Immutable snapshot of a Ricochet Robots board for drivers."""

    size: int
    robots: Tuple[Tile, ...]
    target: Tile
    target_robot: int  # index of robot that must reach target
    walls: Tuple[WallKey, ...]
    round_number: int = 0
    move_count: int = 0
    # Compact signature that captures board walls+size for hashing/equality
    board_sig: int = 0

    @property
    def is_terminal(self) -> bool:
        if not self.robots:
            return False
        return self.robots[self.target_robot] == self.target


class RicochetRobotsGame(Game):
    """
    One play session on a single board.

    The wall layout is placed once at construction. ``start_game`` places
    the robots, then every round draws a target among the corner tiles and
    the robot that has to reach it. A driver calls ``start_next_round``
    after ``move_robot`` reports a win.
    """

    def __init__(self, config: BoardConfig | None = None, rng: random.Random | None = None) -> None:
        self.board = Board(config)
        self.board.init_default()
        self.rng = rng or random.Random()
        self.round_number = 0
        self.move_count = 0
        self._started = False

    @property
    def config(self) -> BoardConfig:
        return self.board.config

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start_game(self, seed: int | None = None) -> BoardState:
        if seed is not None:
            self.rng.seed(seed)
        self.board.clear()
        self.board.init_robots(self.rng)
        self.round_number = 0
        self._started = True
        return self.start_next_round()

    def start_next_round(self) -> BoardState:
        if not self._started:
            raise RuntimeError("Game not started")
        self.board.target = self._random_free_target()
        self.board.target_robot = self.rng.randrange(self.board.num_robots)
        self.board.backup()
        self.round_number += 1
        self.move_count = 0
        logger.info(
            "round %d: %s robot to %s",
            self.round_number,
            self.config.robot_names[self.board.target_robot],
            tuple(self.board.target),
        )
        return self.state()

    # ------------------------------------------------------------------
    # Moves
    # ------------------------------------------------------------------
    def can_move_robot(self, robot: int) -> List[Tile]:
        self._check_robot(robot)
        return self.board.can_move_robot(robot)

    def move_robot(self, robot: int, destination: Tile) -> bool:
        self._check_robot(robot)
        won = self.board.move_robot(robot, destination)
        self.move_count += 1
        if won:
            logger.info("round %d won in %d moves", self.round_number, self.move_count)
        return won

    def reset(self) -> BoardState:
        self.board.reset()
        self.move_count = 0
        return self.state()

    def state(self) -> BoardState:
        if not self._started:
            raise RuntimeError("Game not started")
        return BoardState(
            size=self.board.size,
            robots=tuple(self.board.robots),
            target=self.board.target,
            target_robot=self.board.target_robot,
            walls=tuple(sorted(self.board.walls)),
            round_number=self.round_number,
            move_count=self.move_count,
            board_sig=self.board.signature(),
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _check_robot(self, robot: int) -> None:
        if not self._started:
            raise RuntimeError("Game not started")
        if not (0 <= robot < self.board.num_robots):
            raise ValueError("invalid robot index")

    def _random_free_target(self) -> Tile:
        pool = self.board.corner_tiles
        for _ in range(self.config.max_sampling_attempts):
            tile = pool[self.rng.randrange(len(pool))]
            if self.board.has_robot(tile) is None:
                return tile
        raise ConfigurationError(
            f"no free target tile found after {self.config.max_sampling_attempts} draws"
        )
