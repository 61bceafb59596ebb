from __future__ import annotations

import logging
import random
import secrets
from typing import Dict, List

from .game import RicochetRobotsGame
from .layout import BoardConfig

logger = logging.getLogger(__name__)


class GameRegistry:
    """Table of running games keyed by a random url-safe id."""

    def __init__(self) -> None:
        self._games: Dict[str, RicochetRobotsGame] = {}

    def new_game(self, config: BoardConfig | None = None, seed: int | None = None) -> str:
        game_id = secrets.token_urlsafe(16)
        while game_id in self._games:
            game_id = secrets.token_urlsafe(16)
        rng = random.Random(seed) if seed is not None else None
        self._games[game_id] = RicochetRobotsGame(config=config, rng=rng)
        logger.debug("created game %s", game_id)
        return game_id

    def get_game(self, game_id: str) -> RicochetRobotsGame | None:
        return self._games.get(game_id)

    def remove_game(self, game_id: str) -> RicochetRobotsGame | None:
        return self._games.pop(game_id, None)

    def list_games(self) -> List[RicochetRobotsGame]:
        return list(self._games.values())

    def __len__(self) -> int:
        return len(self._games)

    def __contains__(self, game_id: object) -> bool:
        return game_id in self._games
