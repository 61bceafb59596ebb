from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .game import GameState


class Encoder(ABC):
    """
    Converts a GameState into an array a renderer or transport layer can
    consume without knowing the board model.
    """

    @abstractmethod
    def encode(self, state: GameState) -> Any:
        """
        Return observation; shape / dtype depends on concrete encoder.
        """
        raise NotImplementedError
