from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, List


@dataclass(frozen=True)
class GameState(ABC):
    """
    Immutable snapshot of a game handed to drivers.

    Sub-classes add concrete fields (robot positions, target, ...).
    """

    @property
    @abstractmethod
    def is_terminal(self) -> bool:
        """Return True if the current round has been won."""
        raise NotImplementedError


class Game(ABC):
    """
    Round-based puzzle session driven by an external caller (UI, network
    layer or test harness), one input event at a time.
    """

    @abstractmethod
    def start_game(self, seed: int | None = None) -> GameState:
        """
        Place the pieces and start the first round.
        """
        raise NotImplementedError

    @abstractmethod
    def start_next_round(self) -> GameState:
        """
        Pick a new objective, keeping the pieces where they are.
        """
        raise NotImplementedError

    @abstractmethod
    def can_move_robot(self, robot: int) -> List[Any]:
        """
        Return every destination ``robot`` can reach in one move.
        """
        raise NotImplementedError

    @abstractmethod
    def move_robot(self, robot: int, destination: Any) -> bool:
        """
        Commit a move and return True if it wins the round.
        """
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> GameState:
        """
        Undo every move made since the round started.
        """
        raise NotImplementedError

    @abstractmethod
    def state(self) -> GameState:
        """
        Return a snapshot of the current position.
        """
        raise NotImplementedError
