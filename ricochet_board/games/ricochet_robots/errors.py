"""Exceptions raised by the Ricochet Robots board model."""
from __future__ import annotations


class BoardError(Exception):
    """Base class for all board errors."""


class OutOfBounds(BoardError):
    """A direction query would leave the grid."""


class InvalidDirection(BoardError, ValueError):
    """Direction token is not one of up/down/left/right."""


class InvalidCorner(BoardError, ValueError):
    """Corner token is not one of the four corners."""


class InvalidConnection(BoardError, ValueError):
    """Two tiles that are not grid-adjacent cannot share a wall."""


class ConfigurationError(BoardError, ValueError):
    """Board configuration is inconsistent or cannot be satisfied."""
