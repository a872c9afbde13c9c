"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    FINISHED = "finished"


class Player(StrEnum):
    """Doubles as the ownership tag of a piece and as the turn indicator."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> "Player":
        return Player.BLACK if self == Player.WHITE else Player.WHITE


class Controller(StrEnum):
    """Who controls a square once the board has been flood-filled."""

    WHITE = "white"
    BLACK = "black"
    NEUTRAL = "neutral"


class TurnPhase(StrEnum):
    AWAITING_SOURCE = "awaiting source"
    AWAITING_DESTINATION = "awaiting destination"
    AWAITING_SHOT = "awaiting shot"
