"""Defines what can occupy a square"""

from enum import Enum, auto
from typing import Optional

from src.core.shared_types import Player


class SquareState(Enum):
    EMPTY = auto()
    WHITE = auto()
    BLACK = auto()
    ARROW = auto()


PLAYER_TO_STATE: dict[Player, SquareState] = {
    Player.WHITE: SquareState.WHITE,
    Player.BLACK: SquareState.BLACK,
}

STATE_TO_PLAYER: dict[SquareState, Player] = {
    value: key for key, value in PLAYER_TO_STATE.items()
}

# Characters used in the position notation. Empty squares are written as run lengths instead.
NOTATION_TO_STATE: dict[str, SquareState] = {
    "W": SquareState.WHITE,
    "B": SquareState.BLACK,
    "x": SquareState.ARROW,
}

STATE_TO_NOTATION: dict[SquareState, str] = {
    value: key for key, value in NOTATION_TO_STATE.items()
}


def owner(state: SquareState) -> Optional[Player]:
    """The player whose amazon stands on a square in this state (None for empty / arrow squares)"""
    return STATE_TO_PLAYER.get(state)
