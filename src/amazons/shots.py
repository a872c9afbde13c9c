"""Firing the arrow. Same line rules as moving (the shooter's square is the origin, not an obstruction)."""

from typing import Optional

from src.amazons.lines import Legality, trace
from src.amazons.pieces import SquareState
from src.amazons.square import Coordinate
from src.amazons.state import GameState


def validate_shot(
    state: GameState,
    from_square: Coordinate,
    target: Coordinate,
    vacated: Optional[Coordinate] = None,
) -> Legality:
    return trace(state.board, from_square, target, vacated)


def apply_shot(state: GameState, target: Coordinate) -> None:
    """Arrows never leave the board again"""
    state.board.set_state(target, SquareState.ARROW)
