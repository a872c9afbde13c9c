"""Unit tests for /src/amazons/notation.py"""

import pytest

from src.amazons.board import Board
from src.amazons.notation import (
    Position,
    board_from_notation,
    board_to_notation,
    is_valid_position,
)
from src.amazons.pieces import SquareState
from src.amazons.square import Coordinate
from src.amazons.state import GameState
from src.core.exceptions import InvalidNotationError
from src.core.shared_types import Player

STANDARD_POSITION = "3B2B3/10/10/B8B/10/10/W8W/10/10/3W2W3 w"


def test_standard_position_to_notation(standard_state: GameState) -> None:
    assert Position(standard_state.board, Player.WHITE).to_notation() == STANDARD_POSITION


def test_standard_position_from_notation(standard_state: GameState) -> None:
    position = Position.from_notation(STANDARD_POSITION)
    assert position.player_to_move == Player.WHITE
    assert position.board == standard_state.board


def test_rows_are_listed_top_down() -> None:
    board = board_from_notation("x2/3/W1B")
    assert (board.width, board.height) == (3, 3)
    assert board.state_at(Coordinate(0, 2)) == SquareState.ARROW
    assert board.state_at(Coordinate(0, 0)) == SquareState.WHITE
    assert board.state_at(Coordinate(2, 0)) == SquareState.BLACK
    assert board.count(SquareState.EMPTY) == 6


def test_runs_longer_than_nine() -> None:
    board = Board.empty(12, 2)
    board.set_state(Coordinate(11, 0), SquareState.ARROW)
    assert board_to_notation(board) == "12/11x"
    assert board_from_notation("12/11x") == board


def test_black_to_move() -> None:
    position = Position.from_notation("W1x1B/1xxx1 b")
    assert position.player_to_move == Player.BLACK
    assert position.to_notation() == "W1x1B/1xxx1 b"


@pytest.mark.parametrize(
    "notation",
    [
        "W1x1B/1xxx1",  # no player to move
        "W1x1B/1xxx1 w extra",
        "W1x1B/1xxx1 white",
        "W1x1B/1xx1 w",  # rows of unequal length
        "W1q1B/1xxx1 w",  # unknown piece
        "W1X1B/1xxx1 w",  # arrows are lower case
        "/ w",
    ],
)
def test_invalid_notation(notation: str) -> None:
    with pytest.raises(InvalidNotationError):
        Position.from_notation(notation)
    assert not is_valid_position(notation)


def test_valid_notation() -> None:
    assert is_valid_position(STANDARD_POSITION)
    assert is_valid_position("  3/3/3 b ")


def test_board_wider_than_the_alphabet() -> None:
    assert is_valid_position("26/26 w")
    assert not is_valid_position("27/27 w")
