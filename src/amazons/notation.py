"""
Position notation
----

A single line describing the board and the player to move, in the spirit of a chess FEN string:

<rows> <player to move>

* Rows are separated by slashes, listed from the top row (y = height - 1) down to the bottom row (y = 0).
* Within a row: 'W' white amazon, 'B' black amazon, 'x' arrow, and a number for a run of consecutive empty squares.
  Boards can be up to 26 wide, so a run can take more than one digit.
* The player to move is 'w' or 'b'.

ex) The standard 10x10 opening, white to move:
3B2B3/10/10/B8B/10/10/W8W/10/10/3W2W3 w
"""

import re
from dataclasses import dataclass
from typing import Self

from src.amazons.board import Board
from src.amazons.pieces import NOTATION_TO_STATE, STATE_TO_NOTATION, SquareState
from src.amazons.square import MAX_FILES, Coordinate
from src.core.exceptions import InvalidNotationError
from src.core.shared_types import Player

PLAYER_TO_NOTATION: dict[Player, str] = {Player.WHITE: "w", Player.BLACK: "b"}
NOTATION_TO_PLAYER: dict[str, Player] = {
    value: key for key, value in PLAYER_TO_NOTATION.items()
}

# one token is either a run of empty squares or a single occupied square
ROW_TOKEN = re.compile(r"\d+|[WBx]")


def _row_tokens(row: str) -> list[str]:
    tokens = ROW_TOKEN.findall(row)
    if "".join(tokens) != row:
        raise InvalidNotationError(f"Unexpected character in row {row!r}.")
    return tokens


def board_from_notation(rows_notation: str) -> Board:
    rows = rows_notation.split("/")
    height = len(rows)
    parsed_rows: list[list[SquareState]] = []
    for row in rows:
        states: list[SquareState] = []
        for token in _row_tokens(row):
            if token.isdigit():
                states.extend([SquareState.EMPTY] * int(token))
            else:
                states.append(NOTATION_TO_STATE[token])
        parsed_rows.append(states)

    width = len(parsed_rows[0])
    if any(len(states) != width for states in parsed_rows):
        raise InvalidNotationError(
            f"Rows of unequal length in {rows_notation!r}."
        )
    if width == 0:
        raise InvalidNotationError("Board has no squares.")
    if width > MAX_FILES:
        raise InvalidNotationError(f"Board is {width} wide, columns only go up to {MAX_FILES}.")

    board = Board.empty(width, height)
    for row_idx, states in enumerate(parsed_rows):
        # first row listed is the top one
        y = height - 1 - row_idx
        for x, state in enumerate(states):
            board.set_state(Coordinate(x, y), state)
    return board


def board_to_notation(board: Board) -> str:
    return "/".join(_row_to_notation(board, y) for y in range(board.height - 1, -1, -1))


def _row_to_notation(board: Board, y: int) -> str:
    characters: list[str] = []
    empty_count = 0
    for x in range(board.width):
        state = board.state_at(Coordinate(x, y))
        if state == SquareState.EMPTY:
            empty_count += 1
            continue
        if empty_count > 0:
            characters.append(str(empty_count))
            empty_count = 0
        characters.append(STATE_TO_NOTATION[state])

    # an entirely empty row still gets its number
    if empty_count > 0:
        characters.append(str(empty_count))
    return "".join(characters)


@dataclass
class Position:
    board: Board
    player_to_move: Player

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        parts = notation.strip().split(" ")
        if len(parts) != 2:
            raise InvalidNotationError(
                f"Position must contain 2 space-separated parts: {notation!r}"
            )
        rows_notation, player_code = parts
        if player_code not in NOTATION_TO_PLAYER:
            raise InvalidNotationError(f"Unknown player to move: {player_code!r}")
        return cls(board_from_notation(rows_notation), NOTATION_TO_PLAYER[player_code])

    def to_notation(self) -> str:
        return f"{board_to_notation(self.board)} {PLAYER_TO_NOTATION[self.player_to_move]}"


def is_valid_position(notation: str) -> bool:
    try:
        Position.from_notation(notation)
    except InvalidNotationError:
        return False
    return True
