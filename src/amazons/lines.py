"""
Queen-line geometry
-----

An amazon moves like a chess queen, and the arrow it fires afterwards travels the same way.
Both actions are checked by the same routine, `trace`.
"""

from enum import Enum
from typing import Optional, Protocol

from src.amazons.pieces import SquareState
from src.amazons.square import Coordinate


class Board(Protocol):
    """Just the parts the line tracer needs"""

    def in_bounds(self, coord: Coordinate) -> bool: ...
    def state_at(self, coord: Coordinate) -> SquareState: ...
    def squares(self) -> list[Coordinate]: ...


class Legality(Enum):
    LEGAL = "legal"
    OUT_OF_BOUNDS = "out of bounds"
    NOT_A_STRAIGHT_LINE = "not a straight line"
    PATH_OBSTRUCTED = "path obstructed"
    DESTINATION_OCCUPIED = "destination occupied"
    SAME_SQUARE = "same square"
    WRONG_OWNER = "wrong owner"

    @property
    def is_legal(self) -> bool:
        return self == Legality.LEGAL


Vector = tuple[int, int]

ORTHOGONALS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONALS: list[Vector] = [(1, 1), (-1, 1), (1, -1), (-1, -1)]
QUEEN_DIRECTIONS: list[Vector] = ORTHOGONALS + DIAGONALS


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def direction_between(from_square: Coordinate, to_square: Coordinate) -> Optional[Vector]:
    """Unit step leading from one square to the other, or None if they do not share a queen line"""
    dx = to_square.x - from_square.x
    dy = to_square.y - from_square.y
    if dx == 0 and dy == 0:
        return None
    if dx != 0 and dy != 0 and abs(dx) != abs(dy):
        return None
    return _sign(dx), _sign(dy)


def squares_between(from_square: Coordinate, to_square: Coordinate) -> list[Coordinate]:
    """
    Squares strictly in between two squares on a shared queen line (end points excluded).
    """
    step = direction_between(from_square, to_square)
    if step is None:
        raise ValueError(
            f"squares_between requires both squares to lie on a shared queen line. \n from: {from_square}\n to:{to_square}"
        )

    squares_found: list[Coordinate] = []
    square = from_square.step(*step)
    while square != to_square:
        squares_found.append(square)
        square = square.step(*step)
    return squares_found


def trace(
    board: Board,
    from_square: Coordinate,
    to_square: Coordinate,
    vacated: Optional[Coordinate] = None,
) -> Legality:
    """
    Can a queen standing on `from_square` travel to `to_square`?
    ---

    The square it starts on is the origin, never an obstruction. `vacated` is a single square that
    should be treated as empty regardless of what the board says (the mover's own starting square
    when a shot is judged before the move has been played).
    """

    def is_empty(square: Coordinate) -> bool:
        return square == vacated or board.state_at(square) == SquareState.EMPTY

    if not (board.in_bounds(from_square) and board.in_bounds(to_square)):
        return Legality.OUT_OF_BOUNDS

    if from_square == to_square:
        return Legality.SAME_SQUARE

    if direction_between(from_square, to_square) is None:
        return Legality.NOT_A_STRAIGHT_LINE

    if not is_empty(to_square):
        return Legality.DESTINATION_OCCUPIED

    if not all(is_empty(square) for square in squares_between(from_square, to_square)):
        return Legality.PATH_OBSTRUCTED

    return Legality.LEGAL


def reachable_squares(
    board: Board, from_square: Coordinate, vacated: Optional[Coordinate] = None
) -> list[Coordinate]:
    """All squares `trace` accepts from the given square"""
    return [
        square
        for square in board.squares()
        if trace(board, from_square, square, vacated).is_legal
    ]
