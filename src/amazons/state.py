"""
Everything the rules need to know about a game in progress: the board, who is to move, and how far the current turn has come.

GameState objects are created by `initialize()` and afterwards only mutated through the move / shot engines and the TurnController.
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Self

from src.amazons.board import Board
from src.amazons.pieces import PLAYER_TO_STATE, SquareState
from src.amazons.square import MAX_FILES, Coordinate
from src.core.exceptions import (
    CoordinateOutOfBounds,
    InvalidBoardDimensions,
    OverlappingStartingPosition,
    StartingCountMismatch,
)
from src.core.shared_types import Player, TurnPhase

DEFAULT_WIDTH = 10
DEFAULT_HEIGHT = 10
DEFAULT_PIECE_COUNT = 4
MIN_BOARD_SIZE = 2

# The canonical symmetric opening: a4, d1, g1, j4 versus a7, d10, g10, j7
STANDARD_WHITE_START: tuple[Coordinate, ...] = (
    Coordinate(0, 3),
    Coordinate(3, 0),
    Coordinate(6, 0),
    Coordinate(9, 3),
)
STANDARD_BLACK_START: tuple[Coordinate, ...] = (
    Coordinate(0, 6),
    Coordinate(3, 9),
    Coordinate(6, 9),
    Coordinate(9, 6),
)


@dataclass
class GameState:
    board: Board
    current_player: Player = Player.WHITE
    phase: TurnPhase = TurnPhase.AWAITING_SOURCE
    selected_source: Optional[Coordinate] = None
    selected_destination: Optional[Coordinate] = None

    @classmethod
    def standard(cls) -> Self:
        return cls.from_layout(
            DEFAULT_WIDTH, DEFAULT_HEIGHT, STANDARD_WHITE_START, STANDARD_BLACK_START
        )

    @classmethod
    def from_layout(
        cls,
        width: int,
        height: int,
        white_start: Sequence[Coordinate],
        black_start: Sequence[Coordinate],
    ) -> Self:
        """Place the pieces without any validation. Use `initialize()` for untrusted input."""
        board = Board.empty(width, height)
        for square in white_start:
            board.set_state(square, PLAYER_TO_STATE[Player.WHITE])
        for square in black_start:
            board.set_state(square, PLAYER_TO_STATE[Player.BLACK])
        return cls(board)

    def pieces(self, player: Player) -> list[Coordinate]:
        return self.board.locate(PLAYER_TO_STATE[player])

    def piece_counts(self) -> dict[Player, int]:
        return {player: self.board.count(PLAYER_TO_STATE[player]) for player in Player}

    def clear_selection(self) -> None:
        self.selected_source = None
        self.selected_destination = None


def is_default_config(
    width: int,
    height: int,
    white_count: int,
    black_count: int,
    white_start: Sequence[Coordinate],
    black_start: Sequence[Coordinate],
) -> bool:
    """Untouched settings: nothing chosen, so the canonical layout is used."""
    return (
        not white_start
        and not black_start
        and white_count == DEFAULT_PIECE_COUNT
        and black_count == DEFAULT_PIECE_COUNT
        and width == DEFAULT_WIDTH
        and height == DEFAULT_HEIGHT
    )


def validate_config(
    width: int,
    height: int,
    white_count: int,
    black_count: int,
    white_start: Sequence[Coordinate],
    black_start: Sequence[Coordinate],
) -> None:
    """
    Reject a custom configuration
    ----

    * board smaller than 2x2, or wider than there are letters for its columns
    * number of starting squares differs from the number of pieces (checked per side)
    * a starting square that is not on the board
    * a square claimed twice (by both sides, or twice by the same side)
    """
    if width < MIN_BOARD_SIZE or height < MIN_BOARD_SIZE:
        raise InvalidBoardDimensions(
            f"Board must be at least {MIN_BOARD_SIZE}x{MIN_BOARD_SIZE}, got {width}x{height}."
        )
    if width > MAX_FILES:
        raise InvalidBoardDimensions(
            f"Board can be at most {MAX_FILES} squares wide, got {width}."
        )

    if len(white_start) != white_count:
        raise StartingCountMismatch(
            f"Starting positions for white not provided: expected {white_count}, got {len(white_start)}."
        )
    if len(black_start) != black_count:
        raise StartingCountMismatch(
            f"Starting positions for black not provided: expected {black_count}, got {len(black_start)}."
        )

    for player, start in [(Player.WHITE, white_start), (Player.BLACK, black_start)]:
        for square in start:
            if not (0 <= square.x < width and 0 <= square.y < height):
                raise CoordinateOutOfBounds(
                    f"Starting position {square} for {player} is outside the {width}x{height} board."
                )

    claimed: set[Coordinate] = set()
    for square in [*white_start, *black_start]:
        if square in claimed:
            raise OverlappingStartingPosition(
                f"Starting position {square} is used more than once."
            )
        claimed.add(square)


def initialize(
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    white_count: int = DEFAULT_PIECE_COUNT,
    black_count: int = DEFAULT_PIECE_COUNT,
    white_start: Sequence[Coordinate] = (),
    black_start: Sequence[Coordinate] = (),
) -> GameState:
    """Create a fresh GameState: the canonical layout for default settings, otherwise the validated custom layout."""
    if is_default_config(width, height, white_count, black_count, white_start, black_start):
        return GameState.standard()

    validate_config(width, height, white_count, black_count, white_start, black_start)
    return GameState.from_layout(width, height, white_start, black_start)
