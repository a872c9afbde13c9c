"""
Relocating an amazon
-----

`validate_move` answers whether the player to move may play src -> dst.
`apply_move` performs the relocation WITHOUT any checks. The same call
with the squares swapped undoes the move again (see the rollback in the TurnController).
"""

from dataclasses import dataclass
from typing import Self

from src.amazons.lines import Legality, trace
from src.amazons.pieces import SquareState, owner
from src.amazons.square import Coordinate
from src.amazons.state import GameState
from src.core.exceptions import InvalidNotationError


@dataclass(frozen=True)
class Turn:
    """A completed turn: where the amazon came from, where it went, and where its arrow landed"""

    source: Coordinate
    destination: Coordinate
    shot: Coordinate

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """
        examples:
        * "d1-d7/g7": amazon on d1 moves to d7 and shoots at g7
        * "a4-a5/a4": amazon moves up one square and shoots back at the square it just left
        """
        try:
            movement, shot = notation.split("/")
            source, destination = movement.split("-")
        except ValueError:
            raise InvalidNotationError(f"Cannot interpret {notation!r} as a turn.")
        return cls(
            Coordinate.from_algebraic(source),
            Coordinate.from_algebraic(destination),
            Coordinate.from_algebraic(shot),
        )

    def to_notation(self) -> str:
        return f"{self.source.to_algebraic()}-{self.destination.to_algebraic()}/{self.shot.to_algebraic()}"


def validate_move(state: GameState, src: Coordinate, dst: Coordinate) -> Legality:
    board = state.board
    if not board.in_bounds(src):
        return Legality.OUT_OF_BOUNDS

    if owner(board.state_at(src)) != state.current_player:
        return Legality.WRONG_OWNER

    return trace(board, src, dst)


def apply_move(state: GameState, src: Coordinate, dst: Coordinate) -> None:
    """Update the board: whatever stood on src now stands on dst"""
    board = state.board
    moving_piece = board.state_at(src)
    board.set_state(src, SquareState.EMPTY)
    board.set_state(dst, moving_piece)
