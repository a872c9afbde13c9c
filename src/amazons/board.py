"""The Game board: a fixed size grid in which every square has exactly one state.

No other module reads or writes the grid directly; everything goes through `state_at` / `set_state`.
"""

from dataclasses import dataclass
from typing import Self

from src.amazons.pieces import SquareState
from src.amazons.square import Coordinate
from src.core.exceptions import OutOfBoundsError


@dataclass
class Board:
    width: int
    height: int
    position: dict[Coordinate, SquareState]

    @classmethod
    def empty(cls, width: int, height: int) -> Self:
        position = {
            Coordinate(x, y): SquareState.EMPTY
            for y in range(height)
            for x in range(width)
        }
        return cls(width, height, position)

    def in_bounds(self, coord: Coordinate) -> bool:
        return (0 <= coord.x < self.width) and (0 <= coord.y < self.height)

    def state_at(self, coord: Coordinate) -> SquareState:
        self._assert_in_bounds(coord)
        return self.position[coord]

    def set_state(self, coord: Coordinate, state: SquareState) -> None:
        self._assert_in_bounds(coord)
        self.position[coord] = state

    def squares(self) -> list[Coordinate]:
        """Every coordinate on the board, row by row starting at y = 0"""
        return [Coordinate(x, y) for y in range(self.height) for x in range(self.width)]

    def locate(self, state: SquareState) -> list[Coordinate]:
        return [square for square in self.squares() if self.position[square] == state]

    def empty_squares(self) -> list[Coordinate]:
        return self.locate(SquareState.EMPTY)

    def count(self, state: SquareState) -> int:
        return sum(1 for value in self.position.values() if value == state)

    def _assert_in_bounds(self, coord: Coordinate) -> None:
        if not self.in_bounds(coord):
            raise OutOfBoundsError(
                f"{coord} is not on a {self.width}x{self.height} board."
            )
