"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from string import ascii_lowercase

from src.core.exceptions import InvalidNotationError

# one letter per column, so no board can be wider than the alphabet
MAX_FILES = len(ascii_lowercase)

# ASCII letters and digits only, no leading zero in the rank
SQUARE_NAME = re.compile(r"([a-z])([1-9]\d*)", re.ASCII)


def is_square_name(name: str) -> bool:
    return SQUARE_NAME.fullmatch(name) is not None


@dataclass(frozen=True)
class Coordinate:
    """Zero-based (x, y). Whether it lies on the board is for the Board to decide, since boards differ in size."""

    x: int
    y: int

    @classmethod
    def from_algebraic(cls, name: str) -> Coordinate:
        """Algebraic notation: 'a1' gets converted to (0, 0), 'j10' to (9, 9)"""
        match = SQUARE_NAME.fullmatch(name)
        if match is None:
            raise InvalidNotationError(f"Cannot interpret {name!r} as a square name.")
        file, rank = match.groups()
        return cls(ord(file) - ord("a"), int(rank) - 1)

    def to_algebraic(self) -> str:
        if not (0 <= self.x < MAX_FILES and self.y >= 0):
            raise InvalidNotationError(f"{self} has no algebraic name.")
        return f"{ascii_lowercase[self.x]}{self.y + 1}"

    def step(self, dx: int, dy: int) -> Coordinate:
        return Coordinate(self.x + dx, self.y + dy)
