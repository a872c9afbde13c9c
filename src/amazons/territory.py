"""
Deciding who won
-----

Two independent ways for the game to end:

1. The player to move has no legal move at all. That player loses.
2. The board is separated: no empty square can be reached by both colours any more.
   Then whoever controls more squares wins, with a deliberately asymmetric tie-break (see `territory_winner`).

Reachability for territory is plain adjacency (8 neighbours) through empty squares. It does not care about
queen lines: a region belongs to you if one of your amazons can walk into it eventually.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from src.amazons.board import Board
from src.amazons.lines import QUEEN_DIRECTIONS, trace
from src.amazons.pieces import PLAYER_TO_STATE, SquareState
from src.amazons.square import Coordinate
from src.core.shared_types import Controller, Player


class OutcomeKind(Enum):
    IN_PROGRESS = auto()
    WINNER = auto()
    WINNER_WITH_COUNTS = auto()


@dataclass(frozen=True)
class Outcome:
    kind: OutcomeKind
    winner: Optional[Player] = None
    white_count: Optional[int] = None
    black_count: Optional[int] = None

    @property
    def is_decided(self) -> bool:
        return self.kind != OutcomeKind.IN_PROGRESS


@dataclass(frozen=True)
class Territory:
    """Empty squares reachable by each colour"""

    white: frozenset[Coordinate]
    black: frozenset[Coordinate]

    @property
    def white_count(self) -> int:
        """Squares only white can reach"""
        return len(self.white - self.black)

    @property
    def black_count(self) -> int:
        return len(self.black - self.white)

    def is_separated(self) -> bool:
        return self.white.isdisjoint(self.black) and bool(self.white or self.black)

    def controller_of(self, square: Coordinate) -> Controller:
        in_white = square in self.white
        in_black = square in self.black
        if in_white and not in_black:
            return Controller.WHITE
        if in_black and not in_white:
            return Controller.BLACK
        return Controller.NEUTRAL


def reachable_region(board: Board, player: Player) -> frozenset[Coordinate]:
    """
    Flood fill
    ---

    Breadth-first from every amazon of the given colour at once, stepping to any of the 8 neighbours as long as it is empty.
    Arrows and amazons of either colour stop the fill. The amazons' own squares are not part of the result.
    """
    queue: deque[Coordinate] = deque(board.locate(PLAYER_TO_STATE[player]))
    visited: set[Coordinate] = set(queue)
    region: set[Coordinate] = set()
    while queue:
        square = queue.popleft()
        for dx, dy in QUEEN_DIRECTIONS:
            neighbour = square.step(dx, dy)
            if neighbour in visited or not board.in_bounds(neighbour):
                continue
            visited.add(neighbour)
            if board.state_at(neighbour) == SquareState.EMPTY:
                region.add(neighbour)
                queue.append(neighbour)
    return frozenset(region)


def compute_territory(board: Board) -> Territory:
    return Territory(
        white=reachable_region(board, Player.WHITE),
        black=reachable_region(board, Player.BLACK),
    )


def has_any_legal_move(board: Board, player: Player) -> bool:
    """Stops at the first legal move found. Worst case: every piece against every empty square."""
    targets = board.empty_squares()
    for piece in board.locate(PLAYER_TO_STATE[player]):
        for square in targets:
            if trace(board, piece, square).is_legal:
                return True
    return False


def territory_winner(white_count: int, black_count: int) -> Player:
    """
    Larger territory wins. On an exact tie the provisional winner (black, as white is not strictly larger)
    is flipped, so a tie goes to white. It is not a draw.
    """
    provisional = Player.WHITE if white_count > black_count else Player.BLACK
    if white_count == black_count:
        return provisional.opponent
    return provisional


def evaluate(
    board: Board, player_to_move: Player, territory: Optional[Territory] = None
) -> Outcome:
    if not has_any_legal_move(board, player_to_move):
        return Outcome(OutcomeKind.WINNER, winner=player_to_move.opponent)

    territory = territory or compute_territory(board)
    if territory.is_separated():
        white_count = territory.white_count
        black_count = territory.black_count
        return Outcome(
            OutcomeKind.WINNER_WITH_COUNTS,
            winner=territory_winner(white_count, black_count),
            white_count=white_count,
            black_count=black_count,
        )

    return Outcome(OutcomeKind.IN_PROGRESS)
