"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating everything required to play a turn: it forwards the selections to the TurnController,
keeps a record of the completed turns, and checks after every turn whether the game is over.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Optional, Self, Sequence

from src.amazons.lines import reachable_squares
from src.amazons.moves import Turn, apply_move
from src.amazons.notation import Position
from src.amazons.pieces import SquareState
from src.amazons.square import Coordinate
from src.amazons.state import (
    DEFAULT_HEIGHT,
    DEFAULT_PIECE_COUNT,
    DEFAULT_WIDTH,
    GameState,
    initialize,
)
from src.amazons.territory import Outcome, OutcomeKind, Territory, compute_territory, evaluate
from src.amazons.turns import TurnController, TurnResult
from src.core.exceptions import GameStateError, OutOfBoundsError
from src.core.models import GameModel
from src.core.shared_types import Controller, Player, Status, TurnPhase

logger = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    state: GameState
    history: list[str]  # positions before each completed turn
    turns: list[Turn]
    status: Status = Status.IN_PROGRESS
    winner: Optional[Player] = None
    territory: Optional[Territory] = None
    outcome: Optional[Outcome] = None

    def __post_init__(self) -> None:
        self.controller = TurnController(self.state)

    @classmethod
    def new_game(
        cls,
        width: int = DEFAULT_WIDTH,
        height: int = DEFAULT_HEIGHT,
        white_count: int = DEFAULT_PIECE_COUNT,
        black_count: int = DEFAULT_PIECE_COUNT,
        white_start: Sequence[Coordinate] = (),
        black_start: Sequence[Coordinate] = (),
    ) -> Self:
        """Raises a ConfigError if the custom setup is not playable."""
        state = initialize(width, height, white_count, black_count, white_start, black_start)
        logger.info(
            "New %dx%d game: %d white and %d black amazons",
            state.board.width,
            state.board.height,
            *state.piece_counts().values(),
        )
        return cls(state=state, history=[], turns=[])

    @classmethod
    def from_model(cls, model: GameModel) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        status_values = [status.value for status in Status]
        if model.status not in status_values:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join(status_values)}"
            )

        position = Position.from_notation(model.current_position)
        state = GameState(
            board=position.board,
            current_player=position.player_to_move,
            phase=TurnPhase(model.phase),
            selected_source=_optional_square(model.selected_source),
            selected_destination=_optional_square(model.selected_destination),
        )
        game = cls(
            state=state,
            history=list(model.history),
            turns=[Turn.from_notation(notation) for notation in model.turns],
            status=Status(model.status),
            winner=Player(model.winner) if model.winner else None,
        )
        if game.status == Status.FINISHED:
            # territory highlighting must survive a round trip through storage
            game.evaluate_outcome()
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        outcome = self.outcome
        return GameModel(
            current_position=self.position_notation(),
            history=list(self.history),
            turns=[turn.to_notation() for turn in self.turns],
            phase=self.state.phase.value,
            selected_source=_optional_name(self.state.selected_source),
            selected_destination=_optional_name(self.state.selected_destination),
            status=self.status.value,
            winner=self.winner.value if self.winner else None,
            white_squares=outcome.white_count if outcome else None,
            black_squares=outcome.black_count if outcome else None,
        )

    # -- READ-ONLY QUERIES ---
    @property
    def current_player(self) -> Player:
        return self.state.current_player

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    def square_state(self, coord: Coordinate) -> SquareState:
        return self.state.board.state_at(coord)

    def square_controller(self, coord: Coordinate) -> Controller:
        """Only meaningful once the territory has been evaluated (see `evaluate_outcome`)."""
        if self.territory is None:
            raise GameStateError("Territory has not been evaluated yet.")
        if not self.state.board.in_bounds(coord):
            raise OutOfBoundsError(f"{coord} is not on the board.")
        return self.territory.controller_of(coord)

    def position_notation(self) -> str:
        return Position(self.state.board, self.state.current_player).to_notation()

    def legal_targets(self) -> list[Coordinate]:
        """
        Squares the current selection could go to:
        * destinations for the selected amazon, while waiting for a destination
        * arrow targets from the amazon's new square, while waiting for the shot
        * nothing while waiting for a source
        """
        if self.state.phase == TurnPhase.AWAITING_DESTINATION:
            assert self.state.selected_source is not None
            return reachable_squares(self.state.board, self.state.selected_source)
        if self.state.phase == TurnPhase.AWAITING_SHOT:
            assert self.state.selected_destination is not None
            return reachable_squares(self.state.board, self.state.selected_destination)
        return []

    # -- TURN SEQUENCE ---
    def select_source(self, coord: Coordinate) -> TurnResult:
        self._assert_in_progress()
        player = self.current_player
        return self._log_result(
            player, "source", coord, self.controller.select_source(coord)
        )

    def select_destination(self, coord: Coordinate) -> TurnResult:
        self._assert_in_progress()
        player = self.current_player
        return self._log_result(
            player, "destination", coord, self.controller.select_destination(coord)
        )

    def select_shot(self, coord: Coordinate) -> TurnResult:
        """
        Fire the arrow. When this completes the turn:
        1. record the position from before the turn, and the turn itself
        2. check whether the game has ended
        """
        self._assert_in_progress()

        player = self.current_player
        position_before = self._position_before_turn()
        result = self._log_result(
            player, "shot", coord, self.controller.select_shot(coord)
        )
        if result.turn_complete:
            assert result.turn is not None
            self.history.append(position_before)
            self.turns.append(result.turn)
            self._update_game_status()
        return result

    def step_back(self) -> bool:
        self._assert_in_progress()
        return self.controller.step_back()

    def evaluate_outcome(self) -> Outcome:
        self.territory = compute_territory(self.state.board)
        self.outcome = evaluate(
            self.state.board, self.state.current_player, self.territory
        )
        return self.outcome

    # -- PRIVATE HELPERS ---
    def _update_game_status(self) -> None:
        outcome = self.evaluate_outcome()
        if not outcome.is_decided:
            return

        self.status = Status.FINISHED
        self.winner = outcome.winner
        if outcome.kind == OutcomeKind.WINNER_WITH_COUNTS:
            logger.info(
                "%s wins on territory: %s - %s",
                outcome.winner,
                outcome.white_count,
                outcome.black_count,
            )
        else:
            logger.info("%s wins: %s cannot move", outcome.winner, self.current_player)

    def _position_before_turn(self) -> str:
        """While waiting for the shot the move is already on the board, so take it back out of the notation"""
        src = self.state.selected_source
        dst = self.state.selected_destination
        if src is None or dst is None:
            return self.position_notation()

        board = deepcopy(self.state.board)
        apply_move(GameState(board), dst, src)
        return Position(board, self.state.current_player).to_notation()

    def _assert_in_progress(self) -> None:
        if self.status != Status.IN_PROGRESS:
            raise GameStateError(f"Game is not in progress. status: {self.status}")

    def _log_result(
        self, player: Player, what: str, coord: Coordinate, result: TurnResult
    ) -> TurnResult:
        if result.accepted:
            logger.debug("%s selected %s %s", player, what, coord)
        else:
            logger.debug(
                "%s: %s %s rejected (%s)", player, what, coord, result.legality.value
            )
        return result


def _optional_square(name: Optional[str]) -> Optional[Coordinate]:
    return Coordinate.from_algebraic(name) if name else None


def _optional_name(square: Optional[Coordinate]) -> Optional[str]:
    return square.to_algebraic() if square else None
