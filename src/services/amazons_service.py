"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from uuid import UUID

from src.amazons.game import Game
from src.amazons.notation import Position
from src.amazons.square import Coordinate
from src.amazons.turns import TurnResult
from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalTargetsRequest,
    LegalTargetsResponse,
    SelectionResponse,
    SelectSquareRequest,
    StepBackRequest,
    TerritoryRequest,
    TerritoryResponse,
    TurnRequest,
)
from src.core.exceptions import IllegalTurnError, RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Controller, TurnPhase
from src.db.repository import GameRepository

logger = logging.getLogger(__name__)


class AmazonsService:
    """Orchestration of layers for a game of the Amazons."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Set up a new game (the Game raises a ConfigError for an unplayable setup, nothing gets stored then)."""

        new_game = Game.new_game(
            width=request.board_width,
            height=request.board_height,
            white_count=request.white_count,
            black_count=request.black_count,
            white_start=[Coordinate.from_algebraic(sq) for sq in request.white_start],
            black_start=[Coordinate.from_algebraic(sq) for sq in request.black_start],
        )
        stored_game, game_id = self.repo.create_game(new_game.to_model())
        logger.info("Created game %s", game_id)
        return self._create_game_response(game_id, stored_game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to redraw the board.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def select_square(self, request: SelectSquareRequest) -> SelectionResponse:
        """
        A click on the board. Depending on the phase of the turn this picks the amazon, its destination, or the arrow's target.
        A rejected selection is not an error: the response says why, so the user can be asked again.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        square = Coordinate.from_algebraic(request.square)

        if game.phase == TurnPhase.AWAITING_SOURCE:
            result = game.select_source(square)
        elif game.phase == TurnPhase.AWAITING_DESTINATION:
            result = game.select_destination(square)
        else:
            result = game.select_shot(square)

        after_selection = self._store(request.game_id, game)
        return self._create_selection_response(request.game_id, after_selection, result)

    def step_back(self, request: StepBackRequest) -> SelectionResponse:
        """Undo the selected source (the only selection that can be undone without touching the board)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        stepped_back = game.step_back()
        after_step = self._store(request.game_id, game)
        response = self._create_game_response(request.game_id, after_step)
        return SelectionResponse(
            game=response,
            accepted=stepped_back,
            legality="legal" if stepped_back else "nothing to undo",
            turn_complete=False,
            rolled_back=False,
        )

    def play_turn(self, request: TurnRequest) -> GameResponse:
        """
        Play source, destination and shot at once.
        ---

        Either the whole turn is played or nothing is stored at all.
        """
        game = Game.from_model(self._fetch_game(request.game_id))
        if game.phase == TurnPhase.AWAITING_SHOT:
            raise IllegalTurnError(
                "A move has already been played this turn. Select the shot first.",
                legality="turn in progress",
            )
        # a selected source (without a move yet) simply gets replaced
        game.step_back()

        steps = [
            (game.select_source, request.source),
            (game.select_destination, request.destination),
            (game.select_shot, request.shot),
        ]
        for select, square_name in steps:
            result = select(Coordinate.from_algebraic(square_name))
            if not result.accepted:
                raise IllegalTurnError(
                    f"Turn not allowed: {request.source}-{request.destination}/{request.shot} ({result.legality.value})",
                    legality=result.legality.value,
                )

        after_turn = self._store(request.game_id, game)
        return self._create_game_response(request.game_id, after_turn)

    def legal_targets(self, request: LegalTargetsRequest) -> LegalTargetsResponse:
        """Squares the current selection can go to (to highlight them)."""
        game = Game.from_model(self._fetch_game(request.game_id))
        return LegalTargetsResponse(
            game_id=request.game_id,
            current_player=game.current_player,
            phase=game.phase,
            legal_targets=[square.to_algebraic() for square in game.legal_targets()],
        )

    def territory(self, request: TerritoryRequest) -> TerritoryResponse:
        """Flood fill the board and report who controls what."""
        game = Game.from_model(self._fetch_game(request.game_id))
        game.evaluate_outcome()
        # for the type checker: evaluate_outcome always computes the territory
        assert game.territory is not None

        controllers: dict[str, str] = {}
        for square in game.state.board.squares():
            controller = game.square_controller(square)
            if controller != Controller.NEUTRAL:
                controllers[square.to_algebraic()] = controller.value
        return TerritoryResponse(
            game_id=request.game_id,
            controllers=controllers,
            white_squares=game.territory.white_count,
            black_squares=game.territory.black_count,
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _store(self, game_id: UUID, game: Game) -> GameModel:
        model = game.to_model()
        self.repo.update_game(game_id, model)
        return model

    def _create_game_response(self, game_id: UUID, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""

        # Before the first turn gets played, the starting position equals the current position. Otherwise get it as first recorded position in history.
        starting_position = (
            model.history[0] if len(model.history) > 0 else model.current_position
        )
        position = Position.from_notation(model.current_position)
        return GameResponse(
            game_id=game_id,
            position=model.current_position,
            starting_position=starting_position,
            current_player=position.player_to_move,
            phase=model.phase,
            selected_source=model.selected_source,
            selected_destination=model.selected_destination,
            turn_history=model.turns,
            status=model.status,
            winner=model.winner,
            white_squares=model.white_squares,
            black_squares=model.black_squares,
        )

    def _create_selection_response(
        self, game_id: UUID, model: GameModel, result: TurnResult
    ) -> SelectionResponse:
        return SelectionResponse(
            game=self._create_game_response(game_id, model),
            accepted=result.accepted,
            legality=result.legality.value,
            turn_complete=result.turn_complete,
            rolled_back=result.rolled_back,
        )

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
