"""Unit tests for src/services/amazons_service.py"""

from typing import Generator
from uuid import UUID, uuid4

import pytest

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalTargetsRequest,
    SelectionResponse,
    SelectSquareRequest,
    StepBackRequest,
    TerritoryRequest,
    TurnRequest,
)
from src.core.exceptions import (
    ConfigError,
    GameError,
    GameStateError,
    IllegalTurnError,
    RepositoryError,
)
from src.core.models import GameModel
from src.core.shared_types import Player, Status, TurnPhase
from src.services.amazons_service import AmazonsService

STANDARD_POSITION = "3B2B3/10/10/B8B/10/10/W8W/10/10/3W2W3 w"
AFTER_FIRST_TURN = "3B2B3/10/10/B2W2x2B/10/10/W8W/10/10/6W3 b"


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game models."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameModel] = {}

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store new game and return the stored data + newly created game ID."""
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameModel | None:
        """Get game by ID, if record exists."""
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Add new info to existing record."""
        if game_id not in self._games:
            return None
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove a game's record."""
        return self._games.pop(game_id, None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Generator[MockRepository, None, None]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository) -> AmazonsService:
    return AmazonsService(mock_repository)


def store_position(repository: MockRepository, position: str) -> UUID:
    """Put a game at the start of a turn in the repository"""
    _, game_id = repository.create_game(
        GameModel(
            current_position=position,
            history=[],
            turns=[],
            phase=TurnPhase.AWAITING_SOURCE,
            selected_source=None,
            selected_destination=None,
            status=Status.IN_PROGRESS,
        )
    )
    return game_id


def select(service: AmazonsService, game_id: UUID, *squares: str) -> SelectionResponse:
    return [
        service.select_square(SelectSquareRequest(game_id=game_id, square=square))
        for square in squares
    ][-1]


# --- SERVICE - CREATE NEW GAME ----
def test_create_a_new_game(service: AmazonsService, mock_repository: MockRepository) -> None:
    """Check that new game is created, persisted in repo, and return has the appropriate information."""
    response = service.create_new_game(CreateGameRequest())

    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)
    assert response.position == STANDARD_POSITION
    assert response.starting_position == STANDARD_POSITION
    assert response.current_player == Player.WHITE
    assert response.phase == TurnPhase.AWAITING_SOURCE
    assert response.turn_history == []
    assert response.status == Status.IN_PROGRESS
    assert response.winner is None

    stored_game = mock_repository.get_game(response.game_id)
    assert stored_game is not None
    assert stored_game.current_position == STANDARD_POSITION
    assert stored_game.status == Status.IN_PROGRESS


def test_create_a_custom_game(service: AmazonsService) -> None:
    request = CreateGameRequest(
        board_width=4,
        board_height=3,
        white_count=1,
        black_count=1,
        white_start=["a1"],
        black_start=["d3"],
    )
    assert service.create_new_game(request).position == "3B/4/W3 w"


def test_create_with_unplayable_setup(service: AmazonsService, mock_repository: MockRepository) -> None:
    """Make sure service propagates the exceptions, and nothing is stored."""
    request = CreateGameRequest(
        board_width=4,
        board_height=3,
        white_count=1,
        black_count=1,
        white_start=["a1"],
        black_start=["e3"],
    )
    with pytest.raises(ConfigError):
        service.create_new_game(request)
    assert mock_repository._games == {}


# --- SERVICE - GET GAME ----
def test_get_game_state(service: AmazonsService) -> None:
    created = service.create_new_game(CreateGameRequest())
    assert service.get_game_state(GetGameRequest(game_id=created.game_id)) == created


def test_unknown_game(service: AmazonsService) -> None:
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=uuid4()))


# --- SERVICE - SELECTING SQUARES ----
def test_select_squares_through_a_turn(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id

    response = select(service, game_id, "d1")
    assert response.accepted
    assert response.game.phase == TurnPhase.AWAITING_DESTINATION
    assert response.game.selected_source == "d1"

    response = select(service, game_id, "d7")
    assert response.game.phase == TurnPhase.AWAITING_SHOT
    assert response.game.selected_destination == "d7"

    response = select(service, game_id, "g7")
    assert response.turn_complete
    assert response.game.position == AFTER_FIRST_TURN
    assert response.game.starting_position == STANDARD_POSITION
    assert response.game.turn_history == ["d1-d7/g7"]
    assert response.game.current_player == Player.BLACK


def test_rejected_selection_is_reported(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    response = select(service, game_id, "a7")
    assert not response.accepted
    assert response.legality == "wrong owner"
    assert response.game.phase == TurnPhase.AWAITING_SOURCE


def test_illegal_shot_is_rolled_back(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    response = select(service, game_id, "d1", "d7", "d10")

    assert response.rolled_back
    assert response.legality == "destination occupied"
    assert response.game.position == STANDARD_POSITION
    assert response.game.phase == TurnPhase.AWAITING_DESTINATION
    assert response.game.selected_source == "d1"


def test_selection_off_the_board(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    response = select(service, game_id, "k1")
    assert not response.accepted
    assert response.legality == "out of bounds"


def test_square_names_with_unicode_digits_are_rejected(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    with pytest.raises(GameError):
        select(service, game_id, "d¹")


# --- SERVICE - STEP BACK ----
def test_step_back(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    select(service, game_id, "d1")

    response = service.step_back(StepBackRequest(game_id=game_id))
    assert response.accepted
    assert response.game.phase == TurnPhase.AWAITING_SOURCE
    assert response.game.selected_source is None

    response = service.step_back(StepBackRequest(game_id=game_id))
    assert not response.accepted
    assert response.legality == "nothing to undo"


# --- SERVICE - FULL TURNS ----
def test_play_turn(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    response = service.play_turn(TurnRequest(game_id=game_id, source="d1", destination="d7", shot="g7"))
    assert response.position == AFTER_FIRST_TURN
    assert response.turn_history == ["d1-d7/g7"]


def test_play_turn_replaces_a_selected_source(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    select(service, game_id, "g1")
    response = service.play_turn(TurnRequest(game_id=game_id, source="d1", destination="d7", shot="g7"))
    assert response.position == AFTER_FIRST_TURN


def test_illegal_turn_is_not_stored(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    with pytest.raises(IllegalTurnError) as exc_info:
        service.play_turn(TurnRequest(game_id=game_id, source="d1", destination="d7", shot="d10"))
    assert exc_info.value.legality == "destination occupied"

    stored = service.get_game_state(GetGameRequest(game_id=game_id))
    assert stored.position == STANDARD_POSITION
    assert stored.phase == TurnPhase.AWAITING_SOURCE
    assert stored.turn_history == []


def test_no_full_turn_after_a_move(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    select(service, game_id, "d1", "d7")
    with pytest.raises(IllegalTurnError) as exc_info:
        service.play_turn(TurnRequest(game_id=game_id, source="g1", destination="g4", shot="g5"))
    assert exc_info.value.legality == "turn in progress"


def test_game_over(service: AmazonsService, mock_repository: MockRepository) -> None:
    game_id = store_position(mock_repository, "W1x1B/1x1x1 w")
    response = service.play_turn(TurnRequest(game_id=game_id, source="a2", destination="b2", shot="c1"))

    assert response.status == Status.FINISHED
    assert response.winner == Player.WHITE
    assert (response.white_squares, response.black_squares) == (2, 2)

    # nothing more to play
    with pytest.raises(GameStateError):
        select(service, game_id, "d2")
    with pytest.raises(GameError):
        service.play_turn(TurnRequest(game_id=game_id, source="e2", destination="d2", shot="e2"))


# --- SERVICE - QUERIES ----
def test_legal_targets(service: AmazonsService, mock_repository: MockRepository) -> None:
    game_id = store_position(mock_repository, "W2/x2/2B w")
    response = service.legal_targets(LegalTargetsRequest(game_id=game_id))
    assert response.legal_targets == []

    select(service, game_id, "a3")
    response = service.legal_targets(LegalTargetsRequest(game_id=game_id))
    assert response.phase == TurnPhase.AWAITING_DESTINATION
    assert sorted(response.legal_targets) == ["b2", "b3", "c3"]


def test_territory(service: AmazonsService, mock_repository: MockRepository) -> None:
    game_id = store_position(mock_repository, "W2x1B/3xx1 b")
    response = service.territory(TerritoryRequest(game_id=game_id))
    assert (response.white_squares, response.black_squares) == (5, 2)
    assert response.controllers == {
        "b2": "white",
        "c2": "white",
        "a1": "white",
        "b1": "white",
        "c1": "white",
        "e2": "black",
        "f1": "black",
    }


def test_territory_of_an_open_board(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    response = service.territory(TerritoryRequest(game_id=game_id))
    assert response.controllers == {}
    assert (response.white_squares, response.black_squares) == (0, 0)


# --- SERVICE - DELETE ----
def test_delete_game(service: AmazonsService) -> None:
    game_id = service.create_new_game(CreateGameRequest()).game_id
    service.delete_game(DeleteGameRequest(game_id=game_id))
    with pytest.raises(RepositoryError):
        service.get_game_state(GetGameRequest(game_id=game_id))
