"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, Field, field_validator, model_validator

from src.amazons.square import is_square_name
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Player, Status, TurnPhase

PlayerColor = str
SquareName = str

# limits of the settings a user can pick for a new game
MIN_BOARD_SIZE = 2
MAX_BOARD_SIZE = 20
MAX_PIECES = 10


def _validate_square(value: str) -> str:
    """a letter for the column, a number for the row: 'a1', 'j10', 't20'"""
    if not is_square_name(value):
        raise InvalidRequestError(f"Cannot interpret {value!r} as a valid square name.")
    return value


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    """Without any arguments: the standard 10x10 game with 4 amazons each."""

    board_width: int = Field(default=10, ge=MIN_BOARD_SIZE, le=MAX_BOARD_SIZE)
    board_height: int = Field(default=10, ge=MIN_BOARD_SIZE, le=MAX_BOARD_SIZE)
    white_count: int = Field(default=4, ge=0, le=MAX_PIECES)
    black_count: int = Field(default=4, ge=0, le=MAX_PIECES)
    white_start: list[SquareName] = Field(default_factory=list)
    black_start: list[SquareName] = Field(default_factory=list)

    @field_validator("white_start", "black_start")
    @classmethod
    def validate_starting_squares(cls, value: list[str]) -> list[str]:
        return [_validate_square(square) for square in value]

    @model_validator(mode="after")
    def validate_piece_counts(self) -> Self:
        """Starting squares are either all given, or none at all (letting the game fall back on the standard layout)"""
        for side, count, start in [
            ("white", self.white_count, self.white_start),
            ("black", self.black_count, self.black_start),
        ]:
            if start and len(start) != count:
                raise InvalidRequestError(
                    f"Expected {count} starting squares for {side}, got {len(start)}."
                )
        return self


class GetGameRequest(BaseModel):
    game_id: UUID


class SelectSquareRequest(BaseModel):
    """One click on the board. What it means depends on the phase of the turn."""

    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class StepBackRequest(BaseModel):
    game_id: UUID


class TurnRequest(BaseModel):
    """An entire turn in one go"""

    game_id: UUID
    source: SquareName
    destination: SquareName
    shot: SquareName

    @field_validator("source", "destination", "shot")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square(value)


class LegalTargetsRequest(BaseModel):
    game_id: UUID


class TerritoryRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    position: str
    starting_position: str
    current_player: Player
    phase: TurnPhase
    selected_source: Optional[SquareName]
    selected_destination: Optional[SquareName]
    turn_history: list[str]
    status: Status
    winner: Optional[Player] = None
    white_squares: Optional[int] = None
    black_squares: Optional[int] = None


class SelectionResponse(BaseModel):
    game: GameResponse
    accepted: bool
    legality: str
    turn_complete: bool
    rolled_back: bool


class LegalTargetsResponse(BaseModel):
    game_id: UUID
    current_player: Player
    phase: TurnPhase
    legal_targets: list[SquareName]


class TerritoryResponse(BaseModel):
    """Who controls which square. Squares nobody controls are left out."""

    game_id: UUID
    controllers: dict[SquareName, PlayerColor]
    white_squares: int
    black_squares: int
