"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

# Type aliases to make GameModel easier to read
PositionNotation = str
TurnNotation = str
SquareName = str


@dataclass
class GameModel:
    """Transport-safe representation of an Amazons game used between API, Service, DB, and Game layers."""

    current_position: PositionNotation
    history: list[PositionNotation]
    turns: list[TurnNotation]
    phase: str
    selected_source: Optional[SquareName]
    selected_destination: Optional[SquareName]
    status: str
    winner: Optional[str] = None
    white_squares: Optional[int] = None
    black_squares: Optional[int] = None
