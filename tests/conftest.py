"""
Pytest will auto-discover / import this file called 'conftest.py'. ]
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable, Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.amazons.notation import Position
from src.amazons.state import GameState
from src.db.schema import Base

STANDARD_POSITION = "3B2B3/10/10/B8B/10/10/W8W/10/10/3W2W3 w"

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def state_from_position() -> Callable[[str], GameState]:
    """Call the inner function with a position in notation, e.g. 'W1x1B/1xxx1 w'"""

    def _create_state(notation: str) -> GameState:
        position = Position.from_notation(notation)
        return GameState(position.board, current_player=position.player_to_move)

    return _create_state


@pytest.fixture
def standard_state() -> GameState:
    return GameState.standard()
