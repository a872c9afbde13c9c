"""
Custom exceptions shared by all layers.

Illegal selections during a turn are NOT exceptions: those come back as a `Legality` value so the caller can re-prompt.
Exceptions are reserved for requests that cannot be served at all.
"""


class GameError(Exception):
    """Base class of everything the application raises on purpose."""


# --- CONFIGURATION ---
class ConfigError(GameError):
    """Rejected board configuration. The game is not created."""


class StartingCountMismatch(ConfigError):
    pass


class CoordinateOutOfBounds(ConfigError):
    pass


class OverlappingStartingPosition(ConfigError):
    pass


class InvalidBoardDimensions(ConfigError):
    pass


# --- DOMAIN ---
class OutOfBoundsError(GameError):
    """A board accessor was called with a coordinate that is not on the board."""


class GameStateError(GameError):
    """Operation does not make sense given the status / phase of the game."""


class IllegalTurnError(GameError):
    """A complete turn was requested, but one of its steps was rejected."""

    def __init__(self, message: str, legality: str) -> None:
        super().__init__(message)
        self.legality = legality


class InvalidNotationError(GameError):
    pass


# --- BOUNDARY LAYERS ---
class InvalidRequestError(GameError):
    """Raised from pydantic validators. Not a ValueError, so pydantic lets it through unwrapped."""


class RepositoryError(GameError):
    pass
