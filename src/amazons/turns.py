"""
The turn state machine
----

AWAITING_SOURCE -> AWAITING_DESTINATION -> AWAITING_SHOT -> (turn complete | rolled back)

* A destination is only accepted when the move is legal, and is played on the board right away.
* If the shot that follows is illegal, the move gets undone and the player picks a new destination
  (the source stays selected and the player does not change).
* The controller is the only place where `current_player` gets swapped.
"""

from dataclasses import dataclass
from typing import Optional

from src.amazons.lines import Legality
from src.amazons.moves import Turn, apply_move, validate_move
from src.amazons.pieces import PLAYER_TO_STATE
from src.amazons.shots import apply_shot, validate_shot
from src.amazons.square import Coordinate
from src.amazons.state import GameState
from src.core.exceptions import GameStateError
from src.core.shared_types import TurnPhase


@dataclass
class TurnResult:
    """Outcome of a single selection, reported back to whoever drives the turn"""

    accepted: bool
    legality: Legality
    phase: TurnPhase
    turn_complete: bool = False
    rolled_back: bool = False
    turn: Optional[Turn] = None


class TurnController:
    def __init__(self, state: GameState) -> None:
        self.state = state

    @property
    def phase(self) -> TurnPhase:
        return self.state.phase

    def select_source(self, coord: Coordinate) -> TurnResult:
        """Pick the amazon to move. Must be one of your own."""
        self._assert_phase(TurnPhase.AWAITING_SOURCE)

        board = self.state.board
        if not board.in_bounds(coord):
            return self._rejected(Legality.OUT_OF_BOUNDS)
        if board.state_at(coord) != PLAYER_TO_STATE[self.state.current_player]:
            return self._rejected(Legality.WRONG_OWNER)

        self.state.selected_source = coord
        return self._advance(TurnPhase.AWAITING_DESTINATION)

    def select_destination(self, coord: Coordinate) -> TurnResult:
        """Validate and play the move. From here on the board has changed."""
        self._assert_phase(TurnPhase.AWAITING_DESTINATION)

        # for the type checker: the phase guarantees a source was selected
        src = self.state.selected_source
        assert src is not None

        legality = validate_move(self.state, src, coord)
        if not legality.is_legal:
            return self._rejected(legality)

        apply_move(self.state, src, coord)
        self.state.selected_destination = coord
        return self._advance(TurnPhase.AWAITING_SHOT)

    def select_shot(self, coord: Coordinate) -> TurnResult:
        """
        Fire the arrow from the amazon's new square.
        ---

        Legal: place the arrow, hand the turn over to the opponent.
        Illegal: move the amazon back to where it came from and wait for a new destination.
        """
        self._assert_phase(TurnPhase.AWAITING_SHOT)

        src = self.state.selected_source
        dst = self.state.selected_destination
        assert src is not None and dst is not None

        legality = validate_shot(self.state, dst, coord)
        if not legality.is_legal:
            apply_move(self.state, dst, src)
            self.state.selected_destination = None
            self.state.phase = TurnPhase.AWAITING_DESTINATION
            return TurnResult(
                accepted=False,
                legality=legality,
                phase=self.state.phase,
                rolled_back=True,
            )

        apply_shot(self.state, coord)
        turn = Turn(src, dst, coord)
        self._swap_player()
        return TurnResult(
            accepted=True,
            legality=legality,
            phase=self.state.phase,
            turn_complete=True,
            turn=turn,
        )

    def step_back(self) -> bool:
        """
        Undo the last selection, if that does not require touching the board.

        Only a selected source can be taken back; once the move has been played the only way back is an illegal shot.
        """
        if self.state.phase != TurnPhase.AWAITING_DESTINATION:
            return False
        self.state.selected_source = None
        self.state.phase = TurnPhase.AWAITING_SOURCE
        return True

    # -- PRIVATE HELPERS ---
    def _swap_player(self) -> None:
        self.state.current_player = self.state.current_player.opponent
        self.state.clear_selection()
        self.state.phase = TurnPhase.AWAITING_SOURCE

    def _advance(self, phase: TurnPhase) -> TurnResult:
        self.state.phase = phase
        return TurnResult(accepted=True, legality=Legality.LEGAL, phase=phase)

    def _rejected(self, legality: Legality) -> TurnResult:
        return TurnResult(accepted=False, legality=legality, phase=self.state.phase)

    def _assert_phase(self, expected: TurnPhase) -> None:
        if self.state.phase != expected:
            raise GameStateError(
                f"Cannot do that now. Turn is {self.state.phase}, expected {expected}."
            )
