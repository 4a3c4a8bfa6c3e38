"""Turn sequencing for a single match.

``Match`` drives a :class:`GameState` the way a board UI does: the player to
move first picks one of their pieces, then one of its legal destinations. After
each move the turn flips, termination is checked, and once a side has won the
result is handed to the results store.
"""
from __future__ import annotations

import logging
import time
from datetime import timedelta
from enum import Enum
from typing import Callable, List, Optional

from .engine import GameState, Position, Role
from .results import GameResult, GameResultDao

logger = logging.getLogger(__name__)


class MatchFinishedError(ValueError):
    """Raised when a finished match receives another selection."""


class SelectionPhase(str, Enum):
    SELECT_FROM = "select_from"
    SELECT_TO = "select_to"

    def alter(self) -> "SelectionPhase":
        if self is SelectionPhase.SELECT_FROM:
            return SelectionPhase.SELECT_TO
        return SelectionPhase.SELECT_FROM


class Match:
    def __init__(
        self,
        player: str,
        state: Optional[GameState] = None,
        results: Optional[GameResultDao] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if not player:
            raise ValueError("player name must not be empty")
        self.player = player
        self.state = state if state is not None else GameState.new()
        self.results = results
        self.rounds = 0
        self.winner: Optional[Role] = None
        self.result: Optional[GameResult] = None
        self.phase = SelectionPhase.SELECT_FROM
        self.selected: Optional[Position] = None
        self.selectable: List[Position] = self.state.current_selectable_positions()
        self._clock = clock
        self._started = clock()
        self._ended: Optional[float] = None

    @property
    def finished(self) -> bool:
        return self.winner is not None

    @property
    def elapsed(self) -> timedelta:
        end = self._ended if self._ended is not None else self._clock()
        return timedelta(seconds=end - self._started)

    def select(self, position: Position) -> bool:
        """Handle a click on ``position``. Returns False when the square is not selectable."""
        if self.finished:
            raise MatchFinishedError("Match already finished")
        logger.debug("Click on square %s", position)
        if position not in self.selectable:
            return False
        if self.phase is SelectionPhase.SELECT_FROM:
            self._select_origin(position)
        else:
            self._select_destination(position)
        return True

    def cancel_selection(self) -> None:
        """Drop the chosen origin so another piece can be picked."""
        if self.finished:
            raise MatchFinishedError("Match already finished")
        if self.phase is SelectionPhase.SELECT_FROM:
            return
        self.selected = None
        self.phase = SelectionPhase.SELECT_FROM
        self.selectable = self.state.current_selectable_positions()

    def _select_origin(self, position: Position) -> None:
        index = self.state.piece_at(position)
        if index is None:
            raise AssertionError(f"selectable square {position} is empty")
        self.selected = position
        self.phase = self.phase.alter()
        self.selectable = [position.move_to(d) for d in self.state.legal_moves(index)]
        if self.state.turn is Role.FOX and not self.selectable:
            self._finish(Role.DOG)

    def _select_destination(self, position: Position) -> None:
        origin = self.selected
        index = self.state.piece_at(origin)
        mover = self.state.role_of(index)
        direction = mover.direction_of(position.row - origin.row, position.col - origin.col)
        logger.debug("Moving piece %d %s", index, direction.name)
        try:
            self.state.apply_move(index, direction)
        finally:
            # A raising move listener still leaves the piece moved.
            if self.state.position_of(index) != origin:
                self._end_turn(mover)

    def _end_turn(self, mover: Role) -> None:
        if mover is Role.FOX:
            self.rounds += 1
        self.state.toggle_turn()
        self.selected = None
        self.phase = SelectionPhase.SELECT_FROM
        self.selectable = self.state.current_selectable_positions()
        self._check_winner()

    def _check_winner(self) -> None:
        if self.state.is_fox_win():
            self._finish(Role.FOX)
        elif self.state.turn is Role.FOX and self.state.is_dog_win():
            self._finish(Role.DOG)

    def _finish(self, winner: Role) -> None:
        self.winner = winner
        self._ended = self._clock()
        self.selected = None
        self.selectable = []
        self.result = GameResult(
            player=self.player,
            rounds=self.rounds,
            duration=self.elapsed,
            winner=winner,
        )
        logger.info("%s wins after %d rounds", winner.name.capitalize(), self.rounds)
        if self.results is not None:
            self.results.persist(self.result)
