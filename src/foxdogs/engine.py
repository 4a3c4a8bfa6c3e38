"""Rules engine for Fox and Dogs.

One Fox tries to reach the far edge of the board while the Dogs, which may only
step diagonally forward, try to trap it. The engine is UI-agnostic: it answers
legality and termination questions and mutates piece positions on request, but
leaves move sequencing (move, toggle turn, re-derive selectable squares) to the
caller. Coordinates are zero-based (row, col) pairs.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Set, Type

logger = logging.getLogger(__name__)

BOARD_SIZE = 8
DOG_COUNT = 4
FOX_START = (0, 2)
# The Fox wins once more than this many Dogs sit on rows above it.
PASSED_DOGS_TO_WIN = 3


class InvalidSetupError(ValueError):
    """Raised when a board layout breaks a placement invariant."""


class UnknownDirectionError(ValueError):
    """Raised when a coordinate delta matches no direction of a role."""


class IllegalMoveError(ValueError):
    """Raised when a move is applied that is not valid for the piece."""


class Direction(Enum):
    """Unit step on the board. Concrete sets subclass this with their members."""

    @property
    def row_change(self) -> int:
        return self.value[0]

    @property
    def col_change(self) -> int:
        return self.value[1]

    @classmethod
    def of(cls, row_change: int, col_change: int) -> "Direction":
        for direction in cls:
            if direction.row_change == row_change and direction.col_change == col_change:
                return direction
        raise UnknownDirectionError(
            f"No {cls.__name__} for delta ({row_change}, {col_change})"
        )


class FoxDirection(Direction):
    UP_LEFT = (-1, -1)
    UP_RIGHT = (-1, 1)
    DOWN_RIGHT = (1, 1)
    DOWN_LEFT = (1, -1)


class DogDirection(Direction):
    UP_LEFT = (-1, -1)
    UP_RIGHT = (-1, 1)


class Role(str, Enum):
    DOG = "dog"
    FOX = "fox"

    def other(self) -> "Role":
        return Role.FOX if self is Role.DOG else Role.DOG

    @property
    def directions(self) -> Type[Direction]:
        return FoxDirection if self is Role.FOX else DogDirection

    def direction_of(self, row_change: int, col_change: int) -> Direction:
        """Translate a delta through this role's own direction set."""
        return self.directions.of(row_change, col_change)


@dataclass(frozen=True)
class Position:
    row: int
    col: int

    def move_to(self, direction: Direction) -> "Position":
        return Position(self.row + direction.row_change, self.col + direction.col_change)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


@dataclass
class Piece:
    role: Role
    position: Position

    def move_to(self, direction: Direction) -> None:
        """Step the piece. Bounds and collisions are the game state's concern."""
        self.position = self.position.move_to(direction)

    def __str__(self) -> str:
        return f"{self.role.name}{self.position}"


@dataclass(frozen=True)
class PieceMoved:
    index: int
    old: Position
    new: Position


MoveListener = Callable[[PieceMoved], None]


def default_pieces(board_size: int = BOARD_SIZE, dogs: int = DOG_COUNT) -> List[Piece]:
    """Fox near the top edge, Dogs on the dark squares of the bottom row."""
    if board_size < 2:
        raise InvalidSetupError("board_size must be at least 2")
    if not 0 < dogs <= board_size // 2:
        raise InvalidSetupError(
            f"dogs must be between 1 and {board_size // 2} on a {board_size}x{board_size} board"
        )
    fox_row, fox_col = FOX_START
    pieces = [Piece(Role.FOX, Position(fox_row, min(fox_col, board_size - 1)))]
    last = board_size - 1
    for i in range(dogs):
        pieces.append(Piece(Role.DOG, Position(last, 2 * i + 1)))
    return pieces


class GameState:
    """Owns the pieces of one match and enforces the placement invariants."""

    def __init__(
        self,
        pieces: Iterable[Piece],
        board_size: int = BOARD_SIZE,
        turn: Role = Role.DOG,
    ) -> None:
        if board_size < 1:
            raise InvalidSetupError("board_size must be positive")
        self.board_size = board_size
        self.turn = turn
        self._pieces: List[Piece] = [Piece(p.role, p.position) for p in pieces]
        self._listeners: List[MoveListener] = []
        self._check_pieces()

    @classmethod
    def new(cls, board_size: int = BOARD_SIZE, dogs: int = DOG_COUNT) -> "GameState":
        return cls(default_pieces(board_size, dogs), board_size=board_size)

    def _check_pieces(self) -> None:
        seen: Set[Position] = set()
        foxes = 0
        for piece in self._pieces:
            if not self.is_on_board(piece.position):
                raise InvalidSetupError(f"{piece} is off the board")
            if piece.position in seen:
                raise InvalidSetupError(f"Two pieces on {piece.position}")
            seen.add(piece.position)
            if piece.role is Role.FOX:
                foxes += 1
        if foxes != 1:
            raise InvalidSetupError(f"Expected exactly one fox, found {foxes}")

    def _piece(self, index: int) -> Piece:
        if not 0 <= index < len(self._pieces):
            raise IndexError(f"No piece with index {index}")
        return self._pieces[index]

    @property
    def piece_count(self) -> int:
        return len(self._pieces)

    @property
    def fox_index(self) -> int:
        for i, piece in enumerate(self._pieces):
            if piece.role is Role.FOX:
                return i
        raise AssertionError("fox missing from a checked layout")

    @property
    def dog_indices(self) -> List[int]:
        return [i for i, piece in enumerate(self._pieces) if piece.role is Role.DOG]

    def role_of(self, index: int) -> Role:
        return self._piece(index).role

    def position_of(self, index: int) -> Position:
        return self._piece(index).position

    def all_positions(self) -> List[Position]:
        return [piece.position for piece in self._pieces]

    def is_on_board(self, position: Position) -> bool:
        return 0 <= position.row < self.board_size and 0 <= position.col < self.board_size

    def piece_at(self, position: Position) -> Optional[int]:
        for i, piece in enumerate(self._pieces):
            if piece.position == position:
                return i
        return None

    def is_valid_move(self, index: int, direction: Direction) -> bool:
        target = self._piece(index).position.move_to(direction)
        if not self.is_on_board(target):
            return False
        return self.piece_at(target) is None

    def legal_moves(self, index: int) -> Set[Direction]:
        directions = self._piece(index).role.directions
        return {d for d in directions if self.is_valid_move(index, d)}

    def current_selectable_positions(self) -> List[Position]:
        return [piece.position for piece in self._pieces if piece.role is self.turn]

    def apply_move(self, index: int, direction: Direction) -> Position:
        """Move a piece one step. The turn is left for the caller to toggle.

        Validation happens before any mutation. Listeners run after the piece
        has moved, so if one raises, the move is already committed.
        """
        piece = self._piece(index)
        if not isinstance(direction, piece.role.directions):
            raise IllegalMoveError(f"{direction!r} is not a {piece.role.value} direction")
        if not self.is_valid_move(index, direction):
            raise IllegalMoveError(f"{piece} cannot move {direction.name}")
        old = piece.position
        piece.move_to(direction)
        logger.debug("Move %d: %s -> %s", index, old, piece.position)
        event = PieceMoved(index, old, piece.position)
        for listener in list(self._listeners):
            listener(event)
        return piece.position

    def toggle_turn(self) -> Role:
        self.turn = self.turn.other()
        logger.debug("%s turn now", self.turn.name)
        return self.turn

    def is_fox_win(self) -> bool:
        fox_row = self._pieces[self.fox_index].position.row
        if fox_row == self.board_size - 1:
            return True
        passed = sum(1 for i in self.dog_indices if self._pieces[i].position.row < fox_row)
        return passed > PASSED_DOGS_TO_WIN

    def is_dog_win(self) -> bool:
        return not self.legal_moves(self.fox_index)

    def add_listener(self, listener: MoveListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: MoveListener) -> None:
        self._listeners.remove(listener)

    def __str__(self) -> str:
        return "[" + ",".join(str(piece) for piece in self._pieces) + "]"
