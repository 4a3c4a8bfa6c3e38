"""foxdogs package."""

from .engine import (  # noqa: F401
    BOARD_SIZE,
    DogDirection,
    Direction,
    FoxDirection,
    GameState,
    IllegalMoveError,
    InvalidSetupError,
    Piece,
    PieceMoved,
    Position,
    Role,
    UnknownDirectionError,
    default_pieces,
)
from .match import Match, MatchFinishedError, SelectionPhase  # noqa: F401
from .results import GameResult, GameResultDao  # noqa: F401

__all__ = [
    "__version__",
    "BOARD_SIZE",
    "Direction",
    "DogDirection",
    "FoxDirection",
    "GameResult",
    "GameResultDao",
    "GameState",
    "IllegalMoveError",
    "InvalidSetupError",
    "Match",
    "MatchFinishedError",
    "Piece",
    "PieceMoved",
    "Position",
    "Role",
    "SelectionPhase",
    "UnknownDirectionError",
    "default_pieces",
]

__version__ = "0.1.0"
