"""chessrules: a complete chess rules engine.

The :mod:`chessrules.core` package holds the pure rules (board, move
generation, notation); :mod:`chessrules.game` drives a game through a
command-based state machine.
"""

from chessrules.core import Board, Color, Move, MoveGenerator, Piece, PieceType, Position
from chessrules.game import GameState, GameStatus

__version__ = "0.1.0"

__all__ = [
    "Board",
    "Color",
    "GameState",
    "GameStatus",
    "Move",
    "MoveGenerator",
    "Piece",
    "PieceType",
    "Position",
    "__version__",
]
