"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from chessrules.core import Board, MoveGenerator
    from chessrules.core.position import E2

    gen = MoveGenerator(Board.initial())
    for move in gen.legal_moves(E2):
        print(move.san)
"""

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    MovedPieces,
    MoveFlag,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    MoveGenerator,
    has_legal_moves,
    is_in_check,
    is_square_attacked,
    legal_moves,
)
from chessrules.core.notation import MoveRecord, algebraic_notation, move_records
from chessrules.core.piece import Piece
from chessrules.core.position import ALL_POSITIONS, Position
from chessrules.core.rules import Rules
from chessrules.core.status import GameStatus, StatusKind

__all__ = [
    # Enums / flags
    "Color",
    "MoveFlag",
    "MovedPieces",
    "PieceType",
    "PROMOTION_TYPES",
    "StatusKind",
    # Value objects
    "ALL_POSITIONS",
    "GameStatus",
    "Move",
    "Piece",
    "Position",
    # Domain objects
    "Board",
    "MoveGenerator",
    "Rules",
    # Functions
    "has_legal_moves",
    "is_in_check",
    "is_square_attacked",
    "legal_moves",
    # Notation
    "MoveRecord",
    "algebraic_notation",
    "move_records",
]
