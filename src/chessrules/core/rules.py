"""High-level chess rules: check, checkmate, stalemate and material."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, MovedPieces
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.status import GameStatus

if TYPE_CHECKING:
    from chessrules.core.board import Board
    from chessrules.core.move import Move
    from chessrules.core.piece import Piece


class Rules:
    """Static rule-checker that operates on a :class:`Board`.

    *last_move* and *moved* carry the en passant and castling context the
    board alone does not hold.
    """

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return MoveGenerator(board).is_in_check(color)

    @staticmethod
    def is_checkmate(
        board: Board,
        color: Color,
        last_move: Move | None = None,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> bool:
        gen = MoveGenerator(board, last_move, moved)
        return gen.is_in_check(color) and not gen.has_legal_moves(color)

    @staticmethod
    def is_stalemate(
        board: Board,
        color: Color,
        last_move: Move | None = None,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> bool:
        gen = MoveGenerator(board, last_move, moved)
        return not gen.is_in_check(color) and not gen.has_legal_moves(color)

    @staticmethod
    def status_for(
        board: Board,
        color: Color,
        last_move: Move | None = None,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> GameStatus:
        """Status of the game with *color* to move on *board*."""
        gen = MoveGenerator(board, last_move, moved)
        has_moves = gen.has_legal_moves(color)
        if gen.is_in_check(color):
            if has_moves:
                return GameStatus.check(color)
            return GameStatus.checkmate(color.opposite)
        if has_moves:
            return GameStatus.playing()
        return GameStatus.stalemate()

    @staticmethod
    def material(pieces: Iterable[Piece]) -> int:
        """Total point value of *pieces* (kings count zero)."""
        return sum(p.points for p in pieces)
