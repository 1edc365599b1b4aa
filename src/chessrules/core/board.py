"""Board - piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from chessrules.core.enums import Color, MoveFlag, PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import ALL_POSITIONS, Position

if TYPE_CHECKING:
    from chessrules.core.move import Move

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)

# Castling rook relocation: flag -> (rook origin column, rook target column).
_CASTLE_ROOK_COLS: dict[MoveFlag, tuple[int, int]] = {
    MoveFlag.CASTLE_KINGSIDE: (7, 5),
    MoveFlag.CASTLE_QUEENSIDE: (0, 3),
}


class Board:
    """8x8 grid of optional pieces.

    The board knows nothing about turn order, castling rights or history.
    Reads and writes through invalid positions are ignored.
    """

    __slots__ = ("_squares",)

    def __init__(self) -> None:
        self._squares: list[list[Piece | None]] = [[None] * 8 for _ in range(8)]

    # -- Element access -----------------------------------------------------

    def piece_at(self, pos: Position) -> Piece | None:
        if not pos.is_valid:
            return None
        return self._squares[pos.row][pos.col]

    def set_piece(self, pos: Position, piece: Piece | None) -> None:
        if not pos.is_valid:
            return
        self._squares[pos.row][pos.col] = piece

    __getitem__ = piece_at
    __setitem__ = set_piece

    def is_empty(self, pos: Position) -> bool:
        return self.piece_at(pos) is None

    def move_piece(self, from_sq: Position, to_sq: Position) -> None:
        """Relocate whatever stands on *from_sq* (no legality check)."""
        if not (from_sq.is_valid and to_sq.is_valid):
            return
        piece = self._squares[from_sq.row][from_sq.col]
        self._squares[from_sq.row][from_sq.col] = None
        self._squares[to_sq.row][to_sq.col] = piece

    # -- Query helpers ------------------------------------------------------

    def occupied(self) -> Iterator[tuple[Position, Piece]]:
        """Yield ``(position, piece)`` for every occupied square, a8 first."""
        for pos in ALL_POSITIONS:
            piece = self._squares[pos.row][pos.col]
            if piece is not None:
                yield pos, piece

    def find_king(self, color: Color) -> Position | None:
        for pos, piece in self.occupied():
            if piece.piece_type == PieceType.KING and piece.color == color:
                return pos
        return None

    def positions_of(self, color: Color) -> list[Position]:
        """All squares occupied by *color*."""
        return [pos for pos, piece in self.occupied() if piece.color == color]

    # -- Move application ---------------------------------------------------

    def applying(self, move: Move) -> Board:
        """Return a new board with *move* played; ``self`` is left untouched."""
        b = self.copy()
        grid = b._squares
        grid[move.from_sq.row][move.from_sq.col] = None

        placed = move.piece
        if move.flag in _CASTLE_ROOK_COLS:
            rook_from, rook_to = _CASTLE_ROOK_COLS[move.flag]
            row = move.from_sq.row
            grid[row][rook_to] = grid[row][rook_from]
            grid[row][rook_from] = None
        elif move.flag == MoveFlag.EN_PASSANT:
            # The captured pawn stands beside the origin, not on the target.
            grid[move.from_sq.row][move.to_sq.col] = None
        elif move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = Piece(move.piece.color, move.promotion)

        grid[move.to_sq.row][move.to_sq.col] = placed
        return b

    # -- Copying ------------------------------------------------------------

    def copy(self) -> Board:
        b = Board()
        b._squares = [row.copy() for row in self._squares]
        return b

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for col, pt in enumerate(_BACK_RANK):
            b._squares[0][col] = Piece(Color.BLACK, pt)
            b._squares[1][col] = Piece(Color.BLACK, PieceType.PAWN)
            b._squares[6][col] = Piece(Color.WHITE, PieceType.PAWN)
            b._squares[7][col] = Piece(Color.WHITE, pt)
        return b

    @classmethod
    def from_diagram(cls, rows: Sequence[str]) -> Board:
        """Build a board from eight rows of piece letters, rank 8 first.

        Empty squares are written as ``.``; whitespace is ignored::

            Board.from_diagram([
                "....k...",
                "........",
                ...
                "....K..R",
            ])
        """
        cleaned = ["".join(row.split()) for row in rows]
        if len(cleaned) != 8 or any(len(row) != 8 for row in cleaned):
            raise ValueError("Board diagram must have 8 rows of 8 squares")
        b = cls()
        for row_idx, row in enumerate(cleaned):
            for col_idx, char in enumerate(row):
                if char != ".":
                    b._squares[row_idx][col_idx] = Piece.from_char(char)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __repr__(self) -> str:
        rows: list[str] = []
        for row_idx, row in enumerate(self._squares):
            cells = [str(p) if p else "." for p in row]
            rows.append(f"{8 - row_idx} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
