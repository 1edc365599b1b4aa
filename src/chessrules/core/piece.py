"""Piece value object: a colour/type pair worth a fixed amount of material."""

from __future__ import annotations

from dataclasses import dataclass

from chessrules.core.enums import Color, PieceType

# Unicode lays the glyphs out K Q R B N P, white block then black block.
_GLYPH_ORDER = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.PAWN,
)
_GLYPH_BASE = {Color.WHITE: 0x2654, Color.BLACK: 0x265A}


@dataclass(frozen=True, slots=True)
class Piece:
    """A chess piece. Equal colour and type means equal piece.

    Pieces carry no identity or square: the board owns placement, and the
    castling bookkeeping lives in :class:`~chessrules.core.enums.MovedPieces`.
    """

    color: Color
    piece_type: PieceType

    @property
    def points(self) -> int:
        """Material value: queen 9, rook 5, bishop and knight 3, pawn 1, king 0."""
        return self.piece_type.points

    @property
    def letter(self) -> str:
        """Uppercase letter for diagrams; pawns, letterless in notation, use ``P``."""
        return self.piece_type.letter or "P"

    def __str__(self) -> str:
        return self.letter if self.color == Color.WHITE else self.letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Parse a diagram character: uppercase is white, lowercase black."""
        if len(char) != 1 or not char.isalpha():
            raise ValueError(f"Invalid piece character: {char!r}")
        letter = char.upper()
        piece_type = PieceType.PAWN if letter == "P" else PieceType.from_letter(letter)
        if piece_type is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, piece_type)

    @property
    def symbol(self) -> str:
        """Unicode chess glyph, e.g. ``♞`` for a black knight."""
        return chr(_GLYPH_BASE[self.color] + _GLYPH_ORDER.index(self.piece_type))
