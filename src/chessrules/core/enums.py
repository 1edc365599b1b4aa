"""Core enumerations and flags for chess domain."""

from __future__ import annotations

from enum import Enum, IntEnum, IntFlag


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    # Board rows run top-down: row 0 is black's back rank, row 7 is white's.

    @property
    def back_row(self) -> int:
        return 7 if self == Color.WHITE else 0

    @property
    def pawn_row(self) -> int:
        """Row the pawns start on."""
        return 6 if self == Color.WHITE else 1

    @property
    def promotion_row(self) -> int:
        return 0 if self == Color.WHITE else 7

    @property
    def pawn_direction(self) -> int:
        """Row delta of a single pawn step."""
        return -1 if self == Color.WHITE else 1

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(Enum):
    """Chess piece types with their notation letter and material value."""

    KING = ("K", 0)
    QUEEN = ("Q", 9)
    ROOK = ("R", 5)
    BISHOP = ("B", 3)
    KNIGHT = ("N", 3)
    PAWN = ("", 1)

    def __init__(self, letter: str, value_points: int) -> None:
        self.letter = letter
        self.points = value_points

    @classmethod
    def from_letter(cls, letter: str) -> PieceType | None:
        """Piece type for an uppercase notation letter; ``""`` is a pawn."""
        for pt in cls:
            if pt.letter == letter:
                return pt
        return None


PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class MoveFlag(IntEnum):
    """Special move classification."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


class MovedPieces(IntFlag):
    """Which castling-relevant pieces have left their home square.

    Rooks are tracked by origin column (0 = queenside, 7 = kingside).
    """

    NONE = 0
    WHITE_KING = 1
    WHITE_ROOK_A = 2
    WHITE_ROOK_H = 4
    BLACK_KING = 8
    BLACK_ROOK_A = 16
    BLACK_ROOK_H = 32

    @classmethod
    def king(cls, color: Color) -> MovedPieces:
        return cls.WHITE_KING if color == Color.WHITE else cls.BLACK_KING

    @classmethod
    def rook(cls, color: Color, col: int) -> MovedPieces:
        if col == 0:
            return cls.WHITE_ROOK_A if color == Color.WHITE else cls.BLACK_ROOK_A
        if col == 7:
            return cls.WHITE_ROOK_H if color == Color.WHITE else cls.BLACK_ROOK_H
        raise ValueError(f"Rooks are only tracked on columns 0 and 7, not {col}")
