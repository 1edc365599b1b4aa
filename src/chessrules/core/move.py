"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass, replace

from chessrules.core.enums import PROMOTION_TYPES, MoveFlag, PieceType
from chessrules.core.piece import Piece
from chessrules.core.position import Position


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    ``is_check`` / ``is_checkmate`` describe the position after the move and
    are filled in by the game state once the move has been played. They are
    display data only and never take part in legality checks.
    """

    piece: Piece
    from_sq: Position
    to_sq: Position
    captured: Piece | None = None
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None
    is_check: bool = False
    is_checkmate: bool = False

    def __post_init__(self) -> None:
        if self.flag == MoveFlag.PROMOTION:
            if self.promotion not in PROMOTION_TYPES:
                raise ValueError(f"Invalid promotion piece: {self.promotion!r}")
        elif self.promotion is not None:
            raise ValueError(f"{self.flag.name} move cannot carry a promotion")

    # ── Derived ──────────────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    def promoted_to(self, piece_type: PieceType) -> Move:
        """Same move, resolved to promote into *piece_type*."""
        return replace(self, flag=MoveFlag.PROMOTION, promotion=piece_type)

    def with_outcome(self, *, is_check: bool, is_checkmate: bool) -> Move:
        return replace(self, is_check=is_check, is_checkmate=is_checkmate)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def uci(self) -> str:
        """Long-algebraic coordinates, e.g. ``e7e8q``."""
        base = f"{self.from_sq.algebraic}{self.to_sq.algebraic}"
        if self.promotion is not None:
            base += self.promotion.letter.lower()
        return base

    @property
    def san(self) -> str:
        """Short algebraic notation, see :func:`algebraic_notation`."""
        from chessrules.core.notation import algebraic_notation

        return algebraic_notation(self)

    def __str__(self) -> str:
        return self.uci
