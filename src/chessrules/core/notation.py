"""Algebraic notation and move-history pairing.

Notation is generated without disambiguation: two knights able to reach
the same square both render as ``Nd2``. It is produced for display only and
is never parsed back.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chessrules.core.enums import MoveFlag, PieceType
from chessrules.core.move import Move

_CASTLE_SAN: dict[MoveFlag, str] = {
    MoveFlag.CASTLE_KINGSIDE: "O-O",
    MoveFlag.CASTLE_QUEENSIDE: "O-O-O",
}


def algebraic_notation(move: Move) -> str:
    """Short algebraic notation for a played (or candidate) *move*."""
    if move.flag in _CASTLE_SAN:
        san = _CASTLE_SAN[move.flag]
    else:
        san = move.piece.piece_type.letter
        if move.piece.piece_type == PieceType.PAWN and move.is_capture:
            san += move.from_sq.file
        if move.is_capture:
            san += "x"
        san += move.to_sq.algebraic
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            san += "=" + move.promotion.letter

    if move.is_checkmate:
        san += "#"
    elif move.is_check:
        san += "+"
    return san


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """One full move of history: white's ply and, if played, black's."""

    number: int
    white: Move | None
    black: Move | None = None

    @property
    def display_text(self) -> str:
        text = f"{self.number}."
        if self.white is not None:
            text += f" {algebraic_notation(self.white)}"
        if self.black is not None:
            text += f" {algebraic_notation(self.black)}"
        return text


def move_records(history: Sequence[Move]) -> list[MoveRecord]:
    """Pair a flat ply list into numbered records (plies 0,1 -> move 1)."""
    records: list[MoveRecord] = []
    for idx in range(0, len(history), 2):
        black = history[idx + 1] if idx + 1 < len(history) else None
        records.append(MoveRecord(idx // 2 + 1, history[idx], black))
    return records
