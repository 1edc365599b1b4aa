"""Game status: the states of the game-state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessrules.core.enums import Color


class StatusKind(IntEnum):
    PLAYING = auto()
    CHECK = auto()
    CHECKMATE = auto()
    STALEMATE = auto()
    RESIGNED = auto()


_TERMINAL = frozenset((StatusKind.CHECKMATE, StatusKind.STALEMATE, StatusKind.RESIGNED))


@dataclass(frozen=True, slots=True)
class GameStatus:
    """Tagged status value.

    ``color`` is the side in check for ``CHECK``, the winner for
    ``CHECKMATE`` and ``RESIGNED``, and ``None`` otherwise. Build values with
    the named constructors rather than directly.
    """

    kind: StatusKind
    color: Color | None = None

    @classmethod
    def playing(cls) -> GameStatus:
        return cls(StatusKind.PLAYING)

    @classmethod
    def check(cls, color: Color) -> GameStatus:
        return cls(StatusKind.CHECK, color)

    @classmethod
    def checkmate(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.CHECKMATE, winner)

    @classmethod
    def stalemate(cls) -> GameStatus:
        return cls(StatusKind.STALEMATE)

    @classmethod
    def resigned(cls, winner: Color) -> GameStatus:
        return cls(StatusKind.RESIGNED, winner)

    @property
    def is_terminal(self) -> bool:
        return self.kind in _TERMINAL

    @property
    def winner(self) -> Color | None:
        if self.kind in (StatusKind.CHECKMATE, StatusKind.RESIGNED):
            return self.color
        return None

    def describe(self, side_to_move: Color) -> str:
        """Human-readable status line."""
        if self.kind == StatusKind.CHECK and self.color is not None:
            return f"{self.color.display_name} is in Check!"
        if self.kind == StatusKind.CHECKMATE and self.color is not None:
            return f"Checkmate! {self.color.display_name} Wins!"
        if self.kind == StatusKind.STALEMATE:
            return "Stalemate - Draw!"
        if self.kind == StatusKind.RESIGNED and self.color is not None:
            loser = self.color.opposite.display_name
            return f"{loser} Resigned. {self.color.display_name} Wins!"
        return f"{side_to_move.display_name}'s Turn"
