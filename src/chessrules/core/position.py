"""Board coordinates and algebraic square names.

Grid layout (row 0 at the top, as seen from white's side)::

    row 0 -> rank 8   a8 ... h8
    ...
    row 7 -> rank 1   a1 ... h1

Column 0 is the a-file.
"""

from __future__ import annotations

from dataclasses import dataclass

_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class Position:
    """Immutable ``(row, col)`` coordinate.

    Out-of-range values can be constructed (move generation steps off the
    board this way) but are never used to index a board.
    """

    row: int
    col: int

    @property
    def is_valid(self) -> bool:
        return 0 <= self.row < 8 and 0 <= self.col < 8

    @property
    def file(self) -> str:
        """File letter a-h, ``"?"`` for invalid positions."""
        if not self.is_valid:
            return "?"
        return _FILES[self.col]

    @property
    def rank(self) -> int:
        """Rank number 1-8 from white's perspective."""
        return 8 - self.row

    @property
    def algebraic(self) -> str:
        """Square name, e.g. ``Position(4, 4)`` -> ``'e4'``."""
        return f"{self.file}{self.rank}"

    @property
    def is_light(self) -> bool:
        return (self.row + self.col) % 2 == 0

    def offset(self, d_row: int, d_col: int) -> Position:
        return Position(self.row + d_row, self.col + d_col)

    @classmethod
    def from_algebraic(cls, name: str) -> Position | None:
        """Parse a square name such as ``'e4'``; ``None`` if malformed."""
        if len(name) != 2:
            return None
        file_char = name[0].lower()
        rank_char = name[1]
        if file_char not in _FILES or rank_char not in "12345678":
            return None
        return cls(8 - int(rank_char), _FILES.index(file_char))

    def __str__(self) -> str:
        return self.algebraic


ALL_POSITIONS: tuple[Position, ...] = tuple(
    Position(row, col) for row in range(8) for col in range(8)
)


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = (Position(0, c) for c in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Position(1, c) for c in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Position(2, c) for c in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Position(3, c) for c in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Position(4, c) for c in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Position(5, c) for c in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Position(6, c) for c in range(8))
A1, B1, C1, D1, E1, F1, G1, H1 = (Position(7, c) for c in range(8))
