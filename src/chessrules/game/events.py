"""Observer callbacks for :class:`~chessrules.game.state.GameState`.

The engine has no UI toolkit dependency; a front end subscribes plain
callables here (or simply polls the state after each command).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessrules.core.move import Move
    from chessrules.core.status import GameStatus
    from chessrules.game.state import GameState, PendingPromotion

MoveCallback = Callable[["Move", "GameState"], None]
StatusCallback = Callable[["GameStatus"], None]
PromotionCallback = Callable[["PendingPromotion"], None]
NewGameCallback = Callable[["GameState"], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_status_changed: list[StatusCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_new_game: list[NewGameCallback] = field(default_factory=list)

    def emit_move(self, move: Move, state: GameState) -> None:
        for cb in self.on_move:
            cb(move, state)

    def emit_status(self, status: GameStatus) -> None:
        for cb in self.on_status_changed:
            cb(status)

    def emit_promotion_pending(self, pending: PendingPromotion) -> None:
        for cb in self.on_promotion_pending:
            cb(pending)

    def emit_new_game(self, state: GameState) -> None:
        for cb in self.on_new_game:
            cb(state)
