"""Game management layer: the state machine and its observer hooks.

Quick start::

    from chessrules.core.position import E2, E4
    from chessrules.game import GameState

    game = GameState()
    game.select_piece(E2)
    game.attempt_move_to(E4)
    print(game.status_text)  # "Black's Turn"
"""

from chessrules.core.status import GameStatus, StatusKind
from chessrules.game.events import GameEvents
from chessrules.game.state import GameState, PendingPromotion

__all__ = [
    "GameEvents",
    "GameState",
    "GameStatus",
    "PendingPromotion",
    "StatusKind",
]
