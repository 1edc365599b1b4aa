"""Game state machine. Owns the board, turn, rights and move history.

States::

    PLAYING ──► CHECK(color) ──► PLAYING | CHECKMATE(winner)
       │
       ├──► STALEMATE
       └──► RESIGNED(winner)        (from any non-terminal state)

CHECKMATE, STALEMATE and RESIGNED are terminal. Every command degrades to a
no-op when issued in a state that does not accept it; nothing is raised to
the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color, MovedPieces, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import MoveGenerator
from chessrules.core.notation import MoveRecord, move_records
from chessrules.core.piece import Piece
from chessrules.core.position import Position
from chessrules.core.rules import Rules
from chessrules.core.status import GameStatus, StatusKind
from chessrules.game.events import GameEvents

_LOGGER = logging.getLogger(__name__)

_ROOK_HOME_COLS = (0, 7)


@dataclass(frozen=True, slots=True)
class PendingPromotion:
    """A promotion waiting for the player's choice of piece."""

    move: Move
    target: Position


class GameState:
    """Mutable aggregate for a single game, driven by explicit commands.

    Commands return the resulting :class:`GameStatus` (``select_piece``
    returns the selected piece's legal moves instead). Not thread-safe: use
    one instance per session and copy the board for any parallel analysis.
    """

    __slots__ = (
        "_board",
        "_turn",
        "_history",
        "_captured",
        "_moved",
        "_last_move",
        "_status",
        "_pending",
        "_selected",
        "_selected_moves",
        "events",
    )

    def __init__(self, events: GameEvents | None = None) -> None:
        self.events = events if events is not None else GameEvents()
        self._reset()

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(self) -> GameStatus:
        """Reset everything to the standard starting position."""
        return self.setup()

    def setup(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> GameStatus:
        """Start a game from *board* (standard start when omitted).

        History, captures and the pending promotion are cleared. The status
        is evaluated for *turn*, so a set-up position can already be check,
        checkmate or stalemate.
        """
        self._reset(board, turn, moved)
        if board is not None:
            self._status = Rules.status_for(self._board, turn, None, moved)
        _LOGGER.info("New game started (%s to move)", turn.display_name)
        self.events.emit_new_game(self)
        return self._status

    def select_piece(self, pos: Position) -> list[Move]:
        """Select the side-to-move's piece on *pos*.

        Selecting the already selected square, an empty square or an
        opponent piece clears the selection.
        """
        if self._rejects_input("select_piece"):
            return list(self._selected_moves)

        if pos == self._selected:
            self._clear_selection()
            return []

        piece = self._board.piece_at(pos)
        if piece is None or piece.color != self._turn:
            self._clear_selection()
            return []

        self._selected = pos
        self._selected_moves = self._generator().legal_moves(pos)
        return list(self._selected_moves)

    def attempt_move_to(self, target: Position) -> GameStatus:
        """Move the selected piece to *target* if that is a legal destination.

        A promoting move is not played yet: it becomes the pending promotion
        until :meth:`complete_promotion` or :meth:`cancel_promotion`.
        """
        if self._rejects_input("attempt_move_to"):
            return self._status
        if self._selected is None:
            _LOGGER.debug("attempt_move_to(%s) ignored: nothing selected", target)
            return self._status

        move = next((m for m in self._selected_moves if m.to_sq == target), None)
        if move is None:
            _LOGGER.debug("attempt_move_to(%s) ignored: not a legal target", target)
            return self._status

        if move.is_promotion:
            self._pending = PendingPromotion(move, target)
            self.events.emit_promotion_pending(self._pending)
            return self._status

        self._execute(move)
        return self._status

    def tap(self, pos: Position) -> GameStatus:
        """Single-entry input for board UIs: move if *pos* is a legal target
        of the selection, otherwise (de)select."""
        if self._rejects_input("tap"):
            return self._status
        if self._selected is not None and pos != self._selected:
            if any(m.to_sq == pos for m in self._selected_moves):
                return self.attempt_move_to(pos)
        self.select_piece(pos)
        return self._status

    def complete_promotion(self, piece_type: PieceType) -> GameStatus:
        """Finish the pending promotion, promoting to *piece_type*."""
        if self._status.is_terminal or self._pending is None:
            _LOGGER.debug("complete_promotion ignored: no promotion pending")
            return self._status
        if piece_type not in PROMOTION_TYPES:
            _LOGGER.debug("complete_promotion ignored: cannot promote to %s", piece_type)
            return self._status

        move = self._pending.move.promoted_to(piece_type)
        self._pending = None
        self._execute(move)
        return self._status

    def cancel_promotion(self) -> GameStatus:
        """Drop the pending promotion and the selection; the board is unchanged."""
        if self._pending is None:
            _LOGGER.debug("cancel_promotion ignored: no promotion pending")
            return self._status
        self._pending = None
        self._clear_selection()
        return self._status

    def resign(self) -> GameStatus:
        """The side to move resigns."""
        if self._status.is_terminal:
            _LOGGER.debug("resign ignored: game already over")
            return self._status
        self._pending = None
        self._clear_selection()
        self._set_status(GameStatus.resigned(self._turn.opposite))
        _LOGGER.info("%s resigned", self._turn.display_name)
        return self._status

    # ── Queries ──────────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        """Current board. Treat as read-only; use :meth:`Board.copy` to explore."""
        return self._board

    @property
    def turn(self) -> Color:
        return self._turn

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def status_text(self) -> str:
        return self._status.describe(self._turn)

    @property
    def is_game_over(self) -> bool:
        return self._status.is_terminal

    @property
    def in_check(self) -> bool:
        return self._status.kind == StatusKind.CHECK

    @property
    def selected(self) -> Position | None:
        return self._selected

    @property
    def selected_moves(self) -> list[Move]:
        return list(self._selected_moves)

    @property
    def legal_destinations(self) -> set[Position]:
        return {m.to_sq for m in self._selected_moves}

    @property
    def capture_destinations(self) -> set[Position]:
        return {m.to_sq for m in self._selected_moves if m.is_capture}

    @property
    def quiet_destinations(self) -> set[Position]:
        return self.legal_destinations - self.capture_destinations

    @property
    def pending_promotion(self) -> PendingPromotion | None:
        return self._pending

    @property
    def last_move(self) -> Move | None:
        return self._last_move

    @property
    def last_move_squares(self) -> tuple[Position, Position] | None:
        """Origin and destination of the last move, for highlighting."""
        if self._last_move is None:
            return None
        return self._last_move.from_sq, self._last_move.to_sq

    @property
    def move_history(self) -> list[Move]:
        return list(self._history)

    @property
    def move_records(self) -> list[MoveRecord]:
        return move_records(self._history)

    @property
    def moved_pieces(self) -> MovedPieces:
        return self._moved

    def king_has_moved(self, color: Color) -> bool:
        return bool(self._moved & MovedPieces.king(color))

    def rook_has_moved(self, color: Color, col: int) -> bool:
        return bool(self._moved & MovedPieces.rook(color, col))

    def captured_pieces(self, color: Color) -> list[Piece]:
        """Pieces of *color* that have been captured, in capture order."""
        return list(self._captured[color])

    def material_lost(self, color: Color) -> int:
        return Rules.material(self._captured[color])

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def fullmove_number(self) -> int:
        """Current full-move number for display."""
        return (self.ply_count // 2) + 1

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        return self._generator().all_legal_moves(self._turn)

    # ── Internal ─────────────────────────────────────────────────────────

    def _reset(
        self,
        board: Board | None = None,
        turn: Color = Color.WHITE,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> None:
        self._board = board.copy() if board is not None else Board.initial()
        self._turn = turn
        self._history: list[Move] = []
        self._captured: dict[Color, list[Piece]] = {Color.WHITE: [], Color.BLACK: []}
        self._moved = moved
        self._last_move: Move | None = None
        self._status = GameStatus.playing()
        self._pending: PendingPromotion | None = None
        self._selected: Position | None = None
        self._selected_moves: list[Move] = []

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(self._board, self._last_move, self._moved)

    def _rejects_input(self, command: str) -> bool:
        if self._status.is_terminal:
            _LOGGER.debug("%s ignored: game is over (%s)", command, self._status.kind.name)
            return True
        if self._pending is not None:
            _LOGGER.debug("%s ignored: promotion pending", command)
            return True
        return False

    def _clear_selection(self) -> None:
        self._selected = None
        self._selected_moves = []

    def _set_status(self, status: GameStatus) -> None:
        changed = status != self._status
        self._status = status
        if changed:
            self.events.emit_status(status)

    def _execute(self, move: Move) -> None:
        """Play a fully specified legal *move* and advance the game."""
        mover = move.piece.color
        opponent = mover.opposite

        captured = move.captured
        if captured is not None:
            self._captured[captured.color].append(captured)

        self._update_moved_pieces(move)
        self._board = self._board.applying(move)

        status = Rules.status_for(self._board, opponent, move, self._moved)
        move = move.with_outcome(
            is_check=status.kind == StatusKind.CHECK,
            is_checkmate=status.kind == StatusKind.CHECKMATE,
        )

        self._last_move = move
        self._history.append(move)
        self._turn = opponent
        self._clear_selection()

        _LOGGER.debug("Executed %s (%s)", move.san, move.uci)
        self._set_status(status)
        if status.is_terminal:
            _LOGGER.info("Game over: %s", status.describe(self._turn))
        self.events.emit_move(move, self)

    def _update_moved_pieces(self, move: Move) -> None:
        piece = move.piece
        if piece.piece_type == PieceType.KING:
            self._moved |= MovedPieces.king(piece.color)
        elif (
            piece.piece_type == PieceType.ROOK
            and move.from_sq.row == piece.color.back_row
            and move.from_sq.col in _ROOK_HOME_COLS
        ):
            self._moved |= MovedPieces.rook(piece.color, move.from_sq.col)

        captured = move.captured
        if (
            captured is not None
            and captured.piece_type == PieceType.ROOK
            and move.to_sq.row == captured.color.back_row
            and move.to_sq.col in _ROOK_HOME_COLS
        ):
            self._moved |= MovedPieces.rook(captured.color, move.to_sq.col)
