"""Legal and pseudo-legal move generation + attack detection."""

from __future__ import annotations

from collections.abc import Callable

from chessrules.core.board import Board
from chessrules.core.enums import (
    PROMOTION_TYPES,
    Color,
    MovedPieces,
    MoveFlag,
    PieceType,
)
from chessrules.core.move import Move
from chessrules.core.piece import Piece
from chessrules.core.position import ALL_POSITIONS, Position

Offsets = tuple[tuple[int, int], ...]

KNIGHT_OFFSETS: Offsets = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: Offsets = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: Offsets = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: Offsets = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: Offsets = BISHOP_DIRS + ROOK_DIRS


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(offsets: Offsets) -> dict[Position, tuple[Position, ...]]:
    targets: dict[Position, tuple[Position, ...]] = {}
    for pos in ALL_POSITIONS:
        moves = (pos.offset(dr, dc) for dr, dc in offsets)
        targets[pos] = tuple(p for p in moves if p.is_valid)
    return targets


def _build_rays(
    directions: Offsets,
) -> dict[Position, tuple[tuple[Position, ...], ...]]:
    rays_per_square: dict[Position, tuple[tuple[Position, ...], ...]] = {}
    for pos in ALL_POSITIONS:
        square_rays: list[tuple[Position, ...]] = []
        for dr, dc in directions:
            ray: list[Position] = []
            step = pos.offset(dr, dc)
            while step.is_valid:
                ray.append(step)
                step = step.offset(dr, dc)
            square_rays.append(tuple(ray))
        rays_per_square[pos] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = frozenset((PieceType.BISHOP, PieceType.QUEEN))
_STRAIGHT_SLIDERS = frozenset((PieceType.ROOK, PieceType.QUEEN))

# Castling geometry per side: (flag, rook column, squares that must be
# empty, squares the king crosses or lands on).
_CASTLE_SIDES: tuple[tuple[MoveFlag, int, tuple[int, ...], tuple[int, ...]], ...] = (
    (MoveFlag.CASTLE_KINGSIDE, 7, (5, 6), (5, 6)),
    (MoveFlag.CASTLE_QUEENSIDE, 0, (1, 2, 3), (3, 2)),
)


class MoveGenerator:
    """Generates legal moves on a :class:`Board`.

    The generator never mutates the board: every candidate is tested on a
    fresh copy produced by :meth:`Board.applying`.

    Args:
        board: Position to generate moves on.
        last_move: Move played just before, used for en passant.
        moved: Castling-relevant pieces that have already moved.
    """

    __slots__ = ("_board", "_last_move", "_moved", "_dispatch")

    def __init__(
        self,
        board: Board,
        last_move: Move | None = None,
        moved: MovedPieces = MovedPieces.NONE,
    ) -> None:
        self._board = board
        self._last_move = last_move
        self._moved = moved
        self._dispatch: dict[
            PieceType, Callable[[Position, Piece, list[Move]], None]
        ] = {
            PieceType.PAWN: self._gen_pawn,
            PieceType.KNIGHT: self._gen_knight,
            PieceType.BISHOP: self._gen_bishop,
            PieceType.ROOK: self._gen_rook,
            PieceType.QUEEN: self._gen_queen,
            PieceType.KING: self._gen_king,
        }

    @property
    def board(self) -> Board:
        return self._board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, pos: Position) -> list[Move]:
        """Moves for the piece on *pos* that do not leave its king attacked."""
        piece = self._board.piece_at(pos)
        if piece is None:
            return []
        return [
            move
            for move in self.pseudo_legal_moves(pos)
            if not self.leaves_king_in_check(move)
        ]

    def pseudo_legal_moves(self, pos: Position) -> list[Move]:
        """Moves obeying the piece's geometry (may leave own king in check)."""
        piece = self._board.piece_at(pos)
        if piece is None:
            return []
        moves: list[Move] = []
        self._dispatch[piece.piece_type](pos, piece, moves)
        return moves

    def all_legal_moves(self, color: Color) -> list[Move]:
        moves: list[Move] = []
        for pos in self._board.positions_of(color):
            moves.extend(self.legal_moves(pos))
        return moves

    def has_legal_moves(self, color: Color) -> bool:
        return any(self.legal_moves(pos) for pos in self._board.positions_of(color))

    def leaves_king_in_check(self, move: Move) -> bool:
        """Would *move* leave the mover's own king attacked (or missing)?"""
        color = move.piece.color
        after = self._board.applying(move)
        king_sq = after.find_king(color)
        if king_sq is None:
            return True
        return is_square_attacked(after, king_sq, color.opposite)

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_in_check(self._board, color)

    def is_square_attacked(self, pos: Position, by_color: Color) -> bool:
        """Is *pos* attacked by any piece of *by_color*?"""
        return is_square_attacked(self._board, pos, by_color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        board = self._board
        color = piece.color
        direction = color.pawn_direction

        one_step = pos.offset(direction, 0)
        if one_step.is_valid and board.is_empty(one_step):
            self._add_pawn_move(pos, one_step, piece, None, moves)
            if pos.row == color.pawn_row:
                two_step = pos.offset(2 * direction, 0)
                if board.is_empty(two_step):
                    moves.append(Move(piece, pos, two_step, flag=MoveFlag.DOUBLE_PAWN))

        last = self._last_move
        for d_col in (-1, 1):
            cap_sq = pos.offset(direction, d_col)
            if not cap_sq.is_valid:
                continue
            target = board.piece_at(cap_sq)
            if target is not None:
                if target.color != color:
                    self._add_pawn_move(pos, cap_sq, piece, target, moves)
            elif (
                last is not None
                and last.flag == MoveFlag.DOUBLE_PAWN
                and last.piece.color != color
                and last.to_sq.row == pos.row
                and last.to_sq.col == cap_sq.col
            ):
                moves.append(
                    Move(piece, pos, cap_sq, last.piece, flag=MoveFlag.EN_PASSANT)
                )

    @staticmethod
    def _add_pawn_move(
        from_sq: Position,
        to_sq: Position,
        piece: Piece,
        captured: Piece | None,
        moves: list[Move],
    ) -> None:
        if to_sq.row == piece.color.promotion_row:
            for pt in PROMOTION_TYPES:
                moves.append(
                    Move(piece, from_sq, to_sq, captured, MoveFlag.PROMOTION, pt)
                )
        else:
            moves.append(Move(piece, from_sq, to_sq, captured))

    def _gen_knight(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        self._gen_steps(pos, piece, _KNIGHT_TARGETS[pos], moves)

    def _gen_bishop(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(pos, piece, _BISHOP_RAYS[pos], moves)

    def _gen_rook(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(pos, piece, _ROOK_RAYS[pos], moves)

    def _gen_queen(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        self._gen_sliding(pos, piece, _QUEEN_RAYS[pos], moves)

    def _gen_steps(
        self,
        pos: Position,
        piece: Piece,
        targets: tuple[Position, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board.piece_at(to_sq)
            if target is None or target.color != piece.color:
                moves.append(Move(piece, pos, to_sq, target))

    def _gen_sliding(
        self,
        pos: Position,
        piece: Piece,
        rays: tuple[tuple[Position, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board.piece_at(to_sq)
                if target is None:
                    moves.append(Move(piece, pos, to_sq))
                    continue
                if target.color != piece.color:
                    moves.append(Move(piece, pos, to_sq, target))
                break

    def _gen_king(self, pos: Position, piece: Piece, moves: list[Move]) -> None:
        self._gen_steps(pos, piece, _KING_TARGETS[pos], moves)
        self._gen_castling(pos, piece, moves)

    def _gen_castling(self, king_sq: Position, king: Piece, moves: list[Move]) -> None:
        color = king.color
        if self._moved & MovedPieces.king(color):
            return
        if king_sq != Position(color.back_row, 4):
            return

        board = self._board
        opponent = color.opposite
        row = king_sq.row
        expected_rook = Piece(color, PieceType.ROOK)

        for flag, rook_col, between, king_path in _CASTLE_SIDES:
            if self._moved & MovedPieces.rook(color, rook_col):
                continue
            if board.piece_at(Position(row, rook_col)) != expected_rook:
                continue
            if any(not board.is_empty(Position(row, c)) for c in between):
                continue
            if self.is_square_attacked(king_sq, opponent):
                continue
            if any(
                self.is_square_attacked(Position(row, c), opponent) for c in king_path
            ):
                continue
            moves.append(Move(king, king_sq, Position(row, king_path[-1]), flag=flag))


# -- Geometric predicates --------------------------------------------------


def is_square_attacked(board: Board, pos: Position, by_color: Color) -> bool:
    """Can any piece of *by_color* capture on *pos*? Turn order is ignored.

    Off-board squares are never attacked.
    """
    if not pos.is_valid:
        return False
    # Pawns of by_color attack pos from one row "behind" it.
    pawn_row = pos.row - by_color.pawn_direction
    for d_col in (-1, 1):
        attacker = board.piece_at(Position(pawn_row, pos.col + d_col))
        if attacker == Piece(by_color, PieceType.PAWN):
            return True

    for sq in _KNIGHT_TARGETS[pos]:
        if board.piece_at(sq) == Piece(by_color, PieceType.KNIGHT):
            return True

    for sq in _KING_TARGETS[pos]:
        if board.piece_at(sq) == Piece(by_color, PieceType.KING):
            return True

    if _ray_attacked(board, _BISHOP_RAYS[pos], by_color, _DIAGONAL_SLIDERS):
        return True
    return _ray_attacked(board, _ROOK_RAYS[pos], by_color, _STRAIGHT_SLIDERS)


def _ray_attacked(
    board: Board,
    rays: tuple[tuple[Position, ...], ...],
    by_color: Color,
    sliders: frozenset[PieceType],
) -> bool:
    for ray in rays:
        for sq in ray:
            piece = board.piece_at(sq)
            if piece is None:
                continue
            if piece.color == by_color and piece.piece_type in sliders:
                return True
            break
    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? ``False`` when the king is absent."""
    king_sq = board.find_king(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


def legal_moves(
    pos: Position,
    board: Board,
    last_move: Move | None = None,
    moved: MovedPieces = MovedPieces.NONE,
) -> list[Move]:
    """Shortcut for ``MoveGenerator(board, last_move, moved).legal_moves(pos)``."""
    return MoveGenerator(board, last_move, moved).legal_moves(pos)


def has_legal_moves(
    color: Color,
    board: Board,
    last_move: Move | None = None,
    moved: MovedPieces = MovedPieces.NONE,
) -> bool:
    return MoveGenerator(board, last_move, moved).has_legal_moves(color)
