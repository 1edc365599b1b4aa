"""Move generation tests: per-piece geometry, legality filtering, castling,
en passant and promotion."""

import random

import pytest

from chessrules.core.board import Board
from chessrules.core.enums import PROMOTION_TYPES, Color, MovedPieces, MoveFlag, PieceType
from chessrules.core.move import Move
from chessrules.core.move_generator import (
    MoveGenerator,
    has_legal_moves,
    is_in_check,
    is_square_attacked,
    legal_moves,
)
from chessrules.core.piece import Piece
from chessrules.core.position import (
    A1, A2, B1, C1, D1, D2, D4, D5, D6, D8, E1, E2, E3, E4, E5, E7, E8,
    F1, F2, G1, H1, ALL_POSITIONS, Position,
)

WP = Piece(Color.WHITE, PieceType.PAWN)
BP = Piece(Color.BLACK, PieceType.PAWN)


def _targets(moves: list[Move]) -> set[Position]:
    return {m.to_sq for m in moves}


# ── Starting position ────────────────────────────────────────────────────────


class TestStartingPosition:
    def test_twenty_moves_for_white(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert len(gen.all_legal_moves(Color.WHITE)) == 20

    def test_twenty_moves_for_black(self) -> None:
        gen = MoveGenerator(Board.initial())
        assert len(gen.all_legal_moves(Color.BLACK)) == 20

    def test_pawn_single_and_double(self) -> None:
        moves = legal_moves(E2, Board.initial())
        assert _targets(moves) == {E3, E4}
        double = next(m for m in moves if m.to_sq == E4)
        assert double.flag == MoveFlag.DOUBLE_PAWN

    def test_knight_moves(self) -> None:
        moves = legal_moves(B1, Board.initial())
        assert _targets(moves) == {Position(5, 0), Position(5, 2)}

    def test_blocked_pieces(self) -> None:
        board = Board.initial()
        for sq in (A1, C1, D1, E1, F1):
            assert legal_moves(sq, board) == []

    def test_empty_square_has_no_moves(self) -> None:
        assert legal_moves(E4, Board.initial()) == []

    def test_invalid_square_has_no_moves(self) -> None:
        assert legal_moves(Position(9, 9), Board.initial()) == []


# ── Per-piece geometry ───────────────────────────────────────────────────────


class TestPieceGeometry:
    def test_knight_in_center(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "...N....",
            "........",
            "........",
            ".......K",
        ])
        assert len(legal_moves(D4, board)) == 8

    def test_rook_stops_at_own_piece_and_captures_enemy(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "........",
            "P.......",
            "........",
            "R.n....K",
        ])
        moves = legal_moves(A1, board)
        assert _targets(moves) == {A2, B1, C1}
        capture = next(m for m in moves if m.to_sq == C1)
        assert capture.captured == Piece(Color.BLACK, PieceType.KNIGHT)

    def test_queen_on_empty_board(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "...Q....",
            "........",
            "........",
            ".......K",
        ])
        # 14 along rank and file, 13 along the diagonals
        assert len(legal_moves(D4, board)) == 27

    def test_bishop_diagonals_only(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "...B....",
            "........",
            "........",
            ".......K",
        ])
        moves = legal_moves(D4, board)
        assert all(abs(m.to_sq.row - 4) == abs(m.to_sq.col - 3) for m in moves)
        assert len(moves) == 13

    def test_king_steps(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "...K....",
            "........",
            "........",
            "........",
        ])
        assert len(legal_moves(D4, board)) == 8

    def test_pawn_capture_diagonals(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "...p.p..",
            "....P...",
            "........",
            "........",
            ".......K",
        ])
        assert _targets(legal_moves(E4, board)) == {D5, Position(3, 4), Position(3, 5)}

    def test_pawn_blocked(self) -> None:
        board = Board.initial()
        board[E3] = Piece(Color.BLACK, PieceType.KNIGHT)
        assert legal_moves(E2, board) == []

    def test_double_step_needs_empty_target(self) -> None:
        board = Board.initial()
        board[E4] = Piece(Color.BLACK, PieceType.KNIGHT)
        assert _targets(legal_moves(E2, board)) == {E3}

    def test_black_pawn_moves_down(self) -> None:
        moves = legal_moves(E7, Board.initial())
        assert _targets(moves) == {Position(2, 4), Position(3, 4)}


# ── Legality filtering ───────────────────────────────────────────────────────


class TestLegality:
    def test_pinned_rook_stays_on_file(self) -> None:
        board = Board.from_diagram([
            "k...r...",
            "........",
            "........",
            "........",
            "........",
            "........",
            "....R...",
            "....K...",
        ])
        moves = legal_moves(E2, board)
        assert {m.to_sq.col for m in moves} == {4}
        assert len(moves) == 6

    def test_king_cannot_step_into_check(self) -> None:
        board = Board.from_diagram([
            "k..r....",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "....K...",
        ])
        assert _targets(legal_moves(E1, board)) == {E2, F1, F2}

    def test_must_answer_check(self) -> None:
        board = Board.from_diagram([
            "k...r...",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "R...K...",
        ])
        gen = MoveGenerator(board, moved=MovedPieces.WHITE_KING)
        assert gen.is_in_check(Color.WHITE)
        assert all(m.piece.piece_type == PieceType.KING for m in gen.all_legal_moves(Color.WHITE))

    def test_leaves_king_in_check_without_king(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "........",
            "........",
            "........",
            "R.......",
        ])
        gen = MoveGenerator(board)
        assert gen.legal_moves(A1) == []

    @pytest.mark.slow
    @pytest.mark.parametrize("seed", range(6))
    def test_random_playouts_never_self_check(self, seed: int) -> None:
        rng = random.Random(seed)
        board = Board.initial()
        last: Move | None = None
        color = Color.WHITE
        for _ in range(60):
            gen = MoveGenerator(board, last)
            moves = gen.all_legal_moves(color)
            if not moves:
                break
            for move in moves:
                assert not is_in_check(board.applying(move), color), move
            last = rng.choice(moves)
            board = board.applying(last)
            color = color.opposite


# ── Attack detection ─────────────────────────────────────────────────────────


class TestAttacks:
    def test_pawn_attacks_diagonally_not_forward(self) -> None:
        board = Board.empty()
        board[E4] = WP
        assert is_square_attacked(board, D5, Color.WHITE)
        assert is_square_attacked(board, Position(3, 5), Color.WHITE)
        assert not is_square_attacked(board, Position(3, 4), Color.WHITE)

    def test_black_pawn_attacks_downwards(self) -> None:
        board = Board.empty()
        board[D5] = BP
        assert is_square_attacked(board, E4, Color.BLACK)
        assert not is_square_attacked(board, Position(2, 4), Color.BLACK)

    def test_slider_blocked(self) -> None:
        board = Board.empty()
        board[A1] = Piece(Color.BLACK, PieceType.ROOK)
        assert is_square_attacked(board, H1, Color.BLACK)
        board[D1] = WP
        assert not is_square_attacked(board, H1, Color.BLACK)
        assert is_square_attacked(board, D1, Color.BLACK)

    def test_ignores_turn(self) -> None:
        board = Board.initial()
        assert is_square_attacked(board, E3, Color.WHITE)
        assert is_square_attacked(board, Position(2, 4), Color.BLACK)

    def test_no_king_not_in_check(self) -> None:
        assert not is_in_check(Board.empty(), Color.WHITE)

    @pytest.mark.parametrize("pos", [Position(8, 4), Position(-1, 0), Position(3, 8)])
    def test_off_board_square_not_attacked(self, pos: Position) -> None:
        board = Board.initial()
        assert not is_square_attacked(board, pos, Color.WHITE)
        assert not MoveGenerator(board).is_square_attacked(pos, Color.BLACK)


# ── Castling ─────────────────────────────────────────────────────────────────

CASTLE_READY = [
    "r...k..r",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "PPPPPPPP",
    "R...K..R",
]


def _castles(board: Board, moved: MovedPieces = MovedPieces.NONE) -> set[MoveFlag]:
    return {
        m.flag for m in legal_moves(E1, board, None, moved) if m.flag.is_castle
    }


class TestCastling:
    def test_both_sides_available(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        assert _castles(board) == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}

    def test_destinations(self) -> None:
        moves = legal_moves(E1, Board.from_diagram(CASTLE_READY))
        by_flag = {m.flag: m.to_sq for m in moves if m.flag.is_castle}
        assert by_flag[MoveFlag.CASTLE_KINGSIDE] == G1
        assert by_flag[MoveFlag.CASTLE_QUEENSIDE] == C1

    def test_black_castles_on_row_zero(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        moves = legal_moves(E8, board)
        assert {m.to_sq for m in moves if m.flag.is_castle} == {
            Position(0, 6),
            Position(0, 2),
        }

    def test_king_moved_disables_both(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        assert _castles(board, MovedPieces.WHITE_KING) == set()

    def test_rook_moved_disables_one_side(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        assert _castles(board, MovedPieces.WHITE_ROOK_H) == {MoveFlag.CASTLE_QUEENSIDE}
        assert _castles(board, MovedPieces.WHITE_ROOK_A) == {MoveFlag.CASTLE_KINGSIDE}

    def test_other_colour_flags_do_not_matter(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        moved = MovedPieces.BLACK_KING | MovedPieces.BLACK_ROOK_A
        assert len(_castles(board, moved)) == 2

    def test_rook_missing(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[H1] = None
        assert _castles(board) == {MoveFlag.CASTLE_QUEENSIDE}

    def test_wrong_piece_on_rook_square(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[H1] = Piece(Color.WHITE, PieceType.KNIGHT)
        assert _castles(board) == {MoveFlag.CASTLE_QUEENSIDE}

    def test_blocked_between(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[B1] = Piece(Color.WHITE, PieceType.KNIGHT)
        assert _castles(board) == {MoveFlag.CASTLE_KINGSIDE}

    def test_transit_square_attacked(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[F2] = None
        board[Position(2, 5)] = Piece(Color.BLACK, PieceType.ROOK)  # f6 eyes f1
        assert _castles(board) == {MoveFlag.CASTLE_QUEENSIDE}

    def test_destination_attacked(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[Position(6, 6)] = None
        board[Position(2, 6)] = Piece(Color.BLACK, PieceType.ROOK)  # g6 eyes g1
        assert _castles(board) == {MoveFlag.CASTLE_QUEENSIDE}

    def test_not_out_of_check(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[D2] = None
        board[Position(4, 1)] = Piece(Color.BLACK, PieceType.BISHOP)  # b4 checks e1
        assert _castles(board) == set()

    def test_rook_square_attack_is_ignored(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[Position(6, 1)] = None
        board[Position(2, 1)] = Piece(Color.BLACK, PieceType.ROOK)  # b6 eyes b1
        board[Position(6, 7)] = None
        board[Position(2, 7)] = Piece(Color.BLACK, PieceType.ROOK)  # h6 eyes h1
        assert _castles(board) == {MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE}

    def test_king_off_home_square(self) -> None:
        board = Board.from_diagram(CASTLE_READY)
        board[E1] = None
        board[D1] = Piece(Color.WHITE, PieceType.KING)
        assert not any(m.flag.is_castle for m in legal_moves(D1, board))


# ── En passant ───────────────────────────────────────────────────────────────


class TestEnPassant:
    BOARD = [
        "k.......",
        "........",
        "........",
        "...pP...",
        "........",
        "........",
        "........",
        ".......K",
    ]

    def test_capture_after_double_step(self) -> None:
        board = Board.from_diagram(self.BOARD)
        last = Move(BP, Position(1, 3), D5, flag=MoveFlag.DOUBLE_PAWN)
        moves = legal_moves(E5, board, last)
        ep = [m for m in moves if m.flag == MoveFlag.EN_PASSANT]
        assert len(ep) == 1
        assert ep[0].to_sq == D6
        assert ep[0].captured == BP

    def test_no_capture_after_single_step(self) -> None:
        board = Board.from_diagram(self.BOARD)
        last = Move(BP, Position(2, 3), D5)
        assert D6 not in _targets(legal_moves(E5, board, last))

    def test_no_capture_without_last_move(self) -> None:
        board = Board.from_diagram(self.BOARD)
        assert D6 not in _targets(legal_moves(E5, board))

    def test_not_for_non_adjacent_pawn(self) -> None:
        board = Board.from_diagram(self.BOARD)
        board[D5] = None
        board[Position(3, 1)] = BP
        last = Move(BP, Position(1, 1), Position(3, 1), flag=MoveFlag.DOUBLE_PAWN)
        assert not any(m.flag == MoveFlag.EN_PASSANT for m in legal_moves(E5, board, last))

    def test_en_passant_that_exposes_king_is_illegal(self) -> None:
        board = Board.from_diagram([
            "........",
            "........",
            "........",
            "K..pP..r",
            "........",
            "........",
            "........",
            ".......k",
        ])
        last = Move(BP, Position(1, 3), D5, flag=MoveFlag.DOUBLE_PAWN)
        assert not any(
            m.flag == MoveFlag.EN_PASSANT for m in legal_moves(E5, board, last)
        )


# ── Promotion ────────────────────────────────────────────────────────────────


class TestPromotion:
    def test_four_variants(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "....P...",
            "........",
            "........",
            "........",
            "........",
            "........",
            ".......K",
        ])
        moves = legal_moves(E7, board)
        assert len(moves) == 4
        assert {m.promotion for m in moves} == set(PROMOTION_TYPES)
        assert all(m.to_sq == E8 and m.flag == MoveFlag.PROMOTION for m in moves)

    def test_capture_promotion(self) -> None:
        board = Board.from_diagram([
            "k..r....",
            "....P...",
            "........",
            "........",
            "........",
            "........",
            "........",
            ".......K",
        ])
        moves = legal_moves(E7, board)
        assert len(moves) == 8
        captures = [m for m in moves if m.to_sq == D8]
        assert len(captures) == 4
        assert all(m.captured == Piece(Color.BLACK, PieceType.ROOK) for m in captures)

    def test_black_promotes_on_row_seven(self) -> None:
        board = Board.from_diagram([
            "k.......",
            "........",
            "........",
            "........",
            "........",
            "........",
            "...p....",
            ".......K",
        ])
        moves = legal_moves(D2, board)
        assert {m.to_sq for m in moves} == {D1}
        assert len(moves) == 4


class TestHasLegalMoves:
    def test_start(self) -> None:
        assert has_legal_moves(Color.WHITE, Board.initial())

    def test_no_pieces(self) -> None:
        assert not has_legal_moves(Color.WHITE, Board.empty())

    def test_every_square_generator_does_not_mutate(self) -> None:
        board = Board.initial()
        gen = MoveGenerator(board)
        for pos in ALL_POSITIONS:
            gen.legal_moves(pos)
        assert board == Board.initial()
