"""Application entry point: a plain terminal front end over GameState."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Iterable
from typing import TextIO

from chessrules.core.enums import PieceType
from chessrules.core.position import Position
from chessrules.game.state import GameState

_LOGGER = logging.getLogger(__name__)

LOG_LEVEL_ENV = "CHESSRULES_LOG_LEVEL"

_HELP = """\
Commands:
  e2e4, e7e8q      move (promotion letter q/r/b/n, defaults to queen)
  select e2        select a piece and list its targets
  moves            list all legal moves for the side to move
  history          print the move list
  resign           resign for the side to move
  new              start a new game
  help             show this text
  quit             leave
"""


def render_board(game: GameState, *, unicode: bool = True) -> str:
    """Text diagram of the board, white at the bottom."""
    lines: list[str] = []
    board = game.board
    for row in range(8):
        cells: list[str] = []
        for col in range(8):
            piece = board.piece_at(Position(row, col))
            if piece is None:
                cells.append(".")
            else:
                cells.append(piece.symbol if unicode else str(piece))
        lines.append(f"{8 - row} {' '.join(cells)}")
    lines.append("  a b c d e f g h")
    return "\n".join(lines)


def _promotion_type(letter: str) -> PieceType | None:
    return PieceType.from_letter(letter.upper()) if letter else PieceType.QUEEN


def play_coordinate_move(game: GameState, text: str) -> bool:
    """Play a move such as ``e2e4`` or ``e7e8n``; ``False`` if rejected."""
    if len(text) not in (4, 5):
        return False
    from_sq = Position.from_algebraic(text[:2])
    to_sq = Position.from_algebraic(text[2:4])
    promotion = _promotion_type(text[4:])
    if from_sq is None or to_sq is None or promotion is None:
        return False

    ply_before = game.ply_count
    if game.selected != from_sq:
        game.select_piece(from_sq)
    if len(text) == 5 and not any(
        m.to_sq == to_sq and m.is_promotion for m in game.selected_moves
    ):
        # A promotion letter on a move that does not promote.
        if game.selected == from_sq:
            game.select_piece(from_sq)
        return False
    game.attempt_move_to(to_sq)
    if game.pending_promotion is not None:
        game.complete_promotion(promotion)
        if game.pending_promotion is not None:
            game.cancel_promotion()
    if game.ply_count == ply_before:
        if game.selected == from_sq:
            game.select_piece(from_sq)
        return False
    return True


def run_session(
    game: GameState,
    commands: Iterable[str],
    out: TextIO,
    *,
    unicode: bool = True,
) -> int:
    """Process *commands* until exhausted or ``quit``; return exit status."""
    out.write(render_board(game, unicode=unicode) + "\n")
    out.write(game.status_text + "\n")
    for raw in commands:
        line = raw.strip()
        if not line:
            continue
        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        if cmd in ("quit", "exit"):
            break
        if cmd == "help":
            out.write(_HELP)
            continue
        if cmd == "new":
            game.new_game()
        elif cmd == "resign":
            game.resign()
        elif cmd == "history":
            for record in game.move_records:
                out.write(record.display_text + "\n")
            continue
        elif cmd == "moves":
            out.write(" ".join(m.san for m in game.legal_moves()) + "\n")
            continue
        elif cmd == "select":
            pos = Position.from_algebraic(arg.strip())
            if pos is None:
                out.write(f"Unknown square: {arg.strip()!r}\n")
                continue
            targets = sorted({m.to_sq.algebraic for m in game.select_piece(pos)})
            out.write((" ".join(targets) or "no moves") + "\n")
            continue
        elif not play_coordinate_move(game, cmd):
            out.write(f"Illegal move: {line}\n")
            continue
        out.write(render_board(game, unicode=unicode) + "\n")
        out.write(game.status_text + "\n")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessrules",
        description="Play chess in the terminal.",
    )
    parser.add_argument(
        "--ascii",
        action="store_true",
        help="draw pieces as letters instead of Unicode symbols",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get(LOG_LEVEL_ENV, "WARNING"),
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        type=str.upper,
        help=f"logging verbosity (default: ${LOG_LEVEL_ENV} or WARNING)",
    )
    parser.add_argument(
        "--moves",
        default="",
        help="space separated coordinate moves to play first, e.g. 'e2e4 e7e5'",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Launch the terminal game."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    game = GameState()
    for text in args.moves.split():
        if not play_coordinate_move(game, text):
            _LOGGER.error("Scripted move rejected: %s", text)
            return 2

    return run_session(game, sys.stdin, sys.stdout, unicode=not args.ascii)


if __name__ == "__main__":
    sys.exit(main())
