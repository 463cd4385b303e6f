"""Unit tests for /src/engine/opponent.py"""

import random
from copy import deepcopy

from src.engine.board import Board
from src.engine.opponent import (
    AutomaticOpponent,
    choose_move,
    first_capture,
    quiet_moves,
)
from src.engine.pieces import Color
from src.engine.rules import is_legal

ROOK_CHECK = "4k3/8/8/8/8/8/8/4R1K1"
CAPTURE_OR_ESCAPE = "n3k3/8/1P6/8/8/8/8/4R1K1"


def test_escapes_check_first() -> None:
    """Even with a capture available (the knight takes on b6), the first escaping move is played"""
    board = Board.from_fen(CAPTURE_OR_ESCAPE)
    move = choose_move(board, Color.BLACK, Color.WHITE, True, random.Random(0))
    assert move is not None
    assert move.to_notation() == "BKe8-d7"


def test_check_flag_ignored_when_not_set() -> None:
    """Without the flag the capture has priority"""
    board = Board.from_fen(CAPTURE_OR_ESCAPE)
    move = choose_move(board, Color.BLACK, Color.WHITE, False, random.Random(0))
    assert move is not None
    assert move.to_notation() == "BNa8-b6xWP"


def test_blocking_the_check_counts_as_escape() -> None:
    """The bishop on a1 is scanned before the king and can block on e5"""
    board = Board.from_fen("4k3/8/8/8/8/8/8/b3R1K1")
    move = choose_move(board, Color.BLACK, Color.WHITE, True, random.Random(0))
    assert move is not None
    assert move.to_notation() == "BBa1-e5"


def test_first_capture_scans_target_squares_first() -> None:
    """h2 (rank 2) is scanned before a3 (rank 3), no matter which capture is worth more"""
    board = Board.from_fen("r3k2r/8/8/8/8/P7/7P/4K3")
    move = first_capture(board, Color.BLACK, Color.WHITE)
    assert move is not None
    assert move.to_notation() == "BRh8-h2xWP"


def test_first_capture_scans_sources_in_row_major_order() -> None:
    """Both knights can take on d4: the one on b5 comes first"""
    board = Board.from_fen("4k3/8/8/1n3n2/3P4/8/8/4K3")
    move = first_capture(board, Color.BLACK, Color.WHITE)
    assert move is not None
    assert move.to_notation() == "BNb5-d4xWP"


def test_no_capture_available() -> None:
    assert first_capture(Board.starting_position(), Color.BLACK, Color.WHITE) is None


def test_quiet_moves_in_starting_position() -> None:
    """16 pawn moves + 4 knight moves"""
    board = Board.starting_position()
    moves = quiet_moves(board, Color.BLACK)
    assert len(moves) == 20
    assert all(is_legal(board, move) for move in moves)
    assert not any(move.is_capture for move in moves)


def test_random_quiet_move_is_reproducible_when_seeded() -> None:
    board = Board.starting_position()
    first = AutomaticOpponent.seeded(42).choose_move(board, Color.BLACK, False)
    second = AutomaticOpponent.seeded(42).choose_move(board, Color.BLACK, False)
    assert first is not None
    assert first == second
    assert first in quiet_moves(board, Color.BLACK)


def test_choosing_does_not_change_the_board() -> None:
    board = Board.from_fen(ROOK_CHECK)
    before = deepcopy(board)
    choose_move(board, Color.BLACK, Color.WHITE, True, random.Random(0))
    assert board == before


def test_nothing_to_play() -> None:
    """A single blocked pawn: no capture, no quiet move"""
    board = Board.from_fen("8/8/8/8/8/p7/P7/8")
    assert choose_move(board, Color.BLACK, Color.WHITE, False, random.Random(0)) is None


def test_pawn_promotes_to_queen() -> None:
    board = Board.from_fen("8/8/8/8/8/8/p7/8")
    move = choose_move(board, Color.BLACK, Color.WHITE, False, random.Random(0))
    assert move is not None
    assert move.to_notation() == "BPa2-a1yQ"
