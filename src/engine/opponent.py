"""
Move selection for the automatic side.

Deliberately weak, fixed priorities (no evaluation, no search):

1. In check? Play the first move found that gets the king out of check.
2. Otherwise, take the first capture found (scanning the target squares, then the pieces that could take there).
3. Otherwise, pick a random quiet move.

The scanning order is row-major (rank 1 first, a-file first), so which capture gets played when several are
available is fully determined by where the pieces stand.
"""

import random
from typing import Optional

from loguru import logger

from src.engine.board import Board
from src.engine.check import candidate_move, find_check_escape
from src.engine.moves import Move
from src.engine.pieces import Color
from src.engine.rules import is_legal
from src.engine.square import all_squares


def first_capture(board: Board, color: Color, opponent_color: Color) -> Optional[Move]:
    for to_square in all_squares():
        if board.piece(to_square).color != opponent_color:
            continue
        for from_square in board.locate_color(color):
            move = candidate_move(board, from_square, to_square)
            if move is not None and is_legal(board, move):
                return move
    return None


def quiet_moves(board: Board, color: Color) -> list[Move]:
    """All legal moves onto empty squares (target squares are the outer loop)"""
    moves: list[Move] = []
    for to_square in all_squares():
        if not board.piece(to_square).is_empty():
            continue
        for from_square in board.locate_color(color):
            move = candidate_move(board, from_square, to_square)
            if move is not None and is_legal(board, move):
                moves.append(move)
    return moves


def choose_move(
    board: Board,
    automatic_color: Color,
    opponent_color: Color,
    in_check: bool,
    rng: random.Random,
) -> Optional[Move]:
    """Returns None if the automatic side has nothing to play."""
    if in_check:
        escape = find_check_escape(board, automatic_color)
        if escape is not None:
            logger.debug(f"Escaping check with {escape.to_notation()}")
            return escape

    capture = first_capture(board, automatic_color, opponent_color)
    if capture is not None:
        logger.debug(f"Taking first capture found: {capture.to_notation()}")
        return capture

    candidates = quiet_moves(board, automatic_color)
    if not candidates:
        return None
    move = rng.choice(candidates)
    logger.debug(f"Random quiet move out of {len(candidates)}: {move.to_notation()}")
    return move


class AutomaticOpponent:
    """Holds the source of randomness, so a game can be replayed exactly when seeded."""

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random()

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "AutomaticOpponent":
        return cls(random.Random(seed))

    def choose_move(self, board: Board, color: Color, in_check: bool) -> Optional[Move]:
        return choose_move(board, color, color.opponent, in_check, self.rng)
