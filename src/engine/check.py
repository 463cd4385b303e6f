"""
Check and checkmate detection.

A king is in check when an opposing piece could legally capture it. Rather than keeping a separate
attack map, the same validation used for the players' own moves is asked: "could this piece take the king?"

Checking if a move gets you (out of) check is done by simulating it on the board, testing, and putting the
pieces back. The board is always identical before and after.
"""

from typing import Iterator, Optional

from src.engine.board import Board
from src.engine.moves import Move
from src.engine.pieces import Color, Piece, PieceType
from src.engine.rules import is_legal, promotion_rank
from src.engine.square import Square, all_squares


def candidate_move(board: Board, from_square: Square, to_square: Square) -> Optional[Move]:
    """
    The move the piece on `from_square` would make to `to_square`: a quiet move onto an empty square,
    a capture of whatever stands there otherwise.

    A pawn arriving on the final rank is promoted into a queen.
    Not checked for legality. Returns None for an empty starting square.
    """
    piece = board.piece(from_square)
    if piece.is_empty():
        return None

    promote_to = (
        PieceType.QUEEN
        if piece.type == PieceType.PAWN and to_square.rank == promotion_rank(piece.color)
        else None
    )
    target = board.piece(to_square)
    captured = None if target.is_empty() else Piece(target.type, target.color)
    return Move(
        from_square=from_square,
        to_square=to_square,
        color=piece.color,
        piece_type=piece.type,
        captured=captured,
        promote_to=promote_to,
    )


def legal_candidate_moves(board: Board, from_square: Square) -> Iterator[Move]:
    """Every legal move of the piece on the square, destinations in row-major order (own king safety NOT checked)"""
    for to_square in all_squares():
        move = candidate_move(board, from_square, to_square)
        if move is not None and is_legal(board, move):
            yield move


def is_in_check(board: Board, king_color: Color) -> bool:
    """Can any of the opponent's pieces capture the king with the given color?"""
    king_square = board.locate_king(king_color)
    if king_square is None:
        return False

    for square in board.locate_color(king_color.opponent):
        attack = candidate_move(board, square, king_square)
        if attack is not None and is_legal(board, attack):
            return True
    return False


def simulate_and_test(board: Board, move: Move, attacker_color: Color) -> bool:
    """
    Make the move on the board, test whether the king of the side NOT playing `attacker_color` is safe, undo the move.

    Returns True if that king is not attacked after the move.
    """
    with board.simulated(move):
        return not is_in_check(board, attacker_color.opponent)


def find_check_escape(board: Board, color: Color) -> Optional[Move]:
    """
    First move (sources in row-major order, then destinations in row-major order) by which the player with the
    given color ends up with their king not being attacked.
    """
    for from_square in board.locate_color(color):
        for move in legal_candidate_moves(board, from_square):
            if simulate_and_test(board, move, color.opponent):
                return move
    return None


def is_in_checkmate(board: Board, attacker_color: Color) -> bool:
    """The opponent of `attacker_color` is in check, and has no move left to get out of it."""
    defender_color = attacker_color.opponent
    if not is_in_check(board, defender_color):
        return False
    return find_check_escape(board, defender_color) is None
