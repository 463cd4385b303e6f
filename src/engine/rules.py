"""
Move legality: geometry, obstruction, capture and promotion rules.

Key idea: Use strategy pattern to define the movement shape of each piece type.

Validation never changes the board. Whether the move leaves your own king in check is
decided later (see src/engine/check.py)
"""

from typing import Callable, Optional, Protocol

from src.core.shared_types import IllegalReason
from src.engine.moves import Move
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import BOARD_DIMENSIONS, Square, squares_between


class Board(Protocol):
    """Just the parts the rules need"""

    def piece(self, square: Square) -> Piece: ...


PROMOTION_OPTIONS: list[PieceType] = [
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
]


# --- PAWN HELPERS ---
def pawn_direction(color: Color) -> int:
    """White moves UP the board, black moves DOWN"""
    return 1 if color == Color.WHITE else -1


def pawn_starting_rank(color: Color) -> int:
    return 2 if color == Color.WHITE else BOARD_DIMENSIONS[1] - 1


def promotion_rank(color: Color) -> int:
    return BOARD_DIMENSIONS[1] if color == Color.WHITE else 1


def is_path_clear(from_square: Square, to_square: Square, board: Board) -> bool:
    """Every square strictly between the two squares must be empty"""
    return all(
        board.piece(square).is_empty()
        for square in squares_between(from_square, to_square)
    )


# --- MOVEMENT RULES ---
def pawn_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """
    A pawn:
    - moves by a single square forward.
    - It can move by two in their first move (so when on their starting rank), but cannot jump over a piece
    - takes diagonally, one square forward
    - must promote when reaching the final rank
    """
    direction = pawn_direction(move.color)
    df = move.to_square.file - move.from_square.file
    dr = move.to_square.rank - move.from_square.rank

    if move.is_capture:
        if not (dr == direction and abs(df) == 1):
            return IllegalReason.SHAPE
    else:
        single_push = df == 0 and dr == direction
        double_push = (
            df == 0
            and dr == 2 * direction
            and move.from_square.rank == pawn_starting_rank(move.color)
        )
        if not (single_push or double_push):
            return IllegalReason.SHAPE
        if not is_path_clear(move.from_square, move.to_square, board):
            return IllegalReason.PATH_BLOCKED

    reaches_final_rank = move.to_square.rank == promotion_rank(move.color)
    if reaches_final_rank and move.promote_to is None:
        return IllegalReason.MISSING_PROMOTION
    if not reaches_final_rank and move.promote_to is not None:
        return IllegalReason.INVALID_PROMOTION
    return None


def knight_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """Knights always move such that |delta_rank| + |delta_file| = 3. They jump, so no path to check"""
    df = abs(move.to_square.file - move.from_square.file)
    dr = abs(move.to_square.rank - move.from_square.rank)
    if (df, dr) not in [(1, 2), (2, 1)]:
        return IllegalReason.SHAPE
    return None


def bishop_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    df = abs(move.to_square.file - move.from_square.file)
    dr = abs(move.to_square.rank - move.from_square.rank)
    if not (df == dr and df != 0):
        return IllegalReason.SHAPE
    if not is_path_clear(move.from_square, move.to_square, board):
        return IllegalReason.PATH_BLOCKED
    return None


def rook_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """Rooks move either horizontally or vertically"""
    stays_on_file = move.to_square.file == move.from_square.file
    stays_on_rank = move.to_square.rank == move.from_square.rank
    if stays_on_file == stays_on_rank:
        return IllegalReason.SHAPE
    if not is_path_clear(move.from_square, move.to_square, board):
        return IllegalReason.PATH_BLOCKED
    return None


def queen_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    as_bishop = bishop_rule(move, board)
    if as_bishop != IllegalReason.SHAPE:
        return as_bishop
    return rook_rule(move, board)


def king_rule(move: Move, board: Board) -> Optional[IllegalReason]:
    """The king can move by a single square at the time. No castling."""
    df = abs(move.to_square.file - move.from_square.file)
    dr = abs(move.to_square.rank - move.from_square.rank)
    if max(df, dr) != 1:
        return IllegalReason.SHAPE
    return None


# -- STRATEGY PATTERN: MOVEMENT RULES ---
MovementRuleFn = Callable[[Move, Board], Optional[IllegalReason]]
MOVEMENT_RULES: dict[PieceType, MovementRuleFn] = {
    PieceType.PAWN: pawn_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.KING: king_rule,
}


# --- VALIDATION ---
def validate_move(board: Board, move: Move) -> Optional[IllegalReason]:
    """
    Decide whether the move is allowed on the given board
    ----

    Returns None for a legal move, otherwise the first rule it breaks:

    1. squares on the board, target square empty (quiet move) or holding the declared opponent's piece (capture)
    2. the declared piece stands on the starting square
    3. movement shape + path of that piece type
    4. promotion only by a pawn, into a knight, bishop, rook or queen
    """
    if not (move.from_square.is_within_bounds() and move.to_square.is_within_bounds()):
        return IllegalReason.OUT_OF_RANGE

    target = board.piece(move.to_square)
    if move.captured is not None:
        if move.captured.is_empty():
            return IllegalReason.CAPTURE_MISMATCH
        if move.captured.color == move.color:
            return IllegalReason.OWN_PIECE_CAPTURE
        if target != move.captured:
            return IllegalReason.CAPTURE_MISMATCH
    elif not target.is_empty():
        return IllegalReason.DESTINATION_OCCUPIED

    if board.piece(move.from_square) != move.moving_piece:
        return IllegalReason.SOURCE_MISMATCH

    movement_rule = MOVEMENT_RULES.get(move.piece_type)
    if movement_rule is None:
        return IllegalReason.SOURCE_MISMATCH
    reason = movement_rule(move, board)
    if reason is not None:
        return reason

    if move.promote_to is not None and (
        move.piece_type != PieceType.PAWN or move.promote_to not in PROMOTION_OPTIONS
    ):
        return IllegalReason.INVALID_PROMOTION
    return None


def is_legal(board: Board, move: Move) -> bool:
    return validate_move(board, move) is None
