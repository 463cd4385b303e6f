"""
Definition of a move, and its encoding in the wire notation.

Wire notation
----
* quiet move: <color><piece><from>-<to>, ex. "WPa2-a4"
* capture: append x<color><piece> of the captured piece, ex. "BNb8-c6xWP"
* promotion: append y<piece>, ex. "WPa7-a8yQ". Combines with a capture: "BPb2-a1xWNyQ"

The color may be repeated in the promotion suffix ("WPa7-a8yWQ"), as long as it is the mover's color.

Legality is checked elsewhere (see src/engine/rules.py). Decoding only checks the text is well formed.
"""

from dataclasses import dataclass
from typing import Optional, Self

from src.core.exceptions import MalformedMoveError
from src.core.shared_types import IllegalReason
from src.engine.pieces import (
    CODE_TO_COLOR,
    CODE_TO_PIECE,
    COLOR_TO_CODE,
    PIECE_TO_CODE,
    Color,
    Piece,
    PieceType,
)
from src.engine.square import FILE_NAMES, Square

CAPTURE_MARKER = "x"
PROMOTION_MARKER = "y"
SQUARE_SEPARATOR = "-"


@dataclass
class Move:
    """A move as declared by the player making it"""

    from_square: Square
    to_square: Square
    color: Color
    piece_type: PieceType
    captured: Optional[Piece] = None
    promote_to: Optional[PieceType] = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    @property
    def moving_piece(self) -> Piece:
        return Piece(self.piece_type, self.color)

    @classmethod
    def from_notation(cls, notation: str) -> Self:
        """
        Decode the wire notation.
        ---

        Raises MalformedMoveError when the text does not describe a move at all.
        """
        if len(notation) < 7:
            raise MalformedMoveError(
                f"Move {notation!r} is too short.", IllegalReason.BAD_FORMAT
            )

        color = _decode_color(notation[0], notation)
        piece_type = _decode_piece_type(notation[1], notation)
        from_square = _decode_square(notation[2:4], notation)
        if notation[4] != SQUARE_SEPARATOR:
            raise MalformedMoveError(
                f"Expected {SQUARE_SEPARATOR!r} between the squares of {notation!r}.",
                IllegalReason.MARKER_MISMATCH,
            )
        to_square = _decode_square(notation[5:7], notation)
        move = cls(from_square, to_square, color, piece_type)

        suffix = notation[7:]
        if suffix.startswith(CAPTURE_MARKER):
            if len(suffix) < 3:
                raise MalformedMoveError(
                    f"Capture in {notation!r} does not name the captured piece.",
                    IllegalReason.BAD_FORMAT,
                )
            move.captured = Piece(
                _decode_piece_type(suffix[2], notation),
                _decode_color(suffix[1], notation),
            )
            suffix = suffix[3:]

        if suffix.startswith(PROMOTION_MARKER):
            promotion = suffix[1:]
            if len(promotion) == 2:
                # the long form repeats the color of the pawn
                if _decode_color(promotion[0], notation) != color:
                    raise MalformedMoveError(
                        f"Promotion color in {notation!r} differs from the pawn's color.",
                        IllegalReason.WRONG_COLOR,
                    )
                promotion = promotion[1:]
            if len(promotion) != 1:
                raise MalformedMoveError(
                    f"Promotion in {notation!r} must name a single piece.",
                    IllegalReason.BAD_FORMAT,
                )
            move.promote_to = _decode_piece_type(promotion, notation)
            suffix = ""

        if suffix:
            raise MalformedMoveError(
                f"Unexpected {suffix!r} at the end of {notation!r}.",
                IllegalReason.MARKER_MISMATCH,
            )
        return move

    def to_notation(self) -> str:
        notation = (
            f"{COLOR_TO_CODE[self.color]}{PIECE_TO_CODE[self.piece_type]}"
            f"{self.from_square.to_algebraic()}{SQUARE_SEPARATOR}{self.to_square.to_algebraic()}"
        )
        if self.captured is not None:
            notation += f"{CAPTURE_MARKER}{self.captured.to_code()}"
        if self.promote_to is not None:
            notation += f"{PROMOTION_MARKER}{PIECE_TO_CODE[self.promote_to]}"
        return notation


# --- DECODING HELPERS ---
def _decode_color(character: str, notation: str) -> Color:
    if character not in CODE_TO_COLOR:
        raise MalformedMoveError(
            f"Unknown color {character!r} in {notation!r}.", IllegalReason.BAD_FORMAT
        )
    return CODE_TO_COLOR[character]


def _decode_piece_type(character: str, notation: str) -> PieceType:
    if character not in CODE_TO_PIECE:
        raise MalformedMoveError(
            f"Unknown piece {character!r} in {notation!r}.", IllegalReason.BAD_FORMAT
        )
    return CODE_TO_PIECE[character]


def _decode_square(text: str, notation: str) -> Square:
    if text[0] not in FILE_NAMES or text[1] not in "12345678":
        raise MalformedMoveError(
            f"Square {text!r} in {notation!r} is not on the board.",
            IllegalReason.OUT_OF_RANGE,
        )
    return Square.from_algebraic(text)
