"""Defines the types of chess pieces and their two-letter codes (e.g. 'WP' for a white pawn)"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self


class PieceType(Enum):
    EMPTY = auto()
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    NONE = auto()
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        if self == Color.WHITE:
            return Color.BLACK
        if self == Color.BLACK:
            return Color.WHITE
        return Color.NONE


AVAILABLE_COLOR_NAMES = [color.name for color in Color if color != Color.NONE]

CODE_TO_COLOR: dict[str, Color] = {"W": Color.WHITE, "B": Color.BLACK}
COLOR_TO_CODE: dict[Color, str] = {value: key for key, value in CODE_TO_COLOR.items()}

CODE_TO_PIECE: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}
PIECE_TO_CODE: dict[PieceType, str] = {value: key for key, value in CODE_TO_PIECE.items()}

FEN_TO_PIECE: dict[str, PieceType] = {
    code.lower(): piece_type for code, piece_type in CODE_TO_PIECE.items()
}
PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# How an empty square is written when the board is displayed
EMPTY_CODE = "**"


@dataclass
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def empty(cls) -> Self:
        return cls(PieceType.EMPTY, Color.NONE)

    @classmethod
    def from_code(cls, code: str) -> Self:
        """'WP' -> white pawn, 'BK' -> black king. Raises KeyError for unknown letters."""
        if code == EMPTY_CODE:
            return cls.empty()
        return cls(CODE_TO_PIECE[code[1]], CODE_TO_COLOR[code[0]])

    def to_code(self) -> str:
        if self.is_empty():
            return EMPTY_CODE
        return f"{COLOR_TO_CODE[self.color]}{PIECE_TO_CODE[self.type]}"

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def is_empty(self) -> bool:
        return self.type == PieceType.EMPTY

    def promote_to(self, new_type: PieceType) -> None:
        self.type = new_type
