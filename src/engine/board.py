"""The Game board: the configuration of pieces on the 64 squares, and the primitive updates made to it"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Self

from src.engine.moves import Move
from src.engine.pieces import Color, Piece, PieceType
from src.engine.square import BOARD_DIMENSIONS, Square, all_squares

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_FEN = "/".join(["8"] * BOARD_DIMENSIONS[1])


@dataclass
class Board:
    position: dict[Square, Piece]

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_POSITION_FEN)

    @classmethod
    def empty(cls) -> Self:
        return cls.from_fen(EMPTY_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the piece placement part of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.
        """
        position: dict[Square, Piece] = {}
        fen_by_ranks = fen_str.split("/")
        for rank_idx, fen_one_rank in enumerate(fen_by_ranks):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - rank_idx
            # ... but the first character is the a-file, so reads in normal direction
            file = 1
            for character in fen_one_rank:
                if character.isalpha():
                    position[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    for _ in range(int(character)):
                        position[Square(file, rank)] = Piece.empty()
                        file += 1
        return cls(position)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1], 0, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            piece = self.piece(Square(file, rank))

            if not piece.is_empty():
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    def initialize(self) -> None:
        """Reset to the standard starting position (in place)"""
        self.position = Board.starting_position().position

    # --- READ ACCESS ---
    def piece(self, square: Square) -> Piece:
        return self.position[square]

    def squares(self) -> Iterator[Square]:
        return all_squares()

    def locate_color(self, color: Color) -> list[Square]:
        """Squares holding a piece of the given color, in row-major order"""
        return [square for square in all_squares() if self.piece(square).color == color]

    def locate_king(self, color: Color) -> Square | None:
        return next(
            (
                square
                for square in all_squares()
                if self.piece(square) == Piece(PieceType.KING, color)
            ),
            None,
        )

    def count_pieces(self) -> int:
        return sum(1 for piece in self.position.values() if not piece.is_empty())

    # --- UPDATES ---
    def place_piece(self, piece: Piece, square: Square) -> None:
        self.position[square] = piece

    def remove_piece(self, square: Square) -> None:
        self.position[square] = Piece.empty()

    def move_piece(self, move: Move) -> None:
        """Update the position on the board. Whatever stood on the target square is overwritten."""
        piece_that_moved = self.piece(move.from_square)
        self.position[move.from_square] = Piece.empty()
        self.position[move.to_square] = piece_that_moved

    def promote_piece(self, square: Square, to: PieceType) -> None:
        self.piece(square).promote_to(to)

    def apply_move(self, move: Move) -> None:
        """The full move: the piece arrives on the target square and, for a promotion, changes type."""
        self.move_piece(move)
        if move.promote_to is not None:
            self.promote_piece(move.to_square, to=move.promote_to)

    @contextmanager
    def simulated(self, move: Move) -> Iterator[Self]:
        """
        Temporarily make the move (without promoting) and put both squares back exactly as they were on exit.

        The piece objects themselves are restored, so the board compares equal before and after.
        """
        moving_piece = self.piece(move.from_square)
        target_piece = self.piece(move.to_square)
        self.move_piece(move)
        try:
            yield self
        finally:
            self.position[move.from_square] = moving_piece
            self.position[move.to_square] = target_piece
