"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

# Chess board is always 8x8.
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = "abcdefgh"


@dataclass(frozen=True)
class Square:
    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (1,1) - (8,8)"""
        file = ord(sq[0]) - ord("a") + 1
        rank = ord(sq[1]) - ord("1") + 1
        return cls(file, rank)

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a') - 1)}{self.rank}"

    def is_within_bounds(self) -> bool:
        return (1 <= self.file <= BOARD_DIMENSIONS[0]) and (
            1 <= self.rank <= BOARD_DIMENSIONS[1]
        )

    def offset(self, df: int, dr: int) -> Square:
        return Square(self.file + df, self.rank + dr)


def all_squares() -> Iterator[Square]:
    """Row-major order: rank 1 first, and within a rank the a-file first."""
    for rank in range(1, BOARD_DIMENSIONS[1] + 1):
        for file in range(1, BOARD_DIMENSIONS[0] + 1):
            yield Square(file, rank)


def squares_between(from_square: Square, to_square: Square) -> list[Square]:
    """
    Squares strictly in between two squares on the same rank, file or diagonal.

    Any other pair of squares has no straight path between them, so nothing is returned.
    """
    df = to_square.file - from_square.file
    dr = to_square.rank - from_square.rank
    if not (df == 0 or dr == 0 or abs(df) == abs(dr)):
        return []

    step_file = (df > 0) - (df < 0)
    step_rank = (dr > 0) - (dr < 0)
    squares_found: list[Square] = []
    square = from_square.offset(step_file, step_rank)
    while square != to_square:
        squares_found.append(square)
        square = square.offset(step_file, step_rank)
    return squares_found
