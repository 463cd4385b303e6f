"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameRecord easier to read
PieceColor = str
MoveNotation = str


@dataclass
class GameRecord:
    """Transport-safe representation of the game, used between API, Service, DB, and Game layers."""

    human_color: PieceColor
    status: str
    turn: str
    board_fen: str
    moves: list[MoveNotation] = field(default_factory=list)
    automatic_in_check: bool = False
    winner: Optional[PieceColor] = None


@dataclass
class MoveResult:
    """What happened after a request was accepted"""

    token: str
    move: Optional[MoveNotation] = None
    winner: Optional[PieceColor] = None
    was_check: bool = False
