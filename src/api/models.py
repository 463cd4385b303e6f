"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.core.shared_types import Color, ResponseToken, Status, Turn

PieceCode = str

# The command channel never accepts more than 20 characters per command (incl. the newline)
MAX_COMMAND_LENGTH = 20


# --- REQUEST MODELS ---
class StartGameRequest(BaseModel):
    color: Color


class MoveRequest(BaseModel):
    # taken verbatim: stray whitespace makes the move malformed
    move: str


class CommandRequest(BaseModel):
    """Raw text command, exactly as it would be written to the command channel"""

    command: str

    @field_validator("command")
    @classmethod
    def validate_command(cls, value: str) -> str:
        # clients posting JSON tend to leave out the newline that frames each command
        return value if value.endswith("\n") else f"{value}\n"


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: Optional[UUID]
    status: Status
    human_color: Color
    turn: Turn
    fen: str
    # ranks 1 to 8, each from the a-file to the h-file
    board: list[list[PieceCode]]
    move_history: list[str]
    winner: Optional[Color] = None


class MoveResponse(BaseModel):
    token: ResponseToken
    move: Optional[str] = None
    winner: Optional[Color] = None
    was_check: bool = False
    game: GameResponse
