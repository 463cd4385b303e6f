"""
Type definitions used across layers
"""

from enum import StrEnum

# --- Color and PieceType here are the names used at the boundary (API / persistence).
# --- The engine has its own versions that include an option for empty squares (see src/engine/pieces.py)


class Status(StrEnum):
    NOT_STARTED = "not started"
    IN_PROGRESS = "in progress"
    CHECKMATE = "checkmate"
    RESIGNED = "resigned"


class Turn(StrEnum):
    HUMAN = "human"
    AUTOMATIC = "automatic"


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PieceType(StrEnum):
    PAWN = "pawn"
    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
    KING = "king"


class ResponseToken(StrEnum):
    """First line of every reply on the command channel"""

    OK = "OK"
    CHECK = "CHECK"
    MATE = "MATE"
    NOGAME = "NOGAME"
    OOT = "OOT"
    ILLMOVE = "ILLMOVE"
    INVFMT = "INVFMT"
    UNKCMD = "UNKCMD"
    # the request was fine, but the game could not be stored
    ERROR = "ERROR"


class IllegalReason(StrEnum):
    """Why a move got rejected. Only used for diagnostics, the client just sees ILLMOVE."""

    BAD_FORMAT = "bad format"
    WRONG_COLOR = "wrong color"
    OUT_OF_RANGE = "square out of range"
    MARKER_MISMATCH = "marker mismatch"
    SOURCE_MISMATCH = "piece not on source square"
    SHAPE = "piece cannot move like that"
    PATH_BLOCKED = "path blocked"
    DESTINATION_OCCUPIED = "destination occupied"
    CAPTURE_MISMATCH = "captured piece not on destination"
    OWN_PIECE_CAPTURE = "cannot capture own piece"
    MISSING_PROMOTION = "pawn must promote"
    INVALID_PROMOTION = "invalid promotion"
    SELF_CHECK = "move leaves own king in check"
