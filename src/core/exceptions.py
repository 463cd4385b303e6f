"""
Custom exceptions, shared by all layers.

Every exception knows the response token it gets reported as on the command channel.
None of them end the game: they are reported back and the session carries on.
"""

from src.core.shared_types import IllegalReason, ResponseToken


class GameError(Exception):
    """Top-level error for anything going wrong while playing"""

    token: ResponseToken = ResponseToken.ILLMOVE


# --- GAME STATE ---
class GameStateError(GameError):
    """Request does not fit the current state of the game"""

    token = ResponseToken.NOGAME


class NoActiveGameError(GameStateError):
    token = ResponseToken.NOGAME


class OutOfTurnError(GameStateError):
    token = ResponseToken.OOT


# --- MOVES ---
class IllegalMoveError(GameError):
    token = ResponseToken.ILLMOVE

    def __init__(self, message: str, reason: IllegalReason) -> None:
        super().__init__(message)
        self.reason = reason


class MalformedMoveError(IllegalMoveError):
    """The move text could not be decoded"""


class WrongMoverColorError(IllegalMoveError):
    def __init__(self, message: str) -> None:
        super().__init__(message, IllegalReason.WRONG_COLOR)


class SelfCheckError(IllegalMoveError):
    def __init__(self, message: str) -> None:
        super().__init__(message, IllegalReason.SELF_CHECK)


# --- REQUESTS ---
class InvalidRequestError(GameError):
    """Known command, but not formatted correctly"""

    token = ResponseToken.INVFMT


class UnknownCommandError(GameError):
    token = ResponseToken.UNKCMD


# --- PERSISTENCE ---
class RepositoryError(GameError):
    """Storing the game failed. The request is undone."""

    token = ResponseToken.ERROR
