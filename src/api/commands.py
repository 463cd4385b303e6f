"""
Text command channel
----

Each command is one line (newline terminated, at most 20 characters including the newline):

* "00 W" / "00 B": start a new game, the human playing white / black
* "01": display the board
* "02 <move>": the human's move, ex. "02 WPe2-e4"
* "03": let the automatic side move
* "04": resign

Every reply starts with a response token (OK, CHECK, MATE, NOGAME, OOT, ILLMOVE, INVFMT, UNKCMD, or ERROR when
the game could not be stored).
A finished game adds the winner on a second line, ex. "MATE\\nWHITE WINS\\n".
"""

from loguru import logger

from src.api.models import (
    MAX_COMMAND_LENGTH,
    MoveRequest,
    MoveResponse,
    StartGameRequest,
)
from src.api.render import render_board
from src.core.exceptions import GameError, InvalidRequestError, UnknownCommandError
from src.core.shared_types import Color, ResponseToken
from src.services.game_service import GameService

START_COMMANDS: dict[str, Color] = {"00 W": Color.WHITE, "00 B": Color.BLACK}
DISPLAY_COMMAND = "01"
MOVE_COMMAND = "02"
AUTOMATIC_MOVE_COMMAND = "03"
RESIGN_COMMAND = "04"


class CommandHandler:
    def __init__(self, service: GameService, ansi_colors: bool = True) -> None:
        self.service = service
        self.ansi_colors = ansi_colors

    def handle(self, raw: str) -> str:
        """Never raises for a bad command or a refused move: the problem is reported as the reply's token."""
        try:
            return self._dispatch(raw)
        except GameError as error:
            logger.info(f"{raw!r} refused with {error.token}: {error}")
            return f"{error.token}\n"

    def _dispatch(self, raw: str) -> str:
        if len(raw) > MAX_COMMAND_LENGTH or not raw.endswith("\n"):
            raise UnknownCommandError(f"Command {raw!r} is not a single line of at most {MAX_COMMAND_LENGTH} characters.")
        command = raw[:-1]

        for prefix, color in START_COMMANDS.items():
            if command.startswith(prefix):
                self._assert_exact(command, prefix)
                self.service.start_game(StartGameRequest(color=color))
                return f"{ResponseToken.OK}\n"

        if command.startswith(DISPLAY_COMMAND):
            self._assert_exact(command, DISPLAY_COMMAND)
            state = self.service.request_state()
            return render_board(state.board, self.ansi_colors)

        if command.startswith(MOVE_COMMAND):
            if command[len(MOVE_COMMAND) : len(MOVE_COMMAND) + 1] != " ":
                raise InvalidRequestError(f"Command {command!r} should be '{MOVE_COMMAND} <move>'.")
            response = self.service.submit_human_move(
                MoveRequest(move=command[len(MOVE_COMMAND) + 1 :])
            )
            return format_reply(response)

        if command.startswith(AUTOMATIC_MOVE_COMMAND):
            self._assert_exact(command, AUTOMATIC_MOVE_COMMAND)
            return format_reply(self.service.request_automatic_move())

        if command.startswith(RESIGN_COMMAND):
            self._assert_exact(command, RESIGN_COMMAND)
            return format_reply(self.service.resign())

        raise UnknownCommandError(f"Unknown command {command!r}.")

    def _assert_exact(self, command: str, expected: str) -> None:
        if command != expected:
            raise InvalidRequestError(
                f"Command {command!r} should be exactly {expected!r}."
            )


def format_reply(response: MoveResponse) -> str:
    if response.winner is None:
        return f"{response.token}\n"
    return f"{response.token}\n{response.winner.value.upper()} WINS\n"
