"""
The Game class will be the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn:
gating whose turn it is, validating the human's moves, letting the automatic side pick its move,
and deciding when the game is over.
"""

from dataclasses import dataclass, field
from typing import Optional, Self

from loguru import logger

from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    NoActiveGameError,
    OutOfTurnError,
    SelfCheckError,
    WrongMoverColorError,
)
from src.core.models import GameRecord, MoveResult
from src.core.shared_types import ResponseToken, Status, Turn
from src.engine.board import Board
from src.engine.check import is_in_check, is_in_checkmate, simulate_and_test
from src.engine.moves import Move
from src.engine.opponent import AutomaticOpponent
from src.engine.pieces import AVAILABLE_COLOR_NAMES, CODE_TO_COLOR, Color
from src.engine.rules import validate_move


def parse_color(color: str) -> Color:
    """Accepts the color name ('white') or its code ('W')"""
    if color in CODE_TO_COLOR:
        return CODE_TO_COLOR[color]
    if color.upper() not in AVAILABLE_COLOR_NAMES:
        raise GameStateError(
            f"Unknown color {color!r}. Pick one from {','.join([c.lower() for c in AVAILABLE_COLOR_NAMES])}."
        )
    return Color[color.upper()]


def color_name(color: Optional[Color]) -> Optional[str]:
    return color.name.lower() if color is not None else None


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    human_color: Color
    status: Status
    turn: Turn
    automatic_in_check: bool = False
    moves: list[str] = field(default_factory=list)
    winner: Optional[Color] = None
    opponent: AutomaticOpponent = field(
        default_factory=AutomaticOpponent, compare=False, repr=False
    )

    @classmethod
    def not_started(cls, opponent: Optional[AutomaticOpponent] = None) -> Self:
        """Placeholder before the first 'start' request. Every move request is refused."""
        return cls(
            board=Board.starting_position(),
            human_color=Color.WHITE,
            status=Status.NOT_STARTED,
            turn=Turn.HUMAN,
            opponent=opponent or AutomaticOpponent(),
        )

    @classmethod
    def new_game(cls, color: str, opponent: Optional[AutomaticOpponent] = None) -> Self:
        """Start a new game with the human playing the pieces with the indicated color. White moves first."""
        human_color = parse_color(color)
        game = cls(
            board=Board.starting_position(),
            human_color=human_color,
            status=Status.IN_PROGRESS,
            turn=Turn.HUMAN if human_color == Color.WHITE else Turn.AUTOMATIC,
            opponent=opponent or AutomaticOpponent(),
        )
        logger.info(f"New game started, human plays {color_name(human_color)}")
        return game

    @classmethod
    def from_model(
        cls, model: GameRecord, opponent: Optional[AutomaticOpponent] = None
    ) -> Self:
        """Define how to construct a Game from the information the Service layer actually has"""
        status_name = model.status.replace(" ", "_").upper()
        if status_name not in Status.__members__:
            raise GameStateError(
                f"Invalid status code: {model.status!r}. \nPick one from {','.join([status.value for status in Status])}"
            )

        return cls(
            board=Board.from_fen(model.board_fen),
            human_color=parse_color(model.human_color),
            status=Status[status_name],
            turn=Turn(model.turn),
            automatic_in_check=model.automatic_in_check,
            moves=list(model.moves),
            winner=parse_color(model.winner) if model.winner else None,
            opponent=opponent or AutomaticOpponent(),
        )

    def to_model(self) -> GameRecord:
        """Encode back into a format the Service layer uses"""
        return GameRecord(
            human_color=self.human_color.name.lower(),
            status=self.status.value,
            turn=self.turn.value,
            board_fen=self.board.to_fen(),
            moves=list(self.moves),
            automatic_in_check=self.automatic_in_check,
            winner=color_name(self.winner),
        )

    @property
    def automatic_color(self) -> Color:
        return self.human_color.opponent

    @property
    def is_active(self) -> bool:
        return self.status == Status.IN_PROGRESS

    def make_move(self, notation: str) -> MoveResult:
        """Decode the human's move from wire notation, then attempt it"""
        self._assert_active()
        self._assert_turn(Turn.HUMAN)
        return self.make_human_move(Move.from_notation(notation))

    def make_human_move(self, move: Move) -> MoveResult:
        """
        Attempt a move of the human player
        -----

        1. the game must be in progress and it must be the human's turn
        2. the move must be made with the human's pieces
        3. the move must be legal on the current board
        4. the move may not leave the human's king in check

        Any failure raises, and leaves the board and the turn untouched.
        """
        self._assert_active()
        self._assert_turn(Turn.HUMAN)

        if move.color != self.human_color:
            raise WrongMoverColorError(
                f"You play the {color_name(self.human_color)} pieces, not {color_name(move.color)}."
            )

        reason = validate_move(self.board, move)
        if reason is not None:
            logger.debug(f"Rejected {move.to_notation()}: {reason}")
            raise IllegalMoveError(f"Move not allowed: {move.to_notation()}", reason)

        if not simulate_and_test(self.board, move, self.automatic_color):
            logger.debug(f"Rejected {move.to_notation()}: own king left in check")
            raise SelfCheckError(
                f"Move not allowed: {move.to_notation()} leaves your king in check"
            )

        self._play(move)
        result = self._update_game_status(self.human_color, move)
        if result.token == ResponseToken.CHECK:
            # remembered so the automatic side escapes first on its next turn
            self.automatic_in_check = True
        self.turn = Turn.AUTOMATIC
        return result

    def play_automatic_move(self) -> MoveResult:
        """Let the automatic side pick and play its move"""
        self._assert_active()
        self._assert_turn(Turn.AUTOMATIC)

        move = self.opponent.choose_move(
            self.board, self.automatic_color, self.automatic_in_check
        )
        self.automatic_in_check = False
        if move is None:
            # TODO: report stalemate once a distinct outcome for it is agreed on with the clients
            logger.warning(
                f"Automatic side ({color_name(self.automatic_color)}) has no move to play"
            )
        else:
            self._play(move)

        result = self._update_game_status(self.automatic_color, move)
        self.turn = Turn.HUMAN
        return result

    def resign(self) -> MoveResult:
        """The human gives up. Only allowed when it is the human's turn."""
        self._assert_active()
        self._assert_turn(Turn.HUMAN)

        was_check = is_in_check(self.board, self.human_color) or is_in_check(
            self.board, self.automatic_color
        )
        self.status = Status.RESIGNED
        self.winner = self.automatic_color
        self.turn = Turn.AUTOMATIC
        logger.info(f"Human resigned, {color_name(self.winner)} wins")
        return MoveResult(
            token=ResponseToken.OK, winner=color_name(self.winner), was_check=was_check
        )

    # -- PRIVATE HELPERS ---
    def _assert_active(self) -> None:
        if not self.is_active:
            raise NoActiveGameError(f"No game in progress. status: {self.status}")

    def _assert_turn(self, turn: Turn) -> None:
        """You must wait for your turn before making a move."""
        if self.turn != turn:
            raise OutOfTurnError(
                f"It is not your turn. Waiting for the {self.turn} side to move first."
            )

    def _play(self, move: Move) -> None:
        self.board.apply_move(move)
        self.moves.append(move.to_notation())

    def _update_game_status(self, attacker: Color, move: Optional[Move]) -> MoveResult:
        """Did the move just played by `attacker` mate, check, or neither?"""
        notation = move.to_notation() if move is not None else None
        if is_in_checkmate(self.board, attacker):
            self.status = Status.CHECKMATE
            self.winner = attacker
            logger.info(f"Checkmate, {color_name(attacker)} wins")
            return MoveResult(
                token=ResponseToken.MATE, move=notation, winner=color_name(attacker)
            )

        if is_in_check(self.board, attacker.opponent):
            return MoveResult(token=ResponseToken.CHECK, move=notation)

        return MoveResult(token=ResponseToken.OK, move=notation)
