"""Orchestration of communication from API / command channel to business logic and persistence layers (and the reverse direction)."""

import threading
from typing import Callable, Optional
from uuid import UUID

from loguru import logger

from src.api.models import GameResponse, MoveRequest, MoveResponse, StartGameRequest
from src.core.exceptions import NoActiveGameError, RepositoryError
from src.core.models import GameRecord, MoveResult
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository
from src.engine.game import Game
from src.engine.opponent import AutomaticOpponent
from src.engine.square import BOARD_DIMENSIONS, Square


class GameService:
    """
    Owns the one game being played.

    Every request is handled under the same lock, so a request never sees the board halfway through another
    request's move (or the automatic side's search).
    A game still in progress in the repository (ex. before a restart of the server) is picked up again.
    """

    def __init__(
        self, repository: GameRepository, opponent: Optional[AutomaticOpponent] = None
    ) -> None:
        self.repo = repository
        self.opponent = opponent or AutomaticOpponent()
        self._lock = threading.Lock()
        self._game = Game.not_started(self.opponent)
        self._game_id: Optional[UUID] = None
        self._resume_latest_game()

    # -- Request handling ---
    def start_game(self, request: StartGameRequest) -> GameResponse:
        """(Re)start: any game in progress is dropped, its record included."""
        with self._lock:
            game = Game.new_game(request.color.value, self.opponent)
            _, game_id = self.repo.create_game(game.to_model())
            if self._game_id is not None:
                self.repo.delete_game(self._game_id)
            self._game, self._game_id = game, game_id
            return self._create_game_response()

    def request_state(self) -> GameResponse:
        """Snapshot of the current game. Only available while a game is in progress."""
        with self._lock:
            if not self._game.is_active:
                raise NoActiveGameError(
                    f"No game in progress. status: {self._game.status}"
                )
            return self._create_game_response()

    def submit_human_move(self, request: MoveRequest) -> MoveResponse:
        with self._lock:
            return self._play(lambda game: game.make_move(request.move))

    def request_automatic_move(self) -> MoveResponse:
        with self._lock:
            return self._play(lambda game: game.play_automatic_move())

    def resign(self) -> MoveResponse:
        with self._lock:
            return self._play(lambda game: game.resign())

    # -- Internal helpers --
    def _resume_latest_game(self) -> None:
        game_id = self.repo.latest_game_id()
        if game_id is None:
            return
        record = self.repo.get_game(game_id)
        if record is None or record.status != Status.IN_PROGRESS:
            return
        self._game = Game.from_model(record, self.opponent)
        self._game_id = game_id
        logger.info(f"Resumed game {game_id} after {len(record.moves)} moves")

    def _play(self, action: Callable[[Game], MoveResult]) -> MoveResponse:
        """
        Run the request on the game, then persist it.
        If storing fails the game is put back the way it was, as if the request never arrived.
        """
        snapshot = self._game.to_model()
        result = action(self._game)
        try:
            self._persist()
        except RepositoryError:
            self._game = Game.from_model(snapshot, self.opponent)
            raise
        return self._record(result)

    def _record(self, result: MoveResult) -> MoveResponse:
        """Answer with what happened"""
        logger.info(f"{result.token} {result.move or ''}".strip())
        return MoveResponse(
            token=result.token,
            move=result.move,
            winner=Color(result.winner) if result.winner else None,
            was_check=result.was_check,
            game=self._create_game_response(),
        )

    def _persist(self) -> None:
        if self._game_id is None:
            return
        stored = self.repo.update_game(self._game_id, self._game.to_model())
        if stored is None:
            raise RepositoryError(f"Game with game_id={self._game_id} not found.")

    def _create_game_response(self) -> GameResponse:
        """Convert info in GameRecord to a GameResponse."""
        model: GameRecord = self._game.to_model()
        board = self._game.board
        return GameResponse(
            game_id=self._game_id,
            status=model.status,
            human_color=Color(model.human_color),
            turn=model.turn,
            fen=model.board_fen,
            board=[
                [
                    board.piece(Square(file, rank)).to_code()
                    for file in range(1, BOARD_DIMENSIONS[0] + 1)
                ]
                for rank in range(1, BOARD_DIMENSIONS[1] + 1)
            ],
            move_history=model.moves,
            winner=Color(model.winner) if model.winner else None,
        )
