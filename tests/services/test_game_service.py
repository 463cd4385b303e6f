"""Unit tests for src/services/game_service.py"""

import threading
from typing import Iterator
from uuid import UUID, uuid4

import pytest

from src.api.models import GameResponse, MoveRequest, MoveResponse, StartGameRequest
from src.core.exceptions import (
    GameError,
    IllegalMoveError,
    NoActiveGameError,
    OutOfTurnError,
    RepositoryError,
)
from src.core.models import GameRecord
from src.core.shared_types import Color, ResponseToken, Status, Turn
from src.engine.board import STARTING_POSITION_FEN
from src.engine.opponent import AutomaticOpponent
from src.services.game_service import GameService


# --- MOCK DEPENDENCIES ----
class MockRepository:
    """Mock the GameRepository using a dictionary of game records."""

    def __init__(self) -> None:
        self._games: dict[UUID, GameRecord] = {}

    def create_game(self, game: GameRecord) -> tuple[GameRecord, UUID]:
        game_id = uuid4()
        self._games[game_id] = game
        return game, game_id

    def get_game(self, game_id: UUID) -> GameRecord | None:
        return self._games.get(game_id)

    def update_game(self, game_id: UUID, game: GameRecord) -> GameRecord | None:
        if game_id not in self._games:
            return None
        # re-insert, so the most recently stored game comes last
        del self._games[game_id]
        self._games[game_id] = game
        return game

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        return self._games.pop(game_id, None)

    def latest_game_id(self) -> UUID | None:
        return next(reversed(self._games), None)

    def clear(self) -> None:
        """Clear the repository (useful in between tests)"""
        self._games.clear()


@pytest.fixture
def mock_repository() -> Iterator[MockRepository]:
    """Ensures to clear the repository between tests"""
    repo = MockRepository()
    try:
        yield repo
    finally:
        repo.clear()


@pytest.fixture
def service(mock_repository: MockRepository, seeded_opponent: AutomaticOpponent) -> GameService:
    return GameService(mock_repository, seeded_opponent)


# --- START ---
def test_start_game(service: GameService, mock_repository: MockRepository) -> None:
    """New game is persisted, and the response describes the starting position"""
    response = service.start_game(StartGameRequest(color=Color.WHITE))

    assert isinstance(response, GameResponse)
    assert isinstance(response.game_id, UUID)
    assert response.status == Status.IN_PROGRESS
    assert response.human_color == Color.WHITE
    assert response.turn == Turn.HUMAN
    assert response.fen == STARTING_POSITION_FEN
    assert response.move_history == []
    assert response.winner is None

    # rank 1 comes first
    assert response.board[0] == ["WR", "WN", "WB", "WQ", "WK", "WB", "WN", "WR"]
    assert response.board[1] == ["WP"] * 8
    assert response.board[4] == ["**"] * 8
    assert response.board[7] == ["BR", "BN", "BB", "BQ", "BK", "BB", "BN", "BR"]

    stored = mock_repository.get_game(response.game_id)
    assert stored is not None
    assert stored.board_fen == STARTING_POSITION_FEN
    assert stored.status == Status.IN_PROGRESS


def test_restart_discards_previous_game(service: GameService, mock_repository: MockRepository) -> None:
    first = service.start_game(StartGameRequest(color=Color.WHITE))
    service.submit_human_move(MoveRequest(move="WPe2-e4"))

    second = service.start_game(StartGameRequest(color=Color.BLACK))
    assert second.game_id != first.game_id
    assert second.turn == Turn.AUTOMATIC
    assert second.move_history == []
    assert second.fen == STARTING_POSITION_FEN

    assert first.game_id is not None
    assert mock_repository.get_game(first.game_id) is None
    assert second.game_id is not None
    assert mock_repository.latest_game_id() == second.game_id


# --- STATE ---
def test_no_state_before_start(service: GameService) -> None:
    with pytest.raises(NoActiveGameError):
        service.request_state()


def test_state_after_move(service: GameService) -> None:
    service.start_game(StartGameRequest(color=Color.WHITE))
    service.submit_human_move(MoveRequest(move="WPe2-e4"))
    state = service.request_state()
    assert state.move_history == ["WPe2-e4"]
    assert state.turn == Turn.AUTOMATIC
    assert state.board[1][4] == "**"
    assert state.board[3][4] == "WP"


# --- MOVES ---
def test_move_before_start(service: GameService) -> None:
    with pytest.raises(NoActiveGameError):
        service.submit_human_move(MoveRequest(move="WPe2-e4"))
    with pytest.raises(NoActiveGameError):
        service.request_automatic_move()


def test_human_then_automatic_move(service: GameService, mock_repository: MockRepository) -> None:
    started = service.start_game(StartGameRequest(color=Color.WHITE))

    response = service.submit_human_move(MoveRequest(move="WPe2-e4"))
    assert isinstance(response, MoveResponse)
    assert response.token == ResponseToken.OK
    assert response.move == "WPe2-e4"

    answer = service.request_automatic_move()
    assert answer.token == ResponseToken.OK
    assert answer.move is not None
    assert answer.move.startswith("B")
    assert answer.game.turn == Turn.HUMAN
    assert answer.game.move_history == ["WPe2-e4", answer.move]

    assert started.game_id is not None
    stored = mock_repository.get_game(started.game_id)
    assert stored is not None
    assert stored.moves == ["WPe2-e4", answer.move]
    assert stored.turn == Turn.HUMAN


def test_refused_moves_are_not_persisted(service: GameService, mock_repository: MockRepository) -> None:
    started = service.start_game(StartGameRequest(color=Color.WHITE))
    with pytest.raises(IllegalMoveError):
        service.submit_human_move(MoveRequest(move="WPe2-e5"))

    service.submit_human_move(MoveRequest(move="WPe2-e4"))
    with pytest.raises(OutOfTurnError):
        service.submit_human_move(MoveRequest(move="WPd2-d4"))

    assert started.game_id is not None
    stored = mock_repository.get_game(started.game_id)
    assert stored is not None
    assert stored.moves == ["WPe2-e4"]


def test_errors_are_game_errors(service: GameService) -> None:
    """Make sure the service propagates the domain exceptions."""
    service.start_game(StartGameRequest(color=Color.WHITE))
    with pytest.raises(GameError):
        service.submit_human_move(MoveRequest(move="nonsense"))


def test_lost_record(service: GameService, mock_repository: MockRepository) -> None:
    """A move that cannot be stored is undone: the same move can be sent again"""
    before = service.start_game(StartGameRequest(color=Color.WHITE))
    mock_repository.clear()
    with pytest.raises(RepositoryError) as exc:
        service.submit_human_move(MoveRequest(move="WPe2-e4"))
    assert exc.value.token == ResponseToken.ERROR

    after = service.request_state()
    assert after.turn == Turn.HUMAN
    assert after.move_history == []
    assert after.board == before.board
    assert after.fen == STARTING_POSITION_FEN

    with pytest.raises(RepositoryError):
        service.submit_human_move(MoveRequest(move="WPe2-e4"))


def test_lost_record_during_automatic_move(
    service: GameService, mock_repository: MockRepository
) -> None:
    service.start_game(StartGameRequest(color=Color.BLACK))
    mock_repository.clear()
    with pytest.raises(RepositoryError):
        service.request_automatic_move()
    state = service.request_state()
    assert state.turn == Turn.AUTOMATIC
    assert state.fen == STARTING_POSITION_FEN


# --- RESUME ---
def test_resume_game_in_progress(mock_repository: MockRepository) -> None:
    """A new service (ex. after a restart) carries on with the stored game"""
    first = GameService(mock_repository, AutomaticOpponent.seeded(1))
    started = first.start_game(StartGameRequest(color=Color.WHITE))
    first.submit_human_move(MoveRequest(move="WPe2-e4"))

    second = GameService(mock_repository, AutomaticOpponent.seeded(1))
    state = second.request_state()
    assert state.game_id == started.game_id
    assert state.move_history == ["WPe2-e4"]
    assert state.turn == Turn.AUTOMATIC

    answer = second.request_automatic_move()
    assert answer.token == ResponseToken.OK
    assert started.game_id is not None
    stored = mock_repository.get_game(started.game_id)
    assert stored is not None
    assert len(stored.moves) == 2


def test_finished_game_is_not_resumed(mock_repository: MockRepository) -> None:
    first = GameService(mock_repository)
    first.start_game(StartGameRequest(color=Color.WHITE))
    first.resign()

    second = GameService(mock_repository)
    with pytest.raises(NoActiveGameError):
        second.request_state()


def test_nothing_to_resume(mock_repository: MockRepository) -> None:
    with pytest.raises(NoActiveGameError):
        GameService(mock_repository).request_state()


# --- RESIGN ---
def test_resign(service: GameService) -> None:
    service.start_game(StartGameRequest(color=Color.BLACK))
    service.request_automatic_move()

    response = service.resign()
    assert response.token == ResponseToken.OK
    assert response.winner == Color.WHITE
    assert response.game.status == Status.RESIGNED

    with pytest.raises(NoActiveGameError):
        service.request_state()
    with pytest.raises(NoActiveGameError):
        service.resign()


# --- CONCURRENCY ---
def test_concurrent_requests_see_consistent_state(service: GameService) -> None:
    """Many readers while moves are being played: every snapshot is a whole position"""
    service.start_game(StartGameRequest(color=Color.WHITE))
    snapshots: list[GameResponse] = []

    def read() -> None:
        for _ in range(20):
            snapshots.append(service.request_state())

    readers = [threading.Thread(target=read) for _ in range(4)]
    for reader in readers:
        reader.start()
    # black cannot reach f3 nor give check with a single move, so both are always legal
    for notation in ["WPe2-e4", "WNg1-f3"]:
        service.submit_human_move(MoveRequest(move=notation))
        service.request_automatic_move()
    for reader in readers:
        reader.join()

    assert len(snapshots) == 80
    for snapshot in snapshots:
        codes = [code for rank in snapshot.board for code in rank]
        assert codes.count("WK") == 1
        assert codes.count("BK") == 1
        assert len(codes) - codes.count("**") <= 32
        assert (len(snapshot.move_history) % 2 == 0) == (snapshot.turn == Turn.HUMAN)
