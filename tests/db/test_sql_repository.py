"""Unit tests for src/db/sql_repository.py"""

from uuid import uuid4

from sqlalchemy.orm import Session

from src.core.models import GameRecord
from src.db.sql_repository import SQLGameRepository

STARTING_POSITION_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"


def make_record(**overrides: object) -> GameRecord:
    values: dict = dict(
        human_color="white",
        status="in progress",
        turn="human",
        board_fen=STARTING_POSITION_FEN,
    )
    values.update(overrides)
    return GameRecord(**values)


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameRecord to DBGame for a new entry to the database."""
    record = make_record(moves=["WPe2-e4", "BPe7-e5"])
    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(record)
    assert isinstance(record_in_db, GameRecord)
    assert record_in_db == record


def test_get_game_by_id(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(make_record())
    assert repo.get_game(game_id) == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    """Should return None if ID does not match anything in database."""
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(uuid4()) is None

    repo.create_game(make_record())
    assert repo.get_game(uuid4()) is None


def test_consecutive_game_updates(db_session_repo: Session) -> None:
    """Loosely simulate a game: a record update after every accepted request"""
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(make_record())

    repo.update_game(game_id, make_record(turn="automatic", moves=["WPe2-e4"]))
    repo.update_game(
        game_id, make_record(moves=["WPe2-e4", "BPe7-e5"], automatic_in_check=True)
    )
    last = make_record(
        status="resigned", turn="automatic", moves=["WPe2-e4", "BPe7-e5"], winner="black"
    )
    updated = repo.update_game(game_id, last)
    assert updated == last

    after_all_updates = repo.get_game(game_id)
    assert after_all_updates == last


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(uuid4(), make_record()) is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(make_record())
    assert repo.delete_game(game_id) == created_game
    assert repo.get_game(game_id) is None
    assert repo.delete_game(game_id) is None


def test_latest_game(db_session_repo: Session) -> None:
    """Most recently created or updated game"""
    repo = SQLGameRepository(db_session_repo)
    assert repo.latest_game_id() is None

    _, first_id = repo.create_game(make_record())
    assert repo.latest_game_id() == first_id

    _, second_id = repo.create_game(make_record())
    assert repo.latest_game_id() == second_id

    repo.update_game(first_id, make_record(turn="automatic", moves=["WPe2-e4"]))
    assert repo.latest_game_id() == first_id

    repo.delete_game(first_id)
    assert repo.latest_game_id() == second_id
