"""GameRepository backed by SQLAlchemy: one row per started game, updated after every accepted request"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import GameRecord
from src.db.schema import DBGame


class SQLGameRepository:
    """Works on a single session, owned by the caller (the service serializes access to it)"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_game(self, game_id: UUID) -> GameRecord | None:
        game_db = self._fetch_game(game_id)
        if game_db:
            return self._to_model(game_db)
        return None

    def create_game(self, game: GameRecord) -> tuple[GameRecord, UUID]:
        """The id is generated here, not by the database"""
        new_id = uuid4()
        game_db = DBGame(id=new_id)
        self._copy_into(game_db, game)
        self.db.add(game_db)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db), new_id

    def update_game(self, game_id: UUID, game: GameRecord) -> GameRecord | None:
        """Overwrites the whole record. None if there is no game with that id."""
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        self._copy_into(game_db, game)
        self.db.commit()
        self.db.refresh(game_db)
        return self._to_model(game_db)

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        game_db = self._fetch_game(game_id)
        if not game_db:
            return None
        game_model = self._to_model(game_db)
        self.db.delete(game_db)
        self.db.commit()
        return game_model

    def latest_game_id(self) -> UUID | None:
        query = select(DBGame.id).order_by(DBGame.updated_at.desc(), DBGame.created_at.desc()).limit(1)
        return self.db.scalar(query)

    def _fetch_game(self, game_id: UUID) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _copy_into(self, game_db: DBGame, game: GameRecord) -> None:
        game_db.human_color = game.human_color
        game_db.status = game.status
        game_db.turn = game.turn
        game_db.board_fen = game.board_fen
        # new list, so SQLAlchemy sees the JSON column changed
        game_db.moves = list(game.moves)
        game_db.automatic_in_check = game.automatic_in_check
        game_db.winner = game.winner

    def _to_model(self, game_db: DBGame) -> GameRecord:
        """Row -> GameRecord (copies the move list, so the record does not alias the JSON column)"""
        return GameRecord(
            human_color=game_db.human_color,
            status=game_db.status,
            turn=game_db.turn,
            board_fen=game_db.board_fen,
            moves=list(game_db.moves),
            automatic_in_check=game_db.automatic_in_check,
            winner=game_db.winner,
        )
