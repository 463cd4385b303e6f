"""Protocol repository (implemented with SQLAlchemy, tests use a dictionary)"""

from typing import Protocol
from uuid import UUID

from src.core.models import GameRecord


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def get_game(self, game_id: UUID) -> GameRecord | None:
        """The stored game, None if the id is unknown."""
        ...

    def create_game(self, game: GameRecord) -> tuple[GameRecord, UUID]:
        """Store a freshly started game. Returns the stored record and the id the service addresses it with."""
        ...

    def update_game(self, game_id: UUID, game: GameRecord) -> GameRecord | None:
        """Overwrite the record after an accepted request. None if the id is unknown."""
        ...

    def delete_game(self, game_id: UUID) -> GameRecord | None:
        """Called when a new game replaces this one."""
        ...

    def latest_game_id(self) -> UUID | None:
        """Id of the most recently stored game (created or updated), None for an empty repository."""
        ...
