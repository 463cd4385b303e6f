"""
Application entrypoint: wires settings, logging, persistence, the game service and the HTTP routes together.

Run with: uvicorn --factory src.main:create_app
"""

from typing import Optional

from fastapi import FastAPI

from src.api.commands import CommandHandler
from src.api.router import game_error_handler, router
from src.core.config import Settings
from src.core.exceptions import GameError
from src.core.logging import setup_logging
from src.db.database import build_session_factory
from src.db.sql_repository import SQLGameRepository
from src.engine.opponent import AutomaticOpponent
from src.services.game_service import GameService


def create_service(settings: Settings) -> GameService:
    session_factory = build_session_factory(settings.database_url)
    repository = SQLGameRepository(session_factory())
    opponent = AutomaticOpponent.seeded(settings.rng_seed)
    return GameService(repository, opponent)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = FastAPI(title="chessdev")
    service = create_service(settings)
    app.state.service = service
    app.state.command_handler = CommandHandler(service, settings.ansi_colors)
    app.include_router(router)
    app.add_exception_handler(GameError, game_error_handler)
    return app
