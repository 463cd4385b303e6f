"""HTTP routes. Thin wrappers: all logic lives in the GameService."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse

from src.api.commands import CommandHandler
from src.api.models import (
    CommandRequest,
    GameResponse,
    MoveRequest,
    MoveResponse,
    StartGameRequest,
)
from src.core.exceptions import (
    GameError,
    GameStateError,
    IllegalMoveError,
    RepositoryError,
)
from src.services.game_service import GameService

router = APIRouter()


def get_service(request: Request) -> GameService:
    return request.app.state.service


def get_command_handler(request: Request) -> CommandHandler:
    return request.app.state.command_handler


@router.post("/games", response_model=GameResponse)
def start_game(
    body: StartGameRequest, service: GameService = Depends(get_service)
) -> GameResponse:
    return service.start_game(body)


@router.get("/games/current", response_model=GameResponse)
def get_game_state(service: GameService = Depends(get_service)) -> GameResponse:
    return service.request_state()


@router.post("/games/current/moves", response_model=MoveResponse)
def make_move(
    body: MoveRequest, service: GameService = Depends(get_service)
) -> MoveResponse:
    return service.submit_human_move(body)


@router.post("/games/current/automatic-move", response_model=MoveResponse)
def automatic_move(service: GameService = Depends(get_service)) -> MoveResponse:
    return service.request_automatic_move()


@router.post("/games/current/resign", response_model=MoveResponse)
def resign(service: GameService = Depends(get_service)) -> MoveResponse:
    return service.resign()


@router.post("/command", response_class=PlainTextResponse)
def command(
    body: CommandRequest, handler: CommandHandler = Depends(get_command_handler)
) -> str:
    return handler.handle(body.command)


def game_error_handler(request: Request, exc: GameError) -> JSONResponse:
    """Domain errors are part of normal play: report the token instead of a server error"""
    if isinstance(exc, RepositoryError):
        status_code = 503
    elif isinstance(exc, GameStateError):
        status_code = 409
    elif isinstance(exc, IllegalMoveError):
        status_code = 422
    else:
        status_code = 400
    content: dict[str, str] = {"token": exc.token.value, "detail": str(exc)}
    reason = getattr(exc, "reason", None)
    if reason is not None:
        content["reason"] = reason.value
    return JSONResponse(status_code=status_code, content=content)
