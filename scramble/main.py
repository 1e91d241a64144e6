from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import ServerSettings
from .dictionary import DictionaryService
from .errors import ScrambleError
from .managers.game import GameManager
from .routers.games import router as games_router
from .schemas import ErrorResponse


def create_app(dictionary: Optional[DictionaryService] = None, settings: Optional[ServerSettings] = None) -> FastAPI:
    """Build the REST app. Loads the word list from ``settings`` when no dictionary is given."""
    settings = settings or ServerSettings()
    if dictionary is None:
        # DictionaryLoadError propagates: the server does not start without words
        dictionary = DictionaryService.load(
            settings.word_list_path,
            scan_yield_interval=settings.scan_yield_interval,
            draw_warn_attempts=settings.draw_warn_attempts,
        )

    # Socket.IO server (ASGI) for pushing game state to subscribed clients
    sio_origins = '*' if '*' in settings.cors_origins else settings.cors_origins
    sio = socketio.AsyncServer(async_mode='asgi', cors_allowed_origins=sio_origins)
    games = GameManager(dictionary, sio, best_answers_limit=settings.best_answers_limit)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        yield
        await games.shutdown()

    app = FastAPI(title="Scramble Server", version="0.1.0", lifespan=lifespan)
    app.state.games = games
    app.state.sio = sio

    # CORS for REST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    @app.exception_handler(ScrambleError)
    async def scramble_error_handler(request: Request, exc: ScrambleError):
        body = ErrorResponse(error=exc.kind.value, message=exc.message)
        return JSONResponse(status_code=400, content=body.model_dump(by_alias=True))

    app.include_router(games_router)

    # Socket.IO Events
    @sio.event
    async def connect(sid, environ, auth=None):
        await sio.emit('pong', to=sid)

    @sio.on('ping')
    async def on_ping(sid):
        await sio.emit('pong', to=sid)

    @sio.on('join-game')
    async def join_game(sid, game_id: str):
        # Subscribe only; players are admitted through the REST API
        try:
            state = await games.get_game(game_id)
        except ScrambleError as exc:
            await sio.emit('game:error', {'error': exc.kind.value, 'message': exc.message}, to=sid)
            return
        await sio.enter_room(sid, game_id)
        await sio.emit('game:state', state.model_dump(by_alias=True, mode='json'), to=sid)

    @sio.on('leave-game')
    async def leave_game(sid, game_id: str):
        await sio.leave_room(sid, game_id)

    return app


def create_application(dictionary: Optional[DictionaryService] = None, settings: Optional[ServerSettings] = None):
    """REST app with Socket.IO mounted in front of it.

    For uvicorn: ``uvicorn scramble.main:create_application --factory``
    """
    app = create_app(dictionary, settings)
    return socketio.ASGIApp(app.state.sio, other_asgi_app=app)
