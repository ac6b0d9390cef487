"""FastAPI entry point for the GameHorizon record store."""

from __future__ import annotations

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import load_settings
from .models import Game, GameInput, GamePatch
from .store import GameNotFoundError, GameStore, StoreError

logger = logging.getLogger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store",
    "Pragma": "no-cache",
}

app = FastAPI(
    title="GameHorizon Store",
    description="Record store for a personal video-game collection.",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def disable_caching(request: Request, call_next):
    response = await call_next(request)
    for name, value in NO_CACHE_HEADERS.items():
        response.headers[name] = value
    response.headers.setdefault("Access-Control-Allow-Origin", "*")
    return response


@app.exception_handler(RequestValidationError)
async def validation_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
    # raw inputs may hold values JSON cannot encode, such as inf
    detail = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=422,
        content={"detail": jsonable_encoder(detail)},
    )


@lru_cache(maxsize=1)
def get_store() -> GameStore:
    settings = load_settings()
    logger.info("Serving games from %s", settings.db_path)
    return GameStore(settings.db_path)


games_router = APIRouter(prefix="/games", tags=["games"])


def _not_found(exc: GameNotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def _store_failure(exc: StoreError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )


@app.get("/health")
async def healthcheck() -> JSONResponse:
    return JSONResponse({"status": "ok"})


@games_router.get("", response_model=list[Game])
async def list_games(store: GameStore = Depends(get_store)) -> list[Game]:
    games = store.list_games()
    logger.debug("Listing %d games", len(games))
    return games


@games_router.get("/{game_id}", response_model=Game)
async def get_game(game_id: str, store: GameStore = Depends(get_store)) -> Game:
    try:
        return store.get_game(game_id)
    except GameNotFoundError as exc:
        raise _not_found(exc) from exc


@games_router.post("", response_model=Game, status_code=status.HTTP_201_CREATED)
async def create_game(payload: GameInput, store: GameStore = Depends(get_store)) -> Game:
    try:
        return store.create_game(payload)
    except StoreError as exc:
        raise _store_failure(exc) from exc


@games_router.put("/{game_id}", response_model=Game)
async def update_game(
    game_id: str, payload: GameInput, store: GameStore = Depends(get_store)
) -> Game:
    try:
        return store.update_game(game_id, payload)
    except GameNotFoundError as exc:
        raise _not_found(exc) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@games_router.patch("/{game_id}", response_model=Game)
async def patch_game(
    game_id: str, patch: GamePatch, store: GameStore = Depends(get_store)
) -> Game:
    try:
        return store.patch_game(game_id, patch)
    except GameNotFoundError as exc:
        raise _not_found(exc) from exc
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_context=False)) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


@games_router.delete("/{game_id}", response_model=Game)
async def delete_game(game_id: str, store: GameStore = Depends(get_store)) -> Game:
    try:
        return store.delete_game(game_id)
    except GameNotFoundError as exc:
        raise _not_found(exc) from exc
    except StoreError as exc:
        raise _store_failure(exc) from exc


app.include_router(games_router)
