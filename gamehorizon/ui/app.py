"""FastAPI app serving the collection page."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from fastapi import Depends, FastAPI, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from ..client import GamesClient
from ..config import load_settings
from ..models import GENRES, MIN_RELEASE_YEAR, PLATFORMS, RATING_OPTIONS, current_year
from .controller import CollectionController
from .form import ValidationError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

app = FastAPI(
    title="GameHorizon",
    description="Browse and edit a personal video-game collection.",
    version="0.1.0",
)


@lru_cache(maxsize=1)
def get_controller() -> CollectionController:
    settings = load_settings()
    logger.info("Using game store at %s", settings.api_url)
    return CollectionController(GamesClient(settings.api_url, timeout=settings.http_timeout))


def _render(
    request: Request,
    controller: CollectionController,
    status_code: int = status.HTTP_200_OK,
) -> HTMLResponse:
    context = {
        "state": controller.state,
        "cards": controller.cards,
        "form": controller.form,
        "genres": GENRES,
        "platforms": PLATFORMS,
        "rating_options": RATING_OPTIONS,
        "min_year": MIN_RELEASE_YEAR,
        "max_year": current_year(),
    }
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)


def _back_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)


@app.get("/", response_class=HTMLResponse)
def index(request: Request, controller: CollectionController = Depends(get_controller)):
    with controller.lock:
        controller.load_for_page()
        return _render(request, controller)


@app.get("/games/new", response_class=HTMLResponse)
def new_game(request: Request, controller: CollectionController = Depends(get_controller)):
    with controller.lock:
        controller.open_create()
        return _render(request, controller)


@app.get("/games/{game_id}/edit", response_class=HTMLResponse)
def edit_game(
    game_id: str,
    request: Request,
    controller: CollectionController = Depends(get_controller),
):
    with controller.lock:
        if not controller.state.loaded:
            controller.load()
        controller.open_edit(game_id)
        return _render(request, controller)


@app.post("/form", response_class=HTMLResponse)
def submit_form(
    request: Request,
    title: str = Form(""),
    genre: str = Form("Action"),
    platforms: list[str] = Form([]),
    release_year: str = Form("", alias="releaseYear"),
    rating: str = Form("3.0"),
    completed: bool = Form(False),
    multiplayer: bool = Form(False),
    controller: CollectionController = Depends(get_controller),
):
    with controller.lock:
        form = controller.form
        if not form.is_open:
            return _back_home()
        form.change("title", title)
        form.change("genre", genre)
        form.change("releaseYear", release_year)
        form.change("rating", rating)
        form.change("completed", completed)
        form.change("multiplayer", multiplayer)
        form.set_platforms(platform for platform in platforms if platform in PLATFORMS)
        try:
            controller.submit()
        except ValidationError as exc:
            logger.debug("Form rejected: %s", exc)
            return _render(request, controller, 422)
    return _back_home()


@app.post("/form/cancel")
def cancel_form(controller: CollectionController = Depends(get_controller)):
    with controller.lock:
        controller.cancel()
    return _back_home()


@app.post("/games/{game_id}/delete")
def delete_game(game_id: str, controller: CollectionController = Depends(get_controller)):
    with controller.lock:
        controller.delete(game_id)
    return _back_home()


@app.post("/banner/dismiss")
def dismiss_banner(controller: CollectionController = Depends(get_controller)):
    with controller.lock:
        controller.dismiss_error()
    return _back_home()
