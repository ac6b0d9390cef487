"""JSON-document repository holding the authoritative game collection."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from .models import Game, GameCollection, GameInput, GamePatch

logger = logging.getLogger(__name__)

GameId = Union[int, str]

STARTER_GAMES: list[dict] = [
    {
        "id": 1,
        "title": "The Legend of Zelda: Breath of the Wild",
        "genre": "Adventure",
        "platforms": ["Switch"],
        "releaseYear": 2017,
        "rating": 4.0,
        "completed": True,
        "multiplayer": False,
    },
    {
        "id": 2,
        "title": "Elden Ring",
        "genre": "RPG",
        "platforms": ["PS5", "Xbox", "PC"],
        "releaseYear": 2022,
        "rating": 5.0,
        "completed": False,
        "multiplayer": True,
    },
    {
        "id": 3,
        "title": "Stardew Valley",
        "genre": "Simulation",
        "platforms": ["Switch", "PC", "Xbox", "Mobile"],
        "releaseYear": 2016,
        "rating": 4.5,
        "completed": True,
        "multiplayer": True,
    },
    {
        "id": 4,
        "title": "Resident Evil 4",
        "genre": "Action",
        "platforms": ["PS5", "Xbox", "PC"],
        "releaseYear": 2023,
        "rating": 4.5,
        "completed": False,
        "multiplayer": False,
    },
    {
        "id": 5,
        "title": "Hollow Knight",
        "genre": "Action",
        "platforms": ["Switch", "PC", "Xbox"],
        "releaseYear": 2017,
        "rating": 3.5,
        "completed": True,
        "multiplayer": False,
    },
    {
        "id": 6,
        "title": "Sid Meier's Civilization VI",
        "genre": "Strategy",
        "platforms": ["PC", "Switch", "Xbox"],
        "releaseYear": 2016,
        "rating": 4.5,
        "completed": False,
        "multiplayer": True,
    },
    {
        "id": 7,
        "title": "Rocket League",
        "genre": "Sports",
        "platforms": ["Xbox", "PC", "Switch"],
        "releaseYear": 2015,
        "rating": 4.0,
        "completed": False,
        "multiplayer": True,
    },
    {
        "id": 8,
        "title": "Undertale",
        "genre": "RPG",
        "platforms": ["PC", "Switch"],
        "releaseYear": 2015,
        "rating": 5.0,
        "completed": True,
        "multiplayer": False,
    },
]


class StoreError(RuntimeError):
    """Raised when the backing document cannot be read or written."""


class GameNotFoundError(LookupError):
    """Raised when no record matches the requested id."""

    def __init__(self, game_id: GameId) -> None:
        super().__init__(f"No game with id {game_id!r}")
        self.game_id = game_id


def _same_id(left: GameId, right: GameId) -> bool:
    return str(left) == str(right)


class GameStore:
    """Ordered game collection persisted as ``{"games": [...]}``.

    The in-memory list is only replaced after the document has been
    rewritten, so a failed write never leaves a half-applied mutation
    visible to the next read. New ids come from a counter that starts one
    past the largest numeric id on disk and only ever moves forward.
    """

    def __init__(self, path: Union[str, Path], seed: Optional[Iterable[dict]] = None) -> None:
        self.path = Path(path)
        self._games: list[Game] = self._load(seed)
        self._next_id = self._initial_counter(self._games)

    def _load(self, seed: Optional[Iterable[dict]]) -> list[Game]:
        if not self.path.exists():
            entries = list(STARTER_GAMES if seed is None else seed)
            games = [Game.model_validate(entry) for entry in entries]
            logger.info("Creating %s with %d starter games", self.path, len(games))
            self._save(games)
            return games
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            collection = GameCollection.model_validate(payload)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise StoreError(f"Unable to read game collection at {self.path}: {exc}") from exc
        logger.debug("Loaded %d games from %s", len(collection.games), self.path)
        return collection.games

    def _save(self, games: list[Game]) -> None:
        document = GameCollection(games=games).model_dump(mode="json", by_alias=True)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(document, handle, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            logger.exception("Failed to write %s", self.path)
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise StoreError(f"Unable to write game collection to {self.path}") from exc

    @staticmethod
    def _initial_counter(games: list[Game]) -> int:
        numeric_ids = [int(game.id) for game in games if str(game.id).isdigit()]
        return max(numeric_ids, default=0) + 1

    def _index_of(self, game_id: GameId) -> int:
        for idx, game in enumerate(self._games):
            if _same_id(game.id, game_id):
                return idx
        logger.warning("Game id %r not found", game_id)
        raise GameNotFoundError(game_id)

    def list_games(self) -> list[Game]:
        return list(self._games)

    def get_game(self, game_id: GameId) -> Game:
        return self._games[self._index_of(game_id)]

    def create_game(self, payload: GameInput) -> Game:
        new_id = self._next_id
        game = Game(id=new_id, **payload.model_dump())
        games = [*self._games, game]
        self._save(games)
        self._games = games
        self._next_id = new_id + 1
        logger.info("Created game id=%s title='%s'", game.id, game.title)
        return game

    def update_game(self, game_id: GameId, payload: GameInput) -> Game:
        idx = self._index_of(game_id)
        game = Game(id=self._games[idx].id, **payload.model_dump())
        self._replace(idx, game)
        logger.info("Updated game id=%s", game.id)
        return game

    def patch_game(self, game_id: GameId, patch: GamePatch) -> Game:
        """Merge the set fields of *patch* into a record and revalidate it."""
        idx = self._index_of(game_id)
        current = self._games[idx].model_dump()
        current.update(patch.model_dump(exclude_unset=True, exclude_none=True))
        game = Game.model_validate(current)
        self._replace(idx, game)
        logger.info("Patched game id=%s", game.id)
        return game

    def _replace(self, idx: int, game: Game) -> None:
        games = list(self._games)
        games[idx] = game
        self._save(games)
        self._games = games

    def delete_game(self, game_id: GameId) -> Game:
        idx = self._index_of(game_id)
        games = list(self._games)
        removed = games.pop(idx)
        self._save(games)
        self._games = games
        logger.info("Deleted game id=%s", removed.id)
        return removed
