"""Coordinates the form, the cached collection and the store client."""

from __future__ import annotations

import logging
import threading
from functools import partial
from typing import Union

from ..client import GamesClient, NetworkError
from .card import GameCard
from .form import GameForm
from .state import CollectionState, CollectionStore, with_created, with_updated, without

logger = logging.getLogger(__name__)


class CollectionController:
    """Drives the collection page.

    Every mutation is sent to the store first; only a confirmed result is
    applied to the cached collection, followed by a full re-fetch. Failures
    end up in ``state.error`` and are never retried automatically.
    """

    def __init__(self, client: GamesClient) -> None:
        self.client = client
        self.store = CollectionStore()
        self.form = GameForm()
        self._fresh = False
        # held by the UI routes for a whole request; the form and tokens are shared
        self.lock = threading.Lock()

    @property
    def state(self) -> CollectionState:
        return self.store.state

    @property
    def cards(self) -> list[GameCard]:
        return [GameCard.from_game(game) for game in self.state.games]

    def load(self) -> bool:
        token = self.store.begin()
        try:
            games = self.client.list_games()
        except NetworkError as exc:
            self.store.fail(token, f"Failed to load games: {exc}")
            return False
        return self.store.resolve(token, games)

    def load_for_page(self) -> bool:
        """Load on page render unless a mutation attempt just settled the state."""
        if self._fresh:
            self._fresh = False
            return True
        return self.load()

    def _settle(self, resync: bool) -> None:
        # the page shown after a failed mutation must keep its banner
        if resync:
            self.load()
        self._fresh = True

    def open_create(self) -> None:
        self.store.dismiss_error()
        self.form.open_create()

    def open_edit(self, game_id: Union[int, str]) -> bool:
        game = self.state.find(game_id)
        if game is None:
            self.store.report(f"Game {game_id} is no longer in your collection.")
            return False
        self.store.dismiss_error()
        self.form.open_edit(game)
        return True

    def cancel(self) -> None:
        self.form.cancel()

    def dismiss_error(self) -> None:
        self.store.dismiss_error()

    def submit(self) -> bool:
        """Validate and send the form; raises ``ValidationError`` before any request."""
        payload = self.form.submit()
        game_id = payload.pop("id", None)
        token = self.store.begin()
        try:
            if game_id is None:
                game = self.client.create_game(payload)
                update = partial(with_created, game=game)
            else:
                game = self.client.update_game(game_id, payload)
                update = partial(with_updated, game=game)
        except NetworkError as exc:
            action = "add" if game_id is None else "update"
            self.store.fail(token, f"Failed to {action} game: {exc}")
            self._settle(resync=False)
            return False
        logger.info("Saved game id=%s", game.id)
        self.store.succeed(token, update)
        self.form.cancel()
        self._settle(resync=True)
        return True

    def delete(self, game_id: Union[int, str]) -> bool:
        token = self.store.begin()
        try:
            self.client.delete_game(game_id)
        except NetworkError as exc:
            self.store.fail(token, f"Failed to delete game: {exc}")
            self._settle(resync=False)
            return False
        logger.info("Deleted game id=%s", game_id)
        self.store.succeed(token, partial(without, game_id=game_id))
        self._settle(resync=True)
        return True
