"""Client-side collection state with pure update functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Iterable, Optional, Sequence, Union

from ..models import Game

logger = logging.getLogger(__name__)

GameId = Union[int, str]
Update = Callable[[Sequence[Game]], Sequence[Game]]


@dataclass(frozen=True)
class CollectionState:
    games: tuple[Game, ...] = ()
    loading: bool = False
    loaded: bool = False
    error: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.loaded and not self.games

    def find(self, game_id: GameId) -> Optional[Game]:
        for game in self.games:
            if str(game.id) == str(game_id):
                return game
        return None


def with_created(games: Sequence[Game], game: Game) -> tuple[Game, ...]:
    return (*games, game)


def with_updated(games: Sequence[Game], game: Game) -> tuple[Game, ...]:
    return tuple(game if str(item.id) == str(game.id) else item for item in games)


def without(games: Sequence[Game], game_id: GameId) -> tuple[Game, ...]:
    return tuple(item for item in games if str(item.id) != str(game_id))


class CollectionStore:
    """Holds the UI's view of the collection and orders request results.

    Every request takes a token from :meth:`begin`. Results are applied
    only when their token is newer than the last one applied, so a slow
    response can never overwrite the outcome of a later request.
    """

    def __init__(self, games: Iterable[Game] = ()) -> None:
        self.state = CollectionState(games=tuple(games))
        self._issued = 0
        self._applied = 0

    def begin(self) -> int:
        self._issued += 1
        self.state = replace(self.state, loading=True)
        return self._issued

    def _accept(self, token: int) -> bool:
        if token <= self._applied:
            logger.debug("Discarding stale result for request %d (last applied %d)", token, self._applied)
            return False
        self._applied = token
        return True

    def _still_loading(self, token: int) -> bool:
        return token < self._issued

    def resolve(self, token: int, games: Iterable[Game]) -> bool:
        """Replace the cached collection with a fresh fetch result."""
        if not self._accept(token):
            return False
        self.state = replace(
            self.state,
            games=tuple(games),
            loaded=True,
            error=None,
            loading=self._still_loading(token),
        )
        return True

    def succeed(self, token: int, update: Optional[Update] = None) -> bool:
        """Apply a confirmed mutation to the cached collection."""
        if not self._accept(token):
            return False
        games = self.state.games if update is None else tuple(update(self.state.games))
        self.state = replace(
            self.state, games=games, error=None, loading=self._still_loading(token)
        )
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self._accept(token):
            return False
        self.state = replace(self.state, error=message, loading=self._still_loading(token))
        return True

    def report(self, message: str) -> None:
        self.state = replace(self.state, error=message)

    def dismiss_error(self) -> None:
        self.state = replace(self.state, error=None)
