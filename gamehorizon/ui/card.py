"""Presentation data for a single game card."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..models import Game, rating_band

RATING_CLASSES = {
    "green": "bg-green-500",
    "yellow": "bg-yellow-500",
    "red": "bg-red-500",
}


@dataclass(frozen=True)
class GameCard:
    game_id: Union[int, str]
    title: str
    genre: str
    release_year: int
    platforms: tuple[str, ...]
    rating: float
    completed: bool
    multiplayer: bool

    @classmethod
    def from_game(cls, game: Game) -> "GameCard":
        return cls(
            game_id=game.id,
            title=game.title,
            genre=game.genre,
            release_year=game.release_year,
            platforms=tuple(game.platforms),
            rating=game.rating,
            completed=game.completed,
            multiplayer=game.multiplayer,
        )

    @property
    def rating_label(self) -> str:
        return f"{self.rating:g}/5"

    @property
    def rating_color(self) -> str:
        return rating_band(self.rating)

    @property
    def rating_class(self) -> str:
        return RATING_CLASSES[self.rating_color]

    @property
    def platforms_label(self) -> str:
        return ", ".join(self.platforms)

    @property
    def multiplayer_label(self) -> str:
        return "Multiplayer" if self.multiplayer else "Single Player"

    @property
    def multiplayer_class(self) -> str:
        return "bg-blue-100 text-blue-800" if self.multiplayer else "bg-gray-100 text-gray-800"

    @property
    def completed_label(self) -> str:
        return "Completed" if self.completed else "In Progress"

    @property
    def completed_class(self) -> str:
        return (
            "bg-purple-100 text-purple-800"
            if self.completed
            else "bg-orange-100 text-orange-800"
        )

    @property
    def edit_url(self) -> str:
        return f"/games/{self.game_id}/edit"

    @property
    def delete_url(self) -> str:
        return f"/games/{self.game_id}/delete"
