"""Pydantic models shared by the record store and the collection UI."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

GENRES = ("Action", "Adventure", "RPG", "Strategy", "Sports", "Puzzle", "Simulation")
PLATFORMS = ("PC", "PS5", "Xbox", "Switch", "Mobile")
RATING_OPTIONS = tuple(step / 2 for step in range(2, 11))
MIN_RELEASE_YEAR = 1970
MAX_TITLE_LENGTH = 100


def current_year() -> int:
    return date.today().year


def clamp_release_year(value: Any) -> int:
    """Clamp a year into [1970, current year], accepting numeric strings."""
    try:
        year = int(float(value))
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError("Release year must be a whole number") from exc
    return min(max(year, MIN_RELEASE_YEAR), current_year())


def rating_band(rating: float) -> str:
    if rating >= 4.5:
        return "green"
    if rating >= 4.0:
        return "yellow"
    return "red"


class GameInput(BaseModel):
    """A game record as submitted by the form, without a store-assigned id."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    genre: str
    platforms: list[str]
    release_year: int = Field(alias="releaseYear")
    rating: float
    completed: bool = False
    multiplayer: bool = False

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        if len(value) > MAX_TITLE_LENGTH:
            raise ValueError("Title must be less than 100 characters")
        return value

    @field_validator("genre")
    @classmethod
    def _check_genre(cls, value: str) -> str:
        if value not in GENRES:
            raise ValueError(f"Genre must be one of: {', '.join(GENRES)}")
        return value

    @field_validator("platforms")
    @classmethod
    def _check_platforms(cls, value: list[str]) -> list[str]:
        unknown = [platform for platform in value if platform not in PLATFORMS]
        if unknown:
            raise ValueError(f"Unknown platforms: {', '.join(unknown)}")
        # dict.fromkeys keeps first-seen order
        platforms = list(dict.fromkeys(value))
        if not platforms:
            raise ValueError("Select at least one platform")
        return platforms

    @field_validator("release_year", mode="before")
    @classmethod
    def _clamp_year(cls, value: Any) -> int:
        return clamp_release_year(value)

    @field_validator("rating", mode="before")
    @classmethod
    def _coerce_rating(cls, value: Any) -> float:
        try:
            rating = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError("Rating must be a number") from exc
        if rating not in RATING_OPTIONS:
            raise ValueError("Rating must be between 1.0 and 5.0 in steps of 0.5")
        return rating


class Game(GameInput):
    """A stored game record."""

    id: Union[int, str]


class GamePatch(BaseModel):
    """Partial update body; unset fields keep their stored value."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    genre: Optional[str] = None
    platforms: Optional[list[str]] = None
    release_year: Optional[Union[int, float, str]] = Field(default=None, alias="releaseYear")
    rating: Optional[Union[float, str]] = None
    completed: Optional[bool] = None
    multiplayer: Optional[bool] = None


class GameCollection(BaseModel):
    games: list[Game]
