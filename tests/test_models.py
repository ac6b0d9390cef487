from datetime import date

import pytest
from pydantic import ValidationError

from gamehorizon.models import (
    RATING_OPTIONS,
    Game,
    GameInput,
    clamp_release_year,
    rating_band,
)


def test_rating_options_are_half_steps():
    assert RATING_OPTIONS == (1.0, 1.5, 2.0, 2.5, 3.0, 3.5, 4.0, 4.5, 5.0)


@pytest.mark.parametrize(
    "value, expected",
    [(1950, 1970), ("2001", 2001), (2020.0, 2020), (9999, date.today().year)],
)
def test_clamp_release_year(value, expected):
    assert clamp_release_year(value) == expected


@pytest.mark.parametrize(
    "rating, band", [(5.0, "green"), (4.5, "green"), (4.0, "yellow"), (3.5, "red"), (1.0, "red")]
)
def test_rating_band(rating, band):
    assert rating_band(rating) == band


def test_input_accepts_wire_names(hades):
    game = GameInput.model_validate(hades)
    assert game.release_year == 2020
    assert game.model_dump(by_alias=True)["releaseYear"] == 2020


def test_input_coerces_string_rating(hades):
    hades["rating"] = "3.5"
    assert GameInput.model_validate(hades).rating == 3.5


def test_input_clamps_year(hades):
    hades["releaseYear"] = 1899
    assert GameInput.model_validate(hades).release_year == 1970


def test_input_dedupes_platforms(hades):
    hades["platforms"] = ["PC", "Switch", "PC"]
    assert GameInput.model_validate(hades).platforms == ["PC", "Switch"]


@pytest.mark.parametrize(
    "field, value",
    [
        ("title", "   "),
        ("title", "x" * 101),
        ("platforms", []),
        ("platforms", ["Dreamcast"]),
        ("genre", "Racing"),
        ("rating", 4.2),
        ("rating", 6.0),
    ],
)
def test_input_rejects_invalid_fields(hades, field, value):
    hades[field] = value
    with pytest.raises(ValidationError):
        GameInput.model_validate(hades)


def test_title_of_exactly_100_characters_is_valid(hades):
    hades["title"] = "x" * 100
    assert len(GameInput.model_validate(hades).title) == 100


def test_input_ignores_client_id(hades):
    hades["id"] = 99
    assert "id" not in GameInput.model_validate(hades).model_dump()


def test_game_accepts_string_or_int_id(hades):
    assert Game.model_validate({**hades, "id": 3}).id == 3
    assert Game.model_validate({**hades, "id": "abc"}).id == "abc"


@pytest.mark.parametrize("value", [None, "abc", float("inf"), float("nan")])
def test_clamp_release_year_rejects_non_numbers(value):
    with pytest.raises(ValueError):
        clamp_release_year(value)


@pytest.mark.parametrize("field", ["releaseYear", "rating"])
def test_input_rejects_null_numbers(hades, field):
    hades[field] = None
    with pytest.raises(ValidationError):
        GameInput.model_validate(hades)
