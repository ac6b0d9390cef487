import pytest

from gamehorizon.models import Game
from gamehorizon.ui.card import GameCard


def card_for(**overrides):
    data = {
        "id": 1,
        "title": "Hades",
        "genre": "RPG",
        "platforms": ["PC", "Switch"],
        "releaseYear": 2020,
        "rating": 4.5,
        "completed": True,
        "multiplayer": False,
    }
    data.update(overrides)
    return GameCard.from_game(Game.model_validate(data))


@pytest.mark.parametrize(
    "rating, color, css",
    [(4.5, "green", "bg-green-500"), (4.0, "yellow", "bg-yellow-500"), (3.5, "red", "bg-red-500")],
)
def test_rating_badge(rating, color, css):
    card = card_for(rating=rating)
    assert card.rating_color == color
    assert card.rating_class == css


def test_rating_label_drops_trailing_zero():
    assert card_for(rating=3.0).rating_label == "3/5"
    assert card_for(rating=4.5).rating_label == "4.5/5"


def test_status_labels():
    card = card_for()
    assert card.completed_label == "Completed"
    assert card.multiplayer_label == "Single Player"
    other = card_for(completed=False, multiplayer=True)
    assert other.completed_label == "In Progress"
    assert other.multiplayer_label == "Multiplayer"


def test_platforms_and_actions():
    card = card_for(id=9)
    assert card.platforms_label == "PC, Switch"
    assert card.edit_url == "/games/9/edit"
    assert card.delete_url == "/games/9/delete"
