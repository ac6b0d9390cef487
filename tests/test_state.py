import pytest

from gamehorizon.models import Game
from gamehorizon.ui.state import CollectionStore, with_created, with_updated, without


def make_game(game_id, title="Game", rating=4.0):
    return Game.model_validate({
        "id": game_id,
        "title": title,
        "genre": "Action",
        "platforms": ["PC"],
        "releaseYear": 2020,
        "rating": rating,
    })


@pytest.fixture
def games():
    return (make_game(1, "A"), make_game(2, "B"))


def test_pure_updates_do_not_mutate_input(games):
    created = with_created(games, make_game(3, "C"))
    updated = with_updated(games, make_game(2, "B2"))
    removed = without(games, 1)
    assert [g.title for g in games] == ["A", "B"]
    assert [g.title for g in created] == ["A", "B", "C"]
    assert [g.title for g in updated] == ["A", "B2"]
    assert [g.title for g in removed] == ["B"]


def test_without_matches_string_ids(games):
    assert [g.id for g in without(games, "2")] == [1]


def test_loading_until_latest_request_finishes(games):
    store = CollectionStore()
    token = store.begin()
    assert store.state.loading
    assert store.resolve(token, games)
    assert not store.state.loading
    assert store.state.loaded


def test_stale_fetch_cannot_overwrite_newer(games):
    store = CollectionStore()
    slow = store.begin()
    fast = store.begin()
    assert store.resolve(fast, games[:1])
    assert not store.resolve(slow, games)
    assert [g.title for g in store.state.games] == ["A"]


def test_older_result_leaves_loading_for_newer_request(games):
    store = CollectionStore()
    first = store.begin()
    store.begin()
    store.resolve(first, games)
    assert store.state.loading


def test_failure_sets_error_and_success_clears_it(games):
    store = CollectionStore()
    store.fail(store.begin(), "Failed to load games: boom")
    assert store.state.error == "Failed to load games: boom"
    assert not store.state.loading
    store.resolve(store.begin(), games)
    assert store.state.error is None


def test_succeed_applies_update(games):
    store = CollectionStore(games)
    store.succeed(store.begin(), lambda current: without(current, 1))
    assert [g.id for g in store.state.games] == [2]


def test_dismiss_error():
    store = CollectionStore()
    store.report("Something went wrong")
    store.dismiss_error()
    assert store.state.error is None


def test_empty_only_after_load():
    store = CollectionStore()
    assert not store.state.is_empty
    store.resolve(store.begin(), [])
    assert store.state.is_empty
