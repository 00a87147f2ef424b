import pytest

from recipegen.schemas import User, UserPreferences
from recipegen.services.recipe_store import RecipeStore


@pytest.fixture
def store():
    return RecipeStore(history_limit=50)


def test_save_and_get(store, make_recipe):
    assert store.save_recipe(make_recipe("r1"))
    assert store.save_recipe(make_recipe("r2", name="Tofu Stir Fry", ingredients=("tofu", "broccoli")))

    assert [r.id for r in store.get_all_recipes()] == ["r1", "r2"]
    assert store.get_recipe("r2").name == "Tofu Stir Fry"
    assert store.get_recipe("missing") is None


def test_save_same_id_replaces(store, make_recipe):
    store.save_recipe(make_recipe("r1"))
    store.save_recipe(make_recipe("r1", name="Renamed"))
    recipes = store.get_all_recipes()
    assert len(recipes) == 1
    assert recipes[0].name == "Renamed"


def test_round_trip_keeps_fields(store, make_recipe):
    original = make_recipe("r1", rating=4)
    store.save_recipe(original)
    assert store.get_recipe("r1") == original


def test_update_and_delete(store, make_recipe):
    store.save_recipe(make_recipe("r1"))
    updated = make_recipe("r1", cooking_time=90)
    assert store.update_recipe(updated)
    assert store.get_recipe("r1").cooking_time == 90
    assert not store.update_recipe(make_recipe("nope"))

    assert store.delete_recipe("r1")
    assert not store.delete_recipe("r1")
    assert store.get_all_recipes() == []


def test_queries(store, make_recipe):
    store.save_recipe(make_recipe("r1", difficulty="Easy", cooking_time=20))
    store.save_recipe(make_recipe("r2", name="Beef Stew", ingredients=("beef", "carrot"),
                                  difficulty="Hard", cooking_time=120, cuisine="French"))

    assert [r.id for r in store.search_by_ingredients(["Carrot"])] == ["r2"]
    assert [r.id for r in store.search("stew")] == ["r2"]
    assert [r.id for r in store.search("asian")] == ["r1"]
    assert [r.id for r in store.by_difficulty("Hard")] == ["r2"]
    assert [r.id for r in store.by_cooking_time(30)] == ["r1"]


def test_rating_and_favorites(store, make_recipe):
    store.save_recipe(make_recipe("r1"))
    store.save_recipe(make_recipe("r2"))

    assert store.rate_recipe("r1", 5)
    assert store.rate_recipe("r2", 3)
    assert not store.rate_recipe("missing", 4)
    with pytest.raises(ValueError):
        store.rate_recipe("r1", 6)

    assert [r.id for r in store.favorites()] == ["r1"]


def test_history_is_deduped_and_capped(store, make_recipe):
    for i in range(55):
        store.save_recipe(make_recipe(f"r{i}"))
        store.add_to_history(f"r{i}")
    store.add_to_history("r10")

    history = store.get_history()
    assert len(history) == 50
    assert history[0].id == "r10"
    assert history[1].id == "r54"
    assert len({r.id for r in history}) == 50


def test_history_skips_deleted_recipes(store, make_recipe):
    store.save_recipe(make_recipe("r1"))
    store.add_to_history("r1")
    store.delete_recipe("r1")
    assert store.get_history() == []


def test_preferences_and_user(store):
    assert store.get_preferences() is None
    prefs = UserPreferences(allergies=["Nuts"], spice_level="Hot")
    assert store.save_preferences(prefs)
    assert store.get_preferences() == prefs

    user = User(id="u1", name="Sam", email="sam@example.com", preferences=prefs)
    assert store.save_user(user)
    assert store.get_user() == user


def test_clear_all(store, make_recipe):
    store.save_recipe(make_recipe("r1"))
    store.add_to_history("r1")
    store.save_preferences(UserPreferences())
    assert store.clear_all()
    assert store.get_all_recipes() == []
    assert store.get_history() == []
    assert store.get_preferences() is None


def test_stats(store, make_recipe):
    assert store.stats().total_recipes == 0

    store.save_recipe(make_recipe("r1", cooking_time=20, cuisine="Asian", rating=5))
    store.save_recipe(make_recipe("r2", cooking_time=45, cuisine="Italian"))
    store.save_recipe(make_recipe("r3", cooking_time=30, cuisine="Italian", rating=4))

    stats = store.stats()
    assert stats.total_recipes == 3
    assert stats.average_cooking_time == 32
    assert stats.most_used_cuisine == "Italian"
    assert stats.favorite_count == 2


def test_corrupt_document_is_reported_not_raised(store, mock_redis):
    mock_redis.set("recipegen:recipes", "{not json")
    assert store.get_all_recipes() == []
    assert store.stats().total_recipes == 0
