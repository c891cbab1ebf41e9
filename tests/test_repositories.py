"""
Tests for the meal and category repositories.
"""
import json
from datetime import datetime

import pandas as pd
import pytest
from meal_tracker.models import Meal, Category, INVALID_MEAL_MESSAGE
from meal_tracker.data import MealRepository, CategoryRepository


@pytest.fixture
def meals_repo(tmp_path):
    return MealRepository(tmp_path / "meals.csv")


@pytest.fixture
def categories_repo(tmp_path, meals_repo):
    return CategoryRepository(tmp_path / "categories.json", meals=meals_repo)


# MealRepository
def test_missing_file_is_empty(meals_repo):
    """Test a missing CSV loads as an empty store."""
    assert meals_repo.list() == []
    assert len(meals_repo) == 0


def test_save_assigns_id_and_truncates_date(meals_repo):
    """Test first save assigns an id and stores the day start."""
    meal = Meal("Oatmeal", 350, protein=12, date=datetime(2025, 5, 14, 8, 45),
                mealtype="Breakfast")
    result = meals_repo.save(meal)

    assert result
    assert result.message == "Saved meal 'Oatmeal'"
    assert meal.meal_id == result.record_id
    assert meal.date == datetime(2025, 5, 14)


def test_save_writes_csv(meals_repo):
    """Test saved meals reach the file."""
    meals_repo.save(Meal("Oatmeal", 350, date=datetime(2025, 5, 14)))
    df = pd.read_csv(meals_repo.filepath)
    assert list(df["name"]) == ["Oatmeal"]
    assert df["date"].iloc[0] == "2025-05-14"


def test_round_trip_through_file(meals_repo):
    """Test a fresh repository reads back what was saved."""
    meal = Meal("Salad", 450, protein=35, carbs=20, fat=15,
                date=datetime(2025, 5, 13), mealtype="Lunch",
                notes="no croutons", image_data=b"\x89PNG", category_id="c1")
    meals_repo.save(meal)

    loaded = MealRepository(meals_repo.filepath).get(meal.meal_id)
    assert loaded == meal


def test_save_invalid_meal(meals_repo):
    """Test invalid meals are refused without writing."""
    result = meals_repo.save(Meal("", 0))
    assert not result
    assert result.message.startswith(INVALID_MEAL_MESSAGE)
    assert not meals_repo.filepath.exists()


def test_save_blank_notes_become_none(meals_repo):
    """Test whitespace notes are dropped."""
    meal = Meal("Toast", 250, date=datetime(2025, 5, 14), notes="   ")
    meals_repo.save(meal)
    assert meals_repo.get(meal.meal_id).notes is None


def test_save_updates_existing(meals_repo):
    """Test saving again updates in place."""
    meal = Meal("Toast", 250, date=datetime(2025, 5, 14))
    meals_repo.save(meal)

    meal.calories = 300
    result = meals_repo.save(meal)

    assert result.message == "Updated meal 'Toast'"
    assert len(meals_repo) == 1
    assert meals_repo.get(meal.meal_id).calories == 300


def test_list_newest_first_undated_last(meals_repo):
    """Test listing order."""
    meals_repo.save(Meal("Old", 100, date=datetime(2025, 5, 1)))
    meals_repo.save(Meal("New", 100, date=datetime(2025, 5, 10)))
    meals_repo.save(Meal("Mid", 100, date=datetime(2025, 5, 5)))

    assert [m.name for m in meals_repo.list()] == ["New", "Mid", "Old"]


def test_list_bounds_and_predicate(meals_repo):
    """Test date bounds are half-open and predicates apply."""
    meals_repo.save(Meal("A", 100, date=datetime(2025, 5, 1), mealtype="Lunch"))
    meals_repo.save(Meal("B", 100, date=datetime(2025, 5, 2), mealtype="Dinner"))
    meals_repo.save(Meal("C", 100, date=datetime(2025, 5, 3), mealtype="Lunch"))

    window = meals_repo.list(start=datetime(2025, 5, 1), end=datetime(2025, 5, 3))
    assert [m.name for m in window] == ["B", "A"]

    lunches = meals_repo.list(lambda m: m.mealtype == "Lunch")
    assert [m.name for m in lunches] == ["C", "A"]


def test_load_coerces_bad_numbers(tmp_path):
    """Test non-numeric nutrient cells load as zero."""
    path = tmp_path / "meals.csv"
    path.write_text(
        "meal_id,name,calories,protein,carbs,fat,date\n"
        "m1,Soup,abc,5,,2,2025-05-14\n"
        "m2,Bread,200,7,40,1,\n"
    )
    repo = MealRepository(path)

    soup = repo.get("m1")
    assert soup.calories == 0
    assert soup.carbs == 0
    assert soup.category_id is None

    bread = repo.get("m2")
    assert bread.date is None
    assert [m.name for m in repo.list()] == ["Soup", "Bread"]


def test_failed_write_leaves_meal_untouched(meals_repo, monkeypatch):
    """Test a write error does not assign an id or truncate the date."""
    def refuse(self, *args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(pd.DataFrame, "to_csv", refuse)

    meal = Meal("Toast", 250, date=datetime(2025, 5, 14, 8, 45), notes="  ")
    result = meals_repo.save(meal)

    assert not result
    assert "disk full" in result.message
    assert meal.meal_id is None
    assert meal.date == datetime(2025, 5, 14, 8, 45)
    assert meal.notes == "  "
    assert len(meals_repo) == 0


def test_load_treats_infinite_numbers_as_zero(tmp_path):
    """Test inf cells in the CSV load as zero."""
    path = tmp_path / "meals.csv"
    path.write_text(
        "meal_id,name,calories,protein,carbs,fat,date\n"
        "m1,Feast,inf,-inf,10,2,2025-05-14\n"
    )
    feast = MealRepository(path).get("m1")
    assert feast.calories == 0
    assert feast.protein == 0
    assert feast.carbs == 10


def test_load_drops_timezone_offsets(tmp_path):
    """Test dates written with an offset load as naive datetimes."""
    path = tmp_path / "meals.csv"
    path.write_text(
        "meal_id,name,calories,protein,carbs,fat,date\n"
        "m1,Soup,300,5,20,2,2025-05-14T08:00:00+02:00\n"
        "m2,Bread,200,7,40,1,2025-05-13\n"
    )
    repo = MealRepository(path)

    assert repo.get("m1").date == datetime(2025, 5, 14, 8, 0)
    assert [m.name for m in repo.list(start=datetime(2025, 5, 14))] == ["Soup"]


def test_delete(meals_repo):
    """Test deleting a meal."""
    meal = Meal("Toast", 250, date=datetime(2025, 5, 14))
    meals_repo.save(meal)

    result = meals_repo.delete(meal.meal_id)
    assert result.message == "Deleted meal 'Toast'"
    assert meals_repo.get(meal.meal_id) is None
    assert MealRepository(meals_repo.filepath).list() == []


def test_delete_unknown(meals_repo):
    """Test deleting an unknown id fails."""
    assert not meals_repo.delete("nope")


def test_reload_picks_up_external_changes(meals_repo):
    """Test reload discards cached rows."""
    meals_repo.save(Meal("Toast", 250, date=datetime(2025, 5, 14)))
    other = MealRepository(meals_repo.filepath)
    other.save(Meal("Jam", 50, date=datetime(2025, 5, 14)))

    assert len(meals_repo) == 1
    meals_repo.reload()
    assert len(meals_repo) == 2


# CategoryRepository
def test_categories_missing_file(categories_repo):
    """Test missing JSON is an empty index."""
    assert categories_repo.list() == []


def test_category_save_and_find(categories_repo):
    """Test saving and finding by name."""
    result = categories_repo.save(Category("  Homemade ", "house"))
    assert result.message == "Saved category 'Homemade'"

    found = categories_repo.find_by_name("homemade")
    assert found.category_id == result.record_id
    assert categories_repo.icon_for(found.category_id) == "house"
    assert categories_repo.icon_for(None) == "tag"


def test_category_save_requires_name(categories_repo):
    """Test blank names are refused."""
    assert not categories_repo.save(Category(" "))


def test_category_file_format(categories_repo):
    """Test JSON maps id to name and icon."""
    result = categories_repo.save(Category("Fast food", "bag"))
    data = json.loads(categories_repo.filepath.read_text())
    assert data == {result.record_id: {"name": "Fast food", "icon_name": "bag"}}


def test_category_list_sorted(categories_repo):
    """Test listing is alphabetical."""
    categories_repo.save(Category("Snacks"))
    categories_repo.save(Category("breakfast"))
    assert [c.name for c in categories_repo.list()] == ["breakfast", "Snacks"]


def test_category_delete_uncategorizes_meals(categories_repo, meals_repo):
    """Test deleting a category clears meal references."""
    cat = Category("Homemade")
    categories_repo.save(cat)

    tagged = Meal("Stew", 600, date=datetime(2025, 5, 14), category_id=cat.category_id)
    other = Meal("Toast", 250, date=datetime(2025, 5, 14))
    meals_repo.save(tagged)
    meals_repo.save(other)

    result = categories_repo.delete(cat.category_id)

    assert result.message == "Deleted category 'Homemade' (1 meal(s) uncategorized)"
    assert categories_repo.get(cat.category_id) is None
    assert meals_repo.get(tagged.meal_id).category_id is None
    assert len(meals_repo) == 2


def test_category_delete_unknown(categories_repo):
    """Test deleting an unknown category fails."""
    assert not categories_repo.delete("nope")


def test_category_bad_json(tmp_path, capsys):
    """Test unreadable JSON loads as empty with a warning."""
    path = tmp_path / "categories.json"
    path.write_text("{not json")

    assert CategoryRepository(path).list() == []
    assert "Warning" in capsys.readouterr().out
