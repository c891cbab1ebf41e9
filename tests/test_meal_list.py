"""
Tests for day view, search and recent meal queries.
"""
from datetime import datetime

import pytest
from meal_tracker.models import Meal, Category
from meal_tracker.analyzers import (
    day_bounds,
    meals_for_day,
    matches_search,
    filter_meals,
    group_by_meal_type,
    sorted_meal_types,
    day_totals,
    calorie_progress,
    format_day_label,
    recent_meals,
    copy_meal,
)

TODAY = datetime(2025, 5, 14, 9, 0)

CATEGORIES = {
    "c1": Category("Homemade", "house", "c1"),
    "c2": Category("Fast food", "bag", "c2"),
}


@pytest.fixture
def meals():
    return [
        Meal("Burger", 900, date=datetime(2025, 5, 14, 19), mealtype="Dinner", category_id="c2"),
        Meal("Eggs", 300, date=datetime(2025, 5, 14, 7), mealtype="Breakfast", category_id="c1"),
        Meal("Chicken salad", 450, date=datetime(2025, 5, 13), mealtype="Lunch", category_id="c1"),
        Meal("Crisps", 150, date=datetime(2025, 5, 14, 15)),
        Meal("Old stew", 600, date=datetime(2025, 4, 1), mealtype="Dinner"),
        Meal("Undated", 100),
    ]


# Day view
def test_day_bounds():
    """Test bounds are half-open around one day."""
    start, end = day_bounds(TODAY)
    assert start == datetime(2025, 5, 14)
    assert end == datetime(2025, 5, 15)


def test_meals_for_day_sorted(meals):
    """Test only the day's meals, earliest first."""
    names = [m.name for m in meals_for_day(meals, TODAY)]
    assert names == ["Eggs", "Crisps", "Burger"]


def test_meals_for_day_empty(meals):
    """Test a day with nothing logged."""
    assert meals_for_day(meals, datetime(2025, 5, 10)) == []


def test_group_by_meal_type_other(meals):
    """Test untyped meals land under Other."""
    groups = group_by_meal_type(meals_for_day(meals, TODAY))
    assert sorted_meal_types(groups) == ["Breakfast", "Dinner", "Other"]
    assert [m.name for m in groups["Other"]] == ["Crisps"]


def test_day_totals(meals):
    """Test totals over one day."""
    assert day_totals(meals_for_day(meals, TODAY)).calories == 1350


@pytest.mark.parametrize("total, band", [
    (1000, "green"),
    (1400, "yellow"),
    (1799, "yellow"),
    (1800, "red"),
    (2500, "red"),
])
def test_calorie_progress_bands(total, band):
    """Test colour bands at 70% and 90% of target."""
    ratio, result = calorie_progress(total, 2000)
    assert result == band
    assert ratio == total / 2000


def test_calorie_progress_zero_target():
    """Test zero target does not divide by zero."""
    assert calorie_progress(500, 0) == (0.0, "green")


@pytest.mark.parametrize("day, label", [
    (datetime(2025, 5, 14), "Today"),
    (datetime(2025, 5, 13, 22), "Yesterday"),
    (datetime(2025, 5, 15), "Tomorrow"),
    (datetime(2025, 5, 2), "May 2, 2025"),
])
def test_format_day_label(day, label):
    """Test relative day labels."""
    assert format_day_label(day, TODAY) == label


# Search
def test_matches_search_name_case_insensitive():
    """Test name substring match ignores case."""
    assert matches_search(Meal("Chicken salad", 450), "SALAD")


def test_matches_search_category_name(meals):
    """Test category name matches through the index."""
    burger = meals[0]
    assert matches_search(burger, "fast", CATEGORIES)
    assert not matches_search(burger, "fast")


def test_matches_search_empty_text():
    """Test empty search matches everything."""
    assert matches_search(Meal("Anything", 1), "")


def test_filter_meals_text_and_type(meals):
    """Test search text and meal type combine."""
    result = filter_meals(meals, search_text="home", meal_type="Lunch", categories=CATEGORIES)
    assert [m.name for m in result] == ["Chicken salad"]


def test_filter_meals_type_only(meals):
    """Test type filter keeps input order."""
    result = filter_meals(meals, meal_type="Dinner")
    assert [m.name for m in result] == ["Burger", "Old stew"]


# Recent meals
def test_recent_meals_window_and_order(meals):
    """Test last 14 days, newest first, undated skipped."""
    names = [m.name for m in recent_meals(meals, TODAY)]
    assert names == ["Burger", "Crisps", "Eggs", "Chicken salad"]


def test_recent_meals_search(meals):
    """Test recent list filtered by name."""
    names = [m.name for m in recent_meals(meals, TODAY, search_text="CHICK")]
    assert names == ["Chicken salad"]


def test_copy_meal():
    """Test copy is a new meal on the new day."""
    source = Meal("Toast", 250, protein=8, date=datetime(2025, 5, 1), notes="butter",
                  category_id="c1", meal_id="abc")
    copy = copy_meal(source, datetime(2025, 5, 14, 12, 30))

    assert copy.meal_id is None
    assert copy.date == datetime(2025, 5, 14)
    assert copy.mealtype == "Lunch"
    assert copy.name == "Toast"
    assert copy.protein == 8
    assert copy.notes == "butter"
    assert copy.category_id == "c1"
