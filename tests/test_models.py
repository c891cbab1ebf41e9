"""
Tests for data models.
"""
import math
from datetime import date, datetime, timedelta, timezone

import pytest
from meal_tracker.models import (
    Meal, Category, validate_meal,
    NutritionTotals, OperationResult, TimeRange,
    start_of_day, as_datetime, safe_number,
    INVALID_MEAL_MESSAGE,
)


# Helper tests
def test_start_of_day_datetime():
    """Test datetime is truncated to midnight."""
    assert start_of_day(datetime(2025, 5, 12, 18, 45, 3)) == datetime(2025, 5, 12)


def test_start_of_day_date_and_none():
    """Test plain dates are promoted and None passes through."""
    assert start_of_day(date(2025, 5, 12)) == datetime(2025, 5, 12)
    assert start_of_day(None) is None


def test_as_datetime_keeps_time():
    """Test datetimes are returned unchanged."""
    moment = datetime(2025, 5, 12, 9, 30)
    assert as_datetime(moment) == moment
    assert as_datetime(date(2025, 5, 12)) == datetime(2025, 5, 12)
    assert as_datetime("2025-05-12") is None


def test_as_datetime_drops_timezone():
    """Test aware datetimes become naive with the same wall-clock time."""
    aware = datetime(2025, 5, 12, 9, 30, tzinfo=timezone(timedelta(hours=2)))
    assert as_datetime(aware) == datetime(2025, 5, 12, 9, 30)
    assert as_datetime(aware).tzinfo is None
    assert start_of_day(aware) == datetime(2025, 5, 12)


def test_safe_number():
    """Test unusable values become zero."""
    assert safe_number(12.5) == 12.5
    assert safe_number("7") == 7.0
    assert safe_number(None) == 0.0
    assert safe_number(float("nan")) == 0.0
    assert safe_number("abc") == 0.0
    assert safe_number(float("inf")) == 0.0
    assert safe_number("-inf") == 0.0


# Meal tests
def test_meal_defaults():
    """Test optional fields default to empty."""
    meal = Meal("Oatmeal", 350)
    assert meal.protein == 0.0
    assert meal.date is None
    assert meal.mealtype is None
    assert meal.meal_id is None


def test_meal_type_or_other():
    """Test meals without a type group as Other."""
    assert Meal("Apple", 95).type_or_other == "Other"
    assert Meal("Apple", 95, mealtype="Snack").type_or_other == "Snack"


def test_meal_day_property():
    """Test day is the start of the meal's date."""
    meal = Meal("Soup", 300, date=datetime(2025, 5, 12, 13, 15))
    assert meal.day == datetime(2025, 5, 12)


def test_meal_total_nutrients_ignores_nan():
    """Test NaN macros count as zero."""
    meal = Meal("Toast", 250, protein=8, carbs=float("nan"), fat=3)
    assert meal.total_nutrients == 11


def test_meal_to_dict_keys():
    """Test flat record has every column."""
    data = Meal("Toast", 250).to_dict()
    assert set(data) == {
        "meal_id", "name", "calories", "protein", "carbs", "fat",
        "date", "mealtype", "notes", "image_data", "category_id",
    }


# Validation tests
def test_validate_meal_ok():
    """Test a valid meal has no errors."""
    assert validate_meal(Meal("Salad", 450, protein=35)) == []


def test_validate_meal_blank_name():
    """Test whitespace-only name is rejected."""
    errors = validate_meal(Meal("   ", 450))
    assert errors == ["Meal name is required"]


@pytest.mark.parametrize("calories", [0, -10, float("nan"), float("inf"), None, "abc"])
def test_validate_meal_bad_calories(calories):
    """Test calories must be a positive number."""
    errors = validate_meal(Meal("Salad", calories))
    assert "Calories must be a positive number" in errors


def test_validate_meal_negative_macro():
    """Test negative macros are rejected."""
    errors = validate_meal(Meal("Salad", 450, fat=-1))
    assert errors == ["Fat must be zero or more"]


def test_validate_meal_infinite_macro():
    """Test infinite macros are rejected."""
    errors = validate_meal(Meal("Salad", 450, protein=float("inf")))
    assert errors == ["Protein must be zero or more"]


def test_invalid_meal_message_text():
    """Test the user-facing validation message."""
    assert INVALID_MEAL_MESSAGE == "Please provide a valid meal name and positive calories."


# Category tests
def test_category_to_dict():
    """Test Category serialization."""
    assert Category("Homemade", "house").to_dict() == {"name": "Homemade", "icon_name": "house"}


def test_category_from_dict_camel_case_icon():
    """Test iconName key is accepted."""
    cat = Category.from_dict({"name": "Fast food", "iconName": "bag"}, "c1")
    assert cat.icon_name == "bag"
    assert cat.category_id == "c1"


def test_category_from_dict_default_icon():
    """Test missing icon falls back to the tag icon."""
    assert Category.from_dict({"name": "Misc"}).icon_name == "tag"


# NutritionTotals tests
def test_nutrition_totals_add():
    """Test adding totals."""
    t1 = NutritionTotals(calories=500, protein=30)
    t2 = NutritionTotals(calories=300, protein=20, fat=5)
    result = t1 + t2
    assert result.calories == 800
    assert result.protein == 50
    assert result.fat == 5


def test_nutrition_totals_masked():
    """Test NaN and infinite fields collapse to zero."""
    totals = NutritionTotals(calories=float("nan"), protein=10, fat=float("inf")).masked()
    assert totals.calories == 0
    assert totals.protein == 10
    assert not math.isnan(totals.calories)
    assert totals.fat == 0


def test_nutrition_totals_format():
    """Test summary formatting."""
    totals = NutritionTotals(calories=2000.7, protein=150, carbs=200, fat=70)
    assert totals.format_summary() == "Cal: 2000 | P: 150g | C: 200g | F: 70g"
    assert str(totals) == totals.format_summary()


def test_nutrition_totals_macro_grams():
    """Test combined macro grams."""
    assert NutritionTotals(protein=10, carbs=20, fat=5).macro_grams == 35


# OperationResult tests
def test_operation_result_truthiness():
    """Test results evaluate by success flag."""
    assert OperationResult.success("done", "id1")
    assert not OperationResult.failure("nope")
    assert OperationResult.success("done", "id1").record_id == "id1"


# TimeRange tests
def test_time_range_days():
    """Test preset window lengths."""
    assert TimeRange.WEEK.days == 7
    assert TimeRange.MONTH.days == 30
    assert TimeRange.YEAR.days == 365


def test_time_range_labels_and_formats():
    """Test labels and axis formats."""
    assert TimeRange.MONTH.label == "Month"
    assert TimeRange.WEEK.axis_format == "%a"
    assert TimeRange.MONTH.axis_format == "%d"
    assert TimeRange.YEAR.axis_format == "%b"


def test_time_range_parse():
    """Test parsing names and day counts."""
    assert TimeRange.parse("week") == 7
    assert TimeRange.parse("YEAR") == 365
    assert TimeRange.parse("14") == 14


@pytest.mark.parametrize("text", ["0", "-3", "fortnight"])
def test_time_range_parse_invalid(text):
    """Test bad ranges raise ValueError."""
    with pytest.raises(ValueError):
        TimeRange.parse(text)


def test_time_range_axis_format_for():
    """Test axis format picked by window length."""
    assert TimeRange.axis_format_for(7) == "%a"
    assert TimeRange.axis_format_for(14) == "%d"
    assert TimeRange.axis_format_for(90) == "%b"
