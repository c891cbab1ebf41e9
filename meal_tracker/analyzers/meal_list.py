"""
Queries behind the daily meal list: one day at a time, free text search,
meal type filter and grouping by meal type.
"""
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from meal_tracker.models import (
    Meal,
    Category,
    NutritionTotals,
    DEFAULT_MEAL_TYPE,
    start_of_day,
    as_datetime,
)
from meal_tracker.analyzers.nutrition_aggregator import totals


def day_bounds(day) -> Tuple[datetime, datetime]:
    """
    Half-open bounds of a calendar day.

    Args:
        day: Any date or datetime within the day

    Returns:
        (start of day, start of next day)
    """
    start = start_of_day(day)
    return start, start + timedelta(days=1)


def meals_for_day(meals: Iterable[Meal], day) -> List[Meal]:
    """
    Meals dated on `day`, earliest first.

    Args:
        meals: Meals to search
        day: Selected day

    Returns:
        Meals with start <= date < next day start
    """
    start, end = day_bounds(day)
    selected = []
    for meal in meals:
        moment = as_datetime(meal.date)
        if moment is None:
            continue
        if start <= moment < end:
            selected.append((moment, meal))
    selected.sort(key=lambda pair: pair[0])
    return [meal for _, meal in selected]


def category_name(meal: Meal, categories: Optional[Mapping[str, Category]]) -> Optional[str]:
    """Resolve a meal's category name through the category index."""
    if not meal.category_id or not categories:
        return None
    category = categories.get(meal.category_id)
    return category.name if category else None


def matches_search(meal: Meal, text: str,
                   categories: Optional[Mapping[str, Category]] = None) -> bool:
    """
    Case-insensitive match on meal name or category name.

    An empty search matches every meal.
    """
    if not text:
        return True

    needle = text.lower()
    if meal.name and needle in meal.name.lower():
        return True

    cat_name = category_name(meal, categories)
    return bool(cat_name and needle in cat_name.lower())


def filter_meals(meals: Iterable[Meal], search_text: str = "",
                 meal_type: Optional[str] = None,
                 categories: Optional[Mapping[str, Category]] = None) -> List[Meal]:
    """
    Apply search text and meal type filter together.

    Args:
        meals: Meals to filter
        search_text: Substring of meal or category name ("" for any)
        meal_type: Exact meal type (None for any)
        categories: Category index for name lookups

    Returns:
        Matching meals in input order
    """
    return [
        meal for meal in meals
        if matches_search(meal, search_text, categories)
        and (meal_type is None or meal.mealtype == meal_type)
    ]


def group_by_meal_type(meals: Iterable[Meal]) -> Dict[str, List[Meal]]:
    """Group meals by type, "Other" for meals without one."""
    groups: Dict[str, List[Meal]] = {}
    for meal in meals:
        groups.setdefault(meal.type_or_other, []).append(meal)
    return groups


def sorted_meal_types(groups: Mapping[str, List[Meal]]) -> List[str]:
    """Group keys in alphabetical order for display."""
    return sorted(groups.keys())


def day_totals(meals: Iterable[Meal]) -> NutritionTotals:
    """Totals for a day's meals (NaN values count as zero)."""
    return totals(meals)


def calorie_progress(total: float, target: float) -> Tuple[float, str]:
    """
    Progress towards the daily calorie target.

    Returns:
        (ratio, band) where band is "green" below 70%, "yellow" below 90%,
        otherwise "red"
    """
    ratio = total / target if target > 0 else 0.0

    if ratio < 0.7:
        band = "green"
    elif ratio < 0.9:
        band = "yellow"
    else:
        band = "red"
    return ratio, band


def format_day_label(day, today) -> str:
    """
    Friendly label for a day relative to today.

    Example:
        >>> format_day_label(datetime(2025, 5, 12), datetime(2025, 5, 13, 9, 30))
        'Yesterday'
    """
    target = start_of_day(day)
    current = start_of_day(today)
    delta = (target - current).days

    if delta == 0:
        return "Today"
    if delta == -1:
        return "Yesterday"
    if delta == 1:
        return "Tomorrow"
    return f"{target:%b} {target.day}, {target.year}"


# Window for the "recent meals" quick-add list
RECENT_DAYS = 14


def recent_meals(meals: Iterable[Meal], today, search_text: str = "",
                 days: int = RECENT_DAYS) -> List[Meal]:
    """
    Meals from the last `days` days, newest first, for quick re-logging.

    Args:
        meals: Meals to search
        today: Current moment
        search_text: Case-insensitive substring of the meal name
        days: Look-back window

    Returns:
        Matching meals
    """
    cutoff = as_datetime(today) - timedelta(days=days)
    needle = search_text.lower()

    selected = []
    for meal in meals:
        moment = as_datetime(meal.date)
        if moment is None or moment < cutoff:
            continue
        if needle and needle not in (meal.name or "").lower():
            continue
        selected.append((moment, meal))

    selected.sort(key=lambda pair: pair[0], reverse=True)
    return [meal for _, meal in selected]


def copy_meal(meal: Meal, day) -> Meal:
    """
    New, unsaved meal with the same contents logged on another day.

    Example:
        >>> src = Meal("Toast", 250, mealtype="Breakfast", meal_id="abc")
        >>> copy_meal(src, datetime(2025, 5, 14)).meal_id is None
        True
    """
    return Meal(
        name=meal.name,
        calories=meal.calories,
        protein=meal.protein,
        carbs=meal.carbs,
        fat=meal.fat,
        date=start_of_day(day),
        mealtype=meal.mealtype or DEFAULT_MEAL_TYPE,
        notes=meal.notes,
        image_data=meal.image_data,
        category_id=meal.category_id,
    )
