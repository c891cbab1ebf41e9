"""
Nutrition aggregation over logged meals.

Filters meals by date window and meal type, groups them by calendar day
and reduces them to the totals, series and distributions shown on the
statistics screen. Every function is pure: the current moment is always
passed in as `today` and nothing here reads the clock.

Bad numbers (None, NaN) count as zero and meals without a date are left
out of anything keyed by day, so none of these functions raise on odd data.
"""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Tuple

import pandas as pd

from meal_tracker.models import (
    Meal,
    NutritionTotals,
    StatsResult,
    start_of_day,
    safe_number,
    as_datetime,
)
from meal_tracker.analyzers import insights


def filter_by_range(meals: Iterable[Meal], days: int,
                    meal_type: Optional[str] = None,
                    today: datetime = None) -> List[Meal]:
    """
    Keep meals logged within the last `days` days.

    Args:
        meals: Meals to filter
        days: Window length, must be positive
        meal_type: Only keep meals of this type (None for all)
        today: Current moment

    Returns:
        Meals with date >= today - days matching the type filter
        (empty list for a non-positive window or missing `today`)
    """
    now = as_datetime(today)
    if now is None or days is None or days <= 0:
        return []

    cutoff = now - timedelta(days=days)
    result = []

    for meal in meals:
        moment = as_datetime(meal.date)
        if moment is None:
            continue
        if moment < cutoff:
            continue
        if meal_type is not None and meal.mealtype != meal_type:
            continue
        result.append(meal)

    return result


def group_by_day(meals: Iterable[Meal]) -> Dict[datetime, List[Meal]]:
    """
    Bucket meals by the start of their day.

    Meals without a date are skipped.

    Returns:
        Mapping of day start -> meals on that day
    """
    result: Dict[datetime, List[Meal]] = {}
    for meal in meals:
        day = start_of_day(meal.date)
        if day is None:
            continue
        result.setdefault(day, []).append(meal)
    return result


def _sum_calories(meals: Iterable[Meal]) -> float:
    return sum(safe_number(meal.calories) for meal in meals)


def daily_series(meals: Iterable[Meal], days: int,
                 today: datetime) -> List[Tuple[datetime, float]]:
    """
    Calories per calendar day for the last `days` days, today included.

    Days without meals are present with a value of 0, so the series
    always has exactly `days` points ordered oldest to newest.

    Args:
        meals: Meals to sum
        days: Number of days in the series
        today: Current moment

    Returns:
        List of (day start, total calories)
    """
    end = start_of_day(as_datetime(today))
    if end is None or days is None or days <= 0:
        return []

    start = end - timedelta(days=days - 1)
    calendar = pd.date_range(start=start, end=end, freq="D")

    by_day = group_by_day(meals)

    series = []
    for stamp in calendar:
        day = stamp.to_pydatetime()
        series.append((day, _sum_calories(by_day.get(day, []))))
    return series


def totals(meals: Iterable[Meal]) -> NutritionTotals:
    """
    Sum calories and macros.

    A NaN or missing value on a single meal counts as 0 so one corrupt
    record cannot poison the aggregate.
    """
    result = NutritionTotals()
    for meal in meals:
        result = result + NutritionTotals(
            calories=safe_number(meal.calories),
            protein=safe_number(meal.protein),
            carbs=safe_number(meal.carbs),
            fat=safe_number(meal.fat),
        )
    return result.masked()


def average_daily_calories(meals: Iterable[Meal]) -> float:
    """
    Total calories divided by the number of distinct days with meals.

    Returns:
        Average, or 0 when no meal has a date
    """
    meals = list(meals)
    day_count = len(group_by_day(meals))
    if day_count == 0:
        return 0.0
    return totals(meals).calories / day_count


def meals_per_day(meals: Iterable[Meal]) -> float:
    """Meal count divided by distinct days (at least one day)."""
    meals = list(meals)
    day_count = max(1, len(group_by_day(meals)))
    return len(meals) / day_count


def meal_type_distribution(meals: Iterable[Meal]) -> List[Tuple[str, int]]:
    """
    Count meals per type, most frequent first.

    Meals without a type count as "Other". Ties keep the order in which
    the types were first seen.

    Returns:
        List of (meal type, count)
    """
    counts: "OrderedDict[str, int]" = OrderedDict()
    for meal in meals:
        key = meal.type_or_other
        counts[key] = counts.get(key, 0) + 1

    # sorted() is stable, so equal counts stay in first-seen order
    return sorted(counts.items(), key=lambda item: item[1], reverse=True)


def macro_percentage(value: float, total_protein: float,
                     total_carbs: float, total_fat: float) -> int:
    """
    Share of one macro in the combined macro grams, truncated to int.

    Returns:
        0-100, or 0 when the combined grams are zero
    """
    total = safe_number(total_protein) + safe_number(total_carbs) + safe_number(total_fat)
    if total <= 0:
        return 0
    return int(safe_number(value) / total * 100)


def aggregate(meals: Iterable[Meal], range_days: int,
              meal_type_filter: Optional[str], today: datetime) -> StatsResult:
    """
    Compute every statistic for one query.

    Args:
        meals: All meals from the store
        range_days: Window length in days
        meal_type_filter: Meal type to keep (None for all)
        today: Current moment

    Returns:
        StatsResult for the filtered meals
    """
    filtered = filter_by_range(meals, range_days, meal_type_filter, today)

    summed = totals(filtered)
    by_day = group_by_day(filtered)
    distribution = meal_type_distribution(filtered)
    average = average_daily_calories(filtered)
    frequency = meals_per_day(filtered)

    percentages = {
        "protein": macro_percentage(summed.protein, summed.protein, summed.carbs, summed.fat),
        "carbs": macro_percentage(summed.carbs, summed.protein, summed.carbs, summed.fat),
        "fat": macro_percentage(summed.fat, summed.protein, summed.carbs, summed.fat),
    }

    return StatsResult(
        range_days=range_days,
        meal_type_filter=meal_type_filter,
        meal_count=len(filtered),
        day_count=len(by_day),
        totals=summed,
        average_daily_calories=average,
        meals_per_day=frequency,
        daily_series=daily_series(filtered, range_days, today),
        distribution=distribution,
        macro_percentages=percentages,
        most_common_type=distribution[0][0] if distribution else "None",
        insights={
            "Consumption Pattern": insights.consumption_pattern_insight(distribution, len(filtered)),
            "Calorie Trend": insights.calorie_trend_insight(average),
            "Meal Frequency": insights.meal_frequency_insight(frequency),
        },
    )
