"""
Aggregation and query logic over logged meals.
"""
from . import insights
from .nutrition_aggregator import (
    filter_by_range,
    group_by_day,
    daily_series,
    totals,
    average_daily_calories,
    meals_per_day,
    meal_type_distribution,
    macro_percentage,
    aggregate,
)
from .meal_list import (
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

__all__ = [
    'insights',
    # Statistics
    'filter_by_range',
    'group_by_day',
    'daily_series',
    'totals',
    'average_daily_calories',
    'meals_per_day',
    'meal_type_distribution',
    'macro_percentage',
    'aggregate',
    # Meal list
    'day_bounds',
    'meals_for_day',
    'matches_search',
    'filter_meals',
    'group_by_meal_type',
    'sorted_meal_types',
    'day_totals',
    'calorie_progress',
    'format_day_label',
    'recent_meals',
    'copy_meal',
]
