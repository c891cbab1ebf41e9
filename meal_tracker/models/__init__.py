"""
Data models for the meal tracker application.
"""
from .meal import (
    Meal,
    Category,
    MEAL_TYPES,
    DEFAULT_MEAL_TYPE,
    OTHER_MEAL_TYPE,
    DEFAULT_CATEGORY_ICON,
    INVALID_MEAL_MESSAGE,
    start_of_day,
    as_datetime,
    safe_number,
    validate_meal,
)
from .nutrition_totals import NutritionTotals, StatsResult
from .operation_result import OperationResult, TimeRange

__all__ = [
    # Records
    'Meal',
    'Category',
    'validate_meal',
    # Constants
    'MEAL_TYPES',
    'DEFAULT_MEAL_TYPE',
    'OTHER_MEAL_TYPE',
    'DEFAULT_CATEGORY_ICON',
    'INVALID_MEAL_MESSAGE',
    # Helpers
    'start_of_day',
    'as_datetime',
    'safe_number',
    # Totals models
    'NutritionTotals',
    'StatsResult',
    # Store / query models
    'OperationResult',
    'TimeRange',
]
