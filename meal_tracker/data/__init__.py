"""
Data access layer for the meal tracker.

Provides repositories for logged meals and their categories.
"""
from .meal_repository import MealRepository
from .category_repository import CategoryRepository

__all__ = [
    'MealRepository',
    'CategoryRepository',
]
