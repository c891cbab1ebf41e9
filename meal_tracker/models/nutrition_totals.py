"""
Models for nutrient totals and aggregated statistics.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple


@dataclass
class NutritionTotals:
    """
    Summed nutrients for a set of meals.

    Attributes:
        calories: Total calories
        protein: Total protein in grams
        carbs: Total carbohydrates in grams
        fat: Total fat in grams

    Example:
        >>> totals = NutritionTotals(calories=2000, protein=150, carbs=200, fat=70)
        >>> print(totals.calories)
        2000
    """
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary format."""
        return {
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
        }

    def add(self, other: 'NutritionTotals') -> 'NutritionTotals':
        """
        Add another NutritionTotals to this one (returns new instance).

        Example:
            >>> t1 = NutritionTotals(calories=500, protein=30)
            >>> t2 = NutritionTotals(calories=300, protein=20)
            >>> (t1 + t2).calories
            800
        """
        return NutritionTotals(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            carbs=self.carbs + other.carbs,
            fat=self.fat + other.fat,
        )

    def __add__(self, other: 'NutritionTotals') -> 'NutritionTotals':
        """Support + operator."""
        return self.add(other)

    def masked(self) -> 'NutritionTotals':
        """Return a copy with any NaN or infinite field collapsed to 0."""
        return NutritionTotals(
            calories=_zero_if_not_finite(self.calories),
            protein=_zero_if_not_finite(self.protein),
            carbs=_zero_if_not_finite(self.carbs),
            fat=_zero_if_not_finite(self.fat),
        )

    @property
    def macro_grams(self) -> float:
        """Protein + carbs + fat."""
        return self.protein + self.carbs + self.fat

    def format_summary(self) -> str:
        """
        Format as human-readable summary string.

        Example:
            >>> NutritionTotals(calories=2000, protein=150).format_summary()
            'Cal: 2000 | P: 150g | C: 0g | F: 0g'
        """
        return (
            f"Cal: {int(self.calories)} | "
            f"P: {int(self.protein)}g | "
            f"C: {int(self.carbs)}g | "
            f"F: {int(self.fat)}g"
        )

    def __str__(self) -> str:
        """String representation."""
        return self.format_summary()


def _zero_if_not_finite(value: float) -> float:
    return value if math.isfinite(value) else 0.0


@dataclass
class StatsResult:
    """
    Everything the statistics screen shows for one query.

    Attributes:
        range_days: Length of the requested window
        meal_type_filter: Meal type filter (None for all)
        meal_count: Number of meals after filtering
        day_count: Distinct days with at least one meal
        totals: Summed nutrients
        average_daily_calories: Calories per logged day
        meals_per_day: Meals per logged day
        daily_series: One (day, calories) point per calendar day, oldest first
        distribution: (meal type, count) pairs, most frequent first
        macro_percentages: Share of protein/carbs/fat in total macro grams
        most_common_type: Most frequent meal type, "None" if no meals
        insights: Insight title -> message
    """
    range_days: int
    meal_type_filter: Optional[str]
    meal_count: int
    day_count: int
    totals: NutritionTotals
    average_daily_calories: float
    meals_per_day: float
    daily_series: List[Tuple[datetime, float]] = field(default_factory=list)
    distribution: List[Tuple[str, int]] = field(default_factory=list)
    macro_percentages: Dict[str, int] = field(default_factory=dict)
    most_common_type: str = "None"
    insights: Dict[str, str] = field(default_factory=dict)
