"""
Text insights derived from aggregated statistics.
"""
from typing import List, Tuple

# Reference daily intake shown as the chart target line
CALORIE_TARGET = 2000

# Average daily calorie bands
LOW_CALORIE_THRESHOLD = 1500
HIGH_CALORIE_THRESHOLD = 2500

# Average meals per day bands
LOW_FREQUENCY_THRESHOLD = 2.5
HIGH_FREQUENCY_THRESHOLD = 4.5


def consumption_pattern_insight(distribution: List[Tuple[str, int]], meal_count: int) -> str:
    """
    Describe whether one meal type dominates.

    Args:
        distribution: (meal type, count) pairs, most frequent first
        meal_count: Number of meals the distribution was built from

    Returns:
        Insight message
    """
    if distribution:
        top_type, top_count = distribution[0]
    else:
        top_type, top_count = "meals", 0

    if top_count > meal_count // 2:
        return f"You're having {top_type} more frequently than other meals."
    return "Your meal distribution is relatively balanced across different types."


def calorie_trend_insight(average_daily: float) -> str:
    """Compare average daily calories against the recommendation."""
    shown = int(average_daily)

    if average_daily < LOW_CALORIE_THRESHOLD:
        return (f"Your average daily intake of {shown} calories is below the typical "
                f"{CALORIE_TARGET} calorie recommendation.")
    elif average_daily > HIGH_CALORIE_THRESHOLD:
        return (f"Your average daily intake of {shown} calories is above the typical "
                f"{CALORIE_TARGET} calorie recommendation.")
    else:
        return f"Your average daily intake of {shown} calories is within a healthy range."


def meal_frequency_insight(meals_per_day: float) -> str:
    """Describe how many meals are logged per day."""
    shown = f"{meals_per_day:.1f}"

    if meals_per_day < LOW_FREQUENCY_THRESHOLD:
        return f"You're averaging {shown} meals per day, which is on the lower side."
    elif meals_per_day > HIGH_FREQUENCY_THRESHOLD:
        return f"You're averaging {shown} meals per day, including multiple snacks."
    else:
        return f"You're averaging {shown} meals per day, which is typical."
