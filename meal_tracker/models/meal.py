"""
Core data models for logged meals and their categories.
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, date as date_type
from typing import Optional, Dict, Any, List

# Meal types offered by the add/edit form, in display order
MEAL_TYPES = ("Breakfast", "Lunch", "Dinner", "Snack")

# Form default for a new meal
DEFAULT_MEAL_TYPE = "Lunch"

# Grouping key for meals without a meal type
OTHER_MEAL_TYPE = "Other"

# Icon used when a meal has no category
DEFAULT_CATEGORY_ICON = "tag"

INVALID_MEAL_MESSAGE = "Please provide a valid meal name and positive calories."


def start_of_day(value) -> Optional[datetime]:
    """
    Truncate a date or datetime to midnight.

    Args:
        value: datetime, date, or None

    Returns:
        Naive datetime at 00:00 of the same day, or None
    """
    moment = as_datetime(value)
    if moment is None:
        return None
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def as_datetime(value) -> Optional[datetime]:
    """
    Promote a date to a datetime at midnight; datetimes pass through.

    Any timezone is dropped, keeping the wall-clock time, so aware and
    naive values compare.
    """
    if isinstance(value, datetime):
        return value.replace(tzinfo=None)
    if isinstance(value, date_type):
        return datetime(value.year, value.month, value.day)
    return None


def safe_number(value) -> float:
    """
    Convert a nutrient value to float, mapping None/NaN/inf/garbage to 0.

    Args:
        value: Raw value

    Returns:
        Float value, 0.0 if unusable
    """
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


@dataclass
class Category:
    """
    User-defined tag applied to meals.

    Attributes:
        name: Display name
        icon_name: Symbolic icon identifier
        category_id: Identifier assigned by the repository

    Example:
        >>> cat = Category("Homemade", "house")
        >>> cat.to_dict()
        {'name': 'Homemade', 'icon_name': 'house'}
    """
    name: str
    icon_name: str = DEFAULT_CATEGORY_ICON
    category_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format (for JSON serialization)."""
        return {
            "name": self.name,
            "icon_name": self.icon_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], category_id: Optional[str] = None) -> 'Category':
        """
        Create from dictionary format.

        Args:
            data: Dictionary with 'name' and optional 'icon_name'/'iconName'
            category_id: Identifier key the record was stored under

        Returns:
            Category instance
        """
        icon = data.get("icon_name") or data.get("iconName") or DEFAULT_CATEGORY_ICON
        return cls(
            name=str(data.get("name", "")),
            icon_name=str(icon),
            category_id=category_id,
        )


@dataclass
class Meal:
    """
    A single logged food entry.

    Attributes:
        name: Meal name
        calories: Energy in kcal
        protein: Protein in grams
        carbs: Carbohydrates in grams
        fat: Fat in grams
        date: Day the meal was eaten (None if unknown)
        mealtype: Breakfast/Lunch/Dinner/Snack or free text
        notes: Optional free text
        image_data: Optional photo as raw bytes
        category_id: Optional reference to a Category
        meal_id: Identifier assigned by the repository on first save

    Example:
        >>> meal = Meal("Oatmeal", 350, protein=12, carbs=60, fat=6)
        >>> meal.type_or_other
        'Other'
    """
    name: str
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    date: Optional[datetime] = None
    mealtype: Optional[str] = None
    notes: Optional[str] = None
    image_data: Optional[bytes] = field(default=None, repr=False)
    category_id: Optional[str] = None
    meal_id: Optional[str] = None

    @property
    def day(self) -> Optional[datetime]:
        """Start of the day this meal belongs to."""
        return start_of_day(self.date)

    @property
    def type_or_other(self) -> str:
        """Meal type used for grouping."""
        return self.mealtype or OTHER_MEAL_TYPE

    @property
    def total_nutrients(self) -> float:
        """Protein + carbs + fat in grams."""
        return safe_number(self.protein) + safe_number(self.carbs) + safe_number(self.fat)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a flat record.

        Returns:
            Dictionary keyed by the meals file columns
        """
        return {
            "meal_id": self.meal_id,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fat": self.fat,
            "date": self.date,
            "mealtype": self.mealtype,
            "notes": self.notes,
            "image_data": self.image_data,
            "category_id": self.category_id,
        }


def validate_meal(meal: Meal) -> List[str]:
    """
    Check a meal before it is saved.

    Args:
        meal: Meal to check

    Returns:
        List of problems (empty if the meal is valid)
    """
    errors = []

    if not meal.name or not str(meal.name).strip():
        errors.append("Meal name is required")

    calories = _as_float(meal.calories)
    if calories is None or not math.isfinite(calories) or calories <= 0:
        errors.append("Calories must be a positive number")

    for label, value in (("Protein", meal.protein), ("Carbs", meal.carbs), ("Fat", meal.fat)):
        number = _as_float(value)
        if number is None or not math.isfinite(number) or number < 0:
            errors.append(f"{label} must be zero or more")

    return errors


def _as_float(value) -> Optional[float]:
    """Float conversion that reports failure as None."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return None
