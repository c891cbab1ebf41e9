"""
Meal commands: add, edit, delete, day view, search and re-logging recent meals.
"""
import re
import shlex
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple

from .base import Command, register_command
from meal_tracker.models import (
    Meal,
    MEAL_TYPES,
    DEFAULT_MEAL_TYPE,
    start_of_day,
)
from meal_tracker.analyzers import (
    meals_for_day,
    filter_meals,
    group_by_meal_type,
    sorted_meal_types,
    day_totals,
    calorie_progress,
    format_day_label,
    recent_meals,
    copy_meal,
)
from meal_tracker.analyzers.insights import CALORIE_TARGET

# key=value field names accepted by add/edit
FIELD_ALIASES = {
    "name": "name",
    "cal": "calories",
    "calories": "calories",
    "p": "protein",
    "protein": "protein",
    "c": "carbs",
    "carbs": "carbs",
    "f": "fat",
    "fat": "fat",
    "type": "mealtype",
    "mealtype": "mealtype",
    "date": "date",
    "cat": "category",
    "category": "category",
    "notes": "notes",
}

NUMERIC_FIELDS = ("calories", "protein", "carbs", "fat")


def normalize_meal_type(text: str) -> str:
    """
    Map user input onto a known meal type when possible.

    Example:
        >>> normalize_meal_type("dinner")
        'Dinner'
        >>> normalize_meal_type("Brunch")
        'Brunch'
    """
    for meal_type in MEAL_TYPES:
        if text.strip().lower() == meal_type.lower():
            return meal_type
    return text.strip()


def parse_day(text: str, today: datetime) -> datetime:
    """
    Parse "today", "yesterday", "tomorrow" or YYYY-MM-DD.

    Raises:
        ValueError: If the text is not a recognized day
    """
    token = text.strip().lower()
    base = start_of_day(today)

    if token == "today":
        return base
    if token == "yesterday":
        return base - timedelta(days=1)
    if token == "tomorrow":
        return base + timedelta(days=1)
    if re.match(r"^\d{4}-\d{2}-\d{2}$", token):
        return datetime.strptime(token, "%Y-%m-%d")

    raise ValueError(f"Invalid date: '{text}' (use YYYY-MM-DD, today, yesterday)")


def parse_meal_fields(args: str, today: datetime) -> Tuple[List[str], Dict[str, Any]]:
    """
    Split command arguments into positional words and key=value fields.

    Args:
        args: Raw argument string, e.g. '"Chicken salad" 450 p=35 type=lunch'
        today: Current moment (for relative dates)

    Returns:
        (positional tokens, fields keyed by Meal attribute name)

    Raises:
        ValueError: On unknown keys or malformed values
    """
    tokens = shlex.split(args)
    positional = []
    fields: Dict[str, Any] = {}

    for token in tokens:
        if "=" not in token:
            positional.append(token)
            continue

        key, value = token.split("=", 1)
        field = FIELD_ALIASES.get(key.strip().lower())
        if field is None:
            raise ValueError(f"Unknown field: '{key}'")

        if field in NUMERIC_FIELDS:
            try:
                fields[field] = float(value)
            except ValueError:
                raise ValueError(f"{field} must be a number, got '{value}'")
        elif field == "mealtype":
            fields[field] = normalize_meal_type(value) or None
        elif field == "date":
            fields[field] = parse_day(value, today)
        else:
            fields[field] = value

    return positional, fields


class MealCommandMixin:
    """Display and lookup helpers shared by meal commands."""

    def _category_label(self, meal: Meal) -> str:
        category = self.ctx.categories.get(meal.category_id)
        return category.name if category else ""

    def _format_meal_row(self, number: int, meal: Meal, show_date: bool = False) -> str:
        """One numbered line for a meal listing."""
        parts = [f"{number:>3}. {meal.name[:24]:<24} {meal.calories:>6.0f} cal"]
        parts.append(f"P {meal.protein:.0f}g  C {meal.carbs:.0f}g  F {meal.fat:.0f}g")

        extras = []
        if show_date and meal.date:
            extras.append(meal.date.strftime("%Y-%m-%d"))
        if show_date:
            extras.append(meal.type_or_other)
        label = self._category_label(meal)
        if label:
            extras.append(label)
        if meal.image_data:
            extras.append("photo")
        if extras:
            parts.append(f"[{', '.join(extras)}]")

        return "  ".join(parts)

    def _print_listing(self, meals: List[Meal], show_date: bool = True) -> None:
        """Print a flat numbered listing and remember it."""
        for i, meal in enumerate(meals, 1):
            print(self._format_meal_row(i, meal, show_date=show_date))
        self.ctx.remember_listing(meals)

    def _resolve_category(self, name: Optional[str]) -> Tuple[bool, Optional[str]]:
        """
        Look up a category id by name.

        Returns:
            (ok, category id); ok is False if the name is unknown
        """
        if name is None:
            return True, None
        if name.strip().lower() in ("", "none", "-"):
            return True, None

        category = self.ctx.categories.find_by_name(name)
        if category is None:
            print(f"Unknown category: '{name}'. Use 'category add {name}' first.")
            return False, None
        return True, category.category_id


@register_command
class AddCommand(MealCommandMixin, Command):
    """Log a new meal."""

    name = ("add", "a")
    help_text = "Log a meal (add <name> <calories> [p= c= f= type= date= cat= notes=])"

    def execute(self, args: str) -> None:
        """
        Log a meal.

        Args:
            args: Name and calories, then optional key=value fields
                  Examples:
                    add Oatmeal 350 p=12 c=60 f=6 type=breakfast
                    add "Chicken salad" 450 p=35 date=yesterday cat=Homemade
        """
        try:
            positional, fields = parse_meal_fields(args, self.ctx.now())
        except ValueError as e:
            print(f"\n{e}\n")
            return

        if "calories" not in fields and len(positional) >= 2:
            try:
                fields["calories"] = float(positional[-1])
                positional = positional[:-1]
            except ValueError:
                pass

        name = fields.pop("name", " ".join(positional))
        if not name or "calories" not in fields:
            print("\nUsage: add <name> <calories> [p=.. c=.. f=.. type=.. date=.. cat=.. notes=..]\n")
            return

        ok, category_id = self._resolve_category(fields.pop("category", None))
        if not ok:
            return

        meal = Meal(
            name=name,
            calories=fields["calories"],
            protein=fields.get("protein", 0.0),
            carbs=fields.get("carbs", 0.0),
            fat=fields.get("fat", 0.0),
            date=fields.get("date", self.ctx.now()),
            mealtype=fields.get("mealtype", DEFAULT_MEAL_TYPE),
            notes=fields.get("notes"),
            category_id=category_id,
        )

        result = self.ctx.meals.save(meal)
        if result:
            print(f"\n{result.message} on {meal.date:%Y-%m-%d}.\n")
        else:
            print(f"\nFailed: {result.message}\n")


@register_command
class EditCommand(MealCommandMixin, Command):
    """Change fields of a logged meal."""

    name = ("edit", "e")
    help_text = "Edit a meal (edit <#|id> field=value ...)"

    def execute(self, args: str) -> None:
        """
        Edit a meal from the last listing.

        Args:
            args: Meal number (or id) followed by key=value fields
                  Example: edit 2 cal=520 notes="extra dressing"
        """
        try:
            positional, fields = parse_meal_fields(args, self.ctx.now())
        except ValueError as e:
            print(f"\n{e}\n")
            return

        if not positional or not fields:
            print("\nUsage: edit <#|id> field=value ...\n")
            return

        meal = self.ctx.resolve_meal(positional[0])
        if meal is None:
            print(f"\nNo meal '{positional[0]}' (list meals with 'day' or 'search' first)\n")
            return

        if "category" in fields:
            ok, category_id = self._resolve_category(fields.pop("category"))
            if not ok:
                return
            meal.category_id = category_id

        for field, value in fields.items():
            setattr(meal, field, value)

        result = self.ctx.meals.save(meal)
        if result:
            print(f"\n{result.message}.\n")
        else:
            print(f"\nFailed: {result.message}\n")


@register_command
class DeleteCommand(MealCommandMixin, Command):
    """Delete logged meals."""

    name = ("delete", "del", "rm")
    help_text = "Delete meals (delete <#|id> [#|id ...])"

    def execute(self, args: str) -> None:
        """
        Delete one or more meals from the last listing.

        Args:
            args: Meal numbers or ids separated by spaces
        """
        refs = args.split()
        if not refs:
            print("\nUsage: delete <#|id> [#|id ...]\n")
            return

        # Resolve everything first so numbering stays valid while deleting
        targets = []
        for ref in refs:
            meal = self.ctx.resolve_meal(ref)
            if meal is None:
                print(f"No meal '{ref}' - skipped")
                continue
            targets.append(meal)

        print(f"Deleting meals: {[m.name or 'Unnamed' for m in targets]}")

        deleted = 0
        for meal in targets:
            result = self.ctx.meals.delete(meal.meal_id)
            if result:
                deleted += 1
            else:
                print(f"Failed to delete meal: {result.message}")

        self.ctx.last_listing = [m for m in self.ctx.last_listing
                                 if m.meal_id not in {t.meal_id for t in targets}]
        print(f"\nDeleted {deleted} meal(s).\n")


@register_command
class DayCommand(MealCommandMixin, Command):
    """Show meals logged on one day."""

    name = ("day", "d", "list")
    help_text = "Show a day's meals (day [today|prev|next|YYYY-MM-DD] [type=..])"

    def execute(self, args: str) -> None:
        """
        Show the selected day's meals grouped by meal type.

        Args:
            args: Optional day selector and type filter
                  Examples:
                    day
                    day prev
                    day 2025-05-13 type=dinner
        """
        now = self.ctx.now()
        try:
            positional, fields = parse_meal_fields(args, now)
        except ValueError as e:
            print(f"\n{e}\n")
            return

        for token in positional:
            lowered = token.lower()
            if lowered in ("prev", "previous", "-"):
                self.ctx.shift_day(-1)
            elif lowered in ("next", "+"):
                self.ctx.shift_day(1)
            else:
                try:
                    self.ctx.select_day(parse_day(token, now))
                except ValueError as e:
                    print(f"\n{e}\n")
                    return

        day = self.ctx.selected_day
        all_day = meals_for_day(self.ctx.meals.list(), day)
        shown = filter_meals(all_day, meal_type=fields.get("mealtype"))

        print(f"\n=== {format_day_label(day, now)} ({day:%Y-%m-%d}) ===")

        totals = day_totals(all_day)
        ratio, band = calorie_progress(totals.calories, CALORIE_TARGET)
        print(f"{totals.format_summary()}  ({ratio:.0%} of {CALORIE_TARGET} cal, {band})")

        if not shown:
            print("No meals recorded for this day.\n")
            self.ctx.remember_listing([])
            return

        groups = group_by_meal_type(shown)
        listing = []
        for meal_type in sorted_meal_types(groups):
            print(f"\n{meal_type}:")
            for meal in groups[meal_type]:
                listing.append(meal)
                print(self._format_meal_row(len(listing), meal))

        self.ctx.remember_listing(listing)
        print()


@register_command
class SearchCommand(MealCommandMixin, Command):
    """Search all meals by name or category."""

    name = ("search", "s", "find")
    help_text = "Search meals by name or category (search <text> [type=..])"

    def execute(self, args: str) -> None:
        """
        Search every logged meal.

        Args:
            args: Search text and optional type filter
        """
        try:
            positional, fields = parse_meal_fields(args, self.ctx.now())
        except ValueError as e:
            print(f"\n{e}\n")
            return

        text = " ".join(positional)
        if not text and "mealtype" not in fields:
            print("\nUsage: search <text> [type=..]\n")
            return

        matches = filter_meals(
            self.ctx.meals.list(),
            search_text=text,
            meal_type=fields.get("mealtype"),
            categories=self.ctx.categories.index(),
        )

        print(f"\n=== Search: {text or '(all)'} ===")
        if not matches:
            print("No meals match your search.\n")
            self.ctx.remember_listing([])
            return

        self._print_listing(matches)
        print(f"\n{len(matches)} match(es).\n")


@register_command
class RecentCommand(MealCommandMixin, Command):
    """List recent meals for quick re-logging."""

    name = ("recent", "r")
    help_text = "List meals from the last 14 days (recent [text])"

    def execute(self, args: str) -> None:
        """Show recent meals, optionally filtered by name."""
        meals = recent_meals(self.ctx.meals.list(), self.ctx.now(), search_text=args.strip())

        print("\n=== Recent Meals ===")
        if not meals:
            print("No recent meals.\n")
            self.ctx.remember_listing([])
            return

        self._print_listing(meals)
        print("\nUse 'repeat <#>' to log one again.\n")


@register_command
class RepeatCommand(MealCommandMixin, Command):
    """Log a listed meal again."""

    name = ("repeat", "again")
    help_text = "Log a listed meal again (repeat <#|id> [date=..])"

    def execute(self, args: str) -> None:
        """
        Copy a meal from the last listing onto another day.

        Args:
            args: Meal number or id, optional date=
        """
        try:
            positional, fields = parse_meal_fields(args, self.ctx.now())
        except ValueError as e:
            print(f"\n{e}\n")
            return

        if not positional:
            print("\nUsage: repeat <#|id> [date=..]\n")
            return

        source = self.ctx.resolve_meal(positional[0])
        if source is None:
            print(f"\nNo meal '{positional[0]}' (list meals with 'recent' first)\n")
            return

        meal = copy_meal(source, fields.get("date", self.ctx.now()))
        result = self.ctx.meals.save(meal)
        if result:
            print(f"\n{result.message} on {meal.date:%Y-%m-%d}.\n")
        else:
            print(f"\nFailed: {result.message}\n")
