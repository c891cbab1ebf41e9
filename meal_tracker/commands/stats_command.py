"""
Stats command - nutrition statistics for a time range.
"""
from typing import List, Optional, Tuple

from .base import Command, register_command
from meal_tracker.models import TimeRange, MEAL_TYPES
from meal_tracker.analyzers import aggregate
from meal_tracker.reports import render_stats


def parse_stats_query(args: str, default_days: int) -> Tuple[int, Optional[str], List[str]]:
    """
    Pull the time range and meal type filter out of command arguments.

    Args:
        args: e.g. "month dinner" or "14 type=snack"
        default_days: Window used when none is given

    Returns:
        (days, meal type or None, unrecognized tokens)

    Raises:
        ValueError: If a numeric range is not positive
    """
    days = default_days
    meal_type = None
    leftover = []

    for token in args.split():
        value = token.split("=", 1)[1] if token.lower().startswith("type=") else token

        matched_type = next((t for t in MEAL_TYPES if t.lower() == value.lower()), None)
        if matched_type:
            meal_type = matched_type
            continue

        if value.lower() in ("all", "any"):
            meal_type = None
            continue

        try:
            days = TimeRange.parse(value)
        except ValueError:
            if value.lstrip("-").isdigit():
                raise
            leftover.append(token)

    return days, meal_type, leftover


def range_label(days: int) -> str:
    """ "Week"/"Month"/"Year" for the presets, "N days" otherwise."""
    for member in TimeRange:
        if member.days == days:
            return member.label
    return f"{days} days"


@register_command
class StatsCommand(Command):
    """Show nutrition statistics and insights."""

    name = ("stats", "st")
    help_text = "Show statistics (stats [week|month|year|N] [breakfast|lunch|dinner|snack])"

    def execute(self, args: str) -> None:
        """
        Show statistics for the chosen window.

        Args:
            args: Optional range and meal type
                  Examples:
                    stats
                    stats month
                    stats year dinner
                    stats 14 type=snack
        """
        try:
            days, meal_type, leftover = parse_stats_query(args, self.ctx.default_range_days)
        except ValueError as e:
            print(f"\n{e}\n")
            return

        if leftover:
            print(f"Unknown option(s): {' '.join(leftover)}")
            print(f"Usage: {self.help_text}")
            return

        stats = aggregate(self.ctx.meals.list(), days, meal_type, self.ctx.now())
        render_stats(stats, title=f"Statistics ({range_label(days)})")
