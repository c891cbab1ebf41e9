# meal_tracker/reports/stats_report.py
"""
Statistics report rendered as Markdown for terminal display.
"""
from typing import List

from rich.console import Console
from rich.markdown import Markdown

from meal_tracker.models import StatsResult

console = Console()

# Meal types listed under "Meal Count by Type"
MAX_TYPES_LISTED = 4


def build_stats_markdown(stats: StatsResult, title: str = "Statistics") -> str:
    """
    Build the statistics report as Markdown text.

    Args:
        stats: Aggregated statistics
        title: Report heading

    Returns:
        Markdown document
    """
    lines: List[str] = []

    heading = title
    if stats.meal_type_filter:
        heading += f" ({stats.meal_type_filter})"
    lines.append(f"# {heading}")
    lines.append("")

    lines.append("| Total Meals | Avg. Daily Calories | Most Common | Total Days |")
    lines.append("|---:|---:|:---|---:|")
    lines.append(
        f"| {stats.meal_count} | {int(stats.average_daily_calories)} "
        f"| {stats.most_common_type} | {stats.day_count} |"
    )
    lines.append("")

    totals = stats.totals
    pct = stats.macro_percentages
    lines.append("## Macronutrient Summary")
    lines.append("")
    lines.append("| Macro | Grams | Share |")
    lines.append("|:---|---:|---:|")
    lines.append(f"| Protein | {int(totals.protein)}g | {pct.get('protein', 0)}% |")
    lines.append(f"| Carbs | {int(totals.carbs)}g | {pct.get('carbs', 0)}% |")
    lines.append(f"| Fat | {int(totals.fat)}g | {pct.get('fat', 0)}% |")
    lines.append("")

    lines.append("## Meal Count by Type")
    lines.append("")
    if stats.distribution:
        for meal_type, count in stats.distribution[:MAX_TYPES_LISTED]:
            lines.append(f"- **{meal_type}**: {count}")
    else:
        lines.append("_No meals in this range._")
    lines.append("")

    lines.append("## Insights")
    lines.append("")
    for insight_title, message in stats.insights.items():
        lines.append(f"- **{insight_title}**: {message}")

    return "\n".join(lines)


def render_stats(stats: StatsResult, title: str = "Statistics") -> None:
    """Print the statistics report to the terminal."""
    console.print(Markdown(build_stats_markdown(stats, title)))
    console.print()  # Trailing newline
