"""
Chart command - calorie, macro and meal type charts.
"""
from .base import Command, register_command
from .stats_command import parse_stats_query, range_label
from meal_tracker.analyzers import aggregate
from meal_tracker.reports.chart_builder import ChartBuilder

CHART_TYPES = {
    "calories": "calories",
    "cal": "calories",
    "macros": "macros",
    "macro": "macros",
    "types": "types",
    "mealtypes": "types",
}


@register_command
class ChartCommand(Command):
    """Generate a statistics chart."""

    name = "chart"
    help_text = "Generate chart (chart [calories|macros|types] [week|month|year|N] [meal type])"

    def execute(self, args: str) -> None:
        """
        Generate a chart image.

        Args:
            args: Optional chart type, range and meal type
                  Examples:
                    chart
                    chart macros month
                    chart types year
                    chart calories 14 dinner
        """
        try:
            days, meal_type, leftover = parse_stats_query(args, self.ctx.default_range_days)
        except ValueError as e:
            print(f"\n{e}\n")
            return

        chart_type = "calories"
        for token in leftover:
            if token.lower() not in CHART_TYPES:
                print(f"Unknown option: {token}")
                print(f"Usage: {self.help_text}")
                return
            chart_type = CHART_TYPES[token.lower()]

        if self.ctx.chart_file is None:
            print("\nChart output file not configured.\n")
            return

        stats = aggregate(self.ctx.meals.list(), days, meal_type, self.ctx.now())

        builder = ChartBuilder(self.ctx.chart_file, open_in_browser=self.ctx.open_charts)

        label = range_label(days)
        if meal_type:
            label += f", {meal_type}"

        if chart_type == "calories":
            builder.build_calories_chart(stats.daily_series,
                                         title=f"Daily Calorie Intake ({label})")
        elif chart_type == "macros":
            builder.build_macros_chart(stats.totals,
                                       title=f"Macronutrient Distribution ({label})")
        else:
            builder.build_meal_types_chart(stats.distribution,
                                           title=f"Meal Type Distribution ({label})")
