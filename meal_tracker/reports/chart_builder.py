"""
Chart builder for the statistics screen.

Generates matplotlib charts for daily calories (with a target line),
macronutrient totals and the meal type breakdown.
"""
import os
import webbrowser
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
import pandas as pd
import matplotlib
matplotlib.use("Agg")  # Headless backend
import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from meal_tracker.models import NutritionTotals, TimeRange
from meal_tracker.analyzers.insights import CALORIE_TARGET

# Slices shown in the meal type donut
MAX_MEAL_TYPE_SLICES = 5

MACRO_COLORS = {
    "Protein": "tab:blue",
    "Carbs": "tab:green",
    "Fat": "gold",
}


class ChartBuilder:
    """
    Builds statistics charts and saves them as images.

    Charts:
    - Daily calories (bars) with a dashed target line
    - Macronutrient totals (three bars)
    - Meal type distribution (donut, top five types)
    """

    def __init__(self, output_file: Path = Path("meal_tracker_chart.jpg"),
                 open_in_browser: bool = False):
        """
        Initialize chart builder.

        Args:
            output_file: Output file path
            open_in_browser: Open the saved image after writing it
        """
        self.output_file = output_file
        self.open_in_browser = open_in_browser

    def build_calories_chart(self, series: List[Tuple[datetime, float]],
                             title: Optional[str] = None,
                             target: float = CALORIE_TARGET) -> bool:
        """
        Bar chart of calories per day.

        Args:
            series: (day, calories) points, oldest first
            title: Chart title (optional)
            target: Calories for the dashed target line

        Returns:
            True if a chart was written
        """
        if not series:
            print("(no data to chart)")
            return False

        df = pd.DataFrame(series, columns=["date", "calories"]).set_index("date")
        axis_format = TimeRange.axis_format_for(len(df))

        fig, ax = plt.subplots(figsize=(10, 5), constrained_layout=True)

        ax.bar(df.index, df["calories"].values.astype(float), width=0.8, color="tab:blue")
        ax.axhline(target, color="red", linestyle="--", linewidth=1)
        ax.annotate("Target", xy=(1.0, target), xycoords=("axes fraction", "data"),
                    ha="right", va="bottom", color="red", fontsize=9)

        tick_step = max(1, int(np.ceil(len(df) / 14)))
        ticks = df.index[::tick_step]
        ax.set_xticks(ticks)
        ax.set_xticklabels([day.strftime(axis_format) for day in ticks])

        ax.set_ylabel("Calories")
        ax.grid(True, axis="y", alpha=0.25)
        ax.set_title(title or f"Daily Calorie Intake ({len(df)} days)")

        self._save(fig)
        return True

    def build_macros_chart(self, totals: NutritionTotals,
                           title: Optional[str] = None) -> bool:
        """
        Bar chart of protein, carbs and fat totals in grams.

        Returns:
            True if a chart was written
        """
        values = {
            "Protein": totals.protein,
            "Carbs": totals.carbs,
            "Fat": totals.fat,
        }

        if not any(values.values()):
            print("(no data to chart)")
            return False

        fig, ax = plt.subplots(figsize=(6, 5), constrained_layout=True)

        labels = list(values.keys())
        ax.bar(labels, list(values.values()), color=[MACRO_COLORS[l] for l in labels])
        ax.set_ylabel("Grams")
        ax.yaxis.set_major_formatter(FuncFormatter(lambda v, _: f"{int(v)}g"))
        ax.grid(True, axis="y", alpha=0.25)
        ax.set_title(title or "Macronutrient Distribution")

        self._save(fig)
        return True

    def build_meal_types_chart(self, distribution: List[Tuple[str, int]],
                               title: Optional[str] = None) -> bool:
        """
        Donut chart of the most frequent meal types.

        Args:
            distribution: (meal type, count) pairs, most frequent first

        Returns:
            True if a chart was written
        """
        top = distribution[:MAX_MEAL_TYPE_SLICES]
        if not top:
            print("(no data to chart)")
            return False

        labels = [t for t, _ in top]
        counts = [c for _, c in top]

        fig, ax = plt.subplots(figsize=(6, 6), constrained_layout=True)

        ax.pie(
            counts,
            labels=labels,
            autopct=lambda pct: f"{int(round(pct * sum(counts) / 100))}",
            wedgeprops={"width": 0.4, "edgecolor": "white"},
            startangle=90,
        )
        ax.axis("equal")
        ax.set_title(title or "Meal Type Distribution")

        self._save(fig)
        return True

    def _save(self, fig) -> None:
        """Save and close a figure, optionally opening it."""
        fig.savefig(self.output_file, dpi=150, format="jpg")
        plt.close(fig)

        if self.open_in_browser:
            webbrowser.open(os.path.abspath(self.output_file))
            print(f"Chart saved to {self.output_file} and opened in browser.")
        else:
            print(f"Chart saved to {self.output_file}.")
