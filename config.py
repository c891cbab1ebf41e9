"""
Configuration for Meal Tracker application.

Data locations and defaults. MEAL_TRACKER_MODE picks PRODUCTION or DEVELOPMENT data.
"""
import os
from pathlib import Path

# ---- mode ----
# Set MEAL_TRACKER_MODE to switch between production and development data
MODE = os.environ.get("MEAL_TRACKER_MODE", "DEVELOPMENT").upper()  # Options: "PRODUCTION" or "DEVELOPMENT"

# Base paths
PROJECT_ROOT = Path(__file__).parent
PRODUCTION_DATA_PATH = Path(os.environ.get("MEAL_TRACKER_DATA", Path.home() / ".meal_tracker"))
DEVELOPMENT_DATA_PATH = PROJECT_ROOT / "data"

# Data directory for the active mode
if MODE == "PRODUCTION":
    DATA_PATH = PRODUCTION_DATA_PATH
elif MODE == "DEVELOPMENT":
    DATA_PATH = DEVELOPMENT_DATA_PATH
else:
    raise ValueError(f"Invalid MODE: {MODE}. Must be 'PRODUCTION' or 'DEVELOPMENT'")

# File paths
MEALS_FILE = DATA_PATH / "meals.csv"
CATEGORIES_FILE = DATA_PATH / "categories.json"

# Chart output
CHART_OUTPUT_FILE = DATA_PATH / "meal_tracker_chart.jpg"
OPEN_CHARTS = False  # open saved charts in the browser

# Application settings
DEFAULT_RANGE_DAYS = 7  # statistics window (week)
DATE_FORMAT = "%Y-%m-%d"


def verify_data_files():
    """
    Make sure the data directory exists.

    Meal and category files are created on first save.
    """
    try:
        DATA_PATH.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileNotFoundError(
            f"Cannot create data directory for {MODE} mode: {DATA_PATH} ({e})"
        )

    return True


def describe():
    """Print the active mode and data files."""
    if MODE == "PRODUCTION":
        print(f"PRODUCTION mode: reading and writing your meal log in {DATA_PATH}")
    else:
        print(f"DEVELOPMENT mode: using the scratch data in {DATA_PATH}")

    print(f"  meals:      {MEALS_FILE.name}")
    print(f"  categories: {CATEGORIES_FILE.name}")
    print(f"  charts:     {CHART_OUTPUT_FILE.name}")


if __name__ == "__main__":
    describe()
    print(f"\nData directory ready: {verify_data_files()}")
