"""
Meal repository backed by a CSV file.

Handles CRUD operations on the meals CSV and hands out materialized
Meal objects; callers never see the underlying DataFrame rows.
"""
import base64
import binascii
import uuid
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Callable, List, Optional

import numpy as np
import pandas as pd

from meal_tracker.models import (
    Meal,
    OperationResult,
    INVALID_MEAL_MESSAGE,
    as_datetime,
    start_of_day,
    validate_meal,
)

COLUMNS = [
    'meal_id', 'name', 'calories', 'protein', 'carbs', 'fat',
    'date', 'mealtype', 'notes', 'image_data', 'category_id',
]

NUMERIC_COLUMNS = ['calories', 'protein', 'carbs', 'fat']
TEXT_COLUMNS = [c for c in COLUMNS if c not in NUMERIC_COLUMNS]

DATE_FORMAT = "%Y-%m-%d"


class MealRepository:
    """
    Manages the meals CSV file.

    Provides methods to list, fetch, save and delete logged meals.
    """

    def __init__(self, filepath: Path):
        """
        Initialize meal repository.

        Args:
            filepath: Path to meals CSV file
        """
        self.filepath = filepath
        self._df = None

    def load(self) -> pd.DataFrame:
        """
        Load meals from disk, creating an empty table if the file is missing.

        Returns:
            DataFrame containing meal rows
        """
        try:
            self._df = pd.read_csv(self.filepath, dtype={c: object for c in TEXT_COLUMNS})

            # Add missing columns (older files)
            for col in COLUMNS:
                if col not in self._df.columns:
                    self._df[col] = None
            self._df = self._df[COLUMNS]

        except (FileNotFoundError, pd.errors.EmptyDataError):
            self._df = pd.DataFrame(columns=COLUMNS)

        self.ensure_numeric_columns()
        return self._df

    @property
    def df(self) -> pd.DataFrame:
        """Get the meals DataFrame (loads if needed)."""
        if self._df is None:
            self.load()
        return self._df

    def reload(self) -> pd.DataFrame:
        """Reload meals from disk (discards cached data)."""
        self._df = None
        return self.load()

    def ensure_numeric_columns(self) -> None:
        """
        Ensure nutrient columns are numeric type.

        Converts string values to numbers, replacing errors and infinities with 0.
        """
        for col in NUMERIC_COLUMNS:
            values = pd.to_numeric(self._df[col], errors='coerce')
            self._df[col] = values.replace([np.inf, -np.inf], np.nan).fillna(0)

    def _write(self, df: pd.DataFrame) -> OperationResult:
        """Write a DataFrame to disk, keeping the previous one on failure."""
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(self.filepath, index=False)
        except OSError as e:
            return OperationResult.failure(f"Could not write {self.filepath.name}: {e}")

        self._df = df
        return OperationResult.success()

    # ---------------------------------------------------------------- queries

    def list(self, predicate: Optional[Callable[[Meal], bool]] = None,
             start: Optional[datetime] = None,
             end: Optional[datetime] = None) -> List[Meal]:
        """
        Get meals, newest first.

        Args:
            predicate: Optional filter applied to each Meal
            start: Only meals with date >= start
            end: Only meals with date < end

        Returns:
            List of Meal objects; undated meals come last and are
            dropped whenever start or end is given
        """
        start = as_datetime(start)
        end = as_datetime(end)
        dated = []
        undated = []

        for record in self.df.to_dict('records'):
            meal = _row_to_meal(record)

            if meal.date is None:
                if start is not None or end is not None:
                    continue
            else:
                if start is not None and meal.date < start:
                    continue
                if end is not None and meal.date >= end:
                    continue

            if predicate is not None and not predicate(meal):
                continue

            (dated if meal.date is not None else undated).append(meal)

        dated.sort(key=lambda m: m.date, reverse=True)
        return dated + undated

    def get(self, meal_id: str) -> Optional[Meal]:
        """
        Get a meal by id.

        Returns:
            Meal or None if not found
        """
        matches = self.df[self.df['meal_id'] == meal_id]
        if matches.empty:
            return None
        return _row_to_meal(matches.iloc[0].to_dict())

    def __len__(self) -> int:
        return len(self.df)

    # -------------------------------------------------------------- mutations

    def save(self, meal: Meal) -> OperationResult:
        """
        Insert a new meal or update an existing one.

        The date is truncated to the start of its day and an id is
        assigned on first save. These are written back onto `meal` only
        once the file has been written; a failed save leaves it untouched.

        Args:
            meal: Meal to store

        Returns:
            OperationResult with the meal id on success
        """
        errors = validate_meal(meal)
        if errors:
            return OperationResult.failure(
                f"{INVALID_MEAL_MESSAGE} ({'; '.join(errors)})", meal.meal_id
            )

        notes = meal.notes
        if notes is not None and not notes.strip():
            notes = None
        stored = replace(
            meal,
            date=start_of_day(meal.date),
            notes=notes,
            meal_id=meal.meal_id or uuid.uuid4().hex,
        )

        row = _meal_to_row(stored)
        records = self.df.to_dict('records')

        updated = False
        for i, record in enumerate(records):
            if record['meal_id'] == stored.meal_id:
                records[i] = row
                updated = True
                break
        if not updated:
            records.append(row)

        result = self._write(pd.DataFrame(records, columns=COLUMNS))
        if not result:
            return OperationResult.failure(f"Failed to save meal: {result.message}", meal.meal_id)

        meal.date = stored.date
        meal.notes = stored.notes
        meal.meal_id = stored.meal_id

        verb = "Updated" if updated else "Saved"
        return OperationResult.success(f"{verb} meal '{meal.name}'", meal.meal_id)

    def delete(self, meal_id: str) -> OperationResult:
        """
        Delete a meal by id.

        Returns:
            OperationResult (fails if no such meal)
        """
        mask = self.df['meal_id'] == meal_id
        if not mask.any():
            return OperationResult.failure(f"No meal with id {meal_id}", meal_id)

        name = self.df.loc[mask, 'name'].iloc[0]
        result = self._write(self.df[~mask].reset_index(drop=True))
        if not result:
            return OperationResult.failure(f"Failed to delete meal: {result.message}", meal_id)

        return OperationResult.success(f"Deleted meal '{name}'", meal_id)

    def clear_category(self, category_id: str) -> int:
        """
        Remove a category reference from every meal that has it.

        Args:
            category_id: Category being deleted

        Returns:
            Number of meals updated (0 if the write failed)
        """
        records = self.df.to_dict('records')
        count = 0
        for record in records:
            if record['category_id'] == category_id:
                record['category_id'] = None
                count += 1

        if count == 0:
            return 0

        result = self._write(pd.DataFrame(records, columns=COLUMNS))
        return count if result else 0


def _cell(record: dict, key: str):
    """Read a record value, mapping NaN/empty to None."""
    value = record.get(key)
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    if isinstance(value, str) and value == "":
        return None
    return value


def _row_to_meal(record: dict) -> Meal:
    """Build a Meal from one CSV record."""
    date_value = _cell(record, 'date')
    meal_date = None
    if date_value is not None:
        stamp = pd.to_datetime(date_value, errors='coerce')
        if not pd.isna(stamp):
            meal_date = as_datetime(stamp.to_pydatetime())

    image = None
    encoded = _cell(record, 'image_data')
    if encoded is not None:
        try:
            image = base64.b64decode(str(encoded), validate=True)
        except (binascii.Error, ValueError):
            image = None

    return Meal(
        meal_id=_cell(record, 'meal_id'),
        name=str(_cell(record, 'name') or ""),
        calories=float(record.get('calories', 0.0)),
        protein=float(record.get('protein', 0.0)),
        carbs=float(record.get('carbs', 0.0)),
        fat=float(record.get('fat', 0.0)),
        date=meal_date,
        mealtype=_cell(record, 'mealtype'),
        notes=_cell(record, 'notes'),
        image_data=image,
        category_id=_cell(record, 'category_id'),
    )


def _meal_to_row(meal: Meal) -> dict:
    """Flatten a Meal into a CSV record."""
    row = meal.to_dict()
    row['date'] = meal.date.strftime(DATE_FORMAT) if meal.date else None
    row['image_data'] = (
        base64.b64encode(meal.image_data).decode('ascii') if meal.image_data else None
    )
    return row
