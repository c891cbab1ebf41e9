# meal_tracker/data/category_repository.py
"""
Category repository for meal tags.

Manages the categories JSON file and keeps an in-memory index by id.
Meals point at categories by id only; deleting a category clears that
reference on every meal through the meal repository.
"""
import json
import uuid
from pathlib import Path
from typing import Optional, Dict, List

from meal_tracker.models import Category, OperationResult, DEFAULT_CATEGORY_ICON


class CategoryRepository:
    """
    Manages user-defined meal categories.

    The file maps category id -> {"name", "icon_name"}.
    """

    def __init__(self, filepath: Path, meals=None):
        """
        Initialize category repository.

        Args:
            filepath: Path to categories JSON file
            meals: MealRepository whose references are cleared on delete
        """
        self.filepath = filepath
        self.meals = meals
        self._index: Optional[Dict[str, Category]] = None

    def load(self) -> Dict[str, Category]:
        """
        Load categories from disk.

        Returns empty index if file doesn't exist (optional file).

        Returns:
            Dictionary of categories keyed by id
        """
        self._index = {}

        if not self.filepath.exists():
            return self._index

        try:
            with open(self.filepath, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            print(f"Warning: could not read {self.filepath.name}: {e}")
            return self._index

        if isinstance(raw, dict):
            for category_id, data in raw.items():
                if isinstance(data, dict):
                    self._index[category_id] = Category.from_dict(data, category_id)

        return self._index

    def reload(self) -> Dict[str, Category]:
        """Reload categories from disk (discards cached data)."""
        self._index = None
        return self.load()

    def index(self) -> Dict[str, Category]:
        """Get a copy of the id -> Category index (loads if needed)."""
        if self._index is None:
            self.load()
        return dict(self._index)

    def list(self) -> List[Category]:
        """All categories sorted by name."""
        return sorted(self.index().values(), key=lambda c: c.name.lower())

    def get(self, category_id: Optional[str]) -> Optional[Category]:
        """Look up a category by id."""
        if not category_id:
            return None
        return self.index().get(category_id)

    def find_by_name(self, name: str) -> Optional[Category]:
        """
        Find a category by name (case-insensitive).

        Args:
            name: Category name

        Returns:
            First matching Category or None
        """
        wanted = name.strip().lower()
        for category in self.list():
            if category.name.strip().lower() == wanted:
                return category
        return None

    def icon_for(self, category_id: Optional[str]) -> str:
        """Icon name for a meal's category, the default tag icon if none."""
        category = self.get(category_id)
        return category.icon_name if category else DEFAULT_CATEGORY_ICON

    def _write(self, index: Dict[str, Category]) -> OperationResult:
        """Write an index to disk, keeping the previous one on failure."""
        data = {cid: cat.to_dict() for cid, cat in index.items()}
        try:
            self.filepath.parent.mkdir(parents=True, exist_ok=True)
            with open(self.filepath, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            return OperationResult.failure(f"Could not write {self.filepath.name}: {e}")

        self._index = index
        return OperationResult.success()

    def save(self, category: Category) -> OperationResult:
        """
        Insert or update a category.

        Args:
            category: Category to store (id assigned on first save)

        Returns:
            OperationResult with the category id on success
        """
        if not category.name or not category.name.strip():
            return OperationResult.failure("Category name is required", category.category_id)

        category.name = category.name.strip()
        if not category.icon_name:
            category.icon_name = DEFAULT_CATEGORY_ICON
        if not category.category_id:
            category.category_id = uuid.uuid4().hex

        index = self.index()
        updated = category.category_id in index
        index[category.category_id] = category

        result = self._write(index)
        if not result:
            return OperationResult.failure(f"Failed to save category: {result.message}",
                                           category.category_id)

        verb = "Updated" if updated else "Saved"
        return OperationResult.success(f"{verb} category '{category.name}'", category.category_id)

    def delete(self, category_id: str) -> OperationResult:
        """
        Delete a category and clear it from every meal that used it.

        Returns:
            OperationResult (fails if no such category)
        """
        index = self.index()
        category = index.pop(category_id, None)
        if category is None:
            return OperationResult.failure(f"No category with id {category_id}", category_id)

        result = self._write(index)
        if not result:
            return OperationResult.failure(f"Failed to delete category: {result.message}",
                                           category_id)

        cleared = self.meals.clear_category(category_id) if self.meals is not None else 0

        message = f"Deleted category '{category.name}'"
        if cleared:
            message += f" ({cleared} meal(s) uncategorized)"
        return OperationResult.success(message, category_id)
