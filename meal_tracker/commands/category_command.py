"""
Category command - manage meal categories.
"""
import shlex

from .base import Command, register_command
from meal_tracker.models import Category, DEFAULT_CATEGORY_ICON


@register_command
class CategoryCommand(Command):
    """List, add, rename and delete categories."""

    name = ("category", "cat")
    help_text = "Manage categories (category [list|add <name> [icon]|rename <old> <new>|delete <name>])"

    def execute(self, args: str) -> None:
        """
        Manage categories.

        Args:
            args: Subcommand and arguments
                  Examples:
                    category
                    category add Homemade house
                    category rename Homemade "Home cooked"
                    category delete "Fast food"
        """
        try:
            tokens = shlex.split(args)
        except ValueError as e:
            print(f"\n{e}\n")
            return

        if not tokens or tokens[0].lower() == "list":
            self._list()
            return

        sub = tokens[0].lower()
        rest = tokens[1:]

        if sub == "add" and rest:
            icon = rest[1] if len(rest) > 1 else DEFAULT_CATEGORY_ICON
            self._add(rest[0], icon)
        elif sub == "rename" and len(rest) == 2:
            self._rename(rest[0], rest[1])
        elif sub in ("delete", "del", "rm") and rest:
            self._delete(rest[0])
        else:
            print(f"\nUsage: {self.help_text.split('(', 1)[1].rstrip(')')}\n")

    def _list(self) -> None:
        categories = self.ctx.categories.list()

        print("\n=== Categories ===")
        if not categories:
            print("No categories yet. Add one with 'category add <name> [icon]'.\n")
            return

        counts = {}
        for meal in self.ctx.meals.list():
            if meal.category_id:
                counts[meal.category_id] = counts.get(meal.category_id, 0) + 1

        print(f"{'Name':<20} {'Icon':<16} {'Meals':>6}")
        print("-" * 44)
        for category in categories:
            print(f"{category.name:<20} {category.icon_name:<16} "
                  f"{counts.get(category.category_id, 0):>6}")
        print()

    def _add(self, name: str, icon: str) -> None:
        if self.ctx.categories.find_by_name(name):
            print(f"\nCategory '{name}' already exists.\n")
            return

        result = self.ctx.categories.save(Category(name, icon))
        print(f"\n{result.message}\n" if result else f"\nFailed: {result.message}\n")

    def _rename(self, old: str, new: str) -> None:
        category = self.ctx.categories.find_by_name(old)
        if category is None:
            print(f"\nNo category '{old}'.\n")
            return

        category.name = new
        result = self.ctx.categories.save(category)
        print(f"\n{result.message}\n" if result else f"\nFailed: {result.message}\n")

    def _delete(self, name: str) -> None:
        category = self.ctx.categories.find_by_name(name)
        if category is None:
            print(f"\nNo category '{name}'.\n")
            return

        result = self.ctx.categories.delete(category.category_id)
        print(f"\n{result.message}\n" if result else f"\nFailed: {result.message}\n")
