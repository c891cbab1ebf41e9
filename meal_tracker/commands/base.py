"""
Base command classes and registry.
"""
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Type

from meal_tracker.data import MealRepository, CategoryRepository
from meal_tracker.models import Meal, start_of_day


class CommandContext:
    """
    Shared context for all commands.

    Provides access to repositories and session state.
    """

    def __init__(self, meals_file: Path, categories_file: Path,
                 chart_file: Optional[Path] = None,
                 open_charts: bool = False,
                 default_range_days: int = 7,
                 clock: Callable[[], datetime] = datetime.now):
        """
        Initialize command context.

        Args:
            meals_file: Path to meals CSV
            categories_file: Path to categories JSON
            chart_file: Where charts are written (optional)
            open_charts: Open charts in the browser after saving
            default_range_days: Statistics window when none is given
            clock: Returns the current moment
        """
        self.meals = MealRepository(meals_file)
        self.categories = CategoryRepository(categories_file, meals=self.meals)
        self.chart_file = chart_file
        self.open_charts = open_charts
        self.default_range_days = default_range_days
        self.clock = clock

        # Day shown by the "day" command
        self.selected_day: datetime = start_of_day(clock())

        # Meals from the last listing, so commands can refer to them by number
        self.last_listing: List[Meal] = []

    def now(self) -> datetime:
        """Current moment."""
        return self.clock()

    def select_day(self, day: datetime) -> None:
        """Change the day shown by the day view."""
        self.selected_day = start_of_day(day)

    def shift_day(self, days: int) -> None:
        """Move the selected day forward or back."""
        self.selected_day = self.selected_day + timedelta(days=days)

    def remember_listing(self, meals: List[Meal]) -> None:
        """Store the meals just displayed, numbered from 1."""
        self.last_listing = list(meals)

    def resolve_meal(self, ref: str) -> Optional[Meal]:
        """
        Find a meal by listing number or id.

        Args:
            ref: "3" (third meal of the last listing) or a meal id

        Returns:
            Meal or None if not found
        """
        ref = ref.strip()
        if ref.isdigit():
            idx = int(ref)
            if 1 <= idx <= len(self.last_listing):
                meal_id = self.last_listing[idx - 1].meal_id
                return self.meals.get(meal_id) if meal_id else None
            return None
        return self.meals.get(ref)

    def reload(self):
        """Reload meals and categories from disk."""
        self.meals.reload()
        self.categories.reload()


class Command(ABC):
    """
    A REPL command.

    Subclasses set `name` (one name or a tuple of aliases, the first is
    shown in help), `help_text`, and implement execute().
    """

    name: str | tuple = ""
    help_text: str = ""

    def __init__(self, context: CommandContext):
        self.ctx = context

    @classmethod
    def aliases(cls) -> Tuple[str, ...]:
        """All names this command answers to, lowercased."""
        names = (cls.name,) if isinstance(cls.name, str) else tuple(cls.name)
        return tuple(n.lower() for n in names)

    @abstractmethod
    def execute(self, args: str) -> None:
        """
        Run the command.

        Args:
            args: Everything typed after the command name
        """
        ...


class CommandRegistry:
    """Maps command names and aliases to command classes."""

    def __init__(self):
        self._by_name: Dict[str, Type[Command]] = {}

    def register(self, command_class: Type[Command]) -> None:
        """Add a command under each of its aliases."""
        for alias in command_class.aliases():
            self._by_name[alias] = command_class

    def get(self, cmd: str) -> Optional[Type[Command]]:
        """Command class for a typed name (case-insensitive), or None."""
        return self._by_name.get(cmd.lower())

    def commands(self) -> List[Type[Command]]:
        """Distinct command classes ordered by primary name."""
        unique = {id(c): c for c in self._by_name.values()}
        return sorted(unique.values(), key=lambda c: c.aliases()[0])


_registry = CommandRegistry()


def register_command(command_class: Type[Command]) -> Type[Command]:
    """Class decorator adding a command to the global registry."""
    _registry.register(command_class)
    return command_class


def get_registry() -> CommandRegistry:
    """The global command registry."""
    return _registry
