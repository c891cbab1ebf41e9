"""
Meal Tracker - Main Entry Point

Log meals, browse them by day and review nutrition statistics.
"""
import traceback

from config import (
    MEALS_FILE,
    CATEGORIES_FILE,
    CHART_OUTPUT_FILE,
    OPEN_CHARTS,
    DEFAULT_RANGE_DAYS,
    MODE,
    describe,
    verify_data_files,
)
from meal_tracker.commands import CommandContext, CommandRegistry, get_registry


def print_banner():
    """Print the startup banner."""
    print("-" * 60)
    print("  Meal Tracker  |  'help' lists commands, 'quit' exits")
    print("-" * 60)
    print()


def dispatch(line: str, ctx: CommandContext, registry: CommandRegistry) -> bool:
    """
    Run one line of user input.

    Args:
        line: Raw input, e.g. "stats month dinner"
        ctx: Shared command context
        registry: Command lookup

    Returns:
        False when the session should end, True otherwise
    """
    line = line.strip()
    if not line:
        return True

    cmd_name, _, args = line.partition(" ")
    cmd_class = registry.get(cmd_name)
    if cmd_class is None:
        print(f"Unknown command: '{cmd_name.lower()}'. Type 'help' for available commands.")
        return True

    try:
        cmd_class(ctx).execute(args.strip())
    except SystemExit:
        return False
    except Exception as e:
        print(f"Error executing command: {e}")
        if MODE == "DEVELOPMENT":
            traceback.print_exc()

    return True


def repl() -> None:
    """Read commands until quit, Ctrl+C or end of input."""
    try:
        verify_data_files()
    except FileNotFoundError as e:
        print(f"Error: {e}")
        print("\nSet MEAL_TRACKER_DATA to a writable directory and try again.")
        return

    describe()
    print_banner()

    ctx = CommandContext(MEALS_FILE, CATEGORIES_FILE,
                         chart_file=CHART_OUTPUT_FILE,
                         open_charts=OPEN_CHARTS,
                         default_range_days=DEFAULT_RANGE_DAYS)
    registry = get_registry()

    running = True
    while running:
        try:
            running = dispatch(input("meal> "), ctx, registry)
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            running = False


def main() -> int:
    """Main entry point."""
    try:
        repl()
    except Exception as e:
        print(f"Fatal error: {e}")
        if MODE == "DEVELOPMENT":
            traceback.print_exc()
        return 1

    return 0


if __name__ == "__main__":
    exit(main())
