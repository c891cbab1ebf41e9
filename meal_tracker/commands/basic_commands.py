"""
Session commands: help, quit, reload.
"""
from .base import Command, register_command, get_registry


@register_command
class HelpCommand(Command):
    """List every command with its aliases."""

    name = ("help", "h", "?")
    help_text = "Show this help message"

    def execute(self, args: str) -> None:
        print("\nCommands:")
        print("-" * 60)
        for cmd_class in get_registry().commands():
            print(f"  {', '.join(cmd_class.aliases()):<18} {cmd_class.help_text}")
        print("-" * 60)
        print("Meals are referred to by their number in the last listing.\n")


@register_command
class QuitCommand(Command):
    """Leave the REPL."""

    name = ("quit", "exit", "q")
    help_text = "Exit the application"

    def execute(self, args: str) -> None:
        print("Goodbye!")
        raise SystemExit(0)


@register_command
class ReloadCommand(Command):
    """Reload meals and categories from disk."""

    name = "reload"
    help_text = "Reload meals and categories from disk"

    def execute(self, args: str) -> None:
        self.ctx.reload()
        print(f"Reloaded {len(self.ctx.meals)} meal(s) and "
              f"{len(self.ctx.categories.index())} category record(s) from disk.")
