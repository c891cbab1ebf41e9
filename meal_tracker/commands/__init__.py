"""
Command classes for the meal tracker REPL.
"""
from .base import Command, CommandContext, CommandRegistry, register_command, get_registry

# Import all command modules to trigger registration
from . import basic_commands
from . import meal_commands
from . import category_command
from . import stats_command
from . import chart_command

__all__ = [
    'Command',
    'CommandContext',
    'CommandRegistry',
    'register_command',
    'get_registry',
]
