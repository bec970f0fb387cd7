"""CLI command implementations for the cutplan application.

This package contains subcommands for the cutplan CLI, including:
- validate: Validate a configuration file
- plans: Browse, export and delete stored plans
"""

from cutplan.cli.commands.plans import find_plan, plans_app, store_factory
from cutplan.cli.commands.validate import display_load_error, validate_command

__all__ = [
    "display_load_error",
    "find_plan",
    "plans_app",
    "store_factory",
    "validate_command",
]
