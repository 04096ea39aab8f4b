"""cidoc CLI commands.

Each command module contains the business logic for a CLI command.
The cli.py module handles Typer decorators and argument parsing,
then delegates to these command functions.
"""

from cidoc.commands.generate import generate_command
from cidoc.commands.sections import sections_command

__all__ = [
    "generate_command",
    "sections_command",
]
