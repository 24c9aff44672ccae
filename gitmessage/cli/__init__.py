"""CLI entry point for gitmessage.

This module provides the main CLI application that combines the default
command and the configuration subcommands into a single interface.
"""

import typer

from gitmessage.cli.config import config_app
from gitmessage.cli.main import main_command

# Main application
app = typer.Typer(
    name="gitmessage",
    help="gitmessage: AI-powered commit message suggestions",
    add_completion=False,
)

# Add subcommand groups
app.add_typer(config_app, name="config")

# Set the main callback for default behavior (includes --version flag)
app.callback(invoke_without_command=True)(main_command)


__all__ = [
    "app",
    "config_app",
    "main_command",
]
