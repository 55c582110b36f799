"""
plain.py

PURPOSE: Plain text output formatting for the CLI.
DEPENDENCIES: rich

ARCHITECTURE NOTES:
Results go to stdout; errors and diagnostics go to stderr so that output
can be piped into files or other tools.
"""

import json

from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.syntax import Syntax

# Global console instances
console = Console()
err_console = Console(stderr=True)


def print_message(text: str) -> None:
    """Print a normal message."""
    console.print(text)


def print_error(text: str) -> None:
    """Print an error message."""
    err_console.print(f"[red]{escape(text)}[/red]")


def print_success(text: str) -> None:
    """Print a success message."""
    err_console.print(f"[green]{escape(text)}[/green]")


def print_code(code: str, language: str | None = None) -> None:
    """Print code, highlighted when writing to a terminal."""
    if console.is_terminal:
        console.print(Syntax(code, language or "text", word_wrap=True))
    else:
        console.print(code, markup=False, highlight=False, soft_wrap=True)


def print_json(data: dict[str, object]) -> None:
    """Print a JSON document."""
    console.print(JSON(json.dumps(data)), soft_wrap=True)

