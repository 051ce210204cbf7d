"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from typing import TypeVar

from rich.console import Console
from rich.text import Text
from simple_term_menu import TerminalMenu

from tracks.generator.types import DBDriver

_console = Console()

T = TypeVar("T")


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _clear_lines(n: int) -> None:
    """Move cursor up *n* lines and clear to end of screen."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _answered(question: str, answer: str) -> None:
    _console.print(f"[bold green]◇[/]  {question}")
    _console.print(Text("│", style="dim") + Text(f"  {answer}"))
    _print_bar()


def _select(question: str, options: list[T], labels: list[str], hints: list[str]) -> T:
    """Display a selection menu with a dim hint per entry and return the chosen option."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    menu = TerminalMenu(
        labels,
        menu_cursor="│  ● ",
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
        preview_command=lambda label: hints[labels.index(label)],
        preview_size=0.25,
    )
    raw_index = menu.show()

    if raw_index is None:
        raise SystemExit(1)

    index = int(raw_index)

    # Replace the question and bar with the collapsed answer
    _clear_lines(2)
    _answered(question, labels[index])

    return options[index]


def _ask(question: str, default: str) -> str:
    """Display a free-text prompt; an empty answer keeps ``default``."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    _print_bar()

    _console.print("[dim]│[/]  ", end="")
    answer = input(f"({default}) ").strip() or default

    _clear_lines(3)
    _answered(question, answer)

    return answer


def prompt_db_driver() -> DBDriver:
    """Prompt user to choose a database driver."""
    drivers = list(DBDriver)
    return _select(
        "Select a database driver",
        drivers,
        [d.label for d in drivers],
        [d.description for d in drivers],
    )


def prompt_module_path(default: str) -> str:
    """Prompt user for the Go module path."""
    return _ask("Go module path", default)
