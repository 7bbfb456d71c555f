"""
Operator prompts.

Thin layer over ``typer.prompt`` / ``typer.confirm`` with Rich rendering
for single-choice lists. Any object with the same ``select``, ``text`` and
``confirm`` methods can stand in for ``Prompter`` (tests use scripted
fakes).
"""

import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from baofeng_image_flasher.errors import PromptUnavailableError


@dataclass(frozen=True)
class Choice:
    """One entry of a single-choice prompt: display name and returned value."""
    name: str
    value: Any


class Prompter:
    """
    Interactive prompts for a terminal session.

    Args:
        console: Rich console used to render choice lists
        interactive: Override terminal detection (defaults to stdin.isatty())
    """

    def __init__(self, console: Optional[Console] = None, interactive: Optional[bool] = None):
        self.console = console or Console()
        self.interactive = sys.stdin.isatty() if interactive is None else interactive

    def _require_terminal(self) -> None:
        if not self.interactive:
            raise PromptUnavailableError()

    def select(self, message: str, choices: Sequence[Choice], default: Any = None) -> Any:
        """Show a numbered list and return the value of the chosen entry."""
        self._require_terminal()
        choices = list(choices)
        if not choices:
            raise ValueError(f"No choices available for: {message}")

        default_index = 1
        for index, choice in enumerate(choices, start=1):
            if default is not None and choice.value == default:
                default_index = index
                break

        self.console.print(f"[bold]? {escape(message)}[/bold]")
        for index, choice in enumerate(choices, start=1):
            self.console.print(f"  [cyan]{index})[/cyan] {escape(choice.name)}")

        while True:
            answer = typer.prompt("Choice", default=default_index, type=int)
            if 1 <= answer <= len(choices):
                return choices[answer - 1].value
            self.console.print(
                f"Enter a number between 1 and {len(choices)}", style="yellow"
            )

    def text(self, message: str, default: Optional[str] = None) -> str:
        """Free-text input, stripped."""
        self._require_terminal()
        return str(typer.prompt(message, default=default)).strip()

    def confirm(self, message: str, default: bool = False) -> bool:
        """Yes/no question."""
        self._require_terminal()
        return typer.confirm(message, default=default)
