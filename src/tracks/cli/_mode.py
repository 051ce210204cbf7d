"""Output mode selection from flags and environment."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import TextIO


class UIMode(str, Enum):
    """How command output is presented."""

    AUTO = "auto"
    CONSOLE = "console"
    JSON = "json"
    TUI = "tui"


@dataclass(frozen=True, kw_only=True)
class UIConfig:
    """
    Snapshot of the flags and environment signals that pick an output mode.

    Attributes:
        mode: Mode pinned by the caller; ``AUTO`` leaves the choice to detection.
        json: ``--json`` was given.
        no_color: ``--no-color`` was given or ``NO_COLOR`` is set.
        interactive: ``--interactive`` was given.
        ci: The ``CI`` environment variable is set, to any value.
        stdout_is_tty: Standard output is a terminal.
    """

    mode: UIMode = UIMode.AUTO
    json: bool = False
    no_color: bool = False
    interactive: bool = False
    ci: bool = False
    stdout_is_tty: bool = True

    @classmethod
    def from_environment(
        cls,
        *,
        mode: UIMode = UIMode.AUTO,
        json: bool = False,
        no_color: bool = False,
        interactive: bool = False,
        environ: Mapping[str, str] | None = None,
        stdout: TextIO | None = None,
    ) -> UIConfig:
        """Resolve ``CI``, ``NO_COLOR`` and terminal detection once."""
        environ = os.environ if environ is None else environ
        stdout = sys.stdout if stdout is None else stdout
        isatty = getattr(stdout, "isatty", None)
        return cls(
            mode=mode,
            json=json,
            no_color=no_color or "NO_COLOR" in environ,
            interactive=interactive,
            ci="CI" in environ,
            stdout_is_tty=bool(isatty and isatty()),
        )


def detect_mode(config: UIConfig) -> UIMode:
    """Pick the output mode. The order of the checks is the contract."""
    if config.json:
        return UIMode.JSON

    if config.interactive:
        return UIMode.TUI

    if config.mode is not UIMode.AUTO:
        return config.mode

    if config.no_color or config.ci or not config.stdout_is_tty:
        return UIMode.CONSOLE

    # No interactive renderer yet
    return UIMode.CONSOLE
