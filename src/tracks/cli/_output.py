"""Console and JSON presentation of command results.

Commands describe what happened through a :class:`Renderer` (titles,
sections, tables, progress) and never format output themselves. The concrete
renderer is chosen once per invocation by :func:`new_renderer`.

Renderers are single-writer: they hold no locks and must not be shared
between threads.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol, TextIO

from rich.cells import cell_len
from rich.console import Console
from rich.style import Style
from rich.text import Text

from tracks.cli._mode import UIMode
from tracks.cli._theme import DEFAULT_THEME, Theme

COLUMN_PADDING = 2
BAR_WIDTH = 40
BAR_CHAR = "━"


@dataclass(frozen=True)
class Section:
    """A titled block of text. Either part may be empty."""

    title: str = ""
    body: str = ""


@dataclass(frozen=True)
class Table:
    """Tabular data. Rows may be shorter or longer than ``headers``."""

    headers: Sequence[str] = ()
    rows: Sequence[Sequence[str]] = ()


@dataclass(frozen=True)
class ProgressSpec:
    label: str = ""
    total: int = 0


class Progress(Protocol):
    def increment(self, n: int = 1) -> None: ...

    def done(self) -> None: ...


class Renderer(Protocol):
    """Sink for command output. Only :meth:`flush` may raise."""

    def title(self, text: str) -> None: ...

    def section(self, section: Section) -> None: ...

    def table(self, table: Table) -> None: ...

    def progress(self, spec: ProgressSpec) -> Progress: ...

    def flush(self) -> None: ...


class NoopProgress:
    """Progress tracker that accepts updates and prints nothing."""

    def increment(self, n: int = 1) -> None:
        pass

    def done(self) -> None:
        pass


class ConsoleProgress:
    """Progress bar redrawn in place with a carriage return."""

    def __init__(self, console: Console, out: TextIO, spec: ProgressSpec, theme: Theme) -> None:
        self._console = console
        self._out = out
        self._theme = theme
        self.label = spec.label
        self.total = spec.total
        self.current = 0
        self.finished = False

    @property
    def fraction(self) -> float:
        """Completed fraction, clamped to ``[0, 1]``; ``1`` when there is no total."""
        if self.total <= 0:
            return 1.0
        return max(0.0, min(self.current / self.total, 1.0))

    def increment(self, n: int = 1) -> None:
        self.current += n
        fraction = self.fraction
        filled = round(BAR_WIDTH * fraction)

        line = Text()
        if self.label:
            line.append(f"{self.label}: ", style=self._theme.muted)
        line.append(BAR_CHAR * filled, style=self._theme.success)
        line.append(BAR_CHAR * (BAR_WIDTH - filled), style=self._theme.muted)
        line.append(f" {fraction:4.0%}")

        self._out.write("\r")
        self._console.print(line, end="")

    def done(self) -> None:
        if self.finished:
            return
        self.finished = True
        self._out.write("\n")


class ConsoleRenderer:
    """Human-readable output, written as soon as each call is made.

    Args:
        out: Text stream to write to, typically ``sys.stdout``.
        theme: Style palette.
        no_color: Emit plain text without any ANSI styling.
    """

    def __init__(self, out: TextIO, theme: Theme = DEFAULT_THEME, *, no_color: bool = False) -> None:
        self.out = out
        self.theme = theme
        self.console = Console(
            file=out,
            color_system=None if no_color else "auto",
            no_color=no_color,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def title(self, text: str) -> None:
        self.console.print(Text(text, style=self.theme.title))

    def section(self, section: Section) -> None:
        if section.title:
            self.console.print(Text(section.title, style=self.theme.title))
        if section.body:
            self.console.print(Text(section.body))

    def table(self, table: Table) -> None:
        headers = list(table.headers)
        rows = [list(row) for row in table.rows]

        num_cols = len(headers) or (len(rows[0]) if rows else 0)
        if num_cols == 0:
            return

        widths = [0] * num_cols
        for i, header in enumerate(headers[:num_cols]):
            widths[i] = cell_len(header)
        for row in rows:
            for i, cell in enumerate(row[:num_cols]):
                widths[i] = max(widths[i], cell_len(cell))
        for i in range(num_cols - 1):
            widths[i] += COLUMN_PADDING

        if headers:
            self.console.print(_table_line(headers, widths, self.theme.title))
        for row in rows:
            self.console.print(_table_line(row, widths))

    def progress(self, spec: ProgressSpec) -> ConsoleProgress:
        return ConsoleProgress(self.console, self.out, spec, self.theme)

    def flush(self) -> None:
        """Nothing is buffered."""


def _table_line(cells: Sequence[str], widths: list[int], style: Style | None = None) -> Text:
    line = Text()
    last = len(widths) - 1
    for i, width in enumerate(widths):
        cell = cells[i] if i < len(cells) else ""
        if i < last:
            cell += " " * (width - cell_len(cell))
        line.append(cell, style=style)
    return line


class JSONRenderer:
    """Machine-readable output, written as one JSON document on :meth:`flush`.

    The title is last-write-wins; sections and tables are kept in call order.
    """

    def __init__(self, out: TextIO) -> None:
        self.out = out
        self._title = ""
        self._sections: list[Section] = []
        self._tables: list[Table] = []

    def title(self, text: str) -> None:
        self._title = text

    def section(self, section: Section) -> None:
        self._sections.append(section)

    def table(self, table: Table) -> None:
        self._tables.append(table)

    def progress(self, spec: ProgressSpec) -> NoopProgress:
        return NoopProgress()

    def document(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "sections": [{"title": s.title, "body": s.body} for s in self._sections],
            "tables": [
                {"headers": list(t.headers), "rows": [list(row) for row in t.rows]}
                for t in self._tables
            ],
        }

    def flush(self) -> None:
        """Write the accumulated document. Raises ``OSError`` if the stream fails."""
        self.out.write(json.dumps(self.document(), indent=2, ensure_ascii=False) + "\n")
        self.out.flush()


def new_renderer(
    mode: UIMode, out: TextIO, theme: Theme = DEFAULT_THEME, *, no_color: bool = False
) -> Renderer:
    """Build the renderer for ``mode``. Everything but JSON renders to the console."""
    if mode is UIMode.JSON:
        return JSONRenderer(out)
    return ConsoleRenderer(out, theme, no_color=no_color)
