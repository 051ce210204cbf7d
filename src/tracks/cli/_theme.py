"""Style palette shared by console output."""

from __future__ import annotations

from dataclasses import dataclass

from rich.style import Style


@dataclass(frozen=True)
class Theme:
    """
    Styles for the five kinds of console text.

    Attributes:
        title: Headings and table headers.
        success: Completion messages.
        error: Failures.
        warning: Non-critical problems.
        muted: Secondary text such as progress labels.
    """

    title: Style
    success: Style
    error: Style
    warning: Style
    muted: Style


DEFAULT_THEME = Theme(
    title=Style(bold=True, color="#7D56F4"),
    success=Style(color="#04B575"),
    error=Style(color="#FF4672"),
    warning=Style(color="#FFA657"),
    muted=Style(color="#626262"),
)
