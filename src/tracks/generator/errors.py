"""Error types raised by the template engine and project validation."""

from __future__ import annotations


class TemplateError(Exception):
    """A template could not be found, parsed, executed or written.

    Attributes:
        template: Logical name of the template, e.g. ``"go.mod.tmpl"``.
        cause: The underlying exception, also chained as ``__cause__``.
        action: Optional short description of the failed step.
    """

    def __init__(self, template: str, cause: BaseException, action: str | None = None) -> None:
        super().__init__(template, cause)
        self.template = template
        self.cause = cause
        self.action = action

    def __str__(self) -> str:
        if self.action:
            return f"template {self.template}: {self.action}: {self.cause}"
        return f"template {self.template}: {self.cause}"


class ValidationError(Exception):
    """A template exists but its syntax is invalid.

    Attributes:
        template: Logical name of the template.
        message: Human-readable description of the syntax problem.
        field: Name of the offending field, when the problem is field-specific.
    """

    def __init__(self, template: str, message: str, field: str | None = None) -> None:
        super().__init__(template, message)
        self.template = template
        self.message = message
        self.field = field

    def __str__(self) -> str:
        if self.field:
            return f"template {self.template}: field {self.field}: {self.message}"
        return f"template {self.template}: {self.message}"


class ProjectValidationError(ValueError):
    """User input for a new project was rejected."""

    def __init__(self, field: str, value: str, message: str) -> None:
        super().__init__(field, value, message)
        self.field = field
        self.value = value
        self.message = message

    def __str__(self) -> str:
        if self.value:
            return f"validation failed for {self.field} '{self.value}': {self.message}"
        return f"validation failed for {self.field}: {self.message}"
