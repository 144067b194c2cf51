"""Custom exception types for the onboarding wizard."""

from __future__ import annotations


class WizardError(Exception):
    """Base exception for wizard engine issues."""


class ValidationBlocked(WizardError):
    """Raised when user input does not satisfy a required condition.

    ``notice`` is the corrective message shown to the user; state is left
    untouched by whoever raises this.
    """

    def __init__(self, notice: str) -> None:
        super().__init__(notice)
        self.notice = notice


class UnknownStepError(WizardError, KeyError):
    """Raised when a step id is not part of the session's step list."""

    def __init__(self, step_id: str) -> None:
        super().__init__(step_id)
        self.step_id = step_id

    def __str__(self) -> str:
        return f"Unknown wizard step '{self.step_id}'"


class UnknownFieldError(WizardError, KeyError):
    """Raised when a field key is not declared for the given step."""

    def __init__(self, step_id: str, field: str) -> None:
        super().__init__(field)
        self.step_id = step_id
        self.field = field

    def __str__(self) -> str:
        return f"Step '{self.step_id}' has no field '{self.field}'"
