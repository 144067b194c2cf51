"""Serializable wizard session state."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.account import AccountDraft


class ToneProfile(BaseModel):
    """Directness, warmth and challenge, each on a 1–10 scale."""

    model_config = ConfigDict(frozen=True)

    directness: int = Field(5, ge=1, le=10)
    warmth: int = Field(5, ge=1, le=10)
    challenge: int = Field(5, ge=1, le=10)

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.directness, self.warmth, self.challenge)


class SubStepCursor(BaseModel):
    """Position inside the active step: intro screen, then ``sub_index``."""

    showing_intro: bool = True
    sub_index: int = Field(0, ge=0)


class WizardSessionState(BaseModel):
    """Everything needed to restore a wizard session.

    ``answers`` maps step ids to their answer records; ``progress`` is the
    progress map and is only written through the progress calculator.
    ``visits`` counts step entries so widgets of a re-entered step start fresh.
    """

    model_config = ConfigDict(validate_assignment=True)

    steps: list[tuple[str, str]]
    current_index: int = Field(0, ge=0)
    cursor: SubStepCursor = Field(default_factory=SubStepCursor)
    answers: dict[str, dict[str, Any]] = Field(default_factory=dict)
    progress: dict[str, float] = Field(default_factory=dict)
    account: AccountDraft = Field(default_factory=AccountDraft)
    stepper_active: bool = False
    welcome_pending: bool = False
    visits: int = Field(0, ge=0)

    @property
    def current_step_id(self) -> str:
        return self.steps[self.current_index][0]


class AcceptedProfile(BaseModel):
    """Outbound payload once the coach accepts the preview."""

    tone: ToneProfile
    closeness: int
    feedback_thumb: str | None = None
    answers: dict[str, dict[str, Any]]


__all__ = ["AcceptedProfile", "SubStepCursor", "ToneProfile", "WizardSessionState"]
