"""Pydantic models for the account form shown before the stepper."""

from __future__ import annotations

import re
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AccountDraft(BaseModel):
    """Mutable form state while the coach fills in the account form."""

    model_config = ConfigDict(validate_assignment=True)

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    country: str = ""
    linkedin: str = ""
    use_password: bool = False
    password: str = ""


class AccountProfile(BaseModel):
    """Validated identity/contact payload handed to the submit callback."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    _EMAIL_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"\S+@\S+\.\S+")

    first_name: str
    last_name: str
    email: str
    country: str = ""
    linkedin: Optional[str] = None
    password: Optional[str] = None

    @field_validator("first_name", "last_name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        if not value or not cls._EMAIL_PATTERN.search(value):
            raise ValueError("invalid email address")
        return value

    @field_validator("linkedin", "password", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object | None:
        if isinstance(value, str) and not value:
            return None
        return value

    @classmethod
    def from_draft(cls, draft: AccountDraft) -> "AccountProfile":
        """Build the payload from ``draft``; the password is kept only when opted in."""

        return cls(
            first_name=draft.first_name,
            last_name=draft.last_name,
            email=draft.email,
            country=draft.country,
            linkedin=draft.linkedin,
            password=draft.password if draft.use_password else None,
        )


__all__ = ["AccountDraft", "AccountProfile"]
