"""Pydantic models for the account form and wizard session state."""

from .account import AccountDraft, AccountProfile
from .session import AcceptedProfile, SubStepCursor, ToneProfile, WizardSessionState

__all__ = [
    "AcceptedProfile",
    "AccountDraft",
    "AccountProfile",
    "SubStepCursor",
    "ToneProfile",
    "WizardSessionState",
]
