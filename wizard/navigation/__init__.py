"""Navigation helpers for the Streamlit wizard."""

from __future__ import annotations

from wizard.navigation.keys import WizardSessionKeys

__all__ = ["WizardSessionKeys"]
