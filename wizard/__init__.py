"""Wizard engine and Streamlit entry point."""

from __future__ import annotations

from wizard.navigation.keys import WizardSessionKeys
from wizard.session import WizardSession
from wizard.step_registry import DEFAULT_STEP_LIST, WizardStep


def run_wizard(session: WizardSession, *, wizard_id: str = "default") -> None:
    """Render the account form or the active wizard step for ``session``."""

    from wizard.navigation_ui import (
        inject_navigation_style,
        render_notice,
        render_step_progress,
        render_stepper,
    )
    from wizard.steps.account_step import render_account_form
    from wizard.steps.preview_step import render_preview_step
    from wizard.steps.question_step import render_question_step

    if not session.state.stepper_active:
        render_account_form(session)
        return

    keys = WizardSessionKeys(wizard_id=wizard_id)
    inject_navigation_style()
    render_stepper(session, keys)
    render_step_progress(session)
    render_notice(session)
    if session.current_step_id == WizardStep.PREVIEW:
        render_preview_step(session, keys)
    else:
        render_question_step(session, keys)


__all__ = ["DEFAULT_STEP_LIST", "WizardSession", "WizardStep", "run_wizard"]
