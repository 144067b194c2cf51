from __future__ import annotations

from typing import Any

import pytest
import streamlit as st

from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation_ui import render_notice, render_step_progress, render_stepper
from wizard.session import WizardSession
from wizard.step_registry import WizardStep
from wizard.steps.question_step import BLANK_STEP_NOTICE, render_question_step


class DummyContext:
    """Lightweight context manager used to stub column blocks."""

    def __enter__(self):
        return None

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - interface only
        return None

    def button(self, *args: Any, **kwargs: Any) -> bool:
        return st.button(*args, **kwargs)


@pytest.fixture
def ui_calls(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[Any]]:
    calls: dict[str, list[Any]] = {"button": [], "markdown": [], "warning": [], "info": []}

    def fake_button(label: str, **kwargs: Any) -> bool:
        calls["button"].append((label, kwargs))
        return False

    monkeypatch.setattr(st, "button", fake_button)
    monkeypatch.setattr(st, "columns", lambda spec, **k: [DummyContext() for _ in range(spec)])
    monkeypatch.setattr(st, "markdown", lambda body, **k: calls["markdown"].append(body))
    monkeypatch.setattr(st, "warning", lambda body, **k: calls["warning"].append(body))
    monkeypatch.setattr(st, "info", lambda body, **k: calls["info"].append(body))
    for name in ("header", "subheader", "caption"):
        monkeypatch.setattr(st, name, lambda *a, **k: None)
    return calls


def _complete_language(session: WizardSession) -> None:
    session.start_step()
    session.set_answer(WizardStep.LANGUAGE, "onboarding_language", "English")
    session.set_answer(WizardStep.LANGUAGE, "twin_language", "English")
    for _ in range(3):
        session.go_next()


def test_stepper_disables_unreachable_steps(session: WizardSession, ui_calls) -> None:
    _complete_language(session)
    keys = WizardSessionKeys(wizard_id="test")

    render_stepper(session, keys)

    buttons = {kwargs["key"]: (label, kwargs) for label, kwargs in ui_calls["button"]}
    language_label, language = buttons[keys.action("jump.language")]
    _, identity = buttons[keys.action("jump.identity")]
    _, method = buttons[keys.action("jump.method")]
    assert language_label == "✓"
    assert language["disabled"] is False
    assert identity["disabled"] is True
    assert identity["type"] == "primary"
    assert method["disabled"] is True

    language["on_click"]()
    assert session.current_step_id == WizardStep.LANGUAGE


def test_progress_bar_reflects_recorded_progress(session: WizardSession, ui_calls) -> None:
    session.set_answer(WizardStep.LANGUAGE, "onboarding_language", "English")

    render_step_progress(session)

    bar = ui_calls["markdown"][-1]
    assert bar.count("<span>") == len(session.step_ids)
    assert "width:50%" in bar


def test_notice_is_shown_once(session: WizardSession, ui_calls) -> None:
    session.start_step()
    session.go_next()

    render_notice(session)
    render_notice(session)

    assert ui_calls["warning"] == ["Please select a language to continue"]


def test_intro_start_button_enters_the_first_question(session: WizardSession, ui_calls) -> None:
    keys = WizardSessionKeys(wizard_id="test")

    render_question_step(session, keys)

    label, kwargs = ui_calls["button"][-1]
    assert label == "Start"
    kwargs["on_click"]()
    assert session.cursor.showing_intro is False


def test_blank_step_shows_placeholder(scheduler, ui_calls) -> None:
    session = WizardSession([("coming-soon", "Coming soon"), ("later", "Later")], scheduler=scheduler)
    session.start_stepper()
    session.start_step()

    render_question_step(session, WizardSessionKeys(wizard_id="test"))

    assert ui_calls["info"] == [BLANK_STEP_NOTICE]
    labels = [label for label, _ in ui_calls["button"]]
    assert labels == ["Back", "Next"]


def test_widget_keys_are_namespaced() -> None:
    keys = WizardSessionKeys(wizard_id="abc")

    assert keys.widget("identity", "tone_words", 3, 1) == "wiz:abc:identity.tone_words.3.1"
    assert keys.action("next") == "wiz:abc:action.next"
