from __future__ import annotations

from typing import Any

import pytest
import streamlit as st

from wizard.session import WizardSession
from wizard.step_registry import WizardStep
from wizard.steps import preview_step


@pytest.fixture
def card_calls(monkeypatch: pytest.MonkeyPatch) -> dict[str, list[Any]]:
    calls: dict[str, list[Any]] = {"markdown": [], "fading": []}
    monkeypatch.setattr(st, "markdown", lambda body, **k: calls["markdown"].append(body))
    monkeypatch.setattr(preview_step, "_render_fading_card", lambda session: calls["fading"].append(session))
    return calls


def _preview_session(scheduler) -> WizardSession:
    session = WizardSession([(WizardStep.PREVIEW, "Preview")], scheduler=scheduler, session_id="card")
    session.start_stepper()
    session.start_step()
    return session


def test_settled_card_renders_without_polling(scheduler, card_calls) -> None:
    session = _preview_session(scheduler)

    preview_step._render_card(session)

    assert card_calls["fading"] == []
    assert len(card_calls["markdown"]) == 1
    assert "twin-card" in card_calls["markdown"][0]


def test_card_polls_only_while_crossfading(clock, scheduler, card_calls) -> None:
    session = _preview_session(scheduler)
    session.release_tone("warmth", 9)

    preview_step._render_card(session)

    assert card_calls["fading"] == [session]
    assert card_calls["markdown"] == []

    clock.advance(1.0)
    session.run_timers()
    preview_step._render_card(session)

    assert card_calls["fading"] == [session]
    assert len(card_calls["markdown"]) == 1
