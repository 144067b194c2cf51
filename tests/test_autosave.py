from __future__ import annotations

import json

from models.session import AcceptedProfile, ToneProfile, WizardSessionState
from state.autosave import build_snapshot, deserialize_snapshot, parse_snapshot, serialize_snapshot
from wizard.session import WizardSession
from wizard.step_registry import WizardStep


def test_snapshot_omits_the_password(session: WizardSession) -> None:
    session.set_account_field("password", "hunter2")
    session.set_answer(WizardStep.LANGUAGE, "onboarding_language", "English")

    snapshot = build_snapshot(session.state)

    assert "password" not in snapshot["session"]["account"]
    assert snapshot["session"]["answers"]["language"]["onboarding_language"] == "English"
    assert snapshot["wizard"] == {"current_step": "language", "step_index": 0, "completed_steps": []}
    assert "captured_at" in snapshot["meta"]
    assert "profile" not in snapshot


def test_snapshot_includes_accepted_profile(session: WizardSession) -> None:
    accepted = AcceptedProfile(tone=ToneProfile(directness=9), closeness=6, answers={})

    snapshot = build_snapshot(session.state, accepted=accepted)

    assert snapshot["profile"]["tone"] == {"directness": 9, "warmth": 5, "challenge": 5}


def test_snapshot_restores_session_state(session: WizardSession, scheduler) -> None:
    session.start_step()
    session.set_answer(WizardStep.LANGUAGE, "onboarding_language", "Dutch")

    payload = json.loads(serialize_snapshot(build_snapshot(session.state)).decode("utf-8"))
    state = parse_snapshot(payload)

    assert isinstance(state, WizardSessionState)
    restored = WizardSession.from_state(state, scheduler=scheduler)
    assert restored.get_answer(WizardStep.LANGUAGE, "onboarding_language") == "Dutch"
    assert restored.cursor.showing_intro is False
    assert restored.state.account.password == ""


def test_invalid_snapshots_are_ignored() -> None:
    assert parse_snapshot({}) is None
    assert parse_snapshot({"session": "nope"}) is None
    assert parse_snapshot({"session": {"steps": [], "current_index": -1}}) is None


def test_serialized_snapshot_keeps_curly_quotes(session: WizardSession) -> None:
    session.set_answer(WizardStep.LANGUAGE, "twin_language", "“English”")

    encoded = serialize_snapshot(build_snapshot(session.state))

    assert "“English”".encode("utf-8") in encoded


def test_uploaded_snapshot_decodes(session: WizardSession) -> None:
    session.set_answer(WizardStep.LANGUAGE, "twin_language", "German")

    payload = deserialize_snapshot(serialize_snapshot(build_snapshot(session.state)))

    assert payload is not None
    state = parse_snapshot(payload)
    assert state is not None
    assert state.answers["language"]["twin_language"] == "German"


def test_unreadable_uploads_are_rejected() -> None:
    assert deserialize_snapshot(b"not json") is None
    assert deserialize_snapshot(b"\xff\xfe") is None
    assert deserialize_snapshot(b"[1, 2, 3]") is None
