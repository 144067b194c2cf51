"""Session snapshot export/import helpers for the wizard."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from pydantic import ValidationError

from models.session import AcceptedProfile, WizardSessionState


logger = logging.getLogger(__name__)

AutosavePayload = dict[str, Any]


def _wizard_summary(state: WizardSessionState) -> dict[str, Any]:
    return {
        "current_step": state.current_step_id,
        "step_index": state.current_index,
        "completed_steps": [step_id for step_id, _ in state.steps if state.progress.get(step_id, 0.0) >= 1.0],
    }


def build_snapshot(
    session_state: WizardSessionState,
    *,
    accepted: AcceptedProfile | None = None,
) -> AutosavePayload:
    """Return a portable snapshot that can be downloaded or restored later.

    The account password never leaves the session.
    """

    meta: dict[str, Any] = {"captured_at": datetime.now(timezone.utc).isoformat()}
    snapshot: AutosavePayload = {
        "session": session_state.model_dump(mode="json", exclude={"account": {"password"}}),
        "wizard": _wizard_summary(session_state),
        "meta": meta,
    }
    if accepted is not None:
        snapshot["profile"] = accepted.model_dump(mode="json")
    return snapshot


def parse_snapshot(payload: Mapping[str, Any]) -> WizardSessionState | None:
    """Return the session state stored in ``payload`` or ``None`` when invalid."""

    raw = payload.get("session")
    if not isinstance(raw, Mapping):
        return None
    try:
        return WizardSessionState.model_validate(raw)
    except ValidationError as error:
        logger.warning("Ignoring invalid session snapshot: %s", error.error_count())
        return None


def deserialize_snapshot(data: bytes) -> AutosavePayload | None:
    """Decode an uploaded snapshot file, or return ``None`` when it is not one."""

    try:
        payload = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        logger.warning("Ignoring unreadable session snapshot: %s", type(error).__name__)
        return None
    if not isinstance(payload, dict):
        return None
    return payload


def serialize_snapshot(snapshot: Mapping[str, Any]) -> bytes:
    """Return a JSON representation of ``snapshot`` for download."""

    return json.dumps(snapshot, ensure_ascii=False, indent=2).encode("utf-8")


__all__ = [
    "AutosavePayload",
    "build_snapshot",
    "deserialize_snapshot",
    "parse_snapshot",
    "serialize_snapshot",
]
