"""Helpers for initializing Streamlit session state."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable

import streamlit as st

import config as app_config
from constants.keys import StateKeys, UIKeys
from integrations.geo import CountryPrefill
from models.account import AccountProfile
from models.session import AcceptedProfile
from state.autosave import parse_snapshot
from utils.logging_context import set_session_id
from wizard.session import WizardSession


logger = logging.getLogger(__name__)

_WIDGET_KEY_PREFIXES = ("ui.", "wiz:")


_DEFAULT_STATE_FACTORIES: Mapping[str, Callable[[], Any]] = MappingProxyType(
    {
        StateKeys.SUBMITTED_PROFILE: lambda: None,
        StateKeys.ACCEPTED_PROFILE: lambda: None,
    }
)


def _remember_submitted(profile: AccountProfile) -> None:
    st.session_state[StateKeys.SUBMITTED_PROFILE] = profile.model_dump(exclude={"password"})
    logger.info("Account profile submitted")


def _remember_accepted(profile: AcceptedProfile) -> None:
    st.session_state[StateKeys.ACCEPTED_PROFILE] = profile.model_dump()
    logger.info("Preview accepted with tone %s", profile.tone.as_tuple())


def ensure_state() -> WizardSession:
    """Initialize ``st.session_state`` with required keys and return the session.

    Existing keys are preserved so reruns keep the user's progress.
    """

    session_id = st.session_state.get(StateKeys.SESSION_ID)
    if not isinstance(session_id, str):
        session_id = uuid.uuid4().hex[:12]
        st.session_state[StateKeys.SESSION_ID] = session_id
    set_session_id(session_id)

    for key, factory in _DEFAULT_STATE_FACTORIES.items():
        if key not in st.session_state:
            st.session_state[key] = factory()

    session = st.session_state.get(StateKeys.SESSION)
    if not isinstance(session, WizardSession):
        session = WizardSession(
            on_submit_profile=_remember_submitted,
            on_accept_profile=_remember_accepted,
            session_id=session_id,
        )
        st.session_state[StateKeys.SESSION] = session
        logger.debug("Created wizard session")

    _poll_country_prefill(session)
    return session


def restore_session(payload: Mapping[str, Any]) -> WizardSession | None:
    """Replace the active session with the one captured in ``payload``.

    Returns ``None`` and keeps the current session when the payload does not
    hold a valid snapshot. Widget state is dropped so the form shows the
    restored answers.
    """

    state = parse_snapshot(payload)
    if state is None:
        return None
    session_id = st.session_state.get(StateKeys.SESSION_ID)
    session = WizardSession.from_state(
        state,
        on_submit_profile=_remember_submitted,
        on_accept_profile=_remember_accepted,
        session_id=session_id if isinstance(session_id, str) else None,
    )
    for key in list(st.session_state.keys()):
        if isinstance(key, str) and key.startswith(_WIDGET_KEY_PREFIXES):
            del st.session_state[key]
    st.session_state[StateKeys.SESSION] = session
    logger.info("Restored wizard session at step %s", session.current_step_id)
    return session


def _poll_country_prefill(session: WizardSession) -> None:
    """Start background country detection once and apply its result when ready."""

    if not app_config.GEO_LOOKUP_ENABLED or session.state.stepper_active:
        return
    prefill = st.session_state.get(StateKeys.COUNTRY_PREFILL)
    if not isinstance(prefill, CountryPrefill):
        prefill = CountryPrefill()
        st.session_state[StateKeys.COUNTRY_PREFILL] = prefill
        prefill.start()
    detected = prefill.poll()
    if detected:
        if session.apply_detected_country(detected, overwrite=False):
            st.session_state[UIKeys.COUNTRY] = session.state.account.country


def reset_state() -> None:
    """Drop the wizard session and start over with a fresh one."""

    for key in list(st.session_state.keys()):
        del st.session_state[key]
    ensure_state()
