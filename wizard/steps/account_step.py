"""Account form shown before the stepper, plus the welcome prompt."""

from __future__ import annotations

import streamlit as st

from constants.keys import UIKeys
from constants.options import COUNTRIES
from core.errors import ValidationBlocked
from integrations.geo import DETECTION_FAILED_NOTICE, detect_country
from state.autosave import deserialize_snapshot
from state.ensure_state import restore_session
from wizard.session import WizardSession

RESTORE_FAILED_NOTICE = "This file is not a valid CoachNova session."

_FIELD_KEYS: dict[str, str] = {
    "first_name": UIKeys.FIRST_NAME,
    "last_name": UIKeys.LAST_NAME,
    "email": UIKeys.EMAIL,
    "country": UIKeys.COUNTRY,
    "linkedin": UIKeys.LINKEDIN,
    "use_password": UIKeys.USE_PASSWORD,
    "password": UIKeys.PASSWORD,
}


def _sync_account(session: WizardSession) -> None:
    for field, widget_key in _FIELD_KEYS.items():
        if widget_key in st.session_state:
            value = st.session_state[widget_key]
            session.set_account_field(field, "" if value is None else value)


def _detect_now(session: WizardSession) -> None:
    detected = detect_country(max_retries=0)
    if not detected:
        session.pending_notice = DETECTION_FAILED_NOTICE
        return
    country = session.apply_detected_country(detected)
    if country:
        st.session_state[UIKeys.COUNTRY] = country


def _submit(session: WizardSession) -> None:
    _sync_account(session)
    try:
        session.submit_account()
    except ValidationBlocked:
        # The notice is kept on the session and rendered on the next run.
        return


def _restore(session: WizardSession) -> None:
    upload = st.session_state.get(UIKeys.RESTORE_UPLOAD)
    payload = deserialize_snapshot(upload.getvalue()) if upload is not None else None
    if payload is None or restore_session(payload) is None:
        session.pending_notice = RESTORE_FAILED_NOTICE


def _render_restore(session: WizardSession) -> None:
    with st.expander("Resume a saved session"):
        upload = st.file_uploader("Session file", type=["json"], key=UIKeys.RESTORE_UPLOAD)
        st.button(
            "Restore",
            key=UIKeys.RESTORE_SESSION,
            disabled=upload is None,
            on_click=_restore,
            args=(session,),
        )


def render_account_form(session: WizardSession) -> None:
    """Render the account form, or the welcome prompt once it is submitted."""

    if session.state.welcome_pending:
        st.subheader(session.welcome_message)
        st.button("Let's do it", key=UIKeys.START_STEPPER, type="primary", on_click=session.start_stepper)
        return

    account = session.state.account
    st.header("Create your account")
    notice = session.consume_notice()
    if notice:
        st.warning(notice)

    first, last = st.columns(2)
    first.text_input("First name", value=account.first_name, key=UIKeys.FIRST_NAME)
    last.text_input("Last name", value=account.last_name, key=UIKeys.LAST_NAME)
    st.text_input("Email", value=account.email, key=UIKeys.EMAIL)

    country_col, detect_col = st.columns([4, 1])
    options = list(COUNTRIES)
    if account.country and account.country not in options:
        options.insert(0, account.country)
    country_col.selectbox(
        "Country",
        options,
        index=options.index(account.country) if account.country in options else None,
        placeholder="Select your country",
        key=UIKeys.COUNTRY,
    )
    detect_col.button("Detect", key=UIKeys.DETECT_COUNTRY, on_click=_detect_now, args=(session,))

    st.text_input("LinkedIn (optional)", value=account.linkedin, key=UIKeys.LINKEDIN)
    use_password = st.toggle("Set a password", value=account.use_password, key=UIKeys.USE_PASSWORD)
    if use_password:
        st.text_input("Password", value=account.password, type="password", key=UIKeys.PASSWORD)

    st.button("Continue", key=UIKeys.SUBMIT_ACCOUNT, type="primary", on_click=_submit, args=(session,))
    _render_restore(session)


__all__ = ["RESTORE_FAILED_NOTICE", "render_account_form"]
