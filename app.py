# app.py — CoachNova onboarding (Streamlit entrypoint)
from __future__ import annotations

from pathlib import Path
import sys

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
for candidate in (APP_ROOT, APP_ROOT.parent):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from config import APP_TITLE, LOG_LEVEL  # noqa: E402
from state import ensure_state  # noqa: E402
from utils.logging_context import configure_logging  # noqa: E402
from wizard import run_wizard  # noqa: E402

configure_logging(level=LOG_LEVEL)

st.set_page_config(page_title=APP_TITLE, page_icon="🧭", layout="centered")

session = ensure_state()
run_wizard(session)
