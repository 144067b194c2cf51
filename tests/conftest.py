from pathlib import Path
import sys
from dataclasses import dataclass

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import config

from core.crossfade import DeferredScheduler
from wizard.session import WizardSession


@pytest.fixture(autouse=True)
def _disable_geo_lookup(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests off the network unless a test opts back in."""

    monkeypatch.setattr(config, "GEO_LOOKUP_ENABLED", False, raising=False)
    monkeypatch.setattr(config, "GEO_ENDPOINT", None, raising=False)
    yield


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock: FakeClock) -> DeferredScheduler:
    return DeferredScheduler(clock=clock)


@pytest.fixture
def session(scheduler: DeferredScheduler) -> WizardSession:
    """A session with the stepper started on the first step."""

    wizard_session = WizardSession(scheduler=scheduler, session_id="test-session")
    wizard_session.start_stepper()
    return wizard_session
