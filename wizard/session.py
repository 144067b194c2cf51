"""Wizard orchestrator.

:class:`WizardSession` composes the answer store, progress calculator, the
per-step :class:`~wizard.step_machine.StepMachine`, preview synthesis and the
crossfade into one navigable object. It owns a serializable
:class:`~models.session.WizardSessionState` so a Streamlit session can keep
it across reruns and tests can drive it without any UI.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from typing import Any

from pydantic import ValidationError

from constants.options import PreviewFeedback, Thumb
from core.crossfade import Crossfade, DeferredScheduler
from core.errors import UnknownStepError, ValidationBlocked
from core.preview import PersonaContext, PreviewState, default_preview_state, synthesize_preview
from integrations.geo import match_country
from models.account import AccountProfile
from models.session import AcceptedProfile, SubStepCursor, ToneProfile, WizardSessionState
from utils.logging_context import log_context
from wizard.answers import AnswerStore
from wizard.progress import ProgressCalculator
from wizard.step_machine import StepMachine, Transition
from wizard.step_registry import (
    DEFAULT_STEP_LIST,
    SLIDER_MAX,
    SLIDER_MIN,
    TONE_AXES,
    StepDefinition,
    WizardStep,
    committed_key,
    get_step_definition,
)

logger = logging.getLogger(__name__)

ACCOUNT_NOTICE = "Please complete the required fields with valid information."

SubmitProfileCallback = Callable[[AccountProfile], None]
AcceptProfileCallback = Callable[[AcceptedProfile], None]


def _clamp_slider(value: int | float) -> int:
    return max(SLIDER_MIN, min(SLIDER_MAX, int(round(value))))


class WizardSession:
    """Navigable onboarding session.

    Args:
        steps: Ordered ``(id, label)`` pairs. Ids without a registered
            definition become blank steps.
        country: Country resolved before the session started, if any.
        on_submit_profile: Called with the validated account payload.
        on_accept_profile: Called when the coach accepts the preview.
        scheduler: Timer source for the preview crossfade.
        session_id: Identifier bound to the logging context.
        state: Previously captured state to resume from.
    """

    def __init__(
        self,
        steps: Sequence[tuple[str, str]] = DEFAULT_STEP_LIST,
        *,
        country: str | None = None,
        on_submit_profile: SubmitProfileCallback | None = None,
        on_accept_profile: AcceptProfileCallback | None = None,
        scheduler: DeferredScheduler | None = None,
        session_id: str | None = None,
        state: WizardSessionState | None = None,
    ) -> None:
        if state is None:
            if not steps:
                raise ValueError("A wizard session needs at least one step")
            state = WizardSessionState(steps=[(step_id, label) for step_id, label in steps])
        self.state = state
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.definitions: dict[str, StepDefinition] = {
            step_id: get_step_definition(step_id, label) for step_id, label in self.state.steps
        }
        self.store = AnswerStore(self.definitions, self.state.answers)
        self.progress = ProgressCalculator(self.store, self.step_ids, self.definitions)
        self.store.subscribe(self._record_progress)
        self.scheduler = scheduler or DeferredScheduler()
        self._on_submit_profile = on_submit_profile
        self._on_accept_profile = on_accept_profile
        self.pending_notice: str | None = None
        self.preview: PreviewState = self._initial_preview()
        self.crossfade = self._new_crossfade()
        if country:
            self.apply_detected_country(country)

    @classmethod
    def from_state(cls, state: WizardSessionState, **kwargs: Any) -> "WizardSession":
        """Resume a session from a snapshot produced by :meth:`snapshot`."""

        return cls(state.steps, state=state.model_copy(deep=True), **kwargs)

    def snapshot(self) -> WizardSessionState:
        return self.state.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Introspection

    @property
    def step_ids(self) -> tuple[str, ...]:
        return tuple(step_id for step_id, _ in self.state.steps)

    @property
    def current_index(self) -> int:
        return self.state.current_index

    @property
    def current_step_id(self) -> str:
        return self.state.current_step_id

    @property
    def current_definition(self) -> StepDefinition:
        return self.definitions[self.current_step_id]

    @property
    def cursor(self) -> SubStepCursor:
        return self.state.cursor

    @property
    def machine(self) -> StepMachine:
        return StepMachine(self.current_definition, self.state.cursor, self.store, self)

    def _context(self) -> Any:
        sub_step = "intro" if self.state.cursor.showing_intro else self.state.cursor.sub_index
        return log_context(session_id=self.session_id, wizard_step=self.current_step_id, sub_step=sub_step)

    # ------------------------------------------------------------------
    # Progress

    def _record_progress(self, step_id: str) -> None:
        self.state.progress[step_id] = self.progress.progress(step_id)

    def progress_for(self, step_id: str) -> float:
        """Return the recorded progress for ``step_id`` (``0.0`` if unvisited)."""

        if step_id not in self.definitions:
            raise UnknownStepError(step_id)
        return self.state.progress.get(step_id, 0.0)

    def progress_map(self) -> dict[str, float]:
        return {step_id: self.progress_for(step_id) for step_id in self.step_ids}

    def is_completed(self, index: int) -> bool:
        return self.progress_for(self.step_ids[index]) >= 1.0

    def is_clickable(self, index: int) -> bool:
        """Return ``True`` when the stepper may jump to ``index``."""

        if not 0 <= index < len(self.step_ids):
            return False
        return self.is_completed(index) or index < self.current_index

    # ------------------------------------------------------------------
    # Step-level navigation

    def next_step(self) -> bool:
        if self.current_index >= len(self.step_ids) - 1:
            return False
        self._go_to(self.current_index + 1)
        return True

    def previous_step(self) -> bool:
        if self.current_index <= 0:
            return False
        self._go_to(self.current_index - 1)
        return True

    def jump_to(self, index: int) -> bool:
        if index == self.current_index or not self.is_clickable(index):
            return False
        self._go_to(index)
        return True

    def _go_to(self, index: int) -> None:
        previous_id = self.current_step_id
        self.state.current_index = index
        if self.current_step_id != previous_id:
            self._enter_step(previous_id)

    def _enter_step(self, previous_id: str) -> None:
        step_id = self.current_step_id
        if previous_id == WizardStep.PREVIEW:
            self.crossfade.cancel()
        self.state.cursor.showing_intro = True
        self.state.cursor.sub_index = 0
        self.state.visits += 1
        if step_id == WizardStep.PREVIEW:
            self._reenter_preview()
        else:
            self.store.clear(step_id)
        with self._context():
            logger.debug("Entered step %s (from %s)", step_id, previous_id)

    # ------------------------------------------------------------------
    # Sub-step navigation

    def _apply(self, transition: Transition) -> Transition:
        self.pending_notice = transition.notice
        return transition

    def start_step(self) -> Transition:
        with self._context():
            return self._apply(self.machine.start_step())

    def go_next(self) -> Transition:
        with self._context():
            return self._apply(self.machine.go_next())

    def go_prev(self) -> Transition:
        with self._context():
            return self._apply(self.machine.go_prev())

    def revisit_questions(self) -> Transition:
        with self._context():
            return self._apply(self.machine.revisit_questions())

    def consume_notice(self) -> str | None:
        notice, self.pending_notice = self.pending_notice, None
        return notice

    # ------------------------------------------------------------------
    # Answers

    def get_answer(self, step_id: str, key: str) -> Any:
        return self.store.get(step_id, key)

    def set_answer(self, step_id: str, key: str, value: Any) -> None:
        self.store.set(step_id, key, value)

    # ------------------------------------------------------------------
    # Preview

    def persona(self) -> PersonaContext:
        identity = self.store.record(WizardStep.IDENTITY) if WizardStep.IDENTITY in self.definitions else None
        method = self.store.record(WizardStep.METHOD) if WizardStep.METHOD in self.definitions else None
        return PersonaContext.from_answers(identity, method)

    def _require_preview(self) -> str:
        if WizardStep.PREVIEW not in self.definitions:
            raise UnknownStepError(WizardStep.PREVIEW)
        return WizardStep.PREVIEW

    def live_tone(self) -> dict[str, int]:
        step_id = self._require_preview()
        return {axis: self.store.get(step_id, axis) for axis in TONE_AXES}

    def committed_tone(self) -> ToneProfile:
        step_id = self._require_preview()
        return ToneProfile(**{axis: self.store.get(step_id, committed_key(axis)) for axis in TONE_AXES})

    def drag_tone(self, axis: str, value: int | float) -> None:
        """Move the live value of ``axis``; nothing else changes until release."""

        if axis not in TONE_AXES:
            raise ValueError(f"Unknown tone axis '{axis}'")
        self.store.set(self._require_preview(), axis, _clamp_slider(value))

    def commit_preview_from_sliders(self) -> PreviewState:
        """Commit the live tone values and start the preview crossfade."""

        step_id = self._require_preview()
        for axis in TONE_AXES:
            self.store.set(step_id, committed_key(axis), self.store.get(step_id, axis))
        tone = self.committed_tone()
        self.preview = synthesize_preview(tone, self.persona())
        self.crossfade.start(self.preview.demo_text, self.preview.background_gradient)
        with self._context():
            logger.debug("Committed tone %s", tone.as_tuple())
        return self.preview

    def release_tone(self, axis: str, value: int | float) -> PreviewState:
        self.drag_tone(axis, value)
        return self.commit_preview_from_sliders()

    def release_closeness(self, value: int) -> None:
        """Store the closeness rating and reveal the advanced tone sliders."""

        step_id = self._require_preview()
        self.store.set(step_id, "closeness", int(value))
        self.store.set(step_id, "show_advanced_controls", True)

    def choose_preview_feedback(self, choice: PreviewFeedback | str) -> Transition:
        with self._context():
            transition = self._apply(self.machine.choose_preview_feedback(choice))
        if PreviewFeedback(choice) is PreviewFeedback.ACCEPT and self._on_accept_profile is not None:
            profile = self.accepted_profile()
            if profile is not None:
                self._on_accept_profile(profile)
        return transition

    def toggle_thumb(self, thumb: Thumb | str) -> str | None:
        return self.machine.toggle_thumb(thumb)

    def run_timers(self) -> int:
        return self.scheduler.run_due()

    def _initial_preview(self) -> PreviewState:
        """Return the card matching the committed tone, or the neutral default."""

        if WizardStep.PREVIEW in self.definitions and self.store.has_record(WizardStep.PREVIEW):
            return synthesize_preview(self.committed_tone(), self.persona())
        return default_preview_state(self.persona())

    def _reenter_preview(self) -> None:
        """Reset the live controls of the preview step.

        The committed tone and the card it produced survive re-entry; only an
        explicit commit changes them.
        """

        step_id = WizardStep.PREVIEW
        committed = {committed_key(axis): self.store.get(step_id, committed_key(axis)) for axis in TONE_AXES}
        self.store.clear(step_id)
        for key, value in committed.items():
            self.store.set(step_id, key, value)
        self.crossfade.cancel()
        self.crossfade = self._new_crossfade()

    def _new_crossfade(self) -> Crossfade:
        return Crossfade(
            self.scheduler,
            demo_text=self.preview.demo_text,
            gradient=self.preview.background_gradient,
        )

    def accepted_profile(self) -> AcceptedProfile | None:
        """Return the outbound payload once the terminal preview screen is shown."""

        if self.current_step_id != WizardStep.PREVIEW:
            return None
        cursor = self.state.cursor
        if cursor.showing_intro or cursor.sub_index != self.current_definition.last_sub:
            return None
        return AcceptedProfile(
            tone=self.committed_tone(),
            closeness=self.store.get(WizardStep.PREVIEW, "closeness"),
            feedback_thumb=self.store.get(WizardStep.PREVIEW, "feedback_thumb"),
            answers=self.store.records(),
        )

    # ------------------------------------------------------------------
    # Account form

    def set_account_field(self, name: str, value: Any) -> None:
        if name not in type(self.state.account).model_fields:
            raise AttributeError(f"Unknown account field '{name}'")
        setattr(self.state.account, name, value)

    def apply_detected_country(self, name: str, *, overwrite: bool = True) -> str | None:
        """Write a detected country into the account form.

        Empty names are ignored; ``overwrite=False`` keeps a country the user
        already chose.
        """

        if not name or not name.strip():
            return None
        if not overwrite and self.state.account.country:
            return None
        country = match_country(name)
        self.state.account.country = country
        logger.debug("Country prefilled with %s", country)
        return country

    def submit_account(self) -> AccountProfile:
        """Validate the account form and hand it to the submit callback.

        Raises:
            ValidationBlocked: If a required field is missing or invalid.
        """

        try:
            profile = AccountProfile.from_draft(self.state.account)
        except ValidationError as error:
            logger.info("Account submission blocked: %s", error.error_count())
            self.pending_notice = ACCOUNT_NOTICE
            raise ValidationBlocked(ACCOUNT_NOTICE) from error
        if self._on_submit_profile is not None:
            self._on_submit_profile(profile)
        self.pending_notice = None
        self.state.welcome_pending = True
        return profile

    @property
    def welcome_message(self) -> str:
        return f"Welcome {self.state.account.first_name}, Lets build your AI Twin."

    def start_stepper(self) -> None:
        """Dismiss the welcome prompt and enter the first step."""

        self.state.welcome_pending = False
        self.state.stepper_active = True
        previous_id = self.current_step_id
        self.state.current_index = 0
        self._enter_step(previous_id)


__all__ = ["ACCOUNT_NOTICE", "WizardSession"]
