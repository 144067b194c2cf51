"""Sub-step navigation within a single wizard step.

Every step runs ``intro -> question 0 .. Q-1 -> feedback`` and then hands
control back to the orchestrator. The preview step is the exception: its
three screens are the live preview, "what do you think?" and the terminal
"accepted" screen, and "tweak it" moves backwards instead of forwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from constants.options import PreviewFeedback, Thumb
from models.session import SubStepCursor
from wizard.answers import AnswerStore
from wizard.step_registry import StepDefinition, WizardStep
from wizard.validation import blocking_notice

logger = logging.getLogger(__name__)

SHARPEN_NOTICE = "Sharpen behaviour: coming soon"


class StepHost(Protocol):
    """Orchestrator operations the machine delegates to at step boundaries."""

    def next_step(self) -> bool: ...

    def previous_step(self) -> bool: ...


@dataclass(frozen=True)
class Transition:
    """Outcome of a navigation request.

    ``moved`` is ``False`` when nothing changed; ``notice`` then carries the
    message to show (a validation block or an informational hint).
    """

    moved: bool
    notice: str | None = None

    @property
    def blocked(self) -> bool:
        return not self.moved and self.notice is not None


STAYED = Transition(moved=False)
MOVED = Transition(moved=True)


class StepMachine:
    """Drive the :class:`SubStepCursor` of the active step."""

    def __init__(
        self,
        definition: StepDefinition,
        cursor: SubStepCursor,
        store: AnswerStore,
        host: StepHost,
    ) -> None:
        self.definition = definition
        self.cursor = cursor
        self._store = store
        self._host = host

    @property
    def step_id(self) -> str:
        return self.definition.key

    @property
    def last_sub(self) -> int:
        return self.definition.last_sub

    @property
    def on_feedback(self) -> bool:
        return not self.cursor.showing_intro and self.cursor.sub_index == self.last_sub

    def start_step(self) -> Transition:
        """Leave the intro screen for the first sub-step."""

        if not self.cursor.showing_intro:
            return STAYED
        self.cursor.showing_intro = False
        self.cursor.sub_index = 0
        logger.debug("Step %s started", self.step_id)
        return MOVED

    def go_next(self) -> Transition:
        """Advance one sub-step, or to the next step from the last sub-step.

        A failing validation predicate leaves every piece of state untouched
        and returns the blocking notice.
        """

        if self.cursor.showing_intro:
            return self.start_step()
        sub_index = self.cursor.sub_index
        notice = blocking_notice(self.definition, sub_index, self._store.record(self.step_id))
        if notice is not None:
            logger.info("Advance from %s/%s blocked: %s", self.step_id, sub_index, notice)
            return Transition(moved=False, notice=notice)
        if sub_index < self.last_sub:
            self.cursor.sub_index = sub_index + 1
            logger.debug("Step %s advanced to sub-step %s", self.step_id, self.cursor.sub_index)
            return MOVED
        return Transition(moved=self._host.next_step())

    def go_prev(self) -> Transition:
        if self.cursor.showing_intro or self.cursor.sub_index == 0:
            return Transition(moved=self._host.previous_step())
        self.cursor.sub_index -= 1
        logger.debug("Step %s went back to sub-step %s", self.step_id, self.cursor.sub_index)
        return MOVED

    def revisit_questions(self) -> Transition:
        """Return from the feedback screen to the intro, keeping the answers."""

        self.cursor.showing_intro = True
        self.cursor.sub_index = 0
        return MOVED

    def choose_preview_feedback(self, choice: PreviewFeedback | str) -> Transition:
        """Handle the "what do you think?" choice on the preview step."""

        if self.step_id != WizardStep.PREVIEW:
            raise ValueError(f"Preview feedback is not available on step '{self.step_id}'")
        choice = PreviewFeedback(choice)
        self._store.set(self.step_id, "feedback_choice", choice.value)
        if choice is PreviewFeedback.ACCEPT:
            self.cursor.sub_index = self.last_sub
            return MOVED
        if choice is PreviewFeedback.TWEAK:
            self._store.set(self.step_id, "show_advanced_controls", True)
            self.cursor.sub_index = 0
            return MOVED
        return Transition(moved=False, notice=SHARPEN_NOTICE)

    def toggle_thumb(self, thumb: Thumb | str) -> str | None:
        """Select ``thumb``; selecting the active thumb again clears it."""

        thumb = Thumb(thumb)
        current = self._store.get(self.step_id, "feedback_thumb")
        value = None if current == thumb.value else thumb.value
        self._store.set(self.step_id, "feedback_thumb", value)
        return value


__all__ = ["MOVED", "SHARPEN_NOTICE", "STAYED", "StepHost", "StepMachine", "Transition"]
