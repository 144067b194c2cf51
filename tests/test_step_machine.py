from __future__ import annotations

import pytest

from constants.options import PreviewFeedback, Thumb
from models.session import SubStepCursor
from wizard.answers import AnswerStore
from wizard.step_machine import SHARPEN_NOTICE, StepMachine
from wizard.step_registry import WIZARD_STEPS, WizardStep, get_step_definition


class _Host:
    def __init__(self, *, can_advance: bool = True, can_retreat: bool = True) -> None:
        self.can_advance = can_advance
        self.can_retreat = can_retreat
        self.calls: list[str] = []

    def next_step(self) -> bool:
        self.calls.append("next")
        return self.can_advance

    def previous_step(self) -> bool:
        self.calls.append("previous")
        return self.can_retreat


@pytest.fixture
def store() -> AnswerStore:
    return AnswerStore({step.key: step for step in WIZARD_STEPS})


def _machine(step_id: str, store: AnswerStore, host: _Host | None = None, **cursor: object) -> StepMachine:
    return StepMachine(get_step_definition(step_id), SubStepCursor(**cursor), store, host or _Host())


def test_next_from_intro_starts_the_step(store: AnswerStore) -> None:
    machine = _machine(WizardStep.LANGUAGE, store)

    transition = machine.go_next()

    assert transition.moved
    assert machine.cursor.showing_intro is False
    assert machine.cursor.sub_index == 0


def test_unanswered_language_question_blocks(store: AnswerStore) -> None:
    machine = _machine(WizardStep.LANGUAGE, store, showing_intro=False)

    transition = machine.go_next()

    assert transition.blocked
    assert transition.notice == "Please select a language to continue"
    assert machine.cursor.sub_index == 0


def test_blocked_advance_leaves_the_record_untouched(store: AnswerStore) -> None:
    store.set(WizardStep.IDENTITY, "tone_words", "Warm")
    before = store.record(WizardStep.IDENTITY)
    machine = _machine(WizardStep.IDENTITY, store, showing_intro=False)

    transition = machine.go_next()

    assert transition.notice == "Please answer Q1 to continue"
    assert store.record(WizardStep.IDENTITY) == before
    assert machine.cursor.sub_index == 0


def test_answered_question_advances(store: AnswerStore) -> None:
    store.set(WizardStep.LANGUAGE, "onboarding_language", "English")
    machine = _machine(WizardStep.LANGUAGE, store, showing_intro=False)

    assert machine.go_next().moved
    assert machine.cursor.sub_index == 1


def test_typical_clients_question_is_not_gated(store: AnswerStore) -> None:
    machine = _machine(WizardStep.IDENTITY, store, showing_intro=False, sub_index=4)

    assert machine.go_next().moved
    assert machine.on_feedback


def test_other_text_satisfies_a_gated_question(store: AnswerStore) -> None:
    store.set(WizardStep.METHOD, "approach_other_text", "Appreciative inquiry")
    machine = _machine(WizardStep.METHOD, store, showing_intro=False)

    assert machine.go_next().moved


def test_typed_phrase_satisfies_q3_without_the_other_toggle(store: AnswerStore) -> None:
    store.set(WizardStep.IDENTITY, "phrase_often_other_text", "Let's dig in")
    store.set(WizardStep.IDENTITY, "phrase_often_other_open", False)
    machine = _machine(WizardStep.IDENTITY, store, showing_intro=False, sub_index=2)

    transition = machine.go_next()

    assert transition.moved
    assert transition.notice is None
    assert machine.cursor.sub_index == 3


def test_blank_phrase_still_blocks_q3(store: AnswerStore) -> None:
    store.set(WizardStep.IDENTITY, "phrase_often_other_text", "   ")
    machine = _machine(WizardStep.IDENTITY, store, showing_intro=False, sub_index=2)

    transition = machine.go_next()

    assert transition.notice == "Please select or enter a phrase for Q3"
    assert machine.cursor.sub_index == 2


def test_next_from_feedback_hands_over_to_the_host(store: AnswerStore) -> None:
    host = _Host()
    machine = _machine(WizardStep.METHOD, store, host, showing_intro=False, sub_index=3)

    transition = machine.go_next()

    assert transition.moved
    assert host.calls == ["next"]


def test_next_on_last_step_feedback_stays(store: AnswerStore) -> None:
    host = _Host(can_advance=False)
    machine = _machine(WizardStep.GUARDRAILS, store, host, showing_intro=False, sub_index=3)

    transition = machine.go_next()

    assert not transition.moved
    assert not transition.blocked


def test_back_within_a_step_and_across_steps(store: AnswerStore) -> None:
    host = _Host(can_retreat=False)
    machine = _machine(WizardStep.EXAMPLE, store, host, showing_intro=False, sub_index=2)

    assert machine.go_prev().moved
    assert machine.cursor.sub_index == 1
    machine.go_prev()
    assert machine.cursor.sub_index == 0

    transition = machine.go_prev()

    assert not transition.moved
    assert host.calls == ["previous"]
    assert machine.cursor.sub_index == 0


def test_revisit_questions_keeps_answers(store: AnswerStore) -> None:
    store.set(WizardStep.EXAMPLE, "dialogue", "Coach: Why?\nClient: Because.")
    machine = _machine(WizardStep.EXAMPLE, store, showing_intro=False, sub_index=3)

    machine.revisit_questions()

    assert machine.cursor.showing_intro is True
    assert machine.cursor.sub_index == 0
    assert store.get(WizardStep.EXAMPLE, "dialogue") == "Coach: Why?\nClient: Because."


def test_accept_moves_to_terminal_screen(store: AnswerStore) -> None:
    machine = _machine(WizardStep.PREVIEW, store, showing_intro=False, sub_index=1)

    assert machine.choose_preview_feedback(PreviewFeedback.ACCEPT).moved

    assert machine.cursor.sub_index == 2
    assert store.get(WizardStep.PREVIEW, "feedback_choice") == "accept"


def test_tweak_returns_to_live_preview_with_advanced_controls(store: AnswerStore) -> None:
    store.set(WizardStep.PREVIEW, "committed_directness", 9)
    machine = _machine(WizardStep.PREVIEW, store, showing_intro=False, sub_index=1)

    machine.choose_preview_feedback("tweak")

    assert machine.cursor.sub_index == 0
    assert store.get(WizardStep.PREVIEW, "show_advanced_controls") is True
    assert store.get(WizardStep.PREVIEW, "committed_directness") == 9


def test_sharpen_only_reports_a_notice(store: AnswerStore) -> None:
    machine = _machine(WizardStep.PREVIEW, store, showing_intro=False, sub_index=1)

    transition = machine.choose_preview_feedback(PreviewFeedback.SHARPEN)

    assert transition.notice == SHARPEN_NOTICE
    assert machine.cursor.sub_index == 1


def test_preview_feedback_is_rejected_elsewhere(store: AnswerStore) -> None:
    machine = _machine(WizardStep.LANGUAGE, store, showing_intro=False)

    with pytest.raises(ValueError):
        machine.choose_preview_feedback(PreviewFeedback.ACCEPT)


def test_thumbs_toggle(store: AnswerStore) -> None:
    machine = _machine(WizardStep.PREVIEW, store, showing_intro=False, sub_index=1)

    assert machine.toggle_thumb(Thumb.UP) == "up"
    assert machine.toggle_thumb(Thumb.DOWN) == "down"
    assert machine.toggle_thumb("down") is None
    assert store.get(WizardStep.PREVIEW, "feedback_thumb") is None
