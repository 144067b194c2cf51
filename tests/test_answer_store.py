from __future__ import annotations

import pytest

from constants.options import SUPPORT_AREA_ROWS, TONE_WORD_OPTIONS
from core.errors import UnknownFieldError, UnknownStepError
from wizard.answers import AnswerStore
from wizard.step_registry import WIZARD_STEPS, WizardStep


@pytest.fixture
def store() -> AnswerStore:
    return AnswerStore({step.key: step for step in WIZARD_STEPS})


def test_empty_defaults_per_kind(store: AnswerStore) -> None:
    assert store.get(WizardStep.IDENTITY, "client_feedback") == ""
    assert store.get(WizardStep.IDENTITY, "tone_words") == []
    assert store.get(WizardStep.IDENTITY, "phrase_often") is None
    assert store.get(WizardStep.IDENTITY, "phrase_often_other_open") is False
    assert store.get(WizardStep.GUARDRAILS, "permissions") == {row: None for row in SUPPORT_AREA_ROWS}
    assert store.get(WizardStep.PREVIEW, "closeness") == 5
    assert store.get(WizardStep.PREVIEW, "committed_warmth") == 5
    assert not store.has_record(WizardStep.IDENTITY)


def test_third_tone_word_is_a_no_op(store: AnswerStore) -> None:
    first, second, third = TONE_WORD_OPTIONS[:3]
    store.set(WizardStep.IDENTITY, "tone_words", first)
    store.set(WizardStep.IDENTITY, "tone_words", second)

    store.set(WizardStep.IDENTITY, "tone_words", third)

    assert store.get(WizardStep.IDENTITY, "tone_words") == [first, second]


def test_toggling_a_selected_member_removes_it(store: AnswerStore) -> None:
    store.set(WizardStep.IDENTITY, "tone_words", "Warm")
    store.set(WizardStep.IDENTITY, "tone_words", "Warm")

    assert store.get(WizardStep.IDENTITY, "tone_words") == []


def test_uncapped_multi_select_accepts_every_option(store: AnswerStore) -> None:
    step = next(step for step in WIZARD_STEPS if step.key == WizardStep.IDENTITY)
    options = step.fields["client_types"].options
    for option in options:
        store.set(WizardStep.IDENTITY, "client_types", option)

    assert store.get(WizardStep.IDENTITY, "client_types") == list(options)


def test_typing_other_text_opens_the_other_toggle(store: AnswerStore) -> None:
    store.set(WizardStep.METHOD, "belief_other_text", "they feel heard")

    assert store.get(WizardStep.METHOD, "belief_other_open") is True


def test_blank_other_text_leaves_toggle_alone(store: AnswerStore) -> None:
    store.set(WizardStep.METHOD, "belief_other_text", "   ")

    assert store.get(WizardStep.METHOD, "belief_other_open") is False


def test_matrix_updates_one_row_at_a_time(store: AnswerStore) -> None:
    first_row, second_row = SUPPORT_AREA_ROWS[:2]
    store.set(WizardStep.GUARDRAILS, "permissions", (first_row, "review"))
    store.set(WizardStep.GUARDRAILS, "permissions", {second_row: "never"})

    matrix = store.get(WizardStep.GUARDRAILS, "permissions")
    assert matrix[first_row] == "review"
    assert matrix[second_row] == "never"
    assert sum(1 for level in matrix.values() if level) == 2


def test_get_returns_a_detached_copy(store: AnswerStore) -> None:
    store.set(WizardStep.IDENTITY, "tone_words", "Calm")
    value = store.get(WizardStep.IDENTITY, "tone_words")
    value.append("Direct")

    assert store.get(WizardStep.IDENTITY, "tone_words") == ["Calm"]


def test_listeners_are_notified_on_set_and_clear(store: AnswerStore) -> None:
    seen: list[str] = []
    store.subscribe(seen.append)

    store.set(WizardStep.LANGUAGE, "onboarding_language", "English")
    store.clear(WizardStep.LANGUAGE)

    assert seen == [WizardStep.LANGUAGE, WizardStep.LANGUAGE]
    assert store.get(WizardStep.LANGUAGE, "onboarding_language") is None


def test_unknown_step_and_field(store: AnswerStore) -> None:
    with pytest.raises(UnknownStepError):
        store.get("nope", "field")
    with pytest.raises(UnknownFieldError) as excinfo:
        store.set(WizardStep.LANGUAGE, "nope", "x")
    assert isinstance(excinfo.value, KeyError)
