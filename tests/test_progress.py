from __future__ import annotations

import pytest

from constants.options import SUPPORT_AREA_ROWS
from wizard.answers import AnswerStore
from wizard.progress import ProgressCalculator, clamp_fraction
from wizard.step_registry import DEFAULT_STEP_LIST, WIZARD_STEPS, WizardStep, get_step_definition


def _calculator(step_list=DEFAULT_STEP_LIST) -> tuple[AnswerStore, ProgressCalculator]:
    definitions = {step_id: get_step_definition(step_id, label) for step_id, label in step_list}
    store = AnswerStore(definitions)
    ids = [step_id for step_id, _ in step_list]
    return store, ProgressCalculator(store, ids, definitions)


def _answer_everything(store: AnswerStore) -> None:
    for step in WIZARD_STEPS:
        for question in step.questions:
            field = question.field
            if question.kind == "text":
                store.set(step.key, field, "Some answer")
            elif question.kind in {"single", "multi"}:
                store.set(step.key, field, question.options[0])
            elif question.kind == "matrix":
                store.set(step.key, field, {row: "review" for row in question.rows})
            elif question.kind == "slider":
                store.set(step.key, field, 7)


def test_language_counts_choices_made() -> None:
    store, calc = _calculator()
    assert calc.progress(WizardStep.LANGUAGE) == 0.0

    store.set(WizardStep.LANGUAGE, "twin_language", "Dutch")
    assert calc.progress(WizardStep.LANGUAGE) == pytest.approx(0.5)

    store.set(WizardStep.LANGUAGE, "onboarding_language", "English")
    assert calc.progress(WizardStep.LANGUAGE) == pytest.approx(1.0)


def test_other_toggle_needs_text_to_count() -> None:
    store, calc = _calculator()
    store.set(WizardStep.IDENTITY, "tone_words_other_open", True)
    assert calc.progress(WizardStep.IDENTITY) == 0.0

    store.set(WizardStep.IDENTITY, "tone_words_other_text", "Playful")
    assert calc.progress(WizardStep.IDENTITY) == pytest.approx(0.2)


def test_typed_phrase_counts_without_the_other_toggle() -> None:
    store, calc = _calculator()
    store.set(WizardStep.IDENTITY, "phrase_often_other_text", "Let's dig in")
    store.set(WizardStep.IDENTITY, "phrase_often_other_open", False)

    assert calc.progress(WizardStep.IDENTITY) == pytest.approx(0.2)

    store.set(WizardStep.IDENTITY, "tone_words_other_text", "Playful")
    store.set(WizardStep.IDENTITY, "tone_words_other_open", False)

    assert calc.progress(WizardStep.IDENTITY) == pytest.approx(0.2)


def test_guardrails_matrix_contributes_fractionally() -> None:
    store, calc = _calculator()
    store.set(WizardStep.GUARDRAILS, "prohibitions", "Give direct advice")
    store.set(WizardStep.GUARDRAILS, "disclosure_other_text", "Signature line")
    store.set(WizardStep.GUARDRAILS, "permissions", {row: "never" for row in SUPPORT_AREA_ROWS[:4]})

    assert calc.progress(WizardStep.GUARDRAILS) == pytest.approx((1 + 1 + 0.5) / 3)


def test_preview_counts_positive_closeness() -> None:
    store, calc = _calculator()
    assert calc.progress(WizardStep.PREVIEW) == 1.0

    store.set(WizardStep.PREVIEW, "closeness", 0)
    assert calc.progress(WizardStep.PREVIEW) == 0.0


def test_fully_answered_steps_reach_one() -> None:
    store, calc = _calculator()
    _answer_everything(store)

    for step_id, _ in DEFAULT_STEP_LIST:
        assert calc.progress(step_id) == pytest.approx(1.0), step_id


def test_blank_steps_use_the_fallback() -> None:
    steps = [("language", "Language"), ("coming-soon", "Coming soon"), ("later", "Later")]
    _, calc = _calculator(steps)

    assert calc.progress("coming-soon") == 1.0
    assert calc.progress("later") == 0.0


def test_mutations_invalidate_the_cache() -> None:
    store, calc = _calculator()
    calc.progress(WizardStep.METHOD)
    calc.progress(WizardStep.EXAMPLE)
    assert calc.is_cached(WizardStep.METHOD)

    store.set(WizardStep.METHOD, "approach", "Solution-focused")

    assert not calc.is_cached(WizardStep.METHOD)
    assert calc.is_cached(WizardStep.EXAMPLE)
    assert calc.progress(WizardStep.METHOD) == pytest.approx(1 / 3)


@pytest.mark.parametrize(("raw", "expected"), [(-0.5, 0.0), (0.4, 0.4), (1.7, 1.0)])
def test_clamp_fraction(raw: float, expected: float) -> None:
    assert clamp_fraction(raw) == pytest.approx(expected)
