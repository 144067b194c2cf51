"""Renderers for the questionnaire steps (intro, questions, feedback)."""

from __future__ import annotations

from typing import Any, Callable

import streamlit as st

from constants.options import LANGUAGE_FLAGS, PERMISSION_LEVEL_LABELS, TONE_WORD_EMOJI, PermissionLevel
from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation_ui import render_navigation_buttons
from wizard.session import WizardSession
from wizard.step_registry import FieldKind, QuestionDefinition, StepDefinition, other_open_key, other_text_key

BLANK_STEP_NOTICE = "This step is currently blank"


def _option_label(option: str) -> str:
    decoration = LANGUAGE_FLAGS.get(option) or TONE_WORD_EMOJI.get(option)
    return f"{decoration} {option}" if decoration else option


def _sync(session: WizardSession, step_id: str, field: str, widget_key: str) -> Callable[[], None]:
    def _run() -> None:
        session.set_answer(step_id, field, st.session_state.get(widget_key))

    return _run


def _toggle(session: WizardSession, step_id: str, field: str, value: Any) -> Callable[[], None]:
    def _run() -> None:
        session.set_answer(step_id, field, value)

    return _run


def render_intro(session: WizardSession, definition: StepDefinition, keys: WizardSessionKeys) -> None:
    st.header(definition.intro_header)
    if definition.intro_subheader:
        st.subheader(definition.intro_subheader)
    if definition.intro_note:
        st.caption(definition.intro_note)
    if definition.is_blank:
        st.info(BLANK_STEP_NOTICE)
    st.button(
        "Start",
        key=keys.action(f"start.{definition.key}"),
        type="primary",
        on_click=session.start_step,
    )


def _render_choice(
    session: WizardSession, definition: StepDefinition, question: QuestionDefinition, widget_key: str
) -> None:
    current = session.get_answer(definition.key, question.field)
    options = list(question.options)
    st.radio(
        question.prompt,
        options,
        index=options.index(current) if current in options else None,
        format_func=_option_label,
        key=widget_key,
        on_change=_sync(session, definition.key, question.field, widget_key),
        label_visibility="collapsed",
    )


def _render_multi(
    session: WizardSession, definition: StepDefinition, question: QuestionDefinition, widget_key: str
) -> None:
    selected = session.get_answer(definition.key, question.field) or []
    at_cap = question.cap is not None and len(selected) >= question.cap
    for index, option in enumerate(question.options):
        chosen = option in selected
        st.checkbox(
            _option_label(option),
            value=chosen,
            key=f"{widget_key}.{index}",
            disabled=at_cap and not chosen,
            on_change=_toggle(session, definition.key, question.field, option),
        )


def _render_matrix(
    session: WizardSession, definition: StepDefinition, question: QuestionDefinition, widget_key: str
) -> None:
    matrix = session.get_answer(definition.key, question.field) or {}
    levels = [level.value for level in PermissionLevel]
    for index, row in enumerate(question.rows):
        row_key = f"{widget_key}.{index}"

        def _set_row(row: str = row, row_key: str = row_key) -> None:
            session.set_answer(definition.key, question.field, (row, st.session_state.get(row_key)))

        current = matrix.get(row)
        st.radio(
            row,
            levels,
            index=levels.index(current) if current in levels else None,
            format_func=lambda level: PERMISSION_LEVEL_LABELS[PermissionLevel(level)],
            horizontal=True,
            key=row_key,
            on_change=_set_row,
        )


def _render_other(
    session: WizardSession, definition: StepDefinition, question: QuestionDefinition, widget_key: str
) -> None:
    open_field = other_open_key(question.field)
    text_field = other_text_key(question.field)
    is_open = True
    if question.other_needs_toggle:
        open_key = f"{widget_key}.other_open"
        is_open = st.checkbox(
            "Other",
            value=bool(session.get_answer(definition.key, open_field)),
            key=open_key,
            on_change=_sync(session, definition.key, open_field, open_key),
        )
    if is_open:
        text_key = f"{widget_key}.other_text"
        st.text_input(
            question.other_placeholder,
            value=session.get_answer(definition.key, text_field),
            placeholder=question.other_placeholder,
            key=text_key,
            on_change=_sync(session, definition.key, text_field, text_key),
            label_visibility="collapsed",
        )


def render_question(
    session: WizardSession,
    definition: StepDefinition,
    question: QuestionDefinition,
    keys: WizardSessionKeys,
) -> None:
    st.markdown(f"**{question.prompt}**")
    if question.hint:
        st.caption(question.hint)
    widget_key = keys.widget(definition.key, question.field, session.state.visits)

    if question.kind is FieldKind.TEXT:
        value = session.get_answer(definition.key, question.field)
        multiline = "\n" in (question.placeholder or "")
        widget = st.text_area if multiline else st.text_input
        widget(
            question.prompt,
            value=value,
            placeholder=question.placeholder or "",
            key=widget_key,
            on_change=_sync(session, definition.key, question.field, widget_key),
            label_visibility="collapsed",
        )
    elif question.kind is FieldKind.SINGLE:
        _render_choice(session, definition, question, widget_key)
    elif question.kind is FieldKind.MULTI:
        _render_multi(session, definition, question, widget_key)
    elif question.kind is FieldKind.MATRIX:
        _render_matrix(session, definition, question, widget_key)

    if question.allows_other:
        _render_other(session, definition, question, widget_key)

    render_navigation_buttons(session, keys)


def render_feedback(session: WizardSession, definition: StepDefinition, keys: WizardSessionKeys) -> None:
    st.success(definition.feedback_title or definition.label)
    if definition.feedback_body:
        st.write(definition.feedback_body)
    st.button(
        "Revisit questions",
        key=keys.action(f"revisit.{definition.key}"),
        on_click=session.revisit_questions,
    )
    render_navigation_buttons(session, keys, next_label="Continue")


def render_question_step(session: WizardSession, keys: WizardSessionKeys) -> None:
    """Render whichever screen of a questionnaire step is active."""

    definition = session.current_definition
    cursor = session.cursor
    if cursor.showing_intro:
        render_intro(session, definition, keys)
        return
    question = definition.question_at(cursor.sub_index)
    if question is not None:
        render_question(session, definition, question, keys)
        return
    if definition.is_blank:
        st.info(BLANK_STEP_NOTICE)
        render_navigation_buttons(session, keys)
        return
    render_feedback(session, definition, keys)


__all__ = ["BLANK_STEP_NOTICE", "render_question_step"]
