"""Renderer for the preview step: live card, feedback choice, accepted screen."""

from __future__ import annotations

import html

import streamlit as st

from constants.options import PreviewFeedback, Thumb
from state.autosave import build_snapshot, serialize_snapshot
from wizard.navigation.keys import WizardSessionKeys
from wizard.navigation_ui import render_navigation_buttons
from wizard.session import WizardSession
from wizard.step_registry import SLIDER_MAX, SLIDER_MIN, TONE_AXES, WizardStep
from wizard.steps.question_step import render_intro

_CARD_POLL_SECONDS = 0.1

_CARD_STYLE = """
<style>
.twin-card { position: relative; border-radius: 18px; overflow: hidden; padding: 1.4rem; }
.twin-card__layer { position: absolute; inset: 0; transition: opacity 0.3s ease-in-out; }
.twin-card__body { position: relative; }
.twin-card__demo { transition: opacity 0.2s ease-in-out; font-style: italic; }
.twin-card__hint { font-size: 0.8rem; opacity: 0.75; margin-top: 0.8rem; }
</style>
"""


def _card_html(session: WizardSession) -> str:
    fade = session.crossfade
    preview = session.preview
    overlay = ""
    if fade.pending_gradient is not None:
        overlay = (
            f"<div class='twin-card__layer' style='background:{fade.pending_gradient.css};"
            f"opacity:{fade.overlay_opacity}'></div>"
        )
    hint = (
        f"<div class='twin-card__hint'>{html.escape(preview.persona_hint)}</div>" if preview.persona_hint else ""
    )
    return (
        "<div class='twin-card'>"
        f"<div class='twin-card__layer' style='background:{fade.base_gradient.css};"
        f"opacity:{fade.base_opacity}'></div>"
        f"{overlay}"
        "<div class='twin-card__body'>"
        f"<p>{html.escape(preview.message)}</p>"
        f"<p>{html.escape(preview.reflection)}</p>"
        f"<p class='twin-card__demo' style='opacity:{1 if fade.demo_visible else 0}'>"
        f"{html.escape(fade.demo_text)}</p>"
        f"{hint}"
        "</div></div>"
    )


@st.fragment(run_every=_CARD_POLL_SECONDS)
def _render_fading_card(session: WizardSession) -> None:
    session.run_timers()
    st.markdown(_card_html(session), unsafe_allow_html=True)
    if not session.crossfade.in_flight:
        # Full rerun drops the polling fragment once the card has settled.
        st.rerun()


def _render_card(session: WizardSession) -> None:
    """Render the card, polling for timers only while a crossfade runs."""

    if session.crossfade.in_flight:
        _render_fading_card(session)
    else:
        st.markdown(_card_html(session), unsafe_allow_html=True)


def _render_live_preview(session: WizardSession, keys: WizardSessionKeys) -> None:
    step_id = WizardStep.PREVIEW
    st.markdown(_CARD_STYLE, unsafe_allow_html=True)
    _render_card(session)

    closeness_key = keys.widget(step_id, "closeness", session.state.visits)
    st.slider(
        "How close is this to your style?",
        min_value=SLIDER_MIN,
        max_value=SLIDER_MAX,
        value=session.get_answer(step_id, "closeness"),
        key=closeness_key,
        on_change=lambda: session.release_closeness(st.session_state[closeness_key]),
    )

    if session.get_answer(step_id, "show_advanced_controls"):
        for axis in TONE_AXES:
            axis_key = keys.widget(step_id, axis, session.state.visits)

            def _release(axis: str = axis, axis_key: str = axis_key) -> None:
                session.release_tone(axis, st.session_state[axis_key])

            st.slider(
                axis.capitalize(),
                min_value=SLIDER_MIN,
                max_value=SLIDER_MAX,
                value=session.live_tone()[axis],
                key=axis_key,
                on_change=_release,
            )

    render_navigation_buttons(session, keys)


def _render_feedback_choice(session: WizardSession, keys: WizardSessionKeys) -> None:
    st.subheader("What do you think?")
    labels = {
        PreviewFeedback.ACCEPT: "Looks like me",
        PreviewFeedback.TWEAK: "Tweak it",
        PreviewFeedback.SHARPEN: "Sharpen behaviour",
    }
    for column, (choice, label) in zip(st.columns(len(labels)), labels.items()):
        column.button(
            label,
            key=keys.action(f"feedback.{choice.value}"),
            on_click=session.choose_preview_feedback,
            args=(choice,),
            use_container_width=True,
        )

    current_thumb = session.get_answer(WizardStep.PREVIEW, "feedback_thumb")
    thumb_up, thumb_down = st.columns(2)
    for column, thumb, icon in ((thumb_up, Thumb.UP, "👍"), (thumb_down, Thumb.DOWN, "👎")):
        column.button(
            icon,
            key=keys.action(f"thumb.{thumb.value}"),
            type="primary" if current_thumb == thumb.value else "secondary",
            on_click=session.toggle_thumb,
            args=(thumb,),
        )
    st.button("Back", key=keys.action("prev"), on_click=session.go_prev)


def _render_accepted(session: WizardSession, keys: WizardSessionKeys) -> None:
    definition = session.current_definition
    st.success(definition.feedback_title)
    st.write(definition.feedback_body)
    profile = session.accepted_profile()
    if profile is None:
        return
    st.json(profile.model_dump(mode="json"), expanded=False)
    st.download_button(
        "Download profile",
        data=serialize_snapshot(build_snapshot(session.snapshot(), accepted=profile)),
        file_name="coachnova_profile.json",
        mime="application/json",
        key=keys.action("download"),
    )


def render_preview_step(session: WizardSession, keys: WizardSessionKeys) -> None:
    definition = session.current_definition
    cursor = session.cursor
    if cursor.showing_intro:
        render_intro(session, definition, keys)
    elif cursor.sub_index == 0:
        _render_live_preview(session, keys)
    elif cursor.sub_index == 1:
        _render_feedback_choice(session, keys)
    else:
        _render_accepted(session, keys)


__all__ = ["render_preview_step"]
