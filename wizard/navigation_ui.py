from __future__ import annotations

from typing import Callable

import streamlit as st

from wizard.navigation.keys import WizardSessionKeys
from wizard.session import WizardSession


_NAVIGATION_STYLE = """
<style>
.coach-stepper-label {
    font-size: 0.8rem;
    color: rgba(15, 23, 42, 0.65);
    text-align: center;
}

.coach-progress {
    display: flex;
    gap: 0.35rem;
    margin: 0.4rem 0 1.2rem;
}

.coach-progress span {
    flex: 1 1 0;
    height: 6px;
    border-radius: 999px;
    background: rgba(15, 23, 42, 0.1);
    overflow: hidden;
}

.coach-progress span i {
    display: block;
    height: 100%;
    background: rgb(214, 107, 250);
    transition: width 0.3s ease-out;
}
</style>
"""


def inject_navigation_style() -> None:
    st.markdown(_NAVIGATION_STYLE, unsafe_allow_html=True)


def _jump_callback(session: WizardSession, index: int) -> Callable[[], None]:
    def _run() -> None:
        session.jump_to(index)

    return _run


def render_stepper(session: WizardSession, keys: WizardSessionKeys) -> None:
    """Render the step index; completed and earlier steps are clickable."""

    columns = st.columns(len(session.step_ids))
    for index, (column, (step_id, label)) in enumerate(zip(columns, session.state.steps)):
        completed = session.is_completed(index)
        current = index == session.current_index
        marker = "✓" if completed and not current else str(index + 1)
        with column:
            st.button(
                marker,
                key=keys.action(f"jump.{step_id}"),
                type="primary" if current else "secondary",
                disabled=current or not session.is_clickable(index),
                on_click=_jump_callback(session, index),
                use_container_width=True,
            )
            st.markdown(f"<div class='coach-stepper-label'>{label}</div>", unsafe_allow_html=True)


def render_step_progress(session: WizardSession) -> None:
    """Render one segmented bar per step, filled by its recorded progress."""

    segments = "".join(
        f"<span><i style='width:{round(progress * 100)}%'></i></span>"
        for progress in session.progress_map().values()
    )
    st.markdown(f"<div class='coach-progress'>{segments}</div>", unsafe_allow_html=True)


def render_notice(session: WizardSession) -> None:
    notice = session.consume_notice()
    if notice:
        st.warning(notice)


def render_navigation_buttons(
    session: WizardSession,
    keys: WizardSessionKeys,
    *,
    next_label: str = "Next",
    show_back: bool = True,
) -> None:
    col_prev, col_next = st.columns(2)
    if show_back:
        col_prev.button(
            "Back",
            key=keys.action("prev"),
            on_click=session.go_prev,
            use_container_width=True,
        )
    col_next.button(
        next_label,
        key=keys.action("next"),
        type="primary",
        on_click=session.go_next,
        use_container_width=True,
    )


__all__ = [
    "inject_navigation_style",
    "render_navigation_buttons",
    "render_notice",
    "render_step_progress",
    "render_stepper",
]
