"""Per-question answer checks shared by progress accounting and navigation."""

from __future__ import annotations

from collections.abc import Mapping

from wizard.step_registry import (
    FieldKind,
    QuestionDefinition,
    StepDefinition,
    other_open_key,
    other_text_key,
)


def has_text(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def other_answered(record: Mapping[str, object], field: str, *, require_open: bool = True) -> bool:
    """Return ``True`` when the "Other" text is filled in.

    With ``require_open`` the "Other" toggle must be on as well.
    """

    if require_open and not record.get(other_open_key(field)):
        return False
    return has_text(record.get(other_text_key(field)))


def answered_fraction(question: QuestionDefinition, record: Mapping[str, object]) -> float:
    """Return how much of ``question`` is answered, between 0 and 1.

    Only matrix questions can be partially answered; everything else is
    either 0 or 1.
    """

    value = record.get(question.field)
    if question.kind is FieldKind.MATRIX:
        rows = question.rows
        if not rows:
            return 0.0
        matrix = value if isinstance(value, Mapping) else {}
        answered_rows = sum(1 for row in rows if matrix.get(row))
        return answered_rows / len(rows)

    if question.kind is FieldKind.TEXT:
        answered = has_text(value)
    elif question.kind is FieldKind.MULTI:
        answered = bool(value)
    elif question.kind is FieldKind.SLIDER:
        answered = isinstance(value, (int, float)) and value > 0
    else:
        answered = value is not None and value != ""

    if not answered and question.allows_other:
        answered = other_answered(record, question.field, require_open=question.other_needs_toggle)
    return 1.0 if answered else 0.0


def is_question_answered(question: QuestionDefinition, record: Mapping[str, object]) -> bool:
    return answered_fraction(question, record) >= 1.0


def blocking_notice(
    definition: StepDefinition,
    sub_index: int,
    record: Mapping[str, object],
) -> str | None:
    """Return the notice that blocks leaving ``sub_index``, or ``None``.

    Screens that are not questions (feedback, terminal) and questions without
    a required notice never block.
    """

    question = definition.question_at(sub_index)
    if question is None or not question.is_gated:
        return None
    if is_question_answered(question, record):
        return None
    return question.required_notice


__all__ = [
    "answered_fraction",
    "blocking_notice",
    "has_text",
    "is_question_answered",
    "other_answered",
]
