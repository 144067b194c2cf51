"""Wizard-aware logging context.

Every log record gets ``session_id``, ``wizard_step`` and ``sub_step``
attributes, taken from context variables that the wizard binds while it
handles an interaction. Unbound fields render as ``-``.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from typing import Iterator, Mapping

_PLACEHOLDER = "-"
_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [session=%(session_id)s step=%(wizard_step)s "
    "sub=%(sub_step)s] %(name)s: %(message)s"
)

_CONTEXT_FIELDS: Mapping[str, contextvars.ContextVar[str]] = {
    name: contextvars.ContextVar(name, default=_PLACEHOLDER)
    for name in ("session_id", "wizard_step", "sub_step")
}
_BASE_RECORD_FACTORY = logging.getLogRecordFactory()
_factory_installed = False


def _stamp(record: logging.LogRecord) -> None:
    for name, var in _CONTEXT_FIELDS.items():
        setattr(record, name, var.get())


class _WizardContextFilter(logging.Filter):
    """Stamp wizard context onto records logged through the root logger."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _stamp(record)
        return True


def _normalise(value: str | int | None) -> str:
    if value is None:
        return _PLACEHOLDER
    text = str(value).strip()
    return text or _PLACEHOLDER


def current_context() -> dict[str, str]:
    """Return the currently bound context fields."""

    return {name: var.get() for name, var in _CONTEXT_FIELDS.items()}


def configure_logging(*, level: int | str = logging.INFO) -> None:
    """Install the context format, filter and record factory once.

    Existing handlers keep their formatter; handlers without one get the
    wizard format.
    """

    global _factory_installed

    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_LOG_FORMAT)
    for handler in root.handlers:
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    if not any(isinstance(flt, _WizardContextFilter) for flt in root.filters):
        root.addFilter(_WizardContextFilter())

    if _factory_installed:
        return

    def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
        record = _BASE_RECORD_FACTORY(*args, **kwargs)
        _stamp(record)
        return record

    logging.setLogRecordFactory(_record_factory)
    _factory_installed = True


def set_session_id(session_id: str | None) -> None:
    """Bind the Streamlit session identifier for subsequent records."""

    configure_logging()
    _CONTEXT_FIELDS["session_id"].set(_normalise(session_id))


def set_wizard_step(step: str | None) -> None:
    _CONTEXT_FIELDS["wizard_step"].set(_normalise(step))


def set_sub_step(sub_step: int | str | None) -> None:
    """Bind the active sub-step (``intro`` or a question index)."""

    _CONTEXT_FIELDS["sub_step"].set(_normalise(sub_step))


@contextmanager
def log_context(
    *,
    session_id: str | None = None,
    wizard_step: str | None = None,
    sub_step: int | str | None = None,
) -> Iterator[None]:
    """Bind the given fields for the duration of the block.

    Fields passed as ``None`` keep their current value.
    """

    overrides = {"session_id": session_id, "wizard_step": wizard_step, "sub_step": sub_step}
    tokens = [
        (_CONTEXT_FIELDS[name], _CONTEXT_FIELDS[name].set(_normalise(value)))
        for name, value in overrides.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)


__all__ = [
    "configure_logging",
    "current_context",
    "log_context",
    "set_session_id",
    "set_sub_step",
    "set_wizard_step",
]
