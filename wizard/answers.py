"""Answer storage for the wizard steps.

Each step owns one answer record (a flat mapping of field key to value). The
field kinds declared in :mod:`wizard.step_registry` decide how ``set``
behaves: text and single-select replace, multi-select toggles membership up
to its cap, matrix fields update one row at a time. The store performs no
validation; gating happens in :mod:`wizard.validation`.
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from typing import Any

from core.errors import UnknownFieldError, UnknownStepError
from wizard.step_registry import FieldKind, FieldSpec, StepDefinition

logger = logging.getLogger(__name__)

AnswerRecord = dict[str, Any]
AnswerListener = Callable[[str], None]


def empty_value(spec: FieldSpec) -> Any:
    """Return the empty default for ``spec``'s kind."""

    if spec.default is not None:
        return spec.default
    if spec.kind is FieldKind.TEXT:
        return ""
    if spec.kind is FieldKind.MULTI:
        return []
    if spec.kind is FieldKind.TOGGLE:
        return False
    if spec.kind is FieldKind.MATRIX:
        return {row: None for row in spec.rows}
    return None


def default_record(definition: StepDefinition) -> AnswerRecord:
    return {key: empty_value(spec) for key, spec in definition.fields.items()}


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


class AnswerStore:
    """Hold per-step answer records and notify listeners on every mutation."""

    def __init__(
        self,
        definitions: Mapping[str, StepDefinition],
        records: MutableMapping[str, AnswerRecord] | None = None,
    ) -> None:
        self._definitions = dict(definitions)
        self._records: MutableMapping[str, AnswerRecord] = records if records is not None else {}
        self._listeners: list[AnswerListener] = []

    def subscribe(self, listener: AnswerListener) -> None:
        self._listeners.append(listener)

    def _notify(self, step_id: str) -> None:
        for listener in self._listeners:
            listener(step_id)

    def _definition(self, step_id: str) -> StepDefinition:
        try:
            return self._definitions[step_id]
        except KeyError:
            raise UnknownStepError(step_id) from None

    def _spec(self, step_id: str, key: str) -> FieldSpec:
        definition = self._definition(step_id)
        try:
            return definition.fields[key]
        except KeyError:
            raise UnknownFieldError(step_id, key) from None

    def has_record(self, step_id: str) -> bool:
        return step_id in self._records

    def ensure_record(self, step_id: str) -> AnswerRecord:
        """Create the record for ``step_id`` on first use and return it."""

        record = self._records.get(step_id)
        if record is None:
            record = default_record(self._definition(step_id))
            self._records[step_id] = record
        return record

    def get(self, step_id: str, key: str) -> Any:
        """Return the stored value or the empty default of the field's kind."""

        spec = self._spec(step_id, key)
        record = self._records.get(step_id)
        if record is None or key not in record:
            return empty_value(spec)
        return copy.deepcopy(record[key])

    def record(self, step_id: str) -> AnswerRecord:
        """Return a detached copy of the full record for ``step_id``."""

        definition = self._definition(step_id)
        record = self._records.get(step_id)
        if record is None:
            return default_record(definition)
        merged = default_record(definition)
        merged.update(copy.deepcopy(record))
        return merged

    def records(self) -> dict[str, AnswerRecord]:
        return {step_id: self.record(step_id) for step_id in self._records}

    def set(self, step_id: str, key: str, value: Any) -> None:
        """Replace or toggle ``key`` on ``step_id`` according to its kind."""

        spec = self._spec(step_id, key)
        record = self.ensure_record(step_id)

        if spec.kind is FieldKind.TEXT:
            record[key] = "" if value is None else str(value)
        elif spec.kind is FieldKind.SINGLE:
            record[key] = value
        elif spec.kind is FieldKind.MULTI:
            record[key] = self._toggle_member(record.get(key) or [], value, spec.cap)
        elif spec.kind is FieldKind.TOGGLE:
            record[key] = bool(value)
        elif spec.kind is FieldKind.MATRIX:
            record[key] = self._update_matrix(record.get(key), value, spec)
        elif spec.kind is FieldKind.SLIDER:
            record[key] = int(value)

        if spec.companion and not _is_blank(record[key]):
            record[spec.companion] = True

        logger.debug("Answer %s.%s updated", step_id, key)
        self._notify(step_id)

    def clear(self, step_id: str) -> None:
        """Reset the record for ``step_id`` to its defaults."""

        self._records[step_id] = default_record(self._definition(step_id))
        self._notify(step_id)

    @staticmethod
    def _toggle_member(current: Sequence[Any], value: Any, cap: int | None) -> list[Any]:
        members = list(current)
        if value in members:
            members.remove(value)
            return members
        if cap is not None and len(members) >= cap:
            return members
        members.append(value)
        return members

    @staticmethod
    def _update_matrix(current: object, value: Any, spec: FieldSpec) -> dict[str, Any]:
        matrix: dict[str, Any] = {row: None for row in spec.rows}
        if isinstance(current, Mapping):
            matrix.update(current)
        if isinstance(value, Mapping):
            updates = dict(value)
        else:
            row, level = value
            updates = {row: level}
        for row, level in updates.items():
            matrix[row] = None if level is None else str(level)
        return matrix


__all__ = ["AnswerListener", "AnswerRecord", "AnswerStore", "default_record", "empty_value"]
