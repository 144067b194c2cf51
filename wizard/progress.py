"""Completion accounting for wizard steps."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from wizard.answers import AnswerStore
from wizard.step_registry import StepDefinition
from wizard.validation import answered_fraction

logger = logging.getLogger(__name__)


def clamp_fraction(value: float) -> float:
    """Clamp ``value`` into ``[0, 1]``."""

    return max(0.0, min(1.0, float(value)))


class ProgressCalculator:
    """Derive a completion fraction per step from the answer store.

    Every answered question contributes ``1/Q``. Matrix questions contribute
    fractionally by the share of rows with a level set. Steps without
    questions count as complete unless they are the last step.
    Results are memoized per step and dropped whenever the store reports a
    mutation for that step.
    """

    def __init__(
        self,
        store: AnswerStore,
        step_ids: Sequence[str],
        definitions: Mapping[str, StepDefinition],
    ) -> None:
        self._store = store
        self._step_ids = tuple(step_ids)
        self._definitions = dict(definitions)
        self._cache: dict[str, float] = {}
        store.subscribe(self.invalidate)

    def invalidate(self, step_id: str) -> None:
        self._cache.pop(step_id, None)

    def is_cached(self, step_id: str) -> bool:
        return step_id in self._cache

    def compute(self, step_id: str) -> float:
        """Return the raw, unclamped fraction for ``step_id``."""

        definition = self._definitions[step_id]
        if not definition.questions:
            is_last = self._step_ids.index(step_id) == len(self._step_ids) - 1
            return 0.0 if is_last else 1.0

        record = self._store.record(step_id)
        total = len(definition.questions)
        answered = sum(answered_fraction(question, record) for question in definition.questions)
        return answered / total

    def progress(self, step_id: str) -> float:
        """Return the memoized, clamped fraction for ``step_id``."""

        cached = self._cache.get(step_id)
        if cached is not None:
            return cached
        value = clamp_fraction(self.compute(step_id))
        self._cache[step_id] = value
        logger.debug("Progress for %s recomputed: %.3f", step_id, value)
        return value


__all__ = ["ProgressCalculator", "clamp_fraction"]
