"""Two-phase crossfade for the preview card.

Committing a tone hides the demo sentence and stages the new gradient as a
pending overlay. After ``text_delay`` the new sentence is swapped in; after
the slightly longer ``background_delay`` the overlay is promoted to the base
layer. Timers are driven by :class:`DeferredScheduler`, which is polled
(Streamlit reruns, tests) rather than backed by threads.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable

import config
from core.preview import GradientSpec

logger = logging.getLogger(__name__)


@dataclass(order=True)
class ScheduledCall:
    """Handle for a callback registered with :class:`DeferredScheduler`."""

    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class DeferredScheduler:
    """Run callbacks once their due time on ``clock`` has passed."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._queue: list[ScheduledCall] = []
        self._counter = itertools.count()

    def now(self) -> float:
        return self._clock()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        handle = ScheduledCall(due=self._clock() + delay, seq=next(self._counter), callback=callback)
        heapq.heappush(self._queue, handle)
        return handle

    def pending(self) -> int:
        return sum(1 for handle in self._queue if not handle.cancelled)

    def next_due(self) -> float | None:
        """Return the due time of the earliest live callback, if any."""

        live = [handle.due for handle in self._queue if not handle.cancelled]
        return min(live) if live else None

    def run_due(self) -> int:
        """Invoke every callback that is due, in due order. Return the count."""

        now = self._clock()
        executed = 0
        while self._queue and self._queue[0].due <= now:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.callback()
            executed += 1
        return executed


class Crossfade:
    """Visible state of the preview card during and between transitions.

    At most one transition is in flight: :meth:`start` supersedes any stale
    timers so the card never regresses to an intermediate frame.
    """

    def __init__(
        self,
        scheduler: DeferredScheduler,
        *,
        demo_text: str,
        gradient: GradientSpec,
        text_delay: float | None = None,
        background_delay: float | None = None,
    ) -> None:
        self._scheduler = scheduler
        self.text_delay = config.CROSSFADE_TEXT_DELAY if text_delay is None else text_delay
        self.background_delay = (
            config.CROSSFADE_BACKGROUND_DELAY if background_delay is None else background_delay
        )
        if self.background_delay <= self.text_delay:
            raise ValueError("background_delay must exceed text_delay")
        self.demo_text = demo_text
        self.demo_visible = True
        self.base_gradient = gradient
        self.pending_gradient: GradientSpec | None = None
        self.fading = False
        self._handles: list[ScheduledCall] = []

    @property
    def in_flight(self) -> bool:
        return any(not handle.cancelled for handle in self._handles)

    @property
    def base_opacity(self) -> float:
        return 0.0 if self.fading else 1.0

    @property
    def overlay_opacity(self) -> float:
        return 1.0 if self.fading and self.pending_gradient is not None else 0.0

    def start(self, new_text: str, new_gradient: GradientSpec) -> None:
        """Begin a transition towards ``new_text`` and ``new_gradient``."""

        self._cancel_handles()
        self.demo_visible = False
        self.pending_gradient = new_gradient
        self.fading = True

        def _swap_text() -> None:
            self.demo_text = new_text
            self.demo_visible = True

        def _promote_background() -> None:
            self.base_gradient = new_gradient
            self.pending_gradient = None
            self.fading = False
            self._handles.clear()
            logger.debug("Crossfade finished")

        self._handles = [
            self._scheduler.call_later(self.text_delay, _swap_text),
            self._scheduler.call_later(self.background_delay, _promote_background),
        ]

    def cancel(self) -> None:
        """Stop any in-flight transition and discard the pending overlay."""

        if self.in_flight:
            logger.debug("Crossfade cancelled")
        self._cancel_handles()
        self.pending_gradient = None
        self.fading = False
        self.demo_visible = True

    def _cancel_handles(self) -> None:
        for handle in self._handles:
            handle.cancel()
        self._handles = []


__all__ = ["Crossfade", "DeferredScheduler", "ScheduledCall"]
