"""Preview synthesis for the AI Twin persona.

Maps a committed tone vector (directness, warmth, challenge) plus a few prior
answers into the greeting, reflection and demo sentence shown on the preview
card, and into the three-band background gradient behind it. Everything in
this module is pure: identical inputs always produce identical output.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict

from models.session import ToneProfile


DIRECTNESS_COLOR: Final[str] = "rgb(214, 107, 250)"
WARMTH_COLOR: Final[str] = "rgb(255, 210, 122)"
CHALLENGE_COLOR: Final[str] = "rgb(105, 237, 199)"

MIN_SEGMENT: Final[float] = 8.0
SEGMENT_OVERLAP: Final[int] = 2
_EPSILON: Final[float] = 0.0001
_TOLERANCE: Final[float] = 1e-9


class MessageTemplate(StrEnum):
    WARMTH = "warmth"
    DIRECTNESS = "directness"
    NEUTRAL = "neutral"


class DemoBranch(StrEnum):
    WARMTH = "warmth"
    DIRECTNESS = "directness"
    CHALLENGE = "challenge"
    NEUTRAL = "neutral"


MESSAGES: Final[dict[MessageTemplate, tuple[str, str]]] = {
    MessageTemplate.WARMTH: (
        "“I’m glad you’re here. Tell me more about what feels heavy for you right now.”",
        "“Real change happens when we feel safe to be vulnerable. Think of planting seeds — growth takes "
        "time and care. What seed do you want to nurture this week?”",
    ),
    MessageTemplate.DIRECTNESS: (
        "“What’s holding you back? Be specific.”",
        "“Real change happens when excuses stop. Picture riding a bike — either you push the pedal, or you "
        "don’t move. What’s the first action you’ll take today?”",
    ),
    MessageTemplate.NEUTRAL: (
        "“Let’s get to the real issue. What’s the cost of not changing this?”",
        "“Real change happens when we stop avoiding discomfort. Imagine climbing a mountain — the only way "
        "is up. What tough step are you avoiding?”",
    ),
}

DEMO_TEXTS: Final[dict[DemoBranch, str]] = {
    DemoBranch.WARMTH: "I’m glad you’re here. Tell me more about what feels heavy for you right now.",
    DemoBranch.DIRECTNESS: "What’s holding you back? Be specific.",
    DemoBranch.CHALLENGE: "Tell me about the feeling behind that choice.",
    DemoBranch.NEUTRAL: "Hi, I’m here to help you reflect. What if we explore what’s holding you back right now?",
}

CHALLENGE_CLAUSE: Final[str] = " — and what will you do about it?"
_CLOSING_QUESTION = re.compile(r"\??([”\"])$")


@dataclass(frozen=True)
class GradientSpec:
    """Three-band gradient: segment widths in percent plus the two stops."""

    widths: tuple[float, float, float]
    stops: tuple[int, int]
    colors: tuple[str, str, str] = (DIRECTNESS_COLOR, WARMTH_COLOR, CHALLENGE_COLOR)
    overlap: int = SEGMENT_OVERLAP

    @property
    def css(self) -> str:
        """Render a CSS ``linear-gradient`` with a soft seam at each stop."""

        stop1, stop2 = self.stops
        s1a = max(0, stop1 - self.overlap)
        s1b = min(100, stop1 + self.overlap)
        s2a = max(0, stop2 - self.overlap)
        s2b = min(100, stop2 + self.overlap)
        c1, c2, c3 = self.colors
        return (
            f"linear-gradient(90deg, {c1} 0%, {c1} {s1a}%, {c2} {s1b}%, "
            f"{c2} {s2a}%, {c3} {s2b}%, {c3} 100%)"
        )


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _segment_widths(parts: list[float]) -> tuple[float, float, float]:
    clamped = [part < MIN_SEGMENT for part in parts]
    while True:
        flexible_total = sum(part for part, is_clamped in zip(parts, clamped) if not is_clamped)
        if flexible_total <= 0:
            even = 100 / 3
            return (even, even, even)
        remaining = 100 - MIN_SEGMENT * sum(clamped)
        widths = [
            MIN_SEGMENT if is_clamped else (part / flexible_total) * remaining
            for part, is_clamped in zip(parts, clamped)
        ]
        # Shrinking the flexible segments can push one of them under the
        # minimum; clamp it as well and redistribute again.
        undersized = [not is_clamped and width < MIN_SEGMENT - _TOLERANCE for width, is_clamped in zip(widths, clamped)]
        if not any(undersized):
            return (widths[0], widths[1], widths[2])
        clamped = [is_clamped or under for is_clamped, under in zip(clamped, undersized)]


def compute_preview_gradient(directness: float, warmth: float, challenge: float) -> GradientSpec:
    """Blend the three tone weights into a :class:`GradientSpec`.

    Weights are normalized to percentages, every segment is kept at least
    ``MIN_SEGMENT`` wide, and the remaining budget is shared among the
    unclamped segments in proportion to their original share. When every
    segment falls under the minimum the bands are split evenly.

    Raises:
        ValueError: If any weight is negative.
    """

    weights = (float(directness), float(warmth), float(challenge))
    if any(weight < 0 for weight in weights):
        raise ValueError(f"gradient weights must be non-negative, got {weights}")
    total = max(_EPSILON, sum(weights))
    parts = [(weight / total) * 100 for weight in weights]
    widths = _segment_widths(parts)
    stops = (_round_half_up(widths[0]), _round_half_up(widths[0] + widths[1]))
    return GradientSpec(widths=widths, stops=stops)


def select_message_template(directness: int, warmth: int) -> MessageTemplate:
    if warmth >= 7 and warmth > directness:
        return MessageTemplate.WARMTH
    if directness >= 7 and directness >= warmth:
        return MessageTemplate.DIRECTNESS
    return MessageTemplate.NEUTRAL


def select_demo_branch(directness: int, warmth: int, challenge: int) -> DemoBranch:
    if warmth >= 7 and warmth > directness:
        return DemoBranch.WARMTH
    if directness >= 7 and directness >= warmth:
        return DemoBranch.DIRECTNESS
    if challenge >= 7:
        return DemoBranch.CHALLENGE
    return DemoBranch.NEUTRAL


def sharpen_message(message: str) -> str:
    """Insert the confrontational clause before the closing quote of ``message``."""

    return _CLOSING_QUESTION.sub(lambda match: CHALLENGE_CLAUSE + match.group(1), message, count=1)


def generate_message(tone: ToneProfile) -> tuple[str, str]:
    """Return ``(message, reflection)`` for ``tone``."""

    template = select_message_template(tone.directness, tone.warmth)
    message, reflection = MESSAGES[template]
    if tone.challenge >= 8:
        message = sharpen_message(message)
    return message, reflection


def generate_demo_text(tone: ToneProfile) -> str:
    return DEMO_TEXTS[select_demo_branch(tone.directness, tone.warmth, tone.challenge)]


@dataclass(frozen=True)
class PersonaContext:
    """The prior answers that colour the preview card."""

    tone_words: tuple[str, ...] = ()
    phrase: str | None = None
    belief: str | None = None
    metaphor: str | None = None

    @classmethod
    def from_answers(
        cls,
        identity: Mapping[str, object] | None,
        method: Mapping[str, object] | None,
    ) -> "PersonaContext":
        identity = identity or {}
        method = method or {}
        words = list(_strings(identity.get("tone_words")))
        other_tone = _other_value(identity, "tone_words")
        if other_tone:
            words.append(other_tone)
        return cls(
            tone_words=tuple(words),
            phrase=_choice_or_other(identity, "phrase_often", require_open=False),
            belief=_choice_or_other(method, "belief"),
            metaphor=_choice_or_other(method, "metaphor"),
        )

    def summary(self) -> str:
        parts: list[str] = []
        if self.tone_words:
            parts.append("Tone: " + ", ".join(self.tone_words))
        if self.phrase:
            parts.append(f"Signature phrase: “{self.phrase}”")
        if self.belief:
            parts.append(f"Real change happens when {self.belief.lstrip('…').strip()}")
        if self.metaphor:
            parts.append(f"Metaphor: {self.metaphor}")
        return " · ".join(parts)


def _strings(value: object) -> Iterable[str]:
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str) and item]
    return []


def _other_value(record: Mapping[str, object], field: str, *, require_open: bool = True) -> str | None:
    if require_open and not record.get(f"{field}_other_open"):
        return None
    text = record.get(f"{field}_other_text")
    if isinstance(text, str) and text.strip():
        return text.strip()
    return None


def _choice_or_other(record: Mapping[str, object], field: str, *, require_open: bool = True) -> str | None:
    value = record.get(field)
    if isinstance(value, str) and value:
        return value
    return _other_value(record, field, require_open=require_open)


class PreviewState(BaseModel):
    """Rendered preview card content derived from a committed tone."""

    model_config = ConfigDict(frozen=True)

    message: str
    reflection: str
    demo_text: str
    background_gradient: GradientSpec
    persona_hint: str = ""


def synthesize_preview(tone: ToneProfile, persona: PersonaContext | None = None) -> PreviewState:
    """Build the complete :class:`PreviewState` for ``tone``."""

    message, reflection = generate_message(tone)
    return PreviewState(
        message=message,
        reflection=reflection,
        demo_text=generate_demo_text(tone),
        background_gradient=compute_preview_gradient(*tone.as_tuple()),
        persona_hint=persona.summary() if persona else "",
    )


def default_preview_state(persona: PersonaContext | None = None) -> PreviewState:
    """Return the card shown before the first commit."""

    tone = ToneProfile()
    message, reflection = MESSAGES[MessageTemplate.NEUTRAL]
    return PreviewState(
        message=message,
        reflection=reflection,
        demo_text=DEMO_TEXTS[DemoBranch.NEUTRAL],
        background_gradient=compute_preview_gradient(*tone.as_tuple()),
        persona_hint=persona.summary() if persona else "",
    )


__all__ = [
    "CHALLENGE_CLAUSE",
    "DEMO_TEXTS",
    "DemoBranch",
    "GradientSpec",
    "MESSAGES",
    "MIN_SEGMENT",
    "MessageTemplate",
    "PersonaContext",
    "PreviewState",
    "compute_preview_gradient",
    "default_preview_state",
    "generate_demo_text",
    "generate_message",
    "select_demo_branch",
    "select_message_template",
    "sharpen_message",
    "synthesize_preview",
]
