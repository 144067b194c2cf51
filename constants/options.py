"""Fixed option catalogues offered by the onboarding questionnaire."""

from __future__ import annotations

from enum import StrEnum
from typing import Final


class PermissionLevel(StrEnum):
    """Permission levels for the guardrails support matrix."""

    NEVER = "never"
    REVIEW = "review"
    INDEPENDENT = "independent"


PERMISSION_LEVEL_LABELS: Final[dict[PermissionLevel, str]] = {
    PermissionLevel.NEVER: "Never",
    PermissionLevel.REVIEW: "With my review",
    PermissionLevel.INDEPENDENT: "Independently",
}


class PreviewFeedback(StrEnum):
    """Choices offered on the preview "What do you think?" screen."""

    ACCEPT = "accept"
    TWEAK = "tweak"
    SHARPEN = "sharpen"


class Thumb(StrEnum):
    UP = "up"
    DOWN = "down"


LANGUAGE_OPTIONS: Final[tuple[str, ...]] = ("English", "Dutch")
LANGUAGE_FLAGS: Final[dict[str, str]] = {"English": "🇬🇧", "Dutch": "🇳🇱"}

TONE_WORD_OPTIONS: Final[tuple[str, ...]] = (
    "Direct",
    "Warm",
    "Curious",
    "Challenging",
    "Calm",
    "Energetic",
)
TONE_WORD_EMOJI: Final[dict[str, str]] = {
    "Direct": "🔊",
    "Warm": "🤝",
    "Curious": "❓",
    "Challenging": "⚡",
    "Calm": "🌿",
    "Energetic": "🔥",
}
TONE_WORD_CAP: Final[int] = 2

PHRASE_OFTEN_OPTIONS: Final[tuple[str, ...]] = (
    "What if…",
    "Tell me more",
    "How do you know?",
    "What’s the cost of not changing?",
    "What’s true for you right now?",
    "Say more about that",
)

PHRASE_NEVER_OPTIONS: Final[tuple[str, ...]] = (
    "You must…",
    "Everything happens for a reason",
    "Just be positive",
    "It’s not that bad",
    "Follow my advice",
    "Calm down",
)

CLIENT_TYPE_OPTIONS: Final[tuple[str, ...]] = (
    "Founders",
    "Senior managers",
    "Teams",
    "High potentials",
    "Entrepreneurs",
    "Corporate leaders",
)

APPROACH_OPTIONS: Final[tuple[str, ...]] = (
    "ICF / Co-Active",
    "Solution-focused",
    "Cognitive-behavioral (CBT)",
    "Somatic / body-based",
    "Narrative",
    "Systemic",
    "My own mix",
)

BELIEF_OPTIONS: Final[tuple[str, ...]] = (
    "…people take responsibility",
    "…they get out of their comfort zone",
    "…they connect to their values",
    "…they stop trying to fix themselves",
    "…they feel safe to be vulnerable",
    "…they commit to action",
)

METAPHOR_OPTIONS: Final[tuple[str, ...]] = (
    "Life is a journey",
    "Climbing a mountain",
    "Crossing a river",
    "Riding a bike",
    "Navigating a storm",
    "Planting seeds",
)

BREAKTHROUGH_OPTIONS: Final[tuple[str, ...]] = (
    "Client avoided a hard conversation",
    "Client lacked confidence",
    "Client procrastinated",
    "Client overwhelmed by change",
    "Client conflicted about values",
    "Client reached success but felt empty",
)

ACTION_OPTIONS: Final[tuple[str, ...]] = (
    "Asked a deeper question",
    "Named the resistance",
    "Reframed perspective",
    "Reflected client's words",
    "Brought in a metaphor",
    "Created a pause/silence",
)

PROHIBITION_OPTIONS: Final[tuple[str, ...]] = (
    "Give direct advice",
    "Act like therapy",
    "Handle crises alone",
    "Pretend to be you",
    "Share personal details",
    "Work with clients in crisis",
)

DISCLOSURE_OPTIONS: Final[tuple[str, ...]] = (
    "Always labeled “AI Assistant”",
    "Different interface/platform",
    "AI introduces itself",
    "Clients opt-in to AI",
)

SUPPORT_AREA_ROWS: Final[tuple[str, ...]] = (
    "Check ins",
    "Homework",
    "Goal reminders",
    "Reflection prompts",
    "Celebrate progress",
    "Suggest resources",
    "Handle emotions",
    "Scheduling",
)

COUNTRIES: Final[tuple[str, ...]] = (
    "United States",
    "United Kingdom",
    "Canada",
    "Australia",
    "Germany",
    "France",
    "Spain",
    "Italy",
    "Netherlands",
    "India",
    "China",
    "Japan",
    "Brazil",
    "Mexico",
    "South Africa",
    "Sweden",
    "Norway",
    "Denmark",
    "Finland",
    "Switzerland",
    "Austria",
    "Belgium",
    "Ireland",
    "New Zealand",
    "Singapore",
    "Israel",
    "United Arab Emirates",
    "Other",
)


__all__ = [
    "ACTION_OPTIONS",
    "APPROACH_OPTIONS",
    "BELIEF_OPTIONS",
    "BREAKTHROUGH_OPTIONS",
    "CLIENT_TYPE_OPTIONS",
    "COUNTRIES",
    "DISCLOSURE_OPTIONS",
    "LANGUAGE_FLAGS",
    "LANGUAGE_OPTIONS",
    "METAPHOR_OPTIONS",
    "PERMISSION_LEVEL_LABELS",
    "PHRASE_NEVER_OPTIONS",
    "PHRASE_OFTEN_OPTIONS",
    "PROHIBITION_OPTIONS",
    "PermissionLevel",
    "PreviewFeedback",
    "SUPPORT_AREA_ROWS",
    "Thumb",
    "TONE_WORD_CAP",
    "TONE_WORD_EMOJI",
    "TONE_WORD_OPTIONS",
]
