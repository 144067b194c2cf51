"""Registry for wizard steps, their questions, and canonical order."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Final

from constants.options import (
    ACTION_OPTIONS,
    APPROACH_OPTIONS,
    BELIEF_OPTIONS,
    BREAKTHROUGH_OPTIONS,
    CLIENT_TYPE_OPTIONS,
    DISCLOSURE_OPTIONS,
    LANGUAGE_OPTIONS,
    METAPHOR_OPTIONS,
    PHRASE_NEVER_OPTIONS,
    PHRASE_OFTEN_OPTIONS,
    PROHIBITION_OPTIONS,
    SUPPORT_AREA_ROWS,
    TONE_WORD_CAP,
    TONE_WORD_OPTIONS,
    PreviewFeedback,
    Thumb,
)


class WizardStep(StrEnum):
    """Identifiers of the built-in wizard steps."""

    LANGUAGE = "language"
    IDENTITY = "identity"
    METHOD = "method"
    EXAMPLE = "example"
    GUARDRAILS = "guardrails"
    PREVIEW = "preview"


class FieldKind(StrEnum):
    """Storage semantics of an answer field."""

    TEXT = "text"
    SINGLE = "single"
    MULTI = "multi"
    TOGGLE = "toggle"
    MATRIX = "matrix"
    SLIDER = "slider"


SLIDER_MIN: Final[int] = 1
SLIDER_MAX: Final[int] = 10
SLIDER_DEFAULT: Final[int] = 5

TONE_AXES: Final[tuple[str, ...]] = ("directness", "warmth", "challenge")


def other_open_key(field_key: str) -> str:
    return f"{field_key}_other_open"


def other_text_key(field_key: str) -> str:
    return f"{field_key}_other_text"


def committed_key(axis: str) -> str:
    return f"committed_{axis}"


@dataclass(frozen=True)
class FieldSpec:
    """Declares how a single answer field is stored.

    ``companion`` names a toggle field that is switched on whenever this field
    receives a non-blank value (typing into an "Other" box opens it).
    """

    key: str
    kind: FieldKind
    options: tuple[str, ...] = ()
    cap: int | None = None
    rows: tuple[str, ...] = ()
    default: object | None = None
    companion: str | None = None


@dataclass(frozen=True)
class QuestionDefinition:
    """One numbered question shown within a step."""

    prompt: str
    field: str
    kind: FieldKind
    options: tuple[str, ...] = ()
    cap: int | None = None
    rows: tuple[str, ...] = ()
    hint: str | None = None
    placeholder: str | None = None
    allows_other: bool = False
    other_placeholder: str = "Describe"
    other_needs_toggle: bool = True
    required_notice: str | None = None

    @property
    def is_gated(self) -> bool:
        """Return ``True`` when leaving this question requires an answer."""

        return self.required_notice is not None

    def field_specs(self) -> tuple[FieldSpec, ...]:
        default: object | None = SLIDER_DEFAULT if self.kind is FieldKind.SLIDER else None
        specs = [
            FieldSpec(
                key=self.field,
                kind=self.kind,
                options=self.options,
                cap=self.cap,
                rows=self.rows,
                default=default,
            )
        ]
        if self.allows_other:
            specs.append(FieldSpec(key=other_open_key(self.field), kind=FieldKind.TOGGLE))
            specs.append(
                FieldSpec(
                    key=other_text_key(self.field),
                    kind=FieldKind.TEXT,
                    companion=other_open_key(self.field),
                )
            )
        return tuple(specs)


@dataclass(frozen=True)
class StepDefinition:
    """Metadata + question contract for an individual wizard step."""

    key: str
    label: str
    intro_header: str
    intro_subheader: str = ""
    intro_note: str = ""
    questions: tuple[QuestionDefinition, ...] = ()
    feedback_title: str = ""
    feedback_body: str = ""
    extra_fields: tuple[FieldSpec, ...] = ()
    last_sub_override: int | None = None
    fields: dict[str, FieldSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        specs: dict[str, FieldSpec] = {}
        for question in self.questions:
            for spec in question.field_specs():
                specs[spec.key] = spec
        for spec in self.extra_fields:
            specs[spec.key] = spec
        object.__setattr__(self, "fields", specs)

    @property
    def last_sub(self) -> int:
        """Return the index of the feedback (or terminal) sub-step."""

        if self.last_sub_override is not None:
            return self.last_sub_override
        return len(self.questions)

    @property
    def is_blank(self) -> bool:
        return not self.questions

    def question_at(self, sub_index: int) -> QuestionDefinition | None:
        if 0 <= sub_index < len(self.questions):
            return self.questions[sub_index]
        return None


LANGUAGE_STEP = StepDefinition(
    key=WizardStep.LANGUAGE,
    label="Language",
    intro_header="Language",
    intro_subheader="“Let’s set your language preferences”",
    intro_note="“This makes sure the Twin speaks in the right voice for you and your clients.”",
    questions=(
        QuestionDefinition(
            prompt="Q1. Which language would you like to complete onboarding in?",
            field="onboarding_language",
            kind=FieldKind.SINGLE,
            options=LANGUAGE_OPTIONS,
            required_notice="Please select a language to continue",
        ),
        QuestionDefinition(
            prompt="Q2. Which language should your AI Twin use with clients?",
            field="twin_language",
            kind=FieldKind.SINGLE,
            options=LANGUAGE_OPTIONS,
            required_notice="Please select a language for your AI Twin",
        ),
    ),
    feedback_title="Your Twin will speak in your chosen language.",
    feedback_body="You can change this later in your settings.",
)

IDENTITY_STEP = StepDefinition(
    key=WizardStep.IDENTITY,
    label="Identity & Tone",
    intro_header="Identity & Tone",
    intro_subheader="Let’s capture your voice",
    intro_note="Five quick questions about how you sound with clients.",
    questions=(
        QuestionDefinition(
            prompt="Q1. What’s one thing your clients often say about you?",
            field="client_feedback",
            kind=FieldKind.TEXT,
            placeholder="e.g. 'You're very clear and practical'",
            required_notice="Please answer Q1 to continue",
        ),
        QuestionDefinition(
            prompt="Q2. Pick two words that best describe your tone",
            field="tone_words",
            kind=FieldKind.MULTI,
            options=TONE_WORD_OPTIONS,
            cap=TONE_WORD_CAP,
            hint="Select up to 2",
            allows_other=True,
            required_notice="Please select at least one tone for Q2",
        ),
        QuestionDefinition(
            prompt="Q3. What phrase do you often use with clients?",
            field="phrase_often",
            kind=FieldKind.SINGLE,
            options=PHRASE_OFTEN_OPTIONS,
            hint="Pick the phrase you hear yourself saying most often. Your Twin will use it too.",
            allows_other=True,
            other_placeholder="Your phrase",
            other_needs_toggle=False,
            required_notice="Please select or enter a phrase for Q3",
        ),
        QuestionDefinition(
            prompt="Q4. What phrase would you never use with clients?",
            field="phrase_never",
            kind=FieldKind.SINGLE,
            options=PHRASE_NEVER_OPTIONS,
            hint="Your Twin will steer clear of it.",
            allows_other=True,
            other_placeholder="Phrase you avoid",
            required_notice="Please select a phrase for Q4",
        ),
        # Advancing past this question is intentionally ungated.
        QuestionDefinition(
            prompt="Q5. Who are your typical clients?",
            field="client_types",
            kind=FieldKind.MULTI,
            options=CLIENT_TYPE_OPTIONS,
            hint="Select all that apply",
            allows_other=True,
        ),
    ),
    feedback_title="Your Twin just learned your tone",
    feedback_body="It will echo your words and avoid the phrases you never use.",
)

METHOD_STEP = StepDefinition(
    key=WizardStep.METHOD,
    label="Method & Beliefs",
    intro_header="Method and Beliefs",
    intro_subheader="Your approach to coaching",
    intro_note="Three questions about how you believe change happens.",
    questions=(
        QuestionDefinition(
            prompt="Q1. Which coaching approach best describes your style?",
            field="approach",
            kind=FieldKind.SINGLE,
            options=APPROACH_OPTIONS,
            allows_other=True,
            required_notice="Please select or enter an approach for Q1",
        ),
        QuestionDefinition(
            prompt="Q2. Real change happens when…",
            field="belief",
            kind=FieldKind.SINGLE,
            options=BELIEF_OPTIONS,
            allows_other=True,
            required_notice="Please select or enter a belief for Q2",
        ),
        QuestionDefinition(
            prompt="Q3. What metaphor do you often use in sessions?",
            field="metaphor",
            kind=FieldKind.SINGLE,
            options=METAPHOR_OPTIONS,
            allows_other=True,
            required_notice="Please select or enter a metaphor for Q3",
        ),
    ),
    feedback_title="Your Twin now understands your worldview.",
    feedback_body="It will frame reflections through your beliefs and metaphors.",
)

EXAMPLE_STEP = StepDefinition(
    key=WizardStep.EXAMPLE,
    label="Example in Action",
    intro_header="Example in Action",
    intro_subheader="Show us your style in action",
    intro_note="Walk us through a moment that mattered.",
    questions=(
        QuestionDefinition(
            prompt="Q1. Think of a breakthrough moment with a client. What happened?",
            field="breakthrough",
            kind=FieldKind.SINGLE,
            options=BREAKTHROUGH_OPTIONS,
            allows_other=True,
            required_notice="Please answer Q1 to continue",
        ),
        QuestionDefinition(
            prompt="Q2. What did you say or do that made the difference?",
            field="action",
            kind=FieldKind.SINGLE,
            options=ACTION_OPTIONS,
            allows_other=True,
            required_notice="Please answer Q2 to continue",
        ),
        QuestionDefinition(
            prompt="Q3. Write a short dialogue (3–5 lines) from a session.",
            field="dialogue",
            kind=FieldKind.TEXT,
            placeholder="Coach: What’s holding you back?\nClient: Fear.\nCoach: What is that fear protecting?",
            required_notice="Please write a short dialogue for Q3",
        ),
    ),
    feedback_title="Twin just learned how you create breakthroughs.",
    feedback_body="It will reach for the same moves when a client gets stuck.",
)

GUARDRAILS_STEP = StepDefinition(
    key=WizardStep.GUARDRAILS,
    label="Guardrails",
    intro_header="Guardrails",
    intro_subheader="Set your guardrails",
    intro_note="Decide what your Twin may and may not do.",
    questions=(
        QuestionDefinition(
            prompt="Q1. What should your AI Twin never do?",
            field="prohibitions",
            kind=FieldKind.MULTI,
            options=PROHIBITION_OPTIONS,
            hint="Select all that apply",
            allows_other=True,
            required_notice="Please answer Q1 to continue",
        ),
        QuestionDefinition(
            prompt="Q2. How should clients know they are talking to the AI, not you?",
            field="disclosure",
            kind=FieldKind.SINGLE,
            options=DISCLOSURE_OPTIONS,
            allows_other=True,
            required_notice="Please answer Q2 to continue",
        ),
        QuestionDefinition(
            prompt="Q3. Where may the AI support clients?",
            field="permissions",
            kind=FieldKind.MATRIX,
            rows=SUPPORT_AREA_ROWS,
            hint="Choose a permission level for each area",
            required_notice=(
                "Please set permissions for all items in Q3 (e.g. never / with my review / independently)"
            ),
        ),
    ),
    feedback_title="Boundaries saved. You stay in control.",
    feedback_body="Your preferences will keep the Twin aligned with your practice.",
)

PREVIEW_STEP = StepDefinition(
    key=WizardStep.PREVIEW,
    label="Preview",
    intro_header="Preview",
    intro_subheader="Meet the first version of your AI Twin",
    intro_note="Here’s how your Twin might greet and support a client.",
    questions=(
        QuestionDefinition(
            prompt="How close is this to your style?",
            field="closeness",
            kind=FieldKind.SLIDER,
            required_notice="Please rate the preview to continue",
        ),
    ),
    feedback_title="Your Twin is live.",
    feedback_body="Next, let’s sharpen how it acts in different situations.",
    extra_fields=(
        FieldSpec(key="show_advanced_controls", kind=FieldKind.TOGGLE),
        *(FieldSpec(key=axis, kind=FieldKind.SLIDER, default=SLIDER_DEFAULT) for axis in TONE_AXES),
        *(FieldSpec(key=committed_key(axis), kind=FieldKind.SLIDER, default=SLIDER_DEFAULT) for axis in TONE_AXES),
        FieldSpec(key="feedback_choice", kind=FieldKind.SINGLE, options=tuple(PreviewFeedback)),
        FieldSpec(key="feedback_thumb", kind=FieldKind.SINGLE, options=tuple(Thumb)),
    ),
    # 0: live preview, 1: "What do you think?", 2: accepted
    last_sub_override=2,
)


WIZARD_STEPS: Final[tuple[StepDefinition, ...]] = (
    LANGUAGE_STEP,
    IDENTITY_STEP,
    METHOD_STEP,
    EXAMPLE_STEP,
    GUARDRAILS_STEP,
    PREVIEW_STEP,
)

_STEP_INDEX: Final[dict[str, StepDefinition]] = {step.key: step for step in WIZARD_STEPS}

DEFAULT_STEP_LIST: Final[tuple[tuple[str, str], ...]] = tuple((step.key, step.label) for step in WIZARD_STEPS)


def get_step_definition(step_id: str, label: str | None = None) -> StepDefinition:
    """Return the registered definition for ``step_id``.

    Unregistered ids resolve to a blank step without questions so callers
    can inject placeholder steps into the step list.
    """

    definition = _STEP_INDEX.get(step_id)
    if definition is not None:
        return definition
    return StepDefinition(key=step_id, label=label or step_id, intro_header=label or step_id, last_sub_override=0)


__all__ = [
    "DEFAULT_STEP_LIST",
    "FieldKind",
    "FieldSpec",
    "QuestionDefinition",
    "SLIDER_DEFAULT",
    "SLIDER_MAX",
    "SLIDER_MIN",
    "StepDefinition",
    "TONE_AXES",
    "WIZARD_STEPS",
    "WizardStep",
    "committed_key",
    "get_step_definition",
    "other_open_key",
    "other_text_key",
]
