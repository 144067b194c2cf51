"""Core package: preview synthesis, crossfade timing and error types."""

from .errors import UnknownFieldError, UnknownStepError, ValidationBlocked, WizardError
from .preview import GradientSpec, PreviewState, compute_preview_gradient, synthesize_preview

__all__ = [
    "GradientSpec",
    "PreviewState",
    "UnknownFieldError",
    "UnknownStepError",
    "ValidationBlocked",
    "WizardError",
    "compute_preview_gradient",
    "synthesize_preview",
]
