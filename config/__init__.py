"""Central configuration for the CoachNova onboarding wizard.

Every value is read once at import time from the environment (optionally
seeded from a ``.env`` file). The geo settings drive the country-detection
collaborator used by the account form; the crossfade delays control the
two-phase preview transition on the final wizard step.

Set ``GEO_LOOKUP_ENABLED=0`` to disable automatic country detection entirely,
for example when the app runs behind a proxy that blocks outbound lookups.
"""

from __future__ import annotations

import logging
import os
import warnings

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)


_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_float_env(value: object | None, *, env_var: str, default: float) -> float:
    """Return a positive float parsed from ``value`` or ``default``."""

    if value is None:
        return default
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return default
        try:
            parsed = float(candidate)
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return default
    elif isinstance(value, (int, float)):
        parsed = float(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using %s." % (env_var, value, default),
            RuntimeWarning,
        )
        return default
    if parsed <= 0:
        return default
    return parsed


def _parse_non_negative_int_env(value: str | None, *, env_var: str, default: int) -> int:
    """Return a non-negative integer parsed from ``value`` or ``default``."""

    if value is None or not value.strip():
        return default
    try:
        parsed = int(float(value.strip()))
    except ValueError:
        warnings.warn(
            "%s is not a number; ignoring %s" % (value, env_var),
            RuntimeWarning,
        )
        return default
    return max(0, parsed)


def _parse_csv_env(value: str | None, *, default: tuple[str, ...]) -> tuple[str, ...]:
    if value is None:
        return default
    entries = tuple(part.strip() for part in value.split(",") if part.strip())
    return entries or default


APP_TITLE = os.getenv("APP_TITLE", "CoachNova - Account Setup")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"

GEO_LOOKUP_ENABLED = _is_truthy_flag(os.getenv("GEO_LOOKUP_ENABLED", "1"))
GEO_PROVIDERS: tuple[str, ...] = _parse_csv_env(
    os.getenv("GEO_PROVIDERS"),
    default=(
        "https://ipapi.co/json/",
        "https://ipwhois.app/json/",
        "https://extreme-ip-lookup.com/json/",
    ),
)
# Optional remote country endpoint (``{"country": "..."}``). When unset the
# provider chain above is queried in-process.
GEO_ENDPOINT = os.getenv("GEO_ENDPOINT", "").strip() or None
GEO_REQUEST_TIMEOUT = _parse_positive_float_env(
    os.getenv("GEO_REQUEST_TIMEOUT"), env_var="GEO_REQUEST_TIMEOUT", default=4.0
)
GEO_CACHE_TTL = _parse_positive_float_env(os.getenv("GEO_CACHE_TTL"), env_var="GEO_CACHE_TTL", default=300.0)
GEO_MAX_RETRIES = _parse_non_negative_int_env(os.getenv("GEO_MAX_RETRIES"), env_var="GEO_MAX_RETRIES", default=2)
GEO_RETRY_STEP = _parse_positive_float_env(os.getenv("GEO_RETRY_STEP"), env_var="GEO_RETRY_STEP", default=0.3)

# Seconds until the new demo text is swapped in, and until the pending
# gradient is promoted to the base layer. The second must exceed the first.
CROSSFADE_TEXT_DELAY = _parse_positive_float_env(
    os.getenv("CROSSFADE_TEXT_DELAY"), env_var="CROSSFADE_TEXT_DELAY", default=0.22
)
CROSSFADE_BACKGROUND_DELAY = _parse_positive_float_env(
    os.getenv("CROSSFADE_BACKGROUND_DELAY"), env_var="CROSSFADE_BACKGROUND_DELAY", default=0.36
)
if CROSSFADE_BACKGROUND_DELAY <= CROSSFADE_TEXT_DELAY:
    logger.warning(
        "CROSSFADE_BACKGROUND_DELAY (%s) must exceed CROSSFADE_TEXT_DELAY (%s); using defaults.",
        CROSSFADE_BACKGROUND_DELAY,
        CROSSFADE_TEXT_DELAY,
    )
    CROSSFADE_TEXT_DELAY = 0.22
    CROSSFADE_BACKGROUND_DELAY = 0.36


__all__ = [
    "APP_TITLE",
    "CROSSFADE_BACKGROUND_DELAY",
    "CROSSFADE_TEXT_DELAY",
    "GEO_CACHE_TTL",
    "GEO_ENDPOINT",
    "GEO_LOOKUP_ENABLED",
    "GEO_MAX_RETRIES",
    "GEO_PROVIDERS",
    "GEO_REQUEST_TIMEOUT",
    "GEO_RETRY_STEP",
    "LOG_LEVEL",
]
