"""Country detection for the account form.

The resolver walks a chain of public IP geolocation providers and caches the
last answer (including the empty fallback) for a few minutes. The client
helper retries with a linear backoff and never raises: a failed lookup
simply leaves the country field for the user to fill in.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Mapping, Sequence
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Any

import requests

import config
from constants.options import COUNTRIES
from utils.retry import retry_with_backoff

logger = logging.getLogger(__name__)

_COUNTRY_KEYS: tuple[str, ...] = ("country_name", "country", "countryName", "countryFull")
_USER_AGENT = "CoachNova/1.0"
DETECTION_FAILED_NOTICE = "Country detection failed"


class GeoLookupError(RuntimeError):
    """Raised by a single lookup attempt that produced no usable answer."""


def extract_country(payload: object) -> str:
    """Return the first non-empty country name found in ``payload``."""

    if not isinstance(payload, Mapping):
        return ""
    for key in _COUNTRY_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


class GeoResolver:
    """Resolve the caller's country through a provider chain with caching."""

    def __init__(
        self,
        providers: Sequence[str] | None = None,
        *,
        timeout: float | None = None,
        cache_ttl: float | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.providers = tuple(providers if providers is not None else config.GEO_PROVIDERS)
        self.timeout = config.GEO_REQUEST_TIMEOUT if timeout is None else timeout
        self.cache_ttl = config.GEO_CACHE_TTL if cache_ttl is None else cache_ttl
        self._clock = clock or time.monotonic
        self._cached: tuple[float, str] | None = None

    def clear_cache(self) -> None:
        self._cached = None

    def _query(self, url: str) -> str:
        response = requests.get(url, timeout=self.timeout, headers={"User-Agent": _USER_AGENT})
        response.raise_for_status()
        return extract_country(response.json())

    def resolve(self) -> str:
        """Return the detected country name, or ``""`` when every provider fails."""

        now = self._clock()
        if self._cached is not None and now - self._cached[0] < self.cache_ttl:
            return self._cached[1]

        country = ""
        for url in self.providers:
            try:
                country = self._query(url)
            except (requests.RequestException, ValueError) as exc:
                logger.warning("Geo provider %s failed: %s", url, exc)
                continue
            if country:
                logger.debug("Geo provider %s resolved %s", url, country)
                break
        self._cached = (now, country)
        return country


_DEFAULT_RESOLVER = GeoResolver()


def lookup_country() -> str:
    """Resolve the country with the shared, cached resolver."""

    return _DEFAULT_RESOLVER.resolve()


def fetch_remote_country(endpoint: str, *, timeout: float | None = None) -> str:
    """Query a deployed country endpoint returning ``{"country": ...}``."""

    response = requests.get(
        endpoint,
        timeout=config.GEO_REQUEST_TIMEOUT if timeout is None else timeout,
        headers={"User-Agent": _USER_AGENT},
    )
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, Mapping):
        raise GeoLookupError(f"Unexpected payload from {endpoint}: {type(payload).__name__}")
    return extract_country(payload)


def _default_fetch() -> str:
    if config.GEO_ENDPOINT:
        return fetch_remote_country(config.GEO_ENDPOINT)
    return lookup_country()


def _log_giveup(details: Mapping[str, Any]) -> None:
    logger.warning(
        "Country detection gave up after %s attempt(s): %s",
        details.get("tries"),
        details.get("exception"),
    )


def detect_country(
    fetch: Callable[[], str] | None = None,
    *,
    max_retries: int | None = None,
    step: float | None = None,
) -> str:
    """Fetch the country with up to ``max_retries`` linearly spaced retries.

    Returns ``""`` on any failure; this function never raises.
    """

    fetcher = fetch or _default_fetch
    retries = config.GEO_MAX_RETRIES if max_retries is None else max_retries

    @retry_with_backoff(
        exceptions=(requests.RequestException, ValueError, GeoLookupError),
        max_tries=retries + 1,
        step=config.GEO_RETRY_STEP if step is None else step,
        on_giveup=_log_giveup,
        raise_on_giveup=False,
    )
    def _attempt() -> str:
        return fetcher()

    result = _attempt()
    return result.strip() if isinstance(result, str) else ""


def match_country(name: str, countries: Sequence[str] = COUNTRIES) -> str:
    """Return the catalogue entry matching ``name`` case-insensitively, else ``name``."""

    cleaned = name.strip()
    lowered = cleaned.lower()
    for country in countries:
        if country.lower() == lowered:
            return country
    return cleaned


class CountryPrefill:
    """Run :func:`detect_country` in the background and poll for the result.

    Streamlit reruns the script on every interaction, so the lookup is
    submitted once and :meth:`poll` is called on each rerun until it yields.
    """

    def __init__(
        self,
        detect: Callable[[], str] | None = None,
        *,
        executor: Executor | None = None,
    ) -> None:
        self._detect = detect or detect_country
        self._executor = executor
        self._future: Future[str] | None = None
        self._consumed = False

    @property
    def started(self) -> bool:
        return self._future is not None

    def start(self) -> None:
        if self._future is not None:
            return
        executor = self._executor or ThreadPoolExecutor(max_workers=1, thread_name_prefix="geo")
        self._future = executor.submit(self._detect)
        if self._executor is None:
            executor.shutdown(wait=False)

    def poll(self) -> str | None:
        """Return the detected name once, when finished; ``None`` otherwise."""

        if self._future is None or self._consumed or not self._future.done():
            return None
        self._consumed = True
        error = self._future.exception()
        if error is not None:
            logger.warning("Background country detection failed: %s", error)
            return None
        return self._future.result() or None


__all__ = [
    "CountryPrefill",
    "DETECTION_FAILED_NOTICE",
    "GeoLookupError",
    "GeoResolver",
    "detect_country",
    "extract_country",
    "fetch_remote_country",
    "lookup_country",
    "match_country",
]
