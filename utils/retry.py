"""Generic retry utilities built on :mod:`backoff`."""

from __future__ import annotations

from typing import Any, Callable, Generator, Iterable, ParamSpec, TypeVar

import backoff

T = TypeVar("T")
P = ParamSpec("P")


def linear_wait(step: float = 1.0) -> Generator[float | None, None, None]:
    """Wait generator yielding ``step``, ``2 * step``, ``3 * step`` ...

    ``backoff`` primes wait generators with one ``send(None)`` before the
    first retry, hence the bare leading ``yield``.
    """

    yield None
    attempt = 1
    while True:
        yield step * attempt
        attempt += 1


def retry_with_backoff(
    *,
    exceptions: Iterable[type[Exception]],
    max_tries: int = 3,
    step: float = 1.0,
    giveup: Callable[[Exception], bool] | None = None,
    on_giveup: Callable[[Any], None] | Iterable[Callable[[Any], None]] | None = None,
    raise_on_giveup: bool = True,
    logger: Any = None,
) -> Callable[[Callable[P, T]], Callable[P, T | None]]:
    """Return a decorator retrying ``exceptions`` with a linear backoff.

    ``max_tries`` counts the first attempt, so ``max_tries=3`` means two
    retries waiting ``step`` and ``2 * step`` seconds. With
    ``raise_on_giveup=False`` the decorated call returns ``None`` once the
    attempts are exhausted.
    """

    exception_tuple: tuple[type[Exception], ...] = tuple(exceptions)

    def decorator(func: Callable[P, T]) -> Callable[P, T | None]:
        def default_giveup(_: Exception) -> bool:
            return False

        resolved_giveup: Callable[[Exception], bool]
        if giveup is None:
            resolved_giveup = default_giveup
        else:
            resolved_giveup = giveup

        return backoff.on_exception(
            linear_wait,
            exception_tuple,
            max_tries=max(1, max_tries),
            jitter=None,
            giveup=resolved_giveup,
            on_giveup=on_giveup,
            raise_on_giveup=raise_on_giveup,
            logger=logger,
            step=step,
        )(func)

    return decorator


__all__ = ["linear_wait", "retry_with_backoff"]
