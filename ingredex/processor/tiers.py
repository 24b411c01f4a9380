"""Tiered attempt combinator.

Tiers are tried in order; the first one that returns wins. A tier that
raises or overruns its wall-clock budget is recorded and the next one is
tried. Only cancellation propagates out of a single tier.

A timed-out attempt is abandoned, not killed: its worker thread is left to
finish in the background and its result is discarded. The tier's ``stop``
event is set as soon as the runner stops waiting, so attempts that loop over
pages can give up between them.
"""

import time
from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from threading import Event
from typing import Generic, TypeVar

from ingredex.extraction.exceptions import ExtractionTimeoutError, TiersExhaustedError
from ingredex.logging.logger import Log, Timer
from ingredex.processor.cancellation import CancellationToken
from ingredex.processor.exceptions import PipelineCancelledError

T = TypeVar("T")

_POLL_INTERVAL_SECONDS = 0.05


@dataclass(frozen=True)
class Tier(Generic[T]):
    name: str
    attempt: Callable[[], T]
    timeout_seconds: float | None = None
    stop: Event = field(default_factory=Event, compare=False, repr=False)


@dataclass(frozen=True)
class TierSuccess(Generic[T]):
    value: T
    method: str
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def attempted_methods(self) -> list[str]:
        return [method for method, _ in self.failures] + [self.method]


def attempt_tiers(
    tiers: Sequence[Tier[T]],
    *,
    cancellation: CancellationToken | None = None,
) -> TierSuccess[T]:
    """Return the first successful tier's value.

    Raises:
        TiersExhaustedError: if every tier failed, listing each attempt.
        PipelineCancelledError: if ``cancellation`` fires before a tier wins.
    """
    failures: list[tuple[str, str]] = []
    for tier in tiers:
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        with Timer(tier.name) as timer:
            try:
                value = _run_bounded(tier, cancellation)
            except PipelineCancelledError:
                Log.warning(f"Tier {tier.name} abandoned after {timer.get_elapsed_ms()}ms: cancelled")
                raise
            except Exception as exc:
                reason = str(exc) or exc.__class__.__name__
                failures.append((tier.name, reason))
                Log.warning(f"Tier {tier.name} failed after {timer.get_elapsed_ms()}ms: {reason}")
                continue
        Log.info(f"Tier {tier.name} succeeded in {timer.get_elapsed_ms()}ms")
        return TierSuccess(value=value, method=tier.name, failures=failures)
    raise TiersExhaustedError(failures)


def _run_bounded(tier: Tier[T], cancellation: CancellationToken | None) -> T:
    if tier.timeout_seconds is None and cancellation is None:
        return tier.attempt()

    deadline = None if tier.timeout_seconds is None else time.monotonic() + tier.timeout_seconds
    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=f"tier-{tier.name}")
    try:
        future = executor.submit(tier.attempt)
        while True:
            if cancellation is not None and cancellation.cancelled:
                raise PipelineCancelledError(f"Cancelled during {tier.name}")
            poll = _POLL_INTERVAL_SECONDS
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise ExtractionTimeoutError(
                        tier.name, f"exceeded {tier.timeout_seconds}s budget"
                    )
                poll = min(poll, remaining)
            done, _ = wait([future], timeout=poll, return_when=FIRST_COMPLETED)
            if done:
                return future.result()
    finally:
        tier.stop.set()
        executor.shutdown(wait=False, cancel_futures=True)
