"""Bounded polling for asynchronous Coda jobs.

Some Coda operations (page export, doc mutations) return a job reference
that must be polled until it reaches a terminal state. This module provides
the wait-for-completion loop shared by those operations. It is not a
retry-on-failure mechanism: HTTP errors raised while fetching the status
propagate immediately.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .errors import JobFailedError, JobTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar('T')

BACKOFF_FIXED = "fixed"
BACKOFF_EXPONENTIAL = "exponential"


@dataclass(frozen=True)
class PollPolicy:
    """How often and how long to poll a job.

    At least one of ``max_attempts`` and ``timeout`` must be set.

    Attributes:
        interval: Delay before the second poll, in seconds
        backoff: "fixed" (constant delay) or "exponential" (doubling delay)
        max_interval: Upper bound for exponential delays
        max_attempts: Maximum number of status fetches
        timeout: Maximum total wait in seconds
    """
    interval: float = 1.0
    backoff: str = BACKOFF_FIXED
    max_interval: float = 30.0
    max_attempts: Optional[int] = 120
    timeout: Optional[float] = None

    def __post_init__(self):
        if self.max_attempts is None and self.timeout is None:
            raise ValueError("PollPolicy needs max_attempts or timeout")
        if self.backoff not in (BACKOFF_FIXED, BACKOFF_EXPONENTIAL):
            raise ValueError(f"Unknown backoff: {self.backoff}")
        if self.interval < 0:
            raise ValueError("interval cannot be negative")
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def delay_for(self, retry_num: int) -> float:
        """Delay after the given (0-indexed) unfinished poll."""
        if self.backoff == BACKOFF_EXPONENTIAL:
            return min(self.interval * (2 ** retry_num), self.max_interval)
        return self.interval


def poll_until(
    fetch_status: Callable[[], T],
    is_complete: Callable[[T], bool],
    policy: PollPolicy,
    job_id: str,
    is_failed: Optional[Callable[[T], bool]] = None,
    failure_detail: Optional[Callable[[T], Optional[str]]] = None,
    clock: Callable[[], float] = time.monotonic,
) -> T:
    """Poll a job until it completes, fails, or exhausts the policy's bound.

    Args:
        fetch_status: Fetches the current job state (one request per call)
        is_complete: Returns True when the state is terminal and successful
        policy: Interval, backoff and bounds
        job_id: Job identifier for logs and errors
        is_failed: Returns True when the state is terminal and failed
        failure_detail: Extracts an error message from a failed state
        clock: Monotonic clock in seconds

    Returns:
        The completed job state

    Raises:
        JobFailedError: If ``is_failed`` reports a failed state
        JobTimeoutError: If the job is still pending when the bound is reached
        Other exceptions: Raised by ``fetch_status``, passed through unchanged

    Example:
        >>> job = poll_until(lambda: runner.status(job), lambda j: j.is_complete,
        ...                  PollPolicy(), job.job_id)
    """
    started = clock()
    attempts = 0

    while True:
        state = fetch_status()
        attempts += 1

        if is_complete(state):
            logger.debug(f"Job {job_id} complete after {attempts} poll(s)")
            return state

        if is_failed is not None and is_failed(state):
            detail = failure_detail(state) if failure_detail else None
            logger.error(f"Job {job_id} failed: {detail or 'no detail'}")
            raise JobFailedError(job_id, detail)

        # Anything else (inProgress or an unknown status) is still pending
        elapsed = clock() - started
        if policy.max_attempts is not None and attempts >= policy.max_attempts:
            raise JobTimeoutError(job_id, attempts, elapsed)

        delay = policy.delay_for(attempts - 1)
        # Give up now rather than sleep past the deadline
        if policy.timeout is not None and elapsed + delay > policy.timeout:
            raise JobTimeoutError(job_id, attempts, elapsed)

        logger.debug(f"Job {job_id} pending (poll {attempts}), waiting {delay}s")
        time.sleep(delay)
