"""Long-poll loop for asynchronous remote jobs.

The loop submits once and then checks status at a fixed interval until the
job reports ``done``. Polls for one job never overlap. There is no attempt
ceiling unless the caller passes ``deadline``.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING, Protocol

from gemini_studio.config.schema import DEFAULT_POLL_INTERVAL_SECONDS
from gemini_studio.exceptions import JobDeadlineExceededError, JobPollFailedError
from gemini_studio.telemetry import TelemetryContext

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from gemini_studio.telemetry import TelemetryContextProtocol

logger = logging.getLogger(__name__)


class JobHandle(Protocol):
    """Anything exposing a ``done`` flag."""

    @property
    def done(self) -> bool | None: ...  # noqa: D102


def _deadline_exceeded(polls: int, deadline: float) -> JobDeadlineExceededError:
    return JobDeadlineExceededError(
        f"Job not done after {polls} poll(s) and {deadline:.1f}s deadline"
    )


async def wait_for_completion[H: JobHandle](
    submit: Callable[[], Awaitable[H]],
    poll: Callable[[H], Awaitable[H]],
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    *,
    deadline: float | None = None,
    sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    clock: Callable[[], float] = time.monotonic,
    telemetry: TelemetryContextProtocol | None = None,
) -> H:
    """Submit a job and poll it until it is done.

    Args:
        submit: Starts the job and returns its first handle. Errors raised
            here propagate unchanged.
        poll: Refreshes a handle. Any error is re-raised as
            ``JobPollFailedError`` without retrying.
        interval: Seconds to wait before every poll.
        deadline: Optional ceiling, in seconds since submission.
        sleep: Awaitable sleep, injectable for tests.
        clock: Monotonic clock used for the deadline.
        telemetry: Optional telemetry context.

    Returns:
        The first handle whose ``done`` is true.

    Raises:
        JobPollFailedError: If a poll errors.
        JobDeadlineExceededError: If ``deadline`` elapses before completion.
    """
    if interval < 0:
        raise ValueError("interval must be >= 0")
    tele = telemetry or TelemetryContext()

    with tele("jobs.submit"):
        handle = await submit()
    started = clock()
    polls = 0

    while not handle.done:
        wait = interval
        if deadline is not None:
            remaining = deadline - (clock() - started)
            if remaining <= 0:
                raise _deadline_exceeded(polls, deadline)
            wait = min(interval, remaining)
        await sleep(wait)
        if deadline is not None and clock() - started >= deadline:
            raise _deadline_exceeded(polls, deadline)
        polls += 1
        logger.debug("Polling job (attempt %d)", polls)
        try:
            with tele("jobs.poll"):
                handle = await poll(handle)
        except JobPollFailedError:
            raise
        except Exception as e:
            raise JobPollFailedError(f"Polling job failed on attempt {polls}: {e}") from e

    tele.count("jobs.polls", polls)
    logger.debug("Job done after %d poll(s)", polls)
    return handle
