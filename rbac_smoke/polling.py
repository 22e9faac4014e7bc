# /*
# Copyright 2026 The Grove Authors.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# */


"""Fixed-interval polling with an upper bound."""

from __future__ import annotations

import time
from collections.abc import Callable

from tenacity import RetryError, Retrying, retry_if_result, stop_after_attempt, stop_after_delay, wait_fixed

from rbac_smoke import console, logger
from rbac_smoke.constants import DEFAULT_POLL_INTERVAL_SECONDS, DEFAULT_POLL_TIMEOUT_SECONDS


class PollTimeoutError(RuntimeError):
    """Raised when a polled condition does not become true in time."""


def wait_until(
    condition: Callable[[], bool],
    description: str,
    *,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
    max_attempts: int | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> None:
    """Poll *condition* every *interval* seconds until it returns True.

    The condition is checked once immediately. Exceptions raised by the
    condition are not retried and propagate to the caller.

    Args:
        condition: Zero-argument predicate to poll.
        description: What is being waited for, used in progress and errors.
        interval: Seconds to sleep between two checks.
        timeout: Seconds after which polling gives up.
        max_attempts: Optional cap on the number of checks.
        sleep: Sleep function, replaceable in tests.

    Raises:
        PollTimeoutError: If the condition is still false when the timeout
            or the attempt cap is reached.
    """
    stop = stop_after_delay(timeout)
    if max_attempts is not None:
        stop = stop | stop_after_attempt(max_attempts)

    retryer = Retrying(
        stop=stop,
        wait=wait_fixed(interval),
        retry=retry_if_result(lambda ok: not ok),
        sleep=sleep,
    )
    logger.debug("Waiting for %s (interval=%gs, timeout=%gs)", description, interval, timeout)
    with console.status(f"[yellow]Waiting for {description}...[/yellow]"):
        try:
            retryer(condition)
        except RetryError as err:
            attempts = err.last_attempt.attempt_number
            raise PollTimeoutError(
                f"Timed out waiting for {description} ({attempts} checks, timeout {timeout:g}s)"
            ) from err
