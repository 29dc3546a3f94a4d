"""Bounded retry for mutating filesystem operations.

Copy and delete calls can fail with transient errors (``EAGAIN``, ``EBUSY``)
when another process briefly holds the file. ``RetryExecutor`` re-runs such
an operation with exponential backoff and re-raises the original exception
unchanged once attempts run out. Non-transient errors are raised on the
first attempt.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TypeVar

from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from opencoder_agents.config.retry import ErrorRecoveryConfig
from opencoder_agents.installer.errors import classify_os_error, is_transient_error

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _log_retry(retry_state: RetryCallState) -> None:
    outcome = retry_state.outcome
    error = outcome.exception() if outcome is not None else None
    wait = retry_state.next_action.sleep if retry_state.next_action else 0.0
    logger.debug(
        "Transient error (%s) on attempt %d, retrying in %.2fs: %s",
        classify_os_error(error).value if error else "unknown",
        retry_state.attempt_number,
        wait,
        error,
    )


class RetryExecutor:
    """Runs single filesystem operations with bounded retry.

    Args:
        config: Attempt count and backoff settings.
        sleep: Function used to wait between attempts. Tests pass a no-op.

    Example::

        executor = RetryExecutor()
        executor.run(lambda: shutil.copyfile(src, dst))
    """

    def __init__(
        self,
        config: ErrorRecoveryConfig | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.config = config or ErrorRecoveryConfig()
        self._sleep = sleep

    def run(
        self,
        operation: Callable[[], T],
        max_attempts: int | None = None,
        is_transient: Callable[[BaseException], bool] | None = None,
    ) -> T:
        """Execute ``operation``, retrying transient failures.

        Args:
            operation: Zero-argument callable performing one copy or delete.
            max_attempts: Total attempts. Defaults to ``config.max_attempts``.
            is_transient: Classifier deciding whether an error is retried.
                Defaults to ``is_transient_error``, which inspects ``errno``.

        Returns:
            Whatever ``operation`` returns.

        Raises:
            Exception: The operation's own exception, unchanged, when it is
                not transient or when the last attempt fails.
        """
        attempts = max_attempts if max_attempts is not None else self.config.max_attempts
        if attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {attempts}")

        retrying = Retrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(
                multiplier=self.config.initial_backoff_seconds,
                min=0,
                max=self.config.max_backoff_seconds,
            ),
            retry=retry_if_exception(is_transient or is_transient_error),
            sleep=self._sleep,
            before_sleep=_log_retry,
            reraise=True,
        )
        return retrying(operation)
