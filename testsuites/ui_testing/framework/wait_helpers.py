# ================================================================================
# Wait Helpers Module
# ================================================================================
#
# This module provides the bounded polling primitive used by the interaction
# layer to wait for transient UI state (native dialogs in particular).
#
# Key Features:
#   - Wait budgets: total timeout paired with a fixed poll interval
#   - Pre-configured budgets for common scenarios
#   - Wall-clock deadline, at least one attempt even for a zero budget
#   - Pluggable sleep so callers can keep the browser event loop pumping
#
# Usage:
#   dialog = poll_until(watcher.current, get_wait_budget("alert"), "alert")
#
# ================================================================================

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, TypeVar

from loguru import logger


T = TypeVar('T')


@dataclass(frozen=True)
class WaitBudget:
    """
    Budget for a bounded wait.

    Attributes:
        timeout: Total wall-clock budget in seconds
        poll_interval: Fixed pause between attempts in seconds
    """
    timeout: float = 3.0
    poll_interval: float = 0.1

    def __post_init__(self):
        if self.timeout < 0:
            raise ValueError(f"Wait timeout must be >= 0, got {self.timeout}")
        if self.poll_interval <= 0:
            raise ValueError(f"Poll interval must be > 0, got {self.poll_interval}")


# Pre-configured budgets for common scenarios
WAIT_BUDGETS: Dict[str, WaitBudget] = {
    # Native dialog raised by a script-triggered action
    "alert": WaitBudget(timeout=3.0, poll_interval=0.1),

    # "Dialog should not appear" checks
    "instant": WaitBudget(timeout=0.1, poll_interval=0.1),
}


class WaitTimeoutError(Exception):
    """Raised when a wait operation exhausts its budget."""

    def __init__(self, message: str, elapsed: float = 0.0):
        super().__init__(message)
        self.elapsed = elapsed


def get_wait_budget(scenario: str) -> WaitBudget:
    """
    Get wait budget for a specific scenario.

    Args:
        scenario: Scenario name (e.g., "alert", "instant")

    Returns:
        WaitBudget for the scenario, or the alert budget if not found
    """
    return WAIT_BUDGETS.get(scenario, WAIT_BUDGETS["alert"])


def poll_until(
    check_fn: Callable[[], Optional[T]],
    budget: WaitBudget,
    description: str = "condition",
    sleep: Callable[[float], None] = time.sleep,
    error_cls: type = WaitTimeoutError,
) -> T:
    """
    Repeatedly call ``check_fn`` until it returns a non-None value.

    The first attempt happens immediately. Between attempts the loop sleeps for
    the budget's poll interval, never past the deadline.

    Args:
        check_fn: Function returning the awaited value, or None if not there yet
        budget: Timeout and poll interval
        description: Human-readable description for logging and errors
        sleep: Sleep function taking seconds
        error_cls: WaitTimeoutError subclass raised on timeout

    Returns:
        The first non-None value returned by ``check_fn``

    Raises:
        WaitTimeoutError: If the budget elapses with no value observed
    """
    start_time = time.monotonic()
    attempt = 0

    while True:
        attempt += 1
        result = check_fn()
        elapsed = time.monotonic() - start_time

        if result is not None:
            logger.debug(
                f"Wait successful after {attempt} attempts "
                f"({elapsed:.2f}s): {description}"
            )
            return result

        if elapsed >= budget.timeout:
            error_msg = (
                f"Timeout after {elapsed:.2f}s waiting for: {description} "
                f"(budget={budget.timeout}s, attempts={attempt})"
            )
            logger.debug(error_msg)
            raise error_cls(error_msg, elapsed=elapsed)

        sleep(min(budget.poll_interval, budget.timeout - elapsed))


__all__ = [
    "WaitBudget",
    "WAIT_BUDGETS",
    "WaitTimeoutError",
    "get_wait_budget",
    "poll_until",
]
