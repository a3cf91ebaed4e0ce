"""Bounded, sequential retry for AI generation attempts."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class AttemptStatus(Enum):
    """How a single attempt ended."""
    ACCEPTED = "accepted"
    REGENERATE = "regenerate"  # usable, but worth another try
    FAILED = "failed"


@dataclass
class Attempt:
    """Outcome of one attempt."""
    status: AttemptStatus
    value: Any = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def accepted(cls, value: Any) -> "Attempt":
        return cls(AttemptStatus.ACCEPTED, value)

    @classmethod
    def regenerate(cls, value: Any, errors: list[str]) -> "Attempt":
        return cls(AttemptStatus.REGENERATE, value, list(errors))

    @classmethod
    def failed(cls, error: str) -> "Attempt":
        return cls(AttemptStatus.FAILED, None, [error])


@dataclass
class RetryResult:
    """Final outcome of :func:`retry`."""
    value: Any = None
    errors: list[str] = field(default_factory=list)
    attempts: int = 0
    regenerated: bool = False
    succeeded: bool = False

    @property
    def ok(self) -> bool:
        return self.succeeded


def retry(fn: Callable[[int], Attempt], max_attempts: int) -> RetryResult:
    """Call ``fn(attempt_number)`` until it is accepted or the budget runs out.

    Attempts run back to back with no delay. A REGENERATE value is only
    kept when it comes from the final attempt; earlier ones are discarded
    in favour of the next try. If the final attempt FAILED, the result
    carries all collected errors and no value.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    errors: list[str] = []

    for number in range(1, max_attempts + 1):
        attempt = fn(number)

        if attempt.status is AttemptStatus.ACCEPTED:
            return RetryResult(value=attempt.value, errors=errors, attempts=number, succeeded=True)

        errors.extend(f"attempt {number}: {e}" for e in attempt.errors)
        if attempt.status is AttemptStatus.FAILED:
            logger.warning("Attempt %d/%d failed: %s", number, max_attempts, attempt.errors)
            continue

        logger.warning("Attempt %d/%d needs regeneration: %s", number, max_attempts, attempt.errors)
        if number == max_attempts:
            return RetryResult(
                value=attempt.value,
                errors=errors,
                attempts=number,
                regenerated=True,
                succeeded=True,
            )

    return RetryResult(errors=errors, attempts=max_attempts)
