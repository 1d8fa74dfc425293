"""Backoff policy for rate-limited (429) responses."""

from dataclasses import dataclass, field
import random

# Defaults
MAX_ATTEMPTS = 3
BASE_DELAY = 1.0  # seconds
BACKOFF_JITTER = 1.0  # seconds, added on top of the exponential delay
RETRY_AFTER_JITTER = 2.0  # seconds, added on top of a server hint


@dataclass
class BackoffPolicy:
    """How long to wait between rate-limited attempts and how many to make.

    ``max_attempts`` counts every send, the first one included.
    """

    max_attempts: int = MAX_ATTEMPTS
    base_delay: float = BASE_DELAY
    jitter: float = BACKOFF_JITTER
    retry_after_jitter: float = RETRY_AFTER_JITTER
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def base(self, attempt: int) -> float:
        """Exponential delay after ``attempt`` (1-based), jitter excluded."""
        return self.base_delay * 2 ** (attempt - 1)

    def delay(self, attempt: int, retry_after: int | None = None) -> float:
        """
        Seconds to wait after attempt ``attempt`` was rate limited.

        Args:
            attempt: 1-based number of the attempt that just failed
            retry_after: Server hint in seconds, if any

        Returns:
            Delay in seconds including jitter
        """
        if retry_after is not None:
            return retry_after + self.rng.uniform(0, self.retry_after_jitter)
        return self.base(attempt) + self.rng.uniform(0, self.jitter)


@dataclass
class RetryState:
    """Per-call retry bookkeeping; discarded when the call resolves."""

    policy: BackoffPolicy
    attempt: int = 1
    pending_delay: float | None = None
    auth_replayed: bool = False

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.policy.max_attempts

    def schedule(self, retry_after: int | None) -> float:
        """Compute the wait before the next attempt and record it."""
        self.pending_delay = self.policy.delay(self.attempt, retry_after)
        return self.pending_delay

    def advance(self) -> None:
        self.attempt += 1
        self.pending_delay = None
