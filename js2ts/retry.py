import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .config import MAX_RETRIES, RETRY_DELAY
from .errors import AuthError, ExhaustedRetries, RateLimited, RetryableError

logger = logging.getLogger(__name__)

T = TypeVar('T')


@dataclass
class RetryPolicy:
    """Bounded retry: fixed delay on ordinary failures, attempt-scaled backoff on rate limits."""
    max_attempts: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY

    def delay_for(self, error: RetryableError, attempt: int) -> float:
        if isinstance(error, RateLimited):
            return self.retry_delay * attempt * 2
        return self.retry_delay


def call_with_retry(func: Callable[[int], T], policy: Optional[RetryPolicy] = None,
                    sleep: Callable[[float], None] = time.sleep, describe: str = 'request') -> T:
    """
    Calls func(attempt) until it succeeds or the policy runs out of attempts.

    AuthError is re-raised at once. Any other RetryableError is logged and
    retried after the policy's delay; no delay follows the final attempt.
    Non-retryable exceptions propagate unchanged.

    Raises:
        ExhaustedRetries: every attempt failed with a retryable error.
    """
    policy = policy or RetryPolicy()
    last_error = None
    for attempt in range(1, policy.max_attempts + 1):
        logger.info(f"Attempting {describe} (attempt {attempt}/{policy.max_attempts})")
        try:
            return func(attempt)
        except AuthError as e:
            logger.error(f"Authentication failed for {describe} - check API key ({e})")
            raise
        except RetryableError as e:
            last_error = e
            if isinstance(e, RateLimited):
                logger.warning(f"Rate limit hit for {describe} (attempt {attempt})")
            else:
                logger.warning(f"{type(e).__name__} for {describe} (attempt {attempt}): {e}")
            if attempt < policy.max_attempts:
                sleep(policy.delay_for(e, attempt))

    logger.error(f"Failed {describe} after {policy.max_attempts} attempts")
    raise ExhaustedRetries(
        f"gave up after {policy.max_attempts} attempts: {last_error}",
        attempts=policy.max_attempts,
        last_error=last_error,
    ) from last_error
