import time
import random
from threading import Lock

class RateLimiter:
    """
    Token bucket rate limiter for RPC requests.

    Attributes:
        max_requests: Maximum number of requests allowed per time window
        time_window: Time window in seconds
        tokens: Current number of available tokens
        last_update: Timestamp of last token update
    """

    def __init__(self, max_requests: int, time_window: float = 1.0):
        self.max_requests = max_requests
        self.time_window = time_window
        self.tokens = float(max_requests)
        self.last_update = time.monotonic()
        self.lock = Lock()

    def _refill(self, now: float) -> float:
        time_passed = now - self.last_update
        return min(
            self.max_requests,
            self.tokens + time_passed * (self.max_requests / self.time_window)
        )

    def acquire(self) -> None:
        """
        Take one token, sleeping until one is available. Thread-safe.
        """
        with self.lock:
            now = time.monotonic()
            self.tokens = self._refill(now)
            self.last_update = now

            if self.tokens < 1:
                sleep_time = (1 - self.tokens) * (self.time_window / self.max_requests)
                time.sleep(sleep_time)
                self.tokens = 0
                self.last_update = time.monotonic()
            else:
                self.tokens -= 1

def backoff_delay(retries: int, base_delay: float = 1.0, max_delay: float = 60.0, jitter: bool = True) -> float:
    """
    Exponential backoff delay for the given 0-based retry count, capped at
    max_delay. Jitter scales the delay by a random factor in [0.5, 1.0].
    """
    delay = min(base_delay * (2 ** retries), max_delay)
    if jitter:
        delay *= random.uniform(0.5, 1.0)
    return delay

def exponential_backoff_sleep(retries: int, base_delay: float = 1.0, max_delay: float = 60.0, jitter: bool = True) -> None:
    time.sleep(backoff_delay(retries, base_delay, max_delay, jitter))
