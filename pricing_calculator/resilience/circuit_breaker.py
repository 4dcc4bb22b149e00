"""
Circuit breaker guarding calls to the pricing catalog.

After repeated upstream failures the breaker fails fast instead of letting
every request wait out the catalog timeout. It never retries on its own.
"""
from enum import Enum
import logging
import threading
import time
from typing import Callable, Optional


logger = logging.getLogger(__name__)


FAILURE_THRESHOLD = 3  # Consecutive failures before opening
OPEN_STATE_DURATION = 60  # Seconds before a trial request is let through


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Three-state breaker.

    - CLOSED -> OPEN after ``failure_threshold`` consecutive failures
    - OPEN -> HALF_OPEN once ``open_duration`` seconds have elapsed
    - HALF_OPEN -> CLOSED on the trial request's success, back to OPEN on failure

    Only one trial request is admitted while HALF_OPEN.
    """

    def __init__(
        self,
        service_name: str,
        failure_threshold: int = FAILURE_THRESHOLD,
        open_duration: float = OPEN_STATE_DURATION,
        clock: Optional[Callable[[], float]] = None
    ):
        self.service_name = service_name
        self.failure_threshold = failure_threshold
        self.open_duration = open_duration
        self._clock = clock or time.monotonic
        self._lock = threading.Lock()

        self._state = CircuitState.CLOSED
        self._failure_count = 0
        self._opened_at: Optional[float] = None
        self._trial_in_flight = False

    @property
    def state(self) -> CircuitState:
        with self._lock:
            return self._state

    def allow_request(self) -> bool:
        """Return True if a call to the upstream may proceed."""
        with self._lock:
            if self._state == CircuitState.CLOSED:
                return True

            if self._state == CircuitState.OPEN:
                if self._clock() - self._opened_at < self.open_duration:
                    return False
                logger.warning("Circuit breaker for %s: OPEN -> HALF_OPEN", self.service_name)
                self._state = CircuitState.HALF_OPEN
                self._trial_in_flight = False

            if self._trial_in_flight:
                return False
            self._trial_in_flight = True
            return True

    def record_success(self) -> None:
        with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                logger.warning("Circuit breaker for %s: HALF_OPEN -> CLOSED", self.service_name)
            self._state = CircuitState.CLOSED
            self._failure_count = 0
            self._opened_at = None
            self._trial_in_flight = False

    def record_failure(self) -> None:
        with self._lock:
            self._failure_count += 1
            if self._state == CircuitState.HALF_OPEN:
                logger.warning("Circuit breaker for %s: HALF_OPEN -> OPEN", self.service_name)
                self._open()
            elif self._state == CircuitState.CLOSED and self._failure_count >= self.failure_threshold:
                logger.warning(
                    "Circuit breaker for %s: CLOSED -> OPEN (%d consecutive failures)",
                    self.service_name,
                    self._failure_count
                )
                self._open()

    def release(self) -> None:
        """Give back a HALF_OPEN trial slot without judging the upstream (e.g. on cancellation)."""
        with self._lock:
            self._trial_in_flight = False

    def _open(self) -> None:
        self._state = CircuitState.OPEN
        self._opened_at = self._clock()
        self._trial_in_flight = False
