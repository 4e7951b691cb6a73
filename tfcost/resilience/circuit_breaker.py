"""
Circuit breaker for the pricing catalog.
Stops hammering the Price List API while it is failing, so a burst of
per-resource lookups fails fast instead of timing out one by one.
"""
from enum import Enum
from typing import Callable, Dict, Optional
import logging
import time

logger = logging.getLogger(__name__)


FAILURE_THRESHOLD = 3  # Consecutive failures before the circuit opens
OPEN_STATE_DURATION = 60  # Seconds before an open circuit lets a trial request through
HALF_OPEN_MAX_REQUESTS = 1


class CircuitState(Enum):
    """Circuit breaker states."""
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class CircuitBreaker:
    """
    Consecutive-failure circuit breaker.

    CLOSED -> OPEN after `failure_threshold` failures in a row.
    OPEN -> HALF_OPEN once `open_duration` seconds have passed.
    HALF_OPEN -> CLOSED on success, back to OPEN on failure.
    """

    def __init__(
        self,
        service_name: str,
        failure_threshold: int = FAILURE_THRESHOLD,
        open_duration: float = OPEN_STATE_DURATION,
        half_open_max_requests: int = HALF_OPEN_MAX_REQUESTS,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize circuit breaker.

        Args:
            service_name: Name used in log messages (e.g., "aws_pricing")
            failure_threshold: Consecutive failures before opening
            open_duration: Seconds to stay OPEN before probing
            half_open_max_requests: Trial requests allowed while HALF_OPEN
            clock: Monotonic time source in seconds
        """
        self.service_name = service_name
        self.failure_threshold = failure_threshold
        self.open_duration = open_duration
        self.half_open_max_requests = half_open_max_requests
        self._clock = clock

        self.state = CircuitState.CLOSED
        self.failure_count = 0
        self.opened_at: Optional[float] = None
        self.half_open_requests = 0

    def _transition(self, new_state: CircuitState, reason: str) -> None:
        logger.warning(
            f"Circuit breaker for {self.service_name}: "
            f"{self.state.name} -> {new_state.name} ({reason})"
        )
        self.state = new_state

    def allow_request(self) -> bool:
        """
        Check if a catalog call may proceed.

        Returns:
            True if the call should go ahead, False to fail fast
        """
        if self.state == CircuitState.OPEN:
            if self.opened_at is not None and self._clock() - self.opened_at >= self.open_duration:
                self._transition(CircuitState.HALF_OPEN, "testing recovery")
                self.half_open_requests = 1
                return True
            return False

        if self.state == CircuitState.HALF_OPEN:
            if self.half_open_requests < self.half_open_max_requests:
                self.half_open_requests += 1
                return True
            return False

        return True

    def record_success(self) -> None:
        """Record a successful call (an empty result counts as success)."""
        if self.state == CircuitState.HALF_OPEN:
            self._transition(CircuitState.CLOSED, "service recovered")
            self.half_open_requests = 0
            self.opened_at = None
        self.failure_count = 0

    def record_failure(self) -> None:
        """Record a failed call, opening the circuit when warranted."""
        self.failure_count += 1

        if self.state == CircuitState.HALF_OPEN:
            self._transition(CircuitState.OPEN, "service still failing")
            self.opened_at = self._clock()
            self.half_open_requests = 0
        elif self.state == CircuitState.CLOSED and self.failure_count >= self.failure_threshold:
            self._transition(CircuitState.OPEN, f"{self.failure_count} consecutive failures")
            self.opened_at = self._clock()

    def current_state(self) -> CircuitState:
        """Get current circuit state."""
        return self.state


# One breaker per upstream service
_circuit_breakers: Dict[str, CircuitBreaker] = {}


def get_circuit_breaker(service_name: str) -> CircuitBreaker:
    """
    Get or create the shared circuit breaker for a service.

    Args:
        service_name: Name of the service

    Returns:
        CircuitBreaker instance for the service
    """
    if service_name not in _circuit_breakers:
        _circuit_breakers[service_name] = CircuitBreaker(service_name)
    return _circuit_breakers[service_name]


def reset_circuit_breakers() -> None:
    """Forget all shared breakers."""
    _circuit_breakers.clear()
