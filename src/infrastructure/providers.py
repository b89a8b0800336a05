import random
from datetime import datetime, timezone
from typing import Callable, Iterable

from src.domain.dto import ForecastConfiguration


TimeProvider = Callable[[], datetime]
RandomProvider = Callable[[int, int], int]

# Backed by os.urandom, so there is no shared generator state between threads
_system_random = random.SystemRandom()


class ForecastDependencies:
    """The contract to serve configuration, clock and randomness to the handlers.

    `now` returns the current UTC time; `random_int(min, max)` returns an
    integer in the half-open range [min, max).
    """

    def __init__(
            self,
            config: ForecastConfiguration,
            now: TimeProvider,
            random_int: RandomProvider) -> None:
        self.config = config
        self.now = now
        self.random_int = random_int


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def system_random_int(min_value: int, max_value: int) -> int:
    return _system_random.randrange(min_value, max_value)


def create_time_provider() -> TimeProvider:
    """Production clock returning wall-clock UTC time."""
    return utc_now


def create_random_provider() -> RandomProvider:
    """Production random source, safe to call from concurrent requests."""
    return system_random_int


def create_test_time_provider(fixed_time: datetime) -> TimeProvider:
    """Clock frozen at `fixed_time`."""
    return lambda: fixed_time


def create_test_random_provider(values: Iterable[int]) -> RandomProvider:
    """
    Random source replaying `values` in order, ignoring the requested bounds.

    Returns 0 once the sequence is exhausted. Every call to this factory gets
    its own position in the sequence.
    """
    iterator = iter(values)

    def random_int(min_value: int, max_value: int) -> int:
        return next(iterator, 0)

    return random_int
