from functools import lru_cache

from fastapi import Depends

from src.domain.dto import ForecastConfiguration
from src.infrastructure.config import Settings, load_weather_config, settings
from src.infrastructure.providers import (
    ForecastDependencies,
    RandomProvider,
    TimeProvider,
    create_random_provider,
    create_time_provider,
)


# Default implementations of injection
def get_settings() -> Settings:
    """Provide service settings as a dependency."""
    return settings

@lru_cache
def get_weather_config() -> ForecastConfiguration:
    """Provide forecast configuration, loaded once per process."""
    return load_weather_config(get_settings())

def get_time_provider() -> TimeProvider:
    """Provide the clock function as a dependency.

    Returns a function that takes no arguments and returns the current UTC datetime.
    """
    return create_time_provider()

def get_random_provider() -> RandomProvider:
    """Provide the random integer function as a dependency.

    Returns a function that takes (min, max) and returns an integer in [min, max).
    """
    return create_random_provider()

def get_forecast_dependencies(
        config: ForecastConfiguration = Depends(get_weather_config),
        now: TimeProvider = Depends(get_time_provider),
        random_int: RandomProvider = Depends(get_random_provider),
) -> ForecastDependencies:
    """
    Provide the dependency record for forecast handlers.

    A new record is built for every request, so providers overridden in tests
    are never shared between requests.
    """
    return ForecastDependencies(config=config, now=now, random_int=random_int)
