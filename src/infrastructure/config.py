import os
from dataclasses import dataclass
from dotenv import load_dotenv

from src.domain.dto import ForecastConfiguration


load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), "..", ".env"))


DEFAULT_SUMMARIES = (
    "Freezing", "Bracing", "Chilly", "Cool", "Mild",
    "Warm", "Balmy", "Hot", "Sweltering", "Scorching",
)
DEFAULT_MIN_TEMPERATURE = -20
DEFAULT_MAX_TEMPERATURE = 55
DEFAULT_MAX_FORECAST_DAYS = 100


@dataclass
class Settings:
    """Service configuration loaded from environment variables."""

    # Forecast generation
    weather_summaries: str = os.getenv("WEATHER_SUMMARIES", "")
    weather_min_temperature: str = os.getenv("WEATHER_MIN_TEMPERATURE", "")
    weather_max_temperature: str = os.getenv("WEATHER_MAX_TEMPERATURE", "")
    weather_max_forecast_days: str = os.getenv("WEATHER_MAX_FORECAST_DAYS", "")

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Using metrics
    enable_metrics: bool = os.getenv("ENABLE_METRICS", "true").lower() == "true"


def _int_or_default(raw: str, default: int, name: str) -> int:
    if raw is None or not str(raw).strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def load_weather_config(settings: Settings) -> ForecastConfiguration:
    """
    Build the forecast configuration from settings, using defaults for unset values.

    Args:
        settings (Settings): Configuration settings with env variables

    Raises:
        ValueError: if a value is not an integer or the bounds are inconsistent
    """
    summaries = tuple(s.strip() for s in settings.weather_summaries.split(",") if s.strip())
    if not summaries:
        summaries = DEFAULT_SUMMARIES

    min_temp = _int_or_default(settings.weather_min_temperature, DEFAULT_MIN_TEMPERATURE, "WEATHER_MIN_TEMPERATURE")
    max_temp = _int_or_default(settings.weather_max_temperature, DEFAULT_MAX_TEMPERATURE, "WEATHER_MAX_TEMPERATURE")
    max_days = _int_or_default(settings.weather_max_forecast_days, DEFAULT_MAX_FORECAST_DAYS, "WEATHER_MAX_FORECAST_DAYS")

    if max_temp <= min_temp:
        raise ValueError(
            f"WEATHER_MAX_TEMPERATURE ({max_temp}) must be greater than WEATHER_MIN_TEMPERATURE ({min_temp})"
        )
    if max_days < 1:
        raise ValueError(f"WEATHER_MAX_FORECAST_DAYS must be at least 1, got {max_days}")

    return ForecastConfiguration(
        summaries=summaries,
        min_temperature=min_temp,
        max_temperature=max_temp,
        max_forecast_count=max_days,
    )


settings = Settings()
