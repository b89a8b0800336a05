from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field


class Forecast(BaseModel):
    """A single synthetic forecast for one calendar day."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: datetime
    temperature_c: int = Field(..., serialization_alias="temperatureC")
    summary: str

    @computed_field(alias="temperatureF")
    @property
    def temperature_f(self) -> float:
        # Derived on every access, never stored
        return 32 + self.temperature_c / 0.5556


class CommandResult(BaseModel):
    """Payload returned by the generate operation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    forecasts: List[Forecast]
    generated_at: datetime = Field(..., serialization_alias="generatedAt")
    count: int


@dataclass(frozen=True)
class ForecastConfiguration:
    """Bounds used to validate requests and draw random forecast values.

    Built once at startup by the configuration loader and shared read-only.
    """

    summaries: Tuple[str, ...]
    min_temperature: int
    max_temperature: int
    max_forecast_count: int


@dataclass(frozen=True)
class Query:
    """Read request: how many daily forecasts to return, starting tomorrow."""

    count: int


@dataclass(frozen=True)
class Command:
    """Write request: how many forecasts to generate, optionally from a given date."""

    count: int
    start_date: Optional[datetime] = None
