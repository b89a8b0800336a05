from __future__ import annotations

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class InvalidCount:
    """Requested number of forecasts is outside the configured bounds."""

    count: int
    message: str


@dataclass(frozen=True)
class InvalidStartDate:
    """Supplied start date is outside the allowed window around now."""

    message: str


@dataclass(frozen=True)
class GenerationFailed:
    """Unexpected internal failure while building forecasts."""

    message: str


class ForecastGenerationError(ValueError):
    """Raised by the domain transform when its inputs are malformed."""


ValidationError = Union[InvalidCount, InvalidStartDate]
QueryError = Union[InvalidCount, GenerationFailed]
CommandError = Union[InvalidCount, InvalidStartDate, GenerationFailed]
