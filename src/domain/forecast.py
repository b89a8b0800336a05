from __future__ import annotations

from datetime import datetime, timedelta
from typing import List, Sequence

from src.domain.dto import Forecast
from src.domain.errors import ForecastGenerationError


def generate_forecasts(
        summaries: Sequence[str],
        temperatures: Sequence[int],
        summary_indices: Sequence[int],
        start_date: datetime,
        count: int) -> List[Forecast]:
    """Build `count` daily forecasts from pre-drawn values.

    The function never reads the clock or draws random numbers: everything
    non-deterministic is supplied by the caller, so the same arguments always
    produce the same forecasts.

    Args:
        summaries (Sequence[str]): Configured summary labels
        temperatures (Sequence[int]): Celsius values, one per forecast
        summary_indices (Sequence[int]): Positions in `summaries`, one per forecast
        start_date (datetime): The first forecast is dated one day after this
        count (int): Number of forecasts to build

    Raises:
        ForecastGenerationError: if the drawn values do not cover `count`
        forecasts or an index points outside `summaries`
    """
    if len(temperatures) < count or len(summary_indices) < count:
        raise ForecastGenerationError(
            f"Expected {count} drawn values, got {len(temperatures)} temperatures "
            f"and {len(summary_indices)} summary indices"
        )

    forecasts: List[Forecast] = []
    for i in range(count):
        index = summary_indices[i]
        if not 0 <= index < len(summaries):
            raise ForecastGenerationError(f"Summary index {index} is out of range")
        forecasts.append(
            Forecast(
                date=start_date + timedelta(days=i + 1),
                temperature_c=temperatures[i],
                summary=summaries[index],
            )
        )
    return forecasts
