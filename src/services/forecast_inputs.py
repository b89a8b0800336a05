from typing import List, Tuple

from src.infrastructure.providers import ForecastDependencies


def draw_forecast_inputs(deps: ForecastDependencies, count: int) -> Tuple[List[int], List[int]]:
    """
    Draw the random values needed for `count` forecasts.

    All temperatures are drawn before any summary index, one call per value.
    Replayed test sequences rely on this order.

    Returns:
        Tuple[List[int], List[int]]:
            - Celsius temperatures in [min_temperature, max_temperature)
            - Summary indices in [0, len(summaries))
    """
    config = deps.config
    temperatures = [
        deps.random_int(config.min_temperature, config.max_temperature)
        for _ in range(count)
    ]
    summary_indices = [
        deps.random_int(0, len(config.summaries))
        for _ in range(count)
    ]
    return temperatures, summary_indices
