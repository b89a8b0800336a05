import logging
from typing import List

from src.domain.dto import Forecast, Query
from src.domain.errors import ForecastGenerationError, GenerationFailed
from src.domain.forecast import generate_forecasts
from src.domain.result import Err, Ok, Result
from src.infrastructure.providers import ForecastDependencies
from src.services.forecast_inputs import draw_forecast_inputs
from src.services.validation import validate_query


logger = logging.getLogger(__name__)


def _execute(deps: ForecastDependencies, query: Query) -> Result:
    start_date = deps.now()
    temperatures, summary_indices = draw_forecast_inputs(deps, query.count)

    try:
        forecasts: List[Forecast] = generate_forecasts(
            deps.config.summaries,
            temperatures,
            summary_indices,
            start_date,
            query.count,
        )
    except ForecastGenerationError as exc:
        logger.error("Forecast generation failed for count=%s: %s", query.count, exc)
        return Err(GenerationFailed(str(exc)))

    return Ok(forecasts)


def handle(deps: ForecastDependencies, query: Query) -> Result:
    """Return `query.count` forecasts starting tomorrow.

    Read-only: the start date is always the current time from `deps.now`.
    Invalid input is returned as `Err(InvalidCount)` before any random value
    is drawn.
    """
    validated = validate_query(deps.config, query)
    if isinstance(validated, Err):
        logger.info("Rejected forecast query: %s", validated.error)
        return validated
    return _execute(deps, validated.value)
