import logging

from src.domain.dto import Command, CommandResult
from src.domain.errors import ForecastGenerationError, GenerationFailed
from src.domain.forecast import generate_forecasts
from src.domain.result import Err, Ok, Result, bind
from src.infrastructure.providers import ForecastDependencies
from src.services.forecast_inputs import draw_forecast_inputs
from src.services.validation import ensure_utc, validate_count, validate_start_date


logger = logging.getLogger(__name__)


def validate(deps: ForecastDependencies, command: Command) -> Result:
    """Validate count, then start date against the injected clock.

    The clock is read only once the count has passed, so a bad count never
    touches the providers.
    """
    return bind(
        bind(validate_count(deps.config, command.count),
             lambda _: validate_start_date(command.start_date, deps.now())),
        lambda _: Ok(command),
    )


def _execute(deps: ForecastDependencies, command: Command) -> Result:
    start_date = command.start_date if command.start_date is not None else deps.now()
    generated_at = deps.now()
    temperatures, summary_indices = draw_forecast_inputs(deps, command.count)

    try:
        forecasts = generate_forecasts(
            deps.config.summaries,
            temperatures,
            summary_indices,
            start_date,
            command.count,
        )
    except ForecastGenerationError as exc:
        logger.error("Forecast generation failed for count=%s: %s", command.count, exc)
        return Err(GenerationFailed(str(exc)))

    return Ok(CommandResult(forecasts=forecasts, generated_at=generated_at, count=command.count))


def handle(deps: ForecastDependencies, command: Command) -> Result:
    """
    Generate a fresh batch of forecasts.

    Uses `command.start_date` when supplied, otherwise the current time. A naive
    start date is read as UTC. Output differs per call because values are drawn
    anew, but nothing is persisted.

    Returns:
        Result: `Ok(CommandResult)` or `Err` with InvalidCount, InvalidStartDate
        or GenerationFailed
    """
    command = Command(count=command.count, start_date=ensure_utc(command.start_date))
    validated = validate(deps, command)
    if isinstance(validated, Err):
        logger.info("Rejected forecast command: %s", validated.error)
        return validated
    return _execute(deps, validated.value)
