import time
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Path
from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator
from starlette.responses import JSONResponse
from starlette.status import HTTP_200_OK, HTTP_201_CREATED

from src.controllers.responses import ErrorResponse, error_code, write_created, write_ok, write_result
from src.domain.dto import Command, CommandResult, Forecast, Query
from src.domain.result import Ok, Result
from src.infrastructure.config import DEFAULT_MAX_FORECAST_DAYS, Settings
from src.infrastructure.providers import ForecastDependencies
from src.infrastructure.service_provider import get_forecast_dependencies, get_settings
from src.metrics.metrics import update_all_metrics
from src.services import generate_forecast_service, get_forecast_service
from src.services.validation import ensure_utc


router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid count or start date"},
    422: {"model": ErrorResponse, "description": "Malformed request"},
    500: {"model": ErrorResponse, "description": "Unexpected internal failure"},
}


class GenerateForecastsRequest(BaseModel):
    """Request body for generating a batch of forecasts."""

    model_config = ConfigDict(populate_by_name=True)

    # Strict so JSON booleans and numeric strings are rejected as malformed
    count: StrictInt = Field(..., json_schema_extra={"example": 5})
    start_date: Optional[datetime] = Field(
        None,
        alias="startDate",
        json_schema_extra={
            "example": "2025-06-01T00:00:00Z",
            "description": "Forecasts start the day after this date. Defaults to now; naive values are read as UTC."
        }
    )

    @field_validator("start_date")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(value)


def _record(settings_dep: Settings, operation: str, result: Result, started: float, forecast_count: int) -> None:
    if not settings_dep.enable_metrics:
        return
    outcome = "ok" if isinstance(result, Ok) else error_code(result.error)
    update_all_metrics(
        operation=operation,
        outcome=outcome,
        handler_ms=(time.perf_counter() - started) * 1000,
        forecast_count=forecast_count,
    )


@router.get("/health", status_code=HTTP_200_OK, summary="Health check", tags=["system"])
def health() -> dict:
    """Returns 200 OK if the service is up."""
    return {"status": "ok"}


@router.get(
    "/api/weather/forecast/{count}",
    status_code=HTTP_200_OK,
    response_model=List[Forecast],
    responses=ERROR_RESPONSES,
    summary="Get weather forecasts",
    operation_id="GetWeatherForecast",
    tags=["weather"],
)
def get_forecast(
    count: int = Path(
        ...,
        description="Number of forecast days",
        # Documented only; out-of-range values are answered with 400 InvalidCount
        json_schema_extra={"minimum": 1, "maximum": DEFAULT_MAX_FORECAST_DAYS},
    ),
    deps: ForecastDependencies = Depends(get_forecast_dependencies),
    settings_dep: Settings = Depends(get_settings),
) -> JSONResponse:
    """Retrieve `count` daily forecasts starting tomorrow.

    - On a count outside 1..max returns 400 with `InvalidCount`
    """
    started = time.perf_counter()
    result = get_forecast_service.handle(deps, Query(count=count))

    forecast_count = len(result.value) if isinstance(result, Ok) else 0
    _record(settings_dep, "get", result, started, forecast_count)
    return write_result(result, write_ok)


@router.post(
    "/api/weather/forecast/generate",
    status_code=HTTP_201_CREATED,
    response_model=CommandResult,
    responses=ERROR_RESPONSES,
    summary="Generate weather forecasts",
    operation_id="GenerateWeatherForecasts",
    tags=["weather"],
)
def generate_forecasts(
    payload: GenerateForecastsRequest,
    deps: ForecastDependencies = Depends(get_forecast_dependencies),
    settings_dep: Settings = Depends(get_settings),
) -> JSONResponse:
    """Generate new forecasts for the requested number of days.

    - On a bad count or a start date more than a year away returns 400
    - On an internal generation failure returns 500 without details
    """
    started = time.perf_counter()
    command = Command(count=payload.count, start_date=payload.start_date)
    result = generate_forecast_service.handle(deps, command)

    forecast_count = result.value.count if isinstance(result, Ok) else 0
    _record(settings_dep, "generate", result, started, forecast_count)
    return write_result(result, write_created)
