from fastapi import APIRouter, FastAPI
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response


metrics_router = APIRouter()

# Core metrics requested
forecast_requests_total = Counter(
    "forecast_requests_total",
    "Forecast requests handled, by operation and outcome",
    ["operation", "outcome"],
)
forecasts_generated_total = Counter(
    "forecasts_generated_total",
    "Total forecast records returned to callers",
    ["operation"],
)
forecast_handler_seconds = Histogram(
    "forecast_handler_seconds",
    "Time spent inside a forecast handler in seconds",
    ["operation"],
)

def update_all_metrics(
        operation: str,
        outcome: str,
        handler_ms: float,
        forecast_count: int = 0):
    """
    Update all core metrics for one handled request.

    This method updates the following metrics:
    - forecast_requests_total: Increments the counter for the operation and outcome
    - forecast_handler_seconds: Converts handler time to seconds and records it
    - forecasts_generated_total: Increments by the number of returned forecasts

    Args:
        operation (str): Either "get" or "generate"
        outcome (str): Error code of the response, or "ok"
        handler_ms (float): Time spent in the handler in milliseconds
        forecast_count (int): Number of forecasts returned, 0 on error
    """
    forecast_requests_total.labels(operation=operation, outcome=outcome).inc()
    forecast_handler_seconds.labels(operation=operation).observe(handler_ms / 1000.0)
    if forecast_count:
        forecasts_generated_total.labels(operation=operation).inc(forecast_count)

@metrics_router.get("/metrics", tags=["system"])
def metrics() -> Response:
    return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI, enabled: bool = True) -> None:
    """
    Expose the /metrics endpoint when metrics are enabled.
    Collectors are updated directly from the forecast endpoints.
    """
    if enabled:
        app.include_router(metrics_router)
