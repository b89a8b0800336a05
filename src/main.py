import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from src.controllers.http import router as http_router
from src.controllers.responses import write_internal_server_error, write_validation_error
from src.infrastructure.service_provider import get_settings, get_weather_config
from src.metrics.metrics import setup_metrics


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the forecast configuration once so misconfiguration fails at boot"""
    config = get_weather_config()
    logger.info(
        "Forecast configuration loaded: %d summaries, temperature range [%d, %d), max %d days",
        len(config.summaries),
        config.min_temperature,
        config.max_temperature,
        config.max_forecast_count,
    )
    yield

async def on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report undecodable input (wrong types, malformed JSON or timestamps) as 422"""
    logger.info("Malformed request to %s: %s", request.url.path, exc.errors())
    return write_validation_error(jsonable_encoder(exc.errors()))

async def on_unhandled_exception(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler: log the fault and answer 500 without internal details"""
    logger.error("Unhandled error while serving %s %s", request.method, request.url.path, exc_info=exc)
    return write_internal_server_error()

def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="Synthetic Weather Forecast API", version="1.0.0", lifespan=lifespan)

    # Health and forecast endpoints
    app.include_router(http_router)

    # Prometheus metrics endpoint
    setup_metrics(app, enabled=settings.enable_metrics)

    app.add_exception_handler(RequestValidationError, on_request_validation_error)
    app.add_exception_handler(Exception, on_unhandled_exception)

    return app


app = create_app()
