"""
HTTP surface of the OpenWeather exporter.

Routes:
    GET /         banner
    GET /metrics  Prometheus text exposition
    GET /sensors  JSON summary
"""
import logging
import os
import sys
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api_client import OpenWeatherClient
from .config import ExporterConfig
from .exceptions import ConfigError, ExporterError, MalformedPayloadError, UpstreamError
from .formatters import format_json_metrics, format_open_metrics
from .utils import setup_logging


logger = logging.getLogger(__name__)

BANNER = "OpenWeatherMap.org Exporter for Prometheus"
NOT_FOUND_BODY = "404 Not found"
SERVER_ERROR_BODY = "500 Server error"

# GET routes also answer HEAD
ROUTE_METHODS = ["GET", "HEAD"]

# Status returned for each error kind; the body never carries the detail.
ERROR_STATUS = {
    UpstreamError: 500,
    MalformedPayloadError: 500,
}


def status_for(exc: Exception) -> int:
    """Look up the response status for an exception, walking its class hierarchy."""
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


def create_app(config: ExporterConfig, client: Optional[OpenWeatherClient] = None) -> FastAPI:
    """
    Build the exporter application.

    Args:
        config: Exporter configuration
        client: API client to use; one is built from config if omitted

    Returns:
        FastAPI application
    """
    if client is None:
        client = OpenWeatherClient(config)

    app = FastAPI(
        title="OpenWeather Exporter",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )
    app.state.config = config
    app.state.client = client

    @app.api_route("/", methods=ROUTE_METHODS, response_class=PlainTextResponse)
    def index() -> PlainTextResponse:
        return PlainTextResponse(BANNER)

    # Plain def: the blocking upstream call runs in the thread pool and
    # stalls only this request.
    @app.api_route("/metrics", methods=ROUTE_METHODS, response_class=PlainTextResponse)
    @app.api_route("/metrics/", methods=ROUTE_METHODS, response_class=PlainTextResponse)
    def metrics() -> PlainTextResponse:
        reading = client.fetch_weather_data()
        body = format_open_metrics(reading, source=config.source_label)
        return PlainTextResponse(body, media_type=CONTENT_TYPE_LATEST)

    @app.api_route("/sensors", methods=ROUTE_METHODS)
    @app.api_route("/sensors/", methods=ROUTE_METHODS)
    def sensors() -> JSONResponse:
        reading = client.fetch_weather_data()
        return JSONResponse(format_json_metrics(reading))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> PlainTextResponse:
        # Unknown method on a known path is treated like an unknown path
        if exc.status_code in (404, 405):
            return PlainTextResponse(NOT_FOUND_BODY, status_code=404)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code)

    @app.exception_handler(ExporterError)
    async def exporter_error_handler(request: Request, exc: ExporterError) -> PlainTextResponse:
        logger.error(
            f"{request.method} {request.url.path} failed: {type(exc).__name__}: {exc}",
            exc_info=exc,
        )
        return PlainTextResponse(SERVER_ERROR_BODY, status_code=status_for(exc))

    # Errors no exception handler claimed are logged once here.
    @app.middleware("http")
    async def unexpected_error_middleware(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
            return PlainTextResponse(SERVER_ERROR_BODY, status_code=500)

    return app


def load_config() -> ExporterConfig:
    """
    Load configuration from the YAML file named by OPENWEATHER_EXPORTER_CONFIG,
    or from the environment when it is not set.
    """
    config_path = os.getenv("OPENWEATHER_EXPORTER_CONFIG")
    if config_path:
        return ExporterConfig.load_from_file(config_path)
    return ExporterConfig.load_from_env()


def main() -> int:
    """Main entry point for the exporter service."""
    load_dotenv()

    try:
        config = load_config()
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    setup_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        log_format=config.log_format,
    )
    logger.info(f"Configuration loaded: {config.to_dict(sanitize=True)}")

    app = create_app(config)

    logger.info(f"OpenWeather Exporter listening on http://{config.host}:{config.port}")
    try:
        uvicorn.run(app, host=config.host, port=config.port, log_config=None)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
