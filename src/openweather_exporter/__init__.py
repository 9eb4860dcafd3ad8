"""
OpenWeather Exporter - OpenWeatherMap readings for Prometheus.

Polls the OpenWeather current weather API on every scrape and re-exposes
wind, temperature, humidity and pressure as Prometheus gauges and as a
small JSON summary.
"""

__version__ = "0.1.0"

from .api_client import OpenWeatherClient
from .compass import deg_to_compass
from .config import ExporterConfig
from .exceptions import (
    AuthenticationError,
    ConfigError,
    ExporterError,
    LocationNotFoundError,
    MalformedPayloadError,
    RateLimitError,
    UpstreamError,
)
from .formatters import build_sensors, format_json_metrics, format_open_metrics
from .models import Sensor, WeatherReading

__all__ = [
    "OpenWeatherClient",
    "deg_to_compass",
    "ExporterConfig",
    "AuthenticationError",
    "ConfigError",
    "ExporterError",
    "LocationNotFoundError",
    "MalformedPayloadError",
    "RateLimitError",
    "UpstreamError",
    "build_sensors",
    "format_json_metrics",
    "format_open_metrics",
    "Sensor",
    "WeatherReading",
]
