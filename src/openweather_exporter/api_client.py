"""
OpenWeather API client.
"""
import logging
from typing import Any, Dict

import requests

from .config import ExporterConfig
from .exceptions import (
    AuthenticationError,
    LocationNotFoundError,
    MalformedPayloadError,
    RateLimitError,
    UpstreamError,
)
from .models import WeatherReading
from .utils import sanitize_for_logging


logger = logging.getLogger(__name__)


class OpenWeatherClient:
    """
    Client for the OpenWeather current weather API.

    Every call is a fresh request: nothing is cached or retried.
    API Documentation: https://openweathermap.org/current
    """

    def __init__(self, config: ExporterConfig):
        """
        Initialize OpenWeather API client.

        Args:
            config: Exporter configuration holding the key and location id
        """
        self.endpoint = config.endpoint
        self.location_id = config.location_id
        self.timeout = config.timeout
        self._api_key = config.api_key
        self.session = requests.Session()

        # Built once, sent unchanged with every request
        self._params = config.query_params()

        logger.info(f"Initialized OpenWeather API client for location {self.location_id}")

    def fetch_weather_data(self) -> WeatherReading:
        """
        Fetch the current weather for the configured location.

        Returns:
            WeatherReading instance

        Raises:
            UpstreamError: If the API request fails
            MalformedPayloadError: If the response lacks the expected sections
        """
        data = self.fetch_raw()
        reading = WeatherReading.from_api_response(data)
        logger.debug(f"Parsed reading: {reading.to_dict()}")
        return reading

    def fetch_raw(self) -> Dict[str, Any]:
        """
        Make a single request to the OpenWeather API.

        Returns:
            Response JSON data

        Raises:
            UpstreamError: If the request fails
            AuthenticationError: If the API key is rejected
            LocationNotFoundError: If the location id is unknown
            RateLimitError: If the rate limit is exceeded
            MalformedPayloadError: If the body is not JSON
        """
        logger.debug(f"Requesting current weather for location {self.location_id}")

        try:
            response = self.session.get(
                self.endpoint, params=self._params, timeout=self.timeout
            )
        except requests.Timeout:
            logger.error(f"Request for location {self.location_id} timed out")
            raise UpstreamError("Request to OpenWeather API timed out")

        except requests.ConnectionError as e:
            detail = self._scrub(e)
            logger.error(f"Connection error while accessing OpenWeather API: {detail}")
            raise UpstreamError(f"Connection error: {detail}")

        except requests.RequestException as e:
            detail = self._scrub(e)
            logger.error(f"Request failed: {detail}")
            raise UpstreamError(f"Request failed: {detail}")

        # Handle different status codes
        if response.status_code == 200:
            try:
                return response.json()
            except ValueError as e:
                raise MalformedPayloadError(f"API response is not valid JSON: {e}")
        elif response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed. Check OPEN_WEATHER_API_KEY."
            )
        elif response.status_code == 404:
            raise LocationNotFoundError(
                f"Location {self.location_id} not found. Check OPEN_WEATHER_LOCATION_ID."
            )
        elif response.status_code == 429:
            raise RateLimitError("API rate limit exceeded.")
        else:
            error_msg = f"API request failed with status {response.status_code}"
            try:
                error_detail = response.json()
                error_msg += f": {error_detail}"
            except ValueError:
                error_msg += f": {response.text}"

            raise UpstreamError(self._scrub(error_msg))

    def _scrub(self, detail: Any) -> str:
        """Remove the API key from text that may echo the request URL."""
        return sanitize_for_logging(str(detail), secrets=[self._api_key])

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"OpenWeatherClient(location_id={self.location_id}, api_key=***REDACTED***)"
