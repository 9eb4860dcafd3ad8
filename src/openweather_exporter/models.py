"""
Data models for the OpenWeather exporter.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .exceptions import MalformedPayloadError


Number = Union[int, float]


@dataclass
class WeatherReading:
    """
    Current conditions for one location, as returned by the OpenWeather API.

    Exists only for the duration of one scrape. Every field is optional since
    the API omits readings it does not have (gust most often).
    """

    # Wind fields
    wind_direction: Optional[Number] = None  # degrees
    wind_speed: Optional[Number] = None  # m/s
    wind_gust: Optional[Number] = None  # m/s

    # Atmospheric fields
    temperature: Optional[Number] = None  # degrees Celsius
    humidity: Optional[Number] = None  # percent
    pressure: Optional[Number] = None  # hPa

    @classmethod
    def from_api_response(cls, data: Any) -> "WeatherReading":
        """
        Create a WeatherReading from an OpenWeather current weather response.

        Args:
            data: Parsed JSON body from the API

        Returns:
            WeatherReading instance

        Raises:
            MalformedPayloadError: If the 'wind' or 'main' sections are missing
        """
        if not isinstance(data, dict):
            raise MalformedPayloadError(
                f"Expected a JSON object, got {type(data).__name__}"
            )

        wind = data.get("wind")
        main = data.get("main")

        if not isinstance(wind, dict):
            raise MalformedPayloadError("Missing 'wind' section in API response")
        if not isinstance(main, dict):
            raise MalformedPayloadError("Missing 'main' section in API response")

        return cls(
            wind_direction=wind.get("deg"),
            wind_speed=wind.get("speed"),
            wind_gust=wind.get("gust"),
            temperature=main.get("temp"),
            humidity=main.get("humidity"),
            pressure=main.get("pressure"),
        )

    def to_dict(self) -> Dict[str, Optional[Number]]:
        """Convert WeatherReading to dictionary."""
        return {
            "wind_direction": self.wind_direction,
            "wind_speed": self.wind_speed,
            "wind_gust": self.wind_gust,
            "temperature": self.temperature,
            "humidity": self.humidity,
            "pressure": self.pressure,
        }


@dataclass
class Sensor:
    """A single labeled gauge sample, built while formatting a scrape."""

    name: str
    description: str
    type: str
    source: str
    value: Optional[Number]
