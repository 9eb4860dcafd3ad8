"""
Tests for models module.
"""
import pytest
from openweather_exporter.exceptions import MalformedPayloadError
from openweather_exporter.models import WeatherReading


class TestWeatherReading:
    """Tests for WeatherReading class."""

    def test_from_api_response(self):
        """Test mapping of the nested wind and main sections."""
        reading = WeatherReading.from_api_response({
            "wind": {"deg": 250, "speed": 4.1, "gust": 7.2},
            "main": {"temp": 12.3, "humidity": 81, "pressure": 1009, "feels_like": 11.0},
        })

        assert reading.wind_direction == 250
        assert reading.wind_speed == 4.1
        assert reading.wind_gust == 7.2
        assert reading.temperature == 12.3
        assert reading.humidity == 81
        assert reading.pressure == 1009

    def test_missing_gust(self):
        """Test that a missing gust becomes None."""
        reading = WeatherReading.from_api_response({
            "wind": {"deg": 250, "speed": 4.1},
            "main": {"temp": 12.3, "humidity": 81, "pressure": 1009},
        })

        assert reading.wind_gust is None

    @pytest.mark.parametrize("data,match", [
        ({"main": {"temp": 1}}, "wind"),
        ({"wind": {"deg": 1}}, "main"),
        ({"wind": None, "main": {}}, "wind"),
        ([1, 2], "JSON object"),
    ])
    def test_malformed_payload(self, data, match):
        """Test missing sections raise MalformedPayloadError."""
        with pytest.raises(MalformedPayloadError, match=match):
            WeatherReading.from_api_response(data)

    def test_to_dict(self):
        """Test dictionary conversion."""
        reading = WeatherReading(wind_speed=3, pressure=1013)

        assert reading.to_dict() == {
            "wind_direction": None,
            "wind_speed": 3,
            "wind_gust": None,
            "temperature": None,
            "humidity": None,
            "pressure": 1013,
        }
