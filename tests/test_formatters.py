"""
Tests for formatters module.
"""
import re

import pytest
from prometheus_client.parser import text_string_to_metric_families
from openweather_exporter.formatters import (
    build_sensors,
    format_json_metrics,
    format_open_metrics,
    format_sensor,
    format_value,
)
from openweather_exporter.models import Sensor, WeatherReading


SAMPLE_LINE = re.compile(r'^(\w+)\{location="OpenWeather"\} (\S+)$')

METRIC_ORDER = [
    "sensor_wind_direction",
    "sensor_wind_speed",
    "sensor_wind_gust",
    "sensor_air_temperature",
    "sensor_air_relative_humidity",
    "sensor_air_pressure",
]


@pytest.fixture
def reading():
    """Create a sample reading."""
    return WeatherReading(
        wind_direction=0,
        wind_speed=3,
        wind_gust=5,
        temperature=20,
        humidity=50,
        pressure=1013,
    )


def sample_lines(text):
    return [line for line in text.splitlines() if not line.startswith("#")]


class TestFormatOpenMetrics:
    """Tests for the text exposition formatter."""

    def test_six_samples_in_order(self, reading):
        """Test there are exactly six samples in the fixed order."""
        samples = sample_lines(format_open_metrics(reading))

        assert len(samples) == 6
        names = [SAMPLE_LINE.match(line).group(1) for line in samples]
        assert names == METRIC_ORDER

    def test_third_block_is_gust(self, reading):
        """Test the gust block renders the raw value."""
        blocks = format_open_metrics(reading).split("# HELP ")[1:]

        assert blocks[2] == (
            "sensor_wind_gust Windgust\n"
            "# TYPE sensor_wind_gust gauge\n"
            'sensor_wind_gust{location="OpenWeather"} 5\n'
        )

    def test_direction_is_raw_degrees(self):
        """Test the text output reports degrees, not a compass point."""
        text = format_open_metrics(WeatherReading(wind_direction=247))

        assert 'sensor_wind_direction{location="OpenWeather"} 247\n' in text

    def test_missing_gust_renders_nan(self, reading):
        """Test a missing gust keeps its block with a NaN sample."""
        reading.wind_gust = None
        samples = sample_lines(format_open_metrics(reading))

        assert len(samples) == 6
        assert samples[2] == 'sensor_wind_gust{location="OpenWeather"} NaN'

    def test_values_passed_through(self):
        """Test out-of-range values are not validated."""
        text = format_open_metrics(WeatherReading(humidity=140, temperature=-12.5))

        assert 'sensor_air_relative_humidity{location="OpenWeather"} 140\n' in text
        assert 'sensor_air_temperature{location="OpenWeather"} -12.5\n' in text

    def test_custom_source_label(self, reading):
        """Test the location label comes from the caller."""
        text = format_open_metrics(reading, source="Home")

        assert 'sensor_air_pressure{location="Home"} 1013\n' in text

    def test_output_parses_as_exposition(self, reading):
        """Test Prometheus' own parser accepts the output."""
        reading.wind_gust = None
        families = list(text_string_to_metric_families(format_open_metrics(reading)))

        assert [family.name for family in families] == METRIC_ORDER
        assert all(family.type == "gauge" for family in families)
        pressure = families[5].samples[0]
        assert pressure.labels == {"location": "OpenWeather"}
        assert pressure.value == 1013


class TestFormatJsonMetrics:
    """Tests for the JSON formatter."""

    def test_sample_reading(self, reading):
        """Test the full mapping for a sample reading."""
        assert format_json_metrics(reading) == {
            "air_temperature": 20,
            "air_relative_humidity": 50,
            "air_pressure": 1013,
            "wind_direction": "N",
            "wind_speed": 3,
            "wind_gust": 5,
        }

    def test_direction_is_compass_point(self, reading):
        """Test wind direction is converted to a label."""
        reading.wind_direction = 200
        assert format_json_metrics(reading)["wind_direction"] == "SSW"

    def test_missing_values_are_none(self):
        """Test missing readings become None."""
        result = format_json_metrics(WeatherReading(wind_speed=2.1))

        assert result["wind_speed"] == 2.1
        assert result["wind_direction"] is None
        assert result["wind_gust"] is None


class TestSensors:
    """Tests for sensor construction and rendering."""

    def test_build_sensors(self, reading):
        """Test sensors carry name, type, source and value."""
        sensors = build_sensors(reading)

        assert [s.name for s in sensors] == METRIC_ORDER
        assert {s.type for s in sensors} == {"gauge"}
        assert {s.source for s in sensors} == {"OpenWeather"}
        assert [s.value for s in sensors] == [0, 3, 5, 20, 50, 1013]

    def test_format_sensor(self):
        """Test a single sensor block."""
        sensor = Sensor(
            name="sensor_air_pressure",
            description="Air pressure in hectopascals (hPa)",
            type="gauge",
            source="OpenWeather",
            value=1008.5,
        )

        assert format_sensor(sensor) == (
            "# HELP sensor_air_pressure Air pressure in hectopascals (hPa)\n"
            "# TYPE sensor_air_pressure gauge\n"
            'sensor_air_pressure{location="OpenWeather"} 1008.5\n'
        )

    @pytest.mark.parametrize("value,expected", [
        (5, "5"),
        (20.0, "20"),
        (3.6, "3.6"),
        (-0.5, "-0.5"),
        (None, "NaN"),
        (float("nan"), "NaN"),
        (float("inf"), "+Inf"),
        (float("-inf"), "-Inf"),
    ])
    def test_format_value(self, value, expected):
        """Test sample value rendering."""
        assert format_value(value) == expected
