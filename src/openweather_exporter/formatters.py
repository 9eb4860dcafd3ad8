"""
Formatters turning a WeatherReading into Prometheus text or a JSON summary.
"""
import math
from typing import Dict, List, Optional, Union

from .compass import deg_to_compass
from .models import Number, Sensor, WeatherReading


DEFAULT_SOURCE = "OpenWeather"

GAUGE = "gauge"

# (metric name, HELP text, WeatherReading attribute), in exposition order
SENSOR_DEFINITIONS = (
    ("sensor_wind_direction", "Winddirection", "wind_direction"),
    ("sensor_wind_speed", "Windspeed", "wind_speed"),
    ("sensor_wind_gust", "Windgust", "wind_gust"),
    ("sensor_air_temperature", "Air temperature in degrees Celsius (˚C)", "temperature"),
    ("sensor_air_relative_humidity", "Air relative humidity in percentage (%H)", "humidity"),
    ("sensor_air_pressure", "Air pressure in hectopascals (hPa)", "pressure"),
)


def build_sensors(reading: WeatherReading, source: str = DEFAULT_SOURCE) -> List[Sensor]:
    """
    Build the six gauge samples for a reading.

    Args:
        reading: Current weather reading
        source: Value of the 'location' label

    Returns:
        Sensors in exposition order: direction, speed, gust, temperature,
        humidity, pressure
    """
    return [
        Sensor(
            name=name,
            description=description,
            type=GAUGE,
            source=source,
            value=getattr(reading, attribute),
        )
        for name, description, attribute in SENSOR_DEFINITIONS
    ]


def format_value(value: Optional[Number]) -> str:
    """
    Render a sample value the way the exposition format expects.

    A missing reading is rendered as NaN so the sample line is still valid.
    """
    if value is None:
        return "NaN"

    if isinstance(value, bool):
        return "1" if value else "0"

    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "+Inf" if value > 0 else "-Inf"
        if value.is_integer():
            return str(int(value))
        return repr(value)

    return str(value)


def format_sensor(sensor: Sensor) -> str:
    """Render one sensor as a HELP line, a TYPE line and a sample line."""
    return (
        f"# HELP {sensor.name} {sensor.description}\n"
        f"# TYPE {sensor.name} {sensor.type}\n"
        f'{sensor.name}{{location="{sensor.source}"}} {format_value(sensor.value)}\n'
    )


def format_open_metrics(reading: WeatherReading, source: str = DEFAULT_SOURCE) -> str:
    """
    Format a reading as Prometheus text exposition.

    Wind direction is reported in raw degrees here.

    Args:
        reading: Current weather reading
        source: Value of the 'location' label

    Returns:
        Six gauge blocks, newline terminated
    """
    return "".join(format_sensor(sensor) for sensor in build_sensors(reading, source))


def format_json_metrics(reading: WeatherReading) -> Dict[str, Union[Number, str, None]]:
    """
    Format a reading as a flat mapping for the JSON endpoint.

    Unlike the text exposition, wind direction is reported as a compass point.
    Missing readings are reported as None.

    Args:
        reading: Current weather reading

    Returns:
        Dictionary with the six named readings
    """
    direction = None
    if reading.wind_direction is not None:
        direction = deg_to_compass(reading.wind_direction)

    return {
        "air_temperature": reading.temperature,
        "air_relative_humidity": reading.humidity,
        "air_pressure": reading.pressure,
        "wind_direction": direction,
        "wind_speed": reading.wind_speed,
        "wind_gust": reading.wind_gust,
    }
