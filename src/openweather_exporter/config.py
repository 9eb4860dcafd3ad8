"""
Configuration management for the OpenWeather exporter.
Supports loading from environment variables and YAML files.
"""
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError


API_ENDPOINT = "https://api.openweathermap.org/data/2.5/weather"
API_KEY_PLACEHOLDER = "api_key_required"
LOCATION_ID_PLACEHOLDER = "location_id_required"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 9300
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass(frozen=True)
class ExporterConfig:
    """
    Exporter settings, built once at startup and passed to whoever needs them.

    Credentials are not checked here: placeholders make the first scrape
    fail upstream instead of the process failing at startup.
    """

    api_key: str = API_KEY_PLACEHOLDER
    location_id: str = LOCATION_ID_PLACEHOLDER
    units: str = "metric"
    endpoint: str = API_ENDPOINT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    source_label: str = "OpenWeather"
    timeout: Optional[float] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_format: str = DEFAULT_LOG_FORMAT

    def __post_init__(self):
        self.validate()

    @classmethod
    def load_from_env(cls) -> "ExporterConfig":
        """
        Load configuration from environment variables.

        Example:
            OPEN_WEATHER_API_KEY=abc123
            OPEN_WEATHER_LOCATION_ID=2643743
            OPENWEATHER_EXPORTER_LOGGING_LEVEL=DEBUG

        Returns:
            ExporterConfig instance
        """
        return cls(**_settings_from_env())

    @classmethod
    def load_from_file(cls, path: str = "config.yaml") -> "ExporterConfig":
        """
        Load configuration from a YAML file.

        Settings absent from the file fall back to the environment, then to
        the defaults.

        Args:
            path: Path to YAML configuration file

        Returns:
            ExporterConfig instance

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        config_path = Path(path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            with open(config_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse YAML configuration: {e}")
        except IOError as e:
            raise ConfigError(f"Failed to read configuration file: {e}")

        if config_dict is None:
            raise ConfigError(f"Configuration file is empty: {path}")
        if not isinstance(config_dict, dict):
            raise ConfigError(f"Configuration file must contain a mapping: {path}")

        settings = _settings_from_env()
        settings.update(_settings_from_dict(config_dict))
        return cls(**settings)

    def validate(self) -> None:
        """
        Validate the values that would otherwise break startup.

        Raises:
            ConfigError: If the port, timeout or log level is invalid
        """
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ConfigError(f"port must be an integer, got {self.port!r}")
        if not 1 <= self.port <= 65535:
            raise ConfigError(f"port must be between 1 and 65535, got {self.port}")

        if self.timeout is not None:
            if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)):
                raise ConfigError(f"timeout must be a number of seconds, got {self.timeout!r}")
            if self.timeout <= 0:
                raise ConfigError(f"timeout must be positive, got {self.timeout}")

        if str(self.log_level).upper() not in VALID_LOG_LEVELS:
            raise ConfigError(
                f"Invalid log level: {self.log_level}. Must be one of {VALID_LOG_LEVELS}"
            )

    def query_params(self) -> Dict[str, str]:
        """Query string sent with every OpenWeather request."""
        return {
            "id": self.location_id,
            "units": self.units,
            "appid": self.api_key,
        }

    def to_dict(self, sanitize: bool = True) -> Dict[str, Any]:
        """
        Export configuration as dictionary.

        Args:
            sanitize: If True, redact the API key

        Returns:
            Configuration dictionary
        """
        config = asdict(self)
        if sanitize:
            config["api_key"] = "***REDACTED***"
        return config


def _settings_from_env() -> Dict[str, Any]:
    settings: Dict[str, Any] = {
        "api_key": os.getenv("OPEN_WEATHER_API_KEY") or API_KEY_PLACEHOLDER,
        "location_id": os.getenv("OPEN_WEATHER_LOCATION_ID") or LOCATION_ID_PLACEHOLDER,
    }

    if log_level := os.getenv("OPENWEATHER_EXPORTER_LOGGING_LEVEL"):
        settings["log_level"] = log_level
    if log_file := os.getenv("OPENWEATHER_EXPORTER_LOGGING_FILE"):
        settings["log_file"] = log_file
    if log_format := os.getenv("OPENWEATHER_EXPORTER_LOGGING_FORMAT"):
        settings["log_format"] = log_format

    return settings


def _settings_from_dict(config_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten the YAML sections into ExporterConfig keyword arguments."""
    settings: Dict[str, Any] = {}

    openweather = _section(config_dict, "openweather")
    server = _section(config_dict, "server")
    logging_section = _section(config_dict, "logging")

    if openweather.get("api_key"):
        settings["api_key"] = str(openweather["api_key"])
    if openweather.get("location_id"):
        settings["location_id"] = str(openweather["location_id"])
    if "timeout" in openweather:
        settings["timeout"] = openweather["timeout"]

    if "host" in server:
        settings["host"] = server["host"]
    if "port" in server:
        settings["port"] = server["port"]
    if "source_label" in server:
        settings["source_label"] = server["source_label"]

    if "level" in logging_section:
        settings["log_level"] = logging_section["level"]
    if "file" in logging_section:
        settings["log_file"] = logging_section["file"]
    if "format" in logging_section:
        settings["log_format"] = logging_section["format"]

    return settings


def _section(config_dict: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a YAML section, treating a missing or empty one as {}."""
    section = config_dict.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' section must be a mapping")
    return section
