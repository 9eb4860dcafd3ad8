"""
Utility functions for the OpenWeather exporter.
"""
import logging
from pathlib import Path
from typing import Any, Iterable, Optional

REDACTED = "***REDACTED***"


def setup_logging(
    log_level: str = "INFO", log_file: Optional[str] = None, log_format: str = None
) -> None:
    """
    Setup logging configuration with a console handler and optional file handler.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file, or None to log to the console only
        log_format: Log message format string
    """
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    level = getattr(logging, log_level.upper(), logging.INFO)
    formatter = logging.Formatter(log_format)

    # Configure root logger
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)


def sanitize_for_logging(data: Any, secrets: Iterable[str] = ()) -> Any:
    """
    Sanitize data for logging by redacting sensitive information.

    Args:
        data: Data to sanitize (str, dict, etc.)
        secrets: Literal values to scrub from strings, e.g. the API key

    Returns:
        Sanitized data
    """
    if isinstance(data, dict):
        sanitized = {}
        sensitive_keys = {"api_key", "appid", "password", "secret", "token"}

        for key, value in data.items():
            if str(key).lower() in sensitive_keys:
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(value, secrets)

        return sanitized
    elif isinstance(data, str):
        for secret in secrets:
            if secret:
                data = data.replace(secret, REDACTED)
        return data
    else:
        return data
