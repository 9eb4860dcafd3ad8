"""
Exception hierarchy for the OpenWeather exporter.
"""


class ExporterError(Exception):
    """Base exception for errors raised while serving a scrape."""
    pass


class UpstreamError(ExporterError):
    """Raised when the OpenWeather API call cannot complete or fails."""
    pass


class AuthenticationError(UpstreamError):
    """Raised when the OpenWeather API rejects the API key."""
    pass


class LocationNotFoundError(UpstreamError):
    """Raised when the OpenWeather API does not know the location id."""
    pass


class RateLimitError(UpstreamError):
    """Raised when the OpenWeather API rate limit is exceeded."""
    pass


class MalformedPayloadError(ExporterError):
    """Raised when the API response is missing the expected structure."""
    pass


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass
