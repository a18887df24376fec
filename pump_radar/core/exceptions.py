"""
Exceptions for Pump Radar.

PumpRadarError (base)
├── ConfigurationError
├── UpstreamError
│   ├── UpstreamUnavailable
│   └── UpstreamRateLimited
└── SchemaViolation
"""
from typing import Optional


class PumpRadarError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(PumpRadarError):
    """Unknown strategy name or otherwise unusable settings."""


class UpstreamError(PumpRadarError):
    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class UpstreamUnavailable(UpstreamError):
    """Fetch raised, timed out, or the body was not JSON."""


class UpstreamRateLimited(UpstreamError):
    """Market source answered with HTTP 429."""


class SchemaViolation(PumpRadarError):
    """
    Assembled dashboard payload failed validation.
    `path` is the dotted location of the first offending field, e.g. tokens.3.tradePlan
    """

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
