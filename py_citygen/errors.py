"""Exceptions raised by city generation."""


class CityGenError(Exception):
    """Base class for city generation errors."""


class CityConfigurationError(CityGenError, ValueError):
    """Raised when generation options are invalid. Nothing is generated."""
