"""
Configuration for city generation and the API.
"""

from .city_options import CityOptions
from .config import Settings, settings

__all__ = ['CityOptions', 'Settings', 'settings']
