# olastretch/config/__init__.py

"""
Configuration management for olastretch.

This package handles loading configuration from files (TOML),
environment variables, and internal defaults, providing a unified
configuration object.
"""

from .models import OlaStretchConfig
from .loaders import load_configuration

__all__ = [
    "OlaStretchConfig",
    "load_configuration",
]
