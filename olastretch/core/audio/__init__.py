# olastretch/core/audio/__init__.py

"""
Audio file input/output for the command-line front end.
"""

from . import io

__all__ = [
    "io",
]
