# olastretch/core/__init__.py

"""
Core Processing Package for olastretch.

Contains modules for:
- Overlap-add time-scale modification (window builder, blender, session)
- Audio file I/O used by the CLI
"""

from . import timescale
from . import audio

__all__ = [
    "timescale",
    "audio",
]
