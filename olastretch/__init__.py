# olastretch/__init__.py

"""
olastretch: constant-pitch time-scale modification by overlap-add.
"""

from olastretch.version import __version__

__all__ = ["__version__"]
