# olastretch/core/timescale/__init__.py

"""
Constant-pitch time-scale modification.

Overlap-add in the time domain: the input is cut into 50%-overlapping bins,
and the bins are re-laid at a scaled stride with linear crossfades at the
segment boundaries. Duration changes, local waveform (and so pitch) does not.
"""

from .windowing import build_bins, number_of_bins, unbin
from .blending import blend_bins, ramp_counter, ramp_mask
from .session import (
    DEFAULT_RAMP_PROPORTION,
    DEFAULT_SCALE_FACTOR,
    DEFAULT_WINDOW_LENGTH,
    MAX_SCALE_FACTOR,
    TimeScaleSession,
    synthesis_stride,
    time_scale,
    validate_configuration,
    validate_geometry,
    validate_scale_factor,
)

__all__ = [
    # Window builder
    "build_bins",
    "number_of_bins",
    "unbin",
    # Synthesizer
    "blend_bins",
    "ramp_counter",
    "ramp_mask",
    # Session
    "TimeScaleSession",
    "time_scale",
    "synthesis_stride",
    "validate_configuration",
    "validate_geometry",
    "validate_scale_factor",
    "DEFAULT_WINDOW_LENGTH",
    "DEFAULT_RAMP_PROPORTION",
    "DEFAULT_SCALE_FACTOR",
    "MAX_SCALE_FACTOR",
]
