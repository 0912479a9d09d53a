# olastretch/core/timescale/session.py

"""
Processing session for constant-pitch time-scale modification.

A :class:`TimeScaleSession` owns a private copy of the input samples and the
scaling configuration. Each call to :meth:`TimeScaleSession.synthesize`
rebuilds the bin matrix and blends a fresh output, so sessions never share
mutable state and repeated calls are bit-for-bit identical.
"""

import logging
import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .windowing import build_bins, number_of_bins, unbin
from .blending import blend_bins

logger = logging.getLogger(__name__)

# --- Constants ---
DEFAULT_WINDOW_LENGTH = 4096
DEFAULT_RAMP_PROPORTION = 0.25
DEFAULT_SCALE_FACTOR = 1.0
# Empirically safe ceiling; above it the default ramp reads past the window
MAX_SCALE_FACTOR = 1.5


# --- Validation ---

def synthesis_stride(window_length: int, scale_factor: float) -> int:
    """Output-domain stride H' = ceil(L * f / 2)."""
    return math.ceil(window_length * scale_factor / 2)


def validate_scale_factor(scale_factor: float) -> float:
    """
    Checks a scale factor against the supported range ``0 < f < 1.5``.

    Returns:
        The scale factor as a float.

    Raises:
        ValueError: If the factor is not a finite number in range.
    """
    try:
        factor = float(scale_factor)
    except (TypeError, ValueError):
        raise ValueError(f"scale_factor must be a number, got {scale_factor!r}.") from None
    if not math.isfinite(factor):
        raise ValueError(f"scale_factor must be finite, got {scale_factor}.")
    if factor <= 0:
        raise ValueError("scale_factor must be positive.")
    if factor >= MAX_SCALE_FACTOR:
        raise ValueError(f"scale_factor must be less than {MAX_SCALE_FACTOR}, got {factor}.")
    return factor


def validate_geometry(window_length: int, ramp_length: int, scale_factor: float) -> None:
    """
    Ensures the crossfade never reads past the end of a bin.

    Ramp positions use offsets below ``min(R, H')`` and read the previous bin
    at ``offset + H'``, which must stay inside the ``L`` columns.
    """
    stride = synthesis_stride(window_length, scale_factor)
    if min(ramp_length, stride) + stride > window_length:
        raise ValueError(
            f"Ramp of {ramp_length} samples with scale_factor={scale_factor} needs "
            f"{min(ramp_length, stride) + stride} columns but window_length is {window_length}; "
            f"lower the ramp proportion or the scale factor."
        )


def validate_configuration(
    input_samples: Optional[ArrayLike],
    window_length: int,
    ramp_proportion: float,
    scale_factor: float
) -> NDArray[np.float64]:
    """
    Validates a full session configuration before any buffer work.

    Returns:
        A private float64 copy of ``input_samples``.

    Raises:
        ValueError: If the input is missing, empty or not 1D, the window
                    length is not an even integer in ``[2, len(input)]``,
                    the ramp proportion is outside ``[0, 1]``, the scale
                    factor is out of range, or the ramp/stride geometry
                    does not fit inside a window.
    """
    if input_samples is None:
        raise ValueError("input_samples must be provided.")
    samples = np.array(input_samples, dtype=np.float64, copy=True)
    if samples.ndim != 1:
        raise ValueError("Input audio data must be a 1D array.")
    if samples.size == 0:
        raise ValueError("input_samples must contain at least one sample.")

    if isinstance(window_length, bool) or not isinstance(window_length, (int, np.integer)):
        raise ValueError(f"window_length must be an integer, got {type(window_length).__name__}.")
    if window_length < 2 or window_length % 2 != 0:
        raise ValueError(f"window_length must be an even integer >= 2, got {window_length}.")
    if window_length > samples.size:
        raise ValueError(
            f"window_length ({window_length}) must not exceed the input length ({samples.size})."
        )

    try:
        ramp_proportion = float(ramp_proportion)
    except (TypeError, ValueError):
        raise ValueError(f"ramp_proportion must be a number, got {ramp_proportion!r}.") from None
    if not 0.0 <= ramp_proportion <= 1.0:
        raise ValueError(f"ramp_proportion must be between 0.0 and 1.0, got {ramp_proportion}.")

    scale_factor = validate_scale_factor(scale_factor)
    validate_geometry(int(window_length), int(window_length * ramp_proportion), scale_factor)
    return samples


# --- Session ---

class TimeScaleSession:
    """
    Changes the duration of a mono signal without changing its pitch.

    Example:
        >>> y = np.sin(np.linspace(0, 200 * np.pi, 8192))
        >>> session = TimeScaleSession(y, window_length=4096, ramp_proportion=0.25, scale_factor=1.2)
        >>> session.output_length, session.number_of_bins
        (9831, 4)
        >>> len(session.synthesize())
        9831
    """

    def __init__(
        self,
        input_samples: ArrayLike,
        window_length: int = DEFAULT_WINDOW_LENGTH,
        ramp_proportion: float = DEFAULT_RAMP_PROPORTION,
        scale_factor: float = DEFAULT_SCALE_FACTOR
    ):
        self._samples = validate_configuration(input_samples, window_length, ramp_proportion, scale_factor)
        self._samples.flags.writeable = False
        self._window_length = int(window_length)
        self._ramp_proportion = float(ramp_proportion)
        self._ramp_length = int(self._window_length * self._ramp_proportion)
        self._number_of_bins = number_of_bins(self._samples.size, self._window_length)
        self._scale_factor = DEFAULT_SCALE_FACTOR
        self._output_length = 0
        self.set_scale_factor(scale_factor)

        logger.debug(
            f"Configured session: n_samples={self.input_length}, window_length={self._window_length}, "
            f"ramp_length={self._ramp_length}, n_bins={self._number_of_bins}"
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(n_samples={self.input_length}, window_length={self._window_length}, "
            f"ramp_proportion={self._ramp_proportion}, scale_factor={self._scale_factor})"
        )

    # --- Configuration ---

    @property
    def input_samples(self) -> NDArray[np.float64]:
        """Copy of the samples the session was configured with."""
        return self._samples.copy()

    @property
    def input_length(self) -> int:
        return int(self._samples.size)

    @property
    def window_length(self) -> int:
        return self._window_length

    @property
    def half_window(self) -> int:
        return self._window_length // 2

    @property
    def ramp_proportion(self) -> float:
        return self._ramp_proportion

    @property
    def ramp_length(self) -> int:
        return self._ramp_length

    @property
    def number_of_bins(self) -> int:
        return self._number_of_bins

    @property
    def scale_factor(self) -> float:
        return self._scale_factor

    @property
    def output_length(self) -> int:
        return self._output_length

    @property
    def scaled_half_window(self) -> int:
        return synthesis_stride(self._window_length, self._scale_factor)

    def set_scale_factor(self, scale_factor: float) -> None:
        """
        Sets the duration ratio and recomputes the output length.

        The session is left unchanged when the factor is rejected.

        Raises:
            ValueError: If the factor is outside ``0 < f < 1.5`` or does not
                        fit the ramp geometry of this session.
        """
        factor = validate_scale_factor(scale_factor)
        validate_geometry(self._window_length, self._ramp_length, factor)
        self._scale_factor = factor
        self._output_length = math.ceil(self._samples.size * factor)

        if self._ramp_length >= self.scaled_half_window:
            logger.warning(
                f"Ramp length {self._ramp_length} is not shorter than the output stride "
                f"{self.scaled_half_window}; crossfades will span whole segments."
            )
        logger.debug(f"Scale factor set to {factor}; output_length={self._output_length}")

    # --- Processing ---

    def synthesize(self) -> NDArray[np.float64]:
        """
        Builds the bins and blends them into the time-scaled output.

        Returns:
            A new float64 array of length :attr:`output_length`, owned by the caller.
        """
        logger.info(
            f"Time scaling {self.input_length} samples by {self._scale_factor} "
            f"(window_length={self._window_length}, ramp_length={self._ramp_length})"
        )
        bins = build_bins(self._samples, self._window_length)
        return blend_bins(bins, self._output_length, self._ramp_length, self.scaled_half_window)

    def unmodified_audio(self) -> NDArray[np.float64]:
        """Input signal read back out of a freshly built bin matrix."""
        bins = build_bins(self._samples, self._window_length)
        return unbin(bins, self.input_length)


def time_scale(
    y: ArrayLike,
    scale_factor: float,
    window_length: int = DEFAULT_WINDOW_LENGTH,
    ramp_proportion: float = DEFAULT_RAMP_PROPORTION
) -> NDArray[np.float64]:
    """
    Changes the duration of a signal without changing pitch using overlap-add.

    Args:
        y: Input audio time series (1D).
        scale_factor: Ratio of output to input duration (``0 < f < 1.5``).
                      ``f > 1.0`` lengthens (slows down) the audio,
                      ``f < 1.0`` shortens (speeds up) it.
        window_length: Analysis window length in samples (even, <= len(y)).
        ramp_proportion: Fraction of the window used for crossfades (0.0 to 1.0).

    Returns:
        Time-scaled audio time series (float64) of length ``ceil(len(y) * f)``.

    Raises:
        ValueError: If any parameter is invalid.
    """
    session = TimeScaleSession(y, window_length, ramp_proportion, scale_factor)
    return session.synthesize()
