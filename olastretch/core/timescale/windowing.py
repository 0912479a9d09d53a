# olastretch/core/timescale/windowing.py

"""
Window builder for the overlap-add time scaler.

Redistributes a flat sample sequence into a matrix of 50%-overlapping
analysis windows ("bins"). Row ``k`` of the matrix holds two halves:

- columns ``[0, H)``: the "current" samples ``y[k*H : (k+1)*H]``
- columns ``[H, L)``: the samples of the *next* window's current half,
  ``y[(k+1)*H : (k+2)*H]``

so every sample lands in exactly one current slot and, when a preceding
bin exists, in exactly one overlap slot of that preceding bin. Keeping the
duplicate tail in each row lets the synthesizer crossfade between adjacent
bins without recomputing anything.
"""

import logging
import math

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def _check_window_length(window_length: int) -> int:
    if isinstance(window_length, bool) or not isinstance(window_length, (int, np.integer)):
        raise ValueError(f"window_length must be an integer, got {type(window_length).__name__}.")
    if window_length < 2:
        raise ValueError("window_length must be at least 2 samples.")
    if window_length % 2 != 0:
        raise ValueError(f"window_length must be even, got {window_length}.")
    return int(window_length)


def number_of_bins(n_samples: int, window_length: int) -> int:
    """Number of half-window hops needed to cover ``n_samples``."""
    half_window = _check_window_length(window_length) // 2
    return math.ceil(n_samples / half_window)


def build_bins(
    y: NDArray[np.float64],
    window_length: int
) -> NDArray[np.float64]:
    """
    Builds the overlapping bin matrix for a 1D signal.

    Args:
        y: Input audio time series (1D).
        window_length: Length L of each bin in samples (even, >= 2).

    Returns:
        Array of shape ``(ceil(len(y) / (L/2)), L)`` (float64). Cells with no
        source sample (the tail of the final bins) are zero.

    Raises:
        ValueError: If ``y`` is not a non-empty 1D array or ``window_length``
                    is not a positive even integer.

    Example:
        >>> build_bins(np.arange(1.0, 7.0), 4)
        array([[1., 2., 3., 4.],
               [3., 4., 5., 6.],
               [5., 6., 0., 0.]])
    """
    y = np.asarray(y, dtype=np.float64)
    if y.ndim != 1:
        raise ValueError("Input audio data must be a 1D array.")
    if y.size == 0:
        raise ValueError("Input audio data must contain at least one sample.")
    window_length = _check_window_length(window_length)

    half_window = window_length // 2
    n_bins = number_of_bins(y.size, window_length)
    logger.debug(f"Building bins: n_samples={y.size}, window_length={window_length}, n_bins={n_bins}")

    # Zero-pad to a whole number of half windows, then view as one row per hop
    padded = np.zeros(n_bins * half_window, dtype=np.float64)
    padded[:y.size] = y
    halves = padded.reshape(n_bins, half_window)

    bins = np.zeros((n_bins, window_length), dtype=np.float64)
    bins[:, :half_window] = halves
    # Right half of bin k mirrors the left half of bin k+1; the last bin has no successor
    bins[:-1, half_window:] = halves[1:]
    return bins


def unbin(
    bins: NDArray[np.float64],
    length: int
) -> NDArray[np.float64]:
    """
    Recovers the original signal from the current halves of a bin matrix.

    This is the inverse of :func:`build_bins` over the first ``length``
    samples and is used to audit the bin layout ("unmodified" playback).

    Args:
        bins: Matrix produced by :func:`build_bins`.
        length: Number of samples to recover.

    Returns:
        1D float64 array of ``length`` samples.
    """
    if bins.ndim != 2:
        raise ValueError("bins must be a 2D array.")
    half_window = bins.shape[1] // 2
    capacity = bins.shape[0] * half_window
    if not 0 <= length <= capacity:
        raise ValueError(f"length must be between 0 and {capacity}, got {length}.")
    return bins[:, :half_window].reshape(-1)[:length].astype(np.float64, copy=True)
