# olastretch/core/timescale/blending.py

"""
Scale-and-blend synthesizer for the overlap-add time scaler.

Walks the output positions with a *scaled* stride ``H'`` while the bins were
built with the input stride ``H``. Output position ``p`` reads bin
``p // H'`` at offset ``p % H'``; because each bin carries the next bin's
samples in its right half, offsets up to ``L - 1`` are valid content.

Near the start of every segment (the first ``R`` output samples after a
segment boundary) the tail of the outgoing bin and the head of the incoming
bin are linearly crossfaded. The final bin is never blended.
"""

import logging

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def ramp_mask(
    output_length: int,
    ramp_length: int,
    scaled_half_window: int,
    n_bins: int
) -> NDArray[np.bool_]:
    """
    Marks output positions that are blended rather than copied.

    A position ``p`` is in a ramp when ``p > R`` and a segment boundary lies
    within the ``R`` samples ending at ``p``, i.e.
    ``(p - R) // H' != p // H'``. Positions inside the final bin are excluded.
    ``p == R`` is never a ramp position.
    """
    positions = np.arange(output_length)
    segment = positions // scaled_half_window
    crosses_boundary = (positions - ramp_length) // scaled_half_window != segment
    is_last_bin = segment + 1 == n_bins
    return (positions > ramp_length) & crosses_boundary & ~is_last_bin


def ramp_counter(
    mask: NDArray[np.bool_],
    scaled_half_window: int
) -> NDArray[np.int64]:
    """
    Position of each output sample within its crossfade.

    The counter starts at 0 on the first ramp position of a run and restarts
    whenever a non-ramp position or a new segment is reached. Computed
    directly from ``p`` so no loop-carried state is needed.
    """
    positions = np.arange(mask.size)
    previous = np.concatenate(([False], mask[:-1]))
    segment_start = positions - positions % scaled_half_window
    run_start = np.where(mask & ~previous, positions, 0)
    run_start = np.maximum.accumulate(run_start) if run_start.size else run_start
    counter = positions - np.maximum(run_start, segment_start)
    return np.where(mask, counter, 0).astype(np.int64)


def blend_bins(
    bins: NDArray[np.float64],
    output_length: int,
    ramp_length: int,
    scaled_half_window: int
) -> NDArray[np.float64]:
    """
    Synthesizes ``output_length`` samples from a bin matrix.

    Args:
        bins: Matrix from :func:`olastretch.core.timescale.windowing.build_bins`.
        output_length: Target length M of the output.
        ramp_length: Crossfade length R in samples.
        scaled_half_window: Output-domain stride H' per bin (must be positive).

    Returns:
        Output time series (float64) of length ``output_length``.

    Raises:
        ValueError: If the stride is not positive or the requested geometry
                    would read outside the bin matrix.
    """
    if scaled_half_window <= 0:
        raise ValueError("scaled_half_window must be positive.")
    if output_length < 0 or ramp_length < 0:
        raise ValueError("output_length and ramp_length must be non-negative.")

    n_bins, window_length = bins.shape
    if output_length and (output_length - 1) // scaled_half_window >= n_bins:
        raise ValueError(
            f"output_length {output_length} needs more than the {n_bins} available bins "
            f"at a stride of {scaled_half_window}."
        )
    if min(scaled_half_window, output_length) > window_length:
        raise ValueError(f"Stride {scaled_half_window} exceeds the window length {window_length}.")

    positions = np.arange(output_length)
    current_bin = positions // scaled_half_window
    offset = positions % scaled_half_window

    # Verbatim copy everywhere; ramp positions are overwritten below
    output = bins[current_bin, offset].astype(np.float64, copy=True)

    mask = ramp_mask(output_length, ramp_length, scaled_half_window, n_bins)
    if not mask.any():
        logger.debug("No ramp positions; output is a straight copy of bin content.")
        return output

    if offset[mask].max() + scaled_half_window >= window_length:
        raise ValueError(
            f"Ramp of {ramp_length} samples at stride {scaled_half_window} reads past "
            f"the window length {window_length}."
        )

    j = ramp_counter(mask, scaled_half_window)[mask]
    new_weight = j / ramp_length
    old_weight = 1.0 - new_weight
    old_sample = bins[current_bin[mask] - 1, offset[mask] + scaled_half_window]
    new_sample = bins[current_bin[mask], offset[mask]]
    output[mask] = old_sample * old_weight + new_sample * new_weight

    logger.debug(f"Blended {int(mask.sum())} of {output_length} output samples.")
    return output
