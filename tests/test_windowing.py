# tests/test_windowing.py

"""
Tests for the overlapping bin layout in olastretch.core.timescale.windowing.
"""

import pytest
import numpy as np
from numpy.testing import assert_array_equal

from olastretch.core.timescale import build_bins, number_of_bins, unbin

# --- Test Fixtures ---

@pytest.fixture
def ramp_signal():
    """Strictly increasing signal so every sample value is unique."""
    return np.arange(1, 21, dtype=np.float64)

# --- Test Cases ---

def test_build_bins_small_example():
    bins = build_bins(np.arange(1.0, 7.0), 4)
    expected = np.array([
        [1., 2., 3., 4.],
        [3., 4., 5., 6.],
        [5., 6., 0., 0.],
    ])
    assert bins.dtype == np.float64
    assert_array_equal(bins, expected)


def test_build_bins_shape(ramp_signal):
    """One row per half-window hop, rounded up."""
    assert build_bins(ramp_signal, 8).shape == (5, 8)   # 20 / 4
    assert build_bins(ramp_signal, 6).shape == (7, 6)   # ceil(20 / 3)
    assert number_of_bins(20, 6) == 7
    assert number_of_bins(8192, 4096) == 4


def test_every_sample_in_one_current_and_one_overlap_slot(ramp_signal):
    window_length = 6
    half = window_length // 2
    bins = build_bins(ramp_signal, window_length)

    for i, value in enumerate(ramp_signal):
        current = np.argwhere(bins[:, :half] == value)
        overlap = np.argwhere(bins[:, half:] == value)
        assert current.tolist() == [[i // half, i % half]]
        if i // half == 0:
            assert overlap.size == 0
        else:
            assert overlap.tolist() == [[i // half - 1, i % half]]


def test_right_half_mirrors_next_left_half(ramp_signal):
    bins = build_bins(ramp_signal, 8)
    assert_array_equal(bins[:-1, 4:], bins[1:, :4])


def test_partial_final_bin_is_zero_padded():
    y = np.ones(7)
    bins = build_bins(y, 4)  # H = 2 -> 4 bins, last holds one real sample
    assert bins.shape == (4, 4)
    assert_array_equal(bins[-1], [1.0, 0.0, 0.0, 0.0])
    assert_array_equal(bins[-2], [1.0, 1.0, 1.0, 0.0])


def test_build_bins_does_not_alias_input(ramp_signal):
    original = ramp_signal.copy()
    bins = build_bins(ramp_signal, 4)
    bins[:] = -1.0
    assert_array_equal(ramp_signal, original)


def test_unbin_recovers_input(ramp_signal):
    for window_length in (2, 4, 6, 8, 20):
        bins = build_bins(ramp_signal, window_length)
        assert_array_equal(unbin(bins, len(ramp_signal)), ramp_signal)


def test_unbin_invalid_length(ramp_signal):
    bins = build_bins(ramp_signal, 4)
    with pytest.raises(ValueError):
        unbin(bins, bins.shape[0] * 2 + 1)
    with pytest.raises(ValueError):
        unbin(bins[0], 2)


@pytest.mark.parametrize("window_length", [0, 1, 3, 7, -4, 4.0, True])
def test_build_bins_rejects_invalid_window_length(ramp_signal, window_length):
    with pytest.raises(ValueError):
        build_bins(ramp_signal, window_length)


def test_build_bins_rejects_bad_input():
    with pytest.raises(ValueError, match="1D"):
        build_bins(np.zeros((2, 8)), 4)
    with pytest.raises(ValueError, match="at least one sample"):
        build_bins(np.array([]), 4)
