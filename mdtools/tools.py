"""Savitzky-Golay smoothing of evenly sampled data."""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np


def factorial(n: int) -> int:
    """Return n!, taking every n <= 1 as 1."""
    return 1 if n <= 1 else math.prod(range(2, n + 1))


def savitzky_golay(
    y: Sequence[float],
    window_size: int,
    order: int,
    deriv: int = 0,
    rate: float = 1.0,
) -> np.ndarray:
    """Smooth y (or take a derivative of it) with a Savitzky-Golay filter.

    The ends are padded by reflecting the data about the first and last
    values, so the result has the same length as the input.
    """
    if window_size <= 0 or window_size % 2 == 0:
        raise ValueError("window_size must be a positive odd number")
    if order < 0:
        raise ValueError("order must be non-negative")
    if window_size < order + 2:
        raise ValueError("window_size is too small for the polynomial order")
    if deriv < 0 or deriv > order:
        raise ValueError("deriv must be between 0 and order")
    data = np.asarray(y, dtype=float)
    if data.size < window_size:
        raise ValueError("Input data is too short for the specified window size")

    half = (window_size - 1) // 2
    offsets = np.arange(-half, half + 1, dtype=float)
    vandermonde = offsets[:, np.newaxis] ** np.arange(order + 1)
    coeffs = np.linalg.pinv(vandermonde)[deriv] * (rate**deriv * factorial(deriv))

    first, last = data[0], data[-1]
    head = first - np.abs(data[half:0:-1] - first)
    tail = last + np.abs(data[-2:-half - 2:-1] - last) if half else np.empty(0)
    padded = np.concatenate([head, data, tail])

    return np.convolve(coeffs, padded, mode="valid")


def smooth_data(data: Sequence[float], window_size: int, order: int) -> np.ndarray:
    """Smooth data with a Savitzky-Golay filter, without differentiation."""
    return savitzky_golay(data, window_size, order, 0, 1.0)