"""Minimum image convention for orthorhombic and triclinic periodic boxes."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


def minimum_image_orthorhombic(delta: ArrayLike, box_matrix: ArrayLike) -> np.ndarray:
    """Wrap distance vectors (shape (3,) or (N, 3)) into a rectangular box."""
    d = np.asarray(delta, dtype=float)
    lengths = np.diagonal(np.asarray(box_matrix, dtype=float))
    return d - np.rint(d / lengths) * lengths


def minimum_image_triclinic(
    delta: ArrayLike, box_matrix: ArrayLike, box_inverse: ArrayLike
) -> np.ndarray:
    """Wrap distance vectors (shape (3,) or (N, 3)) into a general triclinic box."""
    d = np.asarray(delta, dtype=float)
    matrix = np.asarray(box_matrix, dtype=float)
    inverse = np.asarray(box_inverse, dtype=float)
    shifts = np.rint(d @ inverse.T)
    return d - shifts @ matrix.T