import numpy as np
import pytest

from mdtools.pbc import minimum_image_orthorhombic, minimum_image_triclinic

ORTHO = np.diag([10.0, 12.0, 14.0])
TRICLINIC = np.array(
    [
        [10.0, 2.0, 1.5],
        [0.0, 9.0, 1.0],
        [0.0, 0.0, 8.0],
    ]
)

DELTAS = [
    [0.0, 0.0, 0.0],
    [6.0, -7.0, 8.0],
    [-23.4, 31.2, 0.5],
    [4.9, 5.9, -6.9],
    [100.0, -100.0, 55.5],
]


@pytest.mark.parametrize("delta", DELTAS)
def test_orthorhombic_within_half_box(delta):
    wrapped = minimum_image_orthorhombic(delta, ORTHO)
    lengths = np.diagonal(ORTHO)
    excess = np.abs(np.asarray(wrapped)) - lengths / 2
    assert len(excess) == 3
    assert float(np.max(excess)) <= 1e-12


@pytest.mark.parametrize("delta", DELTAS)
def test_orthorhombic_shift_is_lattice_multiple(delta):
    wrapped = minimum_image_orthorhombic(delta, ORTHO)
    shifts = (np.asarray(delta) - wrapped) / np.diagonal(ORTHO)
    assert np.allclose(shifts, np.round(shifts))


@pytest.mark.parametrize("delta", DELTAS)
def test_triclinic_matches_orthorhombic_for_diagonal_box(delta):
    inverse = np.linalg.inv(ORTHO)
    assert np.allclose(
        minimum_image_triclinic(delta, ORTHO, inverse),
        minimum_image_orthorhombic(delta, ORTHO),
    )


@pytest.mark.parametrize("delta", DELTAS)
def test_triclinic_fractional_within_half(delta):
    inverse = np.linalg.inv(TRICLINIC)
    wrapped = minimum_image_triclinic(delta, TRICLINIC, inverse)
    fractional = inverse @ np.asarray(wrapped)
    assert len(fractional) == 3
    assert float(np.max(np.abs(fractional))) <= 0.5 + 1e-12


@pytest.mark.parametrize("shift", [[1, 0, 0], [0, -2, 3], [4, 1, -1]])
def test_triclinic_invariant_under_lattice_translation(shift):
    inverse = np.linalg.inv(TRICLINIC)
    delta = np.array([1.2, -0.7, 2.1])
    moved = delta + TRICLINIC @ np.array(shift, dtype=float)
    assert np.allclose(
        minimum_image_triclinic(moved, TRICLINIC, inverse),
        minimum_image_triclinic(delta, TRICLINIC, inverse),
    )


def test_batch_matches_single_vectors():
    inverse = np.linalg.inv(TRICLINIC)
    batch = minimum_image_triclinic(np.array(DELTAS), TRICLINIC, inverse)
    assert batch.shape == (len(DELTAS), 3)
    for row, delta in zip(batch, DELTAS):
        assert np.allclose(row, minimum_image_triclinic(delta, TRICLINIC, inverse))


def test_small_vector_unchanged():
    delta = [1.0, -2.0, 3.0]
    assert np.allclose(minimum_image_orthorhombic(delta, ORTHO), delta)
    assert np.allclose(
        minimum_image_triclinic(delta, ORTHO, np.linalg.inv(ORTHO)), delta
    )