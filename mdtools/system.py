"""Atomic system read from XYZ trajectories and periodic box descriptions."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from pathlib import Path

import numpy as np

from mdtools.settings import Settings

logger = logging.getLogger(__name__)

_BOX_FORMAT_MESSAGE = (
    "Box can either take 3 parameters (a, b, c) for orthorhombic box"
    " or 6 parameters (a, b, c, A, B, C) for triclinic box in a line."
)


class TrajectoryError(ValueError):
    """Raised when trajectory or box data cannot be read or used."""


def _leading_numbers(line: str) -> list[float]:
    values = []
    for token in line.split():
        try:
            values.append(float(token))
        except ValueError:
            break
    return values


def _box_from_numbers(values: list[float]) -> tuple[float, ...]:
    if len(values) == 3:
        return (*values, 90.0, 90.0, 90.0)
    if len(values) == 6:
        return tuple(values)
    raise TrajectoryError(_BOX_FORMAT_MESSAGE)


def parse_box_line(line: str) -> tuple[float, ...]:
    """Return (a, b, c, alpha, beta, gamma) from a line of 3 or 6 numbers."""
    return _box_from_numbers(_leading_numbers(line))


def box_matrix_from_params(params: Sequence[float]) -> np.ndarray:
    """Build the upper-triangular box matrix whose columns are the lattice vectors."""
    a, b, c, alpha, beta, gamma = (np.float64(p) for p in params)
    rad = np.float64(math.pi / 180)
    matrix = np.zeros((3, 3))
    with np.errstate(all="ignore"):
        matrix[0, 0] = a
        matrix[0, 1] = b * np.cos(gamma * rad)
        matrix[0, 2] = c * np.cos(beta * rad)
        matrix[1, 1] = b * np.sin(gamma * rad)
        matrix[1, 2] = (b * c * np.cos(alpha * rad) - matrix[0, 1] * matrix[0, 2]) / matrix[1, 1]
        matrix[2, 2] = np.sqrt(c * c - matrix[0, 2] ** 2 - matrix[1, 2] ** 2)
    return matrix


def box_volume(matrix: np.ndarray) -> float:
    """Signed volume (determinant) of a box matrix."""
    m = np.asarray(matrix, dtype=float)
    return float(np.dot(m[0], np.cross(m[1], m[2])))


def box_inverse(matrix: np.ndarray, volume: float) -> np.ndarray:
    """Inverse of a box matrix from its adjugate and known volume."""
    m = np.asarray(matrix, dtype=float)
    c0, c1, c2 = m[:, 0], m[:, 1], m[:, 2]
    return np.array([np.cross(c1, c2), np.cross(c2, c0), np.cross(c0, c1)]) / volume


class System:
    """Atoms, per-frame coordinates and periodic box of a trajectory."""

    def __init__(self) -> None:
        self.atoms: list[str] = []
        self.coords: np.ndarray | None = None
        self.boxes: np.ndarray | None = None
        self.fixed_volume = False
        self.box_matrix: np.ndarray | None = None
        self.box_inverse: np.ndarray | None = None
        self.box_volume = 0.0

    @property
    def nframes(self) -> int:
        return 0 if self.coords is None else self.coords.shape[0]

    @property
    def natoms(self) -> int:
        return 0 if self.coords is None else self.coords.shape[1]

    def read_xyz(self, path: str | Path) -> None:
        """Read atom names and coordinates of every frame of an XYZ file."""
        if self.coords is not None:
            raise TrajectoryError("Coordinates already in System instance.")
        if not str(path):
            raise TrajectoryError("Trajectory file is not specified, please include an xyz file.")
        try:
            lines = Path(path).read_text().splitlines()
        except OSError as exc:
            raise TrajectoryError(
                "Cannot open trajectory file, please check if it exists."
            ) from exc

        logger.info("Parsing trajectory file: %s", path)
        header = lines[0].split() if lines else []
        try:
            natoms = int(header[0])
        except (IndexError, ValueError) as exc:
            raise TrajectoryError("Cannot read the atom count on the first line.") from exc
        if natoms < 0:
            raise TrajectoryError("Atom count must be non-negative.")

        stride = natoms + 2
        nframes = len(lines) // stride
        coords = np.zeros((nframes, natoms, 3))
        atoms: list[str] = []

        for frame in range(nframes):
            start = frame * stride + 2
            for index, line in enumerate(lines[start:start + natoms]):
                tokens = line.split()
                try:
                    name = tokens[0]
                    coords[frame, index] = [float(t) for t in tokens[1:4]]
                except (IndexError, ValueError) as exc:
                    raise TrajectoryError(
                        f"Malformed atom line in frame {frame} at index {index}: {line!r}"
                    ) from exc
                if frame == 0:
                    atoms.append(name)
                elif name != atoms[index]:
                    logger.warning(
                        "Frame %d has different atom name at index %d: %s vs %s",
                        frame, index, name, atoms[index],
                    )

        self.atoms = atoms
        self.coords = coords
        logger.info("Trajectory file parsed successfully!")

    def read_box(self, settings: Settings) -> bool:
        """Read box data from the box file if set, otherwise from the trajectory.

        Returns whether box information was found.
        """
        if settings.box_file:
            try:
                logger.info("Attempting to read box from file: %s", settings.box_file)
                self.read_box_from_file(settings.box_file)
                logger.info("Successfully read box information from separate file.")
                return True
            except (TrajectoryError, OSError) as exc:
                logger.error("Failed to read box from file '%s': %s", settings.box_file, exc)
        try:
            logger.info("Attempting to read box from XYZ file: %s", settings.trajectory)
            self.read_box_from_xyz(settings.trajectory)
            logger.info("Successfully read box information from XYZ file.")
            return True
        except (TrajectoryError, OSError) as exc:
            logger.error("Failed to read box from XYZ file: %s", exc)
        logger.error(
            "No box information found. Please verify box information in trajectory or in box file"
        )
        return False

    def read_box_from_xyz(self, path: str | Path) -> None:
        """Read box parameters from the comment line of every trajectory frame."""
        if not str(path):
            raise TrajectoryError("Trajectory file is not specified, please include an xyz file.")
        try:
            lines = iter(Path(path).read_text().splitlines())
        except OSError as exc:
            raise TrajectoryError(
                "Cannot open trajectory file, please check if it exists."
            ) from exc

        box_data = []
        for _ in range(self.nframes):
            next(lines, "")
            box_data.append(parse_box_line(next(lines, "")))
            for _ in range(self.natoms):
                next(lines, "")
        self._store_boxes(box_data)

    def read_box_from_file(self, path: str | Path) -> None:
        """Read box parameters from a file with one box per line."""
        if not str(path):
            raise TrajectoryError("Box file is not specified, please include a box file.")
        try:
            lines = Path(path).read_text().splitlines()
        except OSError as exc:
            raise TrajectoryError("Cannot open box file, please check if it exists.") from exc

        box_data = []
        box_format: int | None = None
        for line in lines:
            if not line or line.startswith("#"):
                continue
            values = _leading_numbers(line)
            if box_format is None:
                box_format = len(values)
                box_data.append(_box_from_numbers(values))
                continue
            if len(values) != box_format:
                raise TrajectoryError("Box file format in consistent to the first line!")
            box_data.append(_box_from_numbers(values))
        self._store_boxes(box_data)

    def _store_boxes(self, box_data: list[tuple[float, ...]]) -> None:
        if not box_data:
            raise TrajectoryError("No valid box data found in file.")
        if self.coords is None:
            raise TrajectoryError("Box memory allocated before trajectory memory allocation.")
        fixed = len(box_data) == 1
        if not fixed and len(box_data) != self.nframes:
            raise TrajectoryError("Box entries not matching trajectory frame numbers")
        self.fixed_volume = fixed
        self.boxes = np.array(box_data, dtype=float)
        self.box_matrix = None
        self.box_inverse = None
        self.box_volume = 0.0

    def update_box(self, frame: int) -> None:
        """Set box matrix, volume and inverse for the given frame."""
        if self.boxes is None:
            raise TrajectoryError("Box information has not been read.")
        if self.fixed_volume:
            if frame != 0 and self.box_matrix is not None:
                return
            params = self.boxes[0]
        else:
            params = self.boxes[frame]

        matrix = box_matrix_from_params(params)
        volume = box_volume(matrix)
        if not volume > 0:
            raise TrajectoryError("PBC box volume should be positive!")
        self.box_matrix = matrix
        self.box_volume = volume
        self.box_inverse = box_inverse(matrix, volume)

    def frame_coords(self, frame: int) -> np.ndarray:
        """Coordinates of all atoms in a frame, shape (natoms, 3)."""
        if self.coords is None:
            raise TrajectoryError("No trajectory has been read.")
        return self.coords[frame]