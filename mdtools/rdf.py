"""Radial distribution functions and incremental RDFs of trajectories."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from mdtools.pbc import minimum_image_triclinic
from mdtools.settings import Settings
from mdtools.system import System

logger = logging.getLogger(__name__)


@dataclass
class RDFResult:
    """Normalised RDF and iRDF histograms with their bin distances."""

    distances: np.ndarray
    rdf: np.ndarray
    irdf: np.ndarray
    num_a: int
    num_b: int
    nframes: int


def generate_pairs(
    atoms: Sequence[str], atom_a: str, atom_b: str
) -> tuple[list[tuple[int, int]], int, int]:
    """Return every (A index, B index) pair and the counts of A and B atoms."""
    num_a = sum(1 for name in atoms if name == atom_a)
    num_b = sum(1 for name in atoms if name == atom_b and name != atom_a)
    if atom_a == atom_b:
        num_b = num_a
    a_indices = [i for i, name in enumerate(atoms) if name == atom_a]
    b_indices = [i for i, name in enumerate(atoms) if name == atom_b]
    pairs = [(a, b) for a in a_indices for b in b_indices]
    return pairs, num_a, num_b


def _bin_index(distance: float, settings: Settings, dr: float) -> int:
    return int((distance - settings.r_min) / dr)


def _accumulate_rdf(
    hist: np.ndarray, distances: np.ndarray, settings: Settings, dr: float, volume: float
) -> None:
    inside = distances[(distances < settings.r_max) & (distances >= settings.r_min)]
    layers = ((inside - settings.r_min) / dr).astype(int)
    layers = layers[(layers >= 0) & (layers < settings.bins)]
    np.add.at(hist, layers, volume)


def _accumulate_increments(
    hist: np.ndarray,
    firsts: list[int],
    distances: list[float],
    settings: Settings,
    dr: float,
    volume: float,
) -> None:
    increments = settings.increments

    def flush(nearest: list[float]) -> None:
        for shell, distance in enumerate(sorted(nearest)):
            layer = _bin_index(distance, settings, dr)
            if 0 <= layer < settings.bins:
                hist[shell, layer] += volume

    nearest = [0.0] * increments
    count = 0
    current = firsts[0] if firsts else -1
    for first, distance in zip(firsts, distances):
        if first == current:
            if settings.r_min < distance < settings.r_max:
                if count < increments:
                    nearest[count] = distance
                    count += 1
                else:
                    farthest = max(range(increments), key=nearest.__getitem__)
                    if nearest[farthest] > distance:
                        nearest[farthest] = distance
        else:
            flush(nearest)
            nearest = [0.0] * increments
        current = first
    flush(nearest)


class RDFCalculator:
    """Computes RDFs and incremental RDFs between two atom types."""

    def compute(self, system: System, settings: Settings) -> RDFResult:
        """Accumulate and normalise histograms over every frame of the system."""
        bins, increments = settings.bins, settings.increments
        dr = (settings.r_max - settings.r_min) / bins
        pairs, num_a, num_b = generate_pairs(system.atoms, settings.atom_a, settings.atom_b)
        factor = num_a * num_b * 4 * math.pi * dr

        first_idx = np.array([a for a, _ in pairs], dtype=int)
        second_idx = np.array([b for _, b in pairs], dtype=int)
        first_list = first_idx.tolist()

        rdf = np.zeros(bins)
        irdf = np.zeros((max(increments, 0), bins))
        nframes = system.nframes

        for frame in range(nframes):
            system.update_box(frame)
            coords = system.frame_coords(frame)
            delta = minimum_image_triclinic(
                coords[first_idx] - coords[second_idx], system.box_matrix, system.box_inverse
            )
            distances = np.sqrt((delta * delta).sum(axis=-1)) if len(pairs) else np.empty(0)
            _accumulate_rdf(rdf, distances, settings, dr, system.box_volume)
            if increments > 0:
                _accumulate_increments(
                    irdf, first_list, distances.tolist(), settings, dr, system.box_volume
                )

        r = settings.r_min + np.arange(bins) * dr
        with np.errstate(all="ignore"):
            scale = factor * nframes * r * r
            rdf = rdf / scale
            irdf = irdf / scale
        rdf[0] = 0.0
        irdf[:, 0] = 0.0

        return RDFResult(
            distances=r, rdf=rdf, irdf=irdf, num_a=num_a, num_b=num_b, nframes=nframes
        )

    def run(self, system: System, settings: Settings) -> RDFResult:
        """Compute the histograms and write them to the configured output files."""
        result = self.compute(system, settings)
        write_rdf(settings.rdf_output, settings, result)
        if settings.irdf_output and settings.increments > 0:
            write_irdf(settings.irdf_output, settings, result)
        return result


def _header(settings: Settings) -> str:
    return f"{settings.bins}  {settings.atom_a}  {settings.atom_b}\n"


def _rows(distances: np.ndarray, values: np.ndarray) -> list[str]:
    return [f"{r:.5f}\t{g:.8f}\n" for r, g in zip(distances, values)]


def write_rdf(path: str | Path, settings: Settings, result: RDFResult) -> None:
    """Write the RDF table to path."""
    lines = [_header(settings), "distance:\tRDF value:\n", *_rows(result.distances, result.rdf)]
    try:
        Path(path).write_text("".join(lines))
    except OSError as exc:
        raise OSError(f"Failed to write RDF output file: {path}") from exc


def write_irdf(path: str | Path, settings: Settings, result: RDFResult) -> None:
    """Write one table per incremental RDF shell to path."""
    lines = [_header(settings)]
    for shell, values in enumerate(result.irdf):
        lines.append(f"iRDF: {shell}\n")
        lines.append("distance:\tRDF value:\n")
        lines.extend(_rows(result.distances, values))
    try:
        Path(path).write_text("".join(lines))
    except OSError as exc:
        raise OSError(f"Failed to write incremental RDF output file: {path}") from exc