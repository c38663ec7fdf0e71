"""Radial and incremental radial distribution functions from XYZ MD trajectories."""

__version__ = "1.0.0"