"""Analysis settings read from a JSON configuration file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_REQUIRED = object()


class SettingsError(ValueError):
    """Raised when a settings file cannot be read or holds invalid values."""


@dataclass
class Settings:
    """Parameters for RDF and incremental RDF analysis of a trajectory."""

    trajectory: str
    atom_a: str
    atom_b: str
    box_file: str = ""
    rdf_output: str = "rdf.dat"
    r_min: float = 0.0
    r_max: float = 10.0
    bins: int = 200
    increments: int = 0
    irdf_output: str = "irdf.dat"

    def validate(self) -> None:
        """Raise SettingsError if the parameters are inconsistent."""
        if self.r_max <= self.r_min:
            raise SettingsError("r_max must be greater than r_min")
        if self.bins <= 0:
            raise SettingsError("Number of bins must be positive")
        if self.increments < 0:
            raise SettingsError("Number of increments must be non-negative")
        if not self.trajectory:
            raise SettingsError("Trajectory input file need to be specified")
        if not self.atom_a or not self.atom_b:
            raise SettingsError("Both atom types should be specified")


def _convert(value: Any, kind: type) -> Any:
    if kind is str:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        return value
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    return float(value) if kind is float else int(value)


def _field(config: dict, key: str, kind: type, default: Any = _REQUIRED) -> Any:
    if key not in config:
        if default is _REQUIRED:
            raise SettingsError(f"Missing required configuration: key '{key}' not found")
        return default
    try:
        return _convert(config[key], kind)
    except TypeError as exc:
        raise SettingsError(f"Invalid type for configuration field: '{key}': {exc}") from exc


def load_settings(path: str | Path) -> Settings:
    """Read, convert and validate settings from a JSON file."""
    try:
        text = Path(path).read_text()
    except OSError as exc:
        raise SettingsError(f"Failed to open setting file: {path}, check filename!") from exc

    try:
        config = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Failed to parse JSON file: {exc}") from exc

    logger.info("Parsing Settings file ...")
    if not isinstance(config, dict):
        raise SettingsError("Invalid type for configuration field: top level must be an object")

    settings = Settings(
        trajectory=_field(config, "trajectory_input", str),
        atom_a=_field(config, "atom_type_1", str),
        atom_b=_field(config, "atom_type_2", str),
        box_file=_field(config, "box_input", str, ""),
        rdf_output=_field(config, "rdf_output", str, "rdf.dat"),
        r_min=_field(config, "r_min", float, 0.0),
        r_max=_field(config, "r_max", float, 10.0),
        bins=_field(config, "bins", int, 200),
        increments=_field(config, "increment", int, 0),
        irdf_output=_field(config, "irdf_output", str, "irdf.dat"),
    )
    settings.validate()
    logger.info("Settings file parsed successfully!")
    return settings