"""Command line entry point: compute RDFs from a JSON settings file."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from mdtools.rdf import RDFCalculator
from mdtools.settings import SettingsError, load_settings
from mdtools.system import System, TrajectoryError


def main(argv: Sequence[str] | None = None) -> int:
    """Run the RDF analysis described by a settings file; return an exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Usage: mdtools <settings.json>", file=sys.stderr)
        return 1

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    try:
        settings = load_settings(args[0])
        system = System()
        system.read_xyz(settings.trajectory)
        system.read_box(settings)

        print("Starting RDF calculation ...")
        RDFCalculator().run(system, settings)
        print("RDF calculation completed successfully!")
    except MemoryError:
        print("Memory allocation failed.", file=sys.stderr)
        return 1
    except (SettingsError, TrajectoryError, OSError) as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())