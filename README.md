# mdtools

Post-processing of molecular dynamics trajectories. It reads an XYZ
trajectory and periodic box information, then computes the radial
distribution function (RDF) between two atom types and, optionally,
incremental RDFs (iRDFs): the distributions of the nearest, second-nearest,
... neighbour distances of each atom of the first type. Distances use the
minimum-image convention in orthorhombic or triclinic periodic boxes.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Usage

All parameters come from a JSON settings file:

```
mdtools settings.json
```

The command prints progress messages, writes the output files and exits
with status 0. It exits with status 1 and a message on standard error when
it is not given exactly one argument, when the settings are invalid, or when
the trajectory, box or output files cannot be read or written.

### Settings

```json
{
    "trajectory_input": "traj.xyz",
    "atom_type_1": "O",
    "atom_type_2": "H",
    "box_input": "box.dat",
    "rdf_output": "rdf.dat",
    "irdf_output": "irdf.dat",
    "r_min": 0.0,
    "r_max": 10.0,
    "bins": 200,
    "increment": 4
}
```

Required: `trajectory_input`, `atom_type_1`, `atom_type_2`.
Optional, with defaults: `box_input` (`""`), `rdf_output` (`rdf.dat`),
`irdf_output` (`irdf.dat`), `r_min` (0.0), `r_max` (10.0), `bins` (200),
`increment` (0, meaning no iRDF is computed).

`r_max` must exceed `r_min`, `bins` must be positive, `increment` must not be
negative, and the trajectory and both atom types must be non-empty strings.
Fields of the wrong JSON type are rejected.

### Trajectory

A standard multi-frame XYZ file: an atom count line, a comment line, then one
`name x y z` line per atom, repeated for every frame. Every frame must list
the same atoms in the same order; atom names are taken from the first frame.

### Box information

Box parameters are either `a b c` (orthorhombic) or `a b c alpha beta gamma`
(triclinic, angles in degrees), one line per frame. A single line means a
fixed box for the whole trajectory; otherwise there must be one line per
frame. They are taken from `box_input` if it is given and can be read (blank
lines and lines starting with `#` are skipped), otherwise from the comment
line of each frame in the XYZ file.

### Output

`rdf.dat` starts with a line holding the bin count and both atom types, a
column header, then one `distance<TAB>value` line per bin. `irdf.dat` holds
the same first line, then one block per increment, each introduced by
`iRDF: <n>`. The iRDF file is written only when `increment` is positive.

## Library use

```python
from mdtools.settings import load_settings
from mdtools.system import System
from mdtools.rdf import RDFCalculator

settings = load_settings("settings.json")
system = System()
system.read_xyz(settings.trajectory)
system.read_box(settings)

result = RDFCalculator().compute(system, settings)
print(result.distances, result.rdf, result.irdf)
```

- `mdtools.settings`: `Settings` (a dataclass with `validate()`),
  `load_settings(path)` and `SettingsError`.
- `mdtools.system`: `System` with `read_xyz`, `read_box` (returns whether box
  information was found), `read_box_from_xyz`, `read_box_from_file`,
  `update_box` and `frame_coords`; helpers `parse_box_line`,
  `box_matrix_from_params`, `box_volume`, `box_inverse`; and
  `TrajectoryError`.
- `mdtools.pbc`: `minimum_image_orthorhombic` and `minimum_image_triclinic`
  for single vectors or arrays of shape `(N, 3)`.
- `mdtools.rdf`: `RDFCalculator.compute` returns an `RDFResult`
  (`distances`, `rdf`, `irdf`, `num_a`, `num_b`, `nframes`);
  `RDFCalculator.run` computes and also writes the output files;
  `write_rdf`, `write_irdf` and `generate_pairs` are available on their own.
- `mdtools.tools`: `savitzky_golay`, `smooth_data` and `factorial` for
  Savitzky-Golay smoothing or differentiation of the resulting curves.

Progress and warnings are reported through the standard `logging` module.

## Limitations

Only XYZ trajectories are read. The command does not smooth its output;
smoothing is available only by calling `mdtools.tools` yourself.