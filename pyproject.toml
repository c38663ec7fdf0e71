[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mdtools"
version = "1.0.0"
description = "Radial and incremental radial distribution functions from XYZ molecular dynamics trajectories"
requires-python = ">=3.10"
keywords = ["molecular dynamics", "rdf", "radial distribution function", "xyz", "trajectory", "periodic boundary conditions", "savitzky-golay"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Chemistry",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
mdtools = "mdtools.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mdtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
