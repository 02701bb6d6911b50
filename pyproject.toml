[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "noakit"
version = "0.1.0"
description = "Triangle mesh domains with typed data layers, and muon cross-section and Coulomb scattering helpers"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = ["physics", "muon", "cross-section", "mesh", "vtu", "coulomb scattering"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["noakit"]

[tool.pytest.ini_options]
addopts = "-ra"
