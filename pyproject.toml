[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "slaphcontract"
version = "0.1.0"
description = "Setup and lookup-table construction for stochastic LapH correlation function contractions"
requires-python = ">=3.10"
dependencies = []
keywords = ["lattice QCD", "stochastic LapH", "dilution", "correlators", "ranlux"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["slaphcontract"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
