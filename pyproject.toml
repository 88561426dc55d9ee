[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hipoio"
version = "0.1.0"
description = "HIPO record building and reading, particle kinematics helpers and ANSI terminal line charts"
requires-python = ">=3.10"
dependencies = [
    "lz4",
]
keywords = ["hipo", "physics", "records", "lz4", "kinematics", "ascii-chart"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
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
packages = ["hipoio"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
