"""HIPO record building and reading, data frames, particle kinematics and terminal charts."""

__version__ = "0.1.0"