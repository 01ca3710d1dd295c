"""Particle-method building blocks for incompressible flow with cavitation bubbles, with file readers and writers."""

__version__ = "0.1.0"

__all__ = [
    "bucket",
    "cavitation",
    "collision",
    "datafile",
    "density",
    "domain",
    "gradient",
    "gridfile",
    "inflow",
    "output",
    "particles",
]