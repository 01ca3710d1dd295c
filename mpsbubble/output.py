"""Writers for the result files: particle profiles, VTK data and pressures."""

from __future__ import annotations

import gzip
import logging
import math
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, TextIO, Union

from mpsbubble.particles import XDIM, YDIM, ZDIM, Particles

log = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class OutputOptions:
    """Switches that change what goes into the result files.

    ``exponential`` writes profile values in exponent notation, ``bubbles``
    adds the bubble quantities and ``average_pressure_in_buckets`` adds the
    bucket-averaged pressure to the VTK data.
    """

    exponential: bool = False
    bubbles: bool = False
    average_pressure_in_buckets: bool = False


def _fixed(value: float) -> str:
    return f"{value:f}"


def _exponent(value: float) -> str:
    return f"{value:e}"


def prof_file_name(base: str, index: int) -> str:
    """Name of the ``index``-th divided profile file."""
    return f"{base}{index:04d}.prof"


def vtk_file_name(base: str, index: int) -> str:
    """Name of the ``index``-th divided VTK file."""
    return f"{base}{index:04d}.vtk"


def pressure_file_name(base: str, index: int) -> str:
    """Name of the ``index``-th divided pressure file."""
    return f"{base}{index:05d}.pressure"


def write_prof(
    stream: TextIO,
    particles: Particles,
    simulation_time: float,
    options: OutputOptions,
) -> None:
    """Write the time, the particle count and one line per particle."""
    number = _exponent if options.exponential else _fixed
    stream.write(f"{simulation_time:f}\n")
    stream.write(f"{len(particles)}\n")
    for i, kind in enumerate(particles.type):
        fields = [str(kind)]
        fields.extend(number(particles.position[d][i]) for d in range(3))
        fields.extend(number(particles.velocity[d][i]) for d in range(3))
        fields.append(number(particles.pressure[i]))
        fields.append(number(particles.number_density[i]))
        if options.bubbles:
            fields.append(_exponent(particles.moles_of_bubbles[i]))
            fields.append(_exponent(particles.number_of_bubbles[i]))
            fields.append(_exponent(particles.bubble_radius[i]))
        stream.write(" ".join(fields) + "\n")


def _open(path: PathLike, append: bool) -> TextIO:
    return open(path, "a" if append else "w", encoding="ascii")


def write_prof_file(
    path: PathLike,
    particles: Particles,
    simulation_time: float,
    options: OutputOptions,
    append: bool,
) -> Path:
    """Write a profile to ``path``, appending to it when ``append`` is true."""
    with _open(path, append) as stream:
        write_prof(stream, particles, simulation_time, options)
    log.info("profile file %s was written", path)
    return Path(path)


def _scalars(
    stream: TextIO, name: str, kind: str, values: Iterable[object], fmt
) -> None:
    stream.write(f"SCALARS {name} {kind} 1\n")
    stream.write(f"LOOKUP_TABLE {name}\n")
    for value in values:
        stream.write(f"{fmt(value)}\n")
    stream.write("\n")


def _vectors(stream: TextIO, name: str, rows: Sequence[Sequence[float]], count: int) -> None:
    stream.write(f"VECTORS {name} float\n")
    for i in range(count):
        stream.write(
            f"{rows[XDIM][i]:f} {rows[YDIM][i]:f} {rows[ZDIM][i]:f}\n"
        )
    stream.write("\n")


def write_vtk(stream: TextIO, particles: Particles, options: OutputOptions) -> None:
    """Write the particles as an ASCII VTK unstructured grid of vertices."""
    n = len(particles)
    stream.write("# vtk DataFile Version 3.0\n")
    stream.write("vtk output\n")
    stream.write("ASCII\n")
    stream.write("DATASET UNSTRUCTURED_GRID\n")

    stream.write(f"POINTS {n} float\n")
    for i in range(n):
        stream.write("".join(f"{particles.position[d][i]:f} " for d in range(3)) + "\n")
    stream.write("\n")

    stream.write(f"CELLS {n} {n * 2}\n")
    for i in range(n):
        stream.write(f"1 {i}\n")
    stream.write("\n")

    stream.write(f"CELL_TYPES {n}\n")
    for _ in range(n):
        stream.write("1\n")
    stream.write("\n")

    stream.write(f"POINT_DATA {n}\n")
    _scalars(stream, "type", "int", particles.type, str)
    speeds = (
        math.sqrt(sum(particles.velocity[d][i] ** 2 for d in range(3)))
        for i in range(n)
    )
    _scalars(stream, "Velocity", "float", speeds, _fixed)
    _scalars(stream, "Pressure", "float", particles.pressure, _fixed)
    _scalars(
        stream, "particleNumberDensity", "float", particles.number_density, _fixed
    )
    _scalars(
        stream, "boundaryCondition", "int", particles.boundary_condition, str
    )

    if options.bubbles:
        _scalars(stream, "moleOfBubbles", "double", particles.moles_of_bubbles, _exponent)
        _scalars(
            stream, "numberOfBubbles", "double", particles.number_of_bubbles, _exponent
        )
        _scalars(
            stream,
            "RatioOfImpurities",
            "double",
            particles.impurity_concentration,
            _exponent,
        )
        _scalars(stream, "BubbleDiameter", "float", particles.bubble_radius, _fixed)
        _scalars(stream, "voidrateOfParticle", "double", particles.void_rate, _fixed)

    _vectors(stream, "point_vectors", particles.velocity, n)
    _vectors(stream, "velocity_correction", particles.velocity_correction, n)
    _vectors(stream, "velocity_vector", particles.velocity, n)
    _scalars(stream, "SourceTerm", "float", particles.source_term, _fixed)

    if options.average_pressure_in_buckets:
        _scalars(
            stream,
            "AveragePressureInEachBucket",
            "float",
            particles.bucket_pressure,
            _fixed,
        )


def write_vtk_file(
    path: PathLike, particles: Particles, options: OutputOptions, append: bool
) -> Path:
    """Write VTK data to ``path``, appending to it when ``append`` is true."""
    with _open(path, append) as stream:
        write_vtk(stream, particles, options)
    log.info("vtk file %s was written", path)
    return Path(path)


def write_pressure(
    stream: TextIO,
    particles: Particles,
    simulation_time: float,
    indices: Sequence[int],
) -> None:
    """Write the state of the particles listed in ``indices``."""
    stream.write(f"{simulation_time:f}\n")
    stream.write(f"{len(indices)}\n")
    for i in indices:
        fields = [f"{i}  {particles.type[i]}"]
        fields.extend(_fixed(particles.position[d][i]) for d in range(3))
        fields.extend(_fixed(particles.velocity[d][i]) for d in range(3))
        fields.append(_fixed(particles.pressure[i]))
        fields.append(_fixed(particles.number_density[i]))
        stream.write(" ".join(fields) + "\n")


def wall_particle_indices(particles: Particles, wall_type: int) -> list[int]:
    """Indices of every wall particle, in order."""
    return [i for i, kind in enumerate(particles.type) if kind == wall_type]


def compress_file(path: PathLike) -> Path:
    """Gzip ``path`` at the highest level and remove the original.

    Returns the path of the compressed file.
    """
    source = Path(path)
    target = source.with_name(source.name + ".gz")
    with open(source, "rb") as raw, gzip.open(target, "wb", compresslevel=9) as packed:
        shutil.copyfileobj(raw, packed)
    source.unlink()
    log.info("%s was compressed", source)
    return target