"""Command-line file names and the grid, bubble and designation input files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

from mpsbubble.datafile import ConfigError
from mpsbubble.particles import GHOST, Particles, new_particles

PathLike = Union[str, Path]

DEFAULT_DATA_FILE = "input.data"
DEFAULT_GRID_FILE = "input.grid"
DEFAULT_PROF_FILE = "output.prof"
DEFAULT_DIVIDED_PROF_FILE = "output_"
DEFAULT_LOG_FILE = "output.log"
DEFAULT_VTK_FILE = "output.vtk"
DEFAULT_DIVIDED_VTK_FILE = "output_"
DEFAULT_TORQUE_FILE = "output.torque"
DEFAULT_DIVIDED_TORQUE_FILE = "output_torque_"


@dataclass
class FileNames:
    """Names of the files a run reads and writes.

    ``designation`` and ``bubble`` are None unless given on the command line;
    the data file names them otherwise.
    """

    data: str = DEFAULT_DATA_FILE
    grid: str = DEFAULT_GRID_FILE
    prof: str = DEFAULT_PROF_FILE
    divided_prof: str = DEFAULT_DIVIDED_PROF_FILE
    log: str = DEFAULT_LOG_FILE
    designation: Optional[str] = None
    bubble: Optional[str] = None
    vtk: str = DEFAULT_VTK_FILE
    divided_vtk: str = DEFAULT_DIVIDED_VTK_FILE
    torque: str = DEFAULT_TORQUE_FILE
    divided_torque: str = DEFAULT_DIVIDED_TORQUE_FILE


def file_names_from_arguments(argv: Sequence[str]) -> FileNames:
    """Build file names from command-line arguments, program name excluded.

    The positions are: data, grid, prof, log, designation, bubble, vtk.
    Missing arguments keep their defaults; further arguments are ignored.
    """
    names = FileNames()
    args = list(argv)
    if len(args) >= 1:
        names.data = args[0]
    if len(args) >= 2:
        names.grid = args[1]
    if len(args) >= 3:
        names.prof = args[2]
        names.divided_prof = args[2]
    if len(args) >= 4:
        names.log = args[3]
    if len(args) >= 5:
        names.designation = args[4]
    if len(args) >= 6:
        names.bubble = args[5]
    if len(args) >= 7:
        names.vtk = args[6]
        names.divided_vtk = args[6]
    return names


@dataclass
class GridData:
    """Contents of a grid file: the start time and the particle state.

    ``ghosts`` lists the spare ghost particles appended for the inflow.
    """

    simulation_time: float
    particles: Particles
    ghosts: list[int] = field(default_factory=list)


class _Reader:
    """Reads whitespace-separated values from a file in order."""

    def __init__(self, path: PathLike) -> None:
        self._path = str(path)
        self._words: Iterator[str] = iter(Path(path).read_text().split())

    def _next(self, name: str) -> str:
        word = next(self._words, None)
        if word is None:
            raise ConfigError(f"scan of '{name}' failed in {self._path}")
        return word

    def real(self, name: str) -> float:
        text = self._next(name)
        try:
            return float(text)
        except ValueError:
            raise ConfigError(f"'{name}' is not a number: {text!r}") from None

    def integer(self, name: str) -> int:
        text = self._next(name)
        try:
            return int(text)
        except ValueError:
            raise ConfigError(f"'{name}' is not an integer: {text!r}") from None


def read_grid_file(
    path: PathLike,
    dimensions: int,
    extra_ghosts: int,
    bubble_path: Optional[PathLike],
    inflow_type: Optional[int],
) -> GridData:
    """Read the particle state from a grid file.

    Each particle line holds its type, position, velocity, pressure and
    number density. With ``bubble_path`` the moles of bubbles, number of
    bubbles and impurity concentration are read from that file as well.
    ``inflow_type`` of None means the inflow is off; otherwise particles of
    that type are marked as inflow and ``extra_ghosts`` spare ghost particles
    are appended. Raises ConfigError when a value is missing or malformed.
    """
    grid = _Reader(path)
    simulation_time = grid.real("simulationTime")
    stored = grid.integer("totalNumber")
    if stored < 0:
        raise ConfigError("totalNumber must not be negative")
    spare = 0
    if inflow_type is not None:
        if extra_ghosts < 0:
            raise ValueError("the number of extra ghost particles must not be negative")
        spare = extra_ghosts

    particles = new_particles(stored + spare, dimensions)
    bubbles = _Reader(bubble_path) if bubble_path is not None else None

    for i in range(stored):
        particles.type[i] = grid.integer(f"type[{i}]")
        for d in range(3):
            particles.position[d][i] = grid.real(f"position[{d}][{i}]")
        for d in range(3):
            particles.velocity[d][i] = grid.real(f"velocity[{d}][{i}]")
        particles.pressure[i] = grid.real(f"pressure[{i}]")
        particles.number_density[i] = grid.real(f"particleNumberDensity[{i}]")
        if bubbles is not None:
            particles.moles_of_bubbles[i] = bubbles.real(f"moleOfBubbles[{i}]")
            particles.number_of_bubbles[i] = bubbles.real(f"numberOfBubbles[{i}]")
            particles.impurity_concentration[i] = bubbles.real(
                f"concentrationOfImpurities[{i}]"
            )
        particles.bubble_radius[i] = 0.0
        particles.is_inflow[i] = inflow_type is not None and particles.type[i] == inflow_type

    ghosts = list(range(stored, stored + spare))
    for i in ghosts:
        particles.moles_of_bubbles[i] = 0.0
        particles.number_of_bubbles[i] = 0.0
        particles.impurity_concentration[i] = 0.0
        particles.make_ghost(i)

    return GridData(simulation_time=simulation_time, particles=particles, ghosts=ghosts)


def read_designation_file(path: PathLike) -> list[int]:
    """Read the indices of the particles whose pressure is to be written."""
    reader = _Reader(path)
    count = reader.integer("numberOfDesignatedParticles")
    if count < 0:
        raise ConfigError("numberOfDesignatedParticles must not be negative")
    return [reader.integer(f"listOfDesignatedParticles[{n}]") for n in range(count)]


def count_particle_types(
    particles: Particles, wall_type: int, dummy_wall_type: int, rigid_type: int
) -> dict[str, int]:
    """Number of wall, dummy-wall, rigid, ghost and fluid particles."""
    counts = {"fluid": 0, "rigid": 0, "wall": 0, "dummy_wall": 0, "ghost": 0}
    kinds: Iterable[int] = particles.type
    for kind in kinds:
        if kind == wall_type:
            counts["wall"] += 1
        elif kind == dummy_wall_type:
            counts["dummy_wall"] += 1
        elif kind == rigid_type:
            counts["rigid"] += 1
        elif kind == GHOST:
            counts["ghost"] += 1
        else:
            counts["fluid"] += 1
    return counts