import pytest

from mpsbubble.datafile import ConfigError
from mpsbubble.gridfile import (
    DEFAULT_DATA_FILE,
    DEFAULT_GRID_FILE,
    DEFAULT_LOG_FILE,
    FileNames,
    count_particle_types,
    file_names_from_arguments,
    read_designation_file,
    read_grid_file,
)
from mpsbubble.particles import GHOST, new_particles

GRID = """0.25
3
0 0.1 0.2 0.0 1.0 -1.0 0.0 100.0 6.5
2 0.3 0.4 0.0 0.0 0.0 0.0 50.0 7.0
5 0.5 0.6 0.0 0.0 2.0 0.0 0.0 5.0
"""

BUBBLES = """1e-3 10 0.1
2e-3 20 0.2
3e-3 30 0.3
"""


@pytest.fixture
def grid_path(tmp_path):
    path = tmp_path / "input.grid"
    path.write_text(GRID)
    return path


def test_default_file_names_without_arguments():
    names = file_names_from_arguments([])
    assert names == FileNames()
    assert names.data == DEFAULT_DATA_FILE
    assert names.grid == DEFAULT_GRID_FILE
    assert names.log == DEFAULT_LOG_FILE
    assert names.bubble is None


def test_all_file_names_from_arguments():
    names = file_names_from_arguments(
        ["d", "g", "p", "l", "des", "b", "v", "ignored"]
    )
    assert (names.data, names.grid) == ("d", "g")
    assert (names.prof, names.divided_prof) == ("p", "p")
    assert names.log == "l"
    assert names.designation == "des"
    assert names.bubble == "b"
    assert (names.vtk, names.divided_vtk) == ("v", "v")


def test_partial_arguments_keep_defaults():
    names = file_names_from_arguments(["d", "g", "p"])
    assert names.prof == "p"
    assert names.log == DEFAULT_LOG_FILE
    assert names.designation is None


def test_read_grid_file_values(grid_path):
    data = read_grid_file(grid_path, 2, 0, None, None)
    p = data.particles
    assert data.simulation_time == 0.25
    assert len(p) == 3
    assert p.type == [0, 2, 5]
    assert [p.position[d][1] for d in range(3)] == [0.3, 0.4, 0.0]
    assert [p.velocity[d][0] for d in range(3)] == [1.0, -1.0, 0.0]
    assert p.pressure == [100.0, 50.0, 0.0]
    assert p.number_density == [6.5, 7.0, 5.0]
    assert p.is_inflow == [False, False, False]
    assert data.ghosts == []


def test_inflow_adds_ghosts_and_marks_inflow(grid_path):
    data = read_grid_file(grid_path, 2, 2, None, 5)
    p = data.particles
    assert len(p) == 5
    assert data.ghosts == [3, 4]
    assert p.type[3:] == [GHOST, GHOST]
    assert p.is_inflow == [False, False, True, False, False]


def test_extra_ghosts_ignored_without_inflow(grid_path):
    data = read_grid_file(grid_path, 2, 4, None, None)
    assert len(data.particles) == 3


def test_bubble_file_is_read(grid_path, tmp_path):
    bubble = tmp_path / "input.bubble"
    bubble.write_text(BUBBLES)
    p = read_grid_file(grid_path, 2, 0, bubble, None).particles
    assert p.moles_of_bubbles == [1e-3, 2e-3, 3e-3]
    assert p.number_of_bubbles == [10.0, 20.0, 30.0]
    assert p.impurity_concentration == [0.1, 0.2, 0.3]


def test_truncated_grid_file_raises(tmp_path):
    path = tmp_path / "short.grid"
    path.write_text("0.0\n2\n0 0.1 0.2 0.0 0.0 0.0 0.0 1.0 2.0\n")
    with pytest.raises(ConfigError):
        read_grid_file(path, 2, 0, None, None)


def test_bad_integer_raises(tmp_path):
    path = tmp_path / "bad.grid"
    path.write_text("0.0\nmany\n")
    with pytest.raises(ConfigError):
        read_grid_file(path, 2, 0, None, None)


def test_read_designation_file(tmp_path):
    path = tmp_path / "designation"
    path.write_text("3\n4 7 9\n")
    assert read_designation_file(path) == [4, 7, 9]


def test_designation_file_too_short(tmp_path):
    path = tmp_path / "designation"
    path.write_text("3\n4 7\n")
    with pytest.raises(ConfigError):
        read_designation_file(path)


def test_count_particle_types():
    p = new_particles(6, 2)
    p.type = [0, 2, 3, 4, GHOST, 1]
    counts = count_particle_types(p, wall_type=2, dummy_wall_type=3, rigid_type=4)
    assert counts == {"fluid": 2, "rigid": 1, "wall": 1, "dummy_wall": 1, "ghost": 1}
    assert sum(counts.values()) == len(p)


def test_count_round_trip_from_grid(grid_path):
    p = read_grid_file(grid_path, 2, 1, None, 5).particles
    counts = count_particle_types(p, wall_type=2, dummy_wall_type=3, rigid_type=5)
    assert counts["wall"] == 1
    assert counts["rigid"] == 1
    assert counts["ghost"] == 1
    assert counts["fluid"] == 1