[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mpsbubble"
version = "0.1.0"
description = "Particle-method (MPS) building blocks for incompressible flow with cavitation bubble transport"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "mps",
    "moving particle semi-implicit",
    "particle method",
    "cfd",
    "cavitation",
    "bubbles",
    "free surface flow",
    "simulation",
    "vtk",
]
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
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mpsbubble"]

[tool.hatch.build.targets.sdist]
include = ["mpsbubble", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
