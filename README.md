# mpsbubble

Building blocks for particle simulations of incompressible fluid flow with the
Moving Particle Semi-implicit (MPS) method, together with a simple model for the
growth, rise and buoyancy of cavitation bubbles carried by the fluid particles,
and readers and writers for the plain-text input and result files.

The package uses only the Python standard library and needs Python 3.10 or later.

## What is inside

| Module | Purpose |
| --- | --- |
| `mpsbubble.particles` | The `Particles` store (type, position, velocity, pressure, bubble state and their previous values), `new_particles`, `move_particles`, `apply_gravity`, distances, and `interaction_radii`, which turns radii given as multiples of the particle spacing into an `InteractionRadii` in metres. |
| `mpsbubble.domain` | The box-shaped `Domain`: `fit_to` sizes it around the particles with margins, `locate` tells whether a particle is inside (`Location`) and raises `InvalidPositionError` for a NaN coordinate. |
| `mpsbubble.bucket` | `BucketGrid` sorts particles into a grid of buckets (turning particles that left the domain into ghosts, raising `BucketOverflowError` or `BucketPlacementError`); `PressureBuckets` is a grid for averaging pressure by region; `bucket_capacity` estimates how many particles a bucket holds. |
| `mpsbubble.density` | `particle_number_density`, giving a `NumberDensity` per particle, in total and per neighbour type. |
| `mpsbubble.gradient` | Pressure-gradient velocity correction (`pressure_gradient_correction`, `correct_velocity_and_position`) configured by `GradientSettings`, optionally with a corrective 2-D gradient tensor (`gradient_tensor_inverse`). |
| `mpsbubble.collision` | `resolve_collisions` pushes apart approaching particles that come too close and returns `CollisionCounts` split by fluid, wall and dummy-wall partners. |
| `mpsbubble.inflow` | `InflowBoundary`: classifies inflow particles by their side of the inflow plane, gives them the inflow velocity and releases them as fluid once they cross it, putting a ghost particle taken from a stack behind each. |
| `mpsbubble.cavitation` | Bubble physics: `saturated_vapor_pressure`, `radius_change`, `rising_velocity`, `rise_bubbles`, `apply_buoyancy` and the combined `calculate_bubbles`, configured by `FluidProperties` and `BubbleSettings`. |
| `mpsbubble.datafile` | `read_data_file` parses the whitespace-separated data file into a `SimulationConfig`; missing or bad values raise `ConfigError`. |
| `mpsbubble.gridfile` | `read_grid_file` loads the initial particles (and optionally their bubble state) into `GridData`, `read_designation_file` reads the particles whose pressure is written out, `file_names_from_arguments` maps positional arguments to `FileNames`, `count_particle_types` counts particles by kind. |
| `mpsbubble.output` | Writers for `.prof` particle snapshots, legacy ASCII VTK files and pressure files (`OutputOptions` switches extra fields on), their numbered file names, `wall_particle_indices`, and `compress_file` for gzip. |

## Example

```python
from mpsbubble.cavitation import influence_radius, saturated_vapor_pressure
from mpsbubble.density import particle_number_density
from mpsbubble.particles import apply_gravity, move_particles, new_particles

# Saturated vapour pressure of water at 20 degrees Celsius, in pascal.
print(saturated_vapor_pressure(20.0))

# Radius within which bubbles are handed on to neighbouring particles.
print(influence_radius(0.001, 2))

particles = new_particles(2, 2)          # two fluid particles (type 0) in 2-D
particles.position[0][1] = 0.001         # second particle 1 mm along x

apply_gravity(particles, [0.0, -9.8, 0.0], 1e-4, wall_type=2, dummy_wall_type=3)
move_particles(particles, particles.velocity, 1e-4)

def weight(distance, radius):
    return radius / distance - 1.0 if 0.0 < distance < radius else 0.0

neighbors = [[1], [0]]
density = particle_number_density(particles, neighbors, weight, 0.0021, 1, 0.001)
print(density.total)
```

The functions that work on pairs of particles take the neighbour lists and the
weight function as arguments: `neighbors[i]` lists the indices near particle
`i`, and `weight(distance, radius)` returns the kernel value.

## Units and conventions

All quantities are SI: metres, seconds, kilograms per cubic metre, pascal.
Vector fields are stored as three rows, one per axis, so `position[1][i]` is the
y coordinate of particle `i`. Particle types are small integers; the wall and
dummy-wall types come from the data file, and inactive (ghost) particles have
type `-1`.

## What the package does not do

It has no command and no time-stepping loop: nothing here runs a whole
simulation. It does not build neighbour lists, supply a weight function,
solve the pressure equation, compute viscosity or choose the time step; those
parts are for the caller to provide and to combine with the functions above.

## Running the tests

The tests use pytest, installed with the `test` extra:

```
pip install -e ".[test]"
pytest
```