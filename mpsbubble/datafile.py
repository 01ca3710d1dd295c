"""Reader for the whitespace-separated simulation data file."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Union


class ConfigError(ValueError):
    """The data file is incomplete or holds an unacceptable value."""


class OutputInterval(Enum):
    """What the interval between written result files is measured in."""

    SIMULATION_TIME = "simulationTime"
    TIME_STEP = "timeStep"


_ON_WORDS = frozenset({"ON", "on", "On"})
_OFF_WORDS = frozenset({"OFF", "off", "Off"})
_SIMULATION_TIME_WORDS = frozenset({"simulationTime", "SimulationTime", "SIMULATION_TIME"})
_TIME_STEP_WORDS = frozenset({"timeStep", "TimeStep", "TIME_STEP"})


def parse_on_off(word: str, name: str) -> bool:
    """Read an on/off switch; raises ConfigError for any other word."""
    if word in _ON_WORDS:
        return True
    if word in _OFF_WORDS:
        return False
    raise ConfigError(f'parameter of "{name}" is not adequate: {word!r}')


def parse_output_interval(word: str, name: str) -> OutputInterval:
    """Read the kind of output interval; raises ConfigError for an unknown word."""
    if word in _SIMULATION_TIME_WORDS:
        return OutputInterval.SIMULATION_TIME
    if word in _TIME_STEP_WORDS:
        return OutputInterval.TIME_STEP
    raise ConfigError(f'parameter of "{name}" is not adequate: {word!r}')


def _three() -> list[float]:
    return [0.0, 0.0, 0.0]


@dataclass
class SimulationConfig:
    """Every setting read from the data file."""

    average_distance: float = 0.0
    finish_time: float = 0.0
    initial_dt: float = 0.0
    output_interval: OutputInterval = OutputInterval.SIMULATION_TIME
    output_interval_time: float = 0.0
    output_interval_steps: int = 0
    dimensions: int = 2

    auto_domain_size: bool = False
    upper_margin_ratio: list[float] = field(default_factory=_three)
    lower_margin_ratio: list[float] = field(default_factory=_three)
    upper_limit: list[float] = field(default_factory=_three)
    lower_limit: list[float] = field(default_factory=_three)

    number_density_radius_ratio: float = 0.0
    gradient_radius_ratio: float = 0.0
    viscosity_radius_ratio: float = 0.0
    pressure_radius_ratio: float = 0.0

    auto_bucket_capacity: bool = False
    optimize_bucket_memory: bool = False
    bucket_capacity_margin_ratio: float = 0.0
    bucket_capacity: int = 0

    number_of_neighbor_tables: int = 1
    auto_neighbor_table_capacity: bool = False
    large_table_margin_ratio: float = 0.0
    small_table_margin_ratio: float = 0.0
    large_table_capacity: int = 0
    small_table_capacity: int = 0

    divide_prof_file: bool = False
    compress_prof_file: bool = False
    max_prof_files: int = 0

    write_pressure_file: bool = False
    pressure_of_all_wall_particles: bool = False
    designation_file: str = ""
    divide_pressure_file: bool = False
    max_pressure_files: int = 0
    divided_pressure_file: str = ""
    pressure_file: str = ""

    write_torque_file: bool = False
    torque_file: str = ""
    number_of_rotations: float = 0.0

    number_of_particle_types: int = 0
    wall_type: int = 0
    dummy_wall_type: int = 0
    mass_density: list[float] = field(default_factory=list)
    compressibility: list[float] = field(default_factory=list)

    viscosity: bool = False
    high_viscosity: bool = False
    kinematic_viscosity: float = 0.0

    bubbles: bool = False
    bubble_file: str = ""
    particles_for_beta: int = 0
    bubble_density: float = 0.0
    gas_constant: float = 0.0
    temperature: float = 0.0
    head_pressure: float = 0.0

    outflow: bool = False
    negative_pressure: bool = False
    outflow_position: list[float] = field(default_factory=_three)
    outflow_normal: list[float] = field(default_factory=_three)
    fixed_velocity_length: float = 0.0
    outflow_length: float = 0.0
    outflow_width: float = 0.0
    outflow_depth: float = 0.0
    outflow_relaxation: float = 0.0

    inflow: bool = False
    inflow_type: int = 0
    auto_inflow_level: bool = False
    inflow_position: list[float] = field(default_factory=_three)
    inflow_velocity: list[float] = field(default_factory=_three)
    extra_ghost_particles: int = 0
    inflow_moles_of_bubbles: float = 0.0
    inflow_number_of_bubbles: float = 0.0

    gravity: list[float] = field(default_factory=_three)

    courant_number: float = 0.0
    diffusion_number: float = 0.0
    max_dt_ratio: float = 0.0
    min_dt_ratio: float = 0.0
    max_dt_change_rate: float = 0.0

    max_iterations: int = 0
    min_iterations: int = 0
    convergence_tolerance: float = 0.0

    collision_distance_ratio: float = 0.0
    collision_coefficient: float = 0.0

    number_density_threshold_ratio: float = 0.0

    lambda_relaxation: float = 0.0
    finish_time_step: int = 0

    forced_motion: bool = False
    rigid_type: int = 0
    forced_motion_file: str = ""

    tanaka_masunaga: bool = False
    tanaka_gamma: float = 0.0
    tanaka_c: float = 0.0

    kondo_koshizuka: bool = False
    kondo_alpha: float = 0.0
    kondo_beta: float = 0.0
    kondo_gamma: float = 0.0
    artificial_pressure: float = 0.0
    kondo_collision_ratio: float = 0.0

    gradient_tensor: bool = False

    average_pressure_in_buckets: bool = False
    time_to_update_average_pressure: float = 0.0
    pressure_bucket_width: float = 0.0
    pressure_upper_limit: list[float] = field(default_factory=_three)
    pressure_lower_limit: list[float] = field(default_factory=_three)

    diagonal_increase_rate: float = 2.0
    exponential_prof_values: bool = False
    divide_vtk_file: bool = True
    state_display_interval: float = 0.5


class _Tokens:
    """Sequential reader over the whitespace-separated words of a file."""

    def __init__(self, words: Iterable[str]) -> None:
        self._words: Iterator[str] = iter(words)

    def skip(self, count: int = 1) -> None:
        for _ in range(count):
            next(self._words, None)

    def word(self, name: str) -> str:
        value = next(self._words, None)
        if value is None:
            raise ConfigError(f"scan of '{name}' failed")
        return value

    def real(self, name: str) -> float:
        text = self.word(name)
        try:
            return float(text)
        except ValueError:
            raise ConfigError(f"'{name}' is not a number: {text!r}") from None

    def integer(self, name: str) -> int:
        text = self.word(name)
        try:
            return int(text)
        except ValueError:
            raise ConfigError(f"'{name}' is not an integer: {text!r}") from None

    def on_off(self, name: str) -> bool:
        return parse_on_off(self.word(name), name)

    def labelled_reals(self, name: str, count: int) -> list[float]:
        values = []
        for index in range(count):
            self.skip()
            values.append(self.real(f"{name}[{index}]"))
        return values


def read_data_file(path: Union[str, Path]) -> SimulationConfig:
    """Read the data file at ``path``; raises ConfigError when it is malformed."""
    tokens = _Tokens(Path(path).read_text().split())
    c = SimulationConfig()

    tokens.skip(3)
    c.average_distance = tokens.real("averageDistance")
    tokens.skip(2)
    c.finish_time = tokens.real("finishTime")
    tokens.skip()
    c.initial_dt = tokens.real("dt_initial")
    tokens.skip(2)
    c.output_interval = parse_output_interval(
        tokens.word("typeOfOutputInterval"), "typeOfOutputInterval"
    )
    tokens.skip()
    c.output_interval_time = tokens.real("intervalTimeOfWritingProfFile_simulationTime")
    tokens.skip()
    c.output_interval_steps = tokens.integer("intervalTimeOfWritingProfFile_timeStep")
    tokens.skip(2)
    c.dimensions = tokens.integer("NumberOfDimensions")
    tokens.skip()
    c.auto_domain_size = tokens.on_off("flagOfAutoSettingOfDomainSize")
    c.upper_margin_ratio = tokens.labelled_reals("upperMarginRatio", 3)
    c.lower_margin_ratio = tokens.labelled_reals("lowerMarginRatio", 3)
    c.upper_limit = tokens.labelled_reals("upperLimit", 3)
    c.lower_limit = tokens.labelled_reals("lowerLimit", 3)

    tokens.skip(2)
    c.number_density_radius_ratio = tokens.real("radiusOfParticleNumberDensity_ratio")
    tokens.skip()
    c.gradient_radius_ratio = tokens.real("radiusOfGradient_ratio")
    tokens.skip()
    c.viscosity_radius_ratio = tokens.real("radiusOfLaplacianForViscosity_ratio")
    tokens.skip()
    c.pressure_radius_ratio = tokens.real("radiusOfLaplacianForPressure_ratio")

    tokens.skip(5)
    c.auto_bucket_capacity = tokens.on_off("flagOfAutoSettingOfBucketCapacity")
    tokens.skip()
    c.optimize_bucket_memory = tokens.on_off("flagOfOptimizationOfBucketMemorySize")
    tokens.skip()
    c.bucket_capacity_margin_ratio = tokens.real("marginRatioForSettingBucketCapacity")
    tokens.skip()
    c.bucket_capacity = tokens.integer("capacityOfBucket")

    tokens.skip(2)
    c.number_of_neighbor_tables = tokens.integer("numberOfNeighborTables")
    tokens.skip()
    c.auto_neighbor_table_capacity = tokens.on_off(
        "flagOfAutoSettingOfCapacityOfNeighborTable"
    )
    tokens.skip()
    c.large_table_margin_ratio = tokens.real(
        "marginRatioForSettingCapacityOfLargeNeighborTable"
    )
    tokens.skip()
    c.small_table_margin_ratio = tokens.real(
        "marginRatioForSettingCapacityOfSmallNeighborTable"
    )
    tokens.skip()
    c.large_table_capacity = tokens.integer("capacityOfNeighborTable_large")
    tokens.skip()
    c.small_table_capacity = tokens.integer("capacityOfNeighborTable_small")

    tokens.skip(2)
    c.divide_prof_file = tokens.on_off("flagOfDivisionOfProfFile")
    tokens.skip()
    c.compress_prof_file = tokens.on_off("flagOfCompressionOfProfFile")
    tokens.skip()
    c.max_prof_files = tokens.integer("upperLimitOfNumberOfProfFiles")

    tokens.skip(2)
    c.write_pressure_file = tokens.on_off("flagOfOutputOfPressureFile")
    tokens.skip()
    c.pressure_of_all_wall_particles = tokens.on_off("flagOfOutputOfAllWallParticle")
    tokens.skip()
    c.designation_file = tokens.word("nameOfDesignationFileForWritingPressureFile")
    tokens.skip()
    c.divide_pressure_file = tokens.on_off("flagOfDivisionOfPressureFile")
    tokens.skip()
    c.max_pressure_files = tokens.integer("upperLimitOfNumberOfPressureFiles")
    tokens.skip()
    c.divided_pressure_file = tokens.word("nameOfOutputPressureFile_divided")
    tokens.skip()
    c.pressure_file = tokens.word("nameOfOutputPressureFile")

    tokens.skip(2)
    c.write_torque_file = tokens.on_off("flagOfOutputOfTorqueFile")
    tokens.skip()
    c.torque_file = tokens.word("nameOfOutputTorqueFile")
    tokens.skip()
    c.number_of_rotations = tokens.real("numberOfRotations")

    tokens.skip(2)
    c.number_of_particle_types = tokens.integer("numberOfParticleTypes")
    if c.number_of_particle_types < 0:
        raise ConfigError("numberOfParticleTypes must not be negative")
    tokens.skip()
    c.wall_type = tokens.integer("wallType")
    tokens.skip()
    c.dummy_wall_type = tokens.integer("dummyWallType")
    tokens.skip()
    c.mass_density = tokens.labelled_reals("massDensity", c.number_of_particle_types)
    tokens.skip()
    c.compressibility = tokens.labelled_reals(
        "compressibility", c.number_of_particle_types
    )

    tokens.skip(2)
    c.viscosity = tokens.on_off("flagOfViscosityCalculation")
    tokens.skip()
    c.high_viscosity = tokens.on_off("flagOfHighViscosityCalculation")
    tokens.skip()
    c.kinematic_viscosity = tokens.real("kinematicViscosity")

    tokens.skip(2)
    c.bubbles = tokens.on_off("flagOfBubbleCalculation")
    tokens.skip()
    c.bubble_file = tokens.word("nameOfBubbleInputFile")
    tokens.skip()
    c.particles_for_beta = tokens.integer("numberOfParticleForCalculatingBeta")
    tokens.skip()
    c.bubble_density = tokens.real("massDensityOfBubble")
    tokens.skip()
    c.gas_constant = tokens.real("gasConstant")
    tokens.skip()
    c.temperature = tokens.real("temperature")
    tokens.skip()
    c.head_pressure = tokens.real("headPressure")

    tokens.skip(2)
    c.outflow = tokens.on_off("flagOfOutflowBoundaryCondition")
    tokens.skip()
    c.negative_pressure = tokens.on_off("flagOfNegativePressure")
    c.outflow_position = tokens.labelled_reals("positionVector", 3)
    c.outflow_normal = tokens.labelled_reals("normalVector", 3)
    tokens.skip()
    c.fixed_velocity_length = tokens.real("lengthOfFixedVelocityRegion")
    tokens.skip()
    c.outflow_length = tokens.real("lengthOfOutflow")
    tokens.skip()
    c.outflow_width = tokens.real("widthOfOutflow")
    tokens.skip()
    c.outflow_depth = tokens.real("depthOfOutflow")
    tokens.skip()
    c.outflow_relaxation = tokens.real("relaxationCoefficientOfBoundaryCondition")

    tokens.skip(2)
    c.inflow = tokens.on_off("flagOfInflowBoundaryCondition")
    tokens.skip()
    c.inflow_type = tokens.integer("inflowType")
    tokens.skip()
    c.auto_inflow_level = tokens.on_off("flagOfAutoSettingOfInflowLevel")
    c.inflow_position = tokens.labelled_reals("inflowPosition", 3)
    c.inflow_velocity = tokens.labelled_reals("inflowVelocity", 3)
    tokens.skip()
    c.extra_ghost_particles = tokens.integer("numberOfExtraGhostParticles")
    tokens.skip()
    c.inflow_moles_of_bubbles = tokens.real("inflowMoleOfBubbles")
    tokens.skip()
    c.inflow_number_of_bubbles = tokens.real("inflowNumberOfBubbles")

    tokens.skip()
    c.gravity = tokens.labelled_reals("gravity", 3)

    tokens.skip(2)
    c.courant_number = tokens.real("courantNumber")
    tokens.skip()
    c.diffusion_number = tokens.real("diffusionNumber")
    tokens.skip()
    c.max_dt_ratio = tokens.real("maxDt_ratio")
    tokens.skip()
    c.min_dt_ratio = tokens.real("minDt_ratio")
    tokens.skip()
    c.max_dt_change_rate = tokens.real("upperLimitOfChangeRateOfDt")

    tokens.skip(2)
    c.max_iterations = tokens.integer("maxIterationNumberInIterationSolver")
    tokens.skip()
    c.min_iterations = tokens.integer("minIterationNumberInIterationSolver")
    tokens.skip()
    c.convergence_tolerance = tokens.real(
        "smallNumberForCheckingConvergenceInIterationSolver"
    )

    tokens.skip(2)
    c.collision_distance_ratio = tokens.real("collisionDistance_ratio")
    tokens.skip()
    c.collision_coefficient = tokens.real("collisionCoefficient")

    tokens.skip(2)
    c.number_density_threshold_ratio = tokens.real(
        "thresholdOfParticleNumberDensity_ratio"
    )

    tokens.skip(2)
    c.lambda_relaxation = tokens.real("relaxationCoefficientOfLambda")
    tokens.skip()
    c.finish_time_step = tokens.integer("finishTimeStep")

    tokens.skip(3)
    c.forced_motion = tokens.on_off("flagOfForcedMotionOfRigidBody")
    tokens.skip()
    c.rigid_type = tokens.integer("typeNumberOfRigidParticle_forForcedMotion")
    tokens.skip()
    c.forced_motion_file = tokens.word(
        "nameOfSamplingDataFileForForcedMotionOfRigidBody"
    )

    tokens.skip(2)
    c.tanaka_masunaga = tokens.on_off("flagOfTanakaAndMasunagaModel")
    tokens.skip()
    c.tanaka_gamma = tokens.real("valueOfGamma")
    tokens.skip()
    c.tanaka_c = tokens.real("valueOfC")

    tokens.skip(2)
    c.kondo_koshizuka = tokens.on_off("flagOfKondoAndKoshizukaModel")
    tokens.skip()
    c.kondo_alpha = tokens.real("valueOfKondoAlpha")
    tokens.skip()
    c.kondo_beta = tokens.real("valueOfKondoBeta")
    tokens.skip()
    c.kondo_gamma = tokens.real("valueOfKondoGamma")
    tokens.skip()
    c.artificial_pressure = tokens.real("artificialPressure")
    tokens.skip()
    c.kondo_collision_ratio = tokens.real("radiusOfKondoCollision")

    tokens.skip(2)
    # The gradient-tensor switch is written as a number, 1 for on.
    c.gradient_tensor = tokens.integer("flagOfGradientTensor") != 0

    tokens.skip(3)
    c.average_pressure_in_buckets = tokens.on_off("flagOfAveragePressureInEachBucket")
    tokens.skip()
    c.time_to_update_average_pressure = tokens.real("timeToUpdateAveragePressure")
    tokens.skip()
    c.pressure_bucket_width = tokens.real("pressureBucketWidth")
    upper = []
    for axis in "XYZ":
        tokens.skip()
        upper.append(tokens.real(f"pressureUpperLimit[{axis}DIM]"))
    lower = []
    for axis in "XYZ":
        tokens.skip()
        lower.append(tokens.real(f"pressureLowerLimit[{axis}DIM]"))
    c.pressure_upper_limit = upper
    c.pressure_lower_limit = lower

    c.diagonal_increase_rate = 2.0
    c.exponential_prof_values = False
    c.divide_vtk_file = True
    c.state_display_interval = 0.5
    return c