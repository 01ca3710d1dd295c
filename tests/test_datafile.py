import pytest

from mpsbubble.datafile import (
    ConfigError,
    OutputInterval,
    SimulationConfig,
    parse_on_off,
    parse_output_interval,
    read_data_file,
)

SAMPLE = """\
#######--FREQUENTLY-USED-DATA-####
#--------ParticleSize----
averageDistanceBetweenParticles(m) 0.01
#--------Time----
finishTime(sec) 2.0
initialDt(sec) 0.001
#--------File----
TypeOfOutputInterval timeStep
simulationTimeInterval(sec) 0.05
timeStepInterval 100
#--------Domain----
numberOfDimensions 2
autoSettingOfDomainSize on
upperMarginRatio[X] 0.1
upperMarginRatio[Y] 0.2
upperMarginRatio[Z] 0.0
lowerMarginRatio[X] 0.1
lowerMarginRatio[Y] 0.1
lowerMarginRatio[Z] 0.0
upperLimit[X] 1.0
upperLimit[Y] 2.0
upperLimit[Z] 0.0
lowerLimit[X] -1.0
lowerLimit[Y] -0.5
lowerLimit[Z] 0.0
#--------Radius----
radiusOfParticleNumberDensity 2.1
radiusOfGradient 2.2
radiusOfLaplacianForViscosity 3.1
radiusOfLaplacianForPressure 3.2
#############  ***
#######--LESS-FREQUENTLY-USED-DATA-###
#--------Bucket----
autoSettingOfBucketCapacity on
optimizationOfMemorySize off
marginRatio 1.5
capacityOfBucket 50
#--------NeighborTable----
numberOfNeighborTables 2
autoSettingOfCapacityOfNeighborTable on
marginRatioOfLargeTable 1.6
marginRatioOfSmallTable 1.7
capacityOfLargeNeighborTable 200
capacityOfSmallNeighborTable 100
#--------ProfFile----
divisionOfProfFile on
compressionOfProfFile off
upperLimitOfNumberOfFiles 1000
#--------PressureFile----
outputPressureFile off
outputPressureOfAllWallParticle on
nameOfInputFile designated.dat
divisionOfPressureFile off
upperLimitOfNumberOfFiles 500
nameOfOutputFile output_
nameOfOutputFile output.pressure
#--------TorqueFile----
outputTorqueFile off
nameOfOutputFile torque.prof
numberOfRotations 3.5
#--------TypeOfParticle----
numberOfParticleTypes 3
typeNumberOfWallParticle 1
typeNumberOfDummyWallParticle 2
#--------MassDensity----
massDensityOfType0 1000.0
massDensityOfType1 1100.0
massDensityOfType2 1200.0
#--------Compressibility----
compressibilityOfType0 4.5e-10
compressibilityOfType1 4.6e-10
compressibilityOfType2 4.7e-10
#--------Viscosity----
viscosityCalculation on
highViscosityCalculation off
kinematicViscosity 1.0e-6
#--------Bubble----
bubbleCalculation on
nameOfInputFile bubble.dat
numberOfParticleForCalculatingBeta 10
massDensityOfBubble 1.2
gasConstant 8.314
temperature 298.0
headPressure 101325.0
#--------OutflowBoundaryCondition----
outflowBoundaryCondition off
negativePressure On
positionVector[X] 0.5
positionVector[Y] 0.6
positionVector[Z] 0.7
normalVector[X] 1.0
normalVector[Y] 0.0
normalVector[Z] 0.0
lengthOfFixedVelocityRegion 0.1
lengthOfOutflow 0.2
widthOfOutflow 0.3
depthOfOutflow 0.4
relaxationCoefficient 0.5
#--------InflowBoundaryCondition----
inflowBoundaryCondition ON
typeNumberOfInflowParticle 3
autoSettingOfInflowLevel off
inflowPosition[X] 0.0
inflowPosition[Y] 0.1
inflowPosition[Z] 0.0
inflowVelocity[X] 0.0
inflowVelocity[Y] 1.5
inflowVelocity[Z] 0.0
numberOfExtraGhostParticles 100
inflowMoleOfBubbles 1.0e-9
inflowNumberOfBubbles 5.0
#--------Gravity----
gravity[X] 0.0
gravity[Y] -9.8
gravity[Z] 0.0
#--------TimeDifference----
courantNumber 0.2
diffusionNumber 0.25
maxDt 0.5
minDt 0.01
upperLimitOfChangeRateOfDt 1.2
#--------Solver----
upperLimitOfIterationNumber 2000
lowerLimitOfIterationNumber 10
smallNumberForCheckingConvergence 1.0e-9
#--------Collision----
collisionDistance 0.5
collisionCoefficient 0.2
#--------Dirichlet----
thresholdOfParticleNumberDensity 0.97
#--------Other----
relaxationCoefficientOfLambda 1.0
finishTimeStep 5000
######---CustomizedFunctions---###
#--------RigidBody----
forcedMotionOfRigidBody off
typeNumberOfRigidParticle 4
fileNameOfSamplingData forced.dat
#--------TanakaMasunaga----
tanakaAndMasunagaModel off
valueOfGamma 0.01
valueOfC 1.5
#--------KondoKoshizuka----
kondoAndKoshizukaModel Off
valueOfKondoAlpha 0.1
valueOfKondoBeta 0.2
valueOfKondoGamma 0.3
artificialPressure 10.0
radiusOfCollision 0.8
#--------GradientTensor----
gradientTensor 1
#--------AveragePressure---- ***
averagePressureInEachBucket on
timeToStartUpdateAveragePressure 0.5
bucketWidth 0.05
upperLimit[X] 1.0
upperLimit[Y] 2.0
upperLimit[Z] 0.0
lowerLimit[X] -1.0
lowerLimit[Y] -0.5
lowerLimit[Z] 0.0
#-----------------
"""


@pytest.fixture
def sample_path(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(SAMPLE)
    return path


@pytest.fixture
def config(sample_path):
    return read_data_file(sample_path)


@pytest.mark.parametrize("word", ["ON", "on", "On"])
def test_parse_on_words(word):
    assert parse_on_off(word, "flag") is True


@pytest.mark.parametrize("word", ["OFF", "off", "Off"])
def test_parse_off_words(word):
    assert parse_on_off(word, "flag") is False


@pytest.mark.parametrize("word", ["oN", "yes", "1", ""])
def test_parse_on_off_rejects_other_words(word):
    with pytest.raises(ConfigError, match="myFlag"):
        parse_on_off(word, "myFlag")


@pytest.mark.parametrize("word", ["simulationTime", "SimulationTime", "SIMULATION_TIME"])
def test_parse_simulation_time_interval(word):
    assert parse_output_interval(word, "x") is OutputInterval.SIMULATION_TIME


@pytest.mark.parametrize("word", ["timeStep", "TimeStep", "TIME_STEP"])
def test_parse_time_step_interval(word):
    assert parse_output_interval(word, "x") is OutputInterval.TIME_STEP


def test_parse_output_interval_rejects_unknown():
    with pytest.raises(ConfigError, match="typeOfOutputInterval"):
        parse_output_interval("seconds", "typeOfOutputInterval")


def test_reads_frequently_used_data(config):
    assert config.average_distance == 0.01
    assert config.finish_time == 2.0
    assert config.initial_dt == 0.001
    assert config.output_interval is OutputInterval.TIME_STEP
    assert config.output_interval_time == 0.05
    assert config.output_interval_steps == 100
    assert config.dimensions == 2
    assert config.auto_domain_size is True


def test_reads_domain_vectors(config):
    assert config.upper_margin_ratio == [0.1, 0.2, 0.0]
    assert config.lower_margin_ratio == [0.1, 0.1, 0.0]
    assert config.upper_limit == [1.0, 2.0, 0.0]
    assert config.lower_limit == [-1.0, -0.5, 0.0]


def test_reads_radii_and_buckets(config):
    assert config.number_density_radius_ratio == 2.1
    assert config.gradient_radius_ratio == 2.2
    assert config.viscosity_radius_ratio == 3.1
    assert config.pressure_radius_ratio == 3.2
    assert config.auto_bucket_capacity is True
    assert config.optimize_bucket_memory is False
    assert config.bucket_capacity_margin_ratio == 1.5
    assert config.bucket_capacity == 50


def test_reads_neighbor_tables_and_files(config):
    assert config.number_of_neighbor_tables == 2
    assert config.large_table_margin_ratio == 1.6
    assert config.small_table_margin_ratio == 1.7
    assert config.large_table_capacity == 200
    assert config.small_table_capacity == 100
    assert config.divide_prof_file is True
    assert config.compress_prof_file is False
    assert config.max_prof_files == 1000
    assert config.designation_file == "designated.dat"
    assert config.divided_pressure_file == "output_"
    assert config.pressure_file == "output.pressure"
    assert config.torque_file == "torque.prof"
    assert config.number_of_rotations == 3.5


def test_reads_one_value_per_particle_type(config):
    assert config.number_of_particle_types == 3
    assert config.wall_type == 1
    assert config.dummy_wall_type == 2
    assert config.mass_density == [1000.0, 1100.0, 1200.0]
    assert config.compressibility == [4.5e-10, 4.6e-10, 4.7e-10]
    assert len(config.mass_density) == config.number_of_particle_types


def test_reads_bubble_and_boundary_data(config):
    assert config.kinematic_viscosity == 1.0e-6
    assert config.bubbles is True
    assert config.bubble_file == "bubble.dat"
    assert config.particles_for_beta == 10
    assert config.head_pressure == 101325.0
    assert config.negative_pressure is True
    assert config.outflow_position == [0.5, 0.6, 0.7]
    assert config.outflow_relaxation == 0.5
    assert config.inflow is True
    assert config.inflow_type == 3
    assert config.auto_inflow_level is False
    assert config.inflow_velocity == [0.0, 1.5, 0.0]
    assert config.extra_ghost_particles == 100
    assert config.inflow_number_of_bubbles == 5.0


def test_reads_solver_and_model_data(config):
    assert config.gravity == [0.0, -9.8, 0.0]
    assert config.diffusion_number == 0.25
    assert config.max_iterations == 2000
    assert config.min_iterations == 10
    assert config.collision_coefficient == 0.2
    assert config.number_density_threshold_ratio == 0.97
    assert config.finish_time_step == 5000
    assert config.rigid_type == 4
    assert config.forced_motion_file == "forced.dat"
    assert config.kondo_koshizuka is False
    assert config.kondo_collision_ratio == 0.8
    assert config.gradient_tensor is True


def test_reads_average_pressure_buckets(config):
    assert config.average_pressure_in_buckets is True
    assert config.time_to_update_average_pressure == 0.5
    assert config.pressure_bucket_width == 0.05
    assert config.pressure_upper_limit == [1.0, 2.0, 0.0]
    assert config.pressure_lower_limit == [-1.0, -0.5, 0.0]


def test_fixed_settings_after_reading(config):
    assert config.diagonal_increase_rate == 2.0
    assert config.exponential_prof_values is False
    assert config.divide_vtk_file is True
    assert config.state_display_interval == 0.5


def test_trailing_labels_may_be_missing(tmp_path):
    lines = SAMPLE.splitlines()
    path = tmp_path / "short.txt"
    path.write_text("\n".join(lines[:-1]))
    assert read_data_file(path).pressure_lower_limit == [-1.0, -0.5, 0.0]


def test_truncated_file_raises(tmp_path):
    path = tmp_path / "truncated.txt"
    path.write_text(SAMPLE.split("#--------Gravity----")[0])
    with pytest.raises(ConfigError, match="gravity"):
        read_data_file(path)


def test_bad_switch_raises(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text(SAMPLE.replace("viscosityCalculation on", "viscosityCalculation maybe"))
    with pytest.raises(ConfigError, match="flagOfViscosityCalculation"):
        read_data_file(path)


def test_bad_number_raises(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text(SAMPLE.replace("finishTime(sec) 2.0", "finishTime(sec) two"))
    with pytest.raises(ConfigError, match="finishTime"):
        read_data_file(path)


def test_bad_integer_raises(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text(SAMPLE.replace("numberOfDimensions 2", "numberOfDimensions 2.5"))
    with pytest.raises(ConfigError, match="NumberOfDimensions"):
        read_data_file(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_data_file(tmp_path / "absent.txt")


def test_default_config_values():
    config = SimulationConfig()
    assert config.divide_vtk_file is True
    assert config.upper_limit == [0.0, 0.0, 0.0]
    assert config.mass_density == []