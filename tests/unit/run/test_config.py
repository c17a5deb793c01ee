"""
Unit tests for Config class.
"""

import configparser
import copy
import os
import pytest

from neuralator.errors     import ConfigurationError
from neuralator.options    import BreedingPolicy, ErrorSelector, RankBy
from neuralator.run.config import Config


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def test_config_dir():
    """Return the directory containing test configuration files."""
    return os.path.join(os.path.dirname(__file__), 'test_configs')


@pytest.fixture
def valid_config():
    config = Config()
    config.layer_sizes = (2, 3, 1)
    config.population_size = 10
    config.survivors_per_generation = 2
    config.generations = 5
    return config


# ============================================================================
# Test Config Initialization
# ============================================================================

class TestConfigInit:
    """Test Config initialization."""

    def test_init_without_file_holds_defaults(self):
        config = Config()

        assert config.layer_sizes == (8, 16, 21)
        assert config.population_size == 512
        assert config.survivors_per_generation == 16
        assert config.offspring_per_generation is None
        assert config.breeding_policy is BreedingPolicy.HUMAN
        assert config.fill_rate == 0.4
        assert config.error_selector is ErrorSelector.SUM_OF_SQUARES
        assert config.rank_by is RankBy.ERROR
        assert config.resolution is None
        assert config.seed is None
        assert config.num_jobs == 1

    def test_defaults_are_valid(self):
        Config().validate()

    def test_init_with_nonexistent_file_raises_error(self):
        with pytest.raises(FileNotFoundError, match="Configuration file .* not found"):
            Config('nonexistent_file.ini')

    def test_init_with_minimal_config(self, test_config_dir):
        """Required parameters are read, the others keep their defaults."""
        config = Config(os.path.join(test_config_dir, 'minimal.ini'))

        assert config.layer_sizes == (2, 3, 1)
        assert config.population_size == 100
        assert config.survivors_per_generation == 10
        assert config.generations == 50
        assert config.breeding_policy is BreedingPolicy.HUMAN
        assert config.cull_stagnation_trigger == 20

    def test_missing_required_parameter(self, test_config_dir):
        with pytest.raises(configparser.Error):
            Config(os.path.join(test_config_dir, 'missing_generations.ini'))

    def test_invalid_option_in_file(self, test_config_dir):
        with pytest.raises(ConfigurationError, match="breeding_policy"):
            Config(os.path.join(test_config_dir, 'invalid_policy.ini'))


# ============================================================================
# Test Config Sections
# ============================================================================

class TestConfigSections:
    """Every section of a complete configuration file."""

    @pytest.fixture
    def config(self, test_config_dir):
        return Config(os.path.join(test_config_dir, 'full.ini'))

    def test_network(self, config):
        assert config.layer_sizes == (4, 8, 8, 5)

    def test_population(self, config):
        assert config.population_size == 64
        assert config.survivors_per_generation == 4
        assert config.offspring_per_generation == 40

    def test_breeding(self, config):
        assert config.breeding_policy is BreedingPolicy.WEIGHTED_PULL
        assert config.base_mutation_rate == 0.02
        assert config.max_mutation_rate == 0.2
        assert config.mutation_rate_increase == 0.001

    def test_connection(self, config):
        assert config.fill_rate == 0.6
        assert config.min_strength == 0.1
        assert config.max_strength == 0.9
        assert config.minimum_action_potential == 0.05

    def test_scoring(self, config):
        assert config.error_selector is ErrorSelector.CUSTOM
        assert config.rank_by is RankBy.SCORE
        assert config.output_min == 0.0
        assert config.output_max == 4.0
        assert config.resolution == 0.25

    def test_culling(self, config):
        assert config.cull_stagnation_trigger == 5
        assert config.cull_stagnation_period == 25
        assert config.cull_distance == 0.5
        assert config.cull_duplicate_distance == 0.05
        assert config.cull_max_neighbors == 3
        assert config.cull_matching_error is False

    def test_run(self, config):
        assert config.generations == 300
        assert config.seed == 7
        assert config.num_jobs == -1

    def test_valid(self, config):
        config.validate()

    def test_shipped_sine_configuration(self):
        path = os.path.join(os.path.dirname(__file__), '..', '..', '..', 'examples', 'configs', 'config_sine.ini')
        config = Config(path)

        assert config.layer_sizes == (8, 16, 21)
        assert config.offspring_per_generation is None
        config.validate()


# ============================================================================
# Test Config Assignment
# ============================================================================

class TestConfigAssignment:
    """Options and layer sizes are converted when assigned."""

    def test_enum_from_string(self):
        config = Config()

        config.breeding_policy = "average"
        config.error_selector = "SUM_OF_ROOTS"
        config.rank_by = " score "

        assert config.breeding_policy is BreedingPolicy.AVERAGE
        assert config.error_selector is ErrorSelector.SUM_OF_ROOTS
        assert config.rank_by is RankBy.SCORE

    def test_enum_member_kept(self):
        config = Config()

        config.breeding_policy = BreedingPolicy.ALWAYS_RANDOM

        assert config.breeding_policy is BreedingPolicy.ALWAYS_RANDOM

    @pytest.mark.parametrize("name", ["breeding_policy", "error_selector", "rank_by"])
    def test_invalid_enum_value(self, name):
        config = Config()

        with pytest.raises(ConfigurationError, match="allowed"):
            setattr(config, name, "nonsense")

    def test_layer_sizes_from_string(self):
        config = Config()

        config.layer_sizes = "3, 5 ,2"

        assert config.layer_sizes == (3, 5, 2)

    def test_layer_sizes_from_list(self):
        config = Config()

        config.layer_sizes = [3, 5, 2]

        assert config.layer_sizes == (3, 5, 2)

    def test_invalid_layer_sizes(self):
        config = Config()

        with pytest.raises(ConfigurationError):
            config.layer_sizes = "3, five, 2"

    def test_copy_is_independent(self, valid_config):
        duplicate = copy.copy(valid_config)

        duplicate.population_size = 99
        duplicate.breeding_policy = "average"

        assert valid_config.population_size == 10
        assert valid_config.breeding_policy is BreedingPolicy.HUMAN


# ============================================================================
# Test Config Validation
# ============================================================================

class TestConfigValidate:

    def test_valid(self, valid_config):
        valid_config.validate()

    @pytest.mark.parametrize("name, value", [
        ("layer_sizes",              (4,)),
        ("layer_sizes",              (2, 0, 1)),
        ("layer_sizes",              (2, 0x10000)),
        ("population_size",          0),
        ("survivors_per_generation", 0),
        ("survivors_per_generation", 10),
        ("offspring_per_generation", -1),
        ("generations",              0),
        ("fill_rate",                -0.1),
        ("fill_rate",                1.5),
        ("base_mutation_rate",       -0.1),
        ("max_mutation_rate",        1.1),
        ("cull_stagnation_period",   0),
    ])
    def test_invalid_value(self, valid_config, name, value):
        setattr(valid_config, name, value)

        with pytest.raises(ConfigurationError):
            valid_config.validate()

    def test_zero_fill_rate(self, valid_config):
        valid_config.fill_rate = 0.0

        valid_config.validate()

    def test_zero_fill_rate_with_negative_action_potential(self, valid_config):
        valid_config.fill_rate = 0.0
        valid_config.minimum_action_potential = -0.1

        with pytest.raises(ConfigurationError, match="fill_rate"):
            valid_config.validate()

    def test_inverted_strength_range(self, valid_config):
        valid_config.min_strength = 0.8
        valid_config.max_strength = 0.2

        with pytest.raises(ConfigurationError, match="min_strength"):
            valid_config.validate()

    def test_inverted_output_range(self, valid_config):
        valid_config.output_min = 1.0
        valid_config.output_max = -1.0

        with pytest.raises(ConfigurationError, match="output_min"):
            valid_config.validate()

    def test_configuration_error_is_value_error(self, valid_config):
        valid_config.population_size = 0

        with pytest.raises(ValueError):
            valid_config.validate()
