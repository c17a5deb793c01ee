import configparser
import os
from enum import Enum

from neuralator.errors  import ConfigurationError
from neuralator.options import BreedingPolicy, ErrorSelector, RankBy

class Config:

    # attributes automatically converted to their enumeration on assignment
    _ENUM_OPTIONS = {'breeding_policy': BreedingPolicy,
                     'error_selector' : ErrorSelector,
                     'rank_by'        : RankBy}

    @staticmethod
    def _parse_layer_sizes(raw_sizes):
        """
        Parse layer_sizes from string to a tuple of ints.

        Parameters:
            raw_sizes: Either a comma-separated string ("8, 16, 21") or a sequence of ints

        Returns:
            Tuple with the number of nodes in each layer, input layer first
        """
        if isinstance(raw_sizes, str):
            try:
                return tuple(int(size.strip()) for size in raw_sizes.split(',') if size.strip())
            except ValueError:
                raise ConfigurationError(f"Invalid layer_sizes '{raw_sizes}'") from None
        return tuple(int(size) for size in raw_sizes)

    @staticmethod
    def _parse_option(name: str, enum_type: type[Enum], raw_value):
        if isinstance(raw_value, enum_type):
            return raw_value
        try:
            return enum_type(str(raw_value).strip().lower())
        except ValueError:
            allowed = ', '.join(member.value for member in enum_type)
            raise ConfigurationError(f"Invalid {name} '{raw_value}' (allowed: {allowed})") from None

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding defaults.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config for manual attribute setting.
        """

        # [NETWORK]

        # The number of nodes in each layer, input layer first, output layer last.
        # The output layer size also fixes the number of distinct answers a network can give.
        self.layer_sizes = (8, 16, 21)

        # [POPULATION]

        # The number of networks in each generation.
        self.population_size = 512

        # The number of top-ranked networks that breed with each other every generation.
        self.survivors_per_generation = 16

        # How many bred children make up the next generation (beside the elite).
        # The rest is filled with brand new random networks.
        # "None" means breed until the population is full.
        self.offspring_per_generation = None

        # [BREEDING]

        # How a child edge weight is derived from the parents' weights.
        # Allowed values: "always_random", "human", "average", "weighted_pull"
        self.breeding_policy = BreedingPolicy.HUMAN

        # Probability that a child edge gets a fresh random weight instead of
        # inheriting one. It grows by 'mutation_rate_increase' for each generation
        # without improvement, and is capped at 'max_mutation_rate'.
        self.base_mutation_rate     = 0.01
        self.max_mutation_rate      = 0.01
        self.mutation_rate_increase = 0.0005

        # [CONNECTION]

        # The probability that a new edge is live (non-zero weight).
        # Must be in [0, 1]; 1 - fill_rate is the fraction of dead connections.
        # A fill rate of 0 leaves every edge dead, which only signals anything
        # (and divides by zero) when minimum_action_potential is negative.
        self.fill_rate = 0.4

        # The range of randomly assigned live edge weights.
        self.min_strength = 0.0
        self.max_strength = 1.0

        # An edge only signals its destination when source activation * weight
        # is strictly greater than this value.
        self.minimum_action_potential = 0.0

        # [SCORING]

        # Which error accumulator is used to rank networks.
        # Allowed values: "sum_of_squares", "sum_of_roots", "custom"
        self.error_selector = ErrorSelector.SUM_OF_SQUARES

        # Whether a generation is ranked by score (matches) or by error first.
        # Allowed values: "score", "error"
        self.rank_by = RankBy.ERROR

        # The range the output layer's consensus index is mapped onto:
        # the first output node means 'output_min', the last one 'output_max'.
        self.output_min = -1.0
        self.output_max = 1.0

        # A trial whose error is below this value counts as a match.
        # "None" means half the distance between two adjacent output values.
        self.resolution = None

        # [CULLING]

        # Culling runs when the number of generations without improvement equals
        # 'cull_stagnation_trigger', and then every 'cull_stagnation_period' generations.
        self.cull_stagnation_trigger = 20
        self.cull_stagnation_period  = 100

        # Networks closer than 'cull_distance' are neighbours. A network is replaced
        # once it has 'cull_max_neighbors' neighbours, or when a neighbour lies within
        # 'cull_duplicate_distance', or (optionally) when a neighbour has the same error.
        self.cull_distance           = 1.0
        self.cull_duplicate_distance = 0.1
        self.cull_max_neighbors      = 10
        self.cull_matching_error     = True

        # [RUN]

        # The number of generations to evolve.
        self.generations = 2048

        # Seed of the random source that drives the whole run ("None" for a random seed).
        self.seed = None

        # Number of parallel jobs used to score a generation (1 = serial, -1 = all cores).
        self.num_jobs = 1

        if config_file is None:
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # the network shape and the population size have no sensible default
        self.layer_sizes              = get_value('NETWORK',    'layer_sizes',              str)
        self.population_size          = get_value('POPULATION', 'population_size',          int)
        self.survivors_per_generation = get_value('POPULATION', 'survivors_per_generation', int)
        self.offspring_per_generation = get_value('POPULATION', 'offspring_per_generation', int, self.offspring_per_generation)

        self.breeding_policy        = get_value('BREEDING', 'breeding_policy',        str,   self.breeding_policy)
        self.base_mutation_rate     = get_value('BREEDING', 'base_mutation_rate',     float, self.base_mutation_rate)
        self.max_mutation_rate      = get_value('BREEDING', 'max_mutation_rate',      float, self.max_mutation_rate)
        self.mutation_rate_increase = get_value('BREEDING', 'mutation_rate_increase', float, self.mutation_rate_increase)

        self.fill_rate                = get_value('CONNECTION', 'fill_rate',                float, self.fill_rate)
        self.min_strength             = get_value('CONNECTION', 'min_strength',             float, self.min_strength)
        self.max_strength             = get_value('CONNECTION', 'max_strength',             float, self.max_strength)
        self.minimum_action_potential = get_value('CONNECTION', 'minimum_action_potential', float, self.minimum_action_potential)

        self.error_selector = get_value('SCORING', 'error_selector', str,   self.error_selector)
        self.rank_by        = get_value('SCORING', 'rank_by',        str,   self.rank_by)
        self.output_min     = get_value('SCORING', 'output_min',     float, self.output_min)
        self.output_max     = get_value('SCORING', 'output_max',     float, self.output_max)
        self.resolution     = get_value('SCORING', 'resolution',     float, self.resolution)

        self.cull_stagnation_trigger = get_value('CULLING', 'cull_stagnation_trigger', int,   self.cull_stagnation_trigger)
        self.cull_stagnation_period  = get_value('CULLING', 'cull_stagnation_period',  int,   self.cull_stagnation_period)
        self.cull_distance           = get_value('CULLING', 'cull_distance',           float, self.cull_distance)
        self.cull_duplicate_distance = get_value('CULLING', 'cull_duplicate_distance', float, self.cull_duplicate_distance)
        self.cull_max_neighbors      = get_value('CULLING', 'cull_max_neighbors',      int,   self.cull_max_neighbors)
        self.cull_matching_error     = get_value('CULLING', 'cull_matching_error',     bool,  self.cull_matching_error)

        self.generations = get_value('RUN', 'generations', int)
        self.seed        = get_value('RUN', 'seed',        int, self.seed)
        self.num_jobs    = get_value('RUN', 'num_jobs',    int, self.num_jobs)

    def validate(self) -> None:
        """
        Check that the configuration can drive a run.

        Raises:
            ConfigurationError: describing the first offending parameter
        """
        if len(self.layer_sizes) < 2:
            raise ConfigurationError("layer_sizes needs at least an input and an output layer")
        if any(size < 1 for size in self.layer_sizes):
            raise ConfigurationError(f"every layer needs at least one node, got {self.layer_sizes}")
        if any(size > 0xFFFF for size in self.layer_sizes) or len(self.layer_sizes) > 0xFFFF:
            raise ConfigurationError("layer_sizes exceeds the 16 bit node identity range")
        if self.population_size is None or self.population_size < 1:
            raise ConfigurationError(f"population_size must be positive, got {self.population_size}")
        if self.survivors_per_generation is None or self.survivors_per_generation < 1:
            raise ConfigurationError(f"survivors_per_generation must be positive, got {self.survivors_per_generation}")
        if self.survivors_per_generation >= self.population_size:
            raise ConfigurationError("survivors_per_generation must be smaller than population_size")
        if self.offspring_per_generation is not None and self.offspring_per_generation < 0:
            raise ConfigurationError("offspring_per_generation cannot be negative")
        if self.generations is None or self.generations < 1:
            raise ConfigurationError(f"generations must be positive, got {self.generations}")
        if not 0.0 <= self.fill_rate <= 1.0:
            raise ConfigurationError(f"fill_rate must be in [0, 1], got {self.fill_rate}")
        if self.fill_rate == 0.0 and self.minimum_action_potential < 0.0:
            raise ConfigurationError("a fill_rate of 0 needs a non-negative minimum_action_potential")
        if self.min_strength > self.max_strength:
            raise ConfigurationError("min_strength cannot exceed max_strength")
        if not 0.0 <= self.base_mutation_rate <= 1.0 or not 0.0 <= self.max_mutation_rate <= 1.0:
            raise ConfigurationError("mutation rates must be in [0, 1]")
        if self.output_min > self.output_max:
            raise ConfigurationError("output_min cannot exceed output_max")
        if self.cull_stagnation_period < 1:
            raise ConfigurationError("cull_stagnation_period must be positive")

    def __setattr__(self, name, value):
        """
        Override 'setattr' to automatically parse options when set.
        This allows users to write config.breeding_policy = "average" or
        config.layer_sizes = "2, 4, 1" and have them converted.
        """
        if name in self._ENUM_OPTIONS:
            value = self._parse_option(name, self._ENUM_OPTIONS[name], value)
        elif name == 'layer_sizes':
            value = self._parse_layer_sizes(value)
        super().__setattr__(name, value)
