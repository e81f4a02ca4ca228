"""
NEAT Config Module

This module implements the Config class, which stores the parameters
of a NEAT run and parses them from an INI configuration file.

Classes:
    Config: Immutable bundle of configuration parameters
"""

import configparser
import copy
import os

class Config:
    """
    Configuration parameters for a NEAT run.

    Parameters are read from an INI file; every parameter missing from the file
    (or every parameter, if no file is given) takes its default value. Once built,
    a Config cannot be modified: use 'with_overrides()' to obtain a modified copy.
    The same Config is passed explicitly to every operation that needs it.

    Example configuration file:

        [POPULATION_INIT]
        population_size = 150

        [SPECIATION]
        compatibility_threshold = 1.0
        distance_excess_coeff   = 1.0
        distance_disjoint_coeff = 1.0
        distance_weight_coeff   = 0.4

        [REPRODUCTION]
        crossover_proportion     = 0.75
        elitism_min_species_size = 5

        [MUTATION]
        weight_mutation_chance  = 0.8
        node_mutation_chance    = 0.03
        link_mutation_chance    = 0.05
        disable_mutation_chance = 0.75
        weight_perturb_prob     = 0.9
        weight_perturb_strength = 0.1
        min_weight              = -2.0
        max_weight              = 2.0

        [NETWORK]
        depth = 3

        [TERMINATION]
        max_number_generations    = 1000
        fitness_termination_check = False
        fitness_threshold         = 100.0

    Public Methods:
        with_overrides(**params): Copy of this Config with some parameters replaced
        as_dict():                All parameters, by name
    """

    # [POPULATION_INIT]
    #   population_size:          number of genomes in each generation
    # [SPECIATION]
    #   compatibility_threshold:  genomes closer than this to a species' representative join it
    #   distance_excess_coeff:    weight of the excess gene count in the compatibility distance
    #   distance_disjoint_coeff:  weight of the disjoint gene count in the compatibility distance
    #   distance_weight_coeff:    weight of the mean weight difference of matching genes
    # [REPRODUCTION]
    #   crossover_proportion:     fraction of offspring produced by crossing two parents
    #   elitism_min_species_size: a species keeps its champion only if more members survive culling
    # [MUTATION]
    #   weight_mutation_chance:   probability that a genome's weights are mutated
    #   node_mutation_chance:     probability that a genome grows a node
    #   link_mutation_chance:     probability that a genome grows a connection
    #   disable_mutation_chance:  probability that a gene disabled in a parent stays disabled
    #   weight_perturb_prob:      probability of perturbing (instead of replacing) a weight
    #   weight_perturb_strength:  perturbations are drawn uniformly from [-strength, +strength]
    #   min_weight, max_weight:   range of new (or replaced) weights
    # [NETWORK]
    #   depth:                    propagation steps executed before reading a network's outputs
    # [TERMINATION]
    #   max_number_generations:    number of generations after which to stop the run
    #   fitness_termination_check: whether to stop as soon as the champion is fit enough
    #   fitness_threshold:         fitness which, when met or exceeded, stops the run

    # Section, type and default value of every parameter
    _PARAMETERS = {
        'population_size'          : ('POPULATION_INIT', int,   150),
        'compatibility_threshold'  : ('SPECIATION',      float, 1.0),
        'distance_excess_coeff'    : ('SPECIATION',      float, 1.0),
        'distance_disjoint_coeff'  : ('SPECIATION',      float, 1.0),
        'distance_weight_coeff'    : ('SPECIATION',      float, 0.4),
        'crossover_proportion'     : ('REPRODUCTION',    float, 0.75),
        'elitism_min_species_size' : ('REPRODUCTION',    int,   5),
        'weight_mutation_chance'   : ('MUTATION',        float, 0.8),
        'node_mutation_chance'     : ('MUTATION',        float, 0.03),
        'link_mutation_chance'     : ('MUTATION',        float, 0.05),
        'disable_mutation_chance'  : ('MUTATION',        float, 0.75),
        'weight_perturb_prob'      : ('MUTATION',        float, 0.9),
        'weight_perturb_strength'  : ('MUTATION',        float, 0.1),
        'min_weight'               : ('MUTATION',        float, -2.0),
        'max_weight'               : ('MUTATION',        float, 2.0),
        'depth'                    : ('NETWORK',         int,   3),
        'max_number_generations'   : ('TERMINATION',     int,   1000),
        'fitness_termination_check': ('TERMINATION',     bool,  False),
        'fitness_threshold'        : ('TERMINATION',     float, 100.0),
    }

    _PROBABILITIES = ('crossover_proportion',
                      'weight_mutation_chance',
                      'node_mutation_chance',
                      'link_mutation_chance',
                      'disable_mutation_chance',
                      'weight_perturb_prob')

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or with all default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, every parameter takes its default value.
        """
        parser = configparser.ConfigParser()
        if config_file is not None:
            if not os.path.exists(config_file):
                raise FileNotFoundError(f"Configuration file '{config_file}' not found")
            parser.read(config_file)

        # Helper function to safely parse values
        def get_value(section, key, value_type, default):
            try:
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                return parser.get(section, key)
            except (configparser.NoSectionError, configparser.NoOptionError):
                return default
            except ValueError as e:
                raise ValueError(f"bad value for '{key}' in section [{section}]: {e}") from e

        for name, (section, value_type, default) in self._PARAMETERS.items():
            object.__setattr__(self, name, get_value(section, name, value_type, default))

        self._validate()

    def _validate(self) -> None:
        for name in self._PROBABILITIES:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"'{name}' must be between 0 and 1, got {value}")
        if self.population_size < 1:
            raise ValueError(f"'population_size' must be positive, got {self.population_size}")
        if self.depth < 1:
            raise ValueError(f"'depth' must be positive, got {self.depth}")
        if self.max_number_generations < 0:
            raise ValueError(f"'max_number_generations' cannot be negative, got {self.max_number_generations}")
        if self.elitism_min_species_size < 0:
            raise ValueError(f"'elitism_min_species_size' cannot be negative, got {self.elitism_min_species_size}")
        if self.min_weight > self.max_weight:
            raise ValueError(f"'min_weight' ({self.min_weight}) exceeds 'max_weight' ({self.max_weight})")

    def __setattr__(self, name, value):
        raise AttributeError(f"Config is immutable; use with_overrides({name}=...) instead")

    def __delattr__(self, name):
        raise AttributeError("Config is immutable")

    def with_overrides(self, **params) -> 'Config':
        """
        Return a copy of this Config with some parameters replaced.

        Values are converted to the type of their parameter, the way values
        read from a configuration file are: "10" is accepted for an integer
        parameter and "no" for a boolean one, but 2.5 is not an integer.

        Parameters:
            params: New values, by parameter name

        Returns:
            The new Config
        """
        for name in params:
            if name not in self._PARAMETERS:
                raise ValueError(f"unknown configuration parameter '{name}'")

        new_config = copy.copy(self)
        for name, value in params.items():
            object.__setattr__(new_config, name, self._convert(name, value))
        new_config._validate()
        return new_config

    @classmethod
    def _convert(cls, name: str, value):
        value_type = cls._PARAMETERS[name][1]
        try:
            if value_type == bool:
                if isinstance(value, bool):
                    return value
                if isinstance(value, str) and value.lower() in configparser.ConfigParser.BOOLEAN_STATES:
                    return configparser.ConfigParser.BOOLEAN_STATES[value.lower()]
            elif value_type == int:
                if isinstance(value, str):
                    return int(value)
                if isinstance(value, int) and not isinstance(value, bool):
                    return value
            elif value_type == float:
                if not isinstance(value, bool):
                    return float(value)
        except (TypeError, ValueError) as e:
            raise ValueError(f"bad value for '{name}': {value!r}") from e
        raise ValueError(f"bad value for '{name}': {value!r} is not of type {value_type.__name__}")

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self._PARAMETERS}

    def __eq__(self, other):
        if not isinstance(other, Config):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __hash__(self):
        return hash(tuple(self.as_dict().items()))

    def __repr__(self):
        params = ', '.join(f"{name}={value!r}" for name, value in self.as_dict().items())
        return f"Config({params})"
