"""
Shared fixtures for integration tests.
"""

import pytest
import random
import numpy as np

from neatnodes.genotype        import InnovationManager
from neatnodes.pool.population import setup_initial_species
from neatnodes.run.config      import Config
from neatnodes.run.fitness     import test_fitness as measure_fitness


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    # Using seed 42 for reproducibility
    np.random.seed(42)
    random.seed(42)

    yield

    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def xor_config():
    """A small but workable configuration for XOR."""
    return Config().with_overrides(population_size=60,
                                   max_number_generations=15,
                                   compatibility_threshold=3.0,
                                   node_mutation_chance=0.1,
                                   link_mutation_chance=0.2)


@pytest.fixture
def initial_xor_fitness(xor_dataset, xor_config):
    """Fitness of the genomes of the first generation, which are all identical."""
    species = setup_initial_species(2, 1, 1, InnovationManager(), xor_config)
    return measure_fitness(species.members[0], xor_dataset, xor_config.depth)
