"""
neatnodes - NEAT (NeuroEvolution of Augmenting Topologies) in Python.

This package evolves small recurrent networks (genomes) that reproduce the
function described by a dataset of input/output examples. Genomes grow by
mutation, are crossed using historical markings (innovation numbers), and
compete within species of genetically similar genomes.

Main components:
- genotype:    Genomes, their genes, and the innovation number ledger
- pool:        Compatibility distance, crossover, species and populations
- run:         Configuration, datasets, fitness evaluation and trials
- activations: The sigmoid applied by every node

Example:
    >>> from neatnodes import Config, DataSet, evolve, run_function
    >>> dataset  = DataSet([[0, 0], [0, 1], [1, 0], [1, 1]], [[0], [1], [1], [0]])
    >>> config   = Config("config.ini")
    >>> champion = evolve(dataset, config)
    >>> run_function(champion, [0, 1], config.depth)
"""

__version__ = "0.1.0"

from neatnodes.errors   import (NeatError,
                                StructuralViolation,
                                StateViolation,
                                InputContractViolation,
                                DegenerateInputViolation)
from neatnodes.genotype import Genome, NodeGene, NodeType, ConnectionGene, InnovationManager
from neatnodes.pool     import Species, Population, breed, calculate_compatibility_distance, setup_initial_species
from neatnodes.run      import Config, DataSet, Trial, DataSetTrial, evolve, run_function, test_fitness

__all__ = [
    "Config",
    "ConnectionGene",
    "DataSet",
    "DataSetTrial",
    "DegenerateInputViolation",
    "Genome",
    "InnovationManager",
    "InputContractViolation",
    "NeatError",
    "NodeGene",
    "NodeType",
    "Population",
    "Species",
    "StateViolation",
    "StructuralViolation",
    "Trial",
    "breed",
    "calculate_compatibility_distance",
    "evolve",
    "run_function",
    "setup_initial_species",
    "test_fitness",
]
