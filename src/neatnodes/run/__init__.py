"""
NEAT Run Package

Everything needed to run the NEAT algorithm: configuration, datasets,
fitness evaluation, and the trials driving the generational loop.

Modules:
    config:     Config class
    dataset:    DataSet class
    fitness:    run_function and test_fitness
    trial:      Trial and DataSetTrial classes
    simulation: evolve entry point
"""

from neatnodes.run.config     import Config
from neatnodes.run.dataset    import DataSet
from neatnodes.run.fitness    import run_function, test_fitness
from neatnodes.run.trial      import Trial, DataSetTrial
from neatnodes.run.simulation import evolve

__all__ = ['Config',
           'DataSet',
           'DataSetTrial',
           'Trial',
           'evolve',
           'run_function',
           'test_fitness']
