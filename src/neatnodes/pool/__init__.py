"""
NEAT Pool Package

This package manages the population of genomes: comparing and crossing
genomes, grouping them into species, and producing new generations.

Modules:
    reproduction: compatibility distance and crossover
    species:      Species class
    population:   Population class and initial population setup
"""

from neatnodes.pool.reproduction import calculate_compatibility_distance, breed, duplicate_connection
from neatnodes.pool.species      import Species
from neatnodes.pool.population   import Population, setup_initial_species

__all__ = ['Population',
           'Species',
           'breed',
           'calculate_compatibility_distance',
           'duplicate_connection',
           'setup_initial_species']
