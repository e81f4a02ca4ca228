"""
NEAT Species Module

This module implements the Species class for the NEAT algorithm.
A species represents a cluster of genetically similar genomes
that compete primarily within their own niche.

Classes:
    Species: Represents a single species with members and fitness tracking
"""

import random
import threading
from statistics import mean
from typing     import TYPE_CHECKING

from neatnodes.errors            import StateViolation
from neatnodes.pool.reproduction import breed, calculate_compatibility_distance
if TYPE_CHECKING:
    from neatnodes.genotype   import Genome, InnovationManager
    from neatnodes.run.config import Config

class Species:
    """
    A species representing a cluster of genetically similar genomes in NEAT.

    In NEAT, the population is divided into species based on genetic similarity,
    allowing different evolutionary niches to develop independently. This protects
    innovative structures from being eliminated by competition with more mature
    solutions, as genomes only compete for offspring within their own species.

    A genome joins a species if its compatibility distance to the species'
    representative does not exceed the compatibility threshold. Once every member
    has been evaluated, 'calculate_average_fitness()' finalizes the species: its
    membership is frozen and its average fitness determines its share of the
    next generation.

    Public Attributes:
        representative:                  Genome used for distance calculations during speciation
        members:                         The genomes that are part of this species
        max_fitness:                     Best fitness ever achieved by this species
        generations_without_improvement: Generations since 'max_fitness' last improved

    Public Properties:
        average_fitness: Average fitness of the members (only once finalized)
        finalized:       Whether the membership is frozen

    Public Methods:
        add_genome(genome):                              Admit a genome if it is compatible
        calculate_average_fitness():                     Finalize the species and average its fitness
        cull():                                          Discard the least fit half of the members
        produce_offspring(crossover, innovation_manager): Create one offspring from the members

    Life Cycle:
    1. Created with a representative, which need not be a member
    2. Accumulates members during speciation based on genetic similarity
    3. Finalized once the fitness of its members is known
    4. Culled, then produces offspring proportional to its average fitness
    5. Re-created for the next generation around one of its surviving members
    """

    def __init__(self,
                 representative                 : 'Genome',
                 config                         : 'Config',
                 max_fitness                    : float = 0.0,
                 generations_without_improvement: int   = 0):
        """
        Initialize a new species.

        Parameters:
            representative:                  the Genome that represents this species in the speciation process
            config:                          stores configuration parameters
            max_fitness:                     best fitness achieved so far by the species
            generations_without_improvement: generations since 'max_fitness' last improved
        """
        self._config: 'Config' = config

        self.representative: 'Genome'       = representative
        self.members       : list['Genome'] = []

        self.max_fitness                    : float = max_fitness
        self.generations_without_improvement: int   = generations_without_improvement

        self._average_fitness: float | None = None
        self._finalized      : bool         = False

        # Serializes concurrent admissions
        self._lock = threading.Lock()

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def average_fitness(self) -> float:
        if not self._finalized:
            raise StateViolation("the average fitness of a species is only known once it is finalized")
        return self._average_fitness

    def add_genome(self, genome: 'Genome') -> bool:
        """
        Add a genome to the species, if it is compatible with the representative.

        Parameters:
            genome: The genome to add

        Returns:
            True if the genome was admitted, False otherwise
        """
        with self._lock:
            if self._finalized:
                raise StateViolation("cannot add a genome to a finalized species")

            distance = calculate_compatibility_distance(genome, self.representative, self._config)
            if distance > self._config.compatibility_threshold:
                return False

            self.members.append(genome)
            return True

    def calculate_average_fitness(self) -> None:
        """
        Finalize the species and compute the average fitness of its members.
        The fitness of every member must have been measured.
        """
        if not self.members:
            raise StateViolation("cannot average the fitness of an empty species")

        self._average_fitness = mean(genome.fitness for genome in self.members)
        self._finalized       = True

    def cull(self) -> 'Genome':
        """
        Remove the least fit half of the members (rounding down the number removed).

        If the surviving champion beats the best fitness ever achieved by the
        species, the record is updated and the stagnation counter reset.

        Returns:
            The fittest member
        """
        if not self.members:
            raise StateViolation("cannot cull an empty species")

        sorted_members = sorted(self.members, key=lambda genome: genome.fitness, reverse=True)
        num_survivors  = len(sorted_members) - len(sorted_members) // 2
        self.members   = sorted_members[:num_survivors]

        champion = self.members[0]
        if champion.fitness > self.max_fitness:
            self.max_fitness                     = champion.fitness
            self.generations_without_improvement = 0

        return champion

    def produce_offspring(self, crossover: bool, innovation_manager: 'InnovationManager') -> 'Genome':
        """
        Create one new genome from the members of this species.

        A random member is selected as father. With crossover, a second random
        member (possibly the same one) is selected as mother; without it, the father
        is bred with itself. The result of breeding is then mutated.

        Parameters:
            crossover:          whether to mate two (randomly selected) members
            innovation_manager: shared by the genomes of this run

        Returns:
            The offspring
        """
        if not self._finalized:
            raise StateViolation("a species must be finalized before producing offspring")

        father = random.choice(self.members)
        mother = random.choice(self.members) if crossover else father

        offspring = breed(father, mother, innovation_manager, self._config)
        offspring.mutate(self._config)
        return offspring

    def __len__(self):
        return len(self.members)

    def __repr__(self):
        return (f"Species(members={len(self.members)}, max_fitness={self.max_fitness:.4f}, "
                f"stagnation={self.generations_without_improvement}, finalized={self._finalized})")
