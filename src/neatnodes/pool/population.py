"""
NEAT Population Module

This module implements the Population class, which holds the species of the
current generation and turns one evaluated generation into the next one.

Classes:
    Population: The genomes of the current generation, split into species

Functions:
    setup_initial_species: Build the species holding the first generation
"""

import logging
import math
import random
from typing import TYPE_CHECKING

from neatnodes.genotype     import Genome, InnovationManager, NodeType
from neatnodes.pool.species import Species
if TYPE_CHECKING:
    from neatnodes.run.config import Config

logger = logging.getLogger(__name__)

def setup_initial_species(num_inputs        : int,
                          num_outputs       : int,
                          population_size   : int,
                          innovation_manager: InnovationManager,
                          config            : 'Config') -> Species:
    """
    Create the first generation: 'population_size' identical genomes in one species.

    Every genome has the given number of input and output nodes (inputs labelled
    1..num_inputs, outputs labelled after them), and a connection of weight 1.0
    from every input node and from the bias node to every output node.

    Parameters:
        num_inputs:         number of input nodes
        num_outputs:        number of output nodes
        population_size:    number of genomes
        innovation_manager: shared by the genomes of this run
        config:             stores configuration parameters

    Returns:
        The species holding the initial population; its representative is the
        template genome, which is not itself a member
    """
    template = Genome(innovation_manager)
    for label in range(1, num_inputs + 1):
        template.add_node(label, NodeType.INPUT)
    for label in range(num_inputs + 1, num_inputs + num_outputs + 1):
        template.add_node(label, NodeType.OUTPUT)

    # Connect the bias and all input nodes to all output nodes
    for node_in in range(0, num_inputs + 1):
        for node_out in range(num_inputs + 1, num_inputs + num_outputs + 1):
            innovation = innovation_manager.get_innovation_number(node_in, node_out)
            template.add_connection(node_in, node_out, 1.0, True, innovation)

    species = Species(template, config)
    for _ in range(population_size):
        if not species.add_genome(template.clone_genome()):
            raise RuntimeError("a copy of the template genome was rejected by its own species")

    return species

class Population:
    """
    A population of evolving genomes in the NEAT algorithm.

    The population owns the species of the current generation and, once the
    fitness of every genome is known, produces the next generation: each species
    is culled and breeds a number of offspring proportional to its average fitness,
    and the offspring are split into species again.

    Public Attributes:
        species:  The species of the current generation
        champion: The fittest genome culled so far (None before the first generation is spawned)

    Public Properties:
        genomes: All genomes of the current generation

    Public Methods:
        spawn_next_generation(): Create the next generation through evolution
        speciate(genomes):       Assign genomes to species
    """

    def __init__(self,
                 num_inputs        : int,
                 num_outputs       : int,
                 innovation_manager: InnovationManager,
                 config            : 'Config'):
        """
        Initialize the population with identical, minimally connected genomes, all in one species.

        Parameters:
            num_inputs:         number of input nodes of every genome
            num_outputs:        number of output nodes of every genome
            innovation_manager: shared by the genomes of this run
            config:             stores configuration parameters
        """
        self._config            : 'Config'          = config
        self._innovation_manager: InnovationManager = innovation_manager

        self.species : list[Species] = [setup_initial_species(num_inputs,
                                                              num_outputs,
                                                              config.population_size,
                                                              innovation_manager,
                                                              config)]
        self.champion: Genome | None = None

    @property
    def genomes(self) -> list[Genome]:
        return [genome for species in self.species for genome in species.members]

    def spawn_next_generation(self) -> Genome:
        """
        Create the next generation through selection and reproduction.

        The fitness of every genome in the current generation must be known.

        Step 1: Offspring allocation
        - Finalize every species and compute its average fitness
        - Each species gets a share of the population proportional to its average fitness

        Step 2: Reproduction
        - Each species is culled, keeping its fittest half
        - The champion of a species which is still large enough is copied unchanged
        - The other offspring are created through crossover (for a configurable
          fraction of them) or by mutating a copy of a single parent

        Step 3: Speciation
        - Each surviving species is given a random survivor as representative
        - All offspring are assigned to species, new species are created as needed
        - Empty species are removed

        Returns:
            The fittest genome found so far
        """
        # Step 1: offspring allocation
        for species in self.species:
            species.calculate_average_fitness()

        total_average_fitness = sum(species.average_fitness for species in self.species)

        # Step 2: reproduction
        offspring = []
        for species in self.species:
            if total_average_fitness > 0:
                share = species.average_fitness / total_average_fitness
            else:
                share = 1.0 / len(self.species)
            num_offspring  = math.floor(share * self._config.population_size)
            num_crossovers = math.floor(num_offspring * self._config.crossover_proportion)

            species_champion = species.cull()
            if self.champion is None or species_champion.fitness > self.champion.fitness:
                self.champion = species_champion

            # Copy the champion of large enough species into the next generation
            if len(species.members) > self._config.elitism_min_species_size:
                offspring.append(species_champion)
                num_offspring -= 1

            for i in range(num_offspring):
                offspring.append(species.produce_offspring(i < num_crossovers, self._innovation_manager))

        # Step 3: speciation
        next_species = []
        for species in self.species:
            next_species.append(Species(random.choice(species.members),
                                        self._config,
                                        species.max_fitness,
                                        species.generations_without_improvement + 1))
        self.species = next_species

        self.speciate(offspring)

        num_species  = len(self.species)
        self.species = [species for species in self.species if species.members]
        if len(self.species) < num_species:
            logger.debug("removed %d empty species", num_species - len(self.species))

        self._innovation_manager.new_generation()

        return self.champion

    def speciate(self, genomes: list[Genome]) -> None:
        """
        Assign each genome to the first species which admits it.
        A genome admitted by no species founds a new one, of which it is the representative.

        Parameters:
            genomes: The genomes to assign
        """
        for genome in genomes:
            if any(species.add_genome(genome) for species in self.species):
                continue

            new_species = Species(genome, self._config)
            new_species.add_genome(genome)
            self.species.append(new_species)
            logger.debug("created species #%d", len(self.species))
