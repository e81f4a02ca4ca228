"""
NEAT Reproduction Module

This module implements the functions that compare and combine genomes:
the compatibility distance used for speciation, and crossover.

Functions:
    calculate_compatibility_distance: Genetic distance between two genomes
    breed:                            Create an offspring by crossing two parents
    duplicate_connection:             Copy a connection gene (and its endpoints) into another genome
"""

import random
from typing import TYPE_CHECKING

from neatnodes.errors   import DegenerateInputViolation, StateViolation
from neatnodes.genotype import Genome, ConnectionGene, InnovationManager
if TYPE_CHECKING:
    from neatnodes.run.config import Config

def calculate_compatibility_distance(genome1: Genome, genome2: Genome, config: 'Config') -> float:
    """
    Calculate the genetic distance between two genomes.

    The connection genes of the two genomes are aligned by innovation number:
     + matching genes are present in both genomes
     + disjoint genes are present in one genome only and fall within
       the range of innovation numbers of the other genome
     + excess genes are present in one genome only and fall outside
       the range of innovation numbers of the other genome

    The distance is:
        E * num_excess / N + D * num_disjoint / N + W * mean weight difference of matching genes
    where N is the number of connection genes of the larger genome.
    If no genes match, the weight term is zero.

    Parameters:
        genome1: first genome
        genome2: second genome
        config:  provides the coefficients E, D and W

    Returns:
        The genetic distance
    """
    if not genome1.conn_genes or not genome2.conn_genes:
        raise DegenerateInputViolation("cannot measure the distance to a genome without connections")

    innovations1 = set(genome1.conn_genes)
    innovations2 = set(genome2.conn_genes)
    max_innovation1 = max(innovations1)
    max_innovation2 = max(innovations2)

    num_excess   = 0
    num_disjoint = 0
    for innovation in innovations1 - innovations2:
        if innovation > max_innovation2:
            num_excess   += 1
        else:
            num_disjoint += 1
    for innovation in innovations2 - innovations1:
        if innovation > max_innovation1:
            num_excess   += 1
        else:
            num_disjoint += 1

    matching = innovations1 & innovations2
    if matching:
        weight_diff = sum(abs(genome1.conn_genes[i].weight - genome2.conn_genes[i].weight)
                          for i in sorted(matching))
        avg_weight_diff = weight_diff / len(matching)
    else:
        avg_weight_diff = 0.0

    N = max(len(innovations1), len(innovations2))
    return config.distance_excess_coeff   * num_excess   / N + \
           config.distance_disjoint_coeff * num_disjoint / N + \
           config.distance_weight_coeff   * avg_weight_diff

def breed(father            : Genome,
          mother            : Genome,
          innovation_manager: InnovationManager,
          config            : 'Config') -> Genome:
    """
    Create a new genome by crossing two parent genomes.

    The connection genes of the parents are aligned by innovation number.
    Matching genes are inherited from a randomly chosen parent; the genes present
    in one parent only are inherited from the fitter parent (the mother, unless the
    father is strictly fitter). A gene disabled in either parent has a chance of
    remaining disabled in the offspring; otherwise it is enabled.

    The same genome may be passed as both father and mother, in which
    case the offspring is a copy of it (up to re-enabled genes).

    Parameters:
        father:             first parent; its fitness must have been measured
        mother:             second parent; its fitness must have been measured
        innovation_manager: shared by the genomes of this run
        config:             stores configuration parameters

    Returns:
        The offspring
    """
    if not father.is_fitness_measured or not mother.is_fitness_measured:
        raise StateViolation("both parents must have their fitness measured before breeding")

    father_is_fitter = father.fitness > mother.fitness
    fitter_parent    = father if father_is_fitter else mother

    offspring = Genome(innovation_manager)
    for innovation in sorted(set(father.conn_genes) | set(mother.conn_genes)):
        father_gene = father.conn_genes.get(innovation)
        mother_gene = mother.conn_genes.get(innovation)

        # Matching genes
        if father_gene is not None and mother_gene is not None:
            if random.random() < 0.5:
                parent, gene = father, father_gene
            else:
                parent, gene = mother, mother_gene
            disabled = not father_gene.enabled or not mother_gene.enabled

        # Disjoint and excess genes come from the fitter parent only
        else:
            gene = fitter_parent.conn_genes.get(innovation)
            if gene is None:
                continue
            parent   = fitter_parent
            disabled = not gene.enabled

        enabled = not (disabled and random.random() < config.disable_mutation_chance)
        duplicate_connection(gene, parent, offspring, enabled)

    return offspring

def duplicate_connection(conn: ConnectionGene, parent: Genome, offspring: Genome, enabled: bool) -> None:
    """
    Add to 'offspring' a copy of the connection gene 'conn' of genome 'parent'.

    The endpoints of the connection are copied first, unless already present.

    Parameters:
        conn:      connection gene to copy
        parent:    genome which owns the connection
        offspring: genome receiving the copy
        enabled:   whether the copy is enabled
    """
    for label in (conn.node_in, conn.node_out):
        if label not in offspring.node_genes:
            offspring.add_node(label, parent.node_genes[label].type)
    offspring.add_connection(conn.node_in, conn.node_out, conn.weight, enabled, conn.innovation)
