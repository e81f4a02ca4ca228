"""
Unit tests for neatnodes.pool.population module.

Tests cover the creation of the initial species, speciation and
the production of a new generation from an evaluated one.
"""

import pytest
from unittest.mock import patch

from neatnodes.genotype        import NodeType
from neatnodes.pool.population import Population, setup_initial_species
from neatnodes.pool.species    import Species


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def config(default_config):
    return default_config.with_overrides(population_size=20)


@pytest.fixture
def population(innovation_manager, config):
    """Population of 20 genomes with 2 inputs and 1 output."""
    return Population(2, 1, innovation_manager, config)


def evaluate(genomes, fitness=lambda i: float(i)):
    for i, genome in enumerate(genomes):
        genome.fitness = fitness(i)


def distant_genome(population):
    """A copy of a member of 'population' which is too different to join its species."""
    genome = population.genomes[0].clone_genome()
    for conn in genome.conn_genes.values():
        conn.weight = 5.0
    return genome


# ============================================================================
# Test Initial Species
# ============================================================================

class TestSetupInitialSpecies:

    def test_initial_species(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)

        assert len(species.members) == 5
        for genome in species.members:
            assert len(genome.conn_genes) == 8
            assert len(genome.node_genes) == 6
            assert genome.num_inputs  == 3
            assert genome.num_outputs == 2

    def test_node_labels(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)
        genome  = species.members[0]

        assert genome.node_genes[0].type == NodeType.BIAS
        for label in (1, 2, 3):
            assert genome.node_genes[label].type == NodeType.INPUT
        for label in (4, 5):
            assert genome.node_genes[label].type == NodeType.OUTPUT

    def test_bias_and_inputs_connected_to_outputs(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)
        genome  = species.members[0]

        pairs = {(conn.node_in, conn.node_out) for conn in genome.conn_genes.values()}
        assert pairs == {(node_in, node_out) for node_in in range(4) for node_out in (4, 5)}
        assert all(conn.weight == 1.0 and conn.enabled for conn in genome.conn_genes.values())

    def test_members_share_innovation_numbers(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)
        assert sorted(species.members[0].conn_genes) == list(range(1, 9))
        assert all(genome.to_dict() == species.members[0].to_dict() for genome in species.members)

    def test_members_are_independent(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)
        species.members[0].conn_genes[1].weight = -1.0
        assert species.members[1].conn_genes[1].weight == 1.0
        assert species.representative.conn_genes[1].weight == 1.0

    def test_representative_is_not_a_member(self, innovation_manager, default_config):
        species = setup_initial_species(3, 2, 5, innovation_manager, default_config)
        assert all(genome is not species.representative for genome in species.members)
        assert not species.finalized


# ============================================================================
# Test Initialization
# ============================================================================

class TestPopulationInit:

    def test_init(self, population):
        assert len(population.species) == 1
        assert len(population.genomes) == 20
        assert population.champion is None

    def test_genomes_are_unevaluated(self, population):
        assert not any(genome.is_fitness_measured for genome in population.genomes)


# ============================================================================
# Test Speciation
# ============================================================================

class TestPopulationSpeciate:

    def test_compatible_genome_joins_species(self, population):
        genome = population.genomes[0].clone_genome()
        population.speciate([genome])
        assert len(population.species) == 1
        assert genome in population.species[0].members

    def test_incompatible_genome_founds_species(self, population):
        genome = distant_genome(population)
        population.speciate([genome])

        assert len(population.species) == 2
        assert population.species[1].representative is genome
        assert population.species[1].members == [genome]

    def test_genome_joins_first_compatible_species(self, population):
        first  = distant_genome(population)
        second = first.clone_genome()
        population.speciate([first, second])
        assert len(population.species) == 2
        assert population.species[1].members == [first, second]


# ============================================================================
# Test Next Generation
# ============================================================================

class TestPopulationSpawnNextGeneration:

    def test_spawn_keeps_population_size(self, population):
        evaluate(population.genomes)
        population.spawn_next_generation()
        assert len(population.genomes) == 20

    def test_spawn_returns_champion(self, population):
        evaluate(population.genomes)
        champion = population.spawn_next_generation()
        assert champion is population.champion
        assert champion.fitness == 19.0

    def test_champion_is_carried_over(self, population):
        evaluate(population.genomes)
        champion = population.spawn_next_generation()
        assert champion in population.genomes
        assert [genome for genome in population.genomes if genome.is_fitness_measured] == [champion]

    def test_no_elitism_in_small_species(self, innovation_manager, default_config):
        population = Population(2, 1, innovation_manager, default_config.with_overrides(population_size=10))
        evaluate(population.genomes)
        champion = population.spawn_next_generation()
        # 5 members survive culling, which is not more than 'elitism_min_species_size'
        assert champion not in population.genomes
        assert not any(genome.is_fitness_measured for genome in population.genomes)

    def test_champion_is_kept_across_generations(self, population):
        evaluate(population.genomes, lambda i: 100.0 + i)
        best = population.spawn_next_generation()
        evaluate([genome for genome in population.genomes if not genome.is_fitness_measured], lambda i: 1.0)
        assert population.spawn_next_generation() is best

    def test_species_record_carries_over(self, population):
        evaluate(population.genomes)
        population.spawn_next_generation()
        species = population.species[0]
        assert species.max_fitness == 19.0
        assert species.generations_without_improvement == 1
        assert not species.finalized

    def test_innovations_are_forgotten(self, population, innovation_manager):
        evaluate(population.genomes)
        population.spawn_next_generation()
        assert len(innovation_manager) == 0

    def test_zero_fitness(self, population):
        evaluate(population.genomes, lambda i: 0.0)
        population.spawn_next_generation()
        assert len(population.genomes) == 20

    def test_offspring_allocation(self, population):
        population.speciate([distant_genome(population)])
        evaluate(population.species[0].members, lambda i: 30.0)
        evaluate(population.species[1].members, lambda i: 10.0)
        first, second = population.species

        requests = []
        def produce_offspring(species, crossover, innovation_manager):
            requests.append((species, crossover))
            return species.members[0].clone_genome()

        with patch.object(Species, 'produce_offspring', autospec=True, side_effect=produce_offspring):
            population.spawn_next_generation()

        # 15 offspring for the first species (11 through crossover), one of which is its champion
        assert [crossover for species, crossover in requests if species is first]  == [True] * 11 + [False] * 3
        assert [crossover for species, crossover in requests if species is second] == [True] * 3 + [False] * 2

    def test_empty_species_are_removed(self, population):
        population.speciate([distant_genome(population)])
        evaluate(population.genomes)
        first = population.species[0]

        with patch.object(Species, 'produce_offspring', autospec=True,
                          side_effect=lambda species, crossover, innovation_manager: first.members[0].clone_genome()):
            population.spawn_next_generation()

        assert len(population.species) == 1
