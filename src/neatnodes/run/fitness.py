"""
NEAT Fitness Module

This module runs genomes on concrete inputs and scores them against a DataSet.

Functions:
    run_function: Compute a genome's outputs for one input vector
    test_fitness: Score how well a genome reproduces a DataSet
"""

from typing import TYPE_CHECKING

from neatnodes.errors import DegenerateInputViolation, InputContractViolation
if TYPE_CHECKING:
    from neatnodes.genotype    import Genome
    from neatnodes.run.dataset import DataSet

def run_function(genome: 'Genome', inputs: list[float], depth: int) -> list[float]:
    """
    Feed an input vector to a genome and return its outputs.

    Input i (counting from 0) is written to the input node labelled i + 1.
    The genome is run 'depth' times, its outputs are read in order of their
    labels, and the genome is then reset.

    Parameters:
        genome: the genome to run
        inputs: one value per input node of the genome
        depth:  number of propagation steps before reading the outputs

    Returns:
        The values of the output nodes
    """
    if len(inputs) != genome.num_inputs:
        raise InputContractViolation(f"the genome has {genome.num_inputs} inputs, got {len(inputs)} values")

    genome.write_inputs({i + 1: value for i, value in enumerate(inputs)})
    for _ in range(depth):
        genome.run()

    outputs = list(genome.read_outputs().values())
    genome.reset()
    return outputs

def test_fitness(genome: 'Genome', dataset: 'DataSet', depth: int) -> float:
    """
    Measure how well a genome reproduces the function described by a DataSet.

    The fitness grows quadratically as the total (weighted) difference between
    the genome's outputs and the expected outputs shrinks; the largest possible
    difference is assumed to be 2 per output and row.

    Parameters:
        genome:  the genome to test
        dataset: input/output examples; their arity must match the genome's
        depth:   number of propagation steps before reading the outputs

    Returns:
        A fitness between 0 and 100, with 100 for a genome reproducing the DataSet perfectly
    """
    if dataset.num_inputs != genome.num_inputs:
        raise InputContractViolation(f"the dataset has {dataset.num_inputs} inputs, the genome {genome.num_inputs}")
    if dataset.num_outputs != genome.num_outputs:
        raise InputContractViolation(f"the dataset has {dataset.num_outputs} outputs, the genome {genome.num_outputs}")

    total_difference        = 0.0
    max_possible_difference = 0.0
    for row in range(dataset.num_entries):
        result   = run_function(genome, dataset.get_inputs_for_row(row), depth)
        expected = dataset.get_outputs_for_row(row)
        weight   = dataset.get_weight_for_row(row)

        max_possible_difference += weight * dataset.num_outputs * 2
        for actual, target in zip(result, expected):
            total_difference += weight * abs(actual - target)

    if max_possible_difference <= 0:
        raise DegenerateInputViolation("cannot measure fitness against a dataset without (positively weighted) rows")

    raw_fitness = (max_possible_difference - total_difference) ** 2
    return raw_fitness / max_possible_difference ** 2 * 100.0

# Not a test, despite its name
test_fitness.__test__ = False
