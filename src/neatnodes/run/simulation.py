"""
NEAT Simulation Module

Entry point evolving a genome that reproduces a DataSet.

Functions:
    evolve: Run the NEAT algorithm on a DataSet and return the champion
"""

from typing import TYPE_CHECKING

from neatnodes.run.config import Config
from neatnodes.run.trial  import DataSetTrial
if TYPE_CHECKING:
    from neatnodes.genotype    import Genome
    from neatnodes.run.dataset import DataSet

def evolve(dataset        : 'DataSet',
           config         : Config | None = None,
           num_jobs       : int           = 1,
           suppress_output: bool          = False) -> 'Genome | None':
    """
    Evolve a genome computing the function described by 'dataset'.

    The initial population consists of genomes with one input node per input
    column and one output node per output column of the DataSet, every input
    (and the bias) connected to every output.

    Parameters:
        dataset:         input/output examples of the function to learn
        config:          configuration parameters (defaults if None)
        num_jobs:        number of parallel processes for fitness evaluation
        suppress_output: if True, do not log progress and final reports

    Returns:
        The fittest genome found (None if 'max_number_generations' is 0)
    """
    if config is None:
        config = Config()

    trial = DataSetTrial(dataset, config, suppress_output=suppress_output)
    return trial.run(num_jobs)
