"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials with built-in
support for CPU-based parallelization using joblib, and a concrete trial
evolving genomes that reproduce a DataSet.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached.

Classes:
    Trial:        Abstract base class for a run of the NEAT algorithm
    DataSetTrial: Trial scoring genomes with 'test_fitness()' against a DataSet
"""

import logging
from abc        import ABC, abstractmethod
from joblib     import Parallel, delayed
from statistics import mean
from typing     import TYPE_CHECKING

from neatnodes.genotype    import InnovationManager
from neatnodes.pool        import Population
from neatnodes.run.config  import Config
from neatnodes.run.fitness import run_function, test_fitness
if TYPE_CHECKING:
    from neatnodes.genotype    import Genome
    from neatnodes.run.dataset import DataSet

logger = logging.getLogger(__name__)

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    A trial represents one independent run of the NEAT algorithm, evolving a
    population through generations until a solution is found or the maximum
    number of generations is reached. Each generation, the fitness of every genome
    is evaluated, then the population spawns the next generation.

    Subclasses must implement:
    - _evaluate_fitness(genome): Evaluate fitness for a single genome

    Subclasses can override:
    - _reset():           Reset trial-specific state (call super()._reset())
    - _report_progress(): Report progress after each generation (default: log a summary)
    - _final_report():    Report final results (default: log the champion)
    - _terminate():       Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        failed: False if the run stopped because the fitness threshold was reached

    Public Properties:
        champion:   The fittest genome found so far
        generation: Number of generations evaluated so far

    Public Methods:
        run(): Execute a complete NEAT trial

    Parallelization of fitness evaluation for genomes:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel processes
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 config         : Config,
                 num_inputs     : int,
                 num_outputs    : int,
                 suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            num_inputs:      Number of input nodes of the evolved networks
            num_outputs:     Number of output nodes of the evolved networks
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config            = config
        self._num_inputs        : int               = num_inputs
        self._num_outputs       : int               = num_outputs
        self._generation_counter: int               = 0
        self._innovation_manager: InnovationManager = None
        self._population        : Population        = None
        self._suppress_output   : bool              = suppress_output
        self.failed             : bool              = True

    def __getstate__(self):
        # Parallel workers only need what '_evaluate_fitness' reads
        state = self.__dict__.copy()
        state['_population']         = None
        state['_innovation_manager'] = None
        return state

    @property
    def generation(self) -> int:
        return self._generation_counter

    @property
    def champion(self) -> 'Genome | None':
        """
        The fittest genome found so far.

        Considers the genomes culled in past generations as well as the evaluated
        genomes of the current generation (None before anything was evaluated).
        """
        if self._population is None:
            return None

        candidates = [genome for genome in self._population.genomes if genome.is_fitness_measured]
        if self._population.champion is not None:
            candidates.append(self._population.champion)
        if not candidates:
            return None
        return max(candidates, key=lambda genome: genome.fitness)

    def run(self, num_jobs: int = 1) -> 'Genome | None':
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation of genomes
                      1 = serial (no parallelization)
                     -1 = use all available CPU cores
                     >1 = use specified number of processes

        Returns:
            The fittest genome found
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self._population = Population(self._num_inputs,
                                      self._num_outputs,
                                      self._innovation_manager,
                                      self._config)

        # Evolution loop
        while not self._terminate():

            # Evaluate the fitness of each genome in the current generation
            self._evaluate_fitness_all(num_jobs)
            self._generation_counter += 1

            # Display progress after each generation
            if not self._suppress_output:
                self._report_progress()

            if self._fitness_threshold_reached():
                self.failed = False
                break

            # The last generation is not bred: its offspring would never be evaluated
            if self._terminate():
                break

            # The members of the population mate and create offspring
            self._population.spawn_next_generation()

        # Produce final report
        if not self._suppress_output:
            self._final_report()

        return self.champion

    def _reset(self):
        """
        Reset the trial state before starting a new run.

        Subclasses overriding this method should call super()._reset()
        and then initialize their problem-specific data.
        """
        self._innovation_manager = InnovationManager()
        self._population         = None
        self._generation_counter = 0
        self.failed              = True

    @abstractmethod
    def _evaluate_fitness(self, genome: 'Genome') -> float:
        """
        Evaluate and return the fitness of a genome.

        This method should test the genome's network on the problem domain
        and compute a fitness score. Higher fitness values indicate better
        performance and a larger share of offspring for the genome's species.

        IMPORTANT: The fitness must be a positive number (or zero).

        Parameters:
            genome: The genome to evaluate

        Returns:
            float: Fitness score for the genome
        """
        pass

    def _evaluate_fitness_all(self, num_jobs: int):
        """
        Evaluate fitness for all genomes in the population whose fitness is unknown.

        Genomes carried over unchanged from the previous generation keep their fitness.
        Uses serial or parallel evaluation based on num_jobs:
        - num_jobs=1: Sequential evaluation in single process
        - num_jobs>1 or -1: Parallel evaluation using joblib

        Either way, the fitness of each genome is set once, in this process.

        Parameters:
            num_jobs: Number of parallel processes for fitness evaluation
        """
        genomes   = [genome for genome in self._population.genomes if not genome.is_fitness_measured]
        serialize = num_jobs == 1

        if serialize:
            for genome in genomes:
                genome.fitness = self._evaluate_fitness(genome)
        else:
            fitness_all = Parallel(num_jobs)(delayed(self._evaluate_fitness)(g) for g in genomes)
            for genome, fitness in zip(genomes, fitness_all):
                genome.fitness = fitness

    def _report_progress(self):
        """
        Report trial progress after each generation.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        genomes  = self._population.genomes
        champion = self.champion
        logger.info("generation %d: %d species, %d genomes, champion fitness %.4f, mean fitness %.4f",
                    self._generation_counter,
                    len(self._population.species),
                    len(genomes),
                    champion.fitness if champion is not None else float('nan'),
                    mean(genome.fitness for genome in genomes) if genomes else float('nan'))

    def _final_report(self):
        """
        Produce final report at the end of the trial.

        This method is suppressed by setting 'self._suppress_output' to 'True',
        which we might do when running many trials.
        """
        champion = self.champion
        if champion is None:
            logger.info("trial ended after %d generations without a champion", self._generation_counter)
            return
        logger.info("trial %s after %d generations; champion fitness %.4f",
                    "failed" if self.failed else "succeeded",
                    self._generation_counter,
                    champion.fitness)
        logger.info("champion:\n%s", champion)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should stop before evaluating another generation.

        Subclasses can override this method for custom termination logic.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        return self._generation_counter >= self._config.max_number_generations

    def _fitness_threshold_reached(self) -> bool:
        """
        Check whether the fittest genome has reached the fitness threshold
        (only if 'fitness_termination_check' is enabled).
        """
        if not self._config.fitness_termination_check:
            return False
        champion = self.champion
        return champion is not None and champion.fitness >= self._config.fitness_threshold

class DataSetTrial(Trial):
    """
    Evolve genomes reproducing the function described by a DataSet.

    The fitness of a genome is measured with 'test_fitness()', running the
    genome 'config.depth' times for every row of the DataSet.
    """

    def __init__(self, dataset: 'DataSet', config: Config, suppress_output: bool = False):
        """
        Parameters:
            dataset:         input/output examples of the function to learn
            config:          configuration parameters
            suppress_output: if True, suppress progress and final reports
        """
        super().__init__(config, dataset.num_inputs, dataset.num_outputs, suppress_output)
        self._dataset: 'DataSet' = dataset

    def _evaluate_fitness(self, genome: 'Genome') -> float:
        return test_fitness(genome, self._dataset, self._config.depth)

    def _final_report(self):
        super()._final_report()

        champion = self.champion
        if champion is None:
            return
        # Show how the champion fares on the first few rows
        for row in range(min(4, self._dataset.num_entries)):
            inputs = self._dataset.get_inputs_for_row(row)
            logger.info("%s -> %s (expected %s)",
                        inputs,
                        [round(value, 4) for value in run_function(champion, inputs, self._config.depth)],
                        self._dataset.get_outputs_for_row(row))
