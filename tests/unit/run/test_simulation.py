"""
Unit tests for neatnodes.run.simulation module.
"""

from unittest.mock import patch

from neatnodes.run            import simulation
from neatnodes.run.config     import Config
from neatnodes.run.trial      import DataSetTrial


class TestEvolve:

    def test_evolve_uses_default_config(self, xor_dataset):
        with patch.object(DataSetTrial, 'run', autospec=True, return_value=None) as run:
            simulation.evolve(xor_dataset)
        trial = run.call_args.args[0]
        assert trial._config == Config()
        assert run.call_args.args[1] == 1

    def test_evolve_passes_arguments(self, xor_dataset):
        config = Config().with_overrides(max_number_generations=2)
        with patch.object(DataSetTrial, 'run', autospec=True, return_value="champion") as run:
            result = simulation.evolve(xor_dataset, config, num_jobs=-1, suppress_output=True)

        trial = run.call_args.args[0]
        assert result == "champion"
        assert trial._config is config
        assert trial._suppress_output is True
        assert run.call_args.args[1] == -1

    def test_evolve_without_generations(self, xor_dataset):
        config = Config().with_overrides(max_number_generations=0)
        assert simulation.evolve(xor_dataset, config, suppress_output=True) is None

    def test_evolve_returns_champion(self, xor_dataset):
        config   = Config().with_overrides(population_size=10, max_number_generations=2)
        champion = simulation.evolve(xor_dataset, config, suppress_output=True)
        assert champion.is_fitness_measured
        assert champion.num_inputs == 2
