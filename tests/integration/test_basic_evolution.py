"""
Integration tests for complete evolutionary runs.

These tests use a fixed seed and small populations; they check that evolution
makes progress on real problems and that parallel scoring changes nothing.
"""

import pytest

from neuralator import Config, Evolution, TrainingDatum, run_evolution, sine_training_set
from neuralator.network import OutputMapping


@pytest.fixture
def sine_config():
    config = Config()
    config.layer_sizes = (4, 8, 9)
    config.population_size = 40
    config.survivors_per_generation = 5
    config.generations = 15
    config.fill_rate = 0.6
    config.seed = 1234
    return config


@pytest.fixture
def sine_set():
    return sine_training_set(count=16, bits=4)


class TestSineEvolution:

    def test_best_improves_or_holds(self, sine_config, sine_set):
        reports = []

        Evolution(sine_config, sine_set, reporter=reports.append).run()

        errors = [report.sum_of_squares for report in reports]
        assert len(reports) == sine_config.generations
        assert errors[-1] <= errors[0]
        assert errors == sorted(errors, reverse=True)

    def test_winner_scores_consistently(self, sine_config, sine_set):
        evolution = Evolution(sine_config, sine_set, suppress_output=True)
        winner = evolution.run()

        mapping = OutputMapping.from_config(sine_config)
        rescored = winner.evaluate(sine_set, mapping)

        assert rescored.matches == winner.score.matches
        assert winner.score.matches == max(network.score.matches for network in evolution.population.networks)

    def test_serial_equals_parallel(self, sine_config, sine_set):
        serial   = Evolution(sine_config, sine_set, suppress_output=True).run(num_jobs=1)
        parallel = Evolution(sine_config, sine_set, suppress_output=True).run(num_jobs=2)

        assert serial.fingerprint() == parallel.fingerprint()
        assert serial.score == parallel.score

    def test_culling_during_run(self, sine_config, sine_set):
        """A run stagnating from the start culls without losing members or its best."""
        sine_config.cull_stagnation_trigger = 1
        sine_config.cull_stagnation_period = 2
        sine_config.cull_distance = 100.0
        reports = []

        evolution = Evolution(sine_config, sine_set, reporter=reports.append)
        evolution.run()

        errors = [report.sum_of_squares for report in reports]
        assert len(evolution.population) == sine_config.population_size
        assert errors == sorted(errors, reverse=True)


class TestXorEvolution:

    def test_learns_something(self):
        config = Config()
        config.layer_sizes = (2, 4, 2)
        config.population_size = 30
        config.survivors_per_generation = 4
        config.generations = 10
        config.fill_rate = 0.8
        config.rank_by = "score"
        config.seed = 42
        data = [TrainingDatum(-1.0, (0.0, 0.0)),
                TrainingDatum( 1.0, (0.0, 1.0)),
                TrainingDatum( 1.0, (1.0, 0.0)),
                TrainingDatum(-1.0, (1.0, 1.0))]

        winner = run_evolution(config.layer_sizes, config, data, reporter=lambda report: None)

        # always answering one class already matches half the data
        assert winner.score.matches >= 2
