"""
Neuralator Evolution Module

This module implements the evolutionary run: a Population of networks scored
against a training set, ranked, culled and bred, for a fixed number of
generations. Scoring can be parallelized with joblib.

Classes:
    Evolution: One complete evolutionary run

Functions:
    run_evolution(layer_sizes, config, training_set): Run and return the winning network
"""

import copy
import random
import time
from typing import Callable, Iterable, Optional, Sequence

from loguru import logger

from neuralator.network       import Network
from neuralator.pool          import Population
from neuralator.run.config    import Config
from neuralator.run.report    import GenerationReport, log_report
from neuralator.run.training  import TrainingDatum, validate_training_set

Reporter = Callable[[GenerationReport], None]

class Evolution:
    """
    One evolutionary run.

    Each generation goes through:
        evaluate -> rank -> cull (when stagnating) -> breed -> report
    The last generation is evaluated, ranked and reported but not bred, and the
    member with the highest score is the winner.

    The configuration is copied and validated when the run is created, so later
    changes to the caller's Config do not affect it. The run owns its random
    source, seeded from 'config.seed'.

    Public Attributes:
        population: The current generation (None before 'run')
        generation: Index of the generation being processed
        winner:     The winning network (None before the run completes)

    Public Methods:
        run(num_jobs): Execute the run and return the winner

    Parallelization of the scoring of a generation:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel jobs
        num_jobs=-1: Use all available CPU cores
    """

    def __init__(self,
                 config         : Config,
                 training_set   : Iterable[TrainingDatum],
                 reporter       : Optional[Reporter] = None,
                 suppress_output: bool = False):
        """
        Parameters:
            config:          Configuration parameters
            training_set:    The data every network is scored against (not empty)
            reporter:        Called with a GenerationReport after every generation;
                             defaults to logging the report
            suppress_output: If True, no report is produced
        """
        self._config: Config = copy.copy(config)
        self._config.validate()

        self._training_set   : tuple[TrainingDatum, ...] = validate_training_set(training_set)
        self._reporter       : Reporter                  = reporter or log_report
        self._suppress_output: bool                      = suppress_output

        self._rng      : random.Random        = random.Random(self._config.seed)
        self.population: Optional[Population] = None
        self.generation: int                  = 0
        self.winner    : Optional[Network]    = None

    @property
    def config(self) -> Config:
        return self._config

    def run(self, num_jobs: Optional[int] = None) -> Network:
        """
        Run all generations and return the winner.

        Parameters:
            num_jobs: Number of parallel jobs used to score a generation;
                      defaults to 'config.num_jobs'
        """
        if num_jobs is None:
            num_jobs = self._config.num_jobs

        logger.info("Evolving {} networks of layer sizes {} for {} generations",
                    self._config.population_size, self._config.layer_sizes, self._config.generations)

        self.population = Population(self._config, self._rng)
        started = time.perf_counter()

        for generation in range(self._config.generations):
            self.generation = generation
            last = generation == self._config.generations - 1

            # score every network, then continue only once all of them are done
            portion_start = time.perf_counter()
            self.population.evaluate(self._training_set, num_jobs)
            propagation_time = time.perf_counter() - portion_start

            portion_start = time.perf_counter()
            best = self.population.rank()
            if not last:
                if self.population.should_cull():
                    self.population.cull()
                self.population.spawn_next_generation()
            breeding_time = time.perf_counter() - portion_start

            if not self._suppress_output:
                self._reporter(self._generation_report(best, time.perf_counter() - started,
                                                       propagation_time, breeding_time))

        self.winner = self.population.get_fittest_network()
        logger.info("Winner scored {}/{} with average confidence {:.4f}",
                    self.winner.score.matches, len(self._training_set), self.winner.score.average_confidence)
        return self.winner

    def _generation_report(self, best: Network, elapsed: float,
                           propagation_time: float, breeding_time: float) -> GenerationReport:
        score = best.score
        return GenerationReport(elapsed            = elapsed,
                                propagation_time   = propagation_time,
                                breeding_time      = breeding_time,
                                generation         = self.generation,
                                best_score         = score.matches,
                                training_set_size  = len(self._training_set),
                                sum_of_custom      = score.sum_of_custom,
                                sum_of_roots       = score.sum_of_roots,
                                sum_of_squares     = score.sum_of_squares,
                                average_confidence = score.average_confidence,
                                stagnation         = self.population.stagnation)

def run_evolution(layer_sizes : Sequence[int],
                  config      : Config,
                  training_set: Iterable[TrainingDatum],
                  reporter    : Optional[Reporter] = None,
                  num_jobs    : Optional[int] = None) -> Network:
    """
    Evolve networks with the given layer sizes and return the winner.

    Blocks until every generation has been processed.

    Parameters:
        layer_sizes:  The number of nodes in each layer, input layer first
        config:       Configuration parameters (its 'layer_sizes' is overridden)
        training_set: The data every network is scored against
        reporter:     Called with a GenerationReport after every generation
        num_jobs:     Number of parallel jobs used to score a generation

    Raises:
        ConfigurationError: if the configuration cannot drive a run
        ValueError:         if the training set is empty
    """
    config = copy.copy(config)
    config.layer_sizes = layer_sizes
    return Evolution(config, training_set, reporter).run(num_jobs)
