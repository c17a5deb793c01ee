"""
Neuralator Experiment Module

An experiment is a collection of independent evolutionary runs (trials) on the
same training set, used to gather statistics about how reliably a configuration
evolves good networks.

Classes:
    TrialResult: Summary of one trial
    Experiment:  Run several seeded trials, serially or in parallel
"""

import copy
from dataclasses import dataclass
from statistics  import mean
from typing      import Iterable, Optional

from joblib import Parallel, delayed
from loguru import logger

from neuralator.run.config    import Config
from neuralator.run.evolution import Evolution
from neuralator.run.training  import TrainingDatum, validate_training_set

@dataclass(frozen=True)
class TrialResult:
    trial_number      : int
    seed              : Optional[int]
    matches           : int
    error             : float
    average_confidence: float
    live_edges        : int

class Experiment:
    """
    Run the same configuration several times and summarize the winners.

    Trial 'n' (1-indexed) is seeded with 'config.seed + n' when the configuration
    has a seed, so a seeded experiment is reproducible; otherwise every trial
    draws its own random seed.

    Public Methods:
        run(num_jobs_trials, num_jobs_fitness): Execute all trials, return their results

    Parallelization:
        num_jobs_trials:  Parallel jobs running trials (1 = serial, -1 = all cores)
        num_jobs_fitness: Parallel jobs scoring a generation inside each trial
                          (keep at 1 when trials run in parallel)
    """

    def __init__(self, config: Config, training_set: Iterable[TrainingDatum], num_trials: int):
        """
        Parameters:
            config:       Configuration shared by all trials
            training_set: The data every network is scored against
            num_trials:   Number of trials in the experiment
        """
        if num_trials < 1:
            raise ValueError(f"An experiment needs at least one trial, got {num_trials}")

        self._config      : Config                    = config
        self._training_set: tuple[TrainingDatum, ...] = validate_training_set(training_set)
        self._num_trials  : int                       = num_trials
        self.results      : list[TrialResult]         = []

    def run(self, num_jobs_trials: int = 1, num_jobs_fitness: int = 1) -> list[TrialResult]:
        trial_numbers = range(1, self._num_trials + 1)

        if num_jobs_trials == 1:
            self.results = [self._run_trial(n, num_jobs_fitness) for n in trial_numbers]
        else:
            self.results = Parallel(num_jobs_trials)(
                delayed(self._run_trial)(n, num_jobs_fitness) for n in trial_numbers)

        self._final_report()
        return self.results

    def _run_trial(self, trial_number: int, num_jobs: int) -> TrialResult:
        config = copy.copy(self._config)
        if config.seed is not None:
            config.seed = config.seed + trial_number

        evolution = Evolution(config, self._training_set, suppress_output=True)
        winner    = evolution.run(num_jobs)

        return TrialResult(trial_number       = trial_number,
                           seed               = config.seed,
                           matches            = winner.score.matches,
                           error              = winner.score.error,
                           average_confidence = winner.score.average_confidence,
                           live_edges         = winner.number_edges_live)

    def _final_report(self) -> None:
        matches = [result.matches for result in self.results]
        logger.info("Experiment of {} trials: best score {}/{}, mean score {:.2f}, mean error {:.4f}",
                    len(self.results), max(matches), len(self._training_set),
                    mean(matches), mean(result.error for result in self.results))
