"""
Neuralator Scoring Module

This module holds what is needed to judge a Network against a training set:
the score counters kept by each network, the mapping from a network's consensus
to a value comparable with the expected output, and the ranking order.

Classes:
    Score:         Match count, error accumulators and average confidence of a network
    OutputMapping: Linear map from output node index to output value

Functions:
    rank_key(network, rank_by): Sort key implementing the ranking order
"""

from dataclasses import dataclass
from typing      import TYPE_CHECKING

from neuralator.options    import ErrorSelector, RankBy
from neuralator.run.config import Config

if TYPE_CHECKING:
    from neuralator.network.network import Network

@dataclass
class Score:
    """
    Aggregate result of running a network over a whole training set.

    'matches' counts the data answered within the resolution. The three error
    sums only accumulate over the data that were missed. 'error' is a copy of
    the accumulator selected for ranking.
    """
    matches           : int   = 0
    sum_of_squares    : float = 0.0
    sum_of_roots      : float = 0.0
    sum_of_custom     : float = 0.0
    error             : float = 0.0
    average_confidence: float = 0.0

    def add_error(self, error: float) -> None:
        root = error ** 0.5
        self.sum_of_squares += error ** 2
        self.sum_of_roots   += root
        self.sum_of_custom  += error + 10 * root

    def select(self, selector: ErrorSelector) -> float:
        if selector is ErrorSelector.SUM_OF_ROOTS:
            return self.sum_of_roots
        if selector is ErrorSelector.CUSTOM:
            return self.sum_of_custom
        return self.sum_of_squares

@dataclass(frozen=True)
class OutputMapping:
    """
    Turn the index of the winning output node into a value.

    Output node 'i' means 'slope * i + intercept', so the first output node maps
    onto 'output_min' and the last one onto 'output_max'. An answer counts as a
    match when it is less than 'resolution' away from the expected output.
    """
    slope     : float
    intercept : float
    resolution: float

    @classmethod
    def from_config(cls, config: Config, output_size: int | None = None) -> 'OutputMapping':
        if output_size is None:
            output_size = config.layer_sizes[-1]
        steps = max(output_size - 1, 1)
        slope = (config.output_max - config.output_min) / steps
        resolution = slope / 2 if config.resolution is None else config.resolution
        return cls(slope, config.output_min, resolution)

    def actual(self, output: int) -> float:
        return self.slope * output + self.intercept

def rank_key(network: 'Network', rank_by: RankBy) -> tuple[float, float, float]:
    """
    Sort key ordering networks from best to worst.

    Ranking by score: more matches first, then lower error, then higher
    average confidence. Ranking by error: lower error first, then more matches,
    then higher average confidence. Networks equal on all three are tied.
    """
    score = network.score
    if rank_by is RankBy.SCORE:
        return (-score.matches, score.error, -score.average_confidence)
    return (score.error, -score.matches, -score.average_confidence)
