"""
Neuralator Options Module

Enumerations for the choices a run can be configured with. The string values
are what appears in configuration files.

Classes:
    BreedingPolicy: How a child edge weight is derived from its parents' weights
    ErrorSelector:  Which error accumulator drives ranking
    RankBy:         Which metric ranks a generation first
"""

from enum import Enum

class BreedingPolicy(Enum):
    """Crossover policies applied to each edge when two networks breed."""
    ALWAYS_RANDOM = 'always_random'   # re-roll regardless of the parents
    HUMAN         = 'human'           # take the father's or the mother's weight
    AVERAGE       = 'average'         # arithmetic mean of both parents
    WEIGHTED_PULL = 'weighted_pull'   # push agreeing parents towards the extremes

class ErrorSelector(Enum):
    """Error accumulators collected while scoring a network."""
    SUM_OF_SQUARES = 'sum_of_squares'
    SUM_OF_ROOTS   = 'sum_of_roots'
    CUSTOM         = 'custom'

class RankBy(Enum):
    """Primary ranking dimension; the other one breaks ties."""
    SCORE = 'score'
    ERROR = 'error'
