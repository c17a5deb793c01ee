"""
Neuralator - evolving fixed-topology neural networks with a genetic algorithm.

A population of randomly wired feed-forward networks is scored against a
training set, ranked, culled of near-duplicates and bred into the next
generation, for a fixed number of generations. Only edge weights evolve.

Main components:
- network: Edge, Node, Layer and Network, plus scoring
- pool:    Population management and breeding
- run:     Configuration, training data, the evolutionary run and experiments

Example:
    >>> from neuralator import Config, run_evolution, sine_training_set
    >>> config = Config("config.ini")
    >>> winner = run_evolution((8, 16, 21), config, sine_training_set())
    >>> winner.score.matches
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from neuralator.run.config      import Config
from neuralator.run.training    import TrainingDatum, load_training_set, sine_training_set
from neuralator.errors          import ConfigurationError, TopologyMismatchError
from neuralator.options         import BreedingPolicy, ErrorSelector, RankBy
from neuralator.network         import Edge, Layer, Network, Node, OutputMapping, Score
from neuralator.pool            import Population, breed
from neuralator.run.report      import GenerationReport, log_report
from neuralator.run.evolution   import Evolution, run_evolution
from neuralator.run.experiment  import Experiment, TrialResult

__all__ = [
    "BreedingPolicy",
    "Config",
    "ConfigurationError",
    "Edge",
    "ErrorSelector",
    "Evolution",
    "Experiment",
    "GenerationReport",
    "Layer",
    "Network",
    "Node",
    "OutputMapping",
    "Population",
    "RankBy",
    "Score",
    "TopologyMismatchError",
    "TrainingDatum",
    "TrialResult",
    "breed",
    "load_training_set",
    "log_report",
    "run_evolution",
    "sine_training_set",
]
