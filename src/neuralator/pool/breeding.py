"""
Neuralator Breeding Module

This module implements how two networks produce a child network.

For every edge, the child either mutates (gets a fresh random strength) or
inherits a weight computed from the parents' weights by the configured
BreedingPolicy. Each policy is a function of (father weight, mother weight,
random source, config) returning the child weight; 'crossover_policies' maps
each BreedingPolicy to its function.

Functions:
    mutation_rate(config, stagnation):                 Probability of mutating an edge
    breed(father, mother, config, rng, stagnation):    Produce a child network
"""

import random
from typing import Callable

from neuralator.errors       import TopologyMismatchError
from neuralator.network      import Network, random_strength
from neuralator.options      import BreedingPolicy
from neuralator.run.config   import Config

# amount by which 'weighted_pull' moves an agreed upon weight towards 0 or 1
PULL_STEP = 0.01

def _always_random(father: float, mother: float, rng: random.Random, config: Config) -> float:
    return random_strength(config, rng)

def _human(father: float, mother: float, rng: random.Random, config: Config) -> float:
    return father if rng.random() < 0.5 else mother

def _average(father: float, mother: float, rng: random.Random, config: Config) -> float:
    return (father + mother) / 2

def _weighted_pull(father: float, mother: float, rng: random.Random, config: Config) -> float:
    # both parents strong => stronger, both weak => weaker, disagreement => pick one
    if father >= 0.5 and mother >= 0.5:
        return min(1.0, max(father, mother) + PULL_STEP)
    if father < 0.5 and mother < 0.5:
        return max(0.0, min(father, mother) - PULL_STEP)
    return _human(father, mother, rng, config)

crossover_policies: dict[BreedingPolicy, Callable[[float, float, random.Random, Config], float]] = {
    BreedingPolicy.ALWAYS_RANDOM: _always_random,
    BreedingPolicy.HUMAN:         _human,
    BreedingPolicy.AVERAGE:       _average,
    BreedingPolicy.WEIGHTED_PULL: _weighted_pull,
}

def mutation_rate(config: Config, stagnation: int) -> float:
    """
    The mutation rate grows with each generation without improvement, up to a cap.
    """
    return min(config.max_mutation_rate,
               config.base_mutation_rate + stagnation * config.mutation_rate_increase)

def breed(father: Network, mother: Network, config: Config, rng: random.Random, stagnation: int = 0) -> Network:
    """
    Produce a child network with the same topology as its parents.

    Parameters:
        father:     First parent
        mother:     Second parent
        config:     Stores configuration parameters
        rng:        Random source of the run
        stagnation: Number of generations without improvement (raises the mutation rate)

    Returns:
        the child network (not evaluated yet)
    """
    if father.layer_sizes != mother.layer_sizes:
        raise TopologyMismatchError(
            f"Cannot breed networks with layer sizes {father.layer_sizes} and {mother.layer_sizes}")

    rate      = mutation_rate(config, stagnation)
    crossover = crossover_policies[config.breeding_policy]
    child     = Network(father.layer_sizes, config, rng)

    # edges at the same position share their identity across networks
    for identity, edge in child.edges.items():
        if rng.random() < rate:
            edge.randomize_strength(rng)
        else:
            edge.weight = crossover(father.edges[identity].weight, mother.edges[identity].weight, rng, config)

    return child
