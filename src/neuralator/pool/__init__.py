"""
Neuralator Pool Package

This package manages the evolving generation of networks.

Modules:
    breeding:   Crossover policies and the production of a child network
    population: Population class (evaluation, ranking, culling, next generation)
"""

from neuralator.pool.breeding   import breed, crossover_policies, mutation_rate
from neuralator.pool.population import Population

__all__ = ['Population',
           'breed',
           'crossover_policies',
           'mutation_rate']
