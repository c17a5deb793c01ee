"""
Neuralator Population Module

This module implements the Population class, which holds one generation of
networks and turns it into the next one.

Classes:
    Population: One generation of networks, with ranking, culling and breeding
"""

import random
from typing import Sequence

import numpy as np
from joblib import Parallel, delayed
from loguru import logger

from neuralator.network          import Network, OutputMapping, rank_key
from neuralator.options          import RankBy
from neuralator.pool.breeding    import breed
from neuralator.run.config       import Config
from neuralator.run.training     import TrainingDatum

class Population:
    """
    A generation of networks, all sharing the same layer sizes.

    A generation goes through:
        evaluate() -> rank() -> cull() (only when stagnating) -> spawn_next_generation()

    After 'rank()', 'networks' is sorted from best to worst and stays in that
    order (culling replaces members in place) until the next generation is spawned.

    Public Attributes:
        networks:   The members of the current generation
        stagnation: Number of consecutive generations whose best did not improve

    Public Methods:
        evaluate(training_set, num_jobs): Score every member (possibly in parallel)
        rank():                           Sort the members and track improvement
        should_cull():                    Whether stagnation calls for culling
        cull():                           Replace near-duplicate members
        spawn_next_generation():          Replace the generation by its offspring
        get_fittest_network():            The member with the highest score
    """

    def __init__(self, config: Config, rng: random.Random):
        """
        Create a generation of 'population_size' random networks.

        Parameters:
            config: Stores configuration parameters
            rng:    Random source of the run
        """
        self._config: Config        = config
        self._rng   : random.Random = rng

        self.networks  : list[Network] = [self._new_network() for _ in range(config.population_size)]
        self.stagnation: int           = 0

        # best results seen so far, to detect stagnation
        self._best_matches: int   = 0
        self._best_error  : float = float('inf')

    def _new_network(self) -> Network:
        return Network(self._config.layer_sizes, self._config, self._rng)

    def _breed(self, father: Network, mother: Network) -> Network:
        return breed(father, mother, self._config, self._rng, self.stagnation)

    @property
    def best(self) -> Network:
        """The first member; the best one once the generation has been ranked."""
        return self.networks[0]

    def evaluate(self, training_set: Sequence[TrainingDatum], num_jobs: int = 1) -> None:
        """
        Score every member against the training set.

        Members are independent of each other, so they can be scored in parallel:
        num_jobs=1:  Serial evaluation (no parallelization)
        num_jobs>1:  Use specified number of parallel jobs
        num_jobs=-1: Use all available CPU cores

        Returns only once every member has its score.
        """
        if not training_set:
            raise ValueError("Cannot evaluate a population on an empty training set")

        mapping   = OutputMapping.from_config(self._config)
        serialize = num_jobs == 1

        if serialize:
            for network in self.networks:
                network.evaluate(training_set, mapping)
        else:
            # workers may score copies of the networks, so keep the returned scores
            scores = Parallel(num_jobs)(delayed(network.evaluate)(training_set, mapping) for network in self.networks)
            for network, score in zip(self.networks, scores):
                network.score = score

    def rank(self) -> Network:
        """
        Sort the generation from best to worst and update the stagnation counter.

        The generation improved if its best member beats the best result seen so
        far: more matches when ranking by score, a lower error otherwise.

        Returns:
            the best member
        """
        rank_by = self._config.rank_by
        self.networks.sort(key=lambda network: rank_key(network, rank_by))

        best = self.best.score
        if rank_by is RankBy.SCORE:
            improved = best.matches > self._best_matches
        else:
            improved = best.error < self._best_error

        if improved:
            self.stagnation    = 0
            self._best_matches = best.matches
            self._best_error   = best.error
        else:
            self.stagnation += 1

        return self.best

    def should_cull(self) -> bool:
        """
        Culling happens once stagnation reaches the trigger, and periodically after that.
        """
        if self.stagnation == 0:
            return False
        return (self.stagnation == self._config.cull_stagnation_trigger or
                (self.stagnation + 1) % self._config.cull_stagnation_period == 0)

    def cull(self) -> int:
        """
        Replace members that crowd the same region of weight space.

        Members are visited in rank order, skipping the best one, which is never
        replaced. Another member is a neighbour if it lies within 'cull_distance'.
        A member is replaced by the child of two random non-elite members as soon
        as one of its neighbours is found while it already has
        'cull_max_neighbors' neighbours, lies within 'cull_duplicate_distance',
        or (with 'cull_matching_error') has exactly the same error.

        Returns:
            the number of replaced members
        """
        config = self._config
        size   = len(self.networks)
        if size < 2:
            return 0

        # one weight vector per member, all in the same edge order
        identities = list(self.best.fingerprint())
        weights    = np.stack([network.weights(identities) for network in self.networks])

        replaced = 0
        for index in range(1, size):
            distances = np.sqrt(np.sum((weights - weights[index]) ** 2, axis=1))
            neighbors = 0

            for other in range(size):
                if other == index or distances[other] > config.cull_distance:
                    continue

                same_error = (config.cull_matching_error and
                              self.networks[index].score.error == self.networks[other].score.error)
                if (neighbors >= config.cull_max_neighbors or
                        distances[other] <= config.cull_duplicate_distance or same_error):
                    self.networks[index] = self._breed_outsiders()
                    weights[index] = self.networks[index].weights(identities)
                    replaced += 1
                    break

                neighbors += 1

        logger.debug("Culled {} of {} networks (stagnation {})", replaced, size, self.stagnation)
        return replaced

    def _breed_outsiders(self) -> Network:
        """Breed two random members ranked below the survivors."""
        low, high = self._config.survivors_per_generation, len(self.networks)
        father = self.networks[self._rng.randrange(low, high)]
        mother = self.networks[self._rng.randrange(low, high)]
        return self._breed(father, mother)

    def spawn_next_generation(self) -> None:
        """
        Replace the generation by the next one.

        Expects a ranked generation. The next generation holds, in order:
        1. the best member, unchanged
        2. children of every pair of survivors (the top 'survivors_per_generation')
        3. children of random pairs of non-survivors
        4. brand new random networks
        The number of children (2. and 3.) is 'offspring_per_generation', or
        whatever fills the generation when that is not set.
        """
        config    = self._config
        size      = config.population_size
        survivors = config.survivors_per_generation

        offspring = size - 1
        if config.offspring_per_generation is not None:
            offspring = min(offspring, config.offspring_per_generation)

        next_generation = [self.best]

        for pair in range(min(survivors * survivors, offspring)):
            father = self.networks[pair // survivors]
            mother = self.networks[pair % survivors]
            next_generation.append(self._breed(father, mother))

        while len(next_generation) < 1 + offspring:
            next_generation.append(self._breed_outsiders())

        fresh = size - len(next_generation)
        next_generation.extend(self._new_network() for _ in range(fresh))

        logger.debug("Spawned generation: {} offspring, {} new networks", offspring, fresh)
        self.networks = next_generation

    def get_fittest_network(self) -> Network:
        """
        The member with the highest score (number of matches).
        On ties the member found first (best ranked) wins.
        """
        winner = self.networks[0]
        for network in self.networks:
            if network.score.matches > winner.score.matches:
                winner = network
        return winner

    def __len__(self):
        return len(self.networks)

    def __str__(self):
        return '\n'.join(repr(network) for network in self.networks)
