"""
Neuralator Edge Module

This module implements the Edge class, the weighted connection between a node
and a node in the next layer.

Edges do not hold references to node objects. They store the identities of the
nodes they connect, and look them up in the owning Network when propagating.
This keeps the Network the single owner of every node and edge.

Classes:
    Edge: A directed, weighted connection between two nodes

Functions:
    random_strength(config, rng): Draw a weight following the sparse fill policy
"""

import random
from typing import TYPE_CHECKING

from neuralator.run.config import Config

if TYPE_CHECKING:
    from neuralator.network.network import Network
    from neuralator.network.node    import Node

def random_strength(config: Config, rng: random.Random) -> float:
    """
    Draw a new edge weight.

    With probability 'config.fill_rate' the weight is uniform in
    [min_strength, max_strength); otherwise it is 0, a dead connection.

    Parameters:
        config: Stores configuration parameters
        rng:    Random source of the run

    Returns:
        the new weight
    """
    if rng.random() < config.fill_rate:
        unit = rng.random()
        return config.min_strength + unit * (config.max_strength - config.min_strength)
    return 0.0

class Edge:
    """
    A directed, weighted connection between two nodes in adjacent layers.

    During propagation the edge reads its source's activation, scales it by
    its weight and, if the result is above the minimum action potential,
    signals the destination. A weight of exactly 0 never signals anything.

    The identity of an edge is the concatenation of its endpoints' identities
    (source in the upper 32 bits, destination in the lower 32 bits). It does not
    depend on the weights, so edges at the same position in two networks built
    from the same layer sizes share their identity.

    Public Attributes:
        source:      Identity of the source node
        destination: Identity of the destination node
        identity:    64 bit identity of the edge
        weight:      Strength of the connection

    Public Methods:
        randomize_strength(rng): Assign a new random weight
        propagate(network):      Signal the destination node
    """

    def __init__(self, source: 'Node', destination: 'Node', config: Config, rng: random.Random):
        """
        Create the edge and register it as an input of the destination node.

        Parameters:
            source:      The node in the earlier layer
            destination: The node in the next layer
            config:      Stores configuration parameters
            rng:         Random source used to draw the initial weight
        """
        self.source     : int    = source.identity
        self.destination: int    = destination.identity
        self.identity   : int    = (source.identity << 32) | destination.identity
        self._config    : Config = config

        self.weight: float = 0.0
        self.randomize_strength(rng)

        destination.incoming.append(self.identity)

    @property
    def live(self) -> bool:
        """Whether the edge can carry a signal at all."""
        return self.weight != 0.0

    def randomize_strength(self, rng: random.Random) -> None:
        """
        Replace the weight with a random one (possibly a dead connection).
        """
        self.weight = random_strength(self._config, rng)

    def propagate(self, network: 'Network') -> None:
        """
        Conditionally pass the source's activation on to the destination.

        Parameters:
            network: The network owning both endpoints
        """
        potential = network.nodes[self.source].activation * self.weight
        if potential > self._config.minimum_action_potential:
            network.nodes[self.destination].signal(potential)

    def __repr__(self):
        return (f"Edge(source={self.source:#010x}, destination={self.destination:#010x}, "
                f"weight={self.weight:+.6f})")

    def __str__(self):
        return f"[{self.source:#x}=>{self.destination:#x},{self.weight:+.02f}]"
