"""
Neuralator Node Module

Classes:
    Node: A neuron accumulating the signals of its incoming edges
"""

import random
from typing import TYPE_CHECKING

from neuralator.network.edge import Edge
from neuralator.run.config   import Config

if TYPE_CHECKING:
    from neuralator.network.network import Network

class Node:
    """
    A single neuron in one layer of a Network.

    A node does not apply an activation function to a weighted sum. Each
    incoming signal is normalized and added to the activation, which saturates
    at 1.0. Addition is commutative and the clamp only ever lowers a value to
    1.0, so the order in which edges fire does not change the result.

    Edges are referenced by identity; the owning Network maps identities
    to Edge objects.

    Public Attributes:
        identity:   32 bit identity, layer depth in the upper 16 bits, position in the lower 16
        depth:      Depth of the layer this node belongs to (0 = input layer)
        activation: Current value of the node
        incoming:   Identities of the edges coming from the previous layer
        outgoing:   Identities of the edges going to the next layer

    Public Methods:
        connect(targets, network, rng): Create an edge to each target node
        signal(value):                  Accumulate a signal from an incoming edge
        propagate(network):             Fire every outgoing edge
        set_initial(value):             Seed an input node
        reset():                        Zero the activation
    """

    def __init__(self, depth: int, position: int, config: Config):
        """
        Parameters:
            depth:    Depth of the parent layer
            position: Position of the node inside its layer
            config:   Stores configuration parameters
        """
        self.identity  : int       = (depth << 16) | position
        self.depth     : int       = depth
        self.activation: float     = 0.0
        self.incoming  : list[int] = []
        self.outgoing  : list[int] = []
        self._config   : Config    = config

    @property
    def position(self) -> int:
        """The index of the node inside its layer."""
        return self.identity & 0xFFFF

    def connect(self, targets: list['Node'], network: 'Network', rng: random.Random) -> None:
        """
        Create one edge from this node to each of the target nodes.
        The new edges are registered with the network that owns them.
        """
        for target in targets:
            edge = Edge(self, target, self._config, rng)
            network.edges[edge.identity] = edge
            self.outgoing.append(edge.identity)

    def signal(self, value: float) -> None:
        """
        Add an incoming signal to the activation, clamped at 1.0.

        The signal is divided by the number of incoming edges times fill_rate^depth.
        With sparse connectivity only a fraction of the edges feeding a node is live,
        and that dilution compounds with each layer; the divisor compensates for it.
        """
        value /= len(self.incoming) * self._config.fill_rate ** self.depth
        self.activation = min(self.activation + value, 1.0)

    def propagate(self, network: 'Network') -> None:
        edges = network.edges
        for identity in self.outgoing:
            edges[identity].propagate(network)

    def set_initial(self, value: float) -> None:
        """Only used to seed the nodes of the input layer."""
        self.activation = value

    def reset(self) -> None:
        self.activation = 0.0

    def __repr__(self):
        return (f"Node(identity={self.identity:#010x}, activation={self.activation:.6f}, "
                f"incoming={len(self.incoming)}, outgoing={len(self.outgoing)})")
