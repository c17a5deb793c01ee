"""
Neuralator Layer Module

Classes:
    Layer: The nodes found at one depth of a Network
"""

import random
from typing import TYPE_CHECKING, Optional

from neuralator.network.node import Node
from neuralator.run.config   import Config

if TYPE_CHECKING:
    from neuralator.network.network import Network

class Layer:
    """
    An ordered group of nodes at one depth of a Network.

    A layer has little behaviour of its own; it organizes the nodes of the network
    so that they can be connected, fired and reset one depth at a time. The nodes
    themselves are owned by the network (registered in 'network.nodes'), the layer
    keeps them in order. The number of nodes never changes after construction.

    Public Attributes:
        depth: Position of the layer in the network (0 = input layer)
        nodes: The nodes of the layer, in order

    Public Methods:
        next_layer():           The layer at depth + 1 (None for the output layer)
        connect_to_next(rng):   Fully connect every node to every node of the next layer
        propagate():            Fire all outgoing edges of the layer
        reset():                Zero every node's activation
        fingerprint():          Map the identity of every outgoing edge to its weight
    """

    def __init__(self, network: 'Network', depth: int, size: int, config: Config):
        """
        Create the nodes of the layer and register them with the network.

        Parameters:
            network: The network this layer belongs to
            depth:   Depth of the layer
            size:    Number of nodes in the layer
            config:  Stores configuration parameters
        """
        self._network: 'Network'  = network
        self.depth   : int        = depth
        self.nodes   : list[Node] = [Node(depth, position, config) for position in range(size)]

        for node in self.nodes:
            network.nodes[node.identity] = node

    def __len__(self):
        return len(self.nodes)

    def next_layer(self) -> Optional['Layer']:
        layers = self._network.layers
        return layers[self.depth + 1] if self.depth + 1 < len(layers) else None

    def connect_to_next(self, rng: random.Random) -> None:
        next_layer = self.next_layer()
        if next_layer is None:
            return
        for node in self.nodes:
            node.connect(next_layer.nodes, self._network, rng)

    def propagate(self) -> None:
        for node in self.nodes:
            node.propagate(self._network)

    def reset(self) -> None:
        for node in self.nodes:
            node.reset()

    def fingerprint(self) -> dict[int, float]:
        edges = self._network.edges
        return {identity: edges[identity].weight for node in self.nodes for identity in node.outgoing}

    def __eq__(self, other):
        if not isinstance(other, Layer):
            return NotImplemented
        return (self.depth == other.depth and
                len(self.nodes) == len(other.nodes) and
                self.fingerprint() == other.fingerprint())

    # equality follows the edge weights, which keep evolving
    __hash__ = None

    def __repr__(self):
        return f"Layer(depth={self.depth}, size={len(self.nodes)})"
