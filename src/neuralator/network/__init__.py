"""
Neuralator Network Package

This package implements the fixed-topology neural networks evolved by Neuralator.

Modules:
    edge:    Edge class and the random strength policy
    node:    Node class
    layer:   Layer class
    network: Network class
    scoring: Score, OutputMapping and the ranking order

Exported Classes:
    Edge:          Weighted connection between two nodes
    Node:          Neuron with a saturating additive activation
    Layer:         Nodes at one depth of a network
    Network:       Fully connected layered network
    Score:         Match count and error accumulators of a network
    OutputMapping: Map from output node to output value
"""

from neuralator.network.edge    import Edge, random_strength
from neuralator.network.node    import Node
from neuralator.network.layer   import Layer
from neuralator.network.network import Network
from neuralator.network.scoring import OutputMapping, Score, rank_key

__all__ = ['Edge',
           'Layer',
           'Network',
           'Node',
           'OutputMapping',
           'Score',
           'random_strength',
           'rank_key']
