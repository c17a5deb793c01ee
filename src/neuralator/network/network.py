"""
Neuralator Network Module

This module implements the Network class, a fixed-topology feed-forward neural
network whose edge weights are the only thing that evolves.

The network is the single owner of its nodes and edges. Both live in flat
dictionaries keyed by identity ('nodes' and 'edges'); nodes refer to their
edges and edges to their nodes by identity only. Layers keep the nodes of one
depth in order.

Classes:
    Network: Layers of nodes, fully connected layer to layer by weighted edges
"""

import random
from typing import Iterable, Optional, Sequence, TYPE_CHECKING

import numpy as np

from neuralator.errors           import TopologyMismatchError
from neuralator.network.edge     import Edge
from neuralator.network.layer    import Layer
from neuralator.network.node     import Node
from neuralator.network.scoring  import OutputMapping, Score
from neuralator.run.config       import Config

if TYPE_CHECKING:
    from neuralator.run.training import TrainingDatum

class Network:
    """
    A layered feed-forward network evolved by a genetic algorithm.

    Every node is connected to every node of the next layer. Sparse connectivity
    comes from edges whose weight is 0 (dead connections), so all networks built
    from the same layer sizes have exactly the same edges, and can be compared
    edge by edge through their fingerprints.

    A forward pass on one datum is:
        reset() -> set_inputs(datum) -> propagate() -> read_consensus()
    after which 'output' holds the position of the most active output node,
    and 'confidence' its activation.

    Public Attributes:
        layer_sizes: The number of nodes in each layer, input layer first
        layers:      The layers, indexed by depth
        nodes:       All nodes, keyed by identity
        edges:       All edges, keyed by identity
        output:      Position of the winning output node of the last pass
        confidence:  Activation of the winning output node of the last pass
        score:       Score counters of the last evaluation

    Public Methods:
        reset():                   Clear node activations, output and confidence
        clear_score():             Clear the score counters
        set_inputs(datum):         Seed the input layer
        propagate():               Fire the layers in depth order
        read_consensus():          Pick the winning output node
        evaluate(data, mapping):   Score the network over a training set
        fingerprint():             Map edge identities to weights
        distance_to(other):        Euclidean distance between two fingerprints
    """

    def __init__(self, layer_sizes: Sequence[int], config: Config, rng: random.Random):
        """
        Build the layers and fully connect each of them to the next one.
        Every edge gets a random strength, so each new network is a new random individual.

        Parameters:
            layer_sizes: The number of nodes in each layer (at least 2 entries)
            config:      Stores configuration parameters
            rng:         Random source used to draw the edge weights
        """
        self.layer_sizes: tuple[int, ...]  = tuple(layer_sizes)
        self.nodes      : dict[int, Node]  = {}
        self.edges      : dict[int, Edge]  = {}
        self.layers     : list[Layer]      = []
        self._config    : Config           = config

        self.output    : int   = 0
        self.confidence: float = 0.0
        self.score     : Score = Score()

        for depth, size in enumerate(self.layer_sizes):
            self.layers.append(Layer(self, depth, size, config))

        for layer in self.layers[:-1]:
            layer.connect_to_next(rng)

    @property
    def input_layer(self) -> Layer:
        return self.layers[0]

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    @property
    def number_nodes(self) -> int:
        return len(self.nodes)

    @property
    def number_edges(self) -> int:
        return len(self.edges)

    @property
    def number_edges_live(self) -> int:
        """Number of edges with a non-zero weight."""
        return sum(1 for edge in self.edges.values() if edge.live)

    def reset(self) -> None:
        """
        Bring the network back to its state before any datum was fed to it.
        The score counters are left untouched.
        """
        self.output     = 0
        self.confidence = 0.0
        for layer in self.layers:
            layer.reset()

    def clear_score(self) -> None:
        self.score = Score()

    def set_inputs(self, datum: 'TrainingDatum') -> None:
        """
        Seed the input layer from a datum.
        If the datum has fewer inputs than there are input nodes,
        the extra nodes all receive the datum's last input.
        """
        inputs = datum.inputs
        last   = len(inputs) - 1
        for position, node in enumerate(self.input_layer.nodes):
            node.set_initial(inputs[min(position, last)])

    def propagate(self) -> None:
        """
        Fire every layer, from the input layer to the output layer.
        A layer only fires once all earlier layers have signalled it.
        """
        for layer in self.layers:
            layer.propagate()

    def read_consensus(self) -> None:
        """
        Find the most active node of the output layer.

        Only a strictly greater activation replaces the current best,
        so on ties the node with the lowest position wins.
        """
        self.output     = 0
        self.confidence = float('-inf')
        for position, node in enumerate(self.output_layer.nodes):
            if node.activation > self.confidence:
                self.output     = position
                self.confidence = node.activation

    def evaluate(self, training_set: Sequence['TrainingDatum'], mapping: Optional[OutputMapping] = None) -> Score:
        """
        Run the network over a whole training set and score it.

        For each datum the consensus is mapped to a value and compared with the
        expected output. Answers closer than the mapping's resolution count as
        matches; the others feed the error accumulators. Confidence is averaged
        over every datum.

        The network is only touched by this call, so many networks can be
        evaluated concurrently against the same training set.

        Parameters:
            training_set: The data to evaluate on (must not be empty)
            mapping:      Output mapping; derived from the configuration if omitted

        Returns:
            the new score (also stored in 'self.score')
        """
        if not training_set:
            raise ValueError("Cannot evaluate a network on an empty training set")
        if mapping is None:
            mapping = OutputMapping.from_config(self._config, len(self.output_layer))

        self.clear_score()
        score = self.score
        total_confidence = 0.0

        for datum in training_set:
            self.reset()
            self.set_inputs(datum)
            self.propagate()
            self.read_consensus()

            error = abs(mapping.actual(self.output) - datum.expected)
            if error < mapping.resolution:
                score.matches += 1
            else:
                score.add_error(error)

            total_confidence += self.confidence

        score.average_confidence = total_confidence / len(training_set)
        score.error = score.select(self._config.error_selector)
        return score

    def fingerprint(self) -> dict[int, float]:
        """
        Map the identity of every edge to its weight, layer by layer.
        Networks with the same layer sizes have fingerprints with the same keys.
        """
        fingerprint = {}
        for layer in self.layers:
            fingerprint.update(layer.fingerprint())
        return fingerprint

    def weights(self, identities: Optional[Iterable[int]] = None) -> np.ndarray:
        """
        The edge weights as a vector, in fingerprint order (or in the given identity order).
        """
        if identities is None:
            identities = self.fingerprint().keys()
        edges = self.edges
        return np.fromiter((edges[identity].weight for identity in identities), dtype=float)

    def distance_to(self, other: 'Network') -> float:
        """
        Euclidean distance between the weights of two networks, edge by edge.

        Raises:
            TopologyMismatchError: if the networks were not built from the same layer sizes
        """
        if self.layer_sizes != other.layer_sizes:
            raise TopologyMismatchError(
                f"Cannot compare networks with layer sizes {self.layer_sizes} and {other.layer_sizes}")

        identities = list(self.fingerprint())
        difference = self.weights(identities) - other.weights(identities)
        return float(np.sqrt(np.dot(difference, difference)))

    def __repr__(self):
        return (f"Network(layer_sizes={self.layer_sizes}, matches={self.score.matches}, "
                f"error={self.score.error:.6f}, confidence={self.score.average_confidence:.6f})")

    def __str__(self):
        layers_str = "\n".join(f"  {layer}" for layer in self.layers)
        return f"{repr(self)}\n{layers_str}"
