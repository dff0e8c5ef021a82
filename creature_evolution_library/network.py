# creature_evolution_library/network.py
import numpy as np

from .errors import ConstructionError, InvariantViolation
from .genetics import as_genome

# Genome layout: layers in order, neurons in order within a layer, and for each
# neuron its bias followed by its input weights.


def validate_topology(topology):
    """Raises ConstructionError unless `topology` lists at least two positive neuron counts."""
    topology = tuple(topology)
    if len(topology) < 2:
        raise ConstructionError(f"A network needs at least 2 layers, got topology {topology}.")
    for size in topology:
        if not isinstance(size, (int, np.integer)) or size <= 0:
            raise ConstructionError(f"Layer sizes must be positive integers, got topology {topology}.")
    return topology


def parameter_count(topology):
    """Number of genes needed to encode a network with the given topology."""
    topology = validate_topology(topology)
    return sum((inputs + 1) * outputs for inputs, outputs in zip(topology, topology[1:]))


class Layer:
    """
    A fully connected layer of ReLU neurons.
    Row `i` of `weights` is the weight vector of neuron `i`, `biases[i]` its bias.
    """

    def __init__(self, weights, biases):
        self.weights = np.array(weights, dtype=np.float32)
        self.biases = np.array(biases, dtype=np.float32)
        if self.weights.ndim != 2 or self.biases.shape != (self.weights.shape[0],):
            raise ConstructionError(
                f"Layer needs a (neurons, inputs) weight matrix and one bias per neuron, "
                f"got weights {self.weights.shape} and biases {self.biases.shape}.")

    @property
    def input_size(self):
        return self.weights.shape[1]

    @property
    def output_size(self):
        return self.weights.shape[0]

    @classmethod
    def random(cls, input_size, output_size, rng):
        params = [[rng.uniform(-1.0, 1.0) for _ in range(input_size + 1)] for _ in range(output_size)]
        block = np.array(params, dtype=np.float32).reshape(output_size, input_size + 1)
        return cls(weights=block[:, 1:], biases=block[:, 0])

    def propagate(self, inputs):
        if len(inputs) != self.input_size:
            raise InvariantViolation(f"Layer expects {self.input_size} inputs, got {len(inputs)}.")
        return np.maximum(0.0, self.biases + self.weights @ inputs)

    def genes(self):
        """This layer's parameters in genome order (bias, then weights, per neuron)."""
        return np.column_stack((self.biases, self.weights)).ravel()


class NeuralNetwork:
    """A stateless feed-forward network of ReLU layers."""

    def __init__(self, layers):
        if not layers:
            raise ConstructionError("A network needs at least one layer.")
        for previous, layer in zip(layers, layers[1:]):
            if previous.output_size != layer.input_size:
                raise ConstructionError(
                    f"Layer of {previous.output_size} neurons cannot feed a layer expecting {layer.input_size} inputs.")
        self.layers = list(layers)

    @property
    def topology(self):
        return (self.layers[0].input_size,) + tuple(layer.output_size for layer in self.layers)

    @classmethod
    def random(cls, topology, rng):
        """Network with every weight and bias drawn uniformly from [-1, 1]."""
        topology = validate_topology(topology)
        return cls([Layer.random(inputs, outputs, rng) for inputs, outputs in zip(topology, topology[1:])])

    @classmethod
    def from_genome(cls, topology, genome):
        """
        Rebuilds a network by consuming `genome` in genome order.

        Args:
            topology (sequence of int): Neuron count per layer, inputs first.
            genome (sequence of float): Exactly `parameter_count(topology)` genes.

        Returns:
            NeuralNetwork: The decoded network.
        """
        topology = validate_topology(topology)
        genes = np.asarray(genome, dtype=np.float32).ravel()

        layers = []
        offset = 0
        for inputs, outputs in zip(topology, topology[1:]):
            size = (inputs + 1) * outputs
            chunk = genes[offset:offset + size]
            if len(chunk) < size:
                raise ConstructionError(
                    f"Wrong parameter count: not enough parameters for topology {topology} "
                    f"(needs {parameter_count(topology)}, got {len(genes)}).")
            block = chunk.reshape(outputs, inputs + 1)
            layers.append(Layer(weights=block[:, 1:], biases=block[:, 0]))
            offset += size

        if offset != len(genes):
            raise ConstructionError(
                f"Wrong parameter count: too many parameters for topology {topology} "
                f"(needs {offset}, got {len(genes)}).")
        return cls(layers)

    def to_genome(self):
        return as_genome(np.concatenate([layer.genes() for layer in self.layers]))

    def propagate(self, inputs):
        outputs = np.asarray(inputs, dtype=np.float64)
        if outputs.shape != (self.layers[0].input_size,):
            raise InvariantViolation(
                f"Network expects {self.layers[0].input_size} inputs, got shape {outputs.shape}.")
        for layer in self.layers:
            outputs = layer.propagate(outputs)
        return outputs

    def __repr__(self):
        return f"NeuralNetwork(topology={self.topology})"
