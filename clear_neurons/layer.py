from typing import List, NamedTuple, Optional, Union
import logging

from clear_neurons.activations import Activation, get_activation
from clear_neurons.errors import ConfigurationError
from clear_neurons.initializers import CoefficientGenerator
from clear_neurons.neuron import Neuron
from clear_neurons.unit import Unit


class LayerConfiguration(NamedTuple):
    """
    Describes one layer of a Network.

    Attributes:
        neuron_count: Number of neurons (and therefore output units) in the layer.
        neuron_type: 'linear', 'relu' or an Activation instance shared by all neurons.
        coefficient_generator: Zero-argument callable producing initial weight values.
        input_count: Optional declared number of inputs. When given it must match
                     the size of the previous layer, otherwise construction fails.
    """
    neuron_count: int
    neuron_type: Union[str, Activation]
    coefficient_generator: CoefficientGenerator
    input_count: Optional[int] = None


class Layer:
    """
    A fully connected layer of scalar neurons.

    Every neuron references the *same* list of input units, so a layer adds
    no copies of its inputs. Each neuron owns its output unit and its
    len(input_units) + 1 variable units (weights plus bias).

    Key Attributes:
        input_units (List[Unit]): Shared inputs, owned by the previous layer or the network.
        neurons (List[Neuron]): The layer's neurons, in output order.
        output_units (List[Unit]): The neurons' output units, in the same order.
        activation_fn (Activation): The activation shared by every neuron.
    """

    def __init__(self, input_units: List[Unit], configuration: LayerConfiguration, id: int = 0):
        """
        Initializes the layer.

        Args:
            input_units: Input units shared by all neurons of this layer.
            configuration: Size, neuron variant and weight generator of the layer.
            id: An identifier for the layer (optional, for logging/debugging).

        Raises:
            ConfigurationError: If the neuron count is not positive or the declared
                                input count does not match the given input units.
        """
        self.id = id
        self.input_units = input_units
        self.input_size = len(input_units)

        if configuration.neuron_count <= 0:
            raise ConfigurationError(
                f"Layer {id}: neuron_count must be positive, got {configuration.neuron_count}"
            )
        if configuration.input_count is not None and configuration.input_count != self.input_size:
            raise ConfigurationError(
                f"Layer {id}: declared input_count {configuration.input_count} "
                f"does not match the {self.input_size} units it is wired to"
            )

        neuron_type = configuration.neuron_type
        self.activation_fn = get_activation(neuron_type) if isinstance(neuron_type, str) else neuron_type

        generate = configuration.coefficient_generator
        self.neurons: List[Neuron] = []
        for _ in range(configuration.neuron_count):
            variable_units = [Unit(generate()) for _ in range(self.input_size + 1)]
            self.neurons.append(Neuron(input_units, Unit(), variable_units, self.activation_fn))

        self.output_units: List[Unit] = [neuron.output_unit for neuron in self.neurons]
        self.output_size = len(self.output_units)

        logging.debug(
            f"Layer #{self.id} created: input_size={self.input_size}, "
            f"output_size={self.output_size}, activation={self.activation_fn.__class__.__name__}"
        )

    def forward(self):
        """Runs every neuron's forward pass. Neurons of a layer do not depend on each other."""
        for neuron in self.neurons:
            neuron.forward()

    def backward(self, step_size: Optional[float] = None):
        """
        Runs every neuron's backward pass.

        All output unit gradients must be seeded before this call; the shared
        input unit gradients are only added to here (see zero_input_gradients).
        """
        for neuron in self.neurons:
            neuron.backward(step_size)

    def zero_input_gradients(self):
        """Resets the gradients of the shared input units to zero."""
        for unit in self.input_units:
            unit.gradient = 0.0

    def outputs(self) -> List[float]:
        """Returns the current values of the output units."""
        return [unit.value for unit in self.output_units]

    def get_weights(self) -> List[List[float]]:
        """Returns a copy of each neuron's weights, bias last."""
        return [neuron.weights for neuron in self.neurons]

    @property
    def parameter_count(self) -> int:
        return self.output_size * (self.input_size + 1)

    def summary(self) -> str:
        """Returns a string summary of the layer's configuration."""
        return (
            f"Layer Summary (id={self.id}):\n"
            f"  Type: Fully Connected (scalar neurons)\n"
            f"  Input size: {self.input_size}\n"
            f"  Output size: {self.output_size}\n"
            f"  Activation: {self.activation_fn.__class__.__name__}\n"
            f"  Parameters: {self.parameter_count:,} parameters\n"
        )

    def __repr__(self):
        return (f"Layer(id={self.id}, input_size={self.input_size}, "
                f"output_size={self.output_size}, "
                f"activation={self.activation_fn.__class__.__name__})")
