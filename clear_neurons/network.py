from typing import List, Optional, Sequence, Tuple
import logging

from clear_neurons.errors import ConfigurationError
from clear_neurons.layer import Layer, LayerConfiguration
from clear_neurons.unit import Unit

# --- Loss Function ---

def mse_loss(outputs: Sequence[float], targets: Sequence[float]) -> Tuple[float, List[float]]:
    """
    Computes Mean Squared Error loss and the gradient seeded on the output units.

    Loss = (1/N) * Σ(output_i - target_i)^2
    Seed = output_i - target_i

    The seed is the derivative of ½·Σ(output_i - target_i)^2, so the constant
    factor of the loss does not leak into the step size.

    Args:
        outputs: Predicted values.
        targets: True values.

    Returns:
        Tuple containing:
            - mse_value (float): The mean squared error.
            - seed (List[float]): One gradient per output dimension.
    """
    if len(outputs) != len(targets):
        raise ValueError(f"MSE Loss: got {len(outputs)} outputs but {len(targets)} targets")
    if len(outputs) == 0:
        return 0.0, []

    error = [float(output) - float(target) for output, target in zip(outputs, targets)]
    loss = sum(e * e for e in error) / len(error)
    return loss, error


class Network:
    """
    A feedforward network of scalar neurons.

    Manages a sequence of layers wired output-to-input, the forward pass,
    the backward pass (backpropagation) and the in-place parameter update.

    The network owns the external input units. Layer k's output units are
    layer k+1's input units, so no values are copied between layers.
    """

    def __init__(
        self,
        input_count: int,
        layer_configurations: Sequence[LayerConfiguration],
        output_count: Optional[int] = None,
    ):
        """
        Initializes the neural network.

        Args:
            input_count: Number of external inputs (e.g. pixels per image).
            layer_configurations: One LayerConfiguration per layer, output layer last.
            output_count: Optional declared size of the prediction vector. If given it
                          must match the neuron count of the last layer.

        Raises:
            ConfigurationError: If the sizes do not line up.
        """
        if input_count <= 0:
            raise ConfigurationError(f"Network input_count must be positive, got {input_count}")
        if len(layer_configurations) == 0:
            raise ConfigurationError("Network must have at least one layer.")

        self.input_count = input_count
        self.input_units: List[Unit] = [Unit() for _ in range(input_count)]

        self.layers: List[Layer] = []
        layer_inputs = self.input_units
        for i, configuration in enumerate(layer_configurations):
            layer = Layer(layer_inputs, configuration, id=i)
            self.layers.append(layer)
            layer_inputs = layer.output_units

        self.output_count = self.layers[-1].output_size
        if output_count is not None and output_count != self.output_count:
            raise ConfigurationError(
                f"Declared output_count {output_count} does not match "
                f"the last layer's {self.output_count} neurons"
            )

        self.sizes = [input_count] + [layer.output_size for layer in self.layers]
        logging.info(f"Created neural network with architecture: {self.sizes}")
        logging.info(f"Layer activations: {[l.activation_fn.__class__.__name__ for l in self.layers]}")

    def forward(self):
        """Runs every layer's forward pass in order. Each layer reads the one before it."""
        for layer in self.layers:
            layer.forward()

    def backward(self, step_size: Optional[float] = None):
        """
        Runs every layer's backward pass from last to first.

        The output units of the last layer must already carry their gradients.
        Before a layer runs, the gradients of its input units are reset to
        zero; its neurons then add their contributions into them, which fully
        seeds the previous layer's output units.
        """
        for layer in reversed(self.layers):
            layer.zero_input_gradients()
            layer.backward(step_size)

    def run_with(self, inputs: Sequence[float]) -> List[float]:
        """
        Runs a forward pass and returns the prediction vector.

        Args:
            inputs: Raw input vector of length input_count.

        Returns:
            The output values of the last layer.

        Raises:
            ValueError: If the input vector has the wrong length.
        """
        if len(inputs) != self.input_count:
            raise ValueError(f"Expected {self.input_count} inputs, got {len(inputs)}")

        for unit, value in zip(self.input_units, inputs):
            unit.value = float(value)
        self.forward()
        return self.layers[-1].outputs()

    def train_with(self, inputs: Sequence[float], targets: Sequence[float], step_size: float):
        """
        Performs one supervised gradient step on a single example.

        Runs the forward pass, seeds every output unit's gradient with
        prediction - target, then back-propagates and moves each weight by
        step_size * gradient. Pass a negative step_size for gradient descent.

        Args:
            inputs: Raw input vector of length input_count.
            targets: Target vector of length output_count.
            step_size: Update multiplier applied to every weight gradient.
        """
        if len(targets) != self.output_count:
            raise ValueError(f"Expected {self.output_count} targets, got {len(targets)}")

        predictions = self.run_with(inputs)
        _, seed = mse_loss(predictions, targets)
        for unit, gradient in zip(self.layers[-1].output_units, seed):
            unit.gradient = gradient
        self.backward(step_size)

    def compute_loss(self, outputs: Sequence[float], targets: Sequence[float]) -> float:
        """Mean squared error between a prediction vector and its targets."""
        loss, _ = mse_loss(outputs, targets)
        return loss

    def get_weights(self) -> List[List[List[float]]]:
        """Returns a copy of all weights, indexed as [layer][neuron][weight], biases last."""
        return [layer.get_weights() for layer in self.layers]

    @property
    def parameter_count(self) -> int:
        return sum(layer.parameter_count for layer in self.layers)

    def summary(self) -> str:
        """
        Generates a text summary of the network architecture and parameters.

        Returns:
            A string containing the network summary.
        """
        summary_str = "\n" + "="*50 + "\n"
        summary_str += "Neural Network Summary\n"
        summary_str += "="*50 + "\n"
        for i, layer in enumerate(self.layers):
            summary_str += f"Layer {i}: {layer.__class__.__name__} (ID: {layer.id})\n"
            summary_str += f"  Input Shape: ({layer.input_size},)\n"
            summary_str += f"  Output Shape: ({layer.output_size},)\n"
            summary_str += f"  Activation: {layer.activation_fn.__class__.__name__}\n"
            summary_str += f"  Parameters: {layer.parameter_count}\n"
            summary_str += "-"*50 + "\n"

        summary_str += f"Total Parameters: {self.parameter_count}\n"
        summary_str += "="*50 + "\n"
        return summary_str

    def __repr__(self):
        return f"Network(sizes={self.sizes})"
