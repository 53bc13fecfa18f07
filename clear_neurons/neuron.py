from typing import List, Optional, Union

from clear_neurons.activations import Activation, get_activation
from clear_neurons.errors import ConfigurationError
from clear_neurons.unit import Unit


class Neuron:
    """
    A single scalar neuron computing a weighted sum of its input units.

    The forward pass computes:

        output = activation(w_0 * x_0 + w_1 * x_1 + ... + w_n-1 * x_n-1 + b)

    where x_i are the values of the input units and w_i, b are the values of
    the neuron's variable units. The bias b is the *last* variable unit and
    has no matching input unit: its coefficient is always 1.0. Hence a neuron
    with n input units owns exactly n + 1 variable units.

    Ownership:
        input_units (List[Unit]): Not owned. The same list object is shared by
                                  every neuron of a layer and is the previous
                                  layer's list of output units (or the
                                  network's external input units).
        output_unit (Unit): Owned. Read by the next layer.
        variable_units (List[Unit]): Owned. The neuron's weights, bias last.
    """

    def __init__(
        self,
        input_units: List[Unit],
        output_unit: Unit,
        variable_units: List[Unit],
        activation: Union[str, Activation] = 'linear',
    ):
        """
        Initializes the neuron.

        Args:
            input_units: Shared sequence of input units (may be empty).
            output_unit: The unit this neuron writes its result to.
            variable_units: Weight units, one per input unit plus a trailing bias unit.
            activation: Activation name ('linear' or 'relu') or an Activation instance.

        Raises:
            ConfigurationError: If len(variable_units) != len(input_units) + 1.
        """
        if len(variable_units) != len(input_units) + 1:
            raise ConfigurationError(
                f"Neuron expects {len(input_units) + 1} variable units "
                f"({len(input_units)} weights + 1 bias), got {len(variable_units)}"
            )
        self.input_units = input_units
        self.output_unit = output_unit
        self.variable_units = variable_units
        self.activation_fn = get_activation(activation) if isinstance(activation, str) else activation

    def _coefficient(self, i: int) -> float:
        # The trailing bias weight multiplies an implicit 1.0
        if i < len(self.input_units):
            return self.input_units[i].value
        return 1.0

    def forward(self):
        """
        Computes the weighted sum of the inputs and writes it, activated, to the output unit.

        Also resets the gradient of every variable unit so the following
        backward pass accumulates from zero.
        """
        total = 0.0
        for i, variable_unit in enumerate(self.variable_units):
            variable_unit.gradient = 0.0
            total += self._coefficient(i) * variable_unit.value
        self.output_unit.value = self.activation_fn.forward(total)

    def backward(self, step_size: Optional[float] = None):
        """
        Back-propagates the output unit's gradient to the variable and input units.

        For output = Σ w_i * x_i (+ b), d(output)/d(w_i) = x_i (1.0 for the bias)
        and d(output)/d(x_i) = w_i. Both are scaled by output_unit.gradient and
        both are gated to zero if the activation suppressed the forward output.

        Input gradients are added, never assigned: every neuron of the layer
        contributes to the same shared input units.

        Args:
            step_size: If given, each variable unit is moved in place by
                       step_size * gradient. Pass a negative value to descend.
        """
        upstream = self.output_unit.gradient
        active = self.activation_fn.passes_gradient(self.output_unit.value)
        input_count = len(self.input_units)

        for i, variable_unit in enumerate(self.variable_units):
            if active:
                variable_unit.gradient += self._coefficient(i) * upstream
                if i < input_count:
                    # Uses the weight before this call's update
                    self.input_units[i].gradient += variable_unit.value * upstream

            if step_size is not None:
                variable_unit.value += step_size * variable_unit.gradient

    @property
    def weights(self) -> List[float]:
        """Current values of the variable units, bias last."""
        return [unit.value for unit in self.variable_units]

    def __repr__(self):
        return (f"Neuron(inputs={len(self.input_units)}, "
                f"activation={self.activation_fn.__class__.__name__})")
