from typing import Dict, Type
import logging


class Activation:
    """Base class for the scalar activation strategies a Neuron can use.

    A neuron hands its weighted sum to `forward` and asks `passes_gradient`
    during the backward pass whether the value it produced lets gradients
    through. These two methods are the only behaviour that differs between
    neuron variants.
    """

    name = 'activation'

    def forward(self, x: float) -> float:
        """Compute the activation function value.

        Args:
            x: The neuron's weighted sum (bias included).

        Returns:
            Activated output.
        """
        raise NotImplementedError

    def passes_gradient(self, output: float) -> bool:
        """Tell whether gradients flow back through a neuron that produced `output`.

        Args:
            output: The value the neuron wrote to its output unit during forward.

        Returns:
            True if the backward pass should propagate, False if it is gated.
        """
        raise NotImplementedError

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class Linear(Activation):
    """Linear activation function (identity).

    Mathematical form:
        forward: f(x) = x
        backward: f'(x) = 1
    """

    name = 'linear'

    def forward(self, x: float) -> float:
        return x

    def passes_gradient(self, output: float) -> bool:
        return True


class ReLU(Activation):
    """Rectified Linear Unit activation function.

    Mathematical form:
        forward: f(x) = max(0, x)
        backward: f'(x) = 1 if f(x) > 0 else 0
    """

    name = 'relu'

    def forward(self, x: float) -> float:
        """Compute ReLU activation: max(0, x)"""
        return x if x > 0.0 else 0.0

    def passes_gradient(self, output: float) -> bool:
        """Gradients flow only if the forward output was not clamped."""
        return output > 0.0


# Dictionary mapping activation function names to their classes
ACTIVATION_FUNCTIONS: Dict[str, Type[Activation]] = {
    'linear': Linear,
    'relu': ReLU,
}


def get_activation(name: str) -> Activation:
    """Factory function to get an activation function instance by name.

    Args:
        name: Name of the activation function (case-insensitive).

    Returns:
        An instance of the requested Activation class.

    Raises:
        ValueError: If the activation function name is not recognized.
    """
    name_lower = name.lower()
    if name_lower not in ACTIVATION_FUNCTIONS:
        raise ValueError(
            f"Unknown activation function '{name}'. "
            f"Available functions: {list(ACTIVATION_FUNCTIONS.keys())}"
        )
    logging.debug(f"Creating activation '{name_lower}'")
    return ACTIVATION_FUNCTIONS[name_lower]()
