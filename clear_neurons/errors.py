class ConfigurationError(ValueError):
    """Raised when a neuron, layer or network is wired with mismatched sizes.

    Detected at construction time only; a network that was built successfully
    never raises it during forward or backward passes.
    """
