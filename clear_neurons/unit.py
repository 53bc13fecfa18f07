class Unit:
    """
    A mutable scalar cell of the computational graph.

    Every edge between neurons is a Unit: a neuron's output unit is the input
    unit of every neuron in the next layer. `value` carries the forward pass,
    `gradient` collects the backward pass. Weights are Units too, so a single
    type holds all the state the engine mutates.
    """

    __slots__ = ('value', 'gradient')

    def __init__(self, value: float = 0.0, gradient: float = 0.0):
        self.value = value
        self.gradient = gradient

    def __repr__(self):
        return f"Unit(value={self.value:.6g}, gradient={self.gradient:.6g})"
