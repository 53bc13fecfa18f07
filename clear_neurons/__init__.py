"""
clear_neurons package
~~~~~~~~~~~~~~~~~~~~~

Scalar-neuron network with hand-rolled backpropagation for 8x8 digit
recognition. Contains the engine (units, neurons, layers, network), weight
initializers, the digit data source, the classifier and the training driver.
"""

__version__ = "0.1.0"
