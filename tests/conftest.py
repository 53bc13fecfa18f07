"""
conftest.py
~~~~~~~~~~~

Shared fixtures for the scalar-neuron engine tests.
"""

import os
import sys

import pytest

# Add the project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from clear_neurons.initializers import constant_generator, uniform_generator
from clear_neurons.layer import LayerConfiguration
from clear_neurons.network import Network
from clear_neurons.unit import Unit


def make_variable_units(values):
    return [Unit(value) for value in values]


@pytest.fixture
def two_inputs():
    """Two input units with distinct, non-zero values."""
    return [Unit(1.5), Unit(-2.0)]


@pytest.fixture
def sum_network():
    """A 2-input network with a single linear neuron."""
    return Network(2, [LayerConfiguration(1, 'linear', uniform_generator(seed=0))])


@pytest.fixture
def hidden_network():
    """A 3-4-2 network: ReLU hidden layer, linear output layer."""
    return Network(3, [
        LayerConfiguration(4, 'relu', uniform_generator(-1.0, 1.0, seed=7)),
        LayerConfiguration(2, 'linear', uniform_generator(-1.0, 1.0, seed=8)),
    ])


@pytest.fixture
def zero_configuration():
    return LayerConfiguration(1, 'linear', constant_generator(0.0))
