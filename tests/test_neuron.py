"""
test_neuron.py
~~~~~~~~~~~~~~

Unit tests for units, activations and the scalar neuron.
"""

import pytest

from clear_neurons.activations import Linear, ReLU, get_activation
from clear_neurons.errors import ConfigurationError
from clear_neurons.neuron import Neuron
from clear_neurons.unit import Unit
from conftest import make_variable_units

EPSILON = 1e-6


def weighted_output(neuron):
    neuron.forward()
    return neuron.output_unit.value


@pytest.mark.unit
class TestUnit:

    def test_defaults_to_zero(self):
        unit = Unit()
        assert unit.value == 0.0
        assert unit.gradient == 0.0

    def test_is_mutable(self):
        unit = Unit(1.0)
        unit.value = 3.0
        unit.gradient += 0.5
        assert (unit.value, unit.gradient) == (3.0, 0.5)


@pytest.mark.unit
class TestActivations:

    def test_linear_is_identity(self):
        linear = Linear()
        assert linear.forward(-3.25) == -3.25
        assert linear.passes_gradient(-3.25) is True

    def test_relu_clamps_negative(self):
        relu = ReLU()
        assert relu.forward(-0.5) == 0.0
        assert relu.forward(2.5) == 2.5
        assert relu.passes_gradient(0.0) is False
        assert relu.passes_gradient(2.5) is True

    def test_get_activation_is_case_insensitive(self):
        assert isinstance(get_activation('ReLU'), ReLU)
        assert isinstance(get_activation('linear'), Linear)

    def test_get_activation_unknown(self):
        with pytest.raises(ValueError, match="Unknown activation"):
            get_activation('sigmoid')


@pytest.mark.unit
class TestNeuronForward:

    def test_pure_bias_outputs_bias(self):
        neuron = Neuron([], Unit(), make_variable_units([0.75]))
        assert weighted_output(neuron) == 0.75

    def test_weighted_sum_with_bias(self, two_inputs):
        neuron = Neuron(two_inputs, Unit(), make_variable_units([0.5, 0.25, -1.0]))
        assert weighted_output(neuron) == pytest.approx(0.5 * 1.5 + 0.25 * -2.0 - 1.0)

    def test_relu_negative_sum_is_zero(self, two_inputs):
        neuron = Neuron(two_inputs, Unit(), make_variable_units([-1.0, 1.0, 0.0]), 'relu')
        assert weighted_output(neuron) == 0.0

    def test_relu_positive_sum_passes_through(self, two_inputs):
        neuron = Neuron(two_inputs, Unit(), make_variable_units([1.0, -1.0, 0.25]), 'relu')
        assert weighted_output(neuron) == 1.5 + 2.0 + 0.25

    def test_forward_resets_weight_gradients(self, two_inputs):
        variable_units = make_variable_units([1.0, 1.0, 1.0])
        for unit in variable_units:
            unit.gradient = 9.0
        Neuron(two_inputs, Unit(), variable_units).forward()
        assert all(unit.gradient == 0.0 for unit in variable_units)

    def test_mismatched_weight_count_fails(self, two_inputs):
        with pytest.raises(ConfigurationError):
            Neuron(two_inputs, Unit(), make_variable_units([1.0, 1.0]))


@pytest.mark.unit
class TestNeuronBackward:

    def test_linear_gradients(self, two_inputs):
        weights = [0.5, 0.25, -1.0]
        neuron = Neuron(two_inputs, Unit(), make_variable_units(weights))
        neuron.forward()
        neuron.output_unit.gradient = 2.0
        neuron.backward()

        assert neuron.variable_units[0].gradient == pytest.approx(1.5 * 2.0)
        assert neuron.variable_units[1].gradient == pytest.approx(-2.0 * 2.0)
        assert neuron.variable_units[2].gradient == pytest.approx(2.0)
        assert two_inputs[0].gradient == pytest.approx(0.5 * 2.0)
        assert two_inputs[1].gradient == pytest.approx(0.25 * 2.0)

    def test_gradients_match_finite_differences(self, two_inputs):
        upstream = -0.7
        neuron = Neuron(two_inputs, Unit(), make_variable_units([0.3, -0.8, 0.1]))
        neuron.forward()
        neuron.output_unit.gradient = upstream
        neuron.backward()

        analytic_weights = [unit.gradient for unit in neuron.variable_units]
        analytic_inputs = [unit.gradient for unit in two_inputs]

        for unit, analytic in zip(neuron.variable_units + two_inputs, analytic_weights + analytic_inputs):
            original = unit.value
            unit.value = original + EPSILON
            plus = weighted_output(neuron)
            unit.value = original - EPSILON
            minus = weighted_output(neuron)
            unit.value = original
            numeric = upstream * (plus - minus) / (2 * EPSILON)
            assert analytic == pytest.approx(numeric, abs=1e-5)

    def test_clamped_relu_gates_everything(self, two_inputs):
        weights = [-1.0, 1.0, -0.5]
        neuron = Neuron(two_inputs, Unit(), make_variable_units(weights), 'relu')
        neuron.forward()
        assert neuron.output_unit.value == 0.0

        neuron.output_unit.gradient = 5.0
        neuron.backward(step_size=0.5)

        assert [unit.gradient for unit in neuron.variable_units] == [0.0, 0.0, 0.0]
        assert [unit.gradient for unit in two_inputs] == [0.0, 0.0]
        assert neuron.weights == weights

    def test_zero_step_size_keeps_weights(self, two_inputs):
        weights = [0.5, 0.25, -1.0]
        neuron = Neuron(two_inputs, Unit(), make_variable_units(weights))
        neuron.forward()
        neuron.output_unit.gradient = 3.0
        neuron.backward(step_size=0.0)
        assert neuron.weights == weights
        assert neuron.variable_units[2].gradient == 3.0

    def test_step_size_moves_weights_along_gradient(self, two_inputs):
        neuron = Neuron(two_inputs, Unit(), make_variable_units([0.5, 0.25, -1.0]))
        neuron.forward()
        neuron.output_unit.gradient = 1.0
        neuron.backward(step_size=-0.1)
        assert neuron.weights == pytest.approx([0.5 - 0.15, 0.25 + 0.2, -1.0 - 0.1])

    def test_input_gradient_uses_weight_before_update(self, two_inputs):
        neuron = Neuron(two_inputs, Unit(), make_variable_units([0.5, 0.25, -1.0]))
        neuron.forward()
        neuron.output_unit.gradient = 1.0
        neuron.backward(step_size=-0.1)
        assert two_inputs[0].gradient == pytest.approx(0.5)
        assert two_inputs[1].gradient == pytest.approx(0.25)

    def test_input_gradients_accumulate(self, two_inputs):
        two_inputs[0].gradient = 1.0
        neuron = Neuron(two_inputs, Unit(), make_variable_units([0.5, 0.25, -1.0]))
        neuron.forward()
        neuron.output_unit.gradient = 2.0
        neuron.backward()
        assert two_inputs[0].gradient == pytest.approx(1.0 + 0.5 * 2.0)
