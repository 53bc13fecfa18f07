from typing import Callable, List, Optional, Sequence
import logging
import math

import numpy as np
from tqdm import tqdm

from clear_neurons.digits import DigitMatrix, print_image
from clear_neurons.errors import ConfigurationError
from clear_neurons.layer import LayerConfiguration
from clear_neurons.network import Network

NUM_CLASSES = 10


def round_output(output: float) -> int:
    """Default reading of a single-output network: the nearest integer."""
    return int(round(output))


def step_size_for_accuracy(base_step_size: float, accuracy: float, minimum_factor: float = 0.1) -> float:
    """
    Open-loop step size schedule: shrink the step as measured accuracy improves.

    step = base_step_size * max(minimum_factor, 1 - accuracy)

    Args:
        base_step_size: Step size used at zero accuracy (keep the sign the network expects).
        accuracy: Latest measured accuracy in [0, 1].
        minimum_factor: Lower bound of the scaling factor.
    """
    if not 0.0 <= accuracy <= 1.0:
        raise ValueError(f"Accuracy must be between 0.0 and 1.0, got {accuracy}")
    return base_step_size * max(minimum_factor, 1.0 - accuracy)


class DigitClassifier:
    """
    Sets up, tests and trains a Network that maps digit matrices to digits.

    Two output encodings are supported, chosen by the size of the last layer:
        - 1 output: the network regresses the digit value itself; the target is
          [digit] and the output is read through `output_operation`
          (rounding by default).
        - 10 outputs: one output per digit; the target is one-hot and the
          prediction is the index of the largest output.
    """

    def __init__(self, input_count: int, layer_configurations: Sequence[LayerConfiguration]):
        """
        Initializes the classifier.

        Args:
            input_count: Pixels per image.
            layer_configurations: Layers of the network, output layer last.

        Raises:
            ConfigurationError: If the last layer has neither 1 nor 10 neurons.
        """
        self.neural_network = Network(input_count, layer_configurations)
        self.output_count = self.neural_network.output_count
        if self.output_count not in (1, NUM_CLASSES):
            raise ConfigurationError(
                f"DigitClassifier needs 1 or {NUM_CLASSES} outputs, got {self.output_count}"
            )

    def targets_for(self, digit: int) -> List[float]:
        """Encodes a digit as the target vector for the network's output layer."""
        if digit not in range(NUM_CLASSES):
            raise ValueError(f"Digit must be between 0 and {NUM_CLASSES - 1}, got {digit}")
        if self.output_count == 1:
            return [float(digit)]
        targets = [0.0] * NUM_CLASSES
        targets[digit] = 1.0
        return targets

    def interpret(self, outputs: Sequence[float],
                  output_operation: Optional[Callable[[float], int]] = None) -> int:
        """Turns a prediction vector into a digit."""
        if self.output_count == 1:
            operation = output_operation or round_output
            return operation(outputs[0])
        return int(np.argmax(outputs))

    def predict(self, matrix: Sequence[float],
                output_operation: Optional[Callable[[float], int]] = None) -> int:
        return self.interpret(self.neural_network.run_with(matrix), output_operation)

    def test(self, digit_matrices: Sequence[DigitMatrix],
             output_operation: Optional[Callable[[float], int]] = None,
             print_cases: bool = False) -> float:
        """
        Tests the classifier on a set of digit matrices.

        Args:
            digit_matrices: Matrices to classify.
            output_operation: Reading of a single-output network (defaults to rounding).
            print_cases: Print every case with its ASCII image.

        Returns:
            The fraction of correct guesses.
        """
        if len(digit_matrices) == 0:
            raise ValueError("Cannot test on an empty set of digit matrices.")

        correct_guesses = 0
        non_finite = 0
        for digit_matrix in digit_matrices:
            outputs = self.neural_network.run_with(digit_matrix.matrix)
            if not all(math.isfinite(output) for output in outputs):
                non_finite += 1
                parsed_output = -1
            else:
                parsed_output = self.interpret(outputs, output_operation)

            correct = parsed_output == digit_matrix.digit
            if correct:
                correct_guesses += 1

            if print_cases:
                display_output = ", ".join(f"{output:.4f}" for output in outputs)
                print(f"[TEST]   Expected -> {digit_matrix.digit}   "
                      f"Actual -> {display_output} ({parsed_output})")
                print(("" if correct else "IN") + "CORRECT GUESS")
                print("Image of the digit:")
                print_image(digit_matrix.matrix)
                print()

        if non_finite:
            logging.warning(f"{non_finite} of {len(digit_matrices)} predictions were NaN or Inf. "
                            f"The step size is probably too large.")

        return correct_guesses / len(digit_matrices)

    def train(self, digit_matrices: Sequence[DigitMatrix], step_size: float,
              iteration_count: int, progress: bool = False):
        """
        Trains the network on every matrix, repeating the whole set `iteration_count` times.

        Args:
            digit_matrices: Training matrices.
            step_size: Passed to Network.train_with (negative to descend).
            iteration_count: Number of passes over the set.
            progress: Show a tqdm progress bar over the iterations.
        """
        iterations = range(iteration_count)
        if progress:
            iterations = tqdm(iterations, desc="Training", leave=False)

        for _ in iterations:
            for digit_matrix in digit_matrices:
                self.neural_network.train_with(
                    digit_matrix.matrix, self.targets_for(digit_matrix.digit), step_size
                )
        logging.debug(f"Trained {iteration_count} iterations over {len(digit_matrices)} matrices")
