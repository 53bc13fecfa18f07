#!/usr/bin/env python3
"""
Train and test a scalar-neuron network on 8x8 handwritten digits.

Each round shows one random test case, measures accuracy on the testing
matrices, then trains `--iterations` passes over the training matrices with a
step size scaled down as accuracy improves.

Usage examples::

    python -m clear_neurons.train_digits
    python -m clear_neurons.train_digits --hidden 32 --output-layer one-hot --rounds 20 --plot history.png
"""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional, Sequence

import numpy as np
from tqdm import tqdm

from clear_neurons.classifier import DigitClassifier, step_size_for_accuracy
from clear_neurons.digits import IMAGE_SIZE, combine_data_sets, load_data_set
from clear_neurons.initializers import uniform_generator
from clear_neurons.layer import LayerConfiguration

logger = logging.getLogger("train_digits")


def configure_logging(level_name: Optional[str] = None) -> None:
    """Sets up logging from the given level name or the LOG_LEVEL environment variable."""
    level_name = (level_name or os.getenv('LOG_LEVEL', 'INFO')).upper()
    log_level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Train a network of scalar neurons to classify 8x8 digit images.",
    )
    parser.add_argument("--hidden", type=int, nargs="*", default=[16],
                        help="Neuron count of each hidden ReLU layer.")
    parser.add_argument("--output-layer", choices=["regression", "one-hot"], default="one-hot",
                        help="Single output regressing the digit, or ten one-hot outputs.")
    parser.add_argument("--learning-rate", type=float, default=0.01,
                        help="Base step size magnitude; the network descends by -learning_rate.")
    parser.add_argument("--iterations", type=int, default=1,
                        help="Passes over the training set per round.")
    parser.add_argument("--rounds", type=int, default=50, help="Number of test/train rounds.")
    parser.add_argument("--train-limit", type=int, default=10000,
                        help="Maximum number of training matrices.")
    parser.add_argument("--test-limit", type=int, default=100,
                        help="Maximum number of testing matrices.")
    parser.add_argument("--test-size", type=float, default=0.2,
                        help="Fraction of the dataset held out for testing.")
    parser.add_argument("--weight-range", type=float, default=0.5,
                        help="Initial weights are drawn uniformly from [-range, range).")
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument("--plot", default=None,
                        help="Save the accuracy history plot to this file.")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (defaults to $LOG_LEVEL or INFO).")
    args = parser.parse_args(argv)

    if any(count <= 0 for count in args.hidden):
        parser.error("--hidden neuron counts must be positive")
    if args.learning_rate <= 0:
        parser.error("--learning-rate must be positive")
    if args.rounds <= 0 or args.iterations <= 0:
        parser.error("--rounds and --iterations must be positive")
    if args.train_limit <= 0 or args.test_limit <= 0:
        parser.error("--train-limit and --test-limit must be positive")
    if not 0.0 < args.test_size < 1.0:
        parser.error("--test-size must be between 0 and 1")
    return args


def build_layer_configurations(hidden: Sequence[int], output_layer: str,
                               weight_range: float, seed: Optional[int] = None) -> List[LayerConfiguration]:
    """Hidden ReLU layers followed by a linear output layer, all sharing one generator."""
    coefficient_generator = uniform_generator(-weight_range, weight_range, seed=seed)
    configurations = [
        LayerConfiguration(neuron_count=count, neuron_type='relu',
                           coefficient_generator=coefficient_generator)
        for count in hidden
    ]
    output_count = 1 if output_layer == "regression" else 10
    configurations.append(
        LayerConfiguration(neuron_count=output_count, neuron_type='linear',
                           coefficient_generator=coefficient_generator)
    )
    return configurations


def plot_history(history: dict, filename: str):
    """Saves the accuracy and step size history to an image file."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, (ax_accuracy, ax_step) = plt.subplots(1, 2, figsize=(12, 5))
    ax_accuracy.plot(history['round'], history['accuracy'], label='Test accuracy')
    ax_accuracy.set_xlabel('Round')
    ax_accuracy.set_ylabel('Accuracy')
    ax_accuracy.set_ylim(0, 1)
    ax_accuracy.set_title('Accuracy per Round')
    ax_accuracy.grid(True, alpha=0.3)
    ax_accuracy.legend()

    ax_step.plot(history['round'], history['step_size'], label='|Step size|', color='tab:orange')
    ax_step.set_xlabel('Round')
    ax_step.set_ylabel('Step size')
    ax_step.set_title('Step Size Schedule')
    ax_step.grid(True, alpha=0.3)
    ax_step.legend()

    fig.tight_layout()
    fig.savefig(filename)
    plt.close(fig)
    logger.info(f"Saved training history plot to {filename}")


def run(args: argparse.Namespace) -> dict:
    """Runs the test/train rounds and returns the history."""
    rng = np.random.default_rng(args.seed)

    data_set = combine_data_sets([load_data_set(args.test_size, random_state=args.seed)],
                                 shuffle=True, seed=args.seed)
    training_matrices = data_set.training_set[:args.train_limit]
    testing_matrices = data_set.testing_set[:args.test_limit]
    logger.info(f"Using {len(training_matrices)} training and {len(testing_matrices)} testing matrices")

    configurations = build_layer_configurations(args.hidden, args.output_layer,
                                                args.weight_range, seed=args.seed)
    digit_classifier = DigitClassifier(IMAGE_SIZE * IMAGE_SIZE, configurations)
    logger.info(digit_classifier.neural_network.summary())

    history = {'round': [], 'accuracy': [], 'step_size': []}
    base_step_size = -args.learning_rate
    start_time = time.time()

    for i in tqdm(range(args.rounds), desc="Rounds"):
        sample = testing_matrices[int(rng.integers(len(testing_matrices)))]
        digit_classifier.test([sample], print_cases=True)

        accuracy = digit_classifier.test(testing_matrices)
        step_size = step_size_for_accuracy(base_step_size, accuracy)
        tqdm.write(f"Accuracy after {i * args.iterations} iterations: {accuracy:.3f} "
                   f"(step size {step_size:.2e})")

        history['round'].append(i)
        history['accuracy'].append(accuracy)
        history['step_size'].append(abs(step_size))

        digit_classifier.train(training_matrices, step_size, args.iterations, progress=True)

    final_accuracy = digit_classifier.test(testing_matrices)
    logger.info(f"Final accuracy: {final_accuracy:.3f}")
    logger.info(f"Time elapsed: {time.time() - start_time:.2f} seconds")

    if args.plot:
        plot_history(history, args.plot)
    return history


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)
    run(args)
    return 0


if __name__ == "__main__":
    sys.exit(main())
