"""
Digit matrices for training and testing the classifier.

Images come from scikit-learn's bundled handwritten digits dataset: 8x8
greyscale images with pixel values 0-16. Each image is flattened row by row
into a list of IMAGE_SIZE * IMAGE_SIZE floats scaled to [0, 1].
"""

from typing import List, NamedTuple, Optional, Sequence
import logging

import numpy as np

IMAGE_SIZE = 8
MAX_PIXEL_VALUE = 16.0

# Darkest last
ASCII_SHADES = " .:-=+*#%@"


class DigitMatrix(NamedTuple):
    """A flattened, normalized image and the digit it shows."""
    matrix: List[float]
    digit: int


class DigitDataSet(NamedTuple):
    training_set: List[DigitMatrix]
    testing_set: List[DigitMatrix]


def to_digit_matrices(images: np.ndarray, labels: np.ndarray) -> List[DigitMatrix]:
    """
    Converts raw pixel arrays and labels into DigitMatrix records.

    Args:
        images: Array of shape (n_samples, IMAGE_SIZE * IMAGE_SIZE) or
                (n_samples, IMAGE_SIZE, IMAGE_SIZE) with values 0-16.
        labels: Array of shape (n_samples,) with digits 0-9.

    Returns:
        A list of DigitMatrix with pixels scaled to [0, 1].
    """
    images = np.asarray(images, dtype=float)
    labels = np.asarray(labels)
    if images.shape[0] != labels.shape[0]:
        raise ValueError(f"Got {images.shape[0]} images but {labels.shape[0]} labels")

    flat = images.reshape(images.shape[0], -1)
    if flat.shape[1] != IMAGE_SIZE * IMAGE_SIZE:
        raise ValueError(f"Expected {IMAGE_SIZE * IMAGE_SIZE} pixels per image, got {flat.shape[1]}")

    normalized = np.clip(flat / MAX_PIXEL_VALUE, 0.0, 1.0)
    return [DigitMatrix(row.tolist(), int(label)) for row, label in zip(normalized, labels)]


def load_data_set(test_size: float = 0.2, random_state: Optional[int] = 42) -> DigitDataSet:
    """
    Loads the scikit-learn digits dataset and splits it into training and testing sets.

    The split is stratified so every digit appears in both sets in the same proportion.

    Args:
        test_size: Fraction of the images used for testing.
        random_state: Seed of the split.

    Returns:
        A DigitDataSet.
    """
    from sklearn.datasets import load_digits
    from sklearn.model_selection import train_test_split

    if not 0.0 < test_size < 1.0:
        raise ValueError(f"test_size must be between 0.0 and 1.0, got {test_size}")

    logging.info("Loading scikit-learn digits dataset...")
    digits = load_digits()
    X_train, X_test, y_train, y_test = train_test_split(
        digits.data, digits.target,
        test_size=test_size, random_state=random_state, stratify=digits.target
    )
    logging.info(f"Split into {len(X_train)} training and {len(X_test)} testing images")
    return DigitDataSet(to_digit_matrices(X_train, y_train), to_digit_matrices(X_test, y_test))


def combine_data_sets(data_sets: Sequence[DigitDataSet], shuffle: bool = False,
                      seed: Optional[int] = None) -> DigitDataSet:
    """
    Concatenates several data sets into one, optionally shuffling each half.

    Args:
        data_sets: Data sets to combine, in order.
        shuffle: Whether to shuffle the combined training and testing sets.
        seed: Seed for the shuffle.
    """
    training_set = [matrix for data_set in data_sets for matrix in data_set.training_set]
    testing_set = [matrix for data_set in data_sets for matrix in data_set.testing_set]

    if shuffle:
        rng = np.random.default_rng(seed)
        training_set = [training_set[i] for i in rng.permutation(len(training_set))]
        testing_set = [testing_set[i] for i in rng.permutation(len(testing_set))]

    return DigitDataSet(training_set, testing_set)


def render_image(matrix: Sequence[float], size: int = IMAGE_SIZE) -> str:
    """
    Renders a flattened image as ASCII art, one text row per pixel row.

    Each pixel is drawn twice horizontally so the image keeps its aspect
    ratio in a terminal.
    """
    if len(matrix) != size * size:
        raise ValueError(f"Expected {size * size} pixels, got {len(matrix)}")

    levels = len(ASCII_SHADES) - 1
    rows = []
    for r in range(size):
        row = ""
        for value in matrix[r * size:(r + 1) * size]:
            shade = ASCII_SHADES[int(round(min(max(value, 0.0), 1.0) * levels))]
            row += shade * 2
        rows.append(row)
    return "\n".join(rows)


def print_image(matrix: Sequence[float], size: int = IMAGE_SIZE):
    print(render_image(matrix, size))
