"""
Coefficient generators for weight initialization.

A generator is a zero-argument callable returning a float; each Layer calls
it once per variable unit. Keeping the policy in a callable decouples the
architecture of a network from how its weights start out.
"""

from typing import Callable, Optional
import logging

import numpy as np

CoefficientGenerator = Callable[[], float]


def uniform_generator(low: float = -0.5, high: float = 0.5, seed: Optional[int] = None) -> CoefficientGenerator:
    """
    Draws coefficients uniformly from [low, high).

    The default range centres the weights on zero. If all weights start
    positive, gradients flow asymmetrically.

    Args:
        low: Lower bound (inclusive).
        high: Upper bound (exclusive).
        seed: Optional seed for a reproducible stream.

    Returns:
        A zero-argument generator.
    """
    if high <= low:
        raise ValueError(f"uniform_generator: high ({high}) must be greater than low ({low})")
    rng = np.random.default_rng(seed)

    def generate() -> float:
        return float(rng.uniform(low, high))

    return generate


def xavier_generator(fan_in: int, fan_out: int, seed: Optional[int] = None) -> CoefficientGenerator:
    """
    Xavier/Glorot uniform initialization for a layer with the given fan-in and fan-out.

    Uniform distribution limits: sqrt(6 / (fan_in + fan_out))
    """
    if fan_in + fan_out <= 0:
        raise ValueError(f"xavier_generator: fan_in + fan_out must be positive, got {fan_in + fan_out}")
    limit = float(np.sqrt(6.0 / (fan_in + fan_out)))
    logging.debug(f"Xavier uniform generator with limit {limit:.4f}")
    return uniform_generator(-limit, limit, seed=seed)


def constant_generator(value: float = 0.0) -> CoefficientGenerator:
    """Always returns `value`. Handy for deterministic tests and bias-only setups."""
    return lambda: float(value)
