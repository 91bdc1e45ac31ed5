"""
utils
=====

Shared utility functions and helpers for dotstair.

This subpackage provides:
- math : logistic helpers, clamping, log-sum-exp normalization.
- rng : JAX PRNG handling for reproducible simulated observers.
"""

from .math import clamp, logit, logsumexp, normalize_log, sigmoid
from .rng import seed, split

__all__ = [
    # math
    "sigmoid",
    "logit",
    "clamp",
    "logsumexp",
    "normalize_log",
    # rng
    "seed",
    "split",
]
