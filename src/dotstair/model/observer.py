"""
observer.py
-----------

Simulated observer for pilot runs and tests.

A SimulatedObserver answers trials by drawing Bernoulli responses from a
PsychometricFunction at a fixed, known threshold. All randomness comes from a
JAX PRNG key; the same key always reproduces the same response sequence for
the same presented intensities.

Examples
--------
>>> from dotstair.model import PsychometricFunction, SimulatedObserver
>>> from dotstair.utils.rng import seed
>>> observer = SimulatedObserver(PsychometricFunction(), threshold=30.0, key=seed(0))
>>> correct = observer.respond(40)
"""

from __future__ import annotations

import jax
import jax.random as jr
import numpy as np

from dotstair.model.psychometric import PsychometricFunction
from dotstair.utils.rng import split


class SimulatedObserver:
    """
    Synthetic 2AFC responder.

    Parameters
    ----------
    psychometric : PsychometricFunction
        Response model. For a fixed-accuracy observer use `fixed_accuracy`.
    threshold : float
        True threshold alpha of the simulated participant.
    key : jax.Array
        PRNG key.
    fixed_accuracy : float | None, optional
        If given, every response is correct with this probability regardless
        of the presented intensity.
    block_size : int, default=256
        Uniform draws fetched per refill of the internal buffer.
    """

    def __init__(
        self,
        psychometric: PsychometricFunction,
        threshold: float,
        key: jax.Array,
        *,
        fixed_accuracy: float | None = None,
        block_size: int = 256,
    ):
        self.psychometric = psychometric
        self.threshold = float(threshold)
        self.fixed_accuracy = fixed_accuracy
        self.block_size = int(block_size)
        self._key = key
        self._uniforms = np.empty(0)
        self._cursor = 0
        self.n_responses = 0

    def _next_uniform(self) -> float:
        if self._cursor >= self._uniforms.shape[0]:
            self._key, subkey = split(self._key)
            self._uniforms = np.asarray(jr.uniform(subkey, (self.block_size,)))
            self._cursor = 0
        u = float(self._uniforms[self._cursor])
        self._cursor += 1
        return u

    def p_correct(self, value: float) -> float:
        """Probability this observer answers correctly at `value`."""
        if self.fixed_accuracy is not None:
            return float(self.fixed_accuracy)
        return self.psychometric.prob_correct(value, self.threshold)

    def respond(self, value: float) -> bool:
        """Draw one response to a trial presented at `value`."""
        self.n_responses += 1
        return self._next_uniform() < self.p_correct(value)
