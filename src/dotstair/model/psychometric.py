"""
psychometric.py
---------------

Lapse/guess-bounded logistic psychometric function for 2AFC tasks.

    P(correct | delta, alpha) = guess + (1 - guess - lapse) * sigmoid((delta - alpha) / beta)

- delta : presented stimulus intensity (e.g. dot difference).
- alpha : latent threshold (what QUEST estimates).
- beta  : spread of the logistic, in stimulus units.
- guess : floor (0.5 for two alternatives).
- lapse : ceiling deficit.

Connections
-----------
- PosteriorEstimator.update() evaluates prob_correct() over the whole alpha grid.
- suggest() calls inverse() at the MAP threshold to pick the next intensity.
- SimulatedObserver draws responses from prob_correct() at a fixed true threshold.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from dotstair.config import ConfigurationError, QuestConfig
from dotstair.utils.math import clamp, logit, sigmoid

# Inward nudge applied to target accuracies sitting on the floor or ceiling.
TARGET_EPS = 1e-6
P_EFF_MIN = 0.01
P_EFF_MAX = 0.99


@dataclass
class PsychometricFunction:
    """
    Logistic psychometric function with guess and lapse rates.

    Parameters
    ----------
    beta : float, default=10.0
        Slope parameter; larger means shallower.
    lapse : float, default=0.02
        Lapse rate.
    guess : float, default=0.5
        Guess rate (chance performance).
    """

    beta: float = 10.0
    lapse: float = 0.02
    guess: float = 0.5

    def __post_init__(self):
        if self.beta <= 0:
            raise ConfigurationError(f"beta must be positive, got {self.beta}")
        if not (0.0 <= self.guess < 1.0 and 0.0 <= self.lapse < 1.0):
            raise ConfigurationError(
                f"guess and lapse must lie in [0, 1), got {self.guess}, {self.lapse}"
            )
        if self.guess + self.lapse >= 1.0:
            raise ConfigurationError("guess + lapse must be < 1")

    @classmethod
    def from_config(cls, config: QuestConfig) -> PsychometricFunction:
        return cls(beta=config.beta, lapse=config.lapse, guess=config.guess)

    @property
    def performance_range(self) -> float:
        """Span between floor and ceiling, 1 - guess - lapse."""
        return 1.0 - self.guess - self.lapse

    def prob_correct(self, delta, alpha):
        """
        Probability of a correct response.

        Parameters
        ----------
        delta : float
            Presented intensity.
        alpha : float or np.ndarray
            Candidate threshold(s); arrays broadcast.

        Returns
        -------
        float or np.ndarray
            Values in [guess, 1 - lapse].
        """
        alpha = np.asarray(alpha, dtype=np.float64)
        p = self.guess + self.performance_range * sigmoid((delta - alpha) / self.beta)
        return float(p) if np.ndim(p) == 0 else p

    def inverse(self, target_accuracy: float, alpha: float) -> float:
        """
        Intensity at which accuracy equals `target_accuracy` for threshold `alpha`.

        Parameters
        ----------
        target_accuracy : float
            Desired proportion correct. Values at or beyond the floor/ceiling
            are nudged inside (guess, 1 - lapse) instead of raising.
        alpha : float
            Threshold to invert at (typically the MAP estimate).

        Returns
        -------
        float
            Unrounded intensity, alpha + beta * logit(p_eff).

        Notes
        -----
        p_eff is the target rescaled onto the sigmoid's own (0, 1) range and
        clamped to [0.01, 0.99] so logit() stays finite and moderate.
        """
        t = clamp(
            target_accuracy,
            self.guess + TARGET_EPS,
            1.0 - self.lapse - TARGET_EPS,
        )
        p_eff = clamp((t - self.guess) / self.performance_range, P_EFF_MIN, P_EFF_MAX)
        return float(alpha + self.beta * logit(p_eff))
