"""
grid_posterior.py
-----------------

Discretized Bayesian posterior over a psychometric threshold (QUEST).

The posterior lives on an evenly spaced grid of candidate thresholds
alpha in [min_delta, max_delta] (step 1) and is stored as log-probabilities.
Each response multiplies in a Bernoulli likelihood under the psychometric
function; the log-posterior is re-normalized with log-sum-exp after every
update so sum(exp(log_posterior)) == 1 at all times.

One PosteriorEstimator is shared by every condition of a run. Conditions are
only distinguished at the suggestion boundary, where `suggest()` inverts the
psychometric function at each condition's own target accuracy.

Connections
-----------
- PsychometricFunction supplies both the likelihood and the inversion.
- QuestProcedure (trial_placement.quest) owns one estimator, remembers the
  last presented value, and feeds responses back through update().
"""

from __future__ import annotations

import math

import numpy as np

from dotstair.config import ConfigurationError
from dotstair.model.psychometric import PsychometricFunction
from dotstair.utils.math import clamp, normalize_log

# Bounds on a single-trial likelihood, keeps log() finite.
LIKELIHOOD_FLOOR = 1e-6
LIKELIHOOD_CEIL = 1.0 - 1e-6


class PosteriorEstimator:
    """
    Grid posterior over the threshold alpha.

    Parameters
    ----------
    min_delta, max_delta : int
        Inclusive range of feasible thresholds and intensities.
    psychometric : PsychometricFunction
        Likelihood model (beta, lapse, guess).
    t_guess : float | None, optional
        Prior mean. Used only together with t_guess_sd.
    t_guess_sd : float | None, optional
        Prior standard deviation. When None the prior is uniform.

    Attributes
    ----------
    alpha_grid : np.ndarray
        Candidate thresholds, shape (K,).
    log_posterior : np.ndarray
        Normalized log-probabilities, shape (K,).
    n_updates : int
        Number of responses folded in so far.
    """

    def __init__(
        self,
        min_delta: int,
        max_delta: int,
        psychometric: PsychometricFunction,
        t_guess: float | None = None,
        t_guess_sd: float | None = None,
    ):
        if min_delta > max_delta:
            raise ValueError(f"min_delta ({min_delta}) must not exceed max_delta ({max_delta})")
        self.min_delta = min_delta
        self.max_delta = max_delta
        self.psychometric = psychometric
        self.alpha_grid = np.arange(min_delta, max_delta + 1, 1.0, dtype=np.float64)

        log_prior = np.zeros_like(self.alpha_grid)
        if t_guess is not None and t_guess_sd is not None:
            with np.errstate(over="ignore"):
                log_prior = -0.5 * ((self.alpha_grid - t_guess) / t_guess_sd) ** 2
            if not np.any(np.isfinite(log_prior)):
                raise ConfigurationError(
                    f"prior N({t_guess}, {t_guess_sd}) puts no mass on "
                    f"[{min_delta}, {max_delta}]"
                )
        self.log_posterior = normalize_log(log_prior)
        self.n_updates = 0

    def __len__(self) -> int:
        return self.alpha_grid.shape[0]

    # ------------------------------------------------------------------
    # UPDATE
    # ------------------------------------------------------------------
    def update(self, presented_delta: float, was_correct: bool) -> None:
        """
        Fold one response into the posterior.

        Parameters
        ----------
        presented_delta : float
            Intensity that was actually shown on the trial.
        was_correct : bool
            Response outcome.
        """
        p = self.psychometric.prob_correct(presented_delta, self.alpha_grid)
        likelihood = p if was_correct else 1.0 - p
        likelihood = np.clip(likelihood, LIKELIHOOD_FLOOR, LIKELIHOOD_CEIL)
        self.log_posterior = normalize_log(self.log_posterior + np.log(likelihood))
        self.n_updates += 1

    # ------------------------------------------------------------------
    # ACCESSORS
    # ------------------------------------------------------------------
    def probabilities(self) -> np.ndarray:
        """Return the posterior in linear space (a fresh array)."""
        return np.exp(self.log_posterior)

    def map_estimate(self) -> float:
        """
        Maximum-a-posteriori threshold.

        Returns
        -------
        float
            Grid value with the highest log-posterior.

        Notes
        -----
        Exact ties (e.g. a flat posterior) resolve to the midpoint of the
        tied index range.
        """
        tied = np.flatnonzero(self.log_posterior == np.max(self.log_posterior))
        idx = int((tied[0] + tied[-1]) // 2)
        return float(self.alpha_grid[idx])

    def entropy(self) -> float:
        """Shannon entropy -sum(p ln p) in nats, over grid points with p > 0."""
        p = self.probabilities()
        p = p[p > 0]
        return float(-np.sum(p * np.log(p)))


def suggest(estimator: PosteriorEstimator, target_accuracy: float) -> int:
    """
    Next intensity for a condition with the given target accuracy.

    Parameters
    ----------
    estimator : PosteriorEstimator
        Shared posterior (read only).
    target_accuracy : float
        Condition's desired proportion correct.

    Returns
    -------
    int
        MAP threshold pushed through the inverse psychometric function,
        rounded to the nearest integer (halves round up) and clamped into
        [min_delta, max_delta].
    """
    alpha_hat = estimator.map_estimate()
    delta = estimator.psychometric.inverse(target_accuracy, alpha_hat)
    return int(clamp(math.floor(delta + 0.5), estimator.min_delta, estimator.max_delta))
