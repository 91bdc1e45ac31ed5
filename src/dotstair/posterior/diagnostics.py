"""
diagnostics.py
--------------

Posterior diagnostics.

Summaries of a PosteriorEstimator for convergence monitoring and trial logs.
None of these feed back into trial placement.

- posterior_mean : expected threshold under the posterior.
- posterior_sd : posterior standard deviation of the threshold.
- credible_interval : central interval holding a given posterior mass.
"""

from __future__ import annotations

import numpy as np

from dotstair.posterior.grid_posterior import PosteriorEstimator


def posterior_mean(estimator: PosteriorEstimator) -> float:
    """Posterior mean of alpha."""
    return float(np.sum(estimator.probabilities() * estimator.alpha_grid))


def posterior_sd(estimator: PosteriorEstimator) -> float:
    """
    Posterior standard deviation of alpha.

    Notes
    -----
    A flat posterior over K unit-spaced points gives sqrt((K^2 - 1) / 12).
    """
    p = estimator.probabilities()
    mean = np.sum(p * estimator.alpha_grid)
    var = np.sum(p * (estimator.alpha_grid - mean) ** 2)
    return float(np.sqrt(max(var, 0.0)))


def credible_interval(
    estimator: PosteriorEstimator, mass: float = 0.95
) -> tuple[float, float]:
    """
    Central credible interval of the threshold.

    Parameters
    ----------
    estimator : PosteriorEstimator
        Posterior to summarize.
    mass : float, default=0.95
        Probability mass inside the interval, in (0, 1].

    Returns
    -------
    (lower, upper) : tuple of float
        Grid values bounding the interval (inclusive).
    """
    if not 0.0 < mass <= 1.0:
        raise ValueError(f"mass must lie in (0, 1], got {mass}")
    cdf = np.cumsum(estimator.probabilities())
    tail = (1.0 - mass) / 2.0
    lo = int(np.searchsorted(cdf, tail, side="right"))
    hi = int(np.searchsorted(cdf, 1.0 - tail, side="left"))
    hi = min(hi, len(estimator) - 1)
    return float(estimator.alpha_grid[lo]), float(estimator.alpha_grid[hi])
