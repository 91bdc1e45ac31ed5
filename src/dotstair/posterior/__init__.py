"""
posterior
=========

Grid posterior over the psychometric threshold (QUEST) and its diagnostics.

This subpackage provides:
- PosteriorEstimator : shared log-space posterior on an alpha grid.
- suggest : pure conversion of the posterior into a next intensity for a
  given target accuracy.
- diagnostics : posterior mean / sd / credible interval for monitoring.
"""

from .diagnostics import credible_interval, posterior_mean, posterior_sd
from .grid_posterior import PosteriorEstimator, suggest

__all__ = [
    "PosteriorEstimator",
    "suggest",
    # Diagnostics
    "posterior_mean",
    "posterior_sd",
    "credible_interval",
]
