"""
math.py
-------

Numeric helpers for dotstair.

Includes:
- sigmoid / logit : logistic function and its inverse.
- clamp : bound a scalar into [lo, hi].
- logsumexp : max-shifted log(sum(exp(a))).
- normalize_log : shift log-weights so their exponentials sum to one.

All functions use NumPy float64. Posterior bookkeeping happens once per trial
on a small grid, so double precision matters more here than tracing/JIT.

Examples
--------
>>> import numpy as np
>>> from dotstair.utils import math
>>> lp = math.normalize_log(np.array([-1000.0, 0.0, -2.0]))
>>> float(np.exp(lp).sum())
1.0
"""

from __future__ import annotations

import numpy as np


def sigmoid(x):
    """
    Logistic function 1 / (1 + exp(-x)).

    Parameters
    ----------
    x : float or np.ndarray
        Input value(s).

    Returns
    -------
    float or np.ndarray
        Values in (0, 1).
    """
    x = np.asarray(x, dtype=np.float64)
    # split on sign so exp() never overflows
    out = np.where(
        x >= 0,
        1.0 / (1.0 + np.exp(-np.abs(x))),
        np.exp(-np.abs(x)) / (1.0 + np.exp(-np.abs(x))),
    )
    return float(out) if out.ndim == 0 else out


def logit(p):
    """
    Inverse of the logistic function, log(p / (1 - p)).

    Parameters
    ----------
    p : float or np.ndarray
        Probabilities strictly inside (0, 1).

    Returns
    -------
    float or np.ndarray
    """
    p = np.asarray(p, dtype=np.float64)
    out = np.log(p / (1.0 - p))
    return float(out) if out.ndim == 0 else out


def clamp(x: float, lo: float, hi: float) -> float:
    """Return x bounded into [lo, hi]."""
    return max(lo, min(hi, x))


def logsumexp(a: np.ndarray) -> float:
    """
    Compute log(sum(exp(a))) without overflow or underflow.

    Parameters
    ----------
    a : np.ndarray
        1-D array of log-weights. Entries may be -inf.

    Returns
    -------
    float
        Log of the summed weights. -inf if every entry is -inf.

    Notes
    -----
    Uses the shift identity
        logsumexp(a) = m + log(sum(exp(a - m))),  m = max(a)
    so the largest term is exp(0) = 1.
    """
    a = np.asarray(a, dtype=np.float64)
    if a.size == 0:
        raise ValueError("logsumexp of an empty array is undefined")
    m = np.max(a)
    if not np.isfinite(m):
        # all -inf (or a +inf entry): nothing to shift by
        return float(m)
    return float(m + np.log(np.sum(np.exp(a - m))))


def normalize_log(a: np.ndarray) -> np.ndarray:
    """
    Normalize log-weights in place of a linear-space renormalization.

    Parameters
    ----------
    a : np.ndarray
        1-D array of unnormalized log-probabilities.

    Returns
    -------
    np.ndarray
        New array with sum(exp(result)) == 1 up to floating-point error.

    Raises
    ------
    ValueError
        If every entry is -inf (there is no mass to normalize).
    """
    a = np.asarray(a, dtype=np.float64)
    total = logsumexp(a)
    if not np.isfinite(total):
        raise ValueError("cannot normalize log-weights with no finite mass")
    return a - total
