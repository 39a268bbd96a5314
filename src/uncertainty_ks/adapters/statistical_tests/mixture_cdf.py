"""Cumulative distribution of a mixture of per-observation normal distributions.

A dated sample is treated as an equal-weight mixture of n normal
distributions, each centred on one measured value with that measurement's
own one-sigma spread. Its cumulative curve at a point d is

    density(d) = sum_i Phi((d - mu_i) / sigma_i)

where Phi is the standard normal CDF. In density mode the curve runs from 0
to n; in probability mode it is divided by n and runs from 0 to 1. This is
how per-date analytical uncertainty enters the empirical distribution in
place of a step function.

Example:
    >>> mixture_cdf(10.0, [10.0], [0.1])
    0.5
    >>> mixture_cdf(10.0, [10.0, 10.0], [0.1, 0.2], normalize=False)
    1.0
"""

from collections.abc import Sequence

import numpy as np
from scipy import stats


def mixture_cdf(
    d: float | Sequence[float] | np.ndarray,
    mu: Sequence[float] | np.ndarray,
    sigma: Sequence[float] | np.ndarray,
    normalize: bool = True,
) -> float | np.ndarray:
    """Evaluate the mixture CDF at one or many query points.

    Args:
        d: Query point, or array of query points.
        mu: Component means (the measured values).
        sigma: Component one-sigma spreads, same length as ``mu``.
        normalize: Divide by the number of components (probability mode).

    Returns:
        A float for a scalar ``d``, otherwise an array shaped like ``d``.

    Raises:
        ValueError: If there are no components, the lengths differ, or any
            sigma is not strictly positive.
    """
    mu = np.asarray(mu, dtype=float)
    sigma = np.asarray(sigma, dtype=float)
    if mu.size == 0:
        raise ValueError("Mixture must have at least one component")
    if mu.shape != sigma.shape:
        raise ValueError(
            f"Mixture means and sigmas differ in length: {mu.size} vs {sigma.size}"
        )
    if np.any(sigma <= 0):
        raise ValueError("Mixture sigmas must be strictly positive")

    points = np.asarray(d, dtype=float)
    total = np.zeros_like(points)
    for centre, spread in zip(mu, sigma):
        total += stats.norm.cdf((points - centre) / spread)

    if normalize:
        total = total / mu.size

    if total.ndim == 0:
        return float(total)
    return total
