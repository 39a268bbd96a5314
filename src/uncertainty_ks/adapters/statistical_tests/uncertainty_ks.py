"""Two-sample Kolmogorov-Smirnov test on uncertainty-weighted mixture CDFs.

The classic K-S test compares two step-function ECDFs. Here each sample's
ECDF is replaced by its mixture CDF, where every date contributes a normal
distribution with its own analytical uncertainty, so two populations are
compared on what the data can actually resolve. The statistic D is the
largest absolute difference between the two mixture CDFs over the pooled
sample points, and its p-value comes from the exact Smirnov distribution for
the sample sizes actually used (after any xenocryst filtering).

Reference:
    Smirnov, N. (1948). "Table for estimating the goodness of fit of
    empirical distributions". Annals of Mathematical Statistics, 19(2),
    279-281.

Example:
    >>> x = [10.0, 10.1, 10.2, 10.3, 10.4, 10.5, 10.6]
    >>> y = [20.0, 20.1, 20.2, 20.3, 20.4, 20.5, 20.6]
    >>> result = UncertaintyKSTest().run(x, [0.02] * 7, y, [0.02] * 7)
    >>> round(result.statistic, 4)  # each date sits halfway up its own step
    0.9286
    >>> result.p_value < 0.001
    True
"""

import math
import warnings
from collections.abc import Sequence

import numpy as np

from uncertainty_ks.adapters.smirnov import ExactSmirnovDistribution
from uncertainty_ks.adapters.statistical_tests.mixture_cdf import mixture_cdf
from uncertainty_ks.adapters.statistical_tests.xenocryst_filter import XenocrystFilter
from uncertainty_ks.adapters.visualizer import DistributionVisualizer
from uncertainty_ks.core.errors import (
    LowSampleSizeWarning,
    MissingExactDistributionError,
    TiedValuesWarning,
)
from uncertainty_ks.core.interfaces import ISmirnovDistribution
from uncertainty_ks.core.models import FilterResult, Sample, TestResult
from uncertainty_ks.observability import get_logger

logger = get_logger(__name__)


class UncertaintyKSTest:
    """Modified two-sample K-S test with optional xenocryst filtering.

    Args:
        smirnov: Exact null CDF provider. Defaults to ExactSmirnovDistribution.
        xenocryst_filter: Filter used when filtering is requested.
        low_sample_size: Samples at or below this size trigger a warning.
        visualizer: Builds the distribution series when a graph is requested.
    """

    def __init__(
        self,
        smirnov: ISmirnovDistribution | None = None,
        xenocryst_filter: XenocrystFilter | None = None,
        low_sample_size: int = 6,
        visualizer: DistributionVisualizer | None = None,
    ) -> None:
        self._smirnov = smirnov or ExactSmirnovDistribution()
        self._filter = xenocryst_filter or XenocrystFilter()
        self._low_sample_size = low_sample_size
        self._visualizer = visualizer or DistributionVisualizer()

    def run(
        self,
        x: Sequence[float] | np.ndarray,
        ux: Sequence[float] | np.ndarray,
        y: Sequence[float] | np.ndarray,
        uy: Sequence[float] | np.ndarray,
        filter_xenocrysts: bool = False,
        threshold_x: float | None = None,
        threshold_y: float | None = None,
        graph: bool = False,
    ) -> TestResult:
        """Run the test on raw values and two-sigma uncertainties.

        Args:
            x: Values of the first sample.
            ux: Two-sigma uncertainties of the first sample.
            y: Values of the second sample.
            uy: Two-sigma uncertainties of the second sample.
            filter_xenocrysts: Remove a trailing xenocryst tail from each
                sample before testing.
            threshold_x: Filter threshold for x (defaults to the filter's).
            threshold_y: Filter threshold for y (defaults to the filter's).
            graph: Attach a DistributionSeries of the compared samples.

        Returns:
            TestResult with statistic, exact p-value and winner value(s).

        Raises:
            ValueError: If a sample is empty after dropping missing entries,
                or its inputs are malformed.
            InsufficientSampleSizeError: If filtering a sample that is too small.
            DuplicateValuesError: If filtering a sample with repeated values.
            MissingExactDistributionError: If the exact p-value is unavailable.
        """
        sample_x = Sample.from_two_sigma(x, ux, name="x")
        sample_y = Sample.from_two_sigma(y, uy, name="y")
        return self.run_samples(
            sample_x,
            sample_y,
            filter_xenocrysts=filter_xenocrysts,
            threshold_x=threshold_x,
            threshold_y=threshold_y,
            graph=graph,
        )

    def run_samples(
        self,
        sample_x: Sample,
        sample_y: Sample,
        filter_xenocrysts: bool = False,
        threshold_x: float | None = None,
        threshold_y: float | None = None,
        graph: bool = False,
    ) -> TestResult:
        """Run the test on already-ingested samples (one-sigma uncertainties).

        See ``run`` for the arguments and raised errors.
        """
        for sample in (sample_x, sample_y):
            if sample.size == 0:
                raise ValueError(f"Sample '{sample.name}' is empty after dropping missing values")
            if sample.size <= self._low_sample_size:
                message = (
                    f"Sample '{sample.name}' has only {sample.size} observations; "
                    "the test has little power at this size."
                )
                logger.warning("Low sample size", sample=sample.name, size=sample.size)
                warnings.warn(message, LowSampleSizeWarning, stacklevel=3)

        filter_x: FilterResult | None = None
        filter_y: FilterResult | None = None
        if filter_xenocrysts:
            filter_x = self._filter.run(sample_x, threshold=threshold_x)
            filter_y = self._filter.run(sample_y, threshold=threshold_y)
            sample_x = filter_x.retained
            sample_y = filter_y.retained

        statistic, winners = self._statistic(sample_x, sample_y)
        p_value = self._p_value(statistic, sample_x.size, sample_y.size)

        series = None
        if graph:
            series = self._visualizer.compare(sample_x, sample_y, normalize=True, winners=winners)

        logger.info(
            "Uncertainty K-S test complete",
            statistic=statistic,
            p_value=p_value,
            n_x=sample_x.size,
            n_y=sample_y.size,
            filtered=filter_xenocrysts,
        )
        return TestResult(
            statistic=statistic,
            p_value=p_value,
            winners=winners,
            n_x=sample_x.size,
            n_y=sample_y.size,
            filter_x=filter_x,
            filter_y=filter_y,
            series=series,
        )

    @staticmethod
    def _statistic(sample_x: Sample, sample_y: Sample) -> tuple[float, tuple[float, ...]]:
        """Return D and the pooled value(s) at which it is attained."""
        x_values = sample_x.values_array
        y_values = sample_y.values_array

        tied = np.intersect1d(x_values, y_values)
        if tied.size:
            logger.warning("Tied values across samples", ties=tied.tolist())
            warnings.warn(
                f"{tied.size} value(s) occur in both samples; the exact p-value "
                "is still reported but is less reliable near ties.",
                TiedValuesWarning,
                stacklevel=4,
            )

        pooled = np.sort(np.concatenate([x_values, y_values]), kind="stable")
        prob_x = mixture_cdf(pooled, x_values, sample_x.sigmas_array, normalize=True)
        prob_y = mixture_cdf(pooled, y_values, sample_y.sigmas_array, normalize=True)

        difference = np.abs(prob_x - prob_y)
        statistic = float(difference.max())
        winners = tuple(sorted({float(v) for v in pooled[difference == statistic]}))
        return statistic, winners

    def _p_value(self, statistic: float, n_x: int, n_y: int) -> float:
        """Return 1 - F(D; n_x, n_y) from the exact provider."""
        cdf = self._smirnov.cdf(statistic, n_x, n_y, two_sided=True)
        if not math.isfinite(cdf) or not 0.0 <= cdf <= 1.0:
            raise MissingExactDistributionError(
                f"Smirnov provider returned {cdf!r} for D={statistic}, "
                f"n_x={n_x}, n_y={n_y}; no exact p-value is available."
            )
        return 1.0 - cdf
