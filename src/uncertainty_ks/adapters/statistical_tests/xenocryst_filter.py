"""Xenocryst filter: excises a trailing tail of anomalously old dates.

Xenocrysts are crystals inherited from older rocks; in a population of
high-precision ages they show up as a tail of dates separated from the main
population by a gap. The filter sorts the sample ascending and walks
consecutive pairs from the youngest upward, measuring the slope of the
sample's mixture CDF between the two dates:

    slope = (density(current) - density(previous)) / (current - previous)

The first pair whose slope is at or below the threshold is the cut: the
current date and every older date are classified as xenocrysts together.
Nothing past the cut is evaluated pair-by-pair.

With the mixture in density mode each date adds roughly one unit to the
curve, so the default threshold of 1/0.45 accepts gaps of up to about 0.45
time units between consecutive dates.

The mixture used for the slope spreads each component by ``sigma_scale``
times its one-sigma uncertainty. The default of 0.5 (one quarter of the
two-sigma input) reproduces the published filter; 1.0 gives the one-sigma
reading used everywhere else in the test.

Example:
    >>> from uncertainty_ks.core.models import Sample
    >>> ages = [100.0, 100.1, 100.2, 100.3, 100.4, 100.5, 100.6, 105.0]
    >>> sample = Sample.from_two_sigma(ages, [0.02] * len(ages), name="x")
    >>> result = XenocrystFilter().run(sample)
    >>> result.xenocrysts
    (105.0,)
"""

from collections.abc import Sequence

import numpy as np

from uncertainty_ks.adapters.statistical_tests.mixture_cdf import mixture_cdf
from uncertainty_ks.core.errors import DuplicateValuesError, InsufficientSampleSizeError
from uncertainty_ks.core.models import FilterResult, FilterStatus, Sample
from uncertainty_ks.observability import get_logger

logger = get_logger(__name__)

DEFAULT_THRESHOLD = 1 / 0.45
DEFAULT_SIGMA_SCALE = 0.5
DEFAULT_MIN_SAMPLE_SIZE = 7


class XenocrystFilter:
    """Slope-based detector for a trailing tail of old dates.

    Args:
        threshold: Slope at or below which a gap is a cut.
        sigma_scale: Factor applied to one-sigma uncertainties in the mixture.
        min_sample_size: Smallest sample the filter accepts.
        normalize: Measure the slope on the probability-mode curve instead of
            the density-mode curve.
    """

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        sigma_scale: float = DEFAULT_SIGMA_SCALE,
        min_sample_size: int = DEFAULT_MIN_SAMPLE_SIZE,
        normalize: bool = False,
    ) -> None:
        if threshold <= 0:
            raise ValueError(f"threshold must be positive, got {threshold}")
        if sigma_scale <= 0:
            raise ValueError(f"sigma_scale must be positive, got {sigma_scale}")
        if min_sample_size < 2:
            raise ValueError(f"min_sample_size must be at least 2, got {min_sample_size}")
        self.threshold = threshold
        self.sigma_scale = sigma_scale
        self.min_sample_size = min_sample_size
        self.normalize = normalize

    def run(self, sample: Sample, threshold: float | None = None) -> FilterResult:
        """Scan a sample and cut the first qualifying gap.

        Args:
            sample: Observations with one-sigma uncertainties.
            threshold: Per-call override of the configured threshold.

        Returns:
            FilterResult with status XENOCRYSTS_FOUND and the cut tail, or
            NONE_FOUND with the sample retained unchanged.

        Raises:
            InsufficientSampleSizeError: If the sample is below min_sample_size.
            DuplicateValuesError: If two observations share a value.
        """
        thresh = self.threshold if threshold is None else threshold

        if sample.size < self.min_sample_size:
            raise InsufficientSampleSizeError(
                f"Xenocryst filter needs at least {self.min_sample_size} observations; "
                f"sample '{sample.name}' has {sample.size}.",
                sample=sample.name,
            )
        if sample.has_duplicates():
            raise DuplicateValuesError(
                f"Sample '{sample.name}' contains duplicate values; "
                "the xenocryst filter requires distinct dates.",
                sample=sample.name,
            )

        # Ingest already sorts; sort again so hand-built Samples behave the same
        order = np.argsort(sample.values_array, kind="stable")
        ordered = Sample(
            values=tuple(float(v) for v in sample.values_array[order]),
            sigmas=tuple(float(s) for s in sample.sigmas_array[order]),
            name=sample.name,
        )
        values = ordered.values_array
        spreads = ordered.sigmas_array * self.sigma_scale
        curve = mixture_cdf(values, values, spreads, normalize=self.normalize)

        for index in range(1, values.size):
            slope = (curve[index] - curve[index - 1]) / (values[index] - values[index - 1])
            if slope <= thresh:
                xenocrysts = tuple(float(v) for v in values[index:])
                retained = ordered.head(index)
                logger.info(
                    "Xenocrysts detected",
                    sample=sample.name,
                    count=len(xenocrysts),
                    cut_value=xenocrysts[0],
                    slope=float(slope),
                    threshold=thresh,
                )
                return FilterResult(
                    status=FilterStatus.XENOCRYSTS_FOUND,
                    xenocrysts=xenocrysts,
                    retained=retained,
                    threshold=thresh,
                    cut_slope=float(slope),
                )

        logger.info("No xenocrysts found", sample=sample.name, threshold=thresh)
        return FilterResult(
            status=FilterStatus.NONE_FOUND,
            xenocrysts=(),
            retained=sample,
            threshold=thresh,
        )


def filter_xenocrysts(
    values: Sequence[float] | np.ndarray,
    uncertainties: Sequence[float] | np.ndarray,
    threshold: float = DEFAULT_THRESHOLD,
    sigma_scale: float = DEFAULT_SIGMA_SCALE,
    name: str = "sample",
) -> FilterResult:
    """Filter raw caller data in one call.

    Args:
        values: Measured values.
        uncertainties: Two-sigma uncertainties, same length as ``values``.
        threshold: Slope threshold.
        sigma_scale: Factor applied to one-sigma uncertainties in the mixture.
        name: Sample label for logs and errors.

    Returns:
        FilterResult for the ingested sample.
    """
    sample = Sample.from_two_sigma(values, uncertainties, name=name)
    return XenocrystFilter(threshold=threshold, sigma_scale=sigma_scale).run(sample)
