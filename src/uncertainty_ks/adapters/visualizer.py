"""Diagnostic data series for one or two mixture CDFs.

The visualizer traces each sample's mixture CDF over an automatically ranged
domain and, for a two-sample comparison, the vertical span between the two
curves at every pooled sample point, flagging the span(s) at which the K-S
statistic was attained. It returns a ``DistributionSeries`` value; drawing
it is left to whichever plotting collaborator the caller uses.
"""

from collections.abc import Sequence

import numpy as np

from uncertainty_ks.adapters.statistical_tests.mixture_cdf import mixture_cdf
from uncertainty_ks.core.models import (
    CurveSeries,
    DiscrepancySpan,
    DistributionSeries,
    Sample,
)


class DistributionVisualizer:
    """Builds curve and span series from Samples.

    Args:
        num_points: Number of evaluation points across the domain.
        sigma_span: Domain padding either side, in multiples of the largest
            one-sigma uncertainty among the samples shown.
    """

    def __init__(self, num_points: int = 1000, sigma_span: float = 3.0) -> None:
        if num_points < 2:
            raise ValueError(f"num_points must be at least 2, got {num_points}")
        if sigma_span < 0:
            raise ValueError(f"sigma_span must be non-negative, got {sigma_span}")
        self.num_points = num_points
        self.sigma_span = sigma_span

    def domain(self, *samples: Sample) -> tuple[float, float]:
        """Return [min - k*max(sigma), max + k*max(sigma)] across the samples."""
        values = np.concatenate([s.values_array for s in samples])
        sigmas = np.concatenate([s.sigmas_array for s in samples])
        if values.size == 0:
            raise ValueError("Cannot build a domain from empty samples")
        pad = self.sigma_span * float(sigmas.max())
        return float(values.min()) - pad, float(values.max()) + pad

    def curve(
        self,
        sample: Sample,
        normalize: bool = True,
        domain: tuple[float, float] | None = None,
    ) -> CurveSeries:
        """Trace one sample's mixture CDF.

        Args:
            sample: Observations with one-sigma uncertainties.
            normalize: Probability mode (True) or density mode (False).
            domain: Explicit (start, stop); defaults to the sample's own domain.

        Returns:
            CurveSeries with ``num_points`` evenly spaced positions.
        """
        start, stop = domain if domain is not None else self.domain(sample)
        x = np.linspace(start, stop, self.num_points)
        y = mixture_cdf(x, sample.values_array, sample.sigmas_array, normalize=normalize)
        return CurveSeries(name=sample.name, x=x, y=y, normalize=normalize)

    def single(self, sample: Sample, normalize: bool = True) -> DistributionSeries:
        """Series for a single sample: one curve, no spans."""
        domain = self.domain(sample)
        return DistributionSeries(
            curves=(self.curve(sample, normalize, domain),),
            spans=(),
            domain=domain,
            normalize=normalize,
        )

    def compare(
        self,
        x: Sample,
        y: Sample,
        normalize: bool = True,
        winners: Sequence[float] = (),
    ) -> DistributionSeries:
        """Series for a two-sample comparison.

        Both curves share one domain. A span is emitted at every pooled
        sample point; spans positioned at a winner value are flagged.

        Args:
            x: First sample.
            y: Second sample.
            normalize: Probability mode (True) or density mode (False).
            winners: Winner value(s) from a prior K-S test run.

        Returns:
            DistributionSeries with two curves and one span per pooled point.
        """
        domain = self.domain(x, y)
        pooled = np.sort(np.concatenate([x.values_array, y.values_array]), kind="stable")
        at_x = np.atleast_1d(
            mixture_cdf(pooled, x.values_array, x.sigmas_array, normalize=normalize)
        )
        at_y = np.atleast_1d(
            mixture_cdf(pooled, y.values_array, y.sigmas_array, normalize=normalize)
        )
        winner_set = {float(w) for w in winners}

        spans = tuple(
            DiscrepancySpan(
                position=float(point),
                lower=float(min(px, py)),
                upper=float(max(px, py)),
                is_winner=float(point) in winner_set,
            )
            for point, px, py in zip(pooled, at_x, at_y)
        )
        return DistributionSeries(
            curves=(self.curve(x, normalize, domain), self.curve(y, normalize, domain)),
            spans=spans,
            domain=domain,
            normalize=normalize,
        )
