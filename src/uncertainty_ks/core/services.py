"""Orchestration service for age comparisons.

Wires the statistical components together from ``Settings`` and exposes the
three operations callers need: compare two samples, filter one sample, and
build a distribution series. Components are injected so tests can swap the
exact distribution provider or the filter without touching this module.
"""

from collections.abc import Sequence

import numpy as np

from uncertainty_ks.adapters.smirnov import ExactSmirnovDistribution
from uncertainty_ks.adapters.statistical_tests.uncertainty_ks import UncertaintyKSTest
from uncertainty_ks.adapters.statistical_tests.xenocryst_filter import XenocrystFilter
from uncertainty_ks.adapters.visualizer import DistributionVisualizer
from uncertainty_ks.core.interfaces import ISmirnovDistribution
from uncertainty_ks.core.models import DistributionSeries, FilterResult, Sample, TestResult
from uncertainty_ks.observability import get_logger
from uncertainty_ks.settings import Settings

logger = get_logger(__name__)

ArrayLike = Sequence[float | None] | np.ndarray


class AgeComparisonService:
    """Runs filters, tests and series builds with shared configuration.

    Args:
        xenocryst_filter: Filter used for standalone and in-test filtering.
        ks_test: Configured uncertainty K-S test.
        visualizer: Series builder.
        significance_level: Level below which a p-value is called significant.
    """

    def __init__(
        self,
        xenocryst_filter: XenocrystFilter,
        ks_test: UncertaintyKSTest,
        visualizer: DistributionVisualizer,
        significance_level: float = 0.05,
    ) -> None:
        self._filter = xenocryst_filter
        self._ks_test = ks_test
        self._visualizer = visualizer
        self.significance_level = significance_level

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        smirnov: ISmirnovDistribution | None = None,
    ) -> "AgeComparisonService":
        """Build a service whose components follow the given settings.

        Args:
            settings: Service configuration.
            smirnov: Optional replacement for the exact Smirnov provider.

        Returns:
            Configured AgeComparisonService.
        """
        xenocryst_filter = XenocrystFilter(
            threshold=settings.xenocryst_threshold,
            sigma_scale=settings.xenocryst_sigma_scale,
            min_sample_size=settings.xenocryst_min_sample_size,
            normalize=settings.xenocryst_normalize,
        )
        visualizer = DistributionVisualizer(
            num_points=settings.visualizer_points,
            sigma_span=settings.visualizer_sigma_span,
        )
        ks_test = UncertaintyKSTest(
            smirnov=smirnov or ExactSmirnovDistribution(),
            xenocryst_filter=xenocryst_filter,
            low_sample_size=settings.low_sample_size_warning,
            visualizer=visualizer,
        )
        return cls(
            xenocryst_filter=xenocryst_filter,
            ks_test=ks_test,
            visualizer=visualizer,
            significance_level=settings.significance_level,
        )

    def compare(
        self,
        x: ArrayLike,
        ux: ArrayLike,
        y: ArrayLike,
        uy: ArrayLike,
        filter_xenocrysts: bool = False,
        threshold_x: float | None = None,
        threshold_y: float | None = None,
        graph: bool = False,
    ) -> TestResult:
        """Compare two samples given as values and two-sigma uncertainties.

        Raises:
            UncertaintyKSError: On any fatal filter or distribution error.
            ValueError: On malformed input vectors.
        """
        result = self._ks_test.run(
            x,
            ux,
            y,
            uy,
            filter_xenocrysts=filter_xenocrysts,
            threshold_x=threshold_x,
            threshold_y=threshold_y,
            graph=graph,
        )
        logger.info(
            "Samples compared",
            p_value=result.p_value,
            significant=self.is_significant(result),
        )
        return result

    def filter(
        self,
        values: ArrayLike,
        uncertainties: ArrayLike,
        threshold: float | None = None,
        name: str = "sample",
    ) -> FilterResult:
        """Run the xenocryst filter on one sample of values and two-sigma uncertainties."""
        sample = Sample.from_two_sigma(values, uncertainties, name=name)
        return self._filter.run(sample, threshold=threshold)

    def series(
        self,
        x: ArrayLike,
        ux: ArrayLike,
        y: ArrayLike | None = None,
        uy: ArrayLike | None = None,
        normalize: bool = True,
        winners: Sequence[float] = (),
    ) -> DistributionSeries:
        """Build a single-sample or two-sample distribution series.

        Raises:
            ValueError: If only one of ``y`` and ``uy`` is given.
        """
        sample_x = Sample.from_two_sigma(x, ux, name="x")
        if y is None and uy is None:
            return self._visualizer.single(sample_x, normalize=normalize)
        if y is None or uy is None:
            raise ValueError("Both y and uy are required for a two-sample series")
        sample_y = Sample.from_two_sigma(y, uy, name="y")
        return self._visualizer.compare(sample_x, sample_y, normalize=normalize, winners=winners)

    def is_significant(self, result: TestResult) -> bool:
        """Return True when the p-value is below the significance level."""
        return result.p_value < self.significance_level
