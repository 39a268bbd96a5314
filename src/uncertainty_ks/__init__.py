"""uncertainty_ks: two-sample K-S comparison of dated populations with analytical uncertainty.

Each measured age contributes a normal distribution centred on its value with
its own one-sigma spread, so the empirical CDF of a sample becomes a mixture
of normal CDFs. Two samples are compared on those mixture CDFs, optionally
after excising a trailing tail of anomalously old dates (xenocrysts), and the
resulting statistic is referred to the exact Smirnov distribution for the
post-filter sample sizes.

Example:
    >>> from uncertainty_ks import UncertaintyKSTest
    >>> result = UncertaintyKSTest().run(
    ...     [10.0, 10.2, 10.4, 10.6, 10.8, 11.0, 11.2],
    ...     [0.02] * 7,
    ...     [10.0, 10.2, 10.4, 10.6, 10.8, 11.0, 11.2],
    ...     [0.02] * 7,
    ... )
    >>> result.p_value
    1.0
"""

from uncertainty_ks.adapters.smirnov import ExactSmirnovDistribution
from uncertainty_ks.adapters.statistical_tests import (
    UncertaintyKSTest,
    XenocrystFilter,
    filter_xenocrysts,
    mixture_cdf,
)
from uncertainty_ks.adapters.visualizer import DistributionVisualizer
from uncertainty_ks.core.errors import (
    DuplicateValuesError,
    InsufficientSampleSizeError,
    LowSampleSizeWarning,
    MissingExactDistributionError,
    TiedValuesWarning,
    UncertaintyKSError,
)
from uncertainty_ks.core.models import FilterResult, FilterStatus, Sample, TestResult

__all__ = [
    "DistributionVisualizer",
    "DuplicateValuesError",
    "ExactSmirnovDistribution",
    "FilterResult",
    "FilterStatus",
    "InsufficientSampleSizeError",
    "LowSampleSizeWarning",
    "MissingExactDistributionError",
    "Sample",
    "TestResult",
    "TiedValuesWarning",
    "UncertaintyKSError",
    "UncertaintyKSTest",
    "XenocrystFilter",
    "filter_xenocrysts",
    "mixture_cdf",
]
