"""Statistical components of the uncertainty-aware K-S comparison.

Available components:
- mixture_cdf       - CDF of a mixture of per-observation normals
- XenocrystFilter   - slope-based removal of a trailing old tail
- UncertaintyKSTest - modified two-sample K-S test with exact p-value
"""

from uncertainty_ks.adapters.statistical_tests.mixture_cdf import mixture_cdf
from uncertainty_ks.adapters.statistical_tests.uncertainty_ks import UncertaintyKSTest
from uncertainty_ks.adapters.statistical_tests.xenocryst_filter import (
    XenocrystFilter,
    filter_xenocrysts,
)

__all__ = [
    "UncertaintyKSTest",
    "XenocrystFilter",
    "filter_xenocrysts",
    "mixture_cdf",
]
