"""Domain models for the uncertainty-aware K-S comparison.

All models are immutable value objects. A ``Sample`` is built once per
filter or test invocation from caller-provided vectors; the filter derives a
new ``Sample`` rather than mutating its input.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class Sample:
    """An ascending-by-value sequence of dated observations.

    Attributes:
        values: Measured values, sorted ascending.
        sigmas: One-sigma analytical uncertainties, aligned with ``values``.
        name: Label used in logs and error messages ("x", "y", ...).
    """

    values: tuple[float, ...]
    sigmas: tuple[float, ...]
    name: str = "sample"

    def __post_init__(self) -> None:
        if len(self.values) != len(self.sigmas):
            raise ValueError(
                f"Sample '{self.name}' has {len(self.values)} values but "
                f"{len(self.sigmas)} uncertainties"
            )

    @classmethod
    def from_one_sigma(
        cls,
        values: Sequence[float] | np.ndarray,
        sigmas: Sequence[float] | np.ndarray,
        name: str = "sample",
    ) -> "Sample":
        """Build a sample from values and one-sigma uncertainties.

        Pairs in which either entry is missing (None or NaN) are dropped
        pairwise; the rest are sorted ascending by value.

        Args:
            values: Measured values.
            sigmas: One-sigma uncertainties, same length as ``values``.
            name: Sample label.

        Returns:
            A validated, sorted Sample.

        Raises:
            ValueError: On unequal lengths, non-finite values or
                non-positive uncertainties.
        """
        v = np.asarray(values, dtype=float)
        s = np.asarray(sigmas, dtype=float)
        if v.ndim != 1 or s.ndim != 1:
            raise ValueError(f"Sample '{name}' values and uncertainties must be 1-D")
        if v.shape != s.shape:
            raise ValueError(
                f"Sample '{name}' has {v.size} values but {s.size} uncertainties"
            )

        keep = ~(np.isnan(v) | np.isnan(s))
        v, s = v[keep], s[keep]

        if not np.all(np.isfinite(v)) or not np.all(np.isfinite(s)):
            raise ValueError(f"Sample '{name}' contains infinite entries")
        if np.any(s <= 0):
            raise ValueError(f"Sample '{name}' uncertainties must be strictly positive")

        order = np.argsort(v, kind="stable")
        return cls(
            values=tuple(float(x) for x in v[order]),
            sigmas=tuple(float(x) for x in s[order]),
            name=name,
        )

    @classmethod
    def from_two_sigma(
        cls,
        values: Sequence[float] | np.ndarray,
        uncertainties: Sequence[float] | np.ndarray,
        name: str = "sample",
    ) -> "Sample":
        """Build a sample from values and two-sigma uncertainties.

        This is the ingest path for caller data: uncertainties are halved to
        one-sigma after missing pairs are dropped.

        Args:
            values: Measured values.
            uncertainties: Two-sigma uncertainties, same length as ``values``.
            name: Sample label.

        Returns:
            A validated, sorted Sample with one-sigma uncertainties.
        """
        u = np.asarray(uncertainties, dtype=float)
        return cls.from_one_sigma(values, u / 2.0, name=name)

    @property
    def size(self) -> int:
        return len(self.values)

    @property
    def values_array(self) -> np.ndarray:
        return np.asarray(self.values, dtype=float)

    @property
    def sigmas_array(self) -> np.ndarray:
        return np.asarray(self.sigmas, dtype=float)

    def has_duplicates(self) -> bool:
        """Return True if any two observations share an identical value."""
        return len(set(self.values)) != len(self.values)

    def head(self, count: int) -> "Sample":
        """Return the ``count`` youngest observations as a new Sample."""
        return Sample(
            values=self.values[:count],
            sigmas=self.sigmas[:count],
            name=self.name,
        )


class FilterStatus(str, Enum):
    """Outcome of a xenocryst filter run.

    Attributes:
        XENOCRYSTS_FOUND: A qualifying gap was found; the older tail was cut.
        NONE_FOUND: No gap satisfied the threshold; the sample is unchanged.
    """

    XENOCRYSTS_FOUND = "xenocrysts_found"
    NONE_FOUND = "none_found"


@dataclass(frozen=True)
class FilterResult:
    """Result of a xenocryst filter run.

    Attributes:
        status: Whether xenocrysts were found.
        xenocrysts: Original values classified as xenocrysts (empty if none).
        retained: Observations kept after the cut (one-sigma uncertainties).
        threshold: Slope threshold the scan compared against.
        cut_slope: Slope at the qualifying gap, or None if none was found.
    """

    status: FilterStatus
    xenocrysts: tuple[float, ...]
    retained: Sample
    threshold: float
    cut_slope: float | None = None

    @property
    def found(self) -> bool:
        return self.status is FilterStatus.XENOCRYSTS_FOUND

    @property
    def sample_name(self) -> str:
        return self.retained.name

    def to_dict(self) -> dict:
        """Serialise to a plain dict for structured storage.

        Returns:
            Dict representation of this result.
        """
        return {
            "sample": self.sample_name,
            "status": self.status.value,
            "xenocrysts": list(self.xenocrysts),
            "retained_values": list(self.retained.values),
            "retained_sigmas": list(self.retained.sigmas),
            "threshold": self.threshold,
            "cut_slope": self.cut_slope,
        }


@dataclass(frozen=True, eq=False)
class CurveSeries:
    """Mixture CDF traced over an evenly spaced domain.

    Attributes:
        name: Label of the sample the curve was built from.
        x: Evaluation positions.
        y: Mixture CDF at each position.
        normalize: True for probability mode, False for density mode.
    """

    name: str
    x: np.ndarray
    y: np.ndarray
    normalize: bool

    def iter_points(self) -> Iterator[tuple[float, float]]:
        """Yield (x, y) pairs lazily, in ascending x order."""
        for xi, yi in zip(self.x, self.y):
            yield float(xi), float(yi)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "normalize": self.normalize,
            "x": self.x.tolist(),
            "y": self.y.tolist(),
        }


@dataclass(frozen=True)
class DiscrepancySpan:
    """Vertical span between two mixture CDFs at one pooled sample point.

    Attributes:
        position: Pooled sample value.
        lower: Smaller of the two CDF values at ``position``.
        upper: Larger of the two CDF values at ``position``.
        is_winner: True where the span attains the K-S statistic.
    """

    position: float
    lower: float
    upper: float
    is_winner: bool = False

    @property
    def length(self) -> float:
        return self.upper - self.lower

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "lower": self.lower,
            "upper": self.upper,
            "is_winner": self.is_winner,
        }


@dataclass(frozen=True)
class DistributionSeries:
    """Data series describing one or two mixture CDFs for an external renderer.

    Attributes:
        curves: One curve per sample shown, on a shared domain.
        spans: Discrepancy spans at pooled points (empty for a single sample).
        domain: (start, stop) of the evaluation grid.
        normalize: True for probability mode, False for density mode.
    """

    curves: tuple[CurveSeries, ...]
    spans: tuple[DiscrepancySpan, ...]
    domain: tuple[float, float]
    normalize: bool

    @property
    def winner_spans(self) -> tuple[DiscrepancySpan, ...]:
        return tuple(span for span in self.spans if span.is_winner)

    def to_dict(self) -> dict:
        return {
            "normalize": self.normalize,
            "domain": list(self.domain),
            "curves": [curve.to_dict() for curve in self.curves],
            "spans": [span.to_dict() for span in self.spans],
        }


@dataclass(frozen=True)
class TestResult:
    """Result of the uncertainty-aware two-sample K-S test.

    Attributes:
        statistic: Maximum absolute difference of the two mixture CDFs, in [0, 1].
        p_value: Exact two-sided p-value from the Smirnov distribution.
        winners: Pooled value(s) at which the maximum difference occurs.
        n_x: Size of the first sample after filtering.
        n_y: Size of the second sample after filtering.
        filter_x: Filter result for the first sample (None if not filtered).
        filter_y: Filter result for the second sample (None if not filtered).
        series: Distribution series when a graph was requested.
        alternative: Always "two-sided".
        method: Human-readable method label.
    """

    __test__ = False  # not a pytest test class

    statistic: float
    p_value: float
    winners: tuple[float, ...]
    n_x: int
    n_y: int
    filter_x: FilterResult | None = None
    filter_y: FilterResult | None = None
    series: DistributionSeries | None = field(default=None, compare=False)
    alternative: str = "two-sided"
    method: str = "Two-sample Kolmogorov-Smirnov test with analytical uncertainty (exact p-value)"

    @property
    def n(self) -> int:
        return self.n_x + self.n_y

    @property
    def filtered(self) -> bool:
        return self.filter_x is not None or self.filter_y is not None

    @property
    def xenocrysts_x(self) -> tuple[float, ...] | None:
        return None if self.filter_x is None else self.filter_x.xenocrysts

    @property
    def xenocrysts_y(self) -> tuple[float, ...] | None:
        return None if self.filter_y is None else self.filter_y.xenocrysts

    def to_dict(self, include_series: bool = False) -> dict:
        """Serialise to a plain dict for structured storage.

        Args:
            include_series: Also serialise the distribution series, if any.

        Returns:
            Dict representation of this result.
        """
        payload = {
            "test": "uncertainty_ks",
            "method": self.method,
            "alternative": self.alternative,
            "statistic": self.statistic,
            "p_value": self.p_value,
            "winners": list(self.winners),
            "n_x": self.n_x,
            "n_y": self.n_y,
            "n": self.n,
            "filtered": self.filtered,
            "xenocrysts_x": None if self.xenocrysts_x is None else list(self.xenocrysts_x),
            "xenocrysts_y": None if self.xenocrysts_y is None else list(self.xenocrysts_y),
        }
        if include_series and self.series is not None:
            payload["series"] = self.series.to_dict()
        return payload
