"""Pydantic request and response schemas for the age comparison API.

Input schemas validate request bodies; response schemas serialise the domain
results for API consumers. Missing measurements are sent as JSON ``null`` and
dropped pairwise during ingest.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from uncertainty_ks.core.models import DistributionSeries, FilterResult, TestResult


def _check_paired(values: list[float | None], uncertainties: list[float | None], label: str) -> None:
    if len(values) != len(uncertainties):
        raise ValueError(
            f"{label}: {len(values)} values but {len(uncertainties)} uncertainties"
        )


def _check_positive(value: list[float | None]) -> list[float | None]:
    for u in value:
        if u is not None and u <= 0:
            raise ValueError("Uncertainties must be strictly positive")
    return value


# ---------------------------------------------------------------------------
# K-S test
# ---------------------------------------------------------------------------


class KSTestRequest(BaseModel):
    """Request body for an uncertainty-aware two-sample K-S test."""

    x: list[float | None] = Field(min_length=1, description="Values of the first sample")
    ux: list[float | None] = Field(
        min_length=1, description="Two-sigma uncertainties of the first sample"
    )
    y: list[float | None] = Field(min_length=1, description="Values of the second sample")
    uy: list[float | None] = Field(
        min_length=1, description="Two-sigma uncertainties of the second sample"
    )
    filter_xenocrysts: bool = Field(
        default=False, description="Remove a trailing xenocryst tail before testing"
    )
    threshold_x: float | None = Field(
        default=None, gt=0, description="Slope threshold for filtering x (service default if null)"
    )
    threshold_y: float | None = Field(
        default=None, gt=0, description="Slope threshold for filtering y (service default if null)"
    )
    graph: bool = Field(default=False, description="Include the distribution series")

    @field_validator("ux", "uy")
    @classmethod
    def validate_uncertainties(cls, value: list[float | None]) -> list[float | None]:
        """Reject non-positive uncertainties; nulls are dropped at ingest."""
        return _check_positive(value)

    @model_validator(mode="after")
    def validate_pairs(self) -> "KSTestRequest":
        """Ensure each sample has one uncertainty per value."""
        _check_paired(self.x, self.ux, "x")
        _check_paired(self.y, self.uy, "y")
        return self


class FilterResultResponse(BaseModel):
    """API response for a xenocryst filter result."""

    model_config = ConfigDict(frozen=True)

    sample: str
    status: Literal["xenocrysts_found", "none_found"]
    xenocrysts: list[float]
    retained_values: list[float]
    retained_sigmas: list[float] = Field(description="One-sigma uncertainties of retained values")
    threshold: float
    cut_slope: float | None

    @classmethod
    def from_result(cls, result: FilterResult) -> "FilterResultResponse":
        return cls(**result.to_dict())


class CurveResponse(BaseModel):
    """One mixture CDF curve."""

    name: str
    normalize: bool
    x: list[float]
    y: list[float]


class SpanResponse(BaseModel):
    """Vertical span between two curves at one pooled sample point."""

    position: float
    lower: float
    upper: float
    is_winner: bool


class DistributionSeriesResponse(BaseModel):
    """API response for a distribution series."""

    normalize: bool
    domain: tuple[float, float]
    curves: list[CurveResponse]
    spans: list[SpanResponse]

    @classmethod
    def from_series(cls, series: DistributionSeries) -> "DistributionSeriesResponse":
        return cls(**series.to_dict())


class KSTestResponse(BaseModel):
    """API response for an uncertainty-aware K-S test."""

    statistic: float = Field(ge=0.0, le=1.0)
    p_value: float = Field(ge=0.0, le=1.0)
    is_significant: bool
    winners: list[float]
    n_x: int
    n_y: int
    n: int
    alternative: str
    method: str
    filtered: bool
    xenocrysts_x: list[float] | None
    xenocrysts_y: list[float] | None
    filter_x: FilterResultResponse | None = None
    filter_y: FilterResultResponse | None = None
    series: DistributionSeriesResponse | None = None
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(
        cls,
        result: TestResult,
        is_significant: bool,
        warnings: list[str] | None = None,
    ) -> "KSTestResponse":
        return cls(
            **result.to_dict(),
            is_significant=is_significant,
            filter_x=None if result.filter_x is None else FilterResultResponse.from_result(result.filter_x),
            filter_y=None if result.filter_y is None else FilterResultResponse.from_result(result.filter_y),
            series=None if result.series is None else DistributionSeriesResponse.from_series(result.series),
            warnings=warnings or [],
        )


# ---------------------------------------------------------------------------
# Xenocryst filter
# ---------------------------------------------------------------------------


class XenocrystFilterRequest(BaseModel):
    """Request body for a standalone xenocryst filter run."""

    model_config = ConfigDict(str_strip_whitespace=True)

    values: list[float | None] = Field(min_length=1)
    uncertainties: list[float | None] = Field(min_length=1, description="Two-sigma uncertainties")
    threshold: float | None = Field(default=None, gt=0)
    name: str = Field(default="sample", min_length=1, max_length=64)

    @field_validator("uncertainties")
    @classmethod
    def validate_uncertainties(cls, value: list[float | None]) -> list[float | None]:
        """Reject non-positive uncertainties; nulls are dropped at ingest."""
        return _check_positive(value)

    @model_validator(mode="after")
    def validate_pairs(self) -> "XenocrystFilterRequest":
        """Ensure one uncertainty per value."""
        _check_paired(self.values, self.uncertainties, self.name)
        return self


# ---------------------------------------------------------------------------
# Distribution series
# ---------------------------------------------------------------------------


class DistributionSeriesRequest(BaseModel):
    """Request body for a single- or two-sample distribution series."""

    x: list[float | None] = Field(min_length=1)
    ux: list[float | None] = Field(min_length=1, description="Two-sigma uncertainties of x")
    y: list[float | None] | None = None
    uy: list[float | None] | None = Field(default=None, description="Two-sigma uncertainties of y")
    normalize: bool = Field(default=True, description="Probability mode (true) or density mode")
    winners: list[float] = Field(default_factory=list, description="Winner values to highlight")

    @field_validator("ux", "uy")
    @classmethod
    def validate_uncertainties(
        cls, value: list[float | None] | None
    ) -> list[float | None] | None:
        """Reject non-positive uncertainties; nulls are dropped at ingest."""
        return value if value is None else _check_positive(value)

    @model_validator(mode="after")
    def validate_pairs(self) -> "DistributionSeriesRequest":
        """Ensure each sample has one uncertainty per value and y comes with uy."""
        _check_paired(self.x, self.ux, "x")
        if (self.y is None) != (self.uy is None):
            raise ValueError("y and uy must be given together")
        if self.y is not None and self.uy is not None:
            _check_paired(self.y, self.uy, "y")
        return self


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    status: Literal["ok"] = "ok"
    service: str
