"""FastAPI router for the age comparison API.

All routes are thin: validate inputs via Pydantic schemas, delegate to
``AgeComparisonService``, and return Pydantic response schemas. Fatal
domain errors are turned into HTTP responses by the handlers registered in
``uncertainty_ks.main``.
"""

import warnings
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import APIRouter, Depends, Request, status

from uncertainty_ks.api.schemas import (
    DistributionSeriesRequest,
    DistributionSeriesResponse,
    FilterResultResponse,
    HealthResponse,
    KSTestRequest,
    KSTestResponse,
    XenocrystFilterRequest,
)
from uncertainty_ks.core.errors import LowSampleSizeWarning, TiedValuesWarning
from uncertainty_ks.core.services import AgeComparisonService
from uncertainty_ks.observability import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["Age comparison"])

_ADVISORIES = (LowSampleSizeWarning, TiedValuesWarning)


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _comparison_service(request: Request) -> AgeComparisonService:
    """Return the service built at application startup.

    Args:
        request: FastAPI request (provides app.state).

    Returns:
        The shared AgeComparisonService.
    """
    return request.app.state.comparison_service


@contextmanager
def _capture_advisories() -> Iterator[list[str]]:
    """Collect advisory warnings raised inside the block as strings."""
    messages: list[str] = []
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        yield messages
    for item in caught:
        if issubclass(item.category, _ADVISORIES):
            messages.append(f"{item.category.__name__}: {item.message}")
        else:
            warnings.warn_explicit(item.message, item.category, item.filename, item.lineno)


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health(request: Request) -> HealthResponse:
    """Report that the service is up."""
    return HealthResponse(service=request.app.state.settings.service_name)


@router.post(
    "/ks-tests",
    response_model=KSTestResponse,
    status_code=status.HTTP_200_OK,
    summary="Compare two dated samples",
)
async def run_ks_test(
    body: KSTestRequest,
    service: AgeComparisonService = Depends(_comparison_service),
) -> KSTestResponse:
    """Run the uncertainty-aware two-sample K-S test.

    Args:
        body: Samples, uncertainties and test options.
        service: Injected AgeComparisonService.

    Returns:
        Statistic, exact p-value, winner value(s), filter outcomes and any
        advisory warnings.
    """
    with _capture_advisories() as advisories:
        result = service.compare(
            body.x,
            body.ux,
            body.y,
            body.uy,
            filter_xenocrysts=body.filter_xenocrysts,
            threshold_x=body.threshold_x,
            threshold_y=body.threshold_y,
            graph=body.graph,
        )
    return KSTestResponse.from_result(
        result,
        is_significant=service.is_significant(result),
        warnings=advisories,
    )


@router.post(
    "/xenocryst-filters",
    response_model=FilterResultResponse,
    status_code=status.HTTP_200_OK,
    summary="Filter xenocrysts from one sample",
)
async def run_xenocryst_filter(
    body: XenocrystFilterRequest,
    service: AgeComparisonService = Depends(_comparison_service),
) -> FilterResultResponse:
    """Detect and remove a trailing xenocryst tail from one sample.

    Args:
        body: Values, two-sigma uncertainties and optional threshold.
        service: Injected AgeComparisonService.

    Returns:
        Filter outcome; ``status`` tells whether any xenocrysts were found.
    """
    result = service.filter(
        body.values,
        body.uncertainties,
        threshold=body.threshold,
        name=body.name,
    )
    return FilterResultResponse.from_result(result)


@router.post(
    "/distribution-series",
    response_model=DistributionSeriesResponse,
    status_code=status.HTTP_200_OK,
    summary="Build mixture CDF series for plotting",
)
async def build_distribution_series(
    body: DistributionSeriesRequest,
    service: AgeComparisonService = Depends(_comparison_service),
) -> DistributionSeriesResponse:
    """Trace one or two mixture CDFs for an external renderer.

    Args:
        body: Sample(s), evaluation mode and winner values to highlight.
        service: Injected AgeComparisonService.

    Returns:
        Curves on a shared domain and, for two samples, discrepancy spans.
    """
    series = service.series(
        body.x,
        body.ux,
        body.y,
        body.uy,
        normalize=body.normalize,
        winners=body.winners,
    )
    return DistributionSeriesResponse.from_series(series)
