"""Age comparison service entry point.

Creates the FastAPI application, configures structured logging and builds the
shared ``AgeComparisonService`` from settings. Run with::

    uvicorn uncertainty_ks.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from uncertainty_ks.api.router import router
from uncertainty_ks.core.errors import UncertaintyKSError
from uncertainty_ks.core.services import AgeComparisonService
from uncertainty_ks.observability import configure_logging, get_logger
from uncertainty_ks.settings import Settings

logger = get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings; read from the environment when omitted.

    Returns:
        Configured FastAPI application with the API mounted at /api/v1.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Configure logging and build the shared service on startup."""
        configure_logging(settings.log_level, settings.json_logs)
        app.state.settings = settings
        app.state.comparison_service = AgeComparisonService.from_settings(settings)
        logger.info("Age comparison service ready", service=settings.service_name)
        yield
        logger.info("Age comparison service shutdown complete")

    app = FastAPI(title=settings.service_name, version="0.1.0", lifespan=lifespan)

    @app.exception_handler(UncertaintyKSError)
    async def handle_domain_error(request: Request, exc: UncertaintyKSError) -> JSONResponse:
        logger.warning(
            "Request rejected",
            path=request.url.path,
            error_code=exc.error_code.value,
            sample=exc.sample,
        )
        return JSONResponse(
            status_code=422,
            content=exc.to_dict(),
        )

    @app.exception_handler(ValueError)
    async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
        logger.warning("Invalid input", path=request.url.path, error=str(exc))
        return JSONResponse(
            status_code=422,
            content={"error_code": "invalid_input", "message": str(exc), "sample": None},
        )

    app.include_router(router, prefix="/api/v1")
    return app


app: FastAPI = create_app()
