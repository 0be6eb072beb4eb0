"""FastAPI application factory for the deal ingestion service."""

from fastapi import FastAPI

from fxdeals.config import AppSettings
from fxdeals.db import DatabaseHealthPort
from fxdeals.jobs import DealBatchIngestionPort, DealSubmissionPort

from .routers import api_create_deals_router, api_create_health_router


def create_api_application(
    settings: AppSettings,
    db_health_service: DatabaseHealthPort,
    submission_service: DealSubmissionPort,
    batch_ingestion_job: DealBatchIngestionPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        db_health_service: Database health service used by health endpoints.
        submission_service: Single-deal submission service.
        batch_ingestion_job: CSV batch ingestion job.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when a router dependency is invalid.
    """
    application = FastAPI(title="FX Deals Warehouse")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return service identity for bootstrap verification."""

        return {
            "service": "fx-deals-warehouse",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(db_health_service=db_health_service))
    application.include_router(
        api_create_deals_router(
            settings=settings,
            submission_service=submission_service,
            batch_ingestion_job=batch_ingestion_job,
        )
    )

    return application
