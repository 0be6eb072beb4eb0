"""Readiness endpoint reporting whether the deal store can take writes."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fxdeals.db import DatabaseHealthPort


class DealStoreHealthResponse(BaseModel):
    """Readiness payload for the deal store behind the API."""

    status: str
    database: str
    detail: str
    target: str


def api_check_deal_store(db_health_service: DatabaseHealthPort) -> tuple[int, DealStoreHealthResponse]:
    """Run the deal store readiness check and pick the HTTP status.

    An unreachable or unmigrated store degrades the service to 503, since
    neither deal route can persist anything without it.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        tuple[int, DealStoreHealthResponse]: HTTP status code and payload.

    Raises:
        RuntimeError: Raised when connection metadata is unavailable.
    """

    target = db_health_service.db_connection_label()
    try:
        store_health = db_health_service.db_check_health()
    except ConnectionError as error:
        return status.HTTP_503_SERVICE_UNAVAILABLE, DealStoreHealthResponse(
            status="degraded",
            database="down",
            detail=str(error),
            target=target,
        )

    return status.HTTP_200_OK, DealStoreHealthResponse(
        status="ok",
        database=store_health.status,
        detail=store_health.detail,
        target=target,
    )


def api_create_health_router(db_health_service: DatabaseHealthPort) -> APIRouter:
    """Create the `/health` router.

    Args:
        db_health_service: DB-layer health service interface.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when db_health_service is invalid.
    """

    if db_health_service is None:
        raise ValueError("db_health_service must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health", response_model=DealStoreHealthResponse)
    def api_health_status() -> JSONResponse:
        status_code, payload = api_check_deal_store(db_health_service)
        return JSONResponse(content=payload.model_dump(), status_code=status_code)

    return router
