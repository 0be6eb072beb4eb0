"""Deal API router composition for single submission, batch upload and lookup."""

from __future__ import annotations

import io
import logging
from decimal import Decimal

from fastapi import APIRouter, File, UploadFile, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from fxdeals.config import AppSettings
from fxdeals.domain import Currency, Deal, DealErrorKind, Err, domain_deal_parse_timestamp
from fxdeals.jobs import DealBatchIngestionPort, DealSubmissionPort

logger = logging.getLogger(__name__)

_API_STATUS_BY_ERROR_KIND: dict[DealErrorKind, int] = {
    DealErrorKind.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    DealErrorKind.DUPLICATE_DEAL: status.HTTP_409_CONFLICT,
    DealErrorKind.STORE_FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class DealSubmissionRequest(BaseModel):
    """Request body for one deal submission.

    Every field is optional at the schema level so that business-rule
    failures are reported by the deal validator rather than as schema errors.
    """

    deal_unique_id: str | None = None
    from_currency_code: str | None = None
    to_currency_code: str | None = None
    deal_timestamp: str | None = None
    deal_amount: Decimal | None = None

    def to_deal(self) -> Deal:
        """Convert request payload into an unsaved deal.

        Returns:
            Deal: Unsaved deal; an unparsable timestamp becomes None.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return Deal(
            deal_unique_id=self.deal_unique_id,
            from_currency=Currency(currency_code=self.from_currency_code or ""),
            to_currency=Currency(currency_code=self.to_currency_code or ""),
            deal_timestamp=domain_deal_parse_timestamp(self.deal_timestamp),
            deal_amount=self.deal_amount,
        )


def api_create_deals_router(
    settings: AppSettings,
    submission_service: DealSubmissionPort,
    batch_ingestion_job: DealBatchIngestionPort,
) -> APIRouter:
    """Create deal router with submission, batch upload and lookup endpoints.

    Args:
        settings: Runtime settings used for upload decoding.
        submission_service: Single-deal submission service.
        batch_ingestion_job: CSV batch ingestion job.

    Returns:
        APIRouter: Router exposing `/api/deals` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if submission_service is None:
        raise ValueError("submission_service must not be None")
    if batch_ingestion_job is None:
        raise ValueError("batch_ingestion_job must not be None")

    router = APIRouter(prefix="/api/deals", tags=["deals"])

    @router.post("/addDeal")
    def api_deal_add(request: DealSubmissionRequest) -> JSONResponse:
        """Validate and persist one deal.

        Args:
            request: Deal submission payload.

        Returns:
            JSONResponse: Stored deal, or error payload with 400/409/500 status.
        """

        submission_result = submission_service.deal_submit_single(request.to_deal())
        if isinstance(submission_result, Err):
            payload = {
                "status": "error",
                "code": submission_result.kind.value,
                "message": submission_result.message,
            }
            return JSONResponse(content=payload, status_code=_API_STATUS_BY_ERROR_KIND[submission_result.kind])

        payload = {
            "status": "ok",
            "message": "Deal added successfully",
            "deal": api_serialize_deal(submission_result.value),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/addBatch")
    def api_deal_add_batch(file: UploadFile = File(...)) -> JSONResponse:
        """Ingest one uploaded CSV file of deals.

        Args:
            file: Uploaded comma-delimited file without header row.

        Returns:
            JSONResponse: Batch report with 200 when every row succeeded, else 207.
        """

        text_stream = io.TextIOWrapper(file.file, encoding=settings.batch_upload_encoding, newline="")
        try:
            batch_report = batch_ingestion_job.job_ingest_csv(text_stream)
        finally:
            text_stream.detach()

        logger.info(
            "deal batch upload processed",
            extra={
                "upload_filename": file.filename,
                "successful_count": batch_report.successful_count,
                "total_count": batch_report.total_count,
            },
        )
        payload = {
            "message": batch_report.batch_summary_message(),
            "successful_count": batch_report.successful_count,
            "total_count": batch_report.total_count,
            "errors": list(batch_report.errors),
        }
        response_status = status.HTTP_207_MULTI_STATUS if batch_report.batch_has_errors() else status.HTTP_200_OK
        return JSONResponse(content=payload, status_code=response_status)

    @router.get("/{deal_unique_id}")
    def api_deal_detail(deal_unique_id: str) -> JSONResponse:
        """Return one stored deal.

        Args:
            deal_unique_id: External deal identifier.

        Returns:
            JSONResponse: Deal payload or 404 when absent.
        """

        deal = submission_service.deal_find_by_unique_id(deal_unique_id)
        if deal is None:
            payload = {
                "status": "error",
                "message": "deal not found",
            }
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)
        return JSONResponse(content=api_serialize_deal(deal), status_code=status.HTTP_200_OK)

    return router


def api_serialize_deal(deal: Deal) -> dict[str, object]:
    """Serialize typed deal to JSON response payload.

    Args:
        deal: Stored deal.

    Returns:
        dict[str, object]: JSON-serializable deal payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "deal_id": deal.deal_id,
        "deal_unique_id": deal.deal_unique_id,
        "from_currency_code": deal.from_currency.currency_code,
        "to_currency_code": deal.to_currency.currency_code,
        "deal_timestamp": deal.deal_timestamp.isoformat(sep=" ") if deal.deal_timestamp else None,
        "deal_amount": str(deal.deal_amount) if deal.deal_amount is not None else None,
    }
