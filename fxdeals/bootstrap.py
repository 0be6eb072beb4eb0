"""Application bootstrap wiring for startup validation and dependency assembly."""

from dataclasses import dataclass

from fastapi import FastAPI

from fxdeals.api import create_api_application
from fxdeals.config import AppSettings, config_load_settings, config_setup_logging
from fxdeals.currency import CurrencyDirectoryService
from fxdeals.db import SQLAlchemyDatabaseHealthService, SQLAlchemyDealRecordStore, db_create_engine
from fxdeals.jobs import DealBatchIngestionJob, DealSubmissionService


@dataclass(frozen=True)
class DealServices:
    """Wired deal-processing services sharing one record store.

    Attributes:
        submission_service: Single-deal submission service.
        batch_ingestion_job: CSV batch ingestion job.
    """

    submission_service: DealSubmissionService
    batch_ingestion_job: DealBatchIngestionJob


def bootstrap_create_deal_services(store: SQLAlchemyDealRecordStore) -> DealServices:
    """Assemble currency directory, submission service and batch job on one store.

    Args:
        store: Record store shared by every service.

    Returns:
        DealServices: Wired services.

    Raises:
        ValueError: Raised when store is None.
    """

    currency_directory = CurrencyDirectoryService(store=store)
    submission_service = DealSubmissionService(store=store, currency_directory=currency_directory)
    return DealServices(
        submission_service=submission_service,
        batch_ingestion_job=DealBatchIngestionJob(
            currency_directory=currency_directory,
            submission_service=submission_service,
        ),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_setup_logging(resolved_settings)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    deal_services = bootstrap_create_deal_services(store=SQLAlchemyDealRecordStore(engine=engine))
    return create_api_application(
        settings=resolved_settings,
        db_health_service=SQLAlchemyDatabaseHealthService(engine=engine),
        submission_service=deal_services.submission_service,
        batch_ingestion_job=deal_services.batch_ingestion_job,
    )


def bootstrap_create_batch_ingestion_job(settings: AppSettings | None = None) -> DealBatchIngestionJob:
    """Build batch ingestion job for non-HTTP trigger surfaces.

    Args:
        settings: Optional pre-loaded settings; loaded from environment when omitted.

    Returns:
        DealBatchIngestionJob: Fully wired batch ingestion job.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    config_setup_logging(resolved_settings)
    engine = db_create_engine(database_url=resolved_settings.database_url)
    return bootstrap_create_deal_services(store=SQLAlchemyDealRecordStore(engine=engine)).batch_ingestion_job
