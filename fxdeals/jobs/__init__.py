"""Job layer package for deal submission and batch ingestion workflows."""

from .batch_ingestion import DEAL_ROW_MIN_FIELD_COUNT, DealBatchIngestionJob
from .deal_submission import DealSubmissionService
from .interfaces import DealBatchIngestionPort, DealSubmissionPort

__all__ = [
	"DEAL_ROW_MIN_FIELD_COUNT",
	"DealBatchIngestionJob",
	"DealBatchIngestionPort",
	"DealSubmissionPort",
	"DealSubmissionService",
]
