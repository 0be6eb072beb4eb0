"""Domain models used across application layer boundaries."""

from .deal_parsing import (
    DEAL_AMOUNT_MAX_PRECISION,
    DEAL_AMOUNT_MAX_SCALE,
    DEAL_TIMESTAMP_FORMAT,
    domain_deal_amount_fits_storage,
    domain_deal_amount_is_positive,
    domain_deal_parse_amount,
    domain_deal_parse_timestamp,
)
from .models import Currency, Deal, DealBatchReport, HealthStatus
from .results import DealErrorKind, Err, Ok, Result

__all__ = [
    "Currency",
    "Deal",
    "DealBatchReport",
    "HealthStatus",
    "DealErrorKind",
    "Err",
    "Ok",
    "Result",
    "DEAL_AMOUNT_MAX_PRECISION",
    "DEAL_AMOUNT_MAX_SCALE",
    "DEAL_TIMESTAMP_FORMAT",
    "domain_deal_amount_fits_storage",
    "domain_deal_amount_is_positive",
    "domain_deal_parse_amount",
    "domain_deal_parse_timestamp",
]
