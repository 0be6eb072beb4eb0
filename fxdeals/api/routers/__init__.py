"""API router package for endpoint composition."""

from .deals import DealSubmissionRequest, api_create_deals_router, api_serialize_deal
from .health import api_create_health_router

__all__ = ["DealSubmissionRequest", "api_create_deals_router", "api_create_health_router", "api_serialize_deal"]
