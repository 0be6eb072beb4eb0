"""Validation package for deal business rules."""

from .deal_validator import DealValidator

__all__ = ["DealValidator"]
