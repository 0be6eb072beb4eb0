"""Currency directory package for code validation and reference resolution."""

from .directory import CurrencyDirectoryService, currency_is_iso_4217_code

__all__ = ["CurrencyDirectoryService", "currency_is_iso_4217_code"]
