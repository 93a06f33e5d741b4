"""Storefront cart core: ledger, persistence, pricing, store and views."""

__version__ = "0.1.0"
