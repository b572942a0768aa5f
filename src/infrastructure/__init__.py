"""Adapters for services outside the ledger process."""

from .pinning import PinataClient, PinningClient

__all__ = ["PinataClient", "PinningClient"]
