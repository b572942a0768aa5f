"""Core primitives shared across backend layers."""

from .identifiers import IdentifierAllocator, NFT, PROJECT
from .state import LedgerState

__all__ = ["IdentifierAllocator", "LedgerState", "NFT", "PROJECT"]
