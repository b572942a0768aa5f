"""NFT minting, trading and read-only marketplace views."""

from .authorization import OwnershipPolicy, StringIdentityPolicy
from .ledger import MarketplaceLedger, compute_royalty
from .queries import FEATURED_LIMIT, MarketplaceQueries, SORT_OPTIONS

__all__ = [
    "OwnershipPolicy",
    "StringIdentityPolicy",
    "MarketplaceLedger",
    "MarketplaceQueries",
    "SORT_OPTIONS",
    "FEATURED_LIMIT",
    "compute_royalty",
]
