from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from src.core.state import LedgerState
from src.models.dto import NFTRecord, RoyaltyPayment, Transaction


logger = logging.getLogger(__name__)

_SORTERS: Dict[str, tuple[Callable[[NFTRecord], object], bool]] = {
    "newest": (lambda n: (n.created_at, n.id), True),
    "oldest": (lambda n: (n.created_at, n.id), False),
    "price_low": (lambda n: (n.price, n.id), False),
    "price_high": (lambda n: (n.price, n.id), True),
    "most_viewed": (lambda n: (n.view_count, n.id), True),
    "name": (lambda n: (n.name.lower(), n.id), False),
}

SORT_OPTIONS = tuple(_SORTERS)
FEATURED_LIMIT = 6


class MarketplaceQueries:
    """Read-only views over the ledger state. Never touches ``view_count``."""

    def __init__(self, state: LedgerState) -> None:
        self._state = state

    def nfts_owned_by(self, user: str) -> List[NFTRecord]:
        with self._state.lock:
            return [n.model_copy(deep=True) for n in self._state.nfts.values() if n.current_owner == user]

    def nfts_created_by(self, user: str) -> List[NFTRecord]:
        with self._state.lock:
            return [n.model_copy(deep=True) for n in self._state.nfts.values() if n.creator == user]

    def transactions_for(self, nft_id: int) -> List[Transaction]:
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            return list(nft.sale_history) if nft is not None else []

    def royalty_earnings_for(self, user: str) -> List[RoyaltyPayment]:
        with self._state.lock:
            return [p for p in self._state.royalty_payments if p.recipient == user]

    def total_royalties_for(self, user: str) -> int:
        return sum(p.amount for p in self.royalty_earnings_for(user))

    def browse(
        self,
        *,
        category: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
        search: Optional[str] = None,
        for_sale_only: bool = False,
        exclude_owner: Optional[str] = None,
        sort: str = "newest",
        limit: Optional[int] = None,
    ) -> List[NFTRecord]:
        """Filter and order the marketplace listing.

        ``category`` of ``None`` or ``"all"`` matches everything; ``search`` is a
        case-insensitive substring match over name, description and category.
        ``exclude_owner`` drops NFTs currently held by that user. Unknown sort
        keys fall back to ``newest``; ``limit`` caps the result after sorting.
        """
        needle = (search or "").strip().lower()
        wanted_category = (category or "").strip().lower()
        if wanted_category == "all":
            wanted_category = ""

        with self._state.lock:
            snapshot = [n.model_copy(deep=True) for n in self._state.nfts.values()]

        def _matches(nft: NFTRecord) -> bool:
            if for_sale_only and not nft.is_for_sale:
                return False
            if exclude_owner is not None and nft.current_owner == exclude_owner:
                return False
            if wanted_category and nft.category.lower() != wanted_category:
                return False
            if min_price is not None and nft.price < min_price:
                return False
            if max_price is not None and nft.price > max_price:
                return False
            if needle:
                haystack = " ".join((nft.name, nft.description, nft.category)).lower()
                if needle not in haystack:
                    return False
            return True

        if sort not in _SORTERS:
            logger.debug("Unknown sort key %r; using newest", sort)
        key, reverse = _SORTERS.get(sort, _SORTERS["newest"])
        ordered = sorted((n for n in snapshot if _matches(n)), key=key, reverse=reverse)
        return ordered if limit is None else ordered[:max(0, limit)]

    def featured(self, viewer: Optional[str] = None, limit: int = FEATURED_LIMIT) -> List[NFTRecord]:
        """Highest-priced NFTs on sale, leaving out the viewer's own."""
        return self.browse(for_sale_only=True, exclude_owner=viewer, sort="price_high", limit=limit)


__all__ = ["MarketplaceQueries", "SORT_OPTIONS", "FEATURED_LIMIT"]
