#!/usr/bin/env python
"""
Marketplace ledger: NFT minting, sales with creator royalties, listing terms.

All mutations run under the shared state lock, so a sale updates the NFT
record, the global transaction log and the royalty log as one unit.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from src.core.identifiers import NFT
from src.core.state import LedgerState
from src.domain.marketplace.authorization import OwnershipPolicy, StringIdentityPolicy
from src.models.dto import (
    LedgerErrorCode,
    MarketplaceStats,
    NFTRecord,
    OperationResult,
    RoyaltyPayment,
    Transaction,
    TransactionKind,
)
from src.observability.metrics import (
    record_mint,
    record_rejection,
    record_sale,
    update_for_sale_gauge,
)


logger = logging.getLogger(__name__)

DEFAULT_ROYALTY_PERCENTAGE = 10
MINT_SOURCE = "system"


def compute_royalty(price: int, royalty_percentage: int, creator: str, seller: str) -> int:
    """Creator's cut of a sale; nothing when the creator is the one selling."""
    if creator == seller:
        return 0
    return (price * royalty_percentage) // 100


class MarketplaceLedger:
    def __init__(self, state: LedgerState, ownership_policy: Optional[OwnershipPolicy] = None) -> None:
        self._state = state
        self._policy = ownership_policy or StringIdentityPolicy()

    # --- mutations ---
    def mint(
        self,
        name: str,
        description: str,
        image_url: str,
        creator: str,
        project_id: int,
        price: int,
        category: str,
    ) -> int:
        """Mint an NFT owned by its creator and listed for sale.

        Raises ``ValueError`` for a negative price; no id is consumed then.
        """
        if price < 0:
            record_rejection(LedgerErrorCode.INVALID_PRICE.value)
            raise ValueError(f"NFT price must be non-negative, got {price}")
        with self._state.lock:
            nft_id = self._state.allocator.next(NFT)
            timestamp = self._state.now()
            mint_tx = Transaction(
                from_=MINT_SOURCE,
                to=creator,
                price=0,
                timestamp=timestamp,
                kind=TransactionKind.MINT,
            )
            self._state.nfts[nft_id] = NFTRecord(
                id=nft_id,
                name=name,
                description=description,
                image_url=image_url,
                creator=creator,
                current_owner=creator,
                project_id=project_id,
                price=price,
                is_for_sale=True,
                royalty_percentage=DEFAULT_ROYALTY_PERCENTAGE,
                created_at=timestamp,
                view_count=0,
                sale_history=[mint_tx],
                category=category,
            )
            self._state.transactions.append(mint_tx)
            update_for_sale_gauge(self._count_for_sale())
        record_mint()
        logger.info("Minted NFT %s (%r) for %s at price %s", nft_id, name, creator, price)
        return nft_id

    def buy(self, nft_id: int, buyer: str) -> OperationResult:
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            if nft is None:
                return self._reject(LedgerErrorCode.NOT_FOUND, "NFT not found", nft_id)
            if not nft.is_for_sale:
                return self._reject(LedgerErrorCode.NOT_FOR_SALE, "NFT is not for sale", nft_id)
            if nft.current_owner == buyer:
                return self._reject(LedgerErrorCode.SELF_PURCHASE, "Cannot buy your own NFT", nft_id)

            price = nft.price
            seller = nft.current_owner
            creator = nft.creator
            timestamp = self._state.now()

            royalty_amount = compute_royalty(price, nft.royalty_percentage, creator, seller)
            seller_amount = price - royalty_amount

            sale_tx = Transaction(
                from_=seller,
                to=buyer,
                price=price,
                timestamp=timestamp,
                kind=TransactionKind.SALE,
            )
            nft.current_owner = buyer
            nft.sale_history.append(sale_tx)
            self._state.transactions.append(sale_tx)
            if royalty_amount > 0:
                self._state.royalty_payments.append(
                    RoyaltyPayment(
                        recipient=creator,
                        amount=royalty_amount,
                        nft_id=nft_id,
                        transaction_id=f"{nft_id}_{timestamp}",
                    )
                )

        record_sale(price, royalty_amount)
        logger.info(
            "NFT %s sold by %s to %s for %s (seller %s, royalty %s to %s)",
            nft_id, seller, buyer, price, seller_amount, royalty_amount, creator,
        )
        return OperationResult.success(
            f"NFT purchased successfully. Seller receives: {seller_amount} units, "
            f"Creator royalty: {royalty_amount} units",
            seller=seller,
            buyer=buyer,
            price=price,
            seller_amount=seller_amount,
            royalty_amount=royalty_amount,
        )

    def update_price(self, nft_id: int, new_price: int, requester: str) -> OperationResult:
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            if nft is None:
                return self._reject(LedgerErrorCode.NOT_FOUND, "NFT not found", nft_id)
            if not self._policy.is_authorized(nft.current_owner, requester):
                return self._reject(LedgerErrorCode.NOT_OWNER, "Only the owner can update the price", nft_id)
            if new_price < 0:
                return self._reject(LedgerErrorCode.INVALID_PRICE, "Price must be non-negative", nft_id)
            old_price = nft.price
            nft.price = new_price
        logger.info("NFT %s price changed %s -> %s by %s", nft_id, old_price, new_price, requester)
        return OperationResult.success(
            f"Price updated from {old_price} to {new_price} units",
            old_price=old_price,
            new_price=new_price,
        )

    def set_for_sale(self, nft_id: int, for_sale: bool, requester: str) -> OperationResult:
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            if nft is None:
                return self._reject(LedgerErrorCode.NOT_FOUND, "NFT not found", nft_id)
            if not self._policy.is_authorized(nft.current_owner, requester):
                return self._reject(LedgerErrorCode.NOT_OWNER, "Only the owner can change sale status", nft_id)
            nft.is_for_sale = for_sale
            update_for_sale_gauge(self._count_for_sale())
        logger.info("NFT %s for_sale=%s set by %s", nft_id, for_sale, requester)
        message = "NFT is now for sale" if for_sale else "NFT removed from sale"
        return OperationResult.success(message, is_for_sale=for_sale)

    # --- reads ---
    def get(self, nft_id: int) -> Optional[NFTRecord]:
        """Fetch one NFT by id and count the fetch.

        This read mutates: ``view_count`` goes up by one for every successful
        lookup. Use ``peek`` or ``list`` to read without counting.
        """
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            if nft is None:
                return None
            nft.view_count += 1
            logger.debug("NFT %s viewed (%s views)", nft_id, nft.view_count)
            return nft.model_copy(deep=True)

    def peek(self, nft_id: int) -> Optional[NFTRecord]:
        with self._state.lock:
            nft = self._state.nfts.get(nft_id)
            return nft.model_copy(deep=True) if nft is not None else None

    def list(self) -> List[NFTRecord]:
        with self._state.lock:
            return [n.model_copy(deep=True) for n in self._state.nfts.values()]

    def stats(self) -> MarketplaceStats:
        with self._state.lock:
            sales = [tx for tx in self._state.transactions if tx.kind == TransactionKind.SALE]
            logger.debug("Computing stats over %d NFTs and %d sales", len(self._state.nfts), len(sales))
            return MarketplaceStats(
                total_nfts=len(self._state.nfts),
                nfts_for_sale=self._count_for_sale(),
                total_sales=len(sales),
                total_volume=sum(tx.price for tx in sales),
            )

    # --- helpers ---
    def _count_for_sale(self) -> int:
        return sum(1 for n in self._state.nfts.values() if n.is_for_sale)

    def _reject(self, code: LedgerErrorCode, message: str, nft_id: int) -> OperationResult:
        record_rejection(code.value)
        logger.warning(
            "Rejected operation on NFT %s: %s", nft_id, message,
            extra={"error_code": code.value, "nft_id": nft_id},
        )
        return OperationResult.failure(code, message)


__all__ = ["MarketplaceLedger", "compute_royalty", "DEFAULT_ROYALTY_PERCENTAGE", "MINT_SOURCE"]
