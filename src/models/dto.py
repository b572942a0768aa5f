#!/usr/bin/env python
"""
Pydantic DTOs for the project store and the marketplace ledger.

Records are held in memory by the stores and handed to callers as deep
copies; HTTP adapters serialise them with ``model_dump(mode="json", by_alias=True)``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class TransactionKind(str, Enum):
    MINT = "mint"
    SALE = "sale"
    TRANSFER = "transfer"


class LedgerErrorCode(str, Enum):
    NOT_FOUND = "not_found"
    NOT_OWNER = "not_owner"
    NOT_FOR_SALE = "not_for_sale"
    SELF_PURCHASE = "self_purchase"
    INVALID_PRICE = "invalid_price"


class Track(BaseModel):
    """An uploaded audio file inside a project.

    ``id`` is the caller-supplied upload timestamp, so two tracks added with
    the same timestamp share an id.
    """

    id: int = Field(ge=0)
    name: str
    content_hash: str
    uploaded_by: str
    timestamp: int = Field(ge=0)


class Project(BaseModel):
    id: int = Field(ge=1)
    title: str
    description: str
    owner: str
    contributors: List[str] = Field(default_factory=list)
    tracks: List[Track] = Field(default_factory=list)


class Transaction(BaseModel):
    """Immutable ownership change; ``from`` is exposed as ``from_`` in Python."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: str = Field(alias="from")
    to: str
    price: int = Field(ge=0)
    timestamp: int = Field(ge=0)
    kind: TransactionKind


class RoyaltyPayment(BaseModel):
    model_config = ConfigDict(frozen=True)

    recipient: str
    amount: int = Field(ge=0)
    nft_id: int
    transaction_id: str


class NFTRecord(BaseModel):
    """Ownership token for a project.

    ``sale_history[0]`` is always the mint transaction and ``current_owner``
    always matches ``sale_history[-1].to``.
    """

    id: int = Field(ge=1)
    name: str
    description: str
    image_url: str
    creator: str
    current_owner: str
    project_id: int
    price: int = Field(ge=0)
    is_for_sale: bool = True
    royalty_percentage: int = Field(ge=0, le=100)
    created_at: int = Field(ge=0)
    view_count: int = Field(default=0, ge=0)
    sale_history: List[Transaction] = Field(default_factory=list)
    category: str


class MarketplaceStats(BaseModel):
    total_nfts: int = 0
    nfts_for_sale: int = 0
    total_sales: int = 0
    total_volume: int = 0

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.total_nfts, self.nfts_for_sale, self.total_sales, self.total_volume)


class OperationResult(BaseModel):
    """Outcome of a ledger mutation that can be refused."""

    status: Literal["success", "error"]
    message: str
    error_code: Optional[LedgerErrorCode] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @classmethod
    def success(cls, message: str, **data: Any) -> "OperationResult":
        return cls(status="success", message=message, data=data)

    @classmethod
    def failure(cls, error_code: LedgerErrorCode, message: str) -> "OperationResult":
        return cls(status="error", message=message, error_code=error_code)


class PinResult(BaseModel):
    """Result of pinning a file with the remote storage service."""

    success: bool
    content_hash: str = ""
    size: int = 0
    error: Optional[str] = None


__all__ = [
    "TransactionKind",
    "LedgerErrorCode",
    "Track",
    "Project",
    "Transaction",
    "RoyaltyPayment",
    "NFTRecord",
    "MarketplaceStats",
    "OperationResult",
    "PinResult",
]
