"""Request payload models for the JSON API."""

from __future__ import annotations

import time
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field

Identity = Annotated[str, Field(min_length=1, max_length=256)]


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)


class CreateProjectRequest(_Payload):
    title: str = Field(min_length=1, max_length=200)
    description: str = ""
    owner: Identity


class AddTrackRequest(_Payload):
    name: str = Field(min_length=1, max_length=200)
    content_hash: str = Field(min_length=1)
    uploaded_by: Identity
    # Also used as the track id
    timestamp: int = Field(default_factory=_now_ms, ge=0)


class UploadTrackRequest(_Payload):
    """Form fields sent alongside a multipart audio upload."""

    name: str = Field(min_length=1, max_length=200)
    uploaded_by: Identity
    timestamp: int = Field(default_factory=_now_ms, ge=0)


class ContributorRequest(_Payload):
    contributor: Identity


class MintRequest(_Payload):
    name: str = Field(min_length=1, max_length=200)
    description: str = ""
    image_url: str = ""
    creator: Identity
    project_id: int = Field(ge=0)
    price: int = Field(ge=0)
    category: str = "other"


class BuyRequest(_Payload):
    buyer: Identity


class PriceUpdateRequest(_Payload):
    new_price: int = Field(ge=0)
    requester: Identity


class SaleStatusRequest(_Payload):
    for_sale: bool
    requester: Identity


class BrowseParams(_Payload):
    category: Optional[str] = None
    min_price: Optional[int] = Field(default=None, ge=0)
    max_price: Optional[int] = Field(default=None, ge=0)
    search: Optional[str] = None
    for_sale_only: bool = False
    exclude_owner: Optional[str] = None
    sort: str = "newest"
    limit: Optional[int] = Field(default=None, ge=1, le=200)


__all__ = [
    "CreateProjectRequest",
    "AddTrackRequest",
    "UploadTrackRequest",
    "ContributorRequest",
    "MintRequest",
    "BuyRequest",
    "PriceUpdateRequest",
    "SaleStatusRequest",
    "BrowseParams",
]
