from __future__ import annotations

from flask import Blueprint, Response
from prometheus_client import Counter, Gauge, generate_latest

metrics_blueprint = Blueprint("metrics_bp", __name__)

CONTENT_TYPE_LATEST = "text/plain; version=0.0.4; charset=utf-8"

NFT_MINTS = Counter(
    "musiccollab_nft_mints_total",
    "Total number of NFTs minted.",
)
NFT_SALES = Counter(
    "musiccollab_nft_sales_total",
    "Total number of completed NFT sales.",
)
SALE_VOLUME = Counter(
    "musiccollab_sale_volume_units_total",
    "Sum of sale prices across completed NFT sales.",
)
ROYALTIES_PAID = Counter(
    "musiccollab_royalties_paid_units_total",
    "Sum of creator royalties recorded for NFT sales.",
)
REJECTED_OPERATIONS = Counter(
    "musiccollab_rejected_operations_total",
    "Ledger operations refused, by error code.",
    ["error_code"],
)
PIN_UPLOADS = Counter(
    "musiccollab_pin_uploads_total",
    "File pinning attempts, by outcome.",
    ["outcome"],
)
NFTS_FOR_SALE = Gauge(
    "musiccollab_nfts_for_sale",
    "Current number of NFTs listed for sale.",
)


def record_mint() -> None:
    NFT_MINTS.inc()


def record_sale(price: int, royalty_amount: int) -> None:
    NFT_SALES.inc()
    SALE_VOLUME.inc(max(0, price))
    if royalty_amount > 0:
        ROYALTIES_PAID.inc(royalty_amount)


def record_rejection(error_code: str) -> None:
    REJECTED_OPERATIONS.labels(error_code=error_code).inc()


def record_pin_upload(success: bool) -> None:
    PIN_UPLOADS.labels(outcome="success" if success else "failure").inc()


def update_for_sale_gauge(count: int) -> None:
    NFTS_FOR_SALE.set(max(0, count))


@metrics_blueprint.route("/metrics")
def metrics_endpoint() -> Response:
    return Response(generate_latest(), mimetype=CONTENT_TYPE_LATEST)
