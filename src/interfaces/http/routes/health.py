from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from src.observability.metrics import update_for_sale_gauge

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    checks = {}
    stats = current_app.extensions["marketplace_ledger"].stats()
    checks["ledger"] = "ok"
    checks["pinning"] = "ok" if current_app.extensions.get("pinning_client") else "unavailable"
    credentials = current_app.extensions["app_settings"].pinning_credentials()
    checks["pinning_credentials"] = "configured" if credentials else "missing"
    checks["nfts"] = stats.total_nfts
    return jsonify({"status": "ok", "checks": checks}), 200


@health_bp.route("/readyz")
def readyz():
    stats = current_app.extensions["marketplace_ledger"].stats()
    update_for_sale_gauge(stats.nfts_for_sale)
    limit = int(current_app.extensions["app_settings"].readiness_max_nfts)
    healthy = limit == 0 or stats.total_nfts <= limit
    status = 200 if healthy else 503
    payload = {
        "status": "ready" if healthy else "blocked",
        "total_nfts": stats.total_nfts,
        "limit": limit,
    }
    return jsonify(payload), status
