from __future__ import annotations

from flask import Blueprint, jsonify, request

from src.domain.marketplace import SORT_OPTIONS
from src.interfaces.http.responses import get_ledger, get_queries, serialize, serialize_all

marketplace_bp = Blueprint('marketplace_bp', __name__, url_prefix='/api/marketplace')


@marketplace_bp.route('/stats', methods=['GET'])
def marketplace_stats():
    return jsonify(serialize(get_ledger().stats())), 200


@marketplace_bp.route('/sort-options', methods=['GET'])
def sort_options():
    return jsonify({'sort_options': list(SORT_OPTIONS)}), 200


@marketplace_bp.route('/featured', methods=['GET'])
def featured():
    viewer = (request.args.get('viewer') or '').strip() or None
    return jsonify({'nfts': serialize_all(get_queries().featured(viewer))}), 200


__all__ = ['marketplace_bp']
