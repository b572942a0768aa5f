"""Per-user views: holdings, creations and royalty earnings."""

from __future__ import annotations

from flask import Blueprint, jsonify

from src.interfaces.http.responses import get_queries, serialize_all


user_bp = Blueprint('user_bp', __name__, url_prefix='/api/users')


@user_bp.route('/<path:user>/nfts', methods=['GET'])
def owned_nfts(user: str):
    return jsonify({'user': user, 'nfts': serialize_all(get_queries().nfts_owned_by(user))}), 200


@user_bp.route('/<path:user>/created', methods=['GET'])
def created_nfts(user: str):
    return jsonify({'user': user, 'nfts': serialize_all(get_queries().nfts_created_by(user))}), 200


@user_bp.route('/<path:user>/royalties', methods=['GET'])
def royalty_earnings(user: str):
    queries = get_queries()
    return jsonify({
        'user': user,
        'payments': serialize_all(queries.royalty_earnings_for(user)),
        'total': queries.total_royalties_for(user),
    }), 200


__all__ = ['user_bp']
