"""NFT minting, listing and trading endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from src.interfaces.http.responses import (
    get_ledger,
    get_queries,
    not_found,
    parse_json,
    parse_mapping,
    result_response,
    serialize,
    serialize_all,
)
from src.interfaces.http.schemas import (
    BrowseParams,
    BuyRequest,
    MintRequest,
    PriceUpdateRequest,
    SaleStatusRequest,
)


nft_bp = Blueprint('nft_bp', __name__, url_prefix='/api/nfts')

_BROWSE_KEYS = (
    'category', 'min_price', 'max_price', 'search', 'for_sale_only', 'exclude_owner', 'sort', 'limit',
)


@nft_bp.route('', methods=['POST'])
def mint_nft():
    payload = parse_json(MintRequest)
    nft_id = get_ledger().mint(
        payload.name,
        payload.description,
        payload.image_url,
        payload.creator,
        payload.project_id,
        payload.price,
        payload.category,
    )
    return jsonify({'nft_id': nft_id}), 201


@nft_bp.route('', methods=['GET'])
def list_nfts():
    """Plain listing, or a filtered/sorted one when browse parameters are given."""
    params = {k: v for k, v in request.args.items() if k in _BROWSE_KEYS and v != ''}
    if not params:
        return jsonify({'nfts': serialize_all(get_ledger().list())}), 200
    browse = parse_mapping(BrowseParams, params)
    nfts = get_queries().browse(**browse.model_dump())
    return jsonify({'nfts': serialize_all(nfts)}), 200


@nft_bp.route('/<int:nft_id>', methods=['GET'])
def get_nft(nft_id: int):
    # Counts as a view
    nft = get_ledger().get(nft_id)
    if nft is None:
        return not_found("NFT not found")
    return jsonify(serialize(nft)), 200


@nft_bp.route('/<int:nft_id>/buy', methods=['POST'])
def buy_nft(nft_id: int):
    payload = parse_json(BuyRequest)
    return result_response(get_ledger().buy(nft_id, payload.buyer))


@nft_bp.route('/<int:nft_id>/price', methods=['PUT'])
def update_price(nft_id: int):
    payload = parse_json(PriceUpdateRequest)
    return result_response(get_ledger().update_price(nft_id, payload.new_price, payload.requester))


@nft_bp.route('/<int:nft_id>/sale', methods=['PUT'])
def set_for_sale(nft_id: int):
    payload = parse_json(SaleStatusRequest)
    return result_response(get_ledger().set_for_sale(nft_id, payload.for_sale, payload.requester))


@nft_bp.route('/<int:nft_id>/transactions', methods=['GET'])
def nft_transactions(nft_id: int):
    return jsonify({'transactions': serialize_all(get_queries().transactions_for(nft_id))}), 200


__all__ = ['nft_bp']
