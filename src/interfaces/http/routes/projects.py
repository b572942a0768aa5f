"""Project and track endpoints."""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify, request

from src.interfaces.http.responses import (
    get_pinning_client,
    get_project_store,
    not_found,
    parse_json,
    parse_mapping,
    serialize,
    serialize_all,
)
from src.interfaces.http.schemas import (
    AddTrackRequest,
    ContributorRequest,
    CreateProjectRequest,
    UploadTrackRequest,
)
from src.settings import PinningCredentials


logger = logging.getLogger(__name__)

project_bp = Blueprint('project_bp', __name__, url_prefix='/api/projects')


def _mutation_response(success: bool, project_id: int):
    # False from the store only ever means the project is unknown
    return jsonify({'success': success, 'project_id': project_id}), 200 if success else 404


def _request_credentials():
    api_key = (request.headers.get('X-Pinata-Api-Key') or '').strip()
    secret_key = (request.headers.get('X-Pinata-Secret-Api-Key') or '').strip()
    if api_key and secret_key:
        return PinningCredentials(api_key=api_key, secret_key=secret_key)
    return current_app.extensions['app_settings'].pinning_credentials()


@project_bp.route('', methods=['POST'])
def create_project():
    payload = parse_json(CreateProjectRequest)
    project_id = get_project_store().create_project(payload.title, payload.description, payload.owner)
    return jsonify({'project_id': project_id}), 201


@project_bp.route('', methods=['GET'])
def list_projects():
    return jsonify({'projects': serialize_all(get_project_store().list_projects())}), 200


@project_bp.route('/<int:project_id>', methods=['GET'])
def get_project(project_id: int):
    project = get_project_store().get_project(project_id)
    if project is None:
        return not_found("Project not found")
    return jsonify(serialize(project)), 200


@project_bp.route('/<int:project_id>/contributors', methods=['POST'])
def add_contributor(project_id: int):
    payload = parse_json(ContributorRequest)
    return _mutation_response(get_project_store().add_contributor(project_id, payload.contributor), project_id)


@project_bp.route('/<int:project_id>/tracks', methods=['GET'])
def get_project_tracks(project_id: int):
    return jsonify({'tracks': serialize_all(get_project_store().get_project_tracks(project_id))}), 200


@project_bp.route('/<int:project_id>/tracks', methods=['POST'])
def add_track(project_id: int):
    payload = parse_json(AddTrackRequest)
    ok = get_project_store().add_track(
        project_id,
        payload.name,
        payload.content_hash,
        payload.uploaded_by,
        payload.timestamp,
    )
    if ok:
        return jsonify({'success': True, 'project_id': project_id, 'track_id': payload.timestamp}), 201
    return _mutation_response(False, project_id)


@project_bp.route('/<int:project_id>/tracks/<int:track_id>', methods=['DELETE'])
def remove_track(project_id: int, track_id: int):
    return _mutation_response(get_project_store().remove_track(project_id, track_id), project_id)


@project_bp.route('/<int:project_id>/tracks/upload', methods=['POST'])
def upload_track(project_id: int):
    """Pin an uploaded audio file, then attach it to the project as a track.

    Multipart form: ``file`` plus ``uploaded_by`` and optional ``name`` and
    ``timestamp``. Pinata credentials may be supplied per request through the
    ``X-Pinata-Api-Key`` / ``X-Pinata-Secret-Api-Key`` headers.
    """
    store = get_project_store()
    if store.get_project(project_id) is None:
        return not_found("Project not found")

    upload = request.files.get('file')
    if upload is None or not upload.filename:
        return jsonify({"status": "error", "error_code": "file_missing", "message": "An audio file is required."}), 400

    pinning_client = get_pinning_client()
    credentials = _request_credentials()
    if pinning_client is None or credentials is None:
        return jsonify({
            "status": "error",
            "error_code": "credentials_missing",
            "message": "Pinata credentials are not configured.",
        }), 412

    fields = request.form.to_dict()
    fields.setdefault('name', upload.filename)
    payload = parse_mapping(UploadTrackRequest, fields)

    data = upload.read()
    max_bytes = current_app.extensions['app_settings'].max_upload_bytes
    if len(data) > max_bytes:
        return jsonify({
            "status": "error",
            "error_code": "file_too_large",
            "message": f"Uploads are limited to {max_bytes} bytes.",
        }), 413

    logger.info("Pinning %s (%d bytes) for project %s", upload.filename, len(data), project_id)
    pinned = pinning_client.pin_file(
        data,
        upload.filename,
        upload.mimetype or 'application/octet-stream',
        credentials,
    )
    if not pinned.success:
        return jsonify({"status": "error", "error_code": "pin_failed", "message": pinned.error}), 502

    ok = store.add_track(project_id, payload.name, pinned.content_hash, payload.uploaded_by, payload.timestamp)
    if not ok:
        return _mutation_response(False, project_id)
    return jsonify({
        'success': True,
        'project_id': project_id,
        'track_id': payload.timestamp,
        'content_hash': pinned.content_hash,
        'size': pinned.size,
    }), 201


__all__ = ['project_bp']
