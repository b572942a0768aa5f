#!/usr/bin/env python
# config.py
import os
from typing import List

# This assumes config.py is at the root of your project
basedir = os.path.abspath(os.path.dirname(__file__))


def _get_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


def _get_csv_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name)
    source = raw if raw is not None else default
    return [token.strip() for token in source.split(",") if token and token.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'change-me-in-production'

    # Pinata (IPFS pinning for uploaded audio)
    PINATA_API_KEY = os.environ.get('PINATA_API_KEY')
    PINATA_SECRET_API_KEY = os.environ.get('PINATA_SECRET_API_KEY')
    PINATA_ENDPOINT = os.getenv('PINATA_ENDPOINT', 'https://api.pinata.cloud/pinning/pinFileToIPFS')
    PINATA_TIMEOUT_SECONDS = max(1, _get_int('PINATA_TIMEOUT_SECONDS', 30))
    # Recorded in pinataMetadata.keyvalues.uploadedVia
    PIN_UPLOADED_VIA = os.getenv('PIN_UPLOADED_VIA', 'music-collab-backend')

    # Uploads larger than this are rejected before pinning (bytes)
    MAX_UPLOAD_BYTES = max(1, _get_int('MAX_UPLOAD_BYTES', 50 * 1024 * 1024))

    # HTTP
    CORS_ALLOWED_ORIGINS = _get_csv_list('CORS_ALLOWED_ORIGINS', 'http://localhost:3000')

    # Readiness: report "blocked" once the ledger holds more NFTs than this. 0 disables.
    READINESS_MAX_NFTS = max(0, _get_int('READINESS_MAX_NFTS', 0))

    # Runtime behavior
    # Turn Flask debug on/off from env; default off to avoid noisy console
    DEBUG = _get_bool('DEBUG', False)
    # Control console logging; when disabled, logs go only to file
    ENABLE_CONSOLE_LOGS = _get_bool('ENABLE_CONSOLE_LOGS', False)
