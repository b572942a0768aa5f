#!/usr/bin/env python
"""
Pinata client used to pin uploaded audio to IPFS.

The ledger only ever stores the returned content hash; every failure is
reported through ``PinResult`` rather than raised.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Optional

import requests

from config import Config
from src.models.dto import PinResult
from src.observability.metrics import record_pin_upload
from src.settings import PinningCredentials

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.pinata.cloud/pinning/pinFileToIPFS"


class PinningClient:
    """Interface for the remote content-addressed storage collaborator."""

    def pin_file(
        self,
        file_bytes: bytes,
        file_name: str,
        content_type: str,
        credentials: PinningCredentials,
    ) -> PinResult:  # pragma: no cover - interface
        raise NotImplementedError


class PinataClient(PinningClient):
    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        uploaded_via: Optional[str] = None,
        session: Any = None,
    ) -> None:
        self.endpoint = endpoint or Config.PINATA_ENDPOINT or DEFAULT_ENDPOINT
        self.timeout = timeout or Config.PINATA_TIMEOUT_SECONDS
        self.uploaded_via = uploaded_via or Config.PIN_UPLOADED_VIA
        # Anything exposing requests' ``post`` signature
        self._http = session if session is not None else requests

    def _metadata(self, file_name: str) -> str:
        return json.dumps(
            {
                "name": file_name,
                "keyvalues": {
                    "type": "audio",
                    "uploadedVia": self.uploaded_via,
                    "timestamp": str(time.time_ns()),
                },
            }
        )

    def pin_file(
        self,
        file_bytes: bytes,
        file_name: str,
        content_type: str,
        credentials: PinningCredentials,
    ) -> PinResult:
        headers = {
            "pinata_api_key": credentials.api_key,
            "pinata_secret_api_key": credentials.secret_key,
        }
        files = {
            "file": (file_name, file_bytes, content_type),
            "pinataMetadata": (None, self._metadata(file_name)),
        }
        try:
            response = self._http.post(self.endpoint, headers=headers, files=files, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Pinning %s failed before a response arrived: %s", file_name, e)
            return self._failed(f"HTTP request failed: {e}")

        if response.status_code != 200:
            logger.warning("Pinata rejected %s with HTTP %s", file_name, response.status_code)
            return self._failed(f"Pinata API error: {response.status_code}")

        try:
            body = response.json()
        except ValueError:
            body = None
        content_hash = body.get("IpfsHash") if isinstance(body, dict) else None
        if not isinstance(content_hash, str) or not content_hash:
            logger.warning("Unexpected Pinata response body for %s", file_name)
            return self._failed("Failed to parse Pinata response")

        try:
            size = int(body.get("PinSize") or 0)
        except (TypeError, ValueError):
            size = 0

        record_pin_upload(True)
        logger.info("Pinned %s as %s (%d bytes)", file_name, content_hash, size)
        return PinResult(success=True, content_hash=content_hash, size=size)

    @staticmethod
    def _failed(message: str) -> PinResult:
        record_pin_upload(False)
        return PinResult(success=False, error=message)


__all__ = ["PinningClient", "PinataClient", "DEFAULT_ENDPOINT"]
