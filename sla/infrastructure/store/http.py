"""HTTP adapter for the ledger contract gateway.

The gateway exposes the contract's data functions over plain HTTP:

    GET /available       -> {"available": true}
    GET /data/{key}      -> raw bytes (404 or empty body when absent)
    PUT /data/{key}      -> stores the raw request body

A 4xx answer to a PUT means the transaction was rejected (for instance by
the signer) and is reported as WriteRejectedError.
"""

import logging
from urllib.parse import quote

import httpx

from sla.domain.record.port.store import RecordStore
from sla.domain.shared.error import (
    StorageUnavailableError,
    WriteError,
    WriteRejectedError,
)

logger = logging.getLogger(__name__)


class HttpLedgerStore(RecordStore):
    """RecordStore backed by a contract gateway using httpx."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    @staticmethod
    def _data_path(key: str) -> str:
        return f"/data/{quote(key, safe='')}"

    async def available(self) -> bool:
        try:
            response = await self._client.get("/available")
            response.raise_for_status()
            return bool(response.json().get("available", False))
        except (httpx.HTTPError, ValueError, AttributeError) as e:
            logger.warning("Ledger availability probe failed: %s", e)
            return False

    async def get(self, key: str) -> bytes:
        try:
            response = await self._client.get(self._data_path(key))
        except httpx.TransportError as e:
            raise StorageUnavailableError(f"Cannot read {key}: {e}") from e
        if response.status_code == httpx.codes.NOT_FOUND:
            return b""
        if response.is_error:
            raise StorageUnavailableError(
                f"Cannot read {key}: gateway answered {response.status_code}"
            )
        return response.content

    async def set(self, key: str, value: bytes) -> None:
        try:
            response = await self._client.put(
                self._data_path(key),
                content=value,
                headers={"Content-Type": "application/octet-stream"},
            )
        except httpx.TransportError as e:
            raise WriteError(f"Cannot write {key}: {e}", key=key) from e
        if response.is_client_error:
            raise WriteRejectedError(
                f"Transaction rejected for {key}: {response.text or response.status_code}",
                key=key,
            )
        if response.is_error:
            raise WriteError(
                f"Cannot write {key}: gateway answered {response.status_code}", key=key
            )
