"""Blob codec: records and the index to and from store bytes.

Both blob kinds are UTF-8 JSON. A record is a JSON object using the wire
field names (``lifeSigns``); the index is a JSON array of id strings.
Nothing here performs I/O.
"""

import json
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from sla.domain.record.model.aggregate import ExplorationRecord
from sla.domain.shared.error import MalformedBlobError

_SEPARATORS = (",", ":")


def _load_json(data: bytes, what: str) -> Any:
    try:
        return json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MalformedBlobError(f"{what} blob is not valid UTF-8 JSON: {e}") from e


def encode_record(record: ExplorationRecord) -> bytes:
    payload = record.model_dump(mode="json", by_alias=True)
    return json.dumps(payload, separators=_SEPARATORS).encode("utf-8")


def decode_record(data: bytes, record_id: str | None = None) -> ExplorationRecord:
    """Decode a record blob.

    Args:
        data: Raw bytes read from the store. Must not be empty.
        record_id: Id taken from the key the blob was read from. Blobs written
            before ids were embedded carry no ``id`` field; this fills it in.

    Raises:
        MalformedBlobError: The bytes are not a record. A missing ``status``
            is not an error: such records are ``pending``.
    """
    payload = _load_json(data, "Record")
    if not isinstance(payload, dict):
        raise MalformedBlobError(
            f"Record blob must be a JSON object, got {type(payload).__name__}", key=record_id
        )

    embedded_id = payload.get("id")
    if embedded_id is None:
        if record_id is None:
            raise MalformedBlobError("Record blob has no id and none was supplied")
        payload = {**payload, "id": record_id}
    elif record_id is not None and embedded_id != record_id:
        raise MalformedBlobError(
            f"Record blob id {embedded_id!r} does not match key id {record_id!r}",
            key=record_id,
        )

    try:
        return ExplorationRecord.model_validate(payload)
    except ValidationError as e:
        raise MalformedBlobError(f"Record blob has invalid fields: {e}", key=record_id) from e


def encode_index(record_ids: Sequence[str]) -> bytes:
    return json.dumps(list(record_ids), separators=_SEPARATORS).encode("utf-8")


def decode_index(data: bytes) -> list[str]:
    payload = _load_json(data, "Index")
    if not isinstance(payload, list):
        raise MalformedBlobError(
            f"Index blob must be a JSON array, got {type(payload).__name__}"
        )
    if not all(isinstance(item, str) for item in payload):
        raise MalformedBlobError("Index blob must contain only id strings")
    return payload
