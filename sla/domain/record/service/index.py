"""IndexManager - the persisted list of live record ids."""

import logging

from sla.domain.record.codec import decode_index, encode_index
from sla.domain.record.model.value import RecordId, RecordKeys
from sla.domain.record.port.store import RecordStore
from sla.domain.shared.error import MalformedBlobError
from sla.domain.shared.service import Service

logger = logging.getLogger(__name__)


class IndexManager(Service):
    """Owns the index blob stored under ``keys.index_key``.

    The index defines which records are live. ``append`` is a plain
    read-modify-write: the store offers no compare-and-swap, so two appends
    that both read before either writes end with only the later write's
    list, and the other id is lost. That race is accepted, not guarded.
    """

    store: RecordStore
    keys: RecordKeys

    async def list_ids(self) -> list[RecordId]:
        """Return the indexed ids in insertion order.

        An absent index is empty. A malformed index is also treated as empty
        so that the rest of the archive stays readable.
        """
        data = await self.store.get(self.keys.index_key)
        if not data:
            return []
        try:
            ids = decode_index(data)
        except MalformedBlobError as e:
            logger.warning("Ignoring malformed index %s: %s", self.keys.index_key, e.message)
            return []
        return [RecordId(i) for i in ids]

    async def append(self, record_id: RecordId) -> None:
        """Add ``record_id`` to the end of the index.

        Duplicates are not checked; callers pass freshly generated ids.

        Raises:
            WriteError: The updated index could not be written.
        """
        ids = await self.list_ids()
        ids.append(record_id)
        await self.store.set(self.keys.index_key, encode_index(ids))
        logger.debug("Indexed %s (%d ids)", record_id, len(ids))
