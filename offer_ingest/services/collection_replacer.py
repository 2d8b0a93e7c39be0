"""Bounded-batch replacement of a stored collection."""

import asyncio
from typing import Any, Dict, Iterable

from offer_ingest.models.offer import GroupedProduct
from offer_ingest.services.document_store import DocumentStore
from offer_ingest.utils import logger
from offer_ingest.utils.config import STORAGE_BATCH_LIMIT


class BatchWriter:
    """
    Append-only write buffer committing products in bounded batches.

    Attributes:
        store: Target document store
        collection: Target collection name
        batch_limit: Maximum documents per commit
        written: Documents committed so far
        commits: Write commits issued so far
    """

    def __init__(self, store: DocumentStore, collection: str, batch_limit: int = STORAGE_BATCH_LIMIT):
        self.store = store
        self.collection = collection
        self.batch_limit = batch_limit
        self.written = 0
        self.commits = 0
        self._pending: Dict[str, Dict[str, Any]] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def add(self, product: GroupedProduct) -> None:
        """Buffer a product under a fresh document id, committing when the batch is full."""
        self._pending[self.store.new_document_id()] = product.to_document()
        if len(self._pending) >= self.batch_limit:
            await self.flush()

    async def flush(self) -> None:
        """Commit any buffered documents."""
        if not self._pending:
            return
        batch, self._pending = self._pending, {}
        await self.store.write_batch(self.collection, batch)
        self.written += len(batch)
        self.commits += 1
        logger.debug("💾 Committed %d documents to '%s'", len(batch), self.collection)


class CollectionReplacer:
    """
    Clears and rewrites a collection without exceeding the backend batch ceiling.

    Neither operation is transactional across batches. A failure part way leaves
    the collection partially cleared or written; running clear and write again
    converges to the intended state.
    """

    def __init__(self, store: DocumentStore, batch_limit: int = STORAGE_BATCH_LIMIT):
        if batch_limit < 1:
            raise ValueError("batch_limit must be positive")
        self.store = store
        self.batch_limit = batch_limit

    async def clear(self, collection: str) -> int:
        """
        Delete every document of a collection, one bounded batch at a time.

        Args:
            collection: Collection name

        Returns:
            int: Number of documents deleted
        """
        deleted = 0
        while True:
            doc_ids = await self.store.fetch_ids(collection, self.batch_limit)
            if not doc_ids:
                break

            await self.store.delete_batch(collection, doc_ids)
            deleted += len(doc_ids)
            logger.debug("🗑️ Deleted %d documents from '%s'", len(doc_ids), collection)

            # Hand control back to the event loop between batches
            await asyncio.sleep(0)

        logger.info("✅ Cleared %d documents from '%s'", deleted, collection)
        return deleted

    def writer(self, collection: str) -> BatchWriter:
        return BatchWriter(self.store, collection, self.batch_limit)

    async def write_all(self, collection: str, products: Iterable[GroupedProduct]) -> int:
        """
        Write products as new documents in bounded batches.

        Args:
            collection: Collection name
            products: Products to write, any length

        Returns:
            int: Number of documents written
        """
        writer = self.writer(collection)
        for product in products:
            await writer.add(product)
        await writer.flush()

        logger.info("✅ Wrote %d documents to '%s' in %d commits", writer.written, collection, writer.commits)
        return writer.written
