"""Batched document storage for ingested collections."""

from abc import ABC, abstractmethod
import json
from typing import Any, Awaitable, Dict, List, Mapping, Optional, Sequence, Union, cast
import uuid

from redis.asyncio import Redis
from redis.exceptions import RedisError

from offer_ingest.utils import logger
from offer_ingest.utils.config import REDIS_DB, REDIS_HOST, REDIS_PORT
from offer_ingest.utils.exceptions import StorageError


class DocumentStore(ABC):
    """
    A collection-oriented document store with batched commits.

    Each delete_batch / write_batch call is one commit and must stay within the
    backend's batch ceiling; callers are responsible for sizing batches.
    """

    @abstractmethod
    async def fetch_ids(self, collection: str, limit: int) -> List[str]:
        """Return up to `limit` document ids of a collection, ordered by id."""

    @abstractmethod
    async def delete_batch(self, collection: str, doc_ids: Sequence[str]) -> None:
        """Delete the given documents in one commit."""

    @abstractmethod
    async def write_batch(self, collection: str, documents: Mapping[str, Dict[str, Any]]) -> None:
        """Write documents keyed by document id in one commit."""

    def new_document_id(self) -> str:
        """Generate a fresh document identity."""
        return uuid.uuid4().hex


class RedisDocumentStore(DocumentStore):
    """
    Document store backed by Redis.

    Documents are JSON strings at `{collection}:doc:{id}`. A sorted set at
    `{collection}:index` holds every id with score 0, so ZRANGE returns ids in
    lexicographic order.

    Attributes:
        redis: Async Redis client
    """

    def __init__(self, redis_client: Optional[Redis] = None):
        """Initialize with a Redis client, or connect using configuration."""
        self.redis = redis_client or Redis(host=REDIS_HOST, port=REDIS_PORT, db=REDIS_DB, decode_responses=True)

    @staticmethod
    def index_key(collection: str) -> str:
        return f"{collection}:index"

    @staticmethod
    def document_key(collection: str, doc_id: str) -> str:
        return f"{collection}:doc:{doc_id}"

    async def fetch_ids(self, collection: str, limit: int) -> List[str]:
        try:
            members = await cast(Awaitable[List[Union[str, bytes]]], self.redis.zrange(self.index_key(collection), 0, limit - 1))
        except RedisError as e:
            logger.error("❌ Redis error reading ids of '%s': %s", collection, e)
            raise StorageError(str(e), "fetch_ids") from e
        # Clients created without decode_responses return bytes
        return [member.decode() if isinstance(member, bytes) else member for member in members]

    async def delete_batch(self, collection: str, doc_ids: Sequence[str]) -> None:
        if not doc_ids:
            return
        try:
            pipe = self.redis.pipeline(transaction=True)
            pipe.delete(*(self.document_key(collection, doc_id) for doc_id in doc_ids))
            pipe.zrem(self.index_key(collection), *doc_ids)
            await pipe.execute()
        except RedisError as e:
            logger.error("❌ Redis error deleting %d documents from '%s': %s", len(doc_ids), collection, e)
            raise StorageError(str(e), "delete_batch") from e

    async def write_batch(self, collection: str, documents: Mapping[str, Dict[str, Any]]) -> None:
        if not documents:
            return
        try:
            pipe = self.redis.pipeline(transaction=True)
            for doc_id, document in documents.items():
                pipe.set(self.document_key(collection, doc_id), json.dumps(document))
            pipe.zadd(self.index_key(collection), {doc_id: 0 for doc_id in documents})
            await pipe.execute()
        except TypeError as e:  # json.dumps() raises TypeError for encoding errors
            logger.error("❌ Document encode error for '%s': %s", collection, e)
            raise StorageError(str(e), "write_batch") from e
        except RedisError as e:
            logger.error("❌ Redis error writing %d documents to '%s': %s", len(documents), collection, e)
            raise StorageError(str(e), "write_batch") from e

    async def close(self) -> None:
        await self.redis.aclose()
