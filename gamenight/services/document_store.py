"""Document store with live collection snapshots.

Every collection is a table of documents keyed by a string id. Writes are
single-document and atomic (one session, one commit). Subscribers receive
the full, versioned contents of a collection after every write to it; there
are no diffs and no multi-document transactions.
"""
import asyncio
import logging
from collections import defaultdict
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Set

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from gamenight.core.errors import WriteFailed
from gamenight.models import Booking, GameSystem, GameTable, Member, ScheduleDate, TerrainBox
from gamenight.schemas import (
    BookingInDB,
    GameSystemInDB,
    MemberInDB,
    ScheduleDateInDB,
    TableInDB,
    TerrainBoxInDB,
)

logger = logging.getLogger(__name__)

# collection name -> (ORM model, document schema)
COLLECTIONS = {
    "tables": (GameTable, TableInDB),
    "terrain_boxes": (TerrainBox, TerrainBoxInDB),
    "bookings": (Booking, BookingInDB),
    "schedule": (ScheduleDate, ScheduleDateInDB),
    "members": (Member, MemberInDB),
    "game_systems": (GameSystem, GameSystemInDB),
}


class Snapshot(BaseModel):
    """Full contents of one collection at a given version."""

    collection: str
    version: int
    documents: List[Any]


class SnapshotHub:
    """Fans collection snapshots out to subscriber queues."""

    def __init__(self):
        """Initialize the hub."""
        self._subscribers: Dict[str, Set[asyncio.Queue]] = defaultdict(set)
        self._versions: Dict[str, int] = defaultdict(int)

    def register(self, collections: Iterable[str]) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue()
        for name in collections:
            self._subscribers[name].add(queue)
        return queue

    def unregister(self, queue: asyncio.Queue, collections: Iterable[str]):
        for name in collections:
            self._subscribers[name].discard(queue)

    def has_subscribers(self, collection: str) -> bool:
        return bool(self._subscribers[collection])

    def version(self, collection: str) -> int:
        return self._versions[collection]

    def bump(self, collection: str) -> int:
        self._versions[collection] += 1
        return self._versions[collection]

    def publish(self, snapshot: Snapshot):
        for queue in list(self._subscribers[snapshot.collection]):
            queue.put_nowait(snapshot)


class DocumentStore:
    """Keyed document reads, writes and subscriptions over SQLAlchemy."""

    def __init__(self, session_factory: async_sessionmaker, hub: Optional[SnapshotHub] = None):
        """
        Initialize the store.

        Args:
            session_factory: Factory producing async sessions
            hub: Snapshot hub shared by subscribers (a new one by default)
        """
        self.session_factory = session_factory
        self.hub = hub or SnapshotHub()
        self._publish_locks: Dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def _collection(self, collection: str):
        try:
            return COLLECTIONS[collection]
        except KeyError:
            raise ValueError(f"Unknown collection {collection}")

    async def list(self, collection: str) -> List[Any]:
        """Return every document in a collection."""
        model, schema = self._collection(collection)
        async with self.session_factory() as db:
            result = await db.execute(select(model).order_by(model.id))
            return [schema.model_validate(row) for row in result.scalars().all()]

    async def get(self, collection: str, doc_id: str) -> Optional[Any]:
        """Return one document, or None if it does not exist."""
        model, schema = self._collection(collection)
        async with self.session_factory() as db:
            row = await db.get(model, doc_id)
            return schema.model_validate(row) if row else None

    async def set(self, collection: str, doc_id: str, data: Dict[str, Any]) -> Any:
        """
        Create or overwrite a document.

        Args:
            collection: Collection name
            doc_id: Document id
            data: Field values (without the id)

        Returns:
            The stored document

        Raises:
            WriteFailed: If the store rejects the write
        """
        model, schema = self._collection(collection)
        try:
            async with self.session_factory() as db:
                row = await db.merge(model(id=doc_id, **data))
                await db.commit()
                await db.refresh(row)
                document = schema.model_validate(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to write {collection}/{doc_id}: {e}")
            raise WriteFailed(f"Could not save {collection}/{doc_id}. Please retry.") from e

        logger.info(f"Wrote {collection}/{doc_id}")
        await self._notify(collection)
        return document

    async def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> Optional[Any]:
        """
        Update fields of an existing document.

        Returns:
            The updated document, or None if it does not exist
        """
        model, schema = self._collection(collection)
        try:
            async with self.session_factory() as db:
                row = await db.get(model, doc_id)
                if row is None:
                    return None
                for field, value in fields.items():
                    setattr(row, field, value)
                await db.commit()
                await db.refresh(row)
                document = schema.model_validate(row)
        except SQLAlchemyError as e:
            logger.error(f"Failed to update {collection}/{doc_id}: {e}")
            raise WriteFailed(f"Could not update {collection}/{doc_id}. Please retry.") from e

        logger.info(f"Updated {collection}/{doc_id}: {sorted(fields)}")
        await self._notify(collection)
        return document

    async def delete(self, collection: str, doc_id: str) -> bool:
        """
        Delete a document.

        Returns:
            True if a document was deleted
        """
        model, _ = self._collection(collection)
        try:
            async with self.session_factory() as db:
                row = await db.get(model, doc_id)
                if row is None:
                    return False
                await db.delete(row)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete {collection}/{doc_id}: {e}")
            raise WriteFailed(f"Could not delete {collection}/{doc_id}. Please retry.") from e

        logger.info(f"Deleted {collection}/{doc_id}")
        await self._notify(collection)
        return True

    async def _notify(self, collection: str):
        """Publish the collection's new full snapshot to subscribers."""
        async with self._publish_locks[collection]:
            version = self.hub.bump(collection)
            if not self.hub.has_subscribers(collection):
                return
            documents = await self.list(collection)
            self.hub.publish(
                Snapshot(collection=collection, version=version, documents=documents)
            )

    async def subscribe(self, *collections: str) -> AsyncIterator[Snapshot]:
        """
        Yield full snapshots of the given collections until the iterator is closed.

        The current contents of each collection are yielded first, then a
        new snapshot after every write. Snapshots older than one already
        delivered for the same collection are skipped.
        """
        for name in collections:
            self._collection(name)

        queue = self.hub.register(collections)
        delivered: Dict[str, int] = {}
        try:
            for name in collections:
                version = self.hub.version(name)
                documents = await self.list(name)
                delivered[name] = version
                yield Snapshot(collection=name, version=version, documents=documents)

            while True:
                snapshot = await queue.get()
                if snapshot.version <= delivered.get(snapshot.collection, -1):
                    continue
                delivered[snapshot.collection] = snapshot.version
                yield snapshot
        finally:
            self.hub.unregister(queue, collections)
            logger.debug(f"Subscription to {', '.join(collections)} closed")
