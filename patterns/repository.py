"""Async repository pattern for document store access.

Provides a generic base repository bound to one collection, with the
list/get/create/bulk-insert operations every vertical needs, and FastAPI
dependency injection. Verticals subclass this to add domain-specific
queries.

Example: BookRepository extending BaseRepository.
"""

from typing import Any, Generic, Sequence, TypeVar

from bson import ObjectId
from pymongo.asynchronous.database import AsyncDatabase

from core.models.base import Document, serialize_document

# ---------------------------------------------------------------------------
# Type variable for document classes
# ---------------------------------------------------------------------------

DocumentT = TypeVar("DocumentT", bound=Document)


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[DocumentT]):
    """Generic async repository over one collection.

    Subclass and set `model` to your Document class::

        class BookRepository(BaseRepository[Book]):
            model = Book

            async def find_by_author(self, author: str):
                cursor = self.collection.find({"author": author})
                return [serialize_document(d) for d in await cursor.to_list()]

    Driver errors (``PyMongoError``) and malformed identifiers
    (``bson.errors.InvalidId``) propagate to the caller.
    """

    model: type[DocumentT]

    def __init__(self, database: AsyncDatabase):
        self.database = database
        self.collection = database[self.model.__collection__]

    # -- List everything --

    async def list_all(self) -> list[dict]:
        """Return every document in store-default order."""
        cursor = self.collection.find()
        return [serialize_document(doc) for doc in await cursor.to_list()]

    # -- Get by ID --

    async def get(self, item_id: str | ObjectId | None) -> dict | None:
        """Point read by identifier. A missing identifier finds nothing."""
        if item_id is None:
            return None
        doc = await self.collection.find_one({"_id": ObjectId(item_id)})
        return serialize_document(doc)

    # -- Create --

    async def create(self, item: DocumentT) -> dict:
        """Insert one document and return it with its assigned ``_id``."""
        doc = item.to_document()
        result = await self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        return serialize_document(doc)

    # -- Bulk insert --

    async def insert_many(self, items: Sequence[DocumentT]) -> list[dict]:
        """Unordered bulk insert; returns the inserted documents."""
        docs = [item.to_document() for item in items]
        result = await self.collection.insert_many(docs, ordered=False)
        for doc, inserted_id in zip(docs, result.inserted_ids):
            doc["_id"] = inserted_id
        return [serialize_document(doc) for doc in docs]

    # -- Count --

    async def count(self, filters: dict[str, Any] | None = None) -> int:
        return await self.collection.count_documents(filters or {})
