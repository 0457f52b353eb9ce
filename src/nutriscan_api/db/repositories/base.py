"""Base repository class with common database operations."""

from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from motor.motor_asyncio import AsyncIOMotorCollection
from pydantic import BaseModel

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """
    Base repository keyed by a string ``_id``.

    Subclasses should set the `model_class` attribute to enable
    automatic document-to-model conversion.
    """

    model_class: type[T] | None = None

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    def _to_model(self, doc: dict[str, Any] | None) -> T | dict[str, Any] | None:
        """Convert MongoDB document to Pydantic model if model_class is set."""
        if doc is None:
            return None
        if self.model_class is not None:
            doc = {k: v for k, v in doc.items() if k != "_id"}
            return self.model_class.model_validate(doc)
        return doc

    async def find_by_id(self, id: str) -> T | dict[str, Any] | None:
        """Find document by its string ID."""
        doc = await self.collection.find_one({"_id": id})
        return self._to_model(doc)

    async def upsert_by_id(self, id: str, fields: dict[str, Any]) -> bool:
        """
        Set ``fields`` on the document with ``id``, creating it if missing.

        Returns:
            True if a document was modified or created
        """
        now = datetime.now(UTC)
        result = await self.collection.update_one(
            {"_id": id},
            {
                "$set": {**fields, "updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
        return result.modified_count > 0 or result.upserted_id is not None
