from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.models.base import parse_object_id, to_mongo_value
from app.models.receivable import Receivable, ReceivableStatus

SORT_ORDER = [("due_date", 1), ("created_at", 1)]


class ReceivableRepository:
    """Receivable database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["receivables"]

    async def create(self, receivable: Receivable) -> Receivable:
        """Insert a new receivable."""
        await self.collection.insert_one(receivable.to_mongo())
        return receivable

    async def get(self, receivable_id: str) -> Optional[Receivable]:
        """Get a receivable by id."""
        oid = parse_object_id(receivable_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Receivable(**doc)
        return None

    async def find(self, query: dict) -> list[Receivable]:
        """List receivables matching a query built by build_filter_query."""
        cursor = self.collection.find(query).sort(SORT_ORDER)
        docs = await cursor.to_list(None)
        return [Receivable(**doc) for doc in docs]

    async def update(self, receivable_id: str, fields: dict, updated_at: datetime) -> Optional[Receivable]:
        """Overwrite editable fields in one atomic write."""
        oid = parse_object_id(receivable_id)
        if oid is None:
            return None
        updates = {key: to_mongo_value(value) for key, value in fields.items()}
        updates["updated_at"] = updated_at
        doc = await self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": updates},
            return_document=ReturnDocument.AFTER
        )
        if doc:
            return Receivable(**doc)
        return None

    async def mark_received(self, receivable_id: str, received_at: datetime) -> Optional[Receivable]:
        """Move a PENDING receivable to RECEIVED; None when no PENDING receivable has this id."""
        oid = parse_object_id(receivable_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid, "status": ReceivableStatus.PENDING.value},
            {"$set": {
                "status": ReceivableStatus.RECEIVED.value,
                "received_at": received_at,
                "updated_at": received_at
            }},
            return_document=ReturnDocument.AFTER
        )
        if doc:
            return Receivable(**doc)
        return None

    async def delete(self, receivable_id: str) -> bool:
        """Hard delete a receivable."""
        oid = parse_object_id(receivable_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
