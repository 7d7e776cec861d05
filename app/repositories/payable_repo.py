from datetime import datetime
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.models.base import parse_object_id, to_mongo_value
from app.models.payable import Payable, PayableStatus

SORT_ORDER = [("due_date", 1), ("created_at", 1)]


class PayableRepository:
    """Payable database operations."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["payables"]

    async def create(self, payable: Payable) -> Payable:
        """Insert a new payable."""
        await self.collection.insert_one(payable.to_mongo())
        return payable

    async def get(self, payable_id: str) -> Optional[Payable]:
        """Get a payable by id."""
        oid = parse_object_id(payable_id)
        if oid is None:
            return None
        doc = await self.collection.find_one({"_id": oid})
        if doc:
            return Payable(**doc)
        return None

    async def find(self, query: dict) -> list[Payable]:
        """List payables matching a query built by build_filter_query."""
        cursor = self.collection.find(query).sort(SORT_ORDER)
        docs = await cursor.to_list(None)
        return [Payable(**doc) for doc in docs]

    async def update(self, payable_id: str, fields: dict, updated_at: datetime) -> Optional[Payable]:
        """Overwrite editable fields in one atomic write."""
        oid = parse_object_id(payable_id)
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
            return Payable(**doc)
        return None

    async def mark_paid(self, payable_id: str, paid_at: datetime) -> Optional[Payable]:
        """Move a PENDING payable to PAID; None when no PENDING payable has this id."""
        oid = parse_object_id(payable_id)
        if oid is None:
            return None
        doc = await self.collection.find_one_and_update(
            {"_id": oid, "status": PayableStatus.PENDING.value},
            {"$set": {
                "status": PayableStatus.PAID.value,
                "paid_at": paid_at,
                "updated_at": paid_at
            }},
            return_document=ReturnDocument.AFTER
        )
        if doc:
            return Payable(**doc)
        return None

    async def delete(self, payable_id: str) -> bool:
        """Hard delete a payable."""
        oid = parse_object_id(payable_id)
        if oid is None:
            return False
        result = await self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
