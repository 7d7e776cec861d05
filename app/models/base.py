from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional

from bson import Decimal128, ObjectId
from pydantic import BaseModel, Field, ConfigDict, field_validator

CENTS = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def to_cents(value: Any) -> Decimal:
    """Coerce a stored or submitted amount to a 2-place Decimal."""
    if isinstance(value, Decimal128):
        value = value.to_decimal()
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        return value.quantize(CENTS)
    except InvalidOperation:
        # More digits than the decimal context holds, or not a number at all
        raise ValueError("amount out of range") from None


class PyObjectId(ObjectId):
    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        from pydantic_core import core_schema

        return core_schema.no_info_plain_validator_function(cls.validate)

    @classmethod
    def validate(cls, value: Any) -> ObjectId:
        if isinstance(value, ObjectId):
            return value
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        raise ValueError("Invalid ObjectId")


def parse_object_id(value: str) -> Optional[ObjectId]:
    """ObjectId for a path identifier, or None when it cannot be one."""
    try:
        return PyObjectId.validate(value)
    except ValueError:
        return None


def to_mongo_value(value: Any) -> Any:
    """Convert python values BSON cannot encode natively."""
    if isinstance(value, Decimal):
        return Decimal128(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        # ISO strings keep $gte/$lte range queries in calendar order
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


class MongoModel(BaseModel):
    id: PyObjectId = Field(default_factory=PyObjectId, alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        populate_by_name=True,
        arbitrary_types_allowed=True,
        from_attributes=True
    )

    @field_validator("created_at", "updated_at", mode="after")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def to_mongo(self) -> dict:
        """Document ready for insert_one."""
        doc = self.model_dump(by_alias=True)
        return {key: to_mongo_value(value) for key, value in doc.items()}
