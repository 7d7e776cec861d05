from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.models.base import to_cents
from app.models.payable import Payable, PayableStatus
from app.schemas.common import Money, require_text


class PayableBase(BaseModel):
    """Fields a client may set on a payable."""
    description: str
    vendor: str
    amount: Decimal
    due_date: date
    category: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    @field_validator("description", "vendor")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("amount")
    @classmethod
    def _cents(cls, value: Decimal) -> Decimal:
        return to_cents(value)


class PayableCreate(PayableBase):
    """Body for both create and full update; status is never accepted."""
    pass


class PayableResponse(BaseModel):
    """Payable as returned by the API, status already derived."""
    id: str
    description: str
    vendor: str
    amount: Money
    due_date: date
    status: PayableStatus
    category: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    @classmethod
    def from_model(cls, payable: Payable) -> "PayableResponse":
        return cls(
            id=str(payable.id),
            description=payable.description,
            vendor=payable.vendor,
            amount=payable.amount,
            due_date=payable.due_date,
            status=payable.status,
            category=payable.category,
            paid_at=payable.paid_at,
            created_at=payable.created_at,
            updated_at=payable.updated_at,
        )


class PayableFilter(BaseModel):
    """Optional list filters, all combined with AND."""
    status: Optional[PayableStatus] = None
    vendor: Optional[str] = None
    due_from: Optional[date] = None
    due_to: Optional[date] = None
