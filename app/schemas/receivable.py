from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from app.models.base import to_cents
from app.models.receivable import Receivable, ReceivableStatus
from app.schemas.common import Money, require_text


class ReceivableBase(BaseModel):
    """Fields a client may set on a receivable."""
    description: str
    customer: str
    amount: Decimal
    due_date: date
    category: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    @field_validator("description", "customer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        return require_text(value)

    @field_validator("amount")
    @classmethod
    def _cents(cls, value: Decimal) -> Decimal:
        return to_cents(value)


class ReceivableCreate(ReceivableBase):
    """Body for both create and full update; status is never accepted."""
    pass


class ReceivableResponse(BaseModel):
    """Receivable as returned by the API, status already derived."""
    id: str
    description: str
    customer: str
    amount: Money
    due_date: date
    status: ReceivableStatus
    category: Optional[str] = None
    received_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True
    )

    @classmethod
    def from_model(cls, receivable: Receivable) -> "ReceivableResponse":
        return cls(
            id=str(receivable.id),
            description=receivable.description,
            customer=receivable.customer,
            amount=receivable.amount,
            due_date=receivable.due_date,
            status=receivable.status,
            category=receivable.category,
            received_at=receivable.received_at,
            created_at=receivable.created_at,
            updated_at=receivable.updated_at,
        )


class ReceivableFilter(BaseModel):
    """Optional list filters, all combined with AND."""
    status: Optional[ReceivableStatus] = None
    customer: Optional[str] = None
    due_from: Optional[date] = None
    due_to: Optional[date] = None
