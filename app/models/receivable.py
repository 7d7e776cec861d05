"""
Receivable model - money owed to the operator by a customer.

Status lifecycle:
- PENDING on create, RECEIVED after the receive transition
- OVERDUE is a read-time view of a PENDING receivable past its due date
  and is never written to the collection
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import field_validator

from app.models.base import MongoModel, to_cents


class ReceivableStatus(str, Enum):
    PENDING = "PENDING"
    RECEIVED = "RECEIVED"
    OVERDUE = "OVERDUE"


class Receivable(MongoModel):
    description: str
    customer: str
    amount: Decimal
    due_date: date
    status: ReceivableStatus = ReceivableStatus.PENDING
    category: Optional[str] = None
    received_at: Optional[datetime] = None  # Set only by the receive transition

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_to_cents(cls, value):
        return to_cents(value)

    @field_validator("received_at", mode="after")
    @classmethod
    def _received_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_overdue(self, today: date) -> bool:
        return self.status == ReceivableStatus.PENDING and self.due_date < today

    def with_derived_status(self, today: date) -> "Receivable":
        """Copy presenting OVERDUE when past due; the stored record is untouched."""
        if self.is_overdue(today):
            return self.model_copy(update={"status": ReceivableStatus.OVERDUE})
        return self
