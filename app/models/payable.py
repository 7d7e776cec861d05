"""
Payable model - money owed by the operator to a vendor.

Status lifecycle:
- PENDING on create, PAID after the pay transition
- OVERDUE is a read-time view of a PENDING payable past its due date
  and is never written to the collection
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import field_validator

from app.models.base import MongoModel, to_cents


class PayableStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"


class Payable(MongoModel):
    description: str
    vendor: str
    amount: Decimal
    due_date: date
    status: PayableStatus = PayableStatus.PENDING
    category: Optional[str] = None
    paid_at: Optional[datetime] = None  # Set only by the pay transition

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_to_cents(cls, value):
        return to_cents(value)

    @field_validator("paid_at", mode="after")
    @classmethod
    def _paid_at_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    def is_overdue(self, today: date) -> bool:
        return self.status == PayableStatus.PENDING and self.due_date < today

    def with_derived_status(self, today: date) -> "Payable":
        """Copy presenting OVERDUE when past due; the stored record is untouched."""
        if self.is_overdue(today):
            return self.model_copy(update={"status": PayableStatus.OVERDUE})
        return self
