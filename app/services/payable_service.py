import logging
from typing import List, Optional

from app.core.clock import Clock, clock as default_clock
from app.core.exceptions import ConflictError, NotFoundError
from app.models.payable import Payable, PayableStatus
from app.repositories.filters import build_filter_query
from app.repositories.payable_repo import PayableRepository
from app.schemas.payable import PayableCreate, PayableFilter

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("description", "vendor", "amount", "due_date", "category")


class PayableService:
    """Payable use cases. Every payable returned has its status derived."""

    def __init__(self, repo: PayableRepository, clock: Optional[Clock] = None):
        self.repo = repo
        self.clock = clock or default_clock

    def _derive(self, payable: Payable) -> Payable:
        return payable.with_derived_status(self.clock.today())

    def _not_found(self, payable_id: str) -> NotFoundError:
        logger.warning("Payable not found: %s", payable_id)
        return NotFoundError(f"Payable not found: {payable_id}")

    async def list(self, filters: Optional[PayableFilter] = None) -> List[Payable]:
        filters = filters or PayableFilter()
        today = self.clock.today()
        query = build_filter_query(
            "vendor",
            today=today,
            status=filters.status,
            counterparty=filters.vendor,
            due_from=filters.due_from,
            due_to=filters.due_to,
        )
        payables = await self.repo.find(query)
        return [p.with_derived_status(today) for p in payables]

    async def get(self, payable_id: str) -> Payable:
        payable = await self.repo.get(payable_id)
        if payable is None:
            raise self._not_found(payable_id)
        return self._derive(payable)

    async def create(self, payable_in: PayableCreate) -> Payable:
        """Create a PENDING payable; status and paid_at are never taken from input."""
        payable = Payable(
            **payable_in.model_dump(include=set(EDITABLE_FIELDS)),
            status=PayableStatus.PENDING,
            created_at=self.clock.now(),
        )
        payable = await self.repo.create(payable)
        logger.info("Created payable %s for %s", payable.id, payable.vendor)
        return self._derive(payable)

    async def update(self, payable_id: str, payable_in: PayableCreate) -> Payable:
        """Full update of the editable fields; status and paid_at are left alone."""
        fields = payable_in.model_dump(include=set(EDITABLE_FIELDS))
        payable = await self.repo.update(payable_id, fields, self.clock.now())
        if payable is None:
            raise self._not_found(payable_id)
        logger.info("Updated payable %s", payable_id)
        return self._derive(payable)

    async def delete(self, payable_id: str) -> None:
        deleted = await self.repo.delete(payable_id)
        if not deleted:
            raise self._not_found(payable_id)
        logger.info("Deleted payable %s", payable_id)

    async def pay(self, payable_id: str) -> Payable:
        """PENDING -> PAID. Paying twice is a conflict, not a re-stamp."""
        payable = await self.repo.mark_paid(payable_id, self.clock.now())
        if payable is not None:
            logger.info("Payable %s marked as paid", payable_id)
            return payable

        existing = await self.repo.get(payable_id)
        if existing is None:
            raise self._not_found(payable_id)
        logger.warning("Payable %s is already %s", payable_id, existing.status.value)
        raise ConflictError(f"Payable already paid: {payable_id}")
