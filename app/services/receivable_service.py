import logging
from typing import List, Optional

from app.core.clock import Clock, clock as default_clock
from app.core.exceptions import ConflictError, NotFoundError
from app.models.receivable import Receivable, ReceivableStatus
from app.repositories.filters import build_filter_query
from app.repositories.receivable_repo import ReceivableRepository
from app.schemas.receivable import ReceivableCreate, ReceivableFilter

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("description", "customer", "amount", "due_date", "category")


class ReceivableService:
    """Receivable use cases. Every receivable returned has its status derived."""

    def __init__(self, repo: ReceivableRepository, clock: Optional[Clock] = None):
        self.repo = repo
        self.clock = clock or default_clock

    def _derive(self, receivable: Receivable) -> Receivable:
        return receivable.with_derived_status(self.clock.today())

    def _not_found(self, receivable_id: str) -> NotFoundError:
        logger.warning("Receivable not found: %s", receivable_id)
        return NotFoundError(f"Receivable not found: {receivable_id}")

    async def list(self, filters: Optional[ReceivableFilter] = None) -> List[Receivable]:
        filters = filters or ReceivableFilter()
        today = self.clock.today()
        query = build_filter_query(
            "customer",
            today=today,
            status=filters.status,
            counterparty=filters.customer,
            due_from=filters.due_from,
            due_to=filters.due_to,
        )
        receivables = await self.repo.find(query)
        return [r.with_derived_status(today) for r in receivables]

    async def get(self, receivable_id: str) -> Receivable:
        receivable = await self.repo.get(receivable_id)
        if receivable is None:
            raise self._not_found(receivable_id)
        return self._derive(receivable)

    async def create(self, receivable_in: ReceivableCreate) -> Receivable:
        """Create a PENDING receivable; status and received_at are never taken from input."""
        receivable = Receivable(
            **receivable_in.model_dump(include=set(EDITABLE_FIELDS)),
            status=ReceivableStatus.PENDING,
            created_at=self.clock.now(),
        )
        receivable = await self.repo.create(receivable)
        logger.info("Created receivable %s for %s", receivable.id, receivable.customer)
        return self._derive(receivable)

    async def update(self, receivable_id: str, receivable_in: ReceivableCreate) -> Receivable:
        """Full update of the editable fields; status and received_at are left alone."""
        fields = receivable_in.model_dump(include=set(EDITABLE_FIELDS))
        receivable = await self.repo.update(receivable_id, fields, self.clock.now())
        if receivable is None:
            raise self._not_found(receivable_id)
        logger.info("Updated receivable %s", receivable_id)
        return self._derive(receivable)

    async def delete(self, receivable_id: str) -> None:
        deleted = await self.repo.delete(receivable_id)
        if not deleted:
            raise self._not_found(receivable_id)
        logger.info("Deleted receivable %s", receivable_id)

    async def receive(self, receivable_id: str) -> Receivable:
        """PENDING -> RECEIVED. Receiving twice is a conflict, not a re-stamp."""
        receivable = await self.repo.mark_received(receivable_id, self.clock.now())
        if receivable is not None:
            logger.info("Receivable %s marked as received", receivable_id)
            return receivable

        existing = await self.repo.get(receivable_id)
        if existing is None:
            raise self._not_found(receivable_id)
        logger.warning("Receivable %s is already %s", receivable_id, existing.status.value)
        raise ConflictError(f"Receivable already received: {receivable_id}")
