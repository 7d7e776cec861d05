"""Tests for the calendar day used by overdue checks."""
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from app.core.clock import Clock
from app.models.payable import Payable, PayableStatus
from app.services.payable_service import PayableService
from conftest import FixedClock

# 01:00 UTC on the 10th is still the evening of the 9th in Sao Paulo (UTC-3)
EARLY_UTC = datetime(2026, 3, 10, 1, 0, tzinfo=timezone.utc)


def test_today_uses_configured_timezone():
    clock = FixedClock(now=EARLY_UTC, tz_name="America/Sao_Paulo")

    assert clock.today() == date(2026, 3, 9)


def test_today_in_utc():
    clock = FixedClock(now=EARLY_UTC, tz_name="UTC")

    assert clock.today() == date(2026, 3, 10)


def test_now_is_timezone_aware_utc():
    now = Clock("America/Sao_Paulo").now()

    assert now.tzinfo is not None
    assert now.utcoffset().total_seconds() == 0


@pytest.mark.asyncio
async def test_due_local_today_is_not_overdue(payable_repo):
    """A payable due on the local date is still PENDING even after UTC midnight."""
    payable = Payable(
        description="x",
        vendor="V",
        amount=Decimal("10.00"),
        due_date=date(2026, 3, 9),
        created_at=EARLY_UTC
    )
    payable_repo.get.return_value = payable
    service = PayableService(payable_repo, FixedClock(now=EARLY_UTC, tz_name="America/Sao_Paulo"))

    found = await service.get(str(payable.id))

    assert found.status == PayableStatus.PENDING


@pytest.mark.asyncio
async def test_same_instant_in_utc_reads_overdue(payable_repo):
    payable = Payable(
        description="x",
        vendor="V",
        amount=Decimal("10.00"),
        due_date=date(2026, 3, 9),
        created_at=EARLY_UTC
    )
    payable_repo.get.return_value = payable
    service = PayableService(payable_repo, FixedClock(now=EARLY_UTC, tz_name="UTC"))

    found = await service.get(str(payable.id))

    assert found.status == PayableStatus.OVERDUE
