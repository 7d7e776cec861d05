from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from app.core.clock import Clock, get_clock
from app.db.session import get_database
from app.repositories.payable_repo import PayableRepository
from app.repositories.receivable_repo import ReceivableRepository
from app.services.payable_service import PayableService
from app.services.receivable_service import ReceivableService


async def get_payable_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
    clock: Clock = Depends(get_clock),
) -> PayableService:
    return PayableService(PayableRepository(db), clock)


async def get_receivable_service(
    db: AsyncIOMotorDatabase = Depends(get_database),
    clock: Clock = Depends(get_clock),
) -> ReceivableService:
    return ReceivableService(ReceivableRepository(db), clock)
