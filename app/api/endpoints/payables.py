from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.api.deps import get_payable_service
from app.models.payable import PayableStatus
from app.schemas.payable import PayableCreate, PayableFilter, PayableResponse
from app.services.payable_service import PayableService

router = APIRouter()

@router.get("", response_model=List[PayableResponse])
async def list_payables(
    status: Optional[PayableStatus] = None,
    vendor: Optional[str] = None,
    due_from: Optional[date] = Query(None, alias="dueFrom"),
    due_to: Optional[date] = Query(None, alias="dueTo"),
    service: PayableService = Depends(get_payable_service)
):
    """List payables, optionally filtered by status, vendor and due date range"""
    filters = PayableFilter(status=status, vendor=vendor, due_from=due_from, due_to=due_to)
    payables = await service.list(filters)
    return [PayableResponse.from_model(p) for p in payables]

@router.post("", response_model=PayableResponse, status_code=201)
async def create_payable(
    payable_in: PayableCreate,
    service: PayableService = Depends(get_payable_service)
):
    """Create a new payable"""
    payable = await service.create(payable_in)
    return PayableResponse.from_model(payable)

@router.get("/{payable_id}", response_model=PayableResponse)
async def get_payable(
    payable_id: str,
    service: PayableService = Depends(get_payable_service)
):
    """Get a payable by ID"""
    payable = await service.get(payable_id)
    return PayableResponse.from_model(payable)

@router.put("/{payable_id}", response_model=PayableResponse)
async def update_payable(
    payable_id: str,
    payable_in: PayableCreate,
    service: PayableService = Depends(get_payable_service)
):
    """Replace the editable fields of a payable"""
    payable = await service.update(payable_id, payable_in)
    return PayableResponse.from_model(payable)

@router.delete("/{payable_id}", status_code=204)
async def delete_payable(
    payable_id: str,
    service: PayableService = Depends(get_payable_service)
):
    """Delete a payable"""
    await service.delete(payable_id)
    return Response(status_code=204)

@router.patch("/{payable_id}/pay", response_model=PayableResponse)
async def pay_payable(
    payable_id: str,
    service: PayableService = Depends(get_payable_service)
):
    """Mark a payable as paid"""
    payable = await service.pay(payable_id)
    return PayableResponse.from_model(payable)
