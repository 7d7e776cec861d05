from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from app.api.deps import get_receivable_service
from app.models.receivable import ReceivableStatus
from app.schemas.receivable import ReceivableCreate, ReceivableFilter, ReceivableResponse
from app.services.receivable_service import ReceivableService

router = APIRouter()

@router.get("", response_model=List[ReceivableResponse])
async def list_receivables(
    status: Optional[ReceivableStatus] = None,
    customer: Optional[str] = None,
    due_from: Optional[date] = Query(None, alias="dueFrom"),
    due_to: Optional[date] = Query(None, alias="dueTo"),
    service: ReceivableService = Depends(get_receivable_service)
):
    """List receivables, optionally filtered by status, customer and due date range"""
    filters = ReceivableFilter(status=status, customer=customer, due_from=due_from, due_to=due_to)
    receivables = await service.list(filters)
    return [ReceivableResponse.from_model(r) for r in receivables]

@router.post("", response_model=ReceivableResponse, status_code=201)
async def create_receivable(
    receivable_in: ReceivableCreate,
    service: ReceivableService = Depends(get_receivable_service)
):
    """Create a new receivable"""
    receivable = await service.create(receivable_in)
    return ReceivableResponse.from_model(receivable)

@router.get("/{receivable_id}", response_model=ReceivableResponse)
async def get_receivable(
    receivable_id: str,
    service: ReceivableService = Depends(get_receivable_service)
):
    """Get a receivable by ID"""
    receivable = await service.get(receivable_id)
    return ReceivableResponse.from_model(receivable)

@router.put("/{receivable_id}", response_model=ReceivableResponse)
async def update_receivable(
    receivable_id: str,
    receivable_in: ReceivableCreate,
    service: ReceivableService = Depends(get_receivable_service)
):
    """Replace the editable fields of a receivable"""
    receivable = await service.update(receivable_id, receivable_in)
    return ReceivableResponse.from_model(receivable)

@router.delete("/{receivable_id}", status_code=204)
async def delete_receivable(
    receivable_id: str,
    service: ReceivableService = Depends(get_receivable_service)
):
    """Delete a receivable"""
    await service.delete(receivable_id)
    return Response(status_code=204)

@router.patch("/{receivable_id}/receive", response_model=ReceivableResponse)
async def receive_receivable(
    receivable_id: str,
    service: ReceivableService = Depends(get_receivable_service)
):
    """Mark a receivable as received"""
    receivable = await service.receive(receivable_id)
    return ReceivableResponse.from_model(receivable)
