from fastapi import APIRouter
from app.api.endpoints import payables, receivables

api_router = APIRouter()

api_router.include_router(payables.router, prefix="/payables", tags=["payables"])
api_router.include_router(receivables.router, prefix="/receivables", tags=["receivables"])
