from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic_inventory.infrastructure.database import get_db
from clinic_inventory.domain.usages.service import UsageService
from clinic_inventory.api.v1.usages.schemas import UsageCreate, UsageResponse

router = APIRouter(prefix="/usages", tags=["Usages"])


@router.post("", response_model=UsageResponse, status_code=status.HTTP_201_CREATED)
async def create_usage(usage_in: UsageCreate, db: AsyncSession = Depends(get_db)):
    """Record a usage; 404 for an unknown medication, 409 when stock is short"""
    service = UsageService(db)
    return await service.record_usage(usage_in.model_dump())


@router.get("", response_model=List[UsageResponse])
async def get_usages(db: AsyncSession = Depends(get_db)):
    service = UsageService(db)
    return await service.list_usages()
