from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic_inventory.infrastructure.database import get_db
from clinic_inventory.domain.medications.service import MedicationService
from clinic_inventory.api.v1.medications.schemas import (
    MedicationCreate,
    MedicationUpdate,
    MedicationResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/medications", tags=["Medications"])


@router.post("", response_model=MedicationResponse, status_code=status.HTTP_201_CREATED)
async def create_medication(medication_in: MedicationCreate, db: AsyncSession = Depends(get_db)):
    service = MedicationService(db)
    return await service.create_medication(medication_in.model_dump())


@router.get("", response_model=List[MedicationResponse])
async def get_medications(db: AsyncSession = Depends(get_db)):
    service = MedicationService(db)
    return await service.list_medications()


@router.get("/search", response_model=List[MedicationResponse])
async def search_medications(q: str = Query("", max_length=255), db: AsyncSession = Depends(get_db)):
    """Search by name or category; an empty query lists everything"""
    service = MedicationService(db)
    return await service.search_medications(q)


@router.get("/low-stock", response_model=List[MedicationResponse])
async def get_low_stock_medications(db: AsyncSession = Depends(get_db)):
    service = MedicationService(db)
    return await service.get_low_stock_medications()


@router.get("/{medication_id}", response_model=MedicationResponse)
async def get_medication(medication_id: int, db: AsyncSession = Depends(get_db)):
    service = MedicationService(db)
    return await service.get_medication(medication_id)


@router.put("/{medication_id}", response_model=MedicationResponse)
async def update_medication(
    medication_id: int,
    medication_in: MedicationUpdate,
    db: AsyncSession = Depends(get_db)
):
    service = MedicationService(db)
    return await service.update_medication(medication_id, medication_in.model_dump(exclude_unset=True))


@router.delete("/{medication_id}", response_model=SuccessResponse)
async def delete_medication(medication_id: int, db: AsyncSession = Depends(get_db)):
    """Refused with 409 while usage records reference the medication"""
    service = MedicationService(db)
    return await service.delete_medication(medication_id)
