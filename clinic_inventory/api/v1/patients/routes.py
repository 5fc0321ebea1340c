from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from clinic_inventory.infrastructure.database import get_db
from clinic_inventory.domain.patients.service import PatientService
from clinic_inventory.api.v1.patients.schemas import (
    PatientCreate,
    PatientUpdate,
    PatientResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def create_patient(patient_data: PatientCreate, db: AsyncSession = Depends(get_db)):
    """Create a new patient"""
    patient_service = PatientService(db)
    return await patient_service.create_patient(patient_data.model_dump())


@router.get("", response_model=List[PatientResponse])
async def get_patients(db: AsyncSession = Depends(get_db)):
    patient_service = PatientService(db)
    return await patient_service.list_patients()


@router.get("/search", response_model=List[PatientResponse])
async def search_patients(q: str = Query("", max_length=255), db: AsyncSession = Depends(get_db)):
    """Search by name, contact or address; an empty query matches nobody"""
    patient_service = PatientService(db)
    return await patient_service.search_patients(q)


@router.get("/{patient_id}", response_model=PatientResponse)
async def get_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    """Get patient by ID"""
    patient_service = PatientService(db)
    return await patient_service.get_patient(patient_id)


@router.put("/{patient_id}", response_model=PatientResponse)
async def update_patient(
    patient_id: int,
    patient_data: PatientUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update patient information"""
    patient_service = PatientService(db)
    return await patient_service.update_patient(patient_id, patient_data.model_dump(exclude_unset=True))


@router.delete("/{patient_id}", response_model=SuccessResponse)
async def delete_patient(patient_id: int, db: AsyncSession = Depends(get_db)):
    patient_service = PatientService(db)
    return await patient_service.delete_patient(patient_id)
