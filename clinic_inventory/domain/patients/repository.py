from typing import Optional, List
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, or_, func

from clinic_inventory.domain.patients.models import Patient


class PatientRepository:
    """Repository for patient data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, patient_data: dict) -> Patient:
        """Create a new patient"""
        now = datetime.utcnow()
        patient = Patient(created_at=now, updated_at=now, **patient_data)
        self.db.add(patient)
        await self.db.commit()
        await self.db.refresh(patient)
        return patient

    async def get_by_id(self, patient_id: int) -> Optional[Patient]:
        """Get patient by ID"""
        result = await self.db.execute(select(Patient).where(Patient.id == patient_id))
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Patient]:
        result = await self.db.execute(select(Patient).order_by(Patient.id))
        return list(result.scalars().all())

    async def search(self, term: str) -> List[Patient]:
        """Case-insensitive substring match on name, contact or address"""
        result = await self.db.execute(
            select(Patient)
            .where(
                or_(
                    Patient.name.icontains(term, autoescape=True),
                    Patient.contact.icontains(term, autoescape=True),
                    Patient.address.icontains(term, autoescape=True)
                )
            )
            .order_by(Patient.id)
        )
        return list(result.scalars().all())

    async def update(self, patient_id: int, update_data: dict) -> Optional[Patient]:
        """Update patient information"""
        await self.db.execute(
            update(Patient)
            .where(Patient.id == patient_id)
            .values(**update_data)
        )
        await self.db.commit()
        patient = await self.get_by_id(patient_id)
        if patient is not None:
            await self.db.refresh(patient)
        return patient

    async def delete(self, patient_id: int) -> bool:
        """Delete patient record"""
        result = await self.db.execute(
            delete(Patient).where(Patient.id == patient_id)
        )
        await self.db.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Patient.id)))
        return result.scalar() or 0
