from typing import List, Dict, Any
from datetime import datetime
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.core.exceptions import NotFoundError, ValidationError
from clinic_inventory.domain.patients.models import Patient, Gender
from clinic_inventory.domain.patients.repository import PatientRepository
from clinic_inventory.domain.validators import require_text, optional_text, require_int, require_date

REQUIRED_FIELDS = ("name", "age", "gender", "address", "contact", "treatment_date")
PATIENT_FIELDS = REQUIRED_FIELDS + ("notes",)


def _clean_gender(value: Any) -> Gender:
    try:
        return Gender(value)
    except ValueError:
        raise ValidationError(
            message=f"gender must be one of: {', '.join(g.value for g in Gender)}",
            details={"field": "gender", "value": str(value)}
        )


class PatientService:
    """Service layer for patient records"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.patient_repo = PatientRepository(db)

    def _clean(self, field: str, value: Any) -> Any:
        if field in ("name", "address", "contact"):
            return require_text(field, value)
        if field == "age":
            return require_int(field, value, minimum=1)
        if field == "gender":
            return _clean_gender(value)
        if field == "treatment_date":
            return require_date(field, value)
        return optional_text(field, value)

    async def create_patient(self, patient_in: dict) -> Patient:
        """Create a new patient"""
        data = {field: self._clean(field, patient_in.get(field)) for field in PATIENT_FIELDS}
        patient = await self.patient_repo.create(data)
        logger.info(f"Patient created: id={patient.id}")
        return patient

    async def get_patient(self, patient_id: int) -> Patient:
        patient = await self.patient_repo.get_by_id(patient_id)
        if patient is None:
            raise NotFoundError(
                message=f"Patient with id {patient_id} not found",
                details={"patient_id": patient_id}
            )
        return patient

    async def list_patients(self) -> List[Patient]:
        return await self.patient_repo.get_all()

    async def search_patients(self, query: str) -> List[Patient]:
        """Blank queries match nobody"""
        term = (query or "").strip()
        if not term:
            return []
        return await self.patient_repo.search(term)

    async def update_patient(self, patient_id: int, patient_in: dict) -> Patient:
        """Update only the supplied fields; notes may be cleared with None"""
        unknown = set(patient_in) - set(PATIENT_FIELDS)
        if unknown:
            raise ValidationError(
                message=f"Unknown patient fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)}
            )
        update_data = {field: self._clean(field, value) for field, value in patient_in.items()}
        update_data["updated_at"] = datetime.utcnow()

        await self.get_patient(patient_id)
        patient = await self.patient_repo.update(patient_id, update_data)
        logger.info(f"Patient updated: id={patient_id} fields={sorted(patient_in)}")
        return patient

    async def delete_patient(self, patient_id: int) -> Dict[str, bool]:
        """Delete patient record; success is False when nothing was removed"""
        deleted = await self.patient_repo.delete(patient_id)
        if deleted:
            logger.info(f"Patient deleted: id={patient_id}")
        return {"success": deleted}
