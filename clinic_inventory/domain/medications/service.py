from typing import List, Dict, Any
from datetime import datetime
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.core.exceptions import NotFoundError, ConflictError, ValidationError
from clinic_inventory.domain.medications.models import Medication
from clinic_inventory.domain.medications.repository import MedicationRepository
from clinic_inventory.domain.usages.repository import UsageRepository
from clinic_inventory.domain.validators import require_text, require_int

UPDATABLE_FIELDS = ("name", "category", "stock_available", "reorder_threshold")


class MedicationService:
    """Service layer for medication inventory"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = MedicationRepository(db)
        self.usage_repo = UsageRepository(db)

    def _clean(self, field: str, value: Any) -> Any:
        if field in ("name", "category"):
            return require_text(field, value)
        return require_int(field, value, minimum=0)

    async def create_medication(self, medication_in: dict) -> Medication:
        data = {field: self._clean(field, medication_in.get(field)) for field in UPDATABLE_FIELDS}
        medication = await self.repo.create(data)
        logger.info(f"Medication created: id={medication.id} name={medication.name!r} stock={medication.stock_available}")
        return medication

    async def get_medication(self, medication_id: int) -> Medication:
        medication = await self.repo.get_by_id(medication_id)
        if medication is None:
            raise NotFoundError(
                message=f"Medication with id {medication_id} not found",
                details={"medication_id": medication_id}
            )
        return medication

    async def list_medications(self) -> List[Medication]:
        return await self.repo.get_all()

    async def search_medications(self, query: str) -> List[Medication]:
        """Blank queries return every medication"""
        term = (query or "").strip()
        if not term:
            return await self.repo.get_all()
        return await self.repo.search(term)

    async def get_low_stock_medications(self) -> List[Medication]:
        return await self.repo.get_low_stock()

    async def update_medication(self, medication_id: int, medication_in: dict) -> Medication:
        unknown = set(medication_in) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(
                message=f"Unknown medication fields: {', '.join(sorted(unknown))}",
                details={"fields": sorted(unknown)}
            )
        update_data = {field: self._clean(field, value) for field, value in medication_in.items()}
        update_data["updated_at"] = datetime.utcnow()

        await self.get_medication(medication_id)
        medication = await self.repo.update(medication_id, update_data)
        logger.info(f"Medication updated: id={medication_id} fields={sorted(medication_in)}")
        return medication

    async def delete_medication(self, medication_id: int) -> Dict[str, bool]:
        await self.get_medication(medication_id)

        usage_count = await self.usage_repo.count_for_medication(medication_id)
        if usage_count > 0:
            logger.warning(f"Refusing to delete medication {medication_id}: {usage_count} usage records")
            raise ConflictError(
                message=f"Cannot delete medication with id {medication_id} because it has associated usage records",
                details={"medication_id": medication_id, "usage_count": usage_count}
            )

        deleted = await self.repo.delete(medication_id)
        logger.info(f"Medication deleted: id={medication_id}")
        return {"success": deleted}
