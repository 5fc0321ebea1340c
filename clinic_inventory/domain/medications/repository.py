from typing import Optional, List
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, or_, func

from clinic_inventory.domain.medications.models import Medication


class MedicationRepository:
    """Repository for medication data access operations"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, medication_data: dict) -> Medication:
        """Create a new medication"""
        now = datetime.utcnow()
        medication = Medication(created_at=now, updated_at=now, **medication_data)
        self.db.add(medication)
        await self.db.commit()
        await self.db.refresh(medication)
        return medication

    async def get_by_id(self, medication_id: int, for_update: bool = False) -> Optional[Medication]:
        """Get medication by ID, optionally locking the row for the current transaction"""
        query = select(Medication).where(Medication.id == medication_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_all(self) -> List[Medication]:
        result = await self.db.execute(select(Medication).order_by(Medication.id))
        return list(result.scalars().all())

    async def search(self, term: str) -> List[Medication]:
        """Case-insensitive substring match on name or category"""
        result = await self.db.execute(
            select(Medication)
            .where(
                or_(
                    Medication.name.icontains(term, autoescape=True),
                    Medication.category.icontains(term, autoescape=True)
                )
            )
            .order_by(Medication.id)
        )
        return list(result.scalars().all())

    async def get_low_stock(self) -> List[Medication]:
        result = await self.db.execute(
            select(Medication)
            .where(Medication.stock_available <= Medication.reorder_threshold)
            .order_by(Medication.id)
        )
        return list(result.scalars().all())

    async def update(self, medication_id: int, update_data: dict) -> Optional[Medication]:
        """Update medication fields"""
        await self.db.execute(
            update(Medication)
            .where(Medication.id == medication_id)
            .values(**update_data)
        )
        await self.db.commit()
        medication = await self.get_by_id(medication_id)
        if medication is not None:
            await self.db.refresh(medication)
        return medication

    async def decrement_stock(self, medication_id: int, quantity: int) -> bool:
        """Take ``quantity`` units off the stock unless that would drive it negative.

        Does not commit; the caller owns the transaction. Returns False when no
        row had enough stock left to satisfy the guard.
        """
        result = await self.db.execute(
            update(Medication)
            .where(
                Medication.id == medication_id,
                Medication.stock_available >= quantity
            )
            .values(
                stock_available=Medication.stock_available - quantity,
                updated_at=datetime.utcnow()
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def delete(self, medication_id: int) -> bool:
        result = await self.db.execute(
            delete(Medication).where(Medication.id == medication_id)
        )
        await self.db.commit()
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self.db.execute(select(func.count(Medication.id)))
        return result.scalar() or 0

    async def count_low_stock(self) -> int:
        result = await self.db.execute(
            select(func.count(Medication.id))
            .where(Medication.stock_available <= Medication.reorder_threshold)
        )
        return result.scalar() or 0
