from typing import List
from datetime import datetime
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

from clinic_inventory.domain.usages.models import Usage


class UsageRepository:
    """Repository for usage records"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def add(self, usage_data: dict) -> Usage:
        """Stage a usage record inside the current transaction without committing"""
        usage = Usage(created_at=datetime.utcnow(), **usage_data)
        self.db.add(usage)
        await self.db.flush()
        return usage

    async def get_all(self) -> List[Usage]:
        result = await self.db.execute(
            select(Usage).order_by(Usage.date.desc(), Usage.id.desc())
        )
        return list(result.scalars().all())

    async def count_for_medication(self, medication_id: int) -> int:
        result = await self.db.execute(
            select(func.count(Usage.id)).where(Usage.medication_id == medication_id)
        )
        return result.scalar() or 0

    async def count_created_since(self, since: datetime) -> int:
        result = await self.db.execute(
            select(func.count(Usage.id)).where(Usage.created_at >= since)
        )
        return result.scalar() or 0
