from typing import Optional, List, Any
from datetime import date
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, extract, and_

from clinic_inventory.domain.medications.models import Medication
from clinic_inventory.domain.patients.models import Patient
from clinic_inventory.domain.usages.models import Usage


def _date_conditions(column, start_date: Optional[date], end_date: Optional[date]) -> List[Any]:
    conditions = []
    if start_date:
        conditions.append(column >= start_date)
    if end_date:
        conditions.append(column <= end_date)
    return conditions


class ReportRepository:
    """Aggregate queries over usages and patients"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def usage_totals(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        medication_id: Optional[int] = None
    ) -> List[Any]:
        """One row per medication with matching usages, largest total first"""
        conditions = _date_conditions(Usage.date, start_date, end_date)
        if medication_id is not None:
            conditions.append(Usage.medication_id == medication_id)

        total_used = func.sum(Usage.quantity_used)
        query = (
            select(
                Medication.id.label("medication_id"),
                Medication.name.label("medication_name"),
                total_used.label("total_used"),
                func.count(Usage.id).label("usage_count"),
                func.min(Usage.date).label("first_date"),
                func.max(Usage.date).label("last_date"),
            )
            .join(Medication, Usage.medication_id == Medication.id)
        )
        if conditions:
            query = query.where(and_(*conditions))
        query = (
            query
            .group_by(Medication.id, Medication.name)
            .order_by(total_used.desc(), Medication.id)
        )

        result = await self.db.execute(query)
        return list(result.all())

    async def patient_count(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> int:
        query = select(func.count(Patient.id))
        conditions = _date_conditions(Patient.treatment_date, start_date, end_date)
        if conditions:
            query = query.where(and_(*conditions))
        result = await self.db.execute(query)
        return result.scalar() or 0

    async def patients_by_month(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[Any]:
        """(year, month, count) rows in chronological order"""
        year = extract("year", Patient.treatment_date)
        month = extract("month", Patient.treatment_date)
        query = select(
            year.label("year"),
            month.label("month"),
            func.count(Patient.id).label("count")
        )
        conditions = _date_conditions(Patient.treatment_date, start_date, end_date)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.group_by(year, month).order_by(year, month)

        result = await self.db.execute(query)
        return list(result.all())

    async def patients_by_gender(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[Any]:
        query = select(Patient.gender, func.count(Patient.id).label("count"))
        conditions = _date_conditions(Patient.treatment_date, start_date, end_date)
        if conditions:
            query = query.where(and_(*conditions))
        query = query.group_by(Patient.gender)

        result = await self.db.execute(query)
        return list(result.all())
