from typing import Optional, List, Dict, Any
from datetime import date, datetime, timedelta
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.core.config import settings
from clinic_inventory.domain.medications.repository import MedicationRepository
from clinic_inventory.domain.patients.models import Gender
from clinic_inventory.domain.patients.repository import PatientRepository
from clinic_inventory.domain.reports.repository import ReportRepository
from clinic_inventory.domain.usages.repository import UsageRepository
from clinic_inventory.domain.validators import check_date_range


def _as_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value[:10])
    return value


class ReportService:
    """Usage and patient reports plus the dashboard summary"""

    def __init__(self, db: AsyncSession, recent_usage_days: Optional[int] = None):
        self.db = db
        self.report_repo = ReportRepository(db)
        self.medication_repo = MedicationRepository(db)
        self.patient_repo = PatientRepository(db)
        self.usage_repo = UsageRepository(db)
        if recent_usage_days is None:
            recent_usage_days = settings.RECENT_USAGE_DAYS
        self.recent_usage_days = recent_usage_days

    async def usage_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        medication_id: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        check_date_range(start_date, end_date)
        rows = await self.report_repo.usage_totals(start_date, end_date, medication_id)
        return [
            {
                "medication_id": row.medication_id,
                "medication_name": row.medication_name,
                "total_used": int(row.total_used or 0),
                "usage_count": int(row.usage_count or 0),
                "date_range": {
                    "start": _as_date(row.first_date),
                    "end": _as_date(row.last_date),
                },
            }
            for row in rows
        ]

    async def patient_report(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None
    ) -> Dict[str, Any]:
        check_date_range(start_date, end_date)
        total = await self.report_repo.patient_count(start_date, end_date)

        by_month = [
            {"month": f"{int(row.year):04d}-{int(row.month):02d}", "count": row.count}
            for row in await self.report_repo.patients_by_month(start_date, end_date)
        ]

        by_gender = {gender.value: 0 for gender in Gender}
        for gender, count in await self.report_repo.patients_by_gender(start_date, end_date):
            by_gender[Gender(gender).value] = count

        return {
            "total_patients": total,
            "patients_by_month": by_month,
            "patients_by_gender": by_gender,
        }

    async def dashboard_summary(self) -> Dict[str, Any]:
        since = datetime.utcnow() - timedelta(days=self.recent_usage_days)
        low_stock_items = await self.medication_repo.get_low_stock()

        return {
            "total_medications": await self.medication_repo.count(),
            "total_patients": await self.patient_repo.count(),
            "low_stock_medications": await self.medication_repo.count_low_stock(),
            "recent_usages": await self.usage_repo.count_created_since(since),
            "low_stock_items": low_stock_items,
        }
