from pydantic import BaseModel
from typing import Dict, List
from datetime import date

from clinic_inventory.api.v1.medications.schemas import MedicationResponse


class DateRange(BaseModel):
    start: date
    end: date


class UsageReportRow(BaseModel):
    medication_id: int
    medication_name: str
    total_used: int
    usage_count: int
    date_range: DateRange


class MonthCount(BaseModel):
    month: str
    count: int


class PatientReport(BaseModel):
    total_patients: int
    patients_by_month: List[MonthCount]
    patients_by_gender: Dict[str, int]


class DashboardSummary(BaseModel):
    total_medications: int
    total_patients: int
    low_stock_medications: int
    recent_usages: int
    low_stock_items: List[MedicationResponse]
