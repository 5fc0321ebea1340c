from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import date

from clinic_inventory.api.deps import get_report_service
from clinic_inventory.domain.reports.service import ReportService
from clinic_inventory.api.v1.reports.schemas import UsageReportRow, PatientReport, DashboardSummary

router = APIRouter(prefix="/reports", tags=["Reports"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/usage", response_model=List[UsageReportRow])
async def get_usage_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    medication_id: Optional[int] = Query(None, gt=0),
    service: ReportService = Depends(get_report_service)
):
    """Usage totals per medication; date bounds are inclusive"""
    return await service.usage_report(start_date, end_date, medication_id)


@router.get("/patients", response_model=PatientReport)
async def get_patient_report(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    service: ReportService = Depends(get_report_service)
):
    return await service.patient_report(start_date, end_date)


@dashboard_router.get("/summary", response_model=DashboardSummary)
async def get_dashboard_summary(service: ReportService = Depends(get_report_service)):
    """Counts, recent usages within the configured window, and the low-stock list"""
    return await service.dashboard_summary()
