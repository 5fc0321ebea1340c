from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.core.config import Settings
from clinic_inventory.infrastructure.database import get_db
from clinic_inventory.domain.reports.service import ReportService


def get_settings(request: Request) -> Settings:
    """Settings the running application was built with"""
    return request.app.state.settings


async def get_report_service(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings)
) -> ReportService:
    return ReportService(db, recent_usage_days=settings.RECENT_USAGE_DAYS)
