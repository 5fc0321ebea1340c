from fastapi import APIRouter
from clinic_inventory.api.v1.medications import routes as medications
from clinic_inventory.api.v1.patients import routes as patients
from clinic_inventory.api.v1.usages import routes as usages
from clinic_inventory.api.v1.reports import routes as reports

api_router = APIRouter()
api_router.include_router(medications.router)
api_router.include_router(usages.router)
api_router.include_router(patients.router)
api_router.include_router(reports.router)
api_router.include_router(reports.dashboard_router)
