import pytest
from datetime import date
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession

from clinic_inventory.main import create_app
from clinic_inventory.infrastructure.database import Database
from clinic_inventory.domain.medications.service import MedicationService
from clinic_inventory.domain.patients.service import PatientService
from clinic_inventory.domain.usages.service import UsageService
from clinic_inventory.domain.reports.service import ReportService


@pytest.fixture(scope="function")
async def database(tmp_path) -> AsyncGenerator[Database, None]:
    """A fresh SQLite database per test."""
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'clinic_test.db'}")
    await database.create_all()
    try:
        yield database
    finally:
        await database.drop_all()
        await database.dispose()


@pytest.fixture(scope="function")
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with database.session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(database: Database) -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the per-test database."""
    app = create_app(database=database)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def medication_service(db_session: AsyncSession) -> MedicationService:
    return MedicationService(db_session)


@pytest.fixture
def patient_service(db_session: AsyncSession) -> PatientService:
    return PatientService(db_session)


@pytest.fixture
def usage_service(db_session: AsyncSession) -> UsageService:
    return UsageService(db_session)


@pytest.fixture
def report_service(db_session: AsyncSession) -> ReportService:
    return ReportService(db_session)


@pytest.fixture(scope="function")
def sample_medication_data() -> dict:
    """Sample medication data for testing."""
    return {
        "name": "Paracetamol",
        "category": "Tablet",
        "stock_available": 100,
        "reorder_threshold": 20,
    }


@pytest.fixture(scope="function")
def sample_patient_data() -> dict:
    """Sample patient data for testing."""
    return {
        "name": "John Doe",
        "age": 30,
        "gender": "MALE",
        "address": "12 Harbour Road, Jakarta",
        "contact": "08123456789",
        "treatment_date": date(2024, 1, 15),
        "notes": "Routine check",
    }


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "medications: mark test as medication inventory related"
    )
    config.addinivalue_line(
        "markers", "patients: mark test as patient management related"
    )
    config.addinivalue_line(
        "markers", "usages: mark test as usage recording related"
    )
    config.addinivalue_line(
        "markers", "reports: mark test as reporting related"
    )
