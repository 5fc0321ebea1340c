import pytest
from datetime import date
from httpx import AsyncClient

from clinic_inventory.core.exceptions import ValidationError, NotFoundError, ConflictError
from clinic_inventory.domain.medications.service import MedicationService
from clinic_inventory.domain.usages.service import UsageService


@pytest.mark.medications
@pytest.mark.unit
class TestMedicationService:
    """Test medication inventory operations."""

    async def test_create_medication(self, medication_service: MedicationService, sample_medication_data: dict):
        medication = await medication_service.create_medication(sample_medication_data)

        assert medication.id is not None
        assert medication.name == "Paracetamol"
        assert medication.category == "Tablet"
        assert medication.stock_available == 100
        assert medication.reorder_threshold == 20
        assert medication.created_at is not None
        assert medication.updated_at is not None

    async def test_create_medication_with_zero_stock_and_threshold(self, medication_service: MedicationService):
        medication = await medication_service.create_medication({
            "name": "Ibuprofen",
            "category": "Tablet",
            "stock_available": 0,
            "reorder_threshold": 0,
        })
        assert medication.stock_available == 0
        assert medication.reorder_threshold == 0

    @pytest.mark.parametrize("field,value", [
        ("name", ""),
        ("name", "   "),
        ("category", ""),
        ("stock_available", -1),
        ("reorder_threshold", -5),
        ("stock_available", "ten"),
    ])
    async def test_create_medication_validation(
        self, medication_service: MedicationService, sample_medication_data: dict, field, value
    ):
        sample_medication_data[field] = value
        with pytest.raises(ValidationError):
            await medication_service.create_medication(sample_medication_data)

        assert await medication_service.list_medications() == []

    async def test_list_medications_in_insertion_order(self, medication_service: MedicationService):
        for name in ("Amoxicillin", "Cetirizine", "Betadine"):
            await medication_service.create_medication({
                "name": name, "category": "Misc", "stock_available": 10, "reorder_threshold": 2
            })

        medications = await medication_service.list_medications()
        assert [m.name for m in medications] == ["Amoxicillin", "Cetirizine", "Betadine"]

    async def test_get_medication_not_found(self, medication_service: MedicationService):
        with pytest.raises(NotFoundError):
            await medication_service.get_medication(999)

    async def test_search_by_name_and_category_case_insensitive(self, medication_service: MedicationService):
        await medication_service.create_medication({
            "name": "Paracetamol", "category": "Tablet", "stock_available": 50, "reorder_threshold": 5
        })
        await medication_service.create_medication({
            "name": "Amoxicillin", "category": "Capsule", "stock_available": 50, "reorder_threshold": 5
        })
        await medication_service.create_medication({
            "name": "Cough Syrup", "category": "Syrup", "stock_available": 50, "reorder_threshold": 5
        })

        by_name = await medication_service.search_medications("PARA")
        assert [m.name for m in by_name] == ["Paracetamol"]

        by_category = await medication_service.search_medications("caps")
        assert [m.name for m in by_category] == ["Amoxicillin"]

        across_fields = await medication_service.search_medications("syr")
        assert [m.name for m in across_fields] == ["Cough Syrup"]

        assert await medication_service.search_medications("insulin") == []

    async def test_search_treats_wildcards_literally(self, medication_service: MedicationService):
        await medication_service.create_medication({
            "name": "Paracetamol", "category": "Tablet", "stock_available": 50, "reorder_threshold": 5
        })
        await medication_service.create_medication({
            "name": "Zinc 100%", "category": "Tablet", "stock_available": 50, "reorder_threshold": 5
        })

        assert await medication_service.search_medications("_") == []
        assert [m.name for m in await medication_service.search_medications("%")] == ["Zinc 100%"]
        assert [m.name for m in await medication_service.search_medications("p_r")] == []

    async def test_search_with_empty_query_returns_all(self, medication_service: MedicationService):
        await medication_service.create_medication({
            "name": "Paracetamol", "category": "Tablet", "stock_available": 50, "reorder_threshold": 5
        })
        await medication_service.create_medication({
            "name": "Amoxicillin", "category": "Capsule", "stock_available": 50, "reorder_threshold": 5
        })

        assert len(await medication_service.search_medications("")) == 2
        assert len(await medication_service.search_medications("   ")) == 2

    async def test_low_stock_includes_threshold_boundary(self, medication_service: MedicationService):
        below = await medication_service.create_medication({
            "name": "Below", "category": "Tablet", "stock_available": 5, "reorder_threshold": 10
        })
        equal = await medication_service.create_medication({
            "name": "Equal", "category": "Tablet", "stock_available": 10, "reorder_threshold": 10
        })
        await medication_service.create_medication({
            "name": "Above", "category": "Tablet", "stock_available": 11, "reorder_threshold": 10
        })

        low_stock = await medication_service.get_low_stock_medications()
        assert {m.id for m in low_stock} == {below.id, equal.id}

    async def test_low_stock_empty_when_all_stocked(self, medication_service: MedicationService):
        await medication_service.create_medication({
            "name": "Plenty", "category": "Tablet", "stock_available": 500, "reorder_threshold": 10
        })
        assert await medication_service.get_low_stock_medications() == []

    async def test_update_partial_fields(self, medication_service: MedicationService, sample_medication_data: dict):
        medication = await medication_service.create_medication(sample_medication_data)
        created_at = medication.created_at
        previous_updated_at = medication.updated_at

        updated = await medication_service.update_medication(medication.id, {"stock_available": 42})

        assert updated.stock_available == 42
        assert updated.name == "Paracetamol"
        assert updated.reorder_threshold == 20
        assert updated.created_at == created_at
        assert updated.updated_at >= previous_updated_at

    async def test_update_with_no_fields_refreshes_updated_at(
        self, medication_service: MedicationService, sample_medication_data: dict
    ):
        medication = await medication_service.create_medication(sample_medication_data)
        previous_updated_at = medication.updated_at

        updated = await medication_service.update_medication(medication.id, {})

        assert updated.name == sample_medication_data["name"]
        assert updated.updated_at >= previous_updated_at

    async def test_update_not_found(self, medication_service: MedicationService):
        with pytest.raises(NotFoundError):
            await medication_service.update_medication(999, {"name": "Ghost"})

    async def test_update_rejects_negative_stock(self, medication_service: MedicationService, sample_medication_data: dict):
        medication = await medication_service.create_medication(sample_medication_data)
        with pytest.raises(ValidationError):
            await medication_service.update_medication(medication.id, {"stock_available": -3})

        unchanged = await medication_service.get_medication(medication.id)
        assert unchanged.stock_available == 100

    async def test_delete_medication_without_usages(
        self, medication_service: MedicationService, sample_medication_data: dict
    ):
        medication = await medication_service.create_medication(sample_medication_data)

        assert await medication_service.delete_medication(medication.id) == {"success": True}
        with pytest.raises(NotFoundError):
            await medication_service.get_medication(medication.id)

    async def test_delete_medication_not_found(self, medication_service: MedicationService):
        with pytest.raises(NotFoundError):
            await medication_service.delete_medication(999)

    async def test_delete_medication_with_usages_is_refused(
        self,
        medication_service: MedicationService,
        usage_service: UsageService,
        sample_medication_data: dict
    ):
        medication = await medication_service.create_medication(sample_medication_data)
        await usage_service.record_usage({
            "medication_id": medication.id,
            "date": date(2024, 1, 15),
            "quantity_used": 10,
            "notes": None,
        })

        with pytest.raises(ConflictError) as exc_info:
            await medication_service.delete_medication(medication.id)

        assert "associated usage records" in exc_info.value.message
        still_there = await medication_service.get_medication(medication.id)
        assert still_there.stock_available == 90
        assert len(await usage_service.list_usages()) == 1

    async def test_delete_other_medication_while_one_has_usages(
        self,
        medication_service: MedicationService,
        usage_service: UsageService
    ):
        used = await medication_service.create_medication({
            "name": "Used", "category": "Tablet", "stock_available": 10, "reorder_threshold": 1
        })
        unused = await medication_service.create_medication({
            "name": "Unused", "category": "Tablet", "stock_available": 10, "reorder_threshold": 1
        })
        await usage_service.record_usage({
            "medication_id": used.id, "date": date(2024, 3, 1), "quantity_used": 1
        })

        assert await medication_service.delete_medication(unused.id) == {"success": True}
        assert [m.id for m in await medication_service.list_medications()] == [used.id]


@pytest.mark.medications
@pytest.mark.integration
class TestMedicationEndpoints:
    """Test medication HTTP endpoints."""

    async def test_create_and_list(self, client: AsyncClient, sample_medication_data: dict):
        response = await client.post("/api/v1/medications", json=sample_medication_data)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Paracetamol"
        assert data["stock_available"] == 100
        assert "id" in data

        response = await client.get("/api/v1/medications")
        assert response.status_code == 200
        assert [m["id"] for m in response.json()] == [data["id"]]

    async def test_create_rejects_negative_stock(self, client: AsyncClient, sample_medication_data: dict):
        sample_medication_data["stock_available"] = -1
        response = await client.post("/api/v1/medications", json=sample_medication_data)
        assert response.status_code == 422

    async def test_create_rejects_blank_name(self, client: AsyncClient, sample_medication_data: dict):
        sample_medication_data["name"] = "   "
        response = await client.post("/api/v1/medications", json=sample_medication_data)

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_search_and_low_stock(self, client: AsyncClient):
        await client.post("/api/v1/medications", json={
            "name": "Paracetamol", "category": "Tablet", "stock_available": 100, "reorder_threshold": 20
        })
        await client.post("/api/v1/medications", json={
            "name": "Amoxicillin", "category": "Capsule", "stock_available": 20, "reorder_threshold": 20
        })

        response = await client.get("/api/v1/medications/search", params={"q": "amox"})
        assert [m["name"] for m in response.json()] == ["Amoxicillin"]

        response = await client.get("/api/v1/medications/search", params={"q": ""})
        assert len(response.json()) == 2

        response = await client.get("/api/v1/medications/low-stock")
        assert [m["name"] for m in response.json()] == ["Amoxicillin"]

    async def test_update_and_get(self, client: AsyncClient, sample_medication_data: dict):
        created = (await client.post("/api/v1/medications", json=sample_medication_data)).json()

        response = await client.put(f"/api/v1/medications/{created['id']}", json={"reorder_threshold": 150})
        assert response.status_code == 200
        assert response.json()["reorder_threshold"] == 150
        assert response.json()["stock_available"] == 100

        response = await client.get(f"/api/v1/medications/{created['id']}")
        assert response.json()["reorder_threshold"] == 150

    async def test_update_not_found(self, client: AsyncClient):
        response = await client.put("/api/v1/medications/999", json={"name": "Ghost"})

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOT_FOUND_ERROR"

    async def test_delete_conflict_then_success(self, client: AsyncClient, sample_medication_data: dict):
        used = (await client.post("/api/v1/medications", json=sample_medication_data)).json()
        unused = (await client.post("/api/v1/medications", json={
            "name": "Spare", "category": "Tablet", "stock_available": 1, "reorder_threshold": 0
        })).json()
        await client.post("/api/v1/usages", json={
            "medication_id": used["id"], "date": "2024-01-15", "quantity_used": 5
        })

        response = await client.delete(f"/api/v1/medications/{used['id']}")
        assert response.status_code == 409
        assert response.json()["error_code"] == "CONFLICT_ERROR"

        response = await client.delete(f"/api/v1/medications/{unused['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True}

        response = await client.delete(f"/api/v1/medications/{unused['id']}")
        assert response.status_code == 404
