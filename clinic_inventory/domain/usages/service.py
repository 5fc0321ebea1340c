"""
Usage recording.

Logging a usage consumes stock: the usage insert and the stock decrement are
committed together or not at all, and the decrement is guarded in SQL so two
concurrent submissions can never drive ``stock_available`` below zero.
"""

from typing import List
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from clinic_inventory.core.exceptions import (
    NotFoundError,
    InsufficientStockError,
    handle_database_error,
)
from clinic_inventory.domain.medications.repository import MedicationRepository
from clinic_inventory.domain.usages.models import Usage
from clinic_inventory.domain.usages.repository import UsageRepository
from clinic_inventory.domain.validators import require_int, require_date, optional_text


class UsageService:
    """Service layer for medication usage records"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.usage_repo = UsageRepository(db)
        self.medication_repo = MedicationRepository(db)

    async def record_usage(self, usage_in: dict) -> Usage:
        """Record a usage and take the used quantity off the medication's stock.

        A refused usage rolls back the session it was given, which expires any
        objects the caller loaded through it.
        """
        medication_id = require_int("medication_id", usage_in.get("medication_id"), minimum=1)
        usage_date = require_date("date", usage_in.get("date"))
        quantity = require_int("quantity_used", usage_in.get("quantity_used"), minimum=1)
        notes = optional_text("notes", usage_in.get("notes"))

        try:
            medication = await self.medication_repo.get_by_id(medication_id, for_update=True)
            if medication is None:
                raise NotFoundError(
                    message=f"Medication with id {medication_id} not found",
                    details={"medication_id": medication_id}
                )

            if quantity > medication.stock_available:
                raise self._insufficient(medication_id, medication.stock_available, quantity)

            usage = await self.usage_repo.add({
                "medication": medication,
                "date": usage_date,
                "quantity_used": quantity,
                "notes": notes,
            })

            if not await self.medication_repo.decrement_stock(medication_id, quantity):
                # Another transaction consumed the stock after our read
                await self.db.refresh(medication)
                raise self._insufficient(medication_id, medication.stock_available, quantity)

            await self.db.commit()
        except (NotFoundError, InsufficientStockError):
            await self.db.rollback()
            raise
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise handle_database_error(e, "record usage") from e

        await self.db.refresh(medication)
        logger.info(
            f"Usage recorded: id={usage.id} medication_id={medication_id} "
            f"quantity={quantity} stock_left={medication.stock_available}"
        )
        return usage

    def _insufficient(self, medication_id: int, available: int, requested: int) -> InsufficientStockError:
        logger.warning(
            f"Insufficient stock for medication {medication_id}: available={available} requested={requested}"
        )
        return InsufficientStockError(
            message=f"Insufficient stock. Available: {available}, Requested: {requested}",
            details={"medication_id": medication_id, "available": available, "requested": requested}
        )

    async def list_usages(self) -> List[Usage]:
        return await self.usage_repo.get_all()
