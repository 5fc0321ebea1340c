from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Text, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from clinic_inventory.infrastructure.database import Base
from clinic_inventory.domain.medications.models import Medication


class Usage(Base):
    """A quantity of a medication consumed on a given day"""
    __tablename__ = "usages"
    __table_args__ = (
        CheckConstraint("quantity_used > 0", name="ck_usages_quantity_used_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    medication_id = Column(
        Integer,
        ForeignKey("medications.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    date = Column(Date, nullable=False, index=True)
    quantity_used = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    medication = relationship(Medication, lazy="selectin")

    @property
    def medication_name(self):
        return self.medication.name if self.medication is not None else None
