from sqlalchemy import Column, String, Date, DateTime, Integer, Text, Enum, CheckConstraint
from datetime import datetime
import enum

from clinic_inventory.infrastructure.database import Base


class Gender(str, enum.Enum):
    """Gender enumeration"""
    MALE = "MALE"
    FEMALE = "FEMALE"


class Patient(Base):
    """Patient intake and treatment record"""
    __tablename__ = "patients"
    __table_args__ = (
        CheckConstraint("age > 0", name="ck_patients_age_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    age = Column(Integer, nullable=False)
    gender = Column(Enum(Gender, name="gender"), nullable=False)
    address = Column(Text, nullable=False)
    contact = Column(String(100), nullable=False)
    treatment_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)

    # System fields
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Patient {self.id} {self.name!r}>"
