from sqlalchemy import Column, String, Integer, DateTime, CheckConstraint
from datetime import datetime

from clinic_inventory.infrastructure.database import Base


class Medication(Base):
    """Medication stock item"""
    __tablename__ = "medications"
    __table_args__ = (
        CheckConstraint("stock_available >= 0", name="ck_medications_stock_available_non_negative"),
        CheckConstraint("reorder_threshold >= 0", name="ck_medications_reorder_threshold_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    category = Column(String(100), nullable=False)
    stock_available = Column(Integer, nullable=False, default=0)
    reorder_threshold = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    @property
    def is_low_stock(self) -> bool:
        return self.stock_available <= self.reorder_threshold

    def __repr__(self):
        return f"<Medication {self.id} {self.name!r} stock={self.stock_available}>"
