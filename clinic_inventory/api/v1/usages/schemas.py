from pydantic import BaseModel, Field
from typing import Optional
import datetime as dt


class UsageCreate(BaseModel):
    medication_id: int = Field(..., gt=0)
    date: dt.date
    quantity_used: int = Field(..., gt=0)
    notes: Optional[str] = None


class UsageResponse(BaseModel):
    id: int
    medication_id: int
    medication_name: Optional[str] = None
    date: dt.date
    quantity_used: int
    notes: Optional[str] = None
    created_at: dt.datetime

    class Config:
        from_attributes = True
