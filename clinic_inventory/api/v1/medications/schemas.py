from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class MedicationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: str = Field(..., min_length=1, max_length=100)
    stock_available: int = Field(..., ge=0)
    reorder_threshold: int = Field(..., ge=0)


class MedicationUpdate(BaseModel):
    """Only the supplied fields are changed"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    stock_available: Optional[int] = Field(None, ge=0)
    reorder_threshold: Optional[int] = Field(None, ge=0)


class MedicationResponse(BaseModel):
    id: int
    name: str
    category: str
    stock_available: int
    reorder_threshold: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SuccessResponse(BaseModel):
    success: bool
