from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date

from clinic_inventory.domain.patients.models import Gender


class BasePatientSchema(BaseModel):
    """Base schema for patient data"""
    name: str = Field(..., min_length=1, max_length=255)
    age: int = Field(..., gt=0)
    gender: Gender
    address: str = Field(..., min_length=1)
    contact: str = Field(..., min_length=1, max_length=100)
    treatment_date: date
    notes: Optional[str] = None


class PatientCreate(BasePatientSchema):
    """Schema for creating a new patient"""
    pass


class PatientUpdate(BaseModel):
    """Schema for updating patient information"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    age: Optional[int] = Field(None, gt=0)
    gender: Optional[Gender] = None
    address: Optional[str] = Field(None, min_length=1)
    contact: Optional[str] = Field(None, min_length=1, max_length=100)
    treatment_date: Optional[date] = None
    notes: Optional[str] = None


class PatientResponse(BasePatientSchema):
    """Schema for patient response data"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SuccessResponse(BaseModel):
    success: bool
