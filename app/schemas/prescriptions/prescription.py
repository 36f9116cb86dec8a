# app/schemas/prescription.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class PrescriptionCreate(BaseModel):
    appointment_id: int
    patient_name: str = Field(min_length=2, max_length=100)
    medication: str = Field(min_length=2, max_length=100)
    dosage: str = Field(min_length=1, max_length=100)
    doctor_notes: Optional[str] = Field(default=None, max_length=500)

class PrescriptionResponse(PrescriptionCreate):
    id: int
    created_at: Optional[datetime] = None
