# app/db/models/health/prescription.py
from typing import Optional
from sqlalchemy import Column, ForeignKey, Integer
from sqlmodel import SQLModel, Field
from datetime import datetime

class Prescription(SQLModel, table=True):
    __tablename__ = "prescriptions"
    id: Optional[int] = Field(default=None, primary_key=True)
    appointment_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("appointments.id", ondelete="CASCADE"),
            unique=True,
            nullable=False,
        )
    )
    patient_name: str = Field(max_length=100)
    medication: str = Field(max_length=100)
    dosage: str = Field(max_length=100)
    doctor_notes: Optional[str] = Field(max_length=500, default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
