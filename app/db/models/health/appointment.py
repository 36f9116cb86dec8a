# app/db/models/health/appointment.py
from typing import Optional
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field
from datetime import datetime

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    __table_args__ = (
        UniqueConstraint("doctor_id", "appointment_time", name="uq_appointments_doctor_time"),
    )
    id: Optional[int] = Field(default=None, primary_key=True)
    doctor_id: int = Field(foreign_key="doctors.id", index=True)
    patient_id: int = Field(foreign_key="patients.id", index=True)
    appointment_time: datetime = Field(index=True)
    status: int = Field(default=0)  # 0 scheduled, 1 completed, 2 prescribed
    created_at: datetime = Field(default_factory=datetime.utcnow)
