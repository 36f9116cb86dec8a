# app/schemas/appointment.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime

class AppointmentCreate(BaseModel):
    doctor_id: int
    appointment_time: datetime  # slot start, e.g. 2024-06-01T10:00

class AppointmentUpdate(AppointmentCreate):
    status: int = Field(default=0, ge=0, le=2)

class AppointmentStatusUpdate(BaseModel):
    status: int = Field(ge=0, le=2)

class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    patient_id: int
    patient_name: Optional[str] = None
    appointment_time: datetime
    appointment_date: date
    start_time: str  # HH:MM
    end_time: datetime
    status: int
    status_label: str
