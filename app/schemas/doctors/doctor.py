# app/schemas/doctor.py
from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional

from ...utils import normalize_slots

class DoctorBase(BaseModel):
    name: str = Field(min_length=2, max_length=100)
    specialty: str = Field(min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=20)
    available_times: List[str] = []

    @field_validator("available_times")
    @classmethod
    def validate_available_times(cls, v: List[str]) -> List[str]:
        # HH:MM, unique, returned sorted
        return normalize_slots(v)

class DoctorCreate(DoctorBase):
    pass

class DoctorResponse(DoctorBase):
    id: int

class AvailabilityResponse(BaseModel):
    doctor_id: int
    date: str
    availability: List[str]
    count: int
