# app/db/models/health/doctor.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    specialty: str = Field(max_length=100, index=True)
    email: str = Field(max_length=100, unique=True, index=True)
    phone: Optional[str] = Field(max_length=20, default=None)
    credential: Optional[str] = Field(max_length=255, default=None)
    available_times: str = Field(default="")  # comma-separated HH:MM slot starts
    created_at: datetime = Field(default_factory=datetime.utcnow)
