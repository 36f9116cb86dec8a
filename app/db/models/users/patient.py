# app/db/models/users/patient.py
from typing import Optional
from sqlmodel import SQLModel, Field
from datetime import datetime

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, index=True)
    email: str = Field(max_length=100, unique=True, index=True)
    phone: Optional[str] = Field(max_length=20, default=None, index=True)
    address: Optional[str] = Field(max_length=255, default=None)
    credential: Optional[str] = Field(max_length=255, default=None)
    created_at: datetime = Field(default_factory=datetime.utcnow)
