# app/schemas/common.py
from pydantic import BaseModel

class MessageResponse(BaseModel):
    success: bool = True
    message: str

class HealthResponse(BaseModel):
    status: str
    service: str
    version: str
    timestamp: str
